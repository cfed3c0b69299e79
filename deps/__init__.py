"""Data model for discovered packages."""

from .model import PackageSet

__all__ = ["PackageSet"]

"""Exporters for converting a package set to various output formats."""

from .text_exporter import to_text
from .json_exporter import to_json
from .manifest_exporter import to_manifest

__all__ = ["to_text", "to_json", "to_manifest"]

"""Plain text exporter: one import path per line."""

from deps.model import PackageSet


def to_text(packages: PackageSet) -> str:
    """Convert a package set to newline-separated import paths."""
    return "\n".join(packages.result())

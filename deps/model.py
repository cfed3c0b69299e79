"""Ordered package set collecting unique external import paths."""

from pathlib import Path
from typing import Dict, Iterator, List, Optional


class PackageSet:
    """
    An insertion-ordered set of import paths.

    Paths keep the order in which they were first discovered across the
    whole scan. The file each path was first seen in is remembered so it
    can be reported alongside the path. Entries are never removed.
    """

    def __init__(self):
        self._packages: Dict[str, Optional[Path]] = {}  # path -> first source file

    @property
    def sources(self) -> Dict[str, Optional[Path]]:
        """Return the first file each package was found in."""
        return dict(self._packages)

    def add(self, path: str, source: Optional[Path] = None) -> bool:
        """
        Add a package path if it is not already present.

        Args:
            path: The import path.
            source: The file the path was found in.

        Returns:
            True if the path was new, False if it was already in the set.
        """
        if path in self._packages:
            return False
        self._packages[path] = source
        return True

    def update(self, paths, source: Optional[Path] = None) -> int:
        """Add several paths from one source; return how many were new."""
        return sum(1 for path in paths if self.add(path, source))

    def first_source(self, path: str) -> Optional[Path]:
        """Get the file the path was first discovered in."""
        return self._packages.get(path)

    def result(self) -> List[str]:
        """Return all unique paths in first-seen order."""
        return list(self._packages)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._packages))

    def __len__(self) -> int:
        return len(self._packages)

    def __contains__(self, path: object) -> bool:
        return path in self._packages

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageSet):
            return NotImplemented
        return self.result() == other.result()

    def __repr__(self) -> str:
        return f"PackageSet(packages={len(self._packages)})"

"""File discovery utilities for walking a Go project tree."""

import logging
from pathlib import Path
from typing import Iterator, Optional, AbstractSet

from .errors import ConfigurationError, FileReadError

logger = logging.getLogger(__name__)


DEFAULT_EXTENSION = ".go"
DEFAULT_EXCLUDE_DIRS = frozenset({"vendor"})


def is_excluded_dir(name: str, exclude_dirs: AbstractSet[str]) -> bool:
    """Check whether a directory name marks a subtree that must not be scanned."""
    return name in exclude_dirs


def should_visit(entry: Path, extension: str, exclude_dirs: AbstractSet[str]) -> bool:
    """
    Decide whether a filesystem entry should be visited by the walker.

    Directories are visited unless they are excluded or are symlinks.
    Files are visited only when their name ends with the source suffix.

    Args:
        entry: The directory entry to check.
        extension: Source-file suffix, e.g. ".go".
        exclude_dirs: Directory names whose subtrees are skipped.

    Returns:
        True if the walker should descend into or yield the entry.
    """
    if entry.is_dir():
        if entry.is_symlink():
            return False
        return not is_excluded_dir(entry.name, exclude_dirs)
    if entry.is_file():
        return entry.name.endswith(extension)
    return False


def iter_files(
    root: Path,
    extension: str = DEFAULT_EXTENSION,
    exclude_dirs: Optional[AbstractSet[str]] = None,
    skip_unreadable: bool = False,
) -> Iterator[Path]:
    """
    Iterate over source files in a project tree, depth-first.

    Entries of each directory are visited in sorted order so repeated
    walks over an unchanged tree always produce the same sequence.

    Args:
        root: Project root directory.
        extension: Suffix a file name must end with to be yielded.
        exclude_dirs: Directory names to skip together with their subtree.
                     If None, uses DEFAULT_EXCLUDE_DIRS.
        skip_unreadable: If True, log and skip directories that cannot be
                        listed instead of failing the whole walk.

    Yields:
        Path objects for matching files.

    Raises:
        ConfigurationError: If root does not exist or is not a directory.
        FileReadError: If a directory cannot be listed and skip_unreadable
                      is False.
    """
    if exclude_dirs is None:
        exclude_dirs = DEFAULT_EXCLUDE_DIRS

    if not root.is_dir():
        raise ConfigurationError(f"Project path '{root}' does not exist or is not a directory")

    root = root.resolve()

    def _walk(current: Path) -> Iterator[Path]:
        try:
            entries = sorted(current.iterdir())
        except OSError as e:
            if skip_unreadable:
                logger.warning("Skipping unreadable directory '%s': %s", current, e)
                return
            raise FileReadError(current, str(e)) from e

        for entry in entries:
            if not should_visit(entry, extension, exclude_dirs):
                continue
            if entry.is_dir():
                yield from _walk(entry)
            else:
                yield entry

    yield from _walk(root)

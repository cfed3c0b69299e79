"""Package set builder that orchestrates walking, scanning and classification."""

import logging
from pathlib import Path
from typing import AbstractSet, List, Optional

from deps.model import PackageSet
from .classifier import Policy, get_policy, is_external
from .config import ScanConfig
from .discovery import iter_files, DEFAULT_EXTENSION
from .errors import FileReadError
from .parser import parse_file

logger = logging.getLogger(__name__)


def build_package_set(
    root: Path,
    extension: str = DEFAULT_EXTENSION,
    exclude_dirs: Optional[AbstractSet[str]] = None,
    policy: Policy = is_external,
    skip_unreadable: bool = False,
    debug: bool = False,
) -> PackageSet:
    """
    Scan a project and collect its unique external import paths.

    Files are scanned one at a time in walk order, so the first file that
    imports a path decides its position in the result.

    Args:
        root: Project root directory.
        extension: Source-file suffix (default: .go).
        exclude_dirs: Directory names to skip (default: vendor).
        policy: Function deciding whether an import path is external.
        skip_unreadable: If True, unreadable files are logged and skipped
                        instead of aborting the scan.
        debug: If True, log diagnostics. Never changes the result.

    Returns:
        PackageSet of external import paths in first-seen order.

    Raises:
        ConfigurationError: If root is not a directory.
        FileReadError: If a file cannot be read and skip_unreadable is False.
    """
    packages = PackageSet()
    root = root.resolve()

    files = list(iter_files(
        root=root,
        extension=extension,
        exclude_dirs=exclude_dirs,
        skip_unreadable=skip_unreadable,
    ))
    if debug:
        logger.debug("Got %d files", len(files))
        logger.debug("Parsing project files for unique packages...")

    for file_path in files:
        try:
            imports = parse_file(file_path, debug=debug)
        except FileReadError as e:
            if not skip_unreadable:
                raise
            logger.warning("Skipping unreadable file: %s", e)
            continue

        packages.update(
            (found.path for found in imports if policy(found.path)),
            file_path,
        )

    if debug:
        logger.debug("Found %d unique packages", len(packages))
        for path in packages:
            logger.debug("  %s", path)

    return packages


def build_from_config(config: ScanConfig) -> PackageSet:
    """Build the package set for a project using the settings in a ScanConfig."""
    return build_package_set(
        root=config.project_path,
        extension=config.extension,
        exclude_dirs=config.exclude_dirs,
        policy=get_policy(config.registries),
        skip_unreadable=config.skip_unreadable,
        debug=config.debug,
    )


def scan_project(config: ScanConfig) -> List[str]:
    """
    Run a scan described by a ScanConfig.

    Returns:
        Unique external import paths in first-seen order.
    """
    return build_from_config(config).result()

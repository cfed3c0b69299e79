"""Scanner module for file discovery and import extraction."""

from .discovery import iter_files, should_visit
from .parser import parse_file, extract_imports, step, ScanState, ImportPath
from .classifier import is_external, get_policy
from .config import ScanConfig, load_config
from .errors import ScanError, ConfigurationError, FileReadError
from .builder import build_package_set, build_from_config, scan_project

__all__ = [
    "iter_files",
    "should_visit",
    "parse_file",
    "extract_imports",
    "step",
    "ScanState",
    "ImportPath",
    "is_external",
    "get_policy",
    "ScanConfig",
    "load_config",
    "ScanError",
    "ConfigurationError",
    "FileReadError",
    "build_package_set",
    "build_from_config",
    "scan_project",
]

"""Scan configuration loaded from the project and the command line."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional, Tuple, Union

import yaml

from .discovery import DEFAULT_EXCLUDE_DIRS, DEFAULT_EXTENSION
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


CONFIG_FILENAME = "depscan.yaml"

# Keys accepted in the configuration file
CONFIG_KEYS = {"extension", "exclude_dirs", "registries", "skip_unreadable"}


@dataclass(frozen=True)
class ScanConfig:
    """Settings for one scan invocation."""

    project_path: Path
    extension: str = DEFAULT_EXTENSION
    exclude_dirs: FrozenSet[str] = DEFAULT_EXCLUDE_DIRS
    registries: Tuple[str, ...] = ()
    skip_unreadable: bool = False
    debug: bool = False


def _check_project_path(project_path: Path) -> Path:
    if not project_path.exists():
        raise ConfigurationError(f"Project path '{project_path}' does not exist")
    if not project_path.is_dir():
        raise ConfigurationError(f"Project path '{project_path}' is not a directory")
    return project_path.resolve()


def _string_list(value: Any, key: str) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigurationError(f"'{key}' must be a string or a list of strings")
    return tuple(value)


def _normalize_extension(extension: str) -> str:
    if not extension.startswith("."):
        extension = "." + extension
    return extension


def read_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Read and validate a YAML configuration file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        Dictionary of validated settings, ready to pass to ScanConfig.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, or holds
                           unknown keys or values of the wrong type.
    """
    logger.info("Reading configuration from '%s'...", config_path)
    try:
        content = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Failed to read configuration file '{config_path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse configuration file '{config_path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file '{config_path}' must contain a mapping")

    unknown = set(data) - CONFIG_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(sorted(map(str, unknown)))}")

    settings: Dict[str, Any] = {}
    if "extension" in data:
        if not isinstance(data["extension"], str) or not data["extension"]:
            raise ConfigurationError("'extension' must be a non-empty string")
        settings["extension"] = _normalize_extension(data["extension"])
    if "exclude_dirs" in data:
        settings["exclude_dirs"] = _string_list(data["exclude_dirs"], "exclude_dirs")
    if "registries" in data:
        settings["registries"] = _string_list(data["registries"], "registries")
    if "skip_unreadable" in data:
        if not isinstance(data["skip_unreadable"], bool):
            raise ConfigurationError("'skip_unreadable' must be true or false")
        settings["skip_unreadable"] = data["skip_unreadable"]
    return settings


def load_config(
    project_path: Union[str, Path],
    config_file: Optional[Union[str, Path]] = None,
    debug: bool = False,
    **overrides: Any,
) -> ScanConfig:
    """
    Build the scan configuration for a project.

    The project directory must exist. Settings are taken, in increasing
    priority, from the defaults, the configuration file and the keyword
    overrides (None values are ignored). Exclude directories from the file
    and the overrides are combined and added to the default "vendor"
    exclusion, never replace it.

    Args:
        project_path: Project root; "~" is expanded.
        config_file: Explicit configuration file. If None, depscan.yaml in
                    the project root is used when present.
        debug: Enable diagnostic logging during the scan.
        **overrides: extension, exclude_dirs, registries, skip_unreadable.

    Returns:
        The resulting ScanConfig.

    Raises:
        ConfigurationError: If the project path or configuration is invalid.
    """
    root = _check_project_path(Path(project_path).expanduser())

    unknown = set(overrides) - CONFIG_KEYS
    if unknown:
        raise TypeError(f"Unexpected overrides: {', '.join(sorted(unknown))}")

    if config_file is not None:
        config_path = Path(config_file).expanduser()
        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file '{config_path}' does not exist")
        settings = read_config_file(config_path)
    elif (root / CONFIG_FILENAME).is_file():
        settings = read_config_file(root / CONFIG_FILENAME)
    else:
        settings = {}

    for key, value in overrides.items():
        if value is None:
            continue
        if key == "exclude_dirs":
            value = tuple(settings.get("exclude_dirs", ())) + tuple(value)
        elif key == "registries":
            value = tuple(value)
        elif key == "extension":
            value = _normalize_extension(value)
        settings[key] = value

    if "exclude_dirs" in settings:
        settings["exclude_dirs"] = DEFAULT_EXCLUDE_DIRS | frozenset(settings["exclude_dirs"])

    config = ScanConfig(project_path=root, debug=debug)
    return replace(config, **settings)

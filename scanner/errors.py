"""Exceptions raised while configuring or running a scan."""

from pathlib import Path
from typing import Optional, Union


class ScanError(Exception):
    """Base class for all scan failures."""


class ConfigurationError(ScanError):
    """The project root or configuration file is missing or invalid."""


class FileReadError(ScanError):
    """A file or directory inside the project could not be read."""

    def __init__(self, path: Union[str, Path], reason: Optional[str] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Failed to read '{self.path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)

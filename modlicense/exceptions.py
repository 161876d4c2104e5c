"""Custom exceptions for modlicense."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ModLicenseError(Exception):
    """Base exception for all modlicense errors."""

    pass


class ConfigurationError(ModLicenseError):
    """Exception raised when configuration is invalid."""

    pass


class TraversalError(ModLicenseError):
    """Exception raised when a directory cannot be read during discovery."""

    pass


class NoModulesFoundError(ModLicenseError):
    """Exception raised when no module roots exist under the search root."""

    pass


class ScannerError(ModLicenseError):
    """Exception raised when the external scanner fails unexpectedly.

    Attributes:
        stderr: Captured standard error of the scanner, if any.
    """

    def __init__(self, message: str, stderr: Optional[str] = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class ViolationsFoundError(ModLicenseError):
    """Exception raised when a module root uses disallowed licenses.

    Attributes:
        count: Number of distinct violations found.
        module_root: Directory the violations were found in.
    """

    def __init__(self, count: int, module_root: Path) -> None:
        super().__init__(f"Found {count} violations in {module_root}")
        self.count = count
        self.module_root = module_root


class PersistError(ModLicenseError):
    """Exception raised when a report cannot be written to disk."""

    pass

"""Pydantic data models for modlicense."""

from modlicense.models.config import RunnerConfig
from modlicense.models.scan import (
    CheckResult,
    LicenseCategory,
    ReportResult,
    Verbosity,
    ViolationRecord,
)

__all__ = [
    "CheckResult",
    "LicenseCategory",
    "ReportResult",
    "RunnerConfig",
    "Verbosity",
    "ViolationRecord",
]

"""Scan-related Pydantic models."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

LicenseCategory = Literal["forbidden", "notice", "reciprocal", "restricted", "unknown"]


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ViolationRecord(BaseModel):
    """Disallowed-license diagnostics reported for one module root.

    Lines are kept as a set: the scanner may report the same package
    more than once and each distinct line counts a single time.
    """

    model_config = {"extra": "forbid"}

    module_root: Path = Field(description="Module root the scanner ran in")
    lines: set[str] = Field(
        default_factory=set,
        description="Distinct scanner output lines naming a disallowed license",
    )

    @property
    def count(self) -> int:
        """Number of distinct violations."""
        return len(self.lines)

    @property
    def has_violations(self) -> bool:
        """Check if any disallowed license was reported.

        Returns:
            True if at least one violation line was collected.
        """
        return self.count > 0


class CheckResult(BaseModel):
    """Outcome of a successful license check for one module root."""

    model_config = {"extra": "forbid"}

    module_root: Path = Field(description="Module root that was checked")
    violations: ViolationRecord = Field(description="Violations found (may be empty)")


class ReportResult(BaseModel):
    """Outcome of report generation for one module root."""

    model_config = {"extra": "forbid"}

    module_root: Path = Field(description="Module root the report describes")
    report_file: Path = Field(description="Path of the written Markdown report")
    size: int = Field(default=0, description="Number of bytes written")

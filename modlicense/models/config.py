"""Configuration Pydantic models for modlicense."""
from __future__ import annotations

from pathlib import PurePosixPath
from typing import List

from pydantic import BaseModel, Field, field_validator

from modlicense.constants import (
    DEFAULT_DESCRIPTOR,
    DEFAULT_DISALLOWED_TYPES,
    DEFAULT_REPORT_PATH,
    DEFAULT_SCANNER,
    MAX_CONCURRENT_SCANS,
)
from modlicense.models.scan import LicenseCategory


class RunnerConfig(BaseModel):
    """Configuration for modlicense.

    Every field has a default so a partial (or empty) configuration file
    is valid. Command-line flags take precedence over these values.
    """

    model_config = {"extra": "forbid"}

    scanner: str = Field(
        default=DEFAULT_SCANNER,
        min_length=1,
        description="Executable name or path of the license scanner.",
    )
    descriptor: str = Field(
        default=DEFAULT_DESCRIPTOR,
        min_length=1,
        description="File name that marks a directory as a module root.",
    )
    disallowed_types: List[LicenseCategory] = Field(
        default_factory=lambda: list(DEFAULT_DISALLOWED_TYPES),
        description="License categories that fail the check command.",
    )
    max_workers: int = Field(
        default=MAX_CONCURRENT_SCANS,
        ge=1,
        description="Maximum number of scanner processes run concurrently.",
    )
    report_path: str = Field(
        default=DEFAULT_REPORT_PATH,
        description="Report location, relative to each module root.",
    )

    @field_validator("report_path")
    @classmethod
    def _report_path_is_relative(cls, value: str) -> str:
        path = PurePosixPath(value)
        if not value or path.is_absolute() or ".." in path.parts:
            raise ValueError("must be a relative path inside the module root")
        return value

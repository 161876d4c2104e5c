"""Markdown license report persistence."""

from __future__ import annotations

from pathlib import Path

from modlicense.constants import DEFAULT_REPORT_PATH
from modlicense.exceptions import PersistError
from modlicense.logging import get_logger
from modlicense.models.scan import ReportResult
from modlicense.scanner import ScannerAdapter

log = get_logger(__name__)


def write_report(
    module_root: Path,
    content: bytes,
    report_path: str = DEFAULT_REPORT_PATH,
) -> Path:
    """Write report bytes verbatim below a module root.

    Missing parent directories are created. An existing report is
    truncated and replaced.

    Args:
        module_root: Module root the report belongs to.
        content: Raw report produced by the scanner.
        report_path: Destination relative to module_root.

    Returns:
        Path of the written report.

    Raises:
        PersistError: If the directory or file cannot be written.
    """
    file_path = module_root / report_path
    try:
        file_path.parent.mkdir(mode=0o755, parents=True, exist_ok=True)
        file_path.write_bytes(content)
    except OSError as e:
        raise PersistError(f"Cannot write report '{file_path}': {e}") from e

    log.info("wrote license report", path=str(file_path), size=len(content))
    return file_path


def generate_report(
    adapter: ScannerAdapter,
    module_root: Path,
    report_path: str = DEFAULT_REPORT_PATH,
) -> ReportResult:
    """Render a module root's report with the scanner and persist it."""
    content = adapter.report(module_root)
    file_path = write_report(module_root, content, report_path)
    return ReportResult(module_root=module_root, report_file=file_path, size=len(content))

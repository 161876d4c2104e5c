"""Adapter around the external license scanner executable."""

from __future__ import annotations

import os
import subprocess
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from modlicense.constants import DEFAULT_SCANNER, REPORT_TEMPLATE, VIOLATION_MARKERS
from modlicense.exceptions import PersistError, ScannerError
from modlicense.logging import get_logger
from modlicense.models.scan import ViolationRecord

log = get_logger(__name__)


def extract_violations(stderr: str) -> set[str]:
    """Collect the scanner output lines that name a disallowed license.

    Matching is a case-sensitive substring test against each marker.

    Args:
        stderr: Decoded standard error of a ``check`` run.

    Returns:
        Distinct matching lines.
    """
    return {
        line
        for line in stderr.split("\n")
        if any(marker in line for marker in VIOLATION_MARKERS)
    }


@contextmanager
def materialized_template(directory: Path, template: str = REPORT_TEMPLATE) -> Iterator[Path]:
    """Write a report template into directory for the duration of the block.

    The file gets a unique name so concurrent runs never share it, and it
    is removed on every exit path, including scanner failures.

    Yields:
        Absolute path of the template file.

    Raises:
        PersistError: If the template cannot be created or written.
    """
    try:
        fd, name = tempfile.mkstemp(prefix=".modlicense-", suffix=".tpl", dir=directory)
    except OSError as e:
        raise PersistError(f"Cannot create report template in '{directory}': {e}") from e

    path = Path(name).resolve()
    try:
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(template)
        except OSError as e:
            raise PersistError(f"Cannot write report template '{path}': {e}") from e
        yield path
    finally:
        path.unlink(missing_ok=True)


class ScannerAdapter:
    """Run the license scanner against a single module root.

    Each call spawns one process with the module root as its working
    directory and blocks until it exits. No timeout is applied.
    """

    def __init__(self, executable: str = DEFAULT_SCANNER) -> None:
        """Initialize the adapter.

        Args:
            executable: Scanner executable name (looked up on PATH) or path.
        """
        self.executable = executable

    def check(self, module_root: Path, disallowed_types: Sequence[str]) -> ViolationRecord:
        """Check a module root for disallowed license categories.

        A non-zero exit is the scanner's normal way of reporting violations
        and is only treated as an error when stderr names none.

        Args:
            module_root: Directory to run the scanner in.
            disallowed_types: Category tags passed through to the scanner.

        Returns:
            ViolationRecord, empty when the module is clean.

        Raises:
            ScannerError: If the scanner cannot be run, or exits non-zero
                without reporting any violation.
        """
        log.info("checking licenses", module_root=str(module_root))
        result = self._run(
            module_root,
            ["check", ".", "--disallowed_types=" + ",".join(disallowed_types)],
        )
        stderr = result.stderr.decode("utf-8", errors="replace")

        lines: set[str] = set()
        if result.returncode != 0:
            lines = extract_violations(stderr)
            if not lines:
                raise ScannerError(
                    f"{self.executable} check failed in {module_root} "
                    f"(exit status {result.returncode}): {stderr.strip()}",
                    stderr=stderr,
                )
            for line in sorted(lines):
                log.warning("found violation", module_root=str(module_root), line=line)

        record = ViolationRecord(module_root=module_root, lines=lines)
        log.info(
            "checked licenses",
            module_root=str(module_root),
            violations=record.count,
        )
        return record

    def report(self, module_root: Path, template: str = REPORT_TEMPLATE) -> bytes:
        """Render the license report for a module root.

        Args:
            module_root: Directory to run the scanner in.
            template: Template text handed to the scanner.

        Returns:
            Raw report bytes from the scanner's standard output.

        Raises:
            ScannerError: If the scanner cannot be run or exits non-zero.
            PersistError: If the template file cannot be written.
        """
        log.info("creating license report", module_root=str(module_root))
        with materialized_template(module_root, template) as template_path:
            result = self._run(
                module_root, ["report", ".", f"--template={template_path}"]
            )

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise ScannerError(
                f"{self.executable} report failed in {module_root} "
                f"(exit status {result.returncode}): {stderr.strip()}",
                stderr=stderr,
            )
        return result.stdout

    def _run(self, module_root: Path, args: list[str]) -> subprocess.CompletedProcess[bytes]:
        command = [self.executable, *args]
        log.debug("running scanner", command=command, cwd=str(module_root))
        try:
            return subprocess.run(command, cwd=module_root, capture_output=True, check=False)
        except OSError as e:
            raise ScannerError(f"Cannot run {self.executable} in {module_root}: {e}") from e

"""Bounded fan-out of per-module operations."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from types import TracebackType
from typing import Any, Generic, Optional, TypeVar

from modlicense.constants import DEFAULT_REPORT_PATH, MAX_CONCURRENT_SCANS
from modlicense.exceptions import ViolationsFoundError
from modlicense.logging import get_logger
from modlicense.models.scan import CheckResult, ReportResult
from modlicense.output.report import generate_report
from modlicense.scanner import ScannerAdapter

log = get_logger(__name__)

T = TypeVar("T")


class TaskGroup(Generic[T]):
    """Run operations on a bounded thread pool and keep the first error.

    A group is single-use: submit with :meth:`go`, then call :meth:`wait`
    once. Failures never cancel sibling operations; every submitted
    operation runs to completion before :meth:`wait` returns or raises.
    """

    def __init__(self, limit: int = MAX_CONCURRENT_SCANS) -> None:
        """Initialize the group.

        Args:
            limit: Maximum number of operations running at once.

        Raises:
            ValueError: If limit is less than 1.
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        self.limit = limit
        self._executor = ThreadPoolExecutor(
            max_workers=limit, thread_name_prefix="modlicense"
        )
        self._futures: list[Future[T]] = []
        self._lock = threading.Lock()
        self._error: Optional[BaseException] = None

    def __enter__(self) -> TaskGroup[T]:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._executor.shutdown(wait=True)

    def go(self, fn: Callable[..., T], *args: Any) -> Future[T]:
        """Submit one operation to the pool."""
        future = self._executor.submit(fn, *args)
        future.add_done_callback(self._record_error)
        self._futures.append(future)
        return future

    def wait(self) -> list[T]:
        """Block until every submitted operation has finished.

        Returns:
            Results of all operations, in submission order.

        Raises:
            Exception: The first error raised by any operation, in
                completion order. Later errors are only logged.
        """
        # Worker threads run done-callbacks before exiting, so after the
        # join the error slot is final.
        self._executor.shutdown(wait=True)
        if self._error is not None:
            raise self._error
        return [future.result() for future in self._futures]

    def _record_error(self, future: Future[T]) -> None:
        error = future.exception()
        if error is None:
            return
        with self._lock:
            if self._error is None:
                self._error = error
                return
        log.error("operation failed", error_type=type(error).__name__, error=str(error))


def run_all(
    group: TaskGroup[T],
    module_roots: Sequence[Path],
    operation: Callable[[Path], T],
) -> list[T]:
    """Apply operation to every module root through group.

    All roots are submitted before the single join.
    """
    for module_root in module_roots:
        group.go(operation, module_root)
    return group.wait()


def check_module(
    adapter: ScannerAdapter,
    module_root: Path,
    disallowed_types: Sequence[str],
) -> CheckResult:
    """Check one module root, failing if it uses a disallowed license.

    Raises:
        ViolationsFoundError: If the scanner reported any violation.
        ScannerError: If the scanner failed unexpectedly.
    """
    record = adapter.check(module_root, disallowed_types)
    if record.has_violations:
        raise ViolationsFoundError(record.count, module_root)
    return CheckResult(module_root=module_root, violations=record)


def run_check(
    group: TaskGroup[CheckResult],
    module_roots: Sequence[Path],
    adapter: ScannerAdapter,
    disallowed_types: Sequence[str],
) -> list[CheckResult]:
    """Check every module root concurrently."""
    return run_all(
        group,
        module_roots,
        lambda module_root: check_module(adapter, module_root, disallowed_types),
    )


def run_report(
    group: TaskGroup[ReportResult],
    module_roots: Sequence[Path],
    adapter: ScannerAdapter,
    report_path: str = DEFAULT_REPORT_PATH,
) -> list[ReportResult]:
    """Generate and persist a report for every module root concurrently."""
    return run_all(
        group,
        module_roots,
        lambda module_root: generate_report(adapter, module_root, report_path),
    )

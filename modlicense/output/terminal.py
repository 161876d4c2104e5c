"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.table import Table

from modlicense.models.scan import CheckResult, ReportResult, Verbosity


class TerminalFormatter:
    """Format per-module results for terminal display using Rich."""

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_check_results(self, results: list[CheckResult]) -> None:
        """Display the outcome of a successful check run.

        Quiet mode prints nothing. Verbose mode adds a table listing
        every module root that was checked.
        """
        if self._verbosity == Verbosity.QUIET:
            return

        if self._verbosity == Verbosity.VERBOSE and results:
            table = Table(title="License Check Results")
            table.add_column("Module", style="cyan", no_wrap=True)
            table.add_column("Violations", justify="right")
            for result in sorted(results, key=lambda r: str(r.module_root)):
                table.add_row(str(result.module_root), str(result.violations.count))
            self._console.print(table)

        noun = "module" if len(results) == 1 else "modules"
        self._console.print(
            f"[green]No license violations found in {len(results)} {noun}[/green]"
        )

    def format_report_results(self, results: list[ReportResult]) -> None:
        """List written reports; only shown in verbose mode."""
        if self._verbosity != Verbosity.VERBOSE:
            return

        table = Table(title="License Reports")
        table.add_column("Module", style="cyan", no_wrap=True)
        table.add_column("Report", style="magenta")
        table.add_column("Bytes", justify="right")
        for result in sorted(results, key=lambda r: str(r.module_root)):
            table.add_row(str(result.module_root), str(result.report_file), str(result.size))
        self._console.print(table)

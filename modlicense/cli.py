"""CLI entry point for modlicense."""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console

from modlicense import __version__
from modlicense.config import load_config
from modlicense.constants import (
    EXIT_ERROR,
    EXIT_ISSUES,
    EXIT_SUCCESS,
    LICENSE_CATEGORIES,
)
from modlicense.exceptions import ModLicenseError, ViolationsFoundError
from modlicense.locator import require_module_roots
from modlicense.logging import configure_logging
from modlicense.models.scan import Verbosity
from modlicense.orchestrator import TaskGroup, run_check, run_report
from modlicense.output.terminal import TerminalFormatter
from modlicense.scanner import ScannerAdapter

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Module License Runner - check and document licenses per module.

    Finds every module root (a directory holding a go.mod file) below ROOT
    and runs the license scanner in each of them, up to ten at a time.

    \b
    Examples:
        modlicense check .
        modlicense check . --disallowed_types forbidden --disallowed_types notice
        modlicense report .
    """
    pass


@main.command()
@click.argument("root", type=click.Path())
@click.option(
    "--disallowed_types",
    "disallowed_types",
    type=click.Choice(LICENSE_CATEGORIES),
    multiple=True,
    help="Disallowed license type; repeat for several "
    "(allowed values: forbidden, notice, reciprocal, restricted, unknown; "
    "default: forbidden, restricted).",
)
@click.option(
    "--scanner",
    default=None,
    help="License scanner executable (default: go-licenses).",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of modules scanned at once (default: 10).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show debug logging and a per-module summary.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Only log warnings and errors.",
)
@click.option(
    "--json-log",
    is_flag=True,
    default=False,
    help="Emit log lines as JSON objects.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
def check(
    root: str,
    disallowed_types: tuple[str, ...],
    scanner: Optional[str],
    workers: Optional[int],
    verbose_flag: bool,
    quiet_flag: bool,
    json_log: bool,
    config_path: Optional[str],
) -> None:
    """Check every module below ROOT for disallowed licenses.

    Exits non-zero when any module uses a license of a disallowed type,
    naming the module and the number of violations.

    \b
    Examples:
        modlicense check .
        modlicense check services --disallowed_types reciprocal
        modlicense check . --scanner /opt/bin/go-licenses --workers 4
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    configure_logging(verbose=verbose_flag, quiet=quiet_flag, json_log=json_log)

    try:
        config = load_config(config_path, root)
        types = list(disallowed_types) or list(config.disallowed_types)

        module_roots = require_module_roots(root, config.descriptor)
        adapter = ScannerAdapter(scanner or config.scanner)
        with TaskGroup(workers or config.max_workers) as group:
            results = run_check(group, module_roots, adapter, types)

        TerminalFormatter(console=_console, verbosity=verbosity).format_check_results(
            results
        )
        sys.exit(EXIT_SUCCESS)

    except ViolationsFoundError as e:
        _display_error(e)
        sys.exit(EXIT_ISSUES)
    except ModLicenseError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


@main.command()
@click.argument("root", type=click.Path())
@click.option(
    "--scanner",
    default=None,
    help="License scanner executable (default: go-licenses).",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="Maximum number of modules scanned at once (default: 10).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show debug logging and list the written reports.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Only log warnings and errors.",
)
@click.option(
    "--json-log",
    is_flag=True,
    default=False,
    help="Emit log lines as JSON objects.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
def report(
    root: str,
    scanner: Optional[str],
    workers: Optional[int],
    verbose_flag: bool,
    quiet_flag: bool,
    json_log: bool,
    config_path: Optional[str],
) -> None:
    """Write a Markdown license report for every module below ROOT.

    Each report lands in docs/_licenses.md inside its module, replacing
    any previous version.

    \b
    Examples:
        modlicense report .
        modlicense report . --workers 2
    """
    verbosity = _verbosity(verbose_flag, quiet_flag)
    configure_logging(verbose=verbose_flag, quiet=quiet_flag, json_log=json_log)

    try:
        config = load_config(config_path, root)

        module_roots = require_module_roots(root, config.descriptor)
        adapter = ScannerAdapter(scanner or config.scanner)
        with TaskGroup(workers or config.max_workers) as group:
            results = run_report(group, module_roots, adapter, config.report_path)

        TerminalFormatter(console=_console, verbosity=verbosity).format_report_results(
            results
        )
        sys.exit(EXIT_SUCCESS)

    except ModLicenseError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)


def _verbosity(verbose_flag: bool, quiet_flag: bool) -> Verbosity:
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")
    if quiet_flag:
        return Verbosity.QUIET
    if verbose_flag:
        return Verbosity.VERBOSE
    return Verbosity.NORMAL


def _display_error(error: ModLicenseError) -> None:
    """Display a single-line error message on stderr."""
    error_type = type(error).__name__
    _error_console.print(
        f"Error: {error_type}: {error}",
        style="red bold",
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


if __name__ == "__main__":
    main()

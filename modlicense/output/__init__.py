"""Output formatters and report persistence for modlicense."""

from modlicense.output.report import generate_report, write_report
from modlicense.output.terminal import TerminalFormatter

__all__ = [
    "TerminalFormatter",
    "generate_report",
    "write_report",
]

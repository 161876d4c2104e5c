"""Shared fixtures for modlicense tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from modlicense.logging import configure_logging


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging() -> None:
    """Point logging at the current stderr before every test."""
    configure_logging()


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Create a repository tree with a go.mod in each given directory."""

    def _make(*module_dirs: str, descriptor: str = "go.mod") -> Path:
        repo = tmp_path / "repo"
        repo.mkdir(exist_ok=True)
        for module_dir in module_dirs:
            directory = repo / module_dir
            directory.mkdir(parents=True, exist_ok=True)
            (directory / descriptor).write_text("module example.com/test\n")
        return repo

    return _make


@pytest.fixture
def make_scanner(tmp_path: Path) -> Callable[[str], str]:
    """Create an executable shell script standing in for the scanner.

    The script body receives the scanner arguments as "$@" and runs with
    the module root as its working directory.
    """

    def _make(body: str) -> str:
        script = tmp_path / "bin" / "fake-scanner"
        script.parent.mkdir(exist_ok=True)
        script.write_text("#!/bin/sh\n" + body + "\n")
        script.chmod(0o755)
        return str(script)

    return _make

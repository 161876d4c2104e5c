"""Tests for configuration file loader."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from modlicense.config.loader import (
    find_config_file,
    load_config,
    read_config_file,
)
from modlicense.exceptions import ConfigurationError
from modlicense.models.config import RunnerConfig


class TestFindConfigFile:
    """Tests for find_config_file function."""

    def test_finds_yaml_extension(self, tmp_path: Path) -> None:
        """Test that .yaml extension is found."""
        config_file = tmp_path / ".modlicense.yaml"
        config_file.write_text("max_workers: 2\n")

        assert find_config_file(tmp_path) == config_file

    def test_finds_yml_extension(self, tmp_path: Path) -> None:
        """Test that .yml extension is found."""
        config_file = tmp_path / ".modlicense.yml"
        config_file.write_text("max_workers: 2\n")

        assert find_config_file(tmp_path) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        """Test that None is returned when no config file exists."""
        assert find_config_file(tmp_path) is None

    def test_yaml_takes_precedence_over_yml(self, tmp_path: Path) -> None:
        """Test that .yaml file takes precedence over .yml."""
        yaml_file = tmp_path / ".modlicense.yaml"
        yml_file = tmp_path / ".modlicense.yml"
        yaml_file.write_text("max_workers: 2\n")
        yml_file.write_text("max_workers: 3\n")

        assert find_config_file(tmp_path) == yaml_file

    def test_searches_directories_in_order(self, tmp_path: Path) -> None:
        """Test that the first directory holding a file wins."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (second / ".modlicense.yaml").write_text("max_workers: 2\n")
        (first / ".modlicense.yml").write_text("max_workers: 3\n")

        assert find_config_file(first, second) == first / ".modlicense.yml"
        assert find_config_file(second, first) == second / ".modlicense.yaml"

    def test_skips_missing_and_file_entries(self, tmp_path: Path) -> None:
        """Test that entries that are not directories are passed over."""
        not_a_dir = tmp_path / "go.mod"
        not_a_dir.write_text("module example.com/x\n")
        config_file = tmp_path / ".modlicense.yaml"
        config_file.write_text("max_workers: 2\n")

        assert find_config_file(tmp_path / "missing", not_a_dir, tmp_path) == config_file

    def test_no_directories(self) -> None:
        """Test that an empty search finds nothing."""
        assert find_config_file() is None


class TestReadConfigFile:
    """Tests for read_config_file function."""

    def test_loads_valid_config(self, tmp_path: Path) -> None:
        """Test loading a valid configuration file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "scanner: /opt/go/bin/go-licenses\n"
            "disallowed_types:\n"
            "  - forbidden\n"
            "  - reciprocal\n"
            "max_workers: 4\n"
        )

        result = read_config_file(config_file)
        assert isinstance(result, RunnerConfig)
        assert result.scanner == "/opt/go/bin/go-licenses"
        assert result.disallowed_types == ["forbidden", "reciprocal"]
        assert result.max_workers == 4
        assert result.descriptor == "go.mod"

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        """Test that empty file returns default config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert read_config_file(config_file) == RunnerConfig()

    def test_file_with_only_comments_returns_defaults(self, tmp_path: Path) -> None:
        """Test that file with only comments returns default config."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("# This is a comment\n# Another comment\n")

        assert read_config_file(config_file) == RunnerConfig()

    def test_invalid_yaml_raises_error(self, tmp_path: Path) -> None:
        """Test that invalid YAML syntax raises ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("disallowed_types:\n  - forbidden\n  invalid yaml here")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(config_file)
        assert "Invalid YAML syntax" in str(exc_info.value)
        assert str(config_file) in str(exc_info.value)

    def test_unknown_fields_raise_error(self, tmp_path: Path) -> None:
        """Test that unknown fields raise ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("unknown_field: value\n")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(config_file)
        assert "Invalid configuration" in str(exc_info.value)
        assert "unknown_field" in str(exc_info.value)

    def test_invalid_category_raises_error(self, tmp_path: Path) -> None:
        """Test that an unknown license category is reported with its location."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("disallowed_types:\n  - forbidden\n  - copyleft\n")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(config_file)
        assert "disallowed_types.1" in str(exc_info.value)

    def test_non_dict_root_raises_error(self, tmp_path: Path) -> None:
        """Test that YAML with non-dict root raises ConfigurationError."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- item1\n- item2\n")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(config_file)
        assert "expected a mapping at root level" in str(exc_info.value)

    def test_unreadable_file_raises_error(self, tmp_path: Path) -> None:
        """Test that a path that cannot be read raises ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(tmp_path)
        assert "Cannot read configuration file" in str(exc_info.value)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_from_custom_path(self, tmp_path: Path) -> None:
        """Test loading from a custom config path."""
        config_file = tmp_path / "custom-config.yaml"
        config_file.write_text("descriptor: go.work\n")

        assert load_config(str(config_file)).descriptor == "go.work"

    def test_auto_discovers_config_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test auto-discovery of config file in current directory."""
        (tmp_path / ".modlicense.yaml").write_text("max_workers: 3\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().max_workers == 3

    def test_discovers_config_in_scanned_root(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the tree being scanned supplies its own settings."""
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / ".modlicense.yml").write_text("max_workers: 4\n")
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        assert load_config(root=repo).max_workers == 4

    def test_scanned_root_wins_over_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that settings in the scanned root shadow the cwd's."""
        repo = tmp_path / "repo"
        repo.mkdir()
        (repo / ".modlicense.yaml").write_text("max_workers: 4\n")
        (tmp_path / ".modlicense.yaml").write_text("max_workers: 9\n")
        monkeypatch.chdir(tmp_path)

        assert load_config(root=str(repo)).max_workers == 4

    def test_falls_back_to_cwd_when_root_has_none(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the cwd is searched after the scanned root."""
        repo = tmp_path / "repo"
        repo.mkdir()
        (tmp_path / ".modlicense.yaml").write_text("max_workers: 9\n")
        monkeypatch.chdir(tmp_path)

        assert load_config(root=repo).max_workers == 9

    def test_missing_root_is_not_a_config_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that a root that does not exist just yields the defaults."""
        monkeypatch.chdir(tmp_path)

        assert load_config(root=tmp_path / "missing") == RunnerConfig()

    def test_logs_which_file_was_loaded(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that the file supplying the settings is logged."""
        config_file = tmp_path / ".modlicense.yaml"
        config_file.write_text("max_workers: 3\n")
        monkeypatch.chdir(tmp_path)

        with patch("modlicense.config.loader.log") as mock_log:
            load_config(root=tmp_path)

        mock_log.info.assert_called_once_with("loaded configuration", path=str(config_file))

    def test_logs_when_defaults_are_used(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that falling back to the defaults is logged."""
        monkeypatch.chdir(tmp_path)

        with patch("modlicense.config.loader.log") as mock_log:
            load_config(root=tmp_path)

        mock_log.debug.assert_called_once_with("using default configuration")
        mock_log.info.assert_not_called()

    def test_returns_defaults_when_no_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that defaults are returned when no config file exists."""
        monkeypatch.chdir(tmp_path)

        assert load_config() == RunnerConfig()

    def test_custom_path_overrides_discovery(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that custom path takes precedence over auto-discovery."""
        (tmp_path / ".modlicense.yaml").write_text("max_workers: 3\n")
        custom_dir = tmp_path / "custom"
        custom_dir.mkdir()
        custom_config = custom_dir / "my-config.yaml"
        custom_config.write_text("max_workers: 7\n")
        monkeypatch.chdir(tmp_path)

        assert load_config(str(custom_config), root=tmp_path).max_workers == 7

    def test_invalid_discovered_config_raises_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that invalid discovered config raises ConfigurationError."""
        (tmp_path / ".modlicense.yaml").write_text("max_workers: 0\n")
        monkeypatch.chdir(tmp_path)

        with pytest.raises(ConfigurationError, match="max_workers"):
            load_config()

"""Tests for configuration loading and saving."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from tidyup.config import TidyConfig, parse_bool


class TestParseBool:
    """Tests for boolean parsing helper."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, True),
            (False, False),
            ("true", True),
            ("True", True),
            ("yes", True),
            ("on", True),
            ("1", True),
            ("false", False),
            ("no", False),
            ("off", False),
            ("0", False),
            ("random", False),  # Non-standard strings are False
            ("", False),
        ],
    )
    def test_parse_bool_values(self, value: bool | str, expected: bool) -> None:
        """Test parsing various boolean representations."""
        assert parse_bool(value, False) == expected

    def test_parse_bool_none_uses_default(self) -> None:
        """Test that None returns the default value."""
        assert parse_bool(None, True) is True
        assert parse_bool(None, False) is False

    def test_parse_bool_integer(self) -> None:
        """Test parsing integer values."""
        assert parse_bool(1, False) is True
        assert parse_bool(0, True) is False


class TestTidyConfigDefaults:
    """Tests for default configuration values."""

    def test_default_values(self) -> None:
        """Test that defaults match the documented behaviour."""
        config = TidyConfig()

        assert config.classify is True
        assert config.freshness_days == 7
        assert config.old_binary_days == 365
        assert config.file_command == "file"
        assert config.git_command == "git"
        assert config.loose_object_threshold == 0
        assert config.rules_disabled == []
        assert config.log_file is None
        assert config.log_level == "INFO"

    def test_default_output_file(self) -> None:
        """Test default report location."""
        config = TidyConfig()
        assert config.output_file == Path.home() / "tidyup-suggestions.sh"


class TestConfigLoad:
    """Tests for loading configuration from file."""

    def test_load_nonexistent_file(self, tmp_path: Path) -> None:
        """Test loading returns defaults when file doesn't exist."""
        config = TidyConfig.load(tmp_path / "nonexistent.yaml")

        assert config.freshness_days == 7
        assert config.classify is True

    def test_load_empty_file(self, tmp_path: Path) -> None:
        """Test loading empty file returns defaults."""
        config_path = tmp_path / "empty.yaml"
        config_path.touch()

        config = TidyConfig.load(config_path)

        assert config.old_binary_days == 365

    def test_load_partial_config(self, tmp_path: Path) -> None:
        """Test loading partial config merges with defaults."""
        config = self._load_config_from_text(tmp_path, "partial.yaml", "freshness_days: 3\n")

        assert config.freshness_days == 3
        assert config.classify is True  # Default

    def test_load_full_config(self, tmp_path: Path) -> None:
        """Test loading full configuration."""
        config_path = tmp_path / "full.yaml"
        data = {
            "classify": False,
            "freshness_days": 14,
            "old_binary_days": 30,
            "output_file": "/tmp/report.sh",
            "file_command": "/usr/local/bin/file",
            "git_command": "/opt/git/bin/git",
            "classify_timeout": 2.5,
            "loose_object_threshold": 50,
            "rules_disabled": ["tag_files", "empty_directories"],
            "logging": {
                "file": "/tmp/tidyup.log",
                "level": "debug",
            },
        }
        with config_path.open("w") as f:
            yaml.dump(data, f)

        config = TidyConfig.load(config_path)

        assert config.classify is False
        assert config.freshness_days == 14
        assert config.old_binary_days == 30
        assert config.output_file == Path("/tmp/report.sh")
        assert config.file_command == "/usr/local/bin/file"
        assert config.git_command == "/opt/git/bin/git"
        assert config.classify_timeout == 2.5
        assert config.loose_object_threshold == 50
        assert config.rules_disabled == ["tag_files", "empty_directories"]
        assert config.log_file == Path("/tmp/tidyup.log")
        assert config.log_level == "DEBUG"

    def test_load_expands_tilde(self, tmp_path: Path) -> None:
        """Test that ~ is expanded in paths."""
        config = self._load_config_from_text(
            tmp_path,
            "tilde.yaml",
            "output_file: ~/reports/tidy.sh\nlogging:\n  file: ~/logs/tidy.log\n",
        )

        assert str(config.output_file).startswith(str(Path.home()))
        assert config.log_file is not None
        assert str(config.log_file).startswith(str(Path.home()))

    def test_load_classify_string_bool(self, tmp_path: Path) -> None:
        """Test that quoted booleans are parsed."""
        config = self._load_config_from_text(tmp_path, "string_bool.yaml", 'classify: "off"\n')
        assert config.classify is False

    def test_load_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Test that malformed YAML raises ValueError with context."""
        config_path = tmp_path / "bad.yaml"
        config_path.write_text("rules_disabled: [\n  unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            TidyConfig.load(config_path)

    def test_load_non_mapping_raises(self, tmp_path: Path) -> None:
        """Test that a top-level list is rejected."""
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- classify\n")

        with pytest.raises(ValueError, match="expected a mapping"):
            TidyConfig.load(config_path)

    def test_load_negative_freshness_raises(self, tmp_path: Path) -> None:
        """Test that a negative freshness_days raises ValueError."""
        config_path = tmp_path / "bad_fresh.yaml"
        config_path.write_text("freshness_days: -1\n")

        with pytest.raises(ValueError, match="freshness_days must not be negative"):
            TidyConfig.load(config_path)

    def test_load_zero_old_binary_days_raises(self, tmp_path: Path) -> None:
        """Test that a zero old_binary_days raises ValueError."""
        config_path = tmp_path / "bad_age.yaml"
        config_path.write_text("old_binary_days: 0\n")

        with pytest.raises(ValueError, match="old_binary_days must be positive"):
            TidyConfig.load(config_path)

    def test_load_non_numeric_raises(self, tmp_path: Path) -> None:
        """Test that a non-numeric day count raises ValueError."""
        config_path = tmp_path / "bad_number.yaml"
        config_path.write_text("freshness_days: week\n")

        with pytest.raises(ValueError):
            TidyConfig.load(config_path)

    @pytest.mark.parametrize(
        "content",
        [
            "freshness_days:\n",
            "logging: verbose\n",
            "rules_disabled: 3\n",
            "rules_disabled: swap_files\n",
            "output_file: 5\n",
            "logging:\n  file: 5\n",
        ],
    )
    def test_load_wrong_type_raises(self, tmp_path: Path, content: str) -> None:
        """Test that values of the wrong YAML type raise ValueError naming the file."""
        config_path = tmp_path / "wrong_type.yaml"
        config_path.write_text(content)

        with pytest.raises(ValueError, match="Invalid config in"):
            TidyConfig.load(config_path)

    @staticmethod
    def _load_config_from_text(tmp_path: Path, filename: str, content: str) -> TidyConfig:
        """Create a config file with given content and load it."""
        config_path = tmp_path / filename
        config_path.write_text(content)
        return TidyConfig.load(config_path)


class TestConfigSave:
    """Tests for saving configuration to file."""

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        """Test that save creates parent directories."""
        config_path = tmp_path / "subdir" / "config.yaml"

        TidyConfig().save(config_path)

        assert config_path.exists()

    def test_save_and_load_roundtrip(self, tmp_path: Path) -> None:
        """Test that saved config can be loaded identically."""
        config_path = tmp_path / "roundtrip.yaml"

        original = TidyConfig()
        original.classify = False
        original.freshness_days = 2
        original.rules_disabled = ["swap_files"]
        original.log_file = tmp_path / "tidy.log"
        original.log_level = "DEBUG"

        original.save(config_path)
        loaded = TidyConfig.load(config_path)

        assert loaded == original

    def test_save_format(self, tmp_path: Path) -> None:
        """Test that saved YAML has expected structure."""
        config_path = tmp_path / "format.yaml"
        TidyConfig().save(config_path)

        with config_path.open() as f:
            data = yaml.safe_load(f)

        assert data["classify"] is True
        assert data["freshness_days"] == 7
        assert "output_file" in data
        assert data["logging"] == {"file": None, "level": "INFO"}


class TestConfigPath:
    """Tests for config path handling."""

    def test_get_config_path(self) -> None:
        """Test default config path location."""
        assert TidyConfig.get_config_path() == Path.home() / ".config/tidyup/config.yaml"

    def test_load_uses_default_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Test that load() uses the default path when no path is specified."""
        custom_default = tmp_path / "default_config.yaml"
        monkeypatch.setattr(TidyConfig, "get_config_path", classmethod(lambda cls: custom_default))

        custom_default.write_text("freshness_days: 42\n")

        config = TidyConfig.load()

        assert config.freshness_days == 42

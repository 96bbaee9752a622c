"""Configuration management for tidyup."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})


def parse_bool(value: Any, default: bool) -> bool:
    """Interpret a YAML scalar as a boolean.

    Args:
        value: Raw value from the config file.
        default: Returned when value is None.

    Returns:
        Parsed boolean.

    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    return str(value).strip().lower() in _TRUE_STRINGS


def _expand(path: str) -> Path:
    return Path(os.path.expanduser(path))


@dataclass
class TidyConfig:
    """Configuration for a tidyup scan."""

    # Run file(1) on every file to group the inventory by content type
    classify: bool = True

    # Entities modified more recently than this get no suggestions
    freshness_days: int = 7

    # Objects and executables older than this are reported as stale
    old_binary_days: int = 365

    # Where the advisory script is written
    output_file: Path = field(default_factory=lambda: Path.home() / "tidyup-suggestions.sh")

    # External tools
    file_command: str = "file"
    git_command: str = "git"
    classify_timeout: float = 10.0  # seconds per file(1) call

    # .git directories with more loose objects than this get a gc suggestion
    loose_object_threshold: int = 0

    # Rule names to skip
    rules_disabled: list[str] = field(default_factory=list)

    # Logging
    log_file: Path | None = None
    log_level: str = "INFO"

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the default configuration file path."""
        return Path.home() / ".config/tidyup/config.yaml"

    @classmethod
    def load(cls, config_path: Path | None = None) -> TidyConfig:
        """Load configuration from YAML file.

        Args:
            config_path: Path to config file. Uses default if None.

        Returns:
            Loaded configuration.

        Raises:
            ValueError: If the file is not valid YAML or holds invalid values.

        """
        if config_path is None:
            config_path = cls.get_config_path()

        if not config_path.exists():
            return cls()

        try:
            with config_path.open(encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config in {config_path}: expected a mapping")

        try:
            config = cls._from_dict(data)
        except (TypeError, ValueError, AttributeError) as e:
            raise ValueError(f"Invalid config in {config_path}: {e}") from e
        config.validate()
        return config

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> TidyConfig:
        """Create config from dictionary."""
        config = cls()

        if "classify" in data:
            config.classify = parse_bool(data["classify"], config.classify)
        if "freshness_days" in data:
            config.freshness_days = int(data["freshness_days"])
        if "old_binary_days" in data:
            config.old_binary_days = int(data["old_binary_days"])
        if "output_file" in data:
            config.output_file = _expand(data["output_file"])
        if "file_command" in data:
            config.file_command = str(data["file_command"])
        if "git_command" in data:
            config.git_command = str(data["git_command"])
        if "classify_timeout" in data:
            config.classify_timeout = float(data["classify_timeout"])
        if "loose_object_threshold" in data:
            config.loose_object_threshold = int(data["loose_object_threshold"])
        if "rules_disabled" in data:
            names = data["rules_disabled"] or []
            if not isinstance(names, list):
                raise TypeError("rules_disabled must be a list of rule names")
            config.rules_disabled = [str(name) for name in names]

        # Logging
        if "logging" in data:
            logging_cfg = data["logging"] or {}
            if not isinstance(logging_cfg, dict):
                raise TypeError("logging must be a mapping with file and level keys")
            if logging_cfg.get("file"):
                config.log_file = _expand(logging_cfg["file"])
            if "level" in logging_cfg:
                config.log_level = str(logging_cfg["level"]).upper()

        return config

    def validate(self) -> None:
        """Check value ranges.

        Raises:
            ValueError: On the first invalid setting.

        """
        if self.freshness_days < 0:
            raise ValueError("freshness_days must not be negative")
        if self.old_binary_days <= 0:
            raise ValueError("old_binary_days must be positive")
        if self.classify_timeout <= 0:
            raise ValueError("classify_timeout must be positive")
        if self.loose_object_threshold < 0:
            raise ValueError("loose_object_threshold must not be negative")

    def save(self, config_path: Path | None = None) -> None:
        """Save configuration to YAML file.

        Args:
            config_path: Path to save config. Uses default if None.

        """
        if config_path is None:
            config_path = self.get_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "classify": self.classify,
            "freshness_days": self.freshness_days,
            "old_binary_days": self.old_binary_days,
            "output_file": str(self.output_file),
            "file_command": self.file_command,
            "git_command": self.git_command,
            "classify_timeout": self.classify_timeout,
            "loose_object_threshold": self.loose_object_threshold,
            "rules_disabled": list(self.rules_disabled),
            "logging": {
                "file": str(self.log_file) if self.log_file else None,
                "level": self.log_level,
            },
        }

        with config_path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

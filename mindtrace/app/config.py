"""
Mindtrace Configuration.

Grid parameters for the reasoning-graph layout and defaults for the
project timeline.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, get_args

from mindtrace.core.errors import ConfigError
from mindtrace.core.models.activity import ActivityType, DateWindow

CONFIG_ENV_VAR = "MINDTRACE_CONFIG"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


def get_default_config_path() -> Path:
    """Get the config file location, honouring ``MINDTRACE_CONFIG``."""
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)
    return Path.home() / ".mindtrace" / "config.json"


# ============================================================================
# Configuration Classes
# ============================================================================


@dataclass
class LayoutConfig:
    """Grid used to position thought nodes."""

    columns_per_row: int = 3
    cell_width: int = 250
    cell_height: int = 150
    margin: int = 100
    label_length: int = 60  # Characters of thought content shown on a node

    def __post_init__(self):
        for name in ("columns_per_row", "cell_width", "cell_height", "label_length"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"layout.{name} must be positive, got {getattr(self, name)}")
        if self.margin < 0:
            raise ConfigError(f"layout.margin must not be negative, got {self.margin}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LayoutConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "columns_per_row": self.columns_per_row,
            "cell_width": self.cell_width,
            "cell_height": self.cell_height,
            "margin": self.margin,
            "label_length": self.label_length,
        }


@dataclass
class TimelineConfig:
    """Defaults for activity aggregation and filtering."""

    description_limit: int = 150
    default_window: DateWindow = DateWindow.ALL
    default_types: tuple[ActivityType, ...] = tuple(ActivityType)

    def __post_init__(self):
        if self.description_limit <= 0:
            raise ConfigError(
                f"timeline.description_limit must be positive, got {self.description_limit}"
            )
        try:
            self.default_window = DateWindow(self.default_window)
            self.default_types = tuple(ActivityType(t) for t in self.default_types)
        except ValueError as e:
            raise ConfigError(f"Invalid timeline setting: {e}") from e

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TimelineConfig":
        return cls(**{k: v for k, v in data.items() if hasattr(cls, k)})

    def to_dict(self) -> dict[str, Any]:
        return {
            "description_limit": self.description_limit,
            "default_window": self.default_window.value,
            "default_types": [t.value for t in self.default_types],
        }


@dataclass
class MindtraceConfig:
    """Main configuration; aggregates sub-configs and handles load/save."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)
    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    log_level: LogLevel = "WARNING"
    log_dir: Path | None = None

    def __post_init__(self):
        if isinstance(self.log_level, str):
            self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        if isinstance(self.log_dir, str):
            self.log_dir = Path(self.log_dir)
        elif self.log_dir is not None and not isinstance(self.log_dir, Path):
            raise ConfigError(f"log_dir must be a path, got {self.log_dir!r}")

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> "MindtraceConfig":
        """Load configuration from a JSON file.

        A missing file yields the defaults; an unreadable one raises.

        Raises:
            ConfigError: If the file is not valid JSON or holds bad values
        """
        config_path = Path(config_path) if config_path is not None else get_default_config_path()

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {config_path} must hold a JSON object")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MindtraceConfig":
        sections = {}
        for name in ("layout", "timeline"):
            section = data.get(name)
            if section is None:
                section = {}
            if not isinstance(section, dict):
                raise ConfigError(f"Config section '{name}' must be a JSON object")
            sections[name] = section

        try:
            return cls(
                layout=LayoutConfig.from_dict(sections["layout"]),
                timeline=TimelineConfig.from_dict(sections["timeline"]),
                log_level=data.get("log_level", "WARNING"),
                log_dir=data.get("log_dir"),
            )
        except TypeError as e:
            raise ConfigError(f"Invalid config value: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "layout": self.layout.to_dict(),
            "timeline": self.timeline.to_dict(),
            "log_level": self.log_level,
            "log_dir": str(self.log_dir) if self.log_dir else None,
        }

    def save(self, config_path: str | Path | None = None) -> Path:
        """Save configuration as JSON and return the path written."""
        config_path = Path(config_path) if config_path is not None else get_default_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

        return config_path


# ============================================================================
# Global Config Instance
# ============================================================================


_global_config: MindtraceConfig | None = None


def get_config() -> MindtraceConfig:
    """Get the global configuration, loading it on first use."""
    global _global_config
    if _global_config is None:
        _global_config = MindtraceConfig.load()
    return _global_config


def set_config(config: MindtraceConfig) -> None:
    global _global_config
    _global_config = config


def reload_config(config_path: str | Path | None = None) -> MindtraceConfig:
    """Reload configuration from disk and make it the global instance."""
    global _global_config
    _global_config = MindtraceConfig.load(config_path)
    return _global_config

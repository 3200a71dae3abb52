"""Application settings and configuration management."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from deficit.units import HeightUnit, WeightUnit

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("table", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".deficit"


def _default_config_path() -> Path:
    return _default_config_dir() / "config.yaml"


@dataclass
class DisplayConfig:
    """How results are shown on the command line."""

    weight_unit: WeightUnit = WeightUnit.KG
    height_unit: HeightUnit = HeightUnit.CM
    output_format: str = "table"  # "table" or "json"


@dataclass
class DataConfig:
    """Default input files for commands that read a profile or logs."""

    profile_path: Optional[Path] = None
    logs_path: Optional[Path] = None


@dataclass
class LoggingConfig:
    """Log verbosity for the command line."""

    level: str = "WARNING"


@dataclass
class Settings:
    """Main application settings."""

    display: DisplayConfig = field(default_factory=DisplayConfig)
    data: DataConfig = field(default_factory=DataConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Unknown keys and unsupported values are skipped with a warning so a
        stale config file never stops the CLI from starting.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.deficit/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_path()

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()
        if not isinstance(data, dict):
            logger.warning("ignoring %s: expected a mapping of sections", config_path)
            return settings

        for section, values in data.items():
            if not isinstance(values, dict):
                continue
            for key, value in values.items():
                if value is None:
                    continue
                try:
                    settings.set(f"{section}.{key}", str(value))
                except KeyError:
                    logger.warning("ignoring unknown setting %s.%s in %s", section, key, config_path)
                except ValueError as e:
                    logger.warning("ignoring %s.%s in %s: %s", section, key, config_path, e)

        return settings

    def set(self, key: str, value: str) -> None:
        """Set a single dotted setting such as ``display.weight_unit``.

        Raises:
            KeyError: If the key is unknown
            ValueError: If the value is not allowed for the key
        """
        if key == "display.weight_unit":
            self.display.weight_unit = WeightUnit(value.lower())
        elif key == "display.height_unit":
            self.display.height_unit = HeightUnit(value.lower())
        elif key == "display.output_format":
            if value.lower() not in OUTPUT_FORMATS:
                raise ValueError(f"output_format must be one of {OUTPUT_FORMATS}, got '{value}'")
            self.display.output_format = value.lower()
        elif key == "data.profile_path":
            self.data.profile_path = Path(value).expanduser()
        elif key == "data.logs_path":
            self.data.logs_path = Path(value).expanduser()
        elif key == "logging.level":
            if value.upper() not in LOG_LEVELS:
                raise ValueError(f"logging level must be one of {LOG_LEVELS}, got '{value}'")
            self.logging.level = value.upper()
        else:
            raise KeyError(key)

    def to_dict(self) -> dict:
        """Settings as a plain nested dict (YAML/JSON friendly)."""
        return {
            "display": {
                "weight_unit": self.display.weight_unit.value,
                "height_unit": self.display.height_unit.value,
                "output_format": self.display.output_format,
            },
            "data": {
                "profile_path": str(self.data.profile_path) if self.data.profile_path else None,
                "logs_path": str(self.data.logs_path) if self.data.logs_path else None,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.deficit/config.yaml
        """
        if config_path is None:
            config_path = _default_config_path()

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings(config_path: Optional[Path] = None) -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load(config_path)
    return _settings

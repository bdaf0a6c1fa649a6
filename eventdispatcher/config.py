"""Configuration presets and INI-file settings for event dispatch diagnostics."""

from __future__ import annotations

import configparser
import enum
import logging
import os
from pathlib import Path
from typing import Any

from eventdispatcher.lib.logger import configure_logger
from eventdispatcher.lib.reporters import set_reporters


class Config:
    """Base configuration."""

    LOG_LEVEL = logging.INFO
    DEPRECATION_STACK_TRACES = True
    HANDLER_TRACEBACKS = True


class DevelopmentConfig(Config):
    """Development configuration."""

    LOG_LEVEL = logging.DEBUG


class ProductionConfig(Config):
    """Production configuration."""

    DEPRECATION_STACK_TRACES = False


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    LOG_LEVEL = logging.DEBUG


class ConfigType(enum.Enum):
    DEVELOPMENT = DevelopmentConfig
    PRODUCTION = ProductionConfig
    TESTING = TestingConfig


class SettingsManager:
    """Reads and writes dispatcher settings in the [EVENTDISPATCHER] section of an INI file."""

    SECTION = "EVENTDISPATCHER"

    # Setting name -> Config attribute it overrides
    KEYS = {
        "log_level": "LOG_LEVEL",
        "deprecation_stack_traces": "DEPRECATION_STACK_TRACES",
        "handler_tracebacks": "HANDLER_TRACEBACKS",
    }

    def __init__(self, config_file_path: str | Path, defaults: type[Config] = Config) -> None:
        self._config_obj = configparser.ConfigParser()
        self.config_file_path = str(config_file_path)
        self.defaults = {key: getattr(defaults, attr) for key, attr in self.KEYS.items()}
        logging.debug(f"Using settings file: {self.config_file_path}")

    def get(self, setting: str, default_value: Any = None) -> Any:
        """Get a setting value, auto-converting to bool/int/float."""
        # Silently ignores missing files
        self._config_obj.read(self.config_file_path, encoding="utf-8")

        if not self._config_obj.has_section(self.SECTION):
            return default_value

        try:
            value = self._config_obj.get(self.SECTION, setting)
            return self._convert_value(value)
        except (configparser.NoOptionError, ValueError):
            return default_value

    def get_or_default(self, setting: str) -> Any:
        """Get a setting value, falling back to the preset default if not set."""
        return self.get(setting, self.defaults.get(setting))

    def set(self, setting: str, val: Any) -> tuple[bool, str]:
        """Update a setting and persist it. Returns (success, message) tuple."""
        logging.debug(f"Changing dispatcher setting << {setting} >> to {val}")
        try:
            self._config_obj.read(self.config_file_path, encoding="utf-8")

            if self.SECTION not in self._config_obj:
                self._config_obj.add_section(self.SECTION)
            self._config_obj[self.SECTION][setting] = str(val)

            with open(self.config_file_path, "w", encoding="utf-8") as conf:
                self._config_obj.write(conf)
            return (True, "Settings were changed successfully")
        except OSError as e:
            logging.error(f"Failed to change dispatcher setting << {setting} >>: {e}")
            return (False, "Something went wrong! Settings were not changed")

    def clear(self) -> tuple[bool, str]:
        """Remove all settings by deleting the settings file. Returns (success, message)."""
        try:
            if os.path.exists(self.config_file_path):
                os.remove(self.config_file_path)
                logging.info(f"Cleared settings: deleted {self.config_file_path}")
            self._config_obj.clear()
            return (True, "Settings were cleared successfully")
        except OSError as e:
            logging.error(f"Failed to clear settings: {e}")
            return (False, "Something went wrong! Settings were not cleared")

    def as_dict(self) -> dict[str, Any]:
        """All known settings, with the INI file taking priority over the preset."""
        settings = {key: self.get_or_default(key) for key in self.KEYS}
        settings["log_level"] = _parse_log_level(settings["log_level"])
        return settings

    def _convert_value(self, val: Any) -> Any:
        """Convert a string to bool/int/float if applicable, otherwise return as-is."""
        if not isinstance(val, str):
            return val

        val_lower = val.lower()
        if val_lower in ("true", "yes", "on"):
            return True
        if val_lower in ("false", "no", "off"):
            return False

        stripped = val.lstrip("-")
        if stripped.isdigit():
            return int(val)
        if stripped.replace(".", "", 1).isdigit():
            return float(val)

        return val


def _parse_log_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    parsed = logging.getLevelName(level.upper())
    if not isinstance(parsed, int):
        raise ValueError(f"Unknown log level: {level}")
    return parsed


def configure(
    config_type: ConfigType = ConfigType.PRODUCTION,
    config_file_path: str | Path | None = None,
    log_dir: Path | None = None,
    setup_logging: bool = False,
) -> dict[str, Any]:
    """Apply a configuration preset, optionally overridden by an INI file.

    Priority: INI file > preset

    Args:
        config_type: Which preset supplies the defaults.
        config_file_path: Optional settings file with an [EVENTDISPATCHER] section.
        log_dir: Where to write log files when ``setup_logging`` is set.
        setup_logging: Also install console (and file) log handlers.

    Returns:
        The resolved settings.
    """
    preset = config_type.value
    if config_file_path is not None:
        settings = SettingsManager(config_file_path, defaults=preset).as_dict()
    else:
        settings = {key: getattr(preset, attr) for key, attr in SettingsManager.KEYS.items()}

    set_reporters(
        capture_stack=bool(settings["deprecation_stack_traces"]),
        handler_tracebacks=bool(settings["handler_tracebacks"]),
    )

    if setup_logging:
        configure_logger(log_level=settings["log_level"], log_dir=log_dir)

    logging.debug(f"Event dispatcher configured from {config_type.name}: {settings}")
    return settings

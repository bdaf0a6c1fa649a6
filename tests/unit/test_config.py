"""Tests for configuration presets and the settings file."""

from __future__ import annotations

import logging

import pytest

from eventdispatcher import ConfigType, configure, get_reporters
from eventdispatcher.config import DevelopmentConfig, ProductionConfig, SettingsManager


@pytest.fixture
def settings_file(tmp_path):
    return tmp_path / "settings.ini"


def test_settings_get_missing_file_returns_default(settings_file):
    """A missing file is treated as empty."""
    settings = SettingsManager(settings_file)
    assert settings.get("log_level", "fallback") == "fallback"
    assert settings.get("log_level") is None


def test_settings_set_and_get(settings_file):
    """Values round-trip through the INI file."""
    settings = SettingsManager(settings_file)

    success, message = settings.set("handler_tracebacks", False)
    assert success is True
    assert "successfully" in message.lower()

    assert settings.get("handler_tracebacks") is False
    assert "[EVENTDISPATCHER]" in settings_file.read_text()


def test_settings_type_conversion(settings_file):
    """Strings are converted to bool, int and float where they look like one."""
    settings = SettingsManager(settings_file)

    for raw, expected in [("yes", True), ("Off", False), ("10", 10), ("-3", -3), ("0.5", 0.5), ("INFO", "INFO")]:
        settings.set("value", raw)
        assert settings.get("value") == expected, f"Failed for value: {raw}"


def test_settings_get_or_default_uses_preset(settings_file):
    """Unset keys fall back to the preset passed in."""
    settings = SettingsManager(settings_file, defaults=ProductionConfig)
    assert settings.get_or_default("deprecation_stack_traces") is False
    assert settings.get_or_default("handler_tracebacks") is True


def test_settings_as_dict_parses_log_level_names(settings_file):
    """Log levels may be written by name."""
    settings = SettingsManager(settings_file)
    settings.set("log_level", "warning")

    assert settings.as_dict() == {
        "log_level": logging.WARNING,
        "deprecation_stack_traces": True,
        "handler_tracebacks": True,
    }


def test_settings_as_dict_rejects_unknown_log_level(settings_file):
    settings = SettingsManager(settings_file)
    settings.set("log_level", "chatty")

    with pytest.raises(ValueError, match="Unknown log level"):
        settings.as_dict()


def test_settings_clear(settings_file):
    """clear() deletes the file and forgets cached values."""
    settings = SettingsManager(settings_file)
    settings.set("handler_tracebacks", False)

    success, _ = settings.clear()

    assert success is True
    assert not settings_file.exists()
    assert settings.get("handler_tracebacks") is None


def test_configure_production_preset():
    """Production turns off deprecation stacks but keeps tracebacks."""
    settings = configure(ConfigType.PRODUCTION)

    assert settings["deprecation_stack_traces"] is False
    assert get_reporters().capture_stack is False
    assert get_reporters().handler_tracebacks is True


def test_configure_development_preset():
    settings = configure(ConfigType.DEVELOPMENT)

    assert settings["log_level"] == DevelopmentConfig.LOG_LEVEL == logging.DEBUG
    assert get_reporters().capture_stack is True


def test_configure_file_overrides_preset(settings_file):
    """Settings from the INI file win over the preset."""
    SettingsManager(settings_file).set("handler_tracebacks", "no")
    SettingsManager(settings_file).set("deprecation_stack_traces", "yes")

    settings = configure(ConfigType.PRODUCTION, config_file_path=settings_file)

    assert settings["handler_tracebacks"] is False
    assert settings["deprecation_stack_traces"] is True
    assert get_reporters().handler_tracebacks is False
    assert get_reporters().capture_stack is True


def test_configure_can_set_up_logging(tmp_path):
    """setup_logging installs handlers at the configured level."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure(ConfigType.TESTING, log_dir=tmp_path / "logs", setup_logging=True)

        assert root.level == logging.DEBUG
        assert list((tmp_path / "logs").glob("*.log"))
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

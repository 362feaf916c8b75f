"""Dataclass schema objects used by runtime configuration loading."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CONFIG_FILE = "~/.config/pomo/config.toml"
CONFIG_FILE_ENV = "POMO_CONFIG_FILE"


class AppConfigurationError(Exception):
    """Raised when application configuration fails."""


@dataclass(frozen=True)
class StateSettings:
    """Session persistence settings from `[state]`. Empty file means `~/.pomo.json`."""
    file: str = ""


@dataclass(frozen=True)
class NotificationSettings:
    """Desktop notification settings from `[notifications]`."""
    enabled: bool = True
    title: str = "Pomodoro Timer"
    timeout_seconds: int = 10


@dataclass(frozen=True)
class DisplaySettings:
    """Terminal rendering and input polling settings from `[display]`."""
    poll_interval_seconds: float = 0.25
    clear_screen: bool = True


@dataclass(frozen=True)
class LoggingSettings:
    """Log level and optional log file from `[logging]`."""
    level: str = "WARNING"
    file: str = ""


@dataclass(frozen=True)
class AppConfig:
    """Complete typed runtime configuration loaded from `config.toml`."""
    state: StateSettings
    notifications: NotificationSettings
    display: DisplaySettings
    logging: LoggingSettings
    source_file: str


def default_app_config() -> AppConfig:
    return AppConfig(
        state=StateSettings(),
        notifications=NotificationSettings(),
        display=DisplaySettings(),
        logging=LoggingSettings(),
        source_file="",
    )

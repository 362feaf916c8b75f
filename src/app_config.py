"""Config file resolution and loading for the pomodoro CLI."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping

if sys.version_info >= (3, 11):
    import tomllib
else:  # pragma: no cover - older runtimes
    import tomli as tomllib

from app_config_parser import parse_app_config
from app_config_schema import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    DisplaySettings,
    LoggingSettings,
    NotificationSettings,
    StateSettings,
    default_app_config,
)

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "DisplaySettings",
    "LoggingSettings",
    "NotificationSettings",
    "StateSettings",
    "default_app_config",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> tuple[Path, bool]:
    """Return the config path and whether it was explicitly requested."""
    env = environ if environ is not None else os.environ
    env_path = env.get(CONFIG_FILE_ENV, "").strip()
    explicit = bool(config_path or env_path)
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    return path, explicit


def load_app_config(
    config_path: str | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    path, explicit = resolve_config_path(config_path, environ=environ)
    if not path.exists():
        if explicit:
            raise AppConfigurationError(f"Config file not found: {path}")
        return default_app_config()
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except (OSError, tomllib.TOMLDecodeError) as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))

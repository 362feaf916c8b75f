"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    DisplaySettings,
    LoggingSettings,
    NotificationSettings,
    StateSettings,
)

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_KNOWN_SECTIONS = {"state", "notifications", "display", "logging"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    unknown = sorted(set(raw.keys()) - _KNOWN_SECTIONS)
    if unknown:
        raise AppConfigurationError(
            f"Unknown config section(s): {', '.join(unknown)}"
        )

    return AppConfig(
        state=_parse_state_settings(_section(raw, "state"), base_dir=base_dir),
        notifications=_parse_notification_settings(_section(raw, "notifications")),
        display=_parse_display_settings(_section(raw, "display")),
        logging=_parse_logging_settings(_section(raw, "logging"), base_dir=base_dir),
        source_file=source_file,
    )


def _parse_state_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> StateSettings:
    # Interval lengths are fixed constants and intentionally not configurable.
    _forbid_fields(section, "state", ("work_seconds", "break_seconds"))
    file = _as_str(section.get("file", ""), "state.file")
    return StateSettings(file=_resolve_path(base_dir, file))


def _parse_notification_settings(section: Mapping[str, Any]) -> NotificationSettings:
    timeout_seconds = _as_int(
        section.get("timeout_seconds", 10),
        "notifications.timeout_seconds",
    )
    if timeout_seconds <= 0:
        raise AppConfigurationError("notifications.timeout_seconds must be positive.")
    return NotificationSettings(
        enabled=_as_bool(section.get("enabled", True), "notifications.enabled"),
        title=_as_str(section.get("title", "Pomodoro Timer"), "notifications.title")
        or "Pomodoro Timer",
        timeout_seconds=timeout_seconds,
    )


def _parse_display_settings(section: Mapping[str, Any]) -> DisplaySettings:
    poll_interval = _as_float(
        section.get("poll_interval_seconds", 0.25),
        "display.poll_interval_seconds",
    )
    if not 0.0 < poll_interval <= 1.0:
        raise AppConfigurationError(
            "display.poll_interval_seconds must be in the range (0, 1]."
        )
    return DisplaySettings(
        poll_interval_seconds=poll_interval,
        clear_screen=_as_bool(section.get("clear_screen", True), "display.clear_screen"),
    )


def _parse_logging_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> LoggingSettings:
    level = _as_str(section.get("level", "WARNING"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    file = _as_str(section.get("file", ""), "logging.file")
    return LoggingSettings(level=level, file=_resolve_path(base_dir, file))


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_float(value: Any, field: str) -> float:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be a float.")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be a float.") from error
    raise AppConfigurationError(f"{field} must be a float.")


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)


def _forbid_fields(
    section: Mapping[str, Any],
    section_name: str,
    fields: tuple[str, ...],
) -> None:
    present = [field for field in fields if field in section]
    if present:
        joined = ", ".join(f"{section_name}.{field}" for field in present)
        raise AppConfigurationError(
            f"Phase durations are fixed and cannot be configured: {joined}."
        )

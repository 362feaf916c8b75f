"""JSON file persistence for the single pomodoro session."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from .state import SessionState

DEFAULT_STATE_FILENAME = ".pomo.json"


class StateStoreError(Exception):
    """Raised when the session state cannot be written to disk."""


def default_state_path() -> Path:
    """Return `~/.pomo.json`, or a temp-dir fallback when no home is available."""
    try:
        home = Path.home()
    except RuntimeError:
        home = Path(tempfile.gettempdir())
    return home / DEFAULT_STATE_FILENAME


class SessionStore:
    """Loads and atomically overwrites one `SessionState` record at a fixed path."""

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        logger: Optional[logging.Logger] = None,
    ):
        self._path = Path(path).expanduser() if path else default_state_path()
        self._logger = logger or logging.getLogger("pomodoro.store")

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[SessionState]:
        """Return the persisted state, or None when it is missing or invalid."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._logger.info("No saved session at %s", self._path)
            return None
        except (OSError, UnicodeDecodeError) as error:
            self._logger.warning("Cannot read session file %s: %s", self._path, error)
            return None

        try:
            data = json.loads(raw)
        except ValueError as error:
            self._logger.warning("Session file %s is not valid JSON: %s", self._path, error)
            return None

        state = SessionState.from_dict(data)
        if state is None:
            self._logger.warning("Session file %s does not match the schema", self._path)
        return state

    def save(self, state: SessionState) -> None:
        """Write `state` to a sibling temp file and rename it over the target."""
        payload = json.dumps(state.to_dict(), indent=2) + "\n"
        temp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            temp_path.replace(self._path)
        except OSError as error:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            raise StateStoreError(
                f"Failed to save session to {self._path}: {error}"
            ) from error

        self._logger.debug("Saved session to %s", self._path)

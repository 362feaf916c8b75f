"""Persisted session record and its JSON schema."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping, Optional

from .constants import PHASE_DURATIONS, PHASE_WORK, STATE_FIELDS

SessionPhase = Literal["Work", "Break"]


@dataclass(frozen=True)
class SessionState:
    """Single-slot pomodoro session persisted between process runs."""
    phase: SessionPhase
    remaining_seconds: int
    is_paused: bool
    last_update: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "remaining_seconds": self.remaining_seconds,
            "is_paused": self.is_paused,
            "last_update": self.last_update,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["SessionState"]:
        """Build a state from decoded JSON, or return None if it violates the schema."""
        if not isinstance(data, Mapping):
            return None
        if set(data.keys()) != STATE_FIELDS:
            return None

        phase = data["phase"]
        remaining = data["remaining_seconds"]
        is_paused = data["is_paused"]
        last_update = data["last_update"]

        if not isinstance(phase, str) or phase not in PHASE_DURATIONS:
            return None
        if not _is_int(remaining) or not _is_int(last_update):
            return None
        if not isinstance(is_paused, bool):
            return None
        if remaining < 0 or remaining > PHASE_DURATIONS[phase]:
            return None

        return cls(
            phase=phase,
            remaining_seconds=remaining,
            is_paused=is_paused,
            last_update=last_update,
        )


def phase_duration(phase: str) -> int:
    return PHASE_DURATIONS[phase]


def fresh_state(now: int) -> SessionState:
    """Default session: a full, running Work phase stamped with `now`."""
    return SessionState(
        phase=PHASE_WORK,
        remaining_seconds=phase_duration(PHASE_WORK),
        is_paused=False,
        last_update=int(now),
    )


def _is_int(value: Any) -> bool:
    # JSON booleans decode to bool, which is a subclass of int.
    return isinstance(value, int) and not isinstance(value, bool)

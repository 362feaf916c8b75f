"""Phase, action, and reason constants used by pomodoro session logic."""

from __future__ import annotations

PHASE_WORK = "Work"
PHASE_BREAK = "Break"

WORK_DURATION_SECONDS = 25 * 60
BREAK_DURATION_SECONDS = 5 * 60

PHASE_DURATIONS: dict[str, int] = {
    PHASE_WORK: WORK_DURATION_SECONDS,
    PHASE_BREAK: BREAK_DURATION_SECONDS,
}

NEXT_PHASE: dict[str, str] = {
    PHASE_WORK: PHASE_BREAK,
    PHASE_BREAK: PHASE_WORK,
}

ACTION_PAUSE = "pause"
ACTION_RESUME = "resume"
ACTION_QUIT = "quit"

REASON_PAUSED = "paused"
REASON_RESUMED = "resumed"
REASON_QUIT = "quit"
REASON_ALREADY_PAUSED = "already_paused"
REASON_NOT_PAUSED = "not_paused"
REASON_UNSUPPORTED_ACTION = "unsupported_action"

STATE_FIELDS: frozenset[str] = frozenset(
    {"phase", "remaining_seconds", "is_paused", "last_update"}
)

CYCLE_SECONDS = WORK_DURATION_SECONDS + BREAK_DURATION_SECONDS

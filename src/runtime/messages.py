"""Status, hint, and notification text builders for the terminal timer."""

from __future__ import annotations

from typing import Optional

from pomodoro import SessionState
from pomodoro.constants import (
    ACTION_PAUSE,
    ACTION_RESUME,
    PHASE_BREAK,
    PHASE_WORK,
    REASON_ALREADY_PAUSED,
    REASON_NOT_PAUSED,
)

PHASE_EMOJI: dict[str, str] = {
    PHASE_WORK: "🍅",
    PHASE_BREAK: "🌴",
}

HINT_RUNNING = "Press 'p' to pause, 'q' to quit"
HINT_PAUSED = "PAUSED - Press 'r' to resume, 'q' to quit"


def format_duration(seconds: int) -> str:
    """Format a duration in seconds as `MM:SS`."""
    minutes, remainder = divmod(max(0, int(seconds)), 60)
    return f"{minutes:02d}:{remainder:02d}"


def status_line(state: SessionState) -> str:
    emoji = PHASE_EMOJI.get(state.phase, "")
    return f"{format_duration(state.remaining_seconds)} {emoji}  {state.phase}"


def hint_line(state: SessionState) -> str:
    return HINT_PAUSED if state.is_paused else HINT_RUNNING


def render_lines(
    state: SessionState,
    *,
    feedback: Optional[str] = None,
    warning: Optional[str] = None,
) -> list[str]:
    """Build the full screen for one frame of the timer display."""
    lines = [status_line(state), "", hint_line(state)]
    if feedback:
        lines.append(feedback)
    if warning:
        lines.append(f"⚠️  {warning}")
    return lines


def notification_text(completed_phase: str) -> str:
    """Return the desktop notification body for a completed phase."""
    if completed_phase == PHASE_WORK:
        return "Work session completed! Time for a break."
    if completed_phase == PHASE_BREAK:
        return "Break time over! Ready for work?"
    return f"{completed_phase} completed."


def rejection_text(action: str, reason: str) -> str:
    """Return feedback for a key command that did not apply in the current state."""
    if reason == REASON_ALREADY_PAUSED and action == ACTION_PAUSE:
        return "Timer is already paused."
    if reason == REASON_NOT_PAUSED and action == ACTION_RESUME:
        return "Timer is not paused."
    return f"Cannot {action} right now."

from .clock import Clock, SystemClock
from .service import (
    PomodoroAction,
    PomodoroActionResult,
    PomodoroTick,
    TransitionEvent,
    apply_action,
    load_or_init,
    next_phase,
    pause,
    resume,
    tick,
)
from .state import SessionPhase, SessionState, fresh_state, phase_duration
from .store import SessionStore, StateStoreError, default_state_path

__all__ = [
    "Clock",
    "PomodoroAction",
    "PomodoroActionResult",
    "PomodoroTick",
    "SessionPhase",
    "SessionState",
    "SessionStore",
    "StateStoreError",
    "SystemClock",
    "TransitionEvent",
    "apply_action",
    "default_state_path",
    "fresh_state",
    "load_or_init",
    "next_phase",
    "pause",
    "phase_duration",
    "resume",
    "tick",
]

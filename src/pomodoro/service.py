"""Pure pomodoro state machine with checkpoint-based resume correction."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Literal, Optional, Protocol

from .constants import (
    ACTION_PAUSE,
    ACTION_QUIT,
    ACTION_RESUME,
    CYCLE_SECONDS,
    NEXT_PHASE,
    REASON_ALREADY_PAUSED,
    REASON_NOT_PAUSED,
    REASON_PAUSED,
    REASON_QUIT,
    REASON_RESUMED,
    REASON_UNSUPPORTED_ACTION,
)
from .state import SessionPhase, SessionState, fresh_state, phase_duration

PomodoroAction = Literal["pause", "resume", "quit"]


class SessionStoreLike(Protocol):
    def load(self) -> Optional[SessionState]:
        ...


@dataclass(frozen=True)
class TransitionEvent:
    """Raised when a phase countdown reaches zero."""
    completed_phase: SessionPhase
    next_phase: SessionPhase
    occurred_at: int


@dataclass(frozen=True)
class PomodoroTick:
    """Result of reconciling elapsed time: the new state and any transitions, in order.

    Whole Work+Break cycles skipped by a long delta are counted in
    `skipped_cycles` instead of being listed in `events`.
    """
    state: SessionState
    events: tuple[TransitionEvent, ...] = ()
    skipped_cycles: int = 0

    @property
    def transitioned(self) -> bool:
        return bool(self.events)

    @property
    def transition_count(self) -> int:
        return len(self.events) + 2 * self.skipped_cycles


@dataclass(frozen=True)
class PomodoroActionResult:
    """Result envelope returned after applying a user command."""
    action: str
    accepted: bool
    reason: str
    state: SessionState


def next_phase(phase: SessionPhase) -> SessionPhase:
    return NEXT_PHASE[phase]  # type: ignore[return-value]


def tick(state: SessionState, now: int) -> PomodoroTick:
    """Subtract wall-clock time elapsed since `last_update` and roll over phases.

    Paused states are returned untouched so paused time is never charged.
    A delta spanning several phases emits an event for the first boundary and
    for the last ones; full cycles in between are skipped arithmetically, so the
    cost does not grow with the gap.
    """
    if state.is_paused:
        return PomodoroTick(state=state)

    delta = max(0, int(now) - state.last_update)
    phase = state.phase
    remaining = state.remaining_seconds - delta
    boundary = state.last_update + state.remaining_seconds
    events: list[TransitionEvent] = []
    skipped_cycles = 0

    while remaining <= 0:
        if events and remaining <= -CYCLE_SECONDS:
            cycles = -remaining // CYCLE_SECONDS
            remaining += cycles * CYCLE_SECONDS
            boundary += cycles * CYCLE_SECONDS
            skipped_cycles += cycles
        completed = phase
        phase = next_phase(completed)
        events.append(
            TransitionEvent(
                completed_phase=completed,
                next_phase=phase,
                occurred_at=boundary,
            )
        )
        remaining += phase_duration(phase)
        boundary += phase_duration(phase)

    return PomodoroTick(
        state=replace(
            state,
            phase=phase,
            remaining_seconds=remaining,
            last_update=int(now),
        ),
        events=tuple(events),
        skipped_cycles=skipped_cycles,
    )


def pause(state: SessionState) -> SessionState:
    if state.is_paused:
        return state
    return replace(state, is_paused=True)


def resume(state: SessionState, now: int) -> SessionState:
    """Restart the countdown from `now` without charging the paused interval."""
    return replace(state, is_paused=False, last_update=int(now))


def quit(state: SessionState) -> None:
    """Quitting leaves the state as is; the control loop persists it and exits."""
    return None


def apply_action(
    state: SessionState,
    action: str,
    now: int,
) -> PomodoroActionResult:
    if action == ACTION_PAUSE:
        if state.is_paused:
            return PomodoroActionResult(action, False, REASON_ALREADY_PAUSED, state)
        return PomodoroActionResult(action, True, REASON_PAUSED, pause(state))

    if action == ACTION_RESUME:
        if not state.is_paused:
            return PomodoroActionResult(action, False, REASON_NOT_PAUSED, state)
        return PomodoroActionResult(action, True, REASON_RESUMED, resume(state, now))

    if action == ACTION_QUIT:
        quit(state)
        return PomodoroActionResult(action, True, REASON_QUIT, state)

    return PomodoroActionResult(action, False, REASON_UNSUPPORTED_ACTION, state)


def load_or_init(
    store: SessionStoreLike,
    now: int,
    *,
    logger: Optional[logging.Logger] = None,
) -> SessionState:
    """Load the persisted session and charge the time spent while not running.

    Falls back to a fresh Work phase when nothing valid is stored.
    """
    logger = logger or logging.getLogger("pomodoro")
    stored = store.load()
    if stored is None:
        logger.info("Starting a fresh session")
        return fresh_state(now)

    result = tick(stored, now)
    if result.events:
        logger.info(
            "Fast-forwarded %d phase transition(s) while not running: %s -> %s",
            result.transition_count,
            stored.phase,
            result.state.phase,
        )
    logger.info(
        "Resumed session: phase=%s remaining=%ss paused=%s",
        result.state.phase,
        result.state.remaining_seconds,
        result.state.is_paused,
    )
    return result.state

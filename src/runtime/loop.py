"""Runtime control loop: ticks the session, persists it, renders, and reads keys."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from pomodoro import (
    Clock,
    SessionState,
    SessionStore,
    StateStoreError,
    TransitionEvent,
    apply_action,
    load_or_init,
    tick,
)
from pomodoro.constants import ACTION_QUIT

from .messages import rejection_text, render_lines
from .notifications import Notifier
from .terminal import action_for_key


class KeyboardLike(Protocol):
    def __enter__(self) -> "KeyboardLike":
        ...

    def __exit__(self, exc_type, exc, tb) -> None:
        ...

    def read_key(self, timeout: float) -> Optional[str]:
        ...


class RendererLike(Protocol):
    def render(self, lines: list[str]) -> bool:
        ...

    def write_line(self, text: str) -> None:
        ...


@dataclass(frozen=True)
class RuntimeHooks:
    """Injectable lifecycle hooks used by runtime startup."""
    setup_signal_handlers: Callable[[], None]


@dataclass(frozen=True)
class RuntimeBootstrap:
    """Dependency bundle required to construct the runtime engine."""
    logger: logging.Logger
    store: SessionStore
    clock: Clock
    notifier: Notifier
    keyboard: KeyboardLike
    renderer: RendererLike
    hooks: RuntimeHooks
    poll_interval_seconds: float = 0.25


class RuntimeEngine:
    """Single owner of the session state for the lifetime of the process."""
    def __init__(self, bootstrap: RuntimeBootstrap):
        self._bootstrap = bootstrap
        self._logger = bootstrap.logger
        self._state: Optional[SessionState] = None
        self._feedback: Optional[str] = None
        self._warning: Optional[str] = None

    @property
    def state(self) -> Optional[SessionState]:
        return self._state

    def run(self) -> int:
        self._bootstrap.hooks.setup_signal_handlers()
        keyboard = self._bootstrap.keyboard

        try:
            self._state = load_or_init(
                self._bootstrap.store,
                self._bootstrap.clock.now(),
                logger=logging.getLogger("pomodoro"),
            )
            self._persist()

            with keyboard:
                while True:
                    self._advance(self._bootstrap.clock.now())
                    self._render()

                    key = keyboard.read_key(self._bootstrap.poll_interval_seconds)
                    if key is None:
                        continue
                    action = action_for_key(key)
                    if action is None:
                        continue
                    if self._handle_action(action) == ACTION_QUIT:
                        self._logger.info("Quit requested.")
                        return 0

        except KeyboardInterrupt:
            self._logger.info("Shutdown requested by keyboard interrupt.")
            return 0
        except Exception as error:
            self._logger.error("Unexpected error: %s", error, exc_info=True)
            return 1
        finally:
            self._shutdown()

    def _advance(self, now: int) -> None:
        state = self._require_state()
        result = tick(state, now)
        if result.state != state:
            self._state = result.state
            self._persist()
        if not result.events:
            return
        if result.transition_count > 1:
            self._logger.info(
                "%d phase transitions elapsed since the last tick; notifying the latest",
                result.transition_count,
            )
        self._handle_transition(result.events[-1])

    def _handle_action(self, action: str) -> str:
        now = self._bootstrap.clock.now()
        # Charge time up to this instant before the command changes the state.
        self._advance(now)
        state = self._require_state()

        result = apply_action(state, action, now)
        if not result.accepted:
            self._feedback = rejection_text(action, result.reason)
            self._logger.debug("Action %s rejected: %s", action, result.reason)
            return action

        self._feedback = None
        self._logger.info("Action %s applied (%s)", action, result.reason)
        if result.state != state:
            self._state = result.state
            self._persist()
        return action

    def _handle_transition(self, event: TransitionEvent) -> None:
        self._logger.info(
            "%s completed at %s; starting %s",
            event.completed_phase,
            event.occurred_at,
            event.next_phase,
        )
        try:
            self._bootstrap.notifier.notify(event.completed_phase)
        except Exception as error:
            self._logger.warning("Notification failed: %s", error)

    def _persist(self) -> None:
        state = self._require_state()
        try:
            self._bootstrap.store.save(state)
        except StateStoreError as error:
            if self._warning is None:
                self._logger.warning("%s", error)
            self._warning = str(error)
            return
        if self._warning is not None:
            self._logger.info("Session saving recovered.")
        self._warning = None

    def _render(self) -> None:
        self._bootstrap.renderer.render(
            render_lines(
                self._require_state(),
                feedback=self._feedback,
                warning=self._warning,
            )
        )

    def _require_state(self) -> SessionState:
        if self._state is None:
            raise RuntimeError("Session state used before it was loaded")
        return self._state

    def _shutdown(self) -> None:
        if self._state is not None:
            try:
                self._bootstrap.store.save(self._state)
                self._bootstrap.renderer.write_line(
                    f"Session saved to {self._bootstrap.store.path}"
                )
            except StateStoreError as error:
                self._logger.error("Final save failed: %s", error)
            except Exception as error:
                self._logger.error("Error during shutdown: %s", error, exc_info=True)

        try:
            self._bootstrap.notifier.close()
        except Exception as error:
            self._logger.error("Error stopping notifier: %s", error, exc_info=True)

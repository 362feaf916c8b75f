"""Cbreak-mode keyboard polling and full-screen rendering for the timer."""

from __future__ import annotations

import os
import select
import sys
import termios
import time
import tty
from typing import Optional, TextIO

from pomodoro.constants import ACTION_PAUSE, ACTION_QUIT, ACTION_RESUME

CLEAR_SCREEN = "\033[2J\033[H"
CTRL_C = "\x03"

KEY_TO_ACTION: dict[str, str] = {
    "p": ACTION_PAUSE,
    "r": ACTION_RESUME,
    "q": ACTION_QUIT,
    CTRL_C: ACTION_QUIT,
}


def action_for_key(key: str) -> Optional[str]:
    return KEY_TO_ACTION.get(key.lower())


class KeyboardInput:
    """Non-blocking single-key reader.

    On a TTY the terminal is switched to cbreak mode for the lifetime of the
    context so keys arrive without Enter while Ctrl+C still raises SIGINT.
    Without a TTY, `read_key` only waits for the timeout.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream or sys.stdin
        self._fd: Optional[int] = None
        self._saved_attrs: Optional[list] = None

    @property
    def interactive(self) -> bool:
        return self._fd is not None

    def __enter__(self) -> "KeyboardInput":
        try:
            fd = self._stream.fileno()
        except (AttributeError, OSError, ValueError):
            return self
        if not os.isatty(fd):
            return self

        self._saved_attrs = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        self._fd = fd
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._fd is not None and self._saved_attrs is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._fd = None
        self._saved_attrs = None

    def read_key(self, timeout: float) -> Optional[str]:
        """Wait up to `timeout` seconds for one key press."""
        if self._fd is None:
            time.sleep(timeout)
            return None

        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return None
        data = os.read(self._fd, 1)
        if not data:
            return None
        return data.decode("utf-8", errors="ignore") or None


class TerminalRenderer:
    """Redraws the whole screen, skipping frames identical to the last one."""

    def __init__(self, stream: Optional[TextIO] = None, *, clear_screen: bool = True):
        self._stream = stream or sys.stdout
        self._clear_screen = clear_screen
        self._last_frame: Optional[list[str]] = None

    def render(self, lines: list[str]) -> bool:
        if lines == self._last_frame:
            return False

        if self._clear_screen:
            self._stream.write(CLEAR_SCREEN)
        self._stream.write("\n".join(lines) + "\n")
        self._stream.flush()
        self._last_frame = list(lines)
        return True

    def write_line(self, text: str) -> None:
        self._stream.write(text + "\n")
        self._stream.flush()

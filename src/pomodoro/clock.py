"""Wall-clock sources for the timer engine."""

from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int:
        ...


class SystemClock:
    """Current wall-clock time as whole epoch seconds."""

    def now(self) -> int:
        return int(time.time())

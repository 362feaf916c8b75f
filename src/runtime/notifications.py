"""Best-effort desktop notifications for completed pomodoro phases."""

from __future__ import annotations

import concurrent.futures
import logging
from typing import Optional, Protocol

from plyer import notification

from .messages import notification_text

APP_NAME = "pomo"


class Notifier(Protocol):
    def notify(self, completed_phase: str) -> None:
        ...

    def close(self) -> None:
        ...


class DesktopNotifier:
    """Fire-and-forget notifications delivered on a single worker thread.

    Delivery errors are logged and never propagate to the caller.
    """

    def __init__(
        self,
        *,
        title: str = "Pomodoro Timer",
        timeout_seconds: int = 10,
        logger: Optional[logging.Logger] = None,
    ):
        self._title = title
        self._timeout_seconds = timeout_seconds
        self._logger = logger or logging.getLogger("notifications")
        self._executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1,
            thread_name_prefix="notify",
        )

    def notify(self, completed_phase: str) -> None:
        message = notification_text(completed_phase)
        try:
            future = self._executor.submit(self._deliver, message)
        except RuntimeError as error:
            self._logger.warning("Notification dropped: %s", error)
            return
        future.add_done_callback(self._log_failure)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _deliver(self, message: str) -> None:
        notification.notify(
            title=self._title,
            message=message,
            app_name=APP_NAME,
            timeout=self._timeout_seconds,
        )
        self._logger.debug("Notification delivered: %s", message)

    def _log_failure(self, future: concurrent.futures.Future[None]) -> None:
        if future.cancelled():
            return
        error = future.exception()
        if error is not None:
            self._logger.warning("Desktop notification failed: %s", error)


class NullNotifier:
    """Notifier used when notifications are disabled in the config."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("notifications")

    def notify(self, completed_phase: str) -> None:
        self._logger.debug("Notifications disabled; %s completed", completed_phase)

    def close(self) -> None:
        return None

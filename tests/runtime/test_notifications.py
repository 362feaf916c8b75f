import logging
import unittest
from unittest.mock import patch

from runtime.notifications import DesktopNotifier, NullNotifier


class DesktopNotifierTests(unittest.TestCase):
    def test_notify_delivers_phase_message_through_plyer(self) -> None:
        notifier = DesktopNotifier(title="Pomodoro Timer", timeout_seconds=7)
        with patch("runtime.notifications.notification") as plyer_notification:
            notifier.notify("Work")
            notifier._executor.shutdown(wait=True)

        plyer_notification.notify.assert_called_once_with(
            title="Pomodoro Timer",
            message="Work session completed! Time for a break.",
            app_name="pomo",
            timeout=7,
        )

    def test_delivery_failure_is_logged_not_raised(self) -> None:
        notifier = DesktopNotifier(logger=logging.getLogger("test.notifications"))
        with patch("runtime.notifications.notification") as plyer_notification:
            plyer_notification.notify.side_effect = NotImplementedError("no backend")
            with self.assertLogs("test.notifications", level="WARNING") as logs:
                notifier.notify("Break")
                notifier._executor.shutdown(wait=True)

        self.assertTrue(any("no backend" in line for line in logs.output))

    def test_notify_after_close_is_dropped(self) -> None:
        notifier = DesktopNotifier(logger=logging.getLogger("test.notifications"))
        notifier.close()

        with patch("runtime.notifications.notification") as plyer_notification:
            with self.assertLogs("test.notifications", level="WARNING"):
                notifier.notify("Work")

        plyer_notification.notify.assert_not_called()


class NullNotifierTests(unittest.TestCase):
    def test_null_notifier_only_logs(self) -> None:
        notifier = NullNotifier(logger=logging.getLogger("test.notifications"))
        with self.assertLogs("test.notifications", level="DEBUG") as logs:
            notifier.notify("Work")
        notifier.close()

        self.assertIn("Work completed", logs.output[0])


if __name__ == "__main__":
    unittest.main()

import contextlib
import io
import json
import signal
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import main
from app_config import default_app_config
from app_config_schema import AppConfig, NotificationSettings
from runtime import DesktopNotifier, NullNotifier


class _FixedClock:
    def __init__(self, now: int):
        self._now = now

    def now(self) -> int:
        return self._now


class MainEntrypointTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp_dir.cleanup)
        self.root = Path(self._temp_dir.name)
        self.state_file = self.root / "pomo.json"
        self.config_file = self.root / "config.toml"
        self.config_file.write_text("", encoding="utf-8")

    def _run(self, *argv: str, now: int = 1000) -> tuple[int, str]:
        stdout = io.StringIO()
        with patch("main.SystemClock", return_value=_FixedClock(now)):
            with contextlib.redirect_stdout(stdout):
                exit_code = main.main(list(argv))
        return exit_code, stdout.getvalue()

    def test_status_applies_resume_correction_and_saves(self) -> None:
        self.state_file.write_text(
            json.dumps(
                {
                    "phase": "Work",
                    "remaining_seconds": 100,
                    "is_paused": False,
                    "last_update": 1000,
                }
            ),
            encoding="utf-8",
        )

        exit_code, output = self._run(
            "--config", str(self.config_file),
            "--state-file", str(self.state_file),
            "--status",
            now=1150,
        )

        self.assertEqual(0, exit_code)
        self.assertIn("04:10 🌴  Break", output)
        saved = json.loads(self.state_file.read_text(encoding="utf-8"))
        self.assertEqual(
            {"phase": "Break", "remaining_seconds": 250, "is_paused": False, "last_update": 1150},
            saved,
        )

    def test_status_with_corrupt_file_starts_fresh(self) -> None:
        self.state_file.write_text("{broken", encoding="utf-8")

        exit_code, output = self._run(
            "--config", str(self.config_file),
            "--state-file", str(self.state_file),
            "--status",
        )

        self.assertEqual(0, exit_code)
        self.assertIn("25:00 🍅  Work", output)
        self.assertIn("Press 'p' to pause", output)

    def test_missing_explicit_config_fails(self) -> None:
        exit_code, _ = self._run("--config", str(self.root / "missing.toml"), "--status")
        self.assertEqual(1, exit_code)

    def test_state_file_from_config_is_used(self) -> None:
        self.config_file.write_text('[state]\nfile = "nested/session.json"\n', encoding="utf-8")

        exit_code, _ = self._run("--config", str(self.config_file), "--status")

        self.assertEqual(0, exit_code)
        self.assertTrue((self.root / "nested" / "session.json").is_file())

    def test_run_builds_runtime_engine(self) -> None:
        with patch("main.RuntimeEngine") as engine_cls:
            engine_cls.return_value.run.return_value = 0
            exit_code, _ = self._run(
                "--config", str(self.config_file),
                "--state-file", str(self.state_file),
            )

        self.assertEqual(0, exit_code)
        bootstrap = engine_cls.call_args.args[0]
        self.assertEqual(self.state_file, bootstrap.store.path)
        self.assertEqual(0.25, bootstrap.poll_interval_seconds)
        bootstrap.notifier.close()


class SignalHandlerTests(unittest.TestCase):
    def test_sigterm_handler_raises_system_exit(self) -> None:
        with patch("main.signal.signal") as register:
            main.setup_signal_handlers()

        handlers = {call.args[0]: call.args[1] for call in register.call_args_list}
        self.assertIn(signal.SIGTERM, handlers)

        with self.assertRaises(SystemExit) as context:
            handlers[signal.SIGTERM](signal.SIGTERM, None)

        self.assertEqual(0, context.exception.code)


class BuildNotifierTests(unittest.TestCase):
    def test_disabled_notifications_use_null_notifier(self) -> None:
        defaults = default_app_config()
        config = AppConfig(
            state=defaults.state,
            notifications=NotificationSettings(enabled=False),
            display=defaults.display,
            logging=defaults.logging,
            source_file="",
        )
        self.assertIsInstance(main.build_notifier(config), NullNotifier)

    def test_enabled_notifications_use_desktop_notifier(self) -> None:
        notifier = main.build_notifier(default_app_config())
        self.addCleanup(notifier.close)
        self.assertIsInstance(notifier, DesktopNotifier)


if __name__ == "__main__":
    unittest.main()

import argparse
import logging
import signal
import sys
from typing import Optional, Sequence

from app_config import (
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    load_app_config,
)
from pomodoro import Clock, SessionStore, StateStoreError, SystemClock, load_or_init
from runtime import (
    DesktopNotifier,
    KeyboardInput,
    Notifier,
    NullNotifier,
    RuntimeBootstrap,
    RuntimeEngine,
    RuntimeHooks,
    TerminalRenderer,
)
from runtime.messages import render_lines

__version__ = "0.1.0"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: LoggingSettings) -> logging.Logger:
    """Configure logging for the application."""
    level = getattr(logging, settings.level, logging.WARNING)
    if settings.file:
        try:
            logging.basicConfig(
                level=level,
                format=LOG_FORMAT,
                datefmt=LOG_DATE_FORMAT,
                filename=settings.file,
            )
            return logging.getLogger("pomo")
        except OSError as error:
            print(f"Cannot open log file {settings.file}: {error}", file=sys.stderr)

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    return logging.getLogger("pomo")


def setup_signal_handlers() -> None:
    """Turn SIGTERM and SIGHUP into a normal exit so the final save runs."""

    def signal_handler(signum: int, frame) -> None:
        signal_name = signal.Signals(signum).name
        logging.getLogger("pomo").info("%s received, stopping...", signal_name)
        sys.exit(0)

    signal.signal(signal.SIGTERM, signal_handler)
    if hasattr(signal, "SIGHUP"):
        signal.signal(signal.SIGHUP, signal_handler)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pomo",
        description="A simple Pomodoro timer (25 min work, 5 min break).",
        epilog="Keys: p = pause, r = resume, q = quit and save.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="TOML config file (default: $POMO_CONFIG_FILE or ~/.config/pomo/config.toml)",
    )
    parser.add_argument(
        "--state-file",
        metavar="PATH",
        help="Session file to use instead of the configured one (default: ~/.pomo.json)",
    )
    parser.add_argument(
        "--status",
        action="store_true",
        help="Print the current session and exit without starting the timer",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def build_notifier(app_config: AppConfig) -> Notifier:
    settings = app_config.notifications
    if not settings.enabled:
        return NullNotifier(logger=logging.getLogger("notifications"))
    return DesktopNotifier(
        title=settings.title,
        timeout_seconds=settings.timeout_seconds,
        logger=logging.getLogger("notifications"),
    )


def show_status(store: SessionStore, clock: Clock, logger: logging.Logger) -> int:
    """Print the resume-corrected session once and persist the correction."""
    state = load_or_init(store, clock.now(), logger=logging.getLogger("pomodoro"))
    try:
        store.save(state)
    except StateStoreError as error:
        logger.warning("%s", error)
    for line in render_lines(state):
        print(line)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start or resume the pomodoro session."""
    args = parse_args(argv)

    try:
        app_config = load_app_config(args.config)
    except AppConfigurationError as error:
        logger = setup_logging(LoggingSettings())
        logger.error("App configuration error: %s", error)
        return 1

    logger = setup_logging(app_config.logging)
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)

    store = SessionStore(
        args.state_file or app_config.state.file or None,
        logger=logging.getLogger("pomodoro.store"),
    )
    clock = SystemClock()

    if args.status:
        return show_status(store, clock, logger)

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            store=store,
            clock=clock,
            notifier=build_notifier(app_config),
            keyboard=KeyboardInput(),
            renderer=TerminalRenderer(clear_screen=app_config.display.clear_screen),
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
            poll_interval_seconds=app_config.display.poll_interval_seconds,
        )
    )
    return engine.run()


if __name__ == "__main__":
    sys.exit(main())

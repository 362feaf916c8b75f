"""Runtime engine exports."""

from .loop import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from .notifications import DesktopNotifier, Notifier, NullNotifier
from .terminal import KeyboardInput, TerminalRenderer

__all__ = [
    "DesktopNotifier",
    "KeyboardInput",
    "Notifier",
    "NullNotifier",
    "RuntimeBootstrap",
    "RuntimeEngine",
    "RuntimeHooks",
    "TerminalRenderer",
]

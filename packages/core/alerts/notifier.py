from __future__ import annotations

import logging
import sys
from typing import Protocol

log = logging.getLogger(__name__)


class Notifier(Protocol):
    def notify(self, title: str, body: str) -> None:
        ...


class LogNotifier:
    def notify(self, title: str, body: str) -> None:
        log.info("%s: %s", title, body.replace("\n", " | "))


class ToastNotifierWin10:
    def __init__(self) -> None:
        from win10toast import ToastNotifier

        self._toaster = ToastNotifier()

    def notify(self, title: str, body: str) -> None:
        try:
            self._toaster.show_toast(title, body, duration=6, threaded=True)
        except Exception:
            log.exception("Failed to show toast notification")


def default_notifier() -> Notifier:
    if sys.platform == "win32":
        return ToastNotifierWin10()
    return LogNotifier()


class SoundPlayer(Protocol):
    def play(self) -> None:
        ...


class WinBeepSound:
    """Short high beep; silently unavailable off Windows."""

    def __init__(self, frequency_hz: int = 1200, duration_ms: int = 250) -> None:
        self._frequency_hz = frequency_hz
        self._duration_ms = duration_ms

    def play(self) -> None:
        if sys.platform != "win32":
            return
        try:
            import winsound
            winsound.Beep(self._frequency_hz, self._duration_ms)
        except RuntimeError:
            log.exception("Failed to play sound")

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional, Protocol

log = logging.getLogger(__name__)


class Timer(Protocol):
    def start(self) -> None:
        ...

    def cancel(self) -> None:
        ...


TimerFactory = Callable[[int, Callable[[], None]], Timer]


class PeriodicTimer:
    """Calls fn at t=0 and then every interval_ms on a daemon thread until cancelled.

    Fixed rate: the interval is measured from the previous scheduled fire, not
    from the end of the callback. Fires missed while a callback overran are
    skipped rather than run back to back.
    """

    def __init__(self, interval_ms: int, fn: Callable[[], None], name: str = "PeriodicTimer") -> None:
        self._interval_s = interval_ms / 1000.0
        self._fn = fn
        self._stop_evt = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stop_evt.set()

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _run(self) -> None:
        next_at = time.monotonic()
        while not self._stop_evt.is_set():
            try:
                self._fn()
            except Exception:
                log.exception("Timer callback error")

            next_at += self._interval_s
            delay = next_at - time.monotonic()
            if delay < 0:
                next_at = time.monotonic()
                delay = 0.0
            self._stop_evt.wait(delay)

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)


class EventDispatcher:
    """
    Runs submitted deliveries one at a time, in submission order, on a
    single worker thread, so a slow receiver never holds up the caller.
    """

    def __init__(self, name: str = "SwitchEventDispatcher") -> None:
        self._name = name
        self._queue: queue.Queue[Optional[Callable[[], None]]] = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self) -> None:
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return
            self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
            self._thread.start()

    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def submit(self, fn: Callable[[], None]) -> None:
        self._queue.put(fn)

    def flush(self, timeout: Optional[float] = None) -> bool:
        """Wait until everything submitted so far has run. False on timeout."""
        done = threading.Event()
        self._queue.put(done.set)
        return done.wait(timeout)

    def close(self, timeout: float = 2.0) -> None:
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is None:
            return
        self._queue.put(None)
        thread.join(timeout)
        if thread.is_alive():
            log.warning("%s did not exit within %.1fs", self._name, timeout)

    def _run(self) -> None:
        while True:
            fn = self._queue.get()
            if fn is None:
                return
            try:
                fn()
            except Exception:
                log.exception("Event delivery failed")

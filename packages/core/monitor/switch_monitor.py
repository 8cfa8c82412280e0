"""
Background monitor that emits a SwitchEvent whenever the protected app is
not in the foreground.

State machine: IDLE -> RUNNING -> IDLE

Each tick asks the inspector for the foreground app. While the protected app
is away an event is raised on every tick (not only on the transition), each
carrying the time since the previous event. Inspector failures skip the tick.

Every start() opens a new generation. Ticks and queued deliveries carry the
generation they belong to and are discarded once it is stale, so nothing
reaches the receiver after stop() returns even if the timer thread was
mid-tick when stop() was called.
"""

from __future__ import annotations

import logging
import threading
import time
from functools import partial
from typing import Callable, Optional

from .dispatcher import EventDispatcher
from .inspector import ForegroundInspector
from .timer import PeriodicTimer, Timer, TimerFactory
from .types import UNKNOWN_APP, MonitorState, SwitchEvent

log = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 1000


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


def _normalize(app: str) -> str:
    return app.strip().casefold()


def _default_timer(interval_ms: int, fn: Callable[[], None]) -> Timer:
    return PeriodicTimer(interval_ms, fn, name="SwitchMonitor")


class SwitchMonitor:
    def __init__(
        self,
        protected_app: str,
        inspector: ForegroundInspector,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
        dispatcher: Optional[EventDispatcher] = None,
        clock: Optional[Callable[[], int]] = None,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        self._protected_app = protected_app
        self._protected_key = _normalize(protected_app)
        self._inspector = inspector
        self._interval_ms = poll_interval_ms
        self._dispatcher = dispatcher or EventDispatcher()
        self._owns_dispatcher = dispatcher is None
        self._clock = clock or _now_ms
        self._timer_factory = timer_factory or _default_timer

        self._state = MonitorState()
        self._lock = threading.Lock()
        # Held while delivering and while stopping; re-entrant so a receiver may call stop()
        self._dispatch_lock = threading.RLock()
        self._generation = 0
        self._timer: Optional[Timer] = None

        self._event_cb: Optional[Callable[[SwitchEvent], None]] = None

    @property
    def protected_app(self) -> str:
        return self._protected_app

    @property
    def poll_interval_ms(self) -> int:
        return self._interval_ms

    def on_app_switch(self, cb: Callable[[SwitchEvent], None]) -> None:
        with self._lock:
            self._event_cb = cb

    def get_state(self) -> MonitorState:
        with self._lock:
            return MonitorState(
                status=self._state.status,
                last_switch_ms=self._state.last_switch_ms,
                switches_detected=self._state.switches_detected,
                last_inspection_ok=self._state.last_inspection_ok,
            )

    def is_running(self) -> bool:
        with self._lock:
            return self._state.status == "RUNNING"

    def start(self) -> bool:
        with self._lock:
            if self._state.status == "RUNNING":
                return True
            self._state.status = "RUNNING"
            self._generation += 1
            generation = self._generation

            self._dispatcher.start()
            self._timer = self._timer_factory(self._interval_ms, partial(self._tick, generation))
            self._timer.start()

        log.info("Monitoring started for %s every %d ms", self._protected_app, self._interval_ms)
        return True

    def stop(self) -> bool:
        with self._dispatch_lock:
            with self._lock:
                if self._state.status == "IDLE":
                    return True
                self._state.status = "IDLE"
                self._generation += 1
                timer, self._timer = self._timer, None

        if timer is not None:
            timer.cancel()
        log.info("Monitoring stopped")
        return True

    def close(self) -> None:
        self.stop()
        if self._owns_dispatcher:
            self._dispatcher.close()

    def poll_once(self) -> Optional[SwitchEvent]:
        """Run one tick now on the calling thread. Returns the event raised, if any."""
        with self._lock:
            if self._state.status != "RUNNING":
                return None
            generation = self._generation
        return self._tick(generation)

    def _is_current(self, generation: int) -> bool:
        return self._state.status == "RUNNING" and generation == self._generation

    def _matches(self, foreground: Optional[str]) -> bool:
        return foreground is not None and _normalize(foreground) == self._protected_key

    def _tick(self, generation: int) -> Optional[SwitchEvent]:
        with self._lock:
            if not self._is_current(generation):
                return None

        try:
            foreground = self._inspector.current_foreground_app()
        except Exception as e:
            self._note_inspection(False, e)
            return None
        self._note_inspection(True)

        if self._matches(foreground):
            return None

        with self._lock:
            if not self._is_current(generation):
                return None

            now = self._clock()
            last = self._state.last_switch_ms
            duration_ms = 0 if last is None else max(0, int(now - last))
            self._state.last_switch_ms = now
            self._state.switches_detected += 1

            event = SwitchEvent(app_name=foreground or UNKNOWN_APP, duration_ms=duration_ms)
            # Submitted under the lock so queue order matches detection order
            self._dispatcher.submit(partial(self._deliver, generation, event))

        log.debug("Switch detected: %s (previous session %d ms)", event.app_name, duration_ms)
        return event

    def _deliver(self, generation: int, event: SwitchEvent) -> None:
        with self._dispatch_lock:
            with self._lock:
                if not self._is_current(generation):
                    log.debug("Dropping switch event from a stopped session: %s", event)
                    return
                cb = self._event_cb
            if cb:
                cb(event)

    def _note_inspection(self, ok: bool, error: Optional[Exception] = None) -> None:
        with self._lock:
            was_ok = self._state.last_inspection_ok
            self._state.last_inspection_ok = ok

        # Log transitions only, a failing inspector would otherwise log every tick
        if not ok:
            if was_ok:
                log.warning("Foreground inspection failed, skipping ticks until it recovers: %s", error)
            else:
                log.debug("Foreground inspection still failing: %s", error)
        elif not was_ok:
            log.info("Foreground inspection recovered")

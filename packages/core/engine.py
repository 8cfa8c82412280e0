"""
The guard engine: one instance per process, created at startup.

Owns the protection controller and the switch monitor and exposes the
command surface a host calls. Every command answers with a bool and never
raises for a missing surface, a rejected OS call or a failed inspection.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from packages.shared.config import AppConfig

from .monitor.dispatcher import EventDispatcher
from .monitor.foreground import WindowsForegroundInspector, protected_identity
from .monitor.inspector import ForegroundInspector
from .monitor.switch_monitor import SwitchMonitor
from .monitor.timer import TimerFactory
from .monitor.types import MonitorState, SwitchEvent
from .protection.controller import ProtectionController
from .protection.enforcement import EnforcementHandle
from .protection.types import ProtectionState

log = logging.getLogger(__name__)


class GuardEngine:
    def __init__(
        self,
        config: AppConfig,
        inspector: Optional[ForegroundInspector] = None,
        protected_app: Optional[str] = None,
        clock: Optional[Callable[[], int]] = None,
        timer_factory: Optional[TimerFactory] = None,
    ) -> None:
        self._cfg = config
        self._inspector = inspector
        self._protected_app = protected_app
        self._clock = clock
        self._timer_factory = timer_factory

        self._protection = ProtectionController()
        self._dispatcher = EventDispatcher()
        self._monitor: Optional[SwitchMonitor] = None
        self._event_cb: Optional[Callable[[SwitchEvent], None]] = None
        self._lock = threading.Lock()

    def init(self) -> None:
        with self._lock:
            if self._monitor is not None:
                return

            inspector = self._inspector or WindowsForegroundInspector()
            protected_app = self._protected_app or protected_identity(self._cfg.protected_app)

            self._dispatcher.start()
            monitor_cfg = self._cfg.to_monitor_config()
            self._monitor = SwitchMonitor(
                protected_app=protected_app,
                inspector=inspector,
                poll_interval_ms=monitor_cfg["poll_interval_ms"],
                dispatcher=self._dispatcher,
                clock=self._clock,
                timer_factory=self._timer_factory,
            )
            if self._event_cb is not None:
                self._monitor.on_app_switch(self._event_cb)

        log.info("Guard engine initialized, protecting %s", protected_app)

    def shutdown(self) -> None:
        with self._lock:
            monitor, self._monitor = self._monitor, None

        if monitor is not None:
            monitor.stop()
        self._protection.reset()
        self._protection.detach()
        self._dispatcher.close()
        if monitor is not None:
            log.info("Guard engine shut down")

    @property
    def protected_app(self) -> str:
        with self._lock:
            if self._monitor is not None:
                return self._monitor.protected_app
        return self._protected_app or self._cfg.protected_app

    def is_initialized(self) -> bool:
        with self._lock:
            return self._monitor is not None

    # Enforcement surface lifecycle

    def attach_handle(self, handle: EnforcementHandle) -> None:
        self._protection.attach(handle)

    def detach_handle(self) -> None:
        self._protection.detach()

    def on_app_switch(self, cb: Callable[[SwitchEvent], None]) -> None:
        with self._lock:
            self._event_cb = cb
            if self._monitor is not None:
                self._monitor.on_app_switch(cb)

    def get_protection_state(self) -> ProtectionState:
        return self._protection.get_state()

    def get_monitor_state(self) -> MonitorState:
        with self._lock:
            monitor = self._monitor
        return monitor.get_state() if monitor is not None else MonitorState()

    # Commands

    def enable_pinning(self) -> bool:
        return self._protection.enable_pinning()

    def disable_pinning(self) -> bool:
        return self._protection.disable_pinning()

    def enable_screenshot_blocking(self) -> bool:
        return self._protection.enable_screenshot_blocking()

    def disable_screenshot_blocking(self) -> bool:
        return self._protection.disable_screenshot_blocking()

    def enable_recording_detection(self) -> bool:
        return self._protection.enable_recording_detection()

    def disable_recording_detection(self) -> bool:
        return self._protection.disable_recording_detection()

    def start_monitoring(self) -> bool:
        with self._lock:
            monitor = self._monitor
        if monitor is None:
            log.info("Cannot start monitoring: engine not initialized")
            return False
        return monitor.start()

    def stop_monitoring(self) -> bool:
        with self._lock:
            monitor = self._monitor
        if monitor is None:
            return True
        return monitor.stop()

"""
Fail-soft toggling of screen pinning and screenshot blocking.

Enable paths report False when no handle is attached or the OS call fails.
Disable paths always report True so teardown can never be blocked; the
internal flag is only cleared when the OS call actually succeeded.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from .enforcement import EnforcementHandle
from .types import ProtectionState

log = logging.getLogger(__name__)


class ProtectionController:
    def __init__(self, handle: Optional[EnforcementHandle] = None) -> None:
        self._handle = handle
        self._state = ProtectionState()
        self._lock = threading.RLock()

    def attach(self, handle: EnforcementHandle) -> None:
        with self._lock:
            self._handle = handle

    def detach(self) -> None:
        """Drop the handle, unpinning first while it is still usable."""
        with self._lock:
            if self._state.screen_pinned:
                self.disable_pinning()
            self._handle = None

    def has_handle(self) -> bool:
        with self._lock:
            return self._handle is not None

    def get_state(self) -> ProtectionState:
        with self._lock:
            return ProtectionState(
                screen_pinned=self._state.screen_pinned,
                screenshot_blocked=self._state.screenshot_blocked,
            )

    def enable_pinning(self) -> bool:
        with self._lock:
            if self._handle is None:
                log.info("Cannot pin screen: no enforcement handle")
                return False
            try:
                self._handle.set_pinned(True)
            except Exception:
                log.exception("Failed to pin screen")
                return False
            self._state.screen_pinned = True
            return True

    def disable_pinning(self) -> bool:
        with self._lock:
            if not self._state.screen_pinned or self._handle is None:
                return True
            try:
                self._handle.set_pinned(False)
            except Exception:
                log.exception("Failed to unpin screen, leaving flag set")
                return True
            self._state.screen_pinned = False
            return True

    def enable_screenshot_blocking(self) -> bool:
        with self._lock:
            if self._handle is None:
                log.info("Cannot block screenshots: no enforcement handle")
                return False
            try:
                self._handle.set_capture_blocked(True)
            except Exception:
                log.exception("Failed to set capture block")
                return False
            self._state.screenshot_blocked = True
            return True

    def disable_screenshot_blocking(self) -> bool:
        with self._lock:
            if not self._state.screenshot_blocked or self._handle is None:
                return True
            try:
                self._handle.set_capture_blocked(False)
            except Exception:
                log.exception("Failed to clear capture block, leaving flag set")
                return True
            self._state.screenshot_blocked = False
            return True

    # Live recording cannot be told apart from any other capture here, so
    # recording detection is the capture block.
    def enable_recording_detection(self) -> bool:
        return self.enable_screenshot_blocking()

    def disable_recording_detection(self) -> bool:
        return self.disable_screenshot_blocking()

    def reset(self) -> None:
        self.disable_pinning()
        self.disable_screenshot_blocking()

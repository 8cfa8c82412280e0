"""
Enforcement handle backed by a PySide6 top-level window.

Pinning keeps the window full screen and above every other window.
Capture blocking uses SetWindowDisplayAffinity:
  - WDA_EXCLUDEFROMCAPTURE (Windows 10 2004+) removes the window from captures
  - WDA_MONITOR (Windows 7+) is the fallback, the window captures as black
  - WDA_NONE clears either
Changing window flags recreates the native window, so the affinity is
re-applied after every pin/unpin.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from PySide6.QtCore import QRect, Qt
from PySide6.QtWidgets import QWidget

from .enforcement import EnforcementError, EnforcementHandle

log = logging.getLogger(__name__)

WDA_NONE = 0x00000000
WDA_MONITOR = 0x00000001
WDA_EXCLUDEFROMCAPTURE = 0x00000011

if sys.platform == "win32":
    import ctypes
    from ctypes import wintypes

    _user32 = ctypes.windll.user32
    _SetWindowDisplayAffinity = _user32.SetWindowDisplayAffinity
    _SetWindowDisplayAffinity.argtypes = [wintypes.HWND, wintypes.DWORD]
    _SetWindowDisplayAffinity.restype = wintypes.BOOL
else:
    _SetWindowDisplayAffinity = None


def _set_affinity(hwnd: int, mode: int) -> bool:
    if _SetWindowDisplayAffinity is None:
        return False
    return bool(_SetWindowDisplayAffinity(hwnd, mode))


class QtWindowEnforcement(EnforcementHandle):
    """Applies protections to one Qt window. Must be used from the GUI thread."""

    def __init__(self, window: QWidget) -> None:
        self._window = window
        self._saved_flags: Optional[Qt.WindowType] = None
        self._saved_geometry: Optional[QRect] = None
        self._capture_blocked = False

    def _hwnd(self) -> int:
        wid = int(self._window.winId())
        if not wid:
            raise EnforcementError("Window has no native handle")
        return wid

    def set_pinned(self, pinned: bool) -> None:
        w = self._window
        if pinned:
            newly_pinned = self._saved_flags is None
            if newly_pinned:
                self._saved_flags = w.windowFlags()
                self._saved_geometry = w.geometry()
            w.setWindowFlags(self._saved_flags | Qt.WindowType.WindowStaysOnTopHint)
            w.showFullScreen()
            w.raise_()
            w.activateWindow()
            if self._capture_blocked:
                try:
                    self._apply_affinity(True)
                except EnforcementError:
                    # A failed pin must not leave the window pinned
                    if newly_pinned:
                        self._restore_window()
                    raise
        else:
            if self._saved_flags is None:
                return
            self._restore_window()
            if self._capture_blocked:
                self._apply_affinity(True)
        log.info("Screen %s", "pinned" if pinned else "unpinned")

    def _restore_window(self) -> None:
        w = self._window
        w.setWindowFlags(self._saved_flags)
        w.showNormal()
        if self._saved_geometry is not None:
            w.setGeometry(self._saved_geometry)
        self._saved_flags = None
        self._saved_geometry = None

    def set_capture_blocked(self, blocked: bool) -> None:
        self._apply_affinity(blocked)
        self._capture_blocked = blocked
        log.info("Capture block %s", "set" if blocked else "cleared")

    def _apply_affinity(self, blocked: bool) -> None:
        if _SetWindowDisplayAffinity is None:
            raise EnforcementError("Capture blocking is only available on Windows")

        hwnd = self._hwnd()
        if not blocked:
            if not _set_affinity(hwnd, WDA_NONE):
                raise EnforcementError(f"SetWindowDisplayAffinity(WDA_NONE) failed for hwnd {hwnd}")
            return

        # Try strongest; fall back to MONITOR on older builds
        if _set_affinity(hwnd, WDA_EXCLUDEFROMCAPTURE):
            return
        log.debug("WDA_EXCLUDEFROMCAPTURE unsupported, falling back to WDA_MONITOR")
        if not _set_affinity(hwnd, WDA_MONITOR):
            raise EnforcementError(f"SetWindowDisplayAffinity failed for hwnd {hwnd}")

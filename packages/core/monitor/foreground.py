"""
Windows foreground inspector: GetForegroundWindow -> owning PID -> process name.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import psutil

from .inspector import ForegroundInspector, InspectionError

log = logging.getLogger(__name__)

if sys.platform == "win32":
    import ctypes
    from ctypes import wintypes

    _user32 = ctypes.windll.user32

    _GetForegroundWindow = _user32.GetForegroundWindow
    _GetForegroundWindow.argtypes = []
    _GetForegroundWindow.restype = wintypes.HWND

    _GetWindowThreadProcessId = _user32.GetWindowThreadProcessId
    _GetWindowThreadProcessId.argtypes = [wintypes.HWND, ctypes.POINTER(wintypes.DWORD)]
    _GetWindowThreadProcessId.restype = wintypes.DWORD

    def _foreground_pid() -> Optional[int]:
        hwnd = _GetForegroundWindow()
        if not hwnd:
            return None
        pid = wintypes.DWORD()
        _GetWindowThreadProcessId(hwnd, ctypes.byref(pid))
        return int(pid.value) or None

else:  # pragma: no cover
    _foreground_pid = None


def current_process_name() -> str:
    return psutil.Process().name()


def protected_identity(configured: str = "") -> str:
    """The configured app name, or the name of this process when none is set."""
    name = configured.strip()
    return name or current_process_name()


class WindowsForegroundInspector(ForegroundInspector):
    """Reports the executable name owning the foreground window, e.g. "chrome.exe"."""

    def current_foreground_app(self) -> Optional[str]:
        if _foreground_pid is None:
            raise InspectionError(f"Foreground inspection is not supported on {sys.platform}")

        try:
            pid = _foreground_pid()
        except OSError as e:
            raise InspectionError(f"Could not read foreground window: {e}") from e
        if pid is None:
            return None

        try:
            return psutil.Process(pid).name()
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            raise InspectionError(f"Could not read process {pid}: {e}") from e

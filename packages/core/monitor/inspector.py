from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class InspectionError(RuntimeError):
    """The foreground application could not be read (permissions, transient OS error)."""


class ForegroundInspector(ABC):
    """Interface for reporting which application currently owns the screen."""

    @abstractmethod
    def current_foreground_app(self) -> Optional[str]:
        """
        Return the identity of the foreground application, or None when no
        application can be identified. Raises InspectionError on failure.
        Called from the monitor's timer thread.
        """
        ...

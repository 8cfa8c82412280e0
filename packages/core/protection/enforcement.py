from __future__ import annotations

from abc import ABC, abstractmethod


class EnforcementError(RuntimeError):
    """The OS rejected a pin/unpin or capture-block request."""


class EnforcementHandle(ABC):
    """Interface to the OS surface that protections are applied to."""

    @abstractmethod
    def set_pinned(self, pinned: bool) -> None:
        """Pin or unpin the surface. Raises EnforcementError on failure."""
        ...

    @abstractmethod
    def set_capture_blocked(self, blocked: bool) -> None:
        """Set or clear the capture-block flag. Raises EnforcementError on failure."""
        ...

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ProtectionState:
    """Last successfully requested state of each protection."""
    screen_pinned: bool = False
    screenshot_blocked: bool = False

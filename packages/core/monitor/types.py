from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

MonitorStatus = Literal["IDLE", "RUNNING"]

UNKNOWN_APP = "Unknown App"


@dataclass(frozen=True)
class SwitchEvent:
    """The user left the protected app; duration_ms is the length of the previous session."""
    app_name: str
    duration_ms: int

    def to_dict(self) -> dict:
        return {"appName": self.app_name, "duration": self.duration_ms}


@dataclass
class MonitorState:
    status: MonitorStatus = "IDLE"
    last_switch_ms: Optional[int] = None
    switches_detected: int = 0
    last_inspection_ok: bool = True

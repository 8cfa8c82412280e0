from __future__ import annotations

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    # Empty means "the process running the host"
    protected_app: str = ""
    poll_interval_ms: int = Field(default=1000, ge=100)
    notify_on_switch: bool = True
    block_screenshots_on_start: bool = False
    sound_enabled: bool = False

    def to_monitor_config(self) -> dict:
        return {
            "protected_app": self.protected_app,
            "poll_interval_ms": self.poll_interval_ms,
        }

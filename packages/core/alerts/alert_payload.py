from __future__ import annotations

from packages.core.monitor.types import SwitchEvent


def format_duration(duration_ms: int) -> str:
    seconds = duration_ms // 1000
    if seconds < 60:
        return f"{seconds}s"
    minutes, seconds = divmod(seconds, 60)
    return f"{minutes}m {seconds:02d}s"


def build_switch_alert(event: SwitchEvent, protected_app: str) -> dict:
    title = "App Guard"
    if event.duration_ms:
        session = f"previous session {format_duration(event.duration_ms)}"
    else:
        session = "first switch this session"
    body_lines = [f"You left {protected_app}", f"Now in front: {event.app_name}", f"({session})"]
    return {"title": title, "body": "\n".join(body_lines)}

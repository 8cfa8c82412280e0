"""
Reusable widgets for the App Guard window.
"""

from __future__ import annotations

from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout


class Card(QFrame):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("Card")
        self.layout = QVBoxLayout(self)
        self.layout.setContentsMargins(16, 16, 16, 16)
        self.layout.setSpacing(12)


class PrimaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("PrimaryButton")


class SecondaryButton(QPushButton):
    def __init__(self, text: str = "", parent=None):
        super().__init__(text, parent)
        self.setObjectName("SecondaryButton")


class StatusPill(QLabel):
    """Rounded status label; kind is "idle", "active" or "alert"."""

    _OBJECT_NAMES = {
        "idle": "StatusPill",
        "active": "StatusPillActive",
        "alert": "StatusPillAlert",
    }

    def __init__(self, text: str = "", kind: str = "idle", parent=None):
        super().__init__(text, parent)
        self.set_kind(kind)

    def set_kind(self, kind: str) -> None:
        self.setObjectName(self._OBJECT_NAMES.get(kind, "StatusPill"))
        # Re-polish so the object-name selector takes effect
        self.style().unpolish(self)
        self.style().polish(self)

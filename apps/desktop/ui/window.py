"""
Main window: arms/disarms protections and lists app switch events.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from packages.shared.config import AppConfig
from packages.shared.store import ConfigStore
from packages.core.engine import GuardEngine
from packages.core.monitor.types import SwitchEvent
from packages.core.protection.window_enforcement import QtWindowEnforcement
from packages.core.alerts.alert_payload import build_switch_alert, format_duration
from packages.core.alerts.notifier import Notifier, SoundPlayer, WinBeepSound, default_notifier

from .theme import Theme
from .components import Card, PrimaryButton, SecondaryButton, StatusPill

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("App Guard")
        self.resize(900, 640)
        self.setMinimumSize(640, 480)

        self.theme = Theme()

        self.store = ConfigStore()
        self.cfg: AppConfig = self.store.load()

        self.notifier: Notifier = default_notifier()
        self.sound: SoundPlayer = WinBeepSound()

        self.engine = GuardEngine(config=self.cfg)
        self.engine.on_app_switch(self._on_app_switch)
        self.engine.init()
        self._handle_attached = False

        self._build_ui()
        self.setStyleSheet(self.theme.get_stylesheet())
        self._refresh_status()

        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._refresh_status)
        self._status_timer.start(800)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if self._handle_attached:
            return
        # The native window exists from the first show on
        self.engine.attach_handle(QtWindowEnforcement(self))
        self._handle_attached = True
        if self.cfg.block_screenshots_on_start:
            self._run_command("Block screenshots", self.engine.enable_screenshot_blocking)
            self._sync_toggles()

    def closeEvent(self, event) -> None:
        self._status_timer.stop()
        self.engine.shutdown()
        super().closeEvent(event)

    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        main_layout = QVBoxLayout(root)
        main_layout.setContentsMargins(24, 24, 24, 24)
        main_layout.setSpacing(20)

        title = QLabel("App Guard")
        title.setObjectName("TitleLabel")
        main_layout.addWidget(title)

        subtitle = QLabel(f"Protecting: {self.engine.protected_app}")
        subtitle.setObjectName("HintLabel")
        main_layout.addWidget(subtitle)

        row = QHBoxLayout()
        row.setSpacing(20)
        row.addWidget(self._build_protection_card(), 1)
        row.addWidget(self._build_monitor_card(), 1)
        main_layout.addLayout(row)

        events_card = Card()
        events_label = QLabel("Activity")
        events_label.setObjectName("SectionLabel")
        events_card.layout.addWidget(events_label)
        self.events = QListWidget()
        events_card.layout.addWidget(self.events, 1)
        main_layout.addWidget(events_card, 1)

    def _build_protection_card(self) -> Card:
        card = Card()
        label = QLabel("Protections")
        label.setObjectName("SectionLabel")
        card.layout.addWidget(label)

        self.chk_pin = QCheckBox("Pin screen (full screen, always on top)")
        self.chk_pin.toggled.connect(self._toggle_pinning)
        card.layout.addWidget(self.chk_pin)

        self.chk_screenshots = QCheckBox("Block screenshots")
        self.chk_screenshots.toggled.connect(self._toggle_screenshots)
        card.layout.addWidget(self.chk_screenshots)

        self.chk_recording = QCheckBox("Recording detection")
        self.chk_recording.toggled.connect(self._toggle_recording)
        card.layout.addWidget(self.chk_recording)

        hint = QLabel("Recording detection uses the screenshot block.")
        hint.setObjectName("HintLabel")
        card.layout.addWidget(hint)
        card.layout.addStretch()
        return card

    def _build_monitor_card(self) -> Card:
        card = Card()
        label = QLabel("App switch monitoring")
        label.setObjectName("SectionLabel")
        card.layout.addWidget(label)

        pills = QHBoxLayout()
        self.status_pill = StatusPill("IDLE")
        pills.addWidget(self.status_pill)
        self.switch_pill = StatusPill("No switches")
        pills.addWidget(self.switch_pill)
        pills.addStretch()
        card.layout.addLayout(pills)

        buttons = QHBoxLayout()
        self.btn_start = PrimaryButton("Start Monitoring")
        self.btn_start.clicked.connect(self._start_monitoring)
        buttons.addWidget(self.btn_start)
        self.btn_stop = SecondaryButton("Stop")
        self.btn_stop.clicked.connect(self._stop_monitoring)
        buttons.addWidget(self.btn_stop)
        buttons.addStretch()
        card.layout.addLayout(buttons)

        hint = QLabel(f"Checks the foreground app every {self.cfg.poll_interval_ms} ms.")
        hint.setObjectName("HintLabel")
        card.layout.addWidget(hint)
        card.layout.addStretch()
        return card

    def _append_event(self, line: str) -> None:
        stamp = time.strftime("%H:%M:%S", time.localtime())
        self.events.insertItem(0, QListWidgetItem(f"{stamp}  {line}"))

    def _run_command(self, name: str, command: Callable[[], bool]) -> bool:
        ok = command()
        self._append_event(f"{name}: {'ok' if ok else 'FAILED'}")
        return ok

    def _sync_toggles(self) -> None:
        state = self.engine.get_protection_state()
        for chk, value in (
            (self.chk_pin, state.screen_pinned),
            (self.chk_screenshots, state.screenshot_blocked),
            (self.chk_recording, state.screenshot_blocked),
        ):
            chk.blockSignals(True)
            chk.setChecked(value)
            chk.blockSignals(False)

    def _toggle_pinning(self, checked: bool) -> None:
        if checked:
            self._run_command("Pin screen", self.engine.enable_pinning)
        else:
            self._run_command("Unpin screen", self.engine.disable_pinning)
        self._sync_toggles()

    def _toggle_screenshots(self, checked: bool) -> None:
        if checked:
            self._run_command("Block screenshots", self.engine.enable_screenshot_blocking)
        else:
            self._run_command("Allow screenshots", self.engine.disable_screenshot_blocking)
        self._sync_toggles()

    def _toggle_recording(self, checked: bool) -> None:
        if checked:
            self._run_command("Recording detection on", self.engine.enable_recording_detection)
        else:
            self._run_command("Recording detection off", self.engine.disable_recording_detection)
        self._sync_toggles()

    def _start_monitoring(self) -> None:
        self._run_command("Start monitoring", self.engine.start_monitoring)
        self._refresh_status()

    def _stop_monitoring(self) -> None:
        self._run_command("Stop monitoring", self.engine.stop_monitoring)
        self._refresh_status()

    def _refresh_status(self) -> None:
        state = self.engine.get_monitor_state()
        is_running = state.status == "RUNNING"

        self.status_pill.setText(state.status)
        self.status_pill.set_kind("active" if is_running else "idle")
        self.btn_start.setEnabled(not is_running)
        self.btn_stop.setEnabled(is_running)

        if not state.last_inspection_ok:
            self.switch_pill.setText("Inspector unavailable")
            self.switch_pill.set_kind("alert")
        elif state.switches_detected:
            self.switch_pill.setText(f"{state.switches_detected} switches")
            self.switch_pill.set_kind("alert")
        else:
            self.switch_pill.setText("No switches")
            self.switch_pill.set_kind("idle")

    def _on_app_switch(self, event: SwitchEvent) -> None:
        """Called on the dispatcher thread."""
        def handle() -> None:
            if event.duration_ms:
                self._append_event(
                    f"SWITCH: {event.app_name} (previous session {format_duration(event.duration_ms)})"
                )
            else:
                self._append_event(f"SWITCH: {event.app_name}")
            if self.cfg.notify_on_switch:
                payload = build_switch_alert(event, self.engine.protected_app)
                self.notifier.notify(payload["title"], payload["body"])
            if self.cfg.sound_enabled:
                self.sound.play()

        QTimer.singleShot(0, handle)

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QRect, Qt

import packages.core.protection.window_enforcement as we
from packages.core.protection.controller import ProtectionController
from packages.core.protection.enforcement import EnforcementError


class FakeAffinity:
    """Stands in for user32.SetWindowDisplayAffinity."""

    def __init__(self, *results):
        self.results = list(results) or [True]
        self.calls = []

    def __call__(self, hwnd, mode):
        self.calls.append((hwnd, mode))
        return self.results.pop(0) if len(self.results) > 1 else self.results[0]


@pytest.fixture
def window():
    w = MagicMock()
    w.winId.return_value = 42
    w.windowFlags.return_value = Qt.WindowType.Window
    w.geometry.return_value = QRect(10, 20, 800, 600)
    return w


@pytest.fixture
def affinity(monkeypatch):
    fake = FakeAffinity()
    monkeypatch.setattr(we, "_SetWindowDisplayAffinity", fake)
    return fake


class TestPinning:
    def test_pin_goes_full_screen_on_top(self, window):
        handle = we.QtWindowEnforcement(window)

        handle.set_pinned(True)

        window.setWindowFlags.assert_called_once_with(
            Qt.WindowType.Window | Qt.WindowType.WindowStaysOnTopHint
        )
        window.showFullScreen.assert_called_once()

    def test_unpin_restores_window(self, window):
        handle = we.QtWindowEnforcement(window)
        handle.set_pinned(True)

        handle.set_pinned(False)

        window.setWindowFlags.assert_called_with(Qt.WindowType.Window)
        window.showNormal.assert_called_once()
        window.setGeometry.assert_called_once_with(QRect(10, 20, 800, 600))

    def test_unpin_without_pin_is_noop(self, window):
        we.QtWindowEnforcement(window).set_pinned(False)

        window.setWindowFlags.assert_not_called()
        window.showNormal.assert_not_called()

    def test_pin_reapplies_capture_block(self, window, affinity):
        handle = we.QtWindowEnforcement(window)
        handle.set_capture_blocked(True)

        handle.set_pinned(True)

        assert affinity.calls == [(42, we.WDA_EXCLUDEFROMCAPTURE), (42, we.WDA_EXCLUDEFROMCAPTURE)]


class TestCaptureBlock:
    def test_block_uses_exclude_from_capture(self, window, affinity):
        we.QtWindowEnforcement(window).set_capture_blocked(True)

        assert affinity.calls == [(42, we.WDA_EXCLUDEFROMCAPTURE)]

    def test_block_falls_back_to_monitor(self, window, monkeypatch):
        fake = FakeAffinity(False, True)
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", fake)

        we.QtWindowEnforcement(window).set_capture_blocked(True)

        assert fake.calls == [(42, we.WDA_EXCLUDEFROMCAPTURE), (42, we.WDA_MONITOR)]

    def test_block_fails_when_os_refuses(self, window, monkeypatch):
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", FakeAffinity(False))

        with pytest.raises(EnforcementError):
            we.QtWindowEnforcement(window).set_capture_blocked(True)

    def test_clear_uses_wda_none(self, window, affinity):
        we.QtWindowEnforcement(window).set_capture_blocked(False)

        assert affinity.calls == [(42, we.WDA_NONE)]

    def test_clear_failure_raises(self, window, monkeypatch):
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", FakeAffinity(False))

        with pytest.raises(EnforcementError):
            we.QtWindowEnforcement(window).set_capture_blocked(False)

    def test_window_without_native_handle(self, window, affinity):
        window.winId.return_value = 0

        with pytest.raises(EnforcementError, match="native handle"):
            we.QtWindowEnforcement(window).set_capture_blocked(True)
        assert affinity.calls == []

    def test_unavailable_off_windows(self, window, monkeypatch):
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", None)

        with pytest.raises(EnforcementError, match="only available on Windows"):
            we.QtWindowEnforcement(window).set_capture_blocked(True)


class TestPinRollback:
    """A pin that cannot keep the capture block leaves the window as it was"""

    def test_failed_reapply_restores_window(self, window, monkeypatch):
        # Given: capture block set, then the OS refuses every further affinity call
        fake = FakeAffinity(True, False)
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", fake)
        handle = we.QtWindowEnforcement(window)
        handle.set_capture_blocked(True)

        # When: pinning
        with pytest.raises(EnforcementError):
            handle.set_pinned(True)

        # Then: the window is back to its normal flags and geometry
        window.setWindowFlags.assert_called_with(Qt.WindowType.Window)
        window.showNormal.assert_called_once()
        window.setGeometry.assert_called_once_with(QRect(10, 20, 800, 600))

    def test_later_pin_starts_from_original_flags(self, window, monkeypatch):
        fake = FakeAffinity(True, False, False, True)
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", fake)
        handle = we.QtWindowEnforcement(window)
        handle.set_capture_blocked(True)
        with pytest.raises(EnforcementError):
            handle.set_pinned(True)

        window.windowFlags.return_value = Qt.WindowType.Dialog
        handle.set_pinned(True)
        handle.set_pinned(False)

        window.setWindowFlags.assert_called_with(Qt.WindowType.Dialog)

    def test_controller_state_matches_window(self, window, monkeypatch):
        fake = FakeAffinity(True, False)
        monkeypatch.setattr(we, "_SetWindowDisplayAffinity", fake)
        controller = ProtectionController(we.QtWindowEnforcement(window))
        assert controller.enable_screenshot_blocking() is True

        assert controller.enable_pinning() is False
        assert controller.get_state().screen_pinned is False
        window.showNormal.assert_called_once()

        # Teardown has nothing left to undo
        assert controller.disable_pinning() is True
        window.showNormal.assert_called_once()

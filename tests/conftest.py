import pytest
from typing import Callable, Optional

from packages.core.monitor.inspector import ForegroundInspector, InspectionError
from packages.core.protection.enforcement import EnforcementError, EnforcementHandle


class ScriptedInspector(ForegroundInspector):
    """Returns queued results in order, repeating the last one; exceptions are raised."""

    def __init__(self, *results):
        self.results = list(results) or [None]
        self.calls = 0

    def push(self, *results):
        self.results.extend(results)

    def current_foreground_app(self) -> Optional[str]:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class FakeClock:
    def __init__(self, now_ms: int = 0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def set(self, now_ms: int) -> None:
        self.now_ms = now_ms


class ManualTimer:
    def __init__(self, interval_ms: int, fn: Callable[[], None]):
        self.interval_ms = interval_ms
        self.fn = fn
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        # Like a real timer thread that was already mid-tick, fires even after cancel
        self.fn()


class ManualTimerFactory:
    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, interval_ms: int, fn: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval_ms, fn)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> ManualTimer:
        return self.timers[-1]


class ManualDispatcher:
    """Holds deliveries until run_pending() is called."""

    def __init__(self):
        self.pending: list[Callable[[], None]] = []
        self.started = False

    def start(self) -> None:
        self.started = True

    def submit(self, fn: Callable[[], None]) -> None:
        self.pending.append(fn)

    def run_pending(self) -> None:
        pending, self.pending = self.pending, []
        for fn in pending:
            fn()

    def close(self) -> None:
        self.started = False


class RecordingHandle(EnforcementHandle):
    def __init__(self):
        self.calls: list[tuple[str, bool]] = []
        self.fail_pin = False
        self.fail_capture = False

    def set_pinned(self, pinned: bool) -> None:
        self.calls.append(("pinned", pinned))
        if self.fail_pin:
            raise EnforcementError("lock task refused")

    def set_capture_blocked(self, blocked: bool) -> None:
        self.calls.append(("capture_blocked", blocked))
        if self.fail_capture:
            raise EnforcementError("display affinity refused")


@pytest.fixture
def inspector():
    return ScriptedInspector("game.exe")


@pytest.fixture
def clock():
    return FakeClock(1000)


@pytest.fixture
def timers():
    return ManualTimerFactory()


@pytest.fixture
def dispatcher():
    return ManualDispatcher()


@pytest.fixture
def handle():
    return RecordingHandle()


@pytest.fixture
def inspection_error():
    return InspectionError("access denied")


@pytest.fixture(autouse=True)
def isolated_app_data(tmp_path, monkeypatch):
    """Keep config and logs out of the real APPDATA."""
    monkeypatch.setenv("APPDATA", str(tmp_path))
    monkeypatch.delenv("APP_GUARD_HOME", raising=False)
    return tmp_path

import threading

import pytest

from packages.core.monitor.dispatcher import EventDispatcher


@pytest.fixture
def running_dispatcher():
    d = EventDispatcher(name="TestDispatcher")
    d.start()
    yield d
    d.close()


class TestEventDispatcher:
    def test_runs_in_submission_order(self, running_dispatcher):
        seen = []
        for i in range(20):
            running_dispatcher.submit(lambda i=i: seen.append(i))

        assert running_dispatcher.flush(timeout=2.0)
        assert seen == list(range(20))

    def test_runs_on_worker_thread(self, running_dispatcher):
        names = []
        running_dispatcher.submit(lambda: names.append(threading.current_thread().name))

        assert running_dispatcher.flush(timeout=2.0)
        assert names == ["TestDispatcher"]

    def test_failing_delivery_does_not_stop_worker(self, running_dispatcher, caplog):
        seen = []

        def boom():
            raise ValueError("receiver failed")

        running_dispatcher.submit(boom)
        running_dispatcher.submit(lambda: seen.append("after"))

        assert running_dispatcher.flush(timeout=2.0)
        assert seen == ["after"]
        assert "Event delivery failed" in caplog.text

    def test_start_is_idempotent(self, running_dispatcher):
        running_dispatcher.start()
        assert running_dispatcher.is_running()

    def test_close_then_restart(self):
        d = EventDispatcher()
        d.start()
        d.close()
        assert not d.is_running()

        seen = []
        d.start()
        try:
            d.submit(lambda: seen.append(1))
            assert d.flush(timeout=2.0)
        finally:
            d.close()
        assert seen == [1]

    def test_close_without_start_is_noop(self):
        EventDispatcher().close()

    def test_flush_times_out_when_not_started(self):
        assert EventDispatcher().flush(timeout=0.05) is False

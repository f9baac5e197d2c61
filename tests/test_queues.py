"""Tests for the serial queue and the write queue."""

import threading
import time
from unittest.mock import Mock

import pytest

from ledctl.core import OperationCancelled, SerialQueue, WriteQueue
from ledctl.exceptions import AttributeIOError, DeviceClosedError


class RecordingQueue(SerialQueue):
    """Queue whose items are callables run by the worker."""

    def __init__(self):
        super().__init__("test")

    def _execute(self, item):
        item.payload(item)


@pytest.fixture
def queue():
    q = RecordingQueue()
    yield q
    q.close()


@pytest.mark.unit
class TestSerialQueue:
    """Test ordering, failure isolation and cancellation."""

    def test_items_run_and_report_in_order(self, queue):
        """Callbacks fire in submission order, each exactly once."""
        reported = []

        for i in range(5):
            queue.push(lambda item: None, lambda error, i=i: reported.append((i, error)))

        assert queue.join(timeout=2)
        assert reported == [(i, None) for i in range(5)]

    def test_one_item_at_a_time(self, queue):
        """The next item starts only after the previous one finished."""
        running = []
        overlaps = []

        def work(item):
            if running:
                overlaps.append(True)
            running.append(item)
            time.sleep(0.01)
            running.remove(item)

        for _ in range(5):
            queue.push(work)

        assert queue.join(timeout=2)
        assert overlaps == []

    def test_failure_reported_and_queue_continues(self, queue, make_recorder):
        """A raising item reports its error; later items still run."""
        failed, succeeded = make_recorder(), make_recorder()

        def boom(item):
            raise ValueError("boom")

        queue.push(boom, failed)
        queue.push(lambda item: None, succeeded)

        assert queue.join(timeout=2)
        assert isinstance(failed.error, ValueError)
        assert succeeded.calls == [None]

    def test_missing_callback_escalates_to_error_log(self, queue, caplog):
        """Failures without a callback are logged as unhandled."""
        def boom(item):
            raise ValueError("nobody listens")

        queue.push(boom)
        assert queue.join(timeout=2)

        assert any(
            r.levelname == "ERROR" and "nobody listens" in r.getMessage()
            for r in caplog.records
        )

    def test_raising_callback_does_not_kill_worker(self, queue, recorder):
        def bad_callback(error):
            raise RuntimeError("callback bug")

        queue.push(lambda item: None, bad_callback)
        queue.push(lambda item: None, recorder)

        assert queue.join(timeout=2)
        assert recorder.calls == [None]

    def test_kill_drops_pending_without_callbacks(self, queue, make_recorder):
        """kill() discards pending items; the active one still completes."""
        release = threading.Event()
        started = threading.Event()
        active, pending = make_recorder(), make_recorder()

        def blocker(item):
            started.set()
            release.wait(2)

        queue.push(blocker, active)
        queue.push(lambda item: None, pending)
        assert started.wait(2)

        assert queue.kill() == 1
        assert queue.pending_count == 0
        release.set()

        assert queue.join(timeout=2)
        assert active.calls == [None]
        assert pending.calls == []

    def test_cancelled_item_does_not_report(self, queue, recorder):
        """An item that raises OperationCancelled ends silently."""
        started = threading.Event()
        release = threading.Event()

        def cancellable(item):
            started.set()
            release.wait(2)
            if queue.is_cancelled(item):
                raise OperationCancelled()

        queue.push(cancellable, recorder)
        assert started.wait(2)
        queue.kill()
        release.set()

        assert queue.join(timeout=2)
        assert recorder.calls == []

    def test_items_after_kill_run_normally(self, queue, recorder):
        queue.kill()
        queue.push(lambda item: None, recorder)

        assert queue.join(timeout=2)
        assert recorder.calls == [None]

    def test_push_after_close_raises(self):
        q = RecordingQueue()
        q.close()

        assert q.is_closed
        with pytest.raises(DeviceClosedError):
            q.push(lambda item: None)

    def test_join_from_worker_thread_raises(self, queue, recorder):
        errors = []

        def joins_itself(item):
            try:
                queue.join()
            except RuntimeError as e:
                errors.append(e)

        queue.push(joins_itself, recorder)

        assert queue.join(timeout=2)
        assert len(errors) == 1

    def test_idle_state(self, queue):
        assert queue.is_idle
        queue.push(lambda item: time.sleep(0.05))
        assert not queue.is_idle
        assert queue.join(timeout=2)
        assert queue.is_idle


@pytest.mark.unit
class TestWriteQueue:
    """Test attribute writes through the queue."""

    def test_writes_are_ordered_even_if_first_is_slower(self, tmp_path):
        """A completes before B although A's write takes longer."""
        order = []

        def slow_write(location, attribute, value):
            if value == "A":
                time.sleep(0.1)
            order.append(value)

        store = Mock()
        store.write.side_effect = slow_write
        queue = WriteQueue(tmp_path, store)

        queue.enqueue("brightness", "A", lambda error: order.append("A done"))
        queue.enqueue("brightness", "B", lambda error: order.append("B done"))

        assert queue.join(timeout=2)
        queue.close()
        assert order == ["A", "A done", "B", "B done"]

    def test_write_failure_does_not_abort_later_writes(self, tmp_path, make_recorder):
        store = Mock()
        store.write.side_effect = [AttributeIOError(tmp_path, "brightness", "write", "EACCES"), None]
        queue = WriteQueue(tmp_path, store)
        failed, succeeded = make_recorder(), make_recorder()

        queue.enqueue("brightness", 1, failed)
        queue.enqueue("brightness", 2, succeeded)

        assert queue.join(timeout=2)
        queue.close()
        assert isinstance(failed.error, AttributeIOError)
        assert succeeded.calls == [None]
        assert store.write.call_count == 2

    def test_writes_reach_store(self, tmp_path):
        store = Mock()
        queue = WriteQueue(tmp_path, store)

        queue.enqueue("trigger", "timer")

        assert queue.join(timeout=2)
        queue.close()
        store.write.assert_called_once_with(tmp_path, "trigger", "timer")

"""Single-concurrency ordered work queue.

A SerialQueue holds an ordered buffer of pending items plus one active
slot. A daemon worker thread takes the next item only after the previous
one has completed, runs it, and fires its completion callback. Items
therefore start, finish and report strictly in submission order.

``kill()`` empties the buffer without firing any discarded callback. The
active item is not interrupted; subclasses can ask ``is_cancelled()``
to stop between steps and raise ``OperationCancelled``, in which case the
item ends without a callback.
"""

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, Optional, TypeVar

from ledctl.exceptions import DeviceClosedError, escalate_unhandled

from .completion import Completion, invoke

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationCancelled(Exception):
    """The active item was cancelled by kill() or close() and must not report."""


@dataclass
class QueueItem(Generic[T]):
    """One unit of queued work."""

    payload: T
    on_done: Completion
    generation: int
    enqueued_at: float = field(default_factory=time.monotonic)


class SerialQueue(Generic[T]):
    """
    Ordered executor running one item at a time.

    Subclasses implement ``_execute``; raising from it reports the
    exception to the item's callback, returning normally reports success.

    Threading:
        push/kill/join/close are safe to call from any thread. Callbacks run
        on the worker thread, so they must not call ``join()`` on the same
        queue.
    """

    def __init__(self, name: str):
        """
        Initialize the queue.

        Args:
            name: Queue name used in logs and thread names
        """
        self.name = name
        self._pending: deque[QueueItem[T]] = deque()
        self._active: Optional[QueueItem[T]] = None
        self._condition = threading.Condition()
        self._generation = 0
        self._closed = False
        self._worker: Optional[threading.Thread] = None

    def _execute(self, item: QueueItem[T]) -> None:
        raise NotImplementedError

    def push(self, payload: T, on_done: Optional[Completion] = None) -> None:
        """
        Append an item.

        Args:
            payload: Work description passed to ``_execute``
            on_done: Completion; if None, failures are logged as unhandled

        Raises:
            DeviceClosedError: If the queue was closed
        """
        self.push_many([(payload, on_done)])

    def push_many(self, entries: Iterable[tuple[T, Optional[Completion]]]) -> None:
        """Append several items atomically, keeping their relative order."""
        with self._condition:
            if self._closed:
                raise DeviceClosedError(self.name)
            for payload, on_done in entries:
                callback = on_done or escalate_unhandled(f"{self.name} operation")
                self._pending.append(QueueItem(payload, callback, self._generation))
            self._ensure_worker()
            self._condition.notify_all()

    def kill(self) -> int:
        """
        Drop every pending item without firing its callback.

        Returns:
            Number of discarded items
        """
        with self._condition:
            dropped = len(self._pending)
            self._pending.clear()
            self._generation += 1
            self._condition.notify_all()

        if dropped:
            logger.debug(f"{self.name}: discarded {dropped} pending item(s)")
        return dropped

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until no item is pending or running.

        Returns:
            True if the queue became idle, False on timeout
        """
        if threading.current_thread() is self._worker:
            raise RuntimeError(f"{self.name}: join() called from its own worker thread")

        with self._condition:
            return self._condition.wait_for(self._idle, timeout)

    def close(self, timeout: float = 1.0) -> None:
        """Kill pending work and stop the worker thread."""
        self.kill()
        with self._condition:
            self._closed = True
            self._condition.notify_all()
            worker = self._worker

        if worker and worker.is_alive() and worker is not threading.current_thread():
            worker.join(timeout)
        logger.debug(f"{self.name}: closed")

    def is_cancelled(self, item: QueueItem[Any]) -> bool:
        """Check whether kill() or close() happened after the item was queued."""
        with self._condition:
            return self._cancelled(item)

    @property
    def pending_count(self) -> int:
        with self._condition:
            return len(self._pending)

    @property
    def is_idle(self) -> bool:
        with self._condition:
            return self._idle()

    @property
    def is_closed(self) -> bool:
        return self._closed

    def _idle(self) -> bool:
        return not self._pending and self._active is None

    def _cancelled(self, item: QueueItem[Any]) -> bool:
        # Caller holds self._condition
        return item.generation != self._generation or self._closed

    def _ensure_worker(self) -> None:
        # Caller holds self._condition
        if self._worker is None or not self._worker.is_alive():
            self._worker = threading.Thread(target=self._run, name=f"ledctl-{self.name}", daemon=True)
            self._worker.start()

    def _run(self) -> None:
        logger.debug(f"{self.name}: worker started")

        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._pending or self._closed)
                if not self._pending:
                    logger.debug(f"{self.name}: worker stopped")
                    return
                item = self._pending.popleft()
                self._active = item

            error: Optional[BaseException] = None
            cancelled = False
            try:
                self._execute(item)
            except OperationCancelled:
                cancelled = True
            except Exception as e:
                error = e

            if cancelled:
                logger.debug(f"{self.name}: active item cancelled")
            else:
                invoke(item.on_done, error, self.name)

            with self._condition:
                self._active = None
                self._condition.notify_all()

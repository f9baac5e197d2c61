"""Timed blink execution for one LED.

Each BlinkDescriptor runs through a small state machine::

    ┌────┐  turn on, wait on_time   ┌─────┐  turn off, wait off_time   ┌──────┐
    │ On │ ───────────────────────► │ Off │ ─────────────────────────► │ Done │
    └────┘                          └─────┘                            └──────┘
       │ on_time == 0: no write, go straight to Off

Writes go through the LED's brightness control, so they are serialized
with every other write on the same LED. A failed write ends the descriptor
at once with that error.

Timing uses deadlines on a monotonic clock. A descriptor queued while its
predecessor was still running starts at the predecessor's planned end,
not at the moment the worker picks it up, so write latency does not pile
up over long sequences (e.g. a morse message).
"""

import logging
import time
from typing import Any, Iterable, Optional, Protocol

from ledctl.models import BlinkDescriptor

from .completion import Completion, ignore_result
from .serial_queue import OperationCancelled, QueueItem, SerialQueue

logger = logging.getLogger(__name__)


class BlinkTarget(Protocol):
    """What the engine needs from an LED: scheduled on/off writes."""

    def turn_on(self, on_done: Optional[Completion] = None) -> Any:
        ...

    def turn_off(self, on_done: Optional[Completion] = None) -> Any:
        ...


class BlinkEngine(SerialQueue[BlinkDescriptor]):
    """
    Serializes blink descriptors of one LED end-to-end.

    ``kill()`` discards pending descriptors. The running descriptor finishes
    the timer of its current phase but starts no further phase and does
    not report completion. If it is waiting for a write at that moment it
    is released immediately, since a reset may have discarded that write.
    """

    def __init__(self, target: BlinkTarget, default_rate: float = 1.0, name: str = "blinker"):
        """
        Initialize the blink engine.

        Args:
            target: LED whose turn_on/turn_off perform the writes
            default_rate: Rate for descriptors without a positive rate
            name: Queue name for logs
        """
        super().__init__(name)
        self._target = target
        self.default_rate = default_rate
        # Planned end of the last completed descriptor, and when it actually finished
        self._timeline_end: Optional[float] = None
        self._finished_at = 0.0

    def enqueue(self, descriptor: Any, on_done: Optional[Completion] = None) -> None:
        """
        Queue one blink.

        Args:
            descriptor: BlinkDescriptor, mapping of its fields, or None for defaults
            on_done: Completion fired after the Off phase or the first failure
        """
        self.push(BlinkDescriptor.coerce(descriptor), on_done)

    def enqueue_sequence(self, descriptors: Iterable[Any], on_done: Optional[Completion] = None) -> int:
        """
        Queue several blinks back to back.

        Only the last descriptor reports to ``on_done``; the others get a
        no-op completion. The whole sequence is queued atomically, so
        concurrent callers cannot interleave with it.

        Returns:
            Number of descriptors queued
        """
        blinks = [BlinkDescriptor.coerce(d) for d in descriptors]
        if not blinks:
            return 0

        entries: list[tuple[BlinkDescriptor, Optional[Completion]]] = [
            (blink, ignore_result) for blink in blinks[:-1]
        ]
        entries.append((blinks[-1], on_done))
        self.push_many(entries)
        return len(blinks)

    def _execute(self, item: QueueItem[BlinkDescriptor]) -> None:
        on_ms, off_ms = item.payload.timings(self.default_rate)
        start = self._timeline_start(item, (on_ms + off_ms) / 1000)
        on_deadline = start + on_ms / 1000
        off_deadline = on_deadline + off_ms / 1000

        completed = False
        try:
            if on_ms != 0:
                self._write(item, self._target.turn_on)
                self._sleep_until(on_deadline)
                self._stop_if_cancelled(item)

            self._write(item, self._target.turn_off)
            self._sleep_until(off_deadline)
            self._stop_if_cancelled(item)
            completed = True
        finally:
            self._finished_at = time.monotonic()
            self._timeline_end = off_deadline if completed else None

    def _timeline_start(self, item: QueueItem[BlinkDescriptor], period: float) -> float:
        now = time.monotonic()
        if self._timeline_end is None or item.enqueued_at > self._finished_at:
            return now
        # More than a period behind (slow writes): resynchronize
        if now - self._timeline_end > period:
            return now
        return self._timeline_end

    def _write(self, item: QueueItem[BlinkDescriptor], action) -> None:
        outcome: list[Optional[BaseException]] = []

        def done(error: Optional[BaseException]) -> None:
            with self._condition:
                outcome.append(error)
                self._condition.notify_all()

        # kill() must not run between the cancellation check and the push
        with self._condition:
            if self._cancelled(item):
                raise OperationCancelled()
            action(done)
            self._condition.wait_for(lambda: outcome or self._cancelled(item))
            if not outcome:
                raise OperationCancelled()

        if outcome[0] is not None:
            raise outcome[0]

    def _sleep_until(self, deadline: float) -> None:
        with self._condition:
            while not self._closed:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return
                self._condition.wait(remaining)

    def _stop_if_cancelled(self, item: QueueItem[BlinkDescriptor]) -> None:
        if self.is_cancelled(item):
            raise OperationCancelled()

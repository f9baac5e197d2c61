"""Ordered attribute writes for one LED."""

from pathlib import Path
from typing import Any, NamedTuple, Optional

from ledctl.sysfs import AttributeStore

from .completion import Completion
from .serial_queue import QueueItem, SerialQueue


class WriteRequest(NamedTuple):
    """A pending attribute write."""

    attribute: str
    value: Any


class WriteQueue(SerialQueue[WriteRequest]):
    """
    Serializes all attribute writes of one LED.

    Concurrent callers never interleave writes and never observe them out
    of submission order. A failed write is reported to its own callback and
    the queue moves on to the next item.
    """

    def __init__(self, location: Path, store: AttributeStore, name: str = "writer"):
        """
        Initialize the write queue.

        Args:
            location: LED directory
            store: Attribute store performing the writes
            name: Queue name for logs
        """
        super().__init__(name)
        self._location = location
        self._store = store

    def enqueue(self, attribute: str, value: Any, on_done: Optional[Completion] = None) -> None:
        """Queue a write of ``value`` to ``attribute``."""
        self.push(WriteRequest(attribute, value), on_done)

    def _execute(self, item: QueueItem[WriteRequest]) -> None:
        request = item.payload
        self._store.write(self._location, request.attribute, request.value)

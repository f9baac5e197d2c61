"""Ordered command execution for LEDs."""

from .blink_engine import BlinkEngine, BlinkTarget
from .completion import Completion, ignore_result
from .serial_queue import OperationCancelled, QueueItem, SerialQueue
from .write_queue import WriteQueue, WriteRequest

__all__ = [
    "BlinkEngine",
    "BlinkTarget",
    "Completion",
    "OperationCancelled",
    "QueueItem",
    "SerialQueue",
    "WriteQueue",
    "WriteRequest",
    "ignore_result",
]

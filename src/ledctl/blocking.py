"""Blocking facade over the scheduled LED operations.

Each method submits the scheduled operation and waits for its completion,
returning an OperationResult instead of raising::

    result = led.blocking.set_trigger("timer")
    if not result:
        print(result.error)
"""

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Optional

from .exceptions import LedCtlError

if TYPE_CHECKING:
    from .controller import LEDController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a blocking operation."""

    ok: bool
    error: Optional[BaseException] = None

    def raise_for_error(self) -> None:
        """Raise the stored error, if any."""
        if self.error is not None:
            raise self.error

    def __bool__(self) -> bool:
        return self.ok


class BlockingController:
    """Runs LED operations to completion on the calling thread."""

    def __init__(self, controller: "LEDController", timeout: Optional[float] = None):
        """
        Initialize the facade.

        Args:
            controller: LED handle to operate
            timeout: Seconds to wait for each operation (None waits forever)
        """
        self._controller = controller
        self.timeout = timeout

    def set_brightness(self, value: Any) -> OperationResult:
        return self._wait("set_brightness", lambda done: self._controller.set_brightness(value, done))

    def turn_on(self) -> OperationResult:
        return self._wait("turn_on", lambda done: self._controller.turn_on(done))

    def turn_off(self) -> OperationResult:
        return self._wait("turn_off", lambda done: self._controller.turn_off(done))

    def set_trigger(self, value: str) -> OperationResult:
        return self._wait("set_trigger", lambda done: self._controller.set_trigger(value, done))

    def blink(self, descriptor: Any = None) -> OperationResult:
        return self._wait("blink", lambda done: self._controller.blink(descriptor, done))

    def reset(self) -> OperationResult:
        return self._wait("reset", lambda done: self._controller.reset(done))

    def encode(self, name: str, data: Any, **options: Any) -> OperationResult:
        """Run an encoder and wait for its last blink."""
        return self._wait(
            f"encode '{name}'",
            lambda done: self._controller.encode(name, data, done, **options),
        )

    def _wait(self, operation: str, submit: Callable[[Callable], Any]) -> OperationResult:
        finished = threading.Event()
        outcome: list[Optional[BaseException]] = []

        def done(error: Optional[BaseException]) -> None:
            outcome.append(error)
            finished.set()

        try:
            submit(done)
        except LedCtlError as e:
            return OperationResult(ok=False, error=e)

        if not finished.wait(self.timeout):
            logger.warning(f"{self._controller.id}: {operation} timed out after {self.timeout}s")
            return OperationResult(
                ok=False,
                error=TimeoutError(f"{operation} did not complete within {self.timeout}s"),
            )

        error = outcome[0]
        return OperationResult(ok=error is None, error=error)

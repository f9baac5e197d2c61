"""
LED device handle.

An LEDController owns the two queues of one LED and exposes every
operation in two shapes: scheduled (returns the handle at once, reports
through ``on_done``) and blocking (``led.blocking.*``).

## Architecture

```
           LEDController
           ├── set_brightness / turn_on / turn_off / set_trigger ─┐
           ├── blink ─────────────► BlinkEngine ── turn_on/off ──┤
           └── encode / <encoder> ─► Encoder ──► BlinkEngine      │
                                                                  ▼
                                                  WriteQueue ──► AttributeStore
```

## Usage

```python
from ledctl import LEDController

with LEDController("green:led0") as led:
    led.set_trigger("none").turn_on().blink({"duty_percent": 25})
    led.morse("sos", on_done=lambda error: print(error or "sent"))
    led.join()
```
"""

import logging
import time
from pathlib import Path
from typing import Any, ClassVar, Optional

from pydantic import ValidationError

from .blocking import BlockingController
from .core import BlinkEngine, Completion, WriteQueue
from .core.completion import invoke_later
from .encoders import Encoder, EncoderHandler, EncoderRegistry, to_morse
from .exceptions import (
    AttributeIOError,
    DeviceClosedError,
    DeviceNotFoundError,
    DeviceValidationError,
    EncoderHandlerError,
    EncoderNotFoundError,
    UnsupportedTriggerError,
    escalate_unhandled,
)
from .models import BlinkDescriptor, BrightnessBounds, TriggerInfo
from .sysfs import AttributeStore, DeviceRegistry, get_registry

logger = logging.getLogger(__name__)


class LEDController:
    """
    Handle for a single LED class device.

    Identity and location never change after construction. All writes go
    through one WriteQueue, so the device sees them in call order; blinks
    run one at a time on a BlinkEngine that writes through the same queue.

    Threading:
        Scheduled operations may be called from any thread. Completion
        callbacks run on the queue worker threads (or a short-lived thread
        for failures detected before anything was queued).
    """

    # Shared by every handle; populated with register()
    encoders: ClassVar[EncoderRegistry]

    def __init__(
        self,
        identifier: Optional[str] = None,
        registry: Optional[DeviceRegistry] = None,
        store: Optional[AttributeStore] = None,
        default_rate: float = 1.0,
    ):
        """
        Open an LED.

        Args:
            identifier: LED directory name. If None, the only LED present is used.
            registry: Registry to look the LED up in. If None, uses /sys/class/leds.
            store: Attribute store. If None, reads and writes the files directly.
            default_rate: Blink rate for descriptors without a positive rate

        Raises:
            DeviceNotFoundError: If the LED is unknown or no unambiguous default exists
            AttributeIOError: If max_brightness cannot be read
        """
        self._registry = registry or get_registry()
        available = self._registry.discover()

        if identifier is None:
            if len(available) != 1:
                raise DeviceNotFoundError(None, self._registry.root, available)
            identifier = available[0]
        elif identifier not in available:
            raise DeviceNotFoundError(identifier, self._registry.root, available)

        self._id = identifier
        self._location = self._registry.location_of(identifier)
        self._store = store or AttributeStore()

        maximum = self._store.read_int(self._location, "max_brightness")
        self._bounds = BrightnessBounds(maximum, self.current_value)

        self._writer = WriteQueue(self._location, self._store, name=f"{identifier}/writer")
        self._blinker = BlinkEngine(self, default_rate=default_rate, name=f"{identifier}/blinker")
        self._blocking: Optional[BlockingController] = None

        logger.info(f"Opened LED {identifier} at {self._location} (max brightness {maximum})")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        return self._id

    @property
    def location(self) -> Path:
        return self._location

    @property
    def brightness(self) -> BrightnessBounds:
        """Brightness bounds; ``brightness.current`` is a live read."""
        return self._bounds

    @property
    def triggers(self) -> TriggerInfo:
        """Supported and active triggers, read from the device on every access."""
        return TriggerInfo.parse(self._store.read(self._location, "trigger"))

    @property
    def writer(self) -> WriteQueue:
        return self._writer

    @property
    def blinker(self) -> BlinkEngine:
        return self._blinker

    @property
    def blocking(self) -> BlockingController:
        """Blocking variants of the scheduled operations."""
        if self._blocking is None:
            self._blocking = BlockingController(self)
        return self._blocking

    # ------------------------------------------------------------------
    # Scheduled operations
    # ------------------------------------------------------------------

    def set_brightness(self, value: Any, on_done: Optional[Completion] = None) -> "LEDController":
        """
        Write a brightness level.

        The value is converted to an integer and clamped into the LED's
        range. Values that are not numbers fail with DeviceValidationError
        without writing anything.
        """
        try:
            level = int(float(value)) if isinstance(value, str) else int(value)
        except (TypeError, ValueError, OverflowError):
            error = DeviceValidationError(
                self._id, "brightness", value, f"Brightness must be a number, got {value!r}"
            )
            self._fail_later(error, on_done, "set_brightness")
            return self

        self._writer.enqueue("brightness", self._bounds.clamp(level), on_done)
        return self

    def turn_on(self, on_done: Optional[Completion] = None) -> "LEDController":
        """Set maximum brightness."""
        return self.set_brightness(self._bounds.max, on_done)

    def turn_off(self, on_done: Optional[Completion] = None) -> "LEDController":
        """Set brightness to zero."""
        return self.set_brightness(self._bounds.min, on_done)

    def set_trigger(self, value: str, on_done: Optional[Completion] = None) -> "LEDController":
        """
        Activate a kernel trigger.

        The trigger list is read from the device on every call. A trigger
        the LED does not offer fails with UnsupportedTriggerError and is
        never written.
        """
        try:
            triggers = self.triggers
        except AttributeIOError as e:
            self._fail_later(e, on_done, "set_trigger")
            return self

        if not triggers.supports(value):
            self._fail_later(UnsupportedTriggerError(self._id, value, triggers.all), on_done, "set_trigger")
            return self

        self._writer.enqueue("trigger", value, on_done)
        return self

    def blink(self, descriptor: Any = None, on_done: Optional[Completion] = None) -> "LEDController":
        """
        Queue a blink.

        Args:
            descriptor: BlinkDescriptor, mapping of its fields, or None for defaults
            on_done: Completion fired when the blink has finished
        """
        try:
            blink = BlinkDescriptor.coerce(descriptor)
        except (ValidationError, TypeError) as e:
            error = DeviceValidationError(self._id, "blink", descriptor, f"Invalid blink descriptor: {e}")
            self._fail_later(error, on_done, "blink")
            return self

        self._blinker.enqueue(blink, on_done)
        return self

    def reset(self, on_done: Optional[Completion] = None) -> "LEDController":
        """
        Cancel everything queued and switch the LED off.

        Pending blinks and writes are discarded without their callbacks.
        """
        blinks = self._blinker.kill()
        writes = self._writer.kill()
        logger.debug(f"{self._id}: reset discarded {blinks} blink(s) and {writes} write(s)")
        return self.turn_off(on_done)

    def encode(
        self,
        name: str,
        data: Any,
        on_done: Optional[Completion] = None,
        **options: Any,
    ) -> "LEDController":
        """
        Run a registered encoder and queue the blinks it produces.

        ``on_done`` fires once, after the last blink. If the handler raises
        while being called and no ``on_done`` was given, the error is raised
        here.

        Args:
            name: Encoder name
            data: Encoder input
            on_done: Completion for the whole sequence
            **options: Passed to the handler (e.g. rate=2 for morse)

        Raises:
            EncoderNotFoundError: If no encoder is registered under name
            EncoderHandlerError: If the handler raised and on_done is None
        """
        encoder = self.encoders.get(name)
        if encoder is None:
            raise EncoderNotFoundError(name, self.encoders.names())

        operation = f"encode '{name}'"

        def on_result(error: Optional[BaseException], blinks: list[BlinkDescriptor]) -> None:
            if error is not None:
                self._fail_later(error, on_done, operation)
                return
            if not blinks:
                if on_done is not None:
                    invoke_later(on_done, None, f"{self._id} {operation}")
                return
            try:
                self._blinker.enqueue_sequence(blinks, on_done)
            except DeviceClosedError as e:
                self._fail_later(e, on_done, operation)

        try:
            encoder.invoke(data, on_result, **options)
        except EncoderHandlerError as e:
            if on_done is None:
                raise
            self._fail_later(e, on_done, operation)

        return self

    def __getattr__(self, name: str):
        # Only reached for names that are not regular attributes
        if name.startswith("_"):
            raise AttributeError(name)

        encoder = type(self).encoders.get(name)
        if encoder is None:
            raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

        def run_encoder(data: Any, on_done: Optional[Completion] = None, **options: Any) -> "LEDController":
            return self.encode(name, data, on_done, **options)

        run_encoder.__name__ = name
        run_encoder.__doc__ = encoder.handler.__doc__
        return run_encoder

    # ------------------------------------------------------------------
    # Reads and lifecycle
    # ------------------------------------------------------------------

    def current_value(self) -> int:
        """
        Read the live brightness.

        Raises:
            AttributeIOError: If the brightness file cannot be read
        """
        return self._store.read_int(self._location, "brightness")

    def __int__(self) -> int:
        return self.current_value()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Block until no blink or write is pending or running.

        Returns:
            True if both queues drained, False on timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        if not self._blinker.join(timeout):
            return False
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        return self._writer.join(remaining)

    def close(self) -> None:
        """Discard queued work and stop the worker threads."""
        self._blinker.close()
        self._writer.close()
        logger.debug(f"Closed LED {self._id}")

    def __enter__(self) -> "LEDController":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    def __repr__(self) -> str:
        return f"LEDController(id='{self._id}', location='{self._location}')"

    def _fail_later(self, error: BaseException, on_done: Optional[Completion], operation: str) -> None:
        callback = on_done or escalate_unhandled(f"{self._id} {operation}")
        invoke_later(callback, error, f"{self._id} {operation}")


LEDController.encoders = EncoderRegistry(
    reserved={name for name in dir(LEDController) if not name.startswith("_")} | {"encoders"}
)


def register(name: str, handler: EncoderHandler, **kwargs: Any) -> Encoder:
    """
    Register an encoder on every LED handle.

    Args:
        name: Operation name, e.g. "morse" makes ``led.morse(text)`` available
        handler: ``handler(input)`` returning blinks, or ``handler(input, done)``
        **kwargs: Passed to EncoderRegistry.register (e.g. callback_style)

    Raises:
        EncoderRegistrationError: If the name is taken or invalid
    """
    return LEDController.encoders.register(name, handler, **kwargs)


register("morse", to_morse)

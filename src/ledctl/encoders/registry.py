"""Encoder registry.

An encoder turns arbitrary input (text, numbers, status codes...) into the
blink descriptors that represent it. Encoders are registered by name in an
EncoderRegistry; every LEDController then offers them as operations::

    def to_pulses(count):
        return [BlinkDescriptor(period_ms=300)] * count

    register("pulses", to_pulses)
    led.pulses(3, on_done=report)        # or led.encode("pulses", 3)

Two calling conventions are supported and detected from the handler's
signature:

* ``handler(input) -> descriptor | sequence`` (synchronous)
* ``handler(input, done)`` calling ``done(error=None, result=None)`` later
"""

import inspect
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError

from ledctl.exceptions import (
    EncoderHandlerError,
    EncoderNotFoundError,
    EncoderRegistrationError,
)
from ledctl.models import BlinkDescriptor

logger = logging.getLogger(__name__)

EncoderHandler = Callable[..., Any]
ResultCallback = Callable[[Optional[BaseException], list[BlinkDescriptor]], None]


def normalize_blinks(result: Any) -> list[BlinkDescriptor]:
    """
    Normalize handler output to a list of descriptors.

    A single descriptor or mapping becomes a one-item list; None becomes an
    empty list.

    Raises:
        pydantic.ValidationError: If a mapping holds invalid values
        TypeError: If an entry cannot describe a blink
    """
    if result is None:
        return []
    if isinstance(result, (BlinkDescriptor, dict)):
        return [BlinkDescriptor.coerce(result)]
    if isinstance(result, (str, bytes)):
        raise TypeError(f"Encoder returned {type(result).__name__}, expected blink descriptors")
    return [BlinkDescriptor.coerce(entry) for entry in result]


def _takes_callback(handler: EncoderHandler) -> bool:
    try:
        signature = inspect.signature(handler)
    except (TypeError, ValueError):
        return False

    positional = [
        p for p in signature.parameters.values()
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD) and p.default is p.empty
    ]
    return len(positional) >= 2


@dataclass(frozen=True)
class Encoder:
    """A registered encoder."""

    name: str
    handler: EncoderHandler
    uses_callback: bool

    def invoke(self, data: Any, on_result: ResultCallback, **options: Any) -> None:
        """
        Run the handler and hand its normalized output to ``on_result``.

        Keyword ``options`` are passed through to the handler (e.g. the
        morse encoder's ``rate``).

        Errors the handler raises while being called are raised here as
        EncoderHandlerError. Errors reported later through ``done`` are
        passed to ``on_result`` instead.
        """
        if not self.uses_callback:
            try:
                blinks = normalize_blinks(self.handler(data, **options))
            except Exception as e:
                raise EncoderHandlerError(self.name, e) from e
            on_result(None, blinks)
            return

        lock = threading.Lock()
        reported = []

        def done(error: Optional[BaseException] = None, result: Any = None) -> None:
            with lock:
                if reported:
                    logger.warning(f"Encoder '{self.name}' reported completion more than once")
                    return
                reported.append(True)

            if error is not None:
                on_result(EncoderHandlerError(self.name, error), [])
                return
            try:
                blinks = normalize_blinks(result)
            except (ValidationError, TypeError) as e:
                on_result(EncoderHandlerError(self.name, e), [])
                return
            on_result(None, blinks)

        try:
            self.handler(data, done, **options)
        except Exception as e:
            with lock:
                already_reported = bool(reported)
                reported.append(True)
            if already_reported:
                logger.warning(f"Encoder '{self.name}' raised after reporting completion: {e!r}")
                return
            raise EncoderHandlerError(self.name, e) from e


class EncoderRegistry:
    """
    Capability table mapping operation names to encoders.

    Held by the LED controller class, not by individual LEDs, so a
    registration is visible to every LED handle. Names reserved at
    construction (the controller's own methods) can never be registered.
    """

    def __init__(self, reserved: Iterable[str] = ()):
        self._encoders: dict[str, Encoder] = {}
        self._reserved = frozenset(reserved)
        self._lock = threading.Lock()

    def register(
        self,
        name: str,
        handler: EncoderHandler,
        *,
        callback_style: Optional[bool] = None,
    ) -> Encoder:
        """
        Register an encoder.

        Args:
            name: Operation name (must be a valid Python identifier)
            handler: Encoder function
            callback_style: Force the calling convention instead of detecting it

        Returns:
            The registered Encoder

        Raises:
            EncoderRegistrationError: If the handler is not callable or the name is taken
        """
        if not callable(handler):
            raise EncoderRegistrationError(
                str(name), f"handler must be callable, {type(handler).__name__} given"
            )
        if not isinstance(name, str) or not name.isidentifier() or name.startswith("_"):
            raise EncoderRegistrationError(str(name), "name must be a public Python identifier")
        if name in self._reserved:
            raise EncoderRegistrationError(name, "name is already an LED operation")

        if callback_style is None:
            callback_style = _takes_callback(handler)
        encoder = Encoder(name=name, handler=handler, uses_callback=callback_style)

        with self._lock:
            if name in self._encoders:
                raise EncoderRegistrationError(name, "an encoder with this name is already registered")
            self._encoders[name] = encoder

        logger.info(f"Registered encoder '{name}' ({'callback' if callback_style else 'return'} style)")
        return encoder

    def unregister(self, name: str) -> None:
        """Remove an encoder."""
        with self._lock:
            if name not in self._encoders:
                raise EncoderNotFoundError(name, tuple(self._encoders))
            del self._encoders[name]
        logger.debug(f"Unregistered encoder '{name}'")

    def get(self, name: str) -> Optional[Encoder]:
        """Look up an encoder by name."""
        with self._lock:
            return self._encoders.get(name)

    def names(self) -> tuple[str, ...]:
        """Registered encoder names, sorted."""
        with self._lock:
            return tuple(sorted(self._encoders))

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._encoders

"""LED state models: brightness bounds and trigger information."""

from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field


class BrightnessBounds:
    """
    Brightness range of one LED.

    ``min`` is always 0 and ``max`` is read once when the LED handle is
    created. ``current`` is read from the device on every access, so it
    reflects external changes and may transiently fall outside the range.
    """

    __slots__ = ("_max", "_read_current")

    MIN = 0

    def __init__(self, maximum: int, read_current: Callable[[], int]):
        """
        Initialize bounds.

        Args:
            maximum: Value of the LED's max_brightness attribute
            read_current: Blocking reader returning the live brightness
        """
        self._max = int(maximum)
        self._read_current = read_current

    @property
    def min(self) -> int:
        return self.MIN

    @property
    def max(self) -> int:
        return self._max

    @property
    def current(self) -> int:
        """Live brightness (blocking read)."""
        return self._read_current()

    def clamp(self, value: int) -> int:
        """Clamp value into ``[min, max]``."""
        if value <= self.MIN:
            return self.MIN
        return min(value, self._max)

    def __repr__(self) -> str:
        return f"BrightnessBounds(min={self.MIN}, max={self._max})"


class TriggerInfo(BaseModel):
    """Snapshot of an LED's trigger file.

    The sysfs trigger file lists every supported trigger separated by
    spaces, with the active one in brackets::

        none [timer] heartbeat default-on
    """

    model_config = ConfigDict(frozen=True)

    all: tuple[str, ...] = Field(default=(), description="Supported triggers, in file order")
    current: Optional[str] = Field(default=None, description="Active trigger")

    @classmethod
    def parse(cls, raw: str) -> "TriggerInfo":
        """Parse the raw contents of a trigger file."""
        triggers: list[str] = []
        current = None

        for token in raw.split():
            if current is None and token.startswith("["):
                token = token.strip("[]")
                current = token
            triggers.append(token)

        return cls(all=tuple(triggers), current=current)

    def supports(self, trigger: str) -> bool:
        """Check whether the trigger is offered by the LED."""
        return trigger in self.all

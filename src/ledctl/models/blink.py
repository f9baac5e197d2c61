"""Blink descriptor model."""

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BlinkDescriptor(BaseModel):
    """One on/off blink cycle.

    The LED is lit for ``duty_percent`` of the period, then dark for the
    rest. ``rate`` divides the period, so a rate of 2 blinks twice as fast.
    A missing or non-positive rate uses the blink engine's default rate
    (1 unless configured otherwise).

    Frozen: a descriptor is a pure value, consumed once by the blink engine.

    Example:
        >>> BlinkDescriptor(duty_percent=25, period_ms=400).timings()
        (100.0, 300.0)
    """

    model_config = ConfigDict(frozen=True)

    rate: Optional[float] = Field(
        default=None,
        description="Blink speed multiplier (None or <= 0 uses the engine default rate)",
    )
    duty_percent: float = Field(
        default=50.0,
        ge=0,
        le=100,
        validation_alias=AliasChoices("duty_percent", "dutyPercent", "for"),
        description="Percentage of the period the LED is on",
    )
    period_ms: float = Field(
        default=1000.0,
        ge=0,
        validation_alias=AliasChoices("period_ms", "periodMs", "of"),
        description="Total on + off duration in milliseconds, before rate scaling",
    )

    @classmethod
    def coerce(cls, value: Any) -> "BlinkDescriptor":
        """Build a descriptor from a descriptor, a mapping, or None (defaults).

        Raises:
            pydantic.ValidationError: If a mapping holds invalid values
            TypeError: If the value cannot describe a blink
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls.model_validate(dict(value))
        raise TypeError(f"Cannot build a BlinkDescriptor from {type(value).__name__}")

    def effective_period(self, default_rate: float = 1.0) -> float:
        """Period in milliseconds after rate scaling."""
        rate = self.rate if self.rate is not None and self.rate > 0 else default_rate
        if rate <= 0:
            rate = 1.0
        return self.period_ms / rate

    def timings(self, default_rate: float = 1.0) -> tuple[float, float]:
        """Return ``(on_ms, off_ms)`` for this descriptor."""
        period = self.effective_period(default_rate)
        on_time = period * self.duty_percent / 100
        return on_time, period - on_time

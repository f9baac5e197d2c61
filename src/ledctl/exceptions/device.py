"""LED device exceptions.

This module defines exceptions raised while operating an LED:
- AttributeIOError: Reading or writing an attribute file failed
- DeviceValidationError: A requested value cannot be applied to the LED
- UnsupportedTriggerError: The LED does not offer the requested trigger
- DeviceClosedError: Work was submitted to a closed LED handle
"""

from pathlib import Path
from typing import Any, Optional

from .base import LedCtlError


class AttributeIOError(LedCtlError):
    """Reading or writing an LED attribute file failed."""

    def __init__(
        self,
        location: Path,
        attribute: str,
        operation: str,
        original_error: Optional[str] = None,
    ):
        """
        Initialize attribute I/O error.

        Args:
            location: LED directory
            attribute: Attribute file name (e.g. "brightness")
            operation: "read" or "write"
            original_error: Message of the underlying OSError
        """
        user_msg = f"Failed to {operation} '{attribute}' of LED at {location}"
        tech_msg = user_msg
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        if original_error and "permission" in original_error.lower():
            recovery = (
                "Writing LED attributes usually requires root privileges "
                "or a udev rule granting write access to the LED files."
            )
        else:
            recovery = f"Check that {location / attribute} exists and is accessible."

        super().__init__(
            user_message=user_msg,
            technical_message=tech_msg,
            recoverable=True,
            recovery_hint=recovery,
        )
        self.location = location
        self.attribute = attribute
        self.operation = operation
        self.original_error = original_error


class DeviceValidationError(LedCtlError):
    """A value cannot be applied to the LED."""

    def __init__(self, identifier: str, field: str, value: Any, error_msg: str, **kwargs):
        """
        Initialize device validation error.

        Args:
            identifier: LED identifier
            field: Which setting was being changed
            value: The rejected value
            error_msg: Why the value was rejected
        """
        kwargs.setdefault("recoverable", True)
        super().__init__(error_msg, **kwargs)
        self.identifier = identifier
        self.field = field
        self.value = value


class UnsupportedTriggerError(DeviceValidationError):
    """The LED does not support the requested trigger."""

    def __init__(self, identifier: str, value: Any, supported: tuple[str, ...] = ()):
        """
        Initialize unsupported trigger error.

        Args:
            identifier: LED identifier
            value: The requested trigger
            supported: Triggers the LED reported at validation time
        """
        recovery = f"Run 'ledctl trigger {identifier}' to list supported triggers"
        if supported:
            recovery = "Supported triggers: " + ", ".join(supported)

        super().__init__(
            identifier,
            "trigger",
            value,
            f"Unsupported trigger: '{value}' for LED {identifier}",
            recovery_hint=recovery,
        )
        self.supported = supported


class DeviceClosedError(LedCtlError):
    """Work was submitted after the LED handle was closed."""

    def __init__(self, queue_name: str):
        super().__init__(
            user_message=f"Cannot submit work to closed queue '{queue_name}'",
            recovery_hint="Create a new LEDController for this LED",
        )
        self.queue_name = queue_name

"""Encoder exceptions.

- EncoderError: Base class for encoder errors
- EncoderRegistrationError: An encoder could not be registered
- EncoderNotFoundError: No encoder is registered under the requested name
- EncoderHandlerError: An encoder handler raised or reported an error
"""

from .base import LedCtlError


class EncoderError(LedCtlError):
    """Encoder registration or invocation failed."""

    def __init__(self, user_message: str, name: str, **kwargs):
        super().__init__(user_message, **kwargs)
        self.name = name


class EncoderRegistrationError(EncoderError):
    """An encoder could not be registered."""

    def __init__(self, name: str, reason: str):
        """
        Initialize registration error.

        Args:
            name: The encoder name that was rejected
            reason: Why it was rejected
        """
        super().__init__(
            f"Cannot register encoder '{name}': {reason}",
            name,
            recovery_hint="Choose a different name or pass a callable handler",
        )
        self.reason = reason


class EncoderNotFoundError(EncoderError):
    """No encoder is registered under the requested name."""

    def __init__(self, name: str, available: tuple[str, ...] = ()):
        recovery = None
        if available:
            recovery = "Registered encoders: " + ", ".join(available)
        super().__init__(f"No encoder registered as '{name}'", name, recovery_hint=recovery)


class EncoderHandlerError(EncoderError):
    """An encoder handler raised an exception or reported an error."""

    def __init__(self, name: str, original: BaseException):
        """
        Initialize handler error.

        Args:
            name: Name of the encoder whose handler failed
            original: The exception raised or reported by the handler
        """
        super().__init__(
            str(original) or f"Encoder '{name}' failed",
            name,
            technical_message=f"Encoder '{name}' failed: {type(original).__name__}: {original}",
        )
        self.original = original

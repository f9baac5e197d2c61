"""Root of the ledctl exception tree.

Every error raised or reported by ledctl derives from `LedCtlError`, so
callers can catch (or receive through a completion callback) one type and
still get a printable message and, where one exists, a hint for fixing it.
"""

from typing import Optional


class LedCtlError(Exception):
    """
    Base exception for ledctl.

    Attributes:
        user_message: Short message suitable for the terminal
        technical_message: Longer message for the log file
        recoverable: True when retrying after fixing the cause can succeed
        recovery_hint: What the user can do about it, if known
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
    ):
        super().__init__(user_message)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """User message followed by the recovery hint, when there is one."""
        if not self.recovery_hint:
            return self.user_message
        return f"{self.user_message}\n\nSuggestion: {self.recovery_hint}"

"""Configuration and device lookup errors.

- ConfigurationError: base for anything wrong with settings
- DeviceNotFoundError: the LED name does not resolve under the LED root
- ConfigFileInvalidError: the config file is not readable JSON
- ConfigValidationError: the config file parses but a value is rejected
"""

from pathlib import Path
from typing import Any, Optional

from .base import LedCtlError

# Extra advice keyed by config field name
_FIELD_HINTS = {
    "leds_root": "The LED root is usually /sys/class/leds",
    "blink_rate": "The blink rate must be a positive number (1 = normal speed)",
    "default_led": "Run 'ledctl list' to see valid LED identifiers",
    "log_dir": "Use a directory the current user can write to",
}


class ConfigurationError(LedCtlError):
    """Settings are invalid or cannot be loaded."""
    pass


class DeviceNotFoundError(ConfigurationError):
    """No LED with the requested name exists under the LED root."""

    def __init__(self, identifier: Optional[str], root: Path, available: tuple[str, ...] = ()):
        if available:
            hint = "Available LEDs: " + ", ".join(available)
        else:
            hint = f"No LEDs were found in {root}. Check --root or the 'leds_root' setting"

        super().__init__(
            user_message=f"No such LED: '{identifier}' in {root}",
            technical_message=f"LED {identifier!r} not in {list(available)} (root {root})",
            recoverable=True,
            recovery_hint=hint + "\nRun 'ledctl list' to see available LEDs",
        )
        self.identifier = identifier
        self.root = root
        self.available = available


class ConfigFileInvalidError(ConfigurationError):
    """The config file is empty or is not valid JSON."""

    def __init__(self, file_path: str, parse_error: str):
        if "trailing comma" in parse_error.lower():
            user_msg = "Configuration file has a trailing comma"
            hint = f"Remove the comma after the last entry in {file_path}"
        else:
            user_msg = "Configuration file is not valid JSON"
            hint = (
                f"Fix {file_path} by hand, or run 'ledctl config reset' "
                "to replace it with defaults (the old file is kept as .bak)"
            )

        super().__init__(
            user_message=user_msg,
            technical_message=f"Cannot parse {file_path}: {parse_error}",
            recoverable=True,
            recovery_hint=hint,
        )
        self.file_path = file_path
        self.parse_error = parse_error


class ConfigValidationError(ConfigurationError):
    """A config value was rejected by the model."""

    def __init__(self, field: str, value: Any, error_msg: str, file_path: Optional[str] = None):
        lines = [f"Update '{field}' in your configuration"]
        if file_path:
            lines.append(f"Config file: {file_path}")
        if field in _FIELD_HINTS:
            lines.append(_FIELD_HINTS[field])

        super().__init__(
            user_message=f"Invalid configuration value for '{field}': {error_msg}",
            technical_message=f"{field}={value!r} rejected: {error_msg}",
            recoverable=True,
            recovery_hint="\n".join(lines),
        )
        self.field = field
        self.value = value
        self.file_path = file_path

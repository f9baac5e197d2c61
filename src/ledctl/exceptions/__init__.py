"""
Custom exception hierarchy for ledctl.

## Exception Hierarchy

```
LedCtlError (base)
├── ConfigurationError
│   ├── DeviceNotFoundError
│   ├── ConfigFileInvalidError
│   └── ConfigValidationError
├── AttributeIOError
├── DeviceValidationError
│   └── UnsupportedTriggerError
├── DeviceClosedError
└── EncoderError
    ├── EncoderRegistrationError
    ├── EncoderNotFoundError
    └── EncoderHandlerError
```

All custom exceptions inherit from `LedCtlError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

### Example: Unsupported trigger

```python
led.set_trigger("disco", on_done=report)

# report() receives UnsupportedTriggerError:
# "Unsupported trigger: 'disco' for LED green:led0"
# Recovery hint: "Supported triggers: none, timer, heartbeat"
```

See `ledctl.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import LedCtlError
from .config import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    DeviceNotFoundError,
)
from .device import (
    AttributeIOError,
    DeviceClosedError,
    DeviceValidationError,
    UnsupportedTriggerError,
)
from .encoder import (
    EncoderError,
    EncoderHandlerError,
    EncoderNotFoundError,
    EncoderRegistrationError,
)
from .handlers import (
    ErrorCollector,
    collect_errors,
    escalate_unhandled,
    format_error_for_display,
    wrap_io_error,
    wrap_pydantic_error,
)

__all__ = [
    # Device
    "AttributeIOError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    "DeviceClosedError",
    "DeviceNotFoundError",
    "DeviceValidationError",
    # Encoders
    "EncoderError",
    "EncoderHandlerError",
    "EncoderNotFoundError",
    "EncoderRegistrationError",
    # Handlers
    "ErrorCollector",
    # Base
    "LedCtlError",
    "UnsupportedTriggerError",
    "collect_errors",
    "escalate_unhandled",
    "format_error_for_display",
    "wrap_io_error",
    "wrap_pydantic_error",
]

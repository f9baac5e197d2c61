"""
Centralized error handling utilities.

Errors move through three layers:

```
┌─────────────────────────────────────┐
│  USER LAYER (CLI)                   │
│  - Formats error.user_message       │
│  - Shows error.recovery_hint        │
└─────────────────────────────────────┘
                  ↑ LedCtlError
┌─────────────────────────────────────┐
│  DEVICE LAYER (controller, queues)  │
│  - Converts OSError/pydantic errors │
│  - Delivers errors to callbacks     │
└─────────────────────────────────────┘
                  ↑ OSError, ValidationError
┌─────────────────────────────────────┐
│  LOW LEVEL (sysfs files, JSON)      │
└─────────────────────────────────────┘
```

Queued operations report failures through their completion callback. When
the caller did not supply one, the failure is escalated with
`escalate_unhandled`, which logs it as an unhandled error instead of
silently dropping it.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from pydantic import ValidationError

from .base import LedCtlError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import AttributeIOError

logger = logging.getLogger(__name__)

Completion = Callable[[Optional[BaseException]], None]


def wrap_io_error(error: OSError, location: Path, attribute: str, operation: str) -> AttributeIOError:
    """
    Convert an OSError raised by attribute file access to an AttributeIOError.

    Args:
        error: The original OSError
        location: LED directory
        attribute: Attribute file name
        operation: "read" or "write"
    """
    return AttributeIOError(location, attribute, operation, original_error=str(error))


def wrap_pydantic_error(error: ValidationError, file_path: str) -> ConfigurationError:
    """
    Convert a pydantic ValidationError raised while loading a config file.

    Malformed JSON becomes ConfigFileInvalidError. Rejected values become
    ConfigValidationError naming the field, or listing every field when
    more than one failed.
    """
    problems = error.errors()

    for problem in problems:
        if problem.get("type") == "json_invalid":
            detail = problem.get("ctx", {}).get("error") or problem.get("msg", str(error))
            return ConfigFileInvalidError(file_path, str(detail))

    if len(problems) == 1:
        problem = problems[0]
        return ConfigValidationError(
            field=_field_name(problem),
            value=problem.get("input"),
            error_msg=problem.get("msg", "validation failed"),
            file_path=file_path,
        )

    listing = "\n".join(f"  - {_field_name(p)}: {p.get('msg', 'validation failed')}" for p in problems)
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(problems)} validation errors:\n{listing}",
        file_path=file_path,
    )


def _field_name(problem) -> str:
    return ".".join(str(part) for part in problem.get("loc", ())) or "unknown"


def format_error_for_display(error: BaseException) -> tuple[str, Optional[str]]:
    """Return (message, recovery hint or None) for showing an error to the user."""
    if isinstance(error, LedCtlError):
        return error.user_message, error.recovery_hint
    return f"{type(error).__name__}: {error}", None


def escalate_unhandled(operation: str) -> Completion:
    """
    Build the completion used when a caller supplied no callback.

    The returned callable ignores success and logs any failure as an
    unhandled error, with the traceback attached.

    Args:
        operation: Description of the operation, used in the log entry
    """
    def unhandled(error: Optional[BaseException]) -> None:
        if error is None:
            return
        if isinstance(error, LedCtlError):
            message = error.technical_message
        else:
            message = f"{type(error).__name__}: {error}"
        logger.error(
            f"Unhandled failure in {operation}: {message}",
            exc_info=(type(error), error, error.__traceback__),
        )

    return unhandled


def collect_errors(operation: str) -> "ErrorCollector":
    """
    Create an error collector for a per-LED batch.

    Example:
        ```python
        collector = collect_errors("read LED details")

        for identifier in registry.discover():
            with collector.attempt(identifier):
                rows.append(describe(identifier))

        if collector.has_errors:
            click.echo(collector.get_summary(), err=True)
        ```
    """
    return ErrorCollector(operation)


class ErrorCollector:
    """Keeps going when one LED of a batch fails and reports the failures at the end."""

    def __init__(self, operation: str):
        self.operation = operation
        self.failures: list[tuple[str, Exception]] = []
        self.succeeded = 0

    @property
    def has_errors(self) -> bool:
        return bool(self.failures)

    @property
    def attempted(self) -> int:
        return self.succeeded + len(self.failures)

    @contextmanager
    def attempt(self, item: str) -> Iterator[None]:
        """Run the block for one item, recording an Exception instead of raising it."""
        try:
            yield
        except Exception as e:
            logger.debug(f"{self.operation}: {item} failed: {e}")
            self.failures.append((item, e))
        else:
            self.succeeded += 1

    def get_summary(self) -> str:
        if not self.failures:
            return f"All operations completed successfully ({self.succeeded} total)"

        lines = [f"Failed {len(self.failures)} of {self.attempted} operations:"]
        for item, error in self.failures:
            message = error.user_message if isinstance(error, LedCtlError) else str(error)
            lines.append(f"  - {item}: {message}")
        return "\n".join(lines)

"""Completion callbacks for queued LED operations.

A completion is called exactly once with ``None`` on success or the
exception that made the operation fail.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Completion = Callable[[Optional[BaseException]], None]


def invoke(callback: Completion, error: Optional[BaseException], context: str) -> None:
    """Call a completion, logging anything it raises."""
    try:
        callback(error)
    except Exception as e:
        logger.error(f"Error in {context} completion callback: {e}", exc_info=True)


def invoke_later(callback: Completion, error: Optional[BaseException], context: str) -> None:
    """
    Call a completion from a separate thread.

    Used for failures detected before any work was queued, so the callback
    never runs inside the caller's own stack frame.
    """
    threading.Thread(target=invoke, args=(callback, error, context), daemon=True).start()


def ignore_result(error: Optional[BaseException]) -> None:
    """Completion for intermediate steps whose outcome nobody waits for."""
    if error is not None:
        logger.debug(f"Ignored failure of intermediate step: {error}")

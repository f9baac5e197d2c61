"""Synchronous access to LED attribute files.

Every LED is a directory holding one small text file per attribute
(``brightness``, ``max_brightness``, ``trigger``). Reads return the file
content with surrounding whitespace removed; writes replace the content.
"""

import logging
from pathlib import Path
from typing import Any

from ledctl.exceptions import AttributeIOError, wrap_io_error

logger = logging.getLogger(__name__)


class AttributeStore:
    """
    Key/value facade over an LED's attribute files.

    Stateless; a single instance can serve any number of LEDs. Tests and
    alternative backends can substitute their own object with the same
    ``read``/``write`` methods.
    """

    encoding = "utf-8"

    def read(self, location: Path, attribute: str) -> str:
        """
        Read an attribute.

        Args:
            location: LED directory
            attribute: Attribute file name

        Returns:
            File content, stripped

        Raises:
            AttributeIOError: If the file is missing or unreadable
        """
        try:
            return (location / attribute).read_text(encoding=self.encoding).strip()
        except OSError as e:
            raise wrap_io_error(e, location, attribute, "read") from e

    def write(self, location: Path, attribute: str, value: Any) -> None:
        """
        Write an attribute.

        Args:
            location: LED directory
            attribute: Attribute file name
            value: Any value with a meaningful ``str()``

        Raises:
            AttributeIOError: If the file cannot be written
        """
        try:
            (location / attribute).write_text(str(value), encoding=self.encoding)
        except OSError as e:
            raise wrap_io_error(e, location, attribute, "write") from e
        logger.debug(f"Wrote {attribute}={value} to {location}")

    def read_int(self, location: Path, attribute: str) -> int:
        """
        Read an attribute and parse it as an integer.

        Raises:
            AttributeIOError: If the file is unreadable or does not hold an integer
        """
        text = self.read(location, attribute)
        try:
            return int(text)
        except ValueError as e:
            raise AttributeIOError(
                location, attribute, "read", original_error=f"not an integer: {text!r}"
            ) from e

"""
LED discovery.

The Linux kernel exposes every LED class device as a directory under
``/sys/class/leds``::

    /sys/class/leds/
    ├── input3::capslock/
    │   ├── brightness
    │   ├── max_brightness
    │   └── trigger
    └── green:led0/
        └── ...

A directory counts as an LED when it holds both a ``trigger`` and a
``brightness`` file. Anything else under the root is ignored.

Scanning is done once per registry and cached until ``refresh()`` is
called, so constructing many LED handles does not rescan the directory.
"""

import logging
from pathlib import Path
from threading import Lock
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_ROOT = Path("/sys/class/leds")

REQUIRED_ATTRIBUTES = ("trigger", "brightness")


class DeviceRegistry:
    """
    Registry of LEDs available under one root directory.

    Owns its discovery cache; two registries for the same root do not share
    state.
    """

    def __init__(self, root: Optional[Path] = None):
        """
        Initialize device registry.

        Args:
            root: Directory to scan. If None, uses /sys/class/leds.
        """
        self.root = Path(root) if root is not None else DEFAULT_ROOT
        self._cache: Optional[tuple[str, ...]] = None
        self._lock = Lock()

    def discover(self) -> tuple[str, ...]:
        """
        List the LED identifiers under the root.

        Returns:
            Sorted identifiers; empty if the root does not exist
        """
        with self._lock:
            if self._cache is None:
                self._cache = self._scan()
            return self._cache

    def refresh(self) -> tuple[str, ...]:
        """Drop the cache and scan again."""
        with self._lock:
            self._cache = None
        return self.discover()

    def location_of(self, identifier: str) -> Path:
        """Directory of the given LED."""
        return self.root / identifier

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.discover()

    def _scan(self) -> tuple[str, ...]:
        if not self.root.is_dir():
            logger.debug(f"LED root {self.root} does not exist")
            return ()

        leds = []
        for candidate in self.root.iterdir():
            if not candidate.is_dir():
                continue
            if all((candidate / name).exists() for name in REQUIRED_ATTRIBUTES):
                leds.append(candidate.name)
            else:
                logger.debug(f"Ignoring {candidate}: not an LED directory")

        leds.sort()
        logger.info(f"Discovered {len(leds)} LEDs in {self.root}")
        return tuple(leds)


# Default instance for /sys/class/leds
_registry: Optional[DeviceRegistry] = None


def get_registry() -> DeviceRegistry:
    """Get the process-wide DeviceRegistry for the default root."""
    global _registry
    if _registry is None:
        _registry = DeviceRegistry()
    return _registry

"""CLI commands for ledctl."""

from .blink import blink, morse
from .config import config
from .control import brightness, off, on, reset, trigger
from .devices import info, list_leds

__all__ = ["blink", "brightness", "config", "info", "list_leds", "morse", "off", "on", "reset", "trigger"]

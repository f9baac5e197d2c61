"""Data models for ledctl."""

from .blink import BlinkDescriptor
from .config import AppConfig
from .device import BrightnessBounds, TriggerInfo

__all__ = [
    "AppConfig",
    "BlinkDescriptor",
    "BrightnessBounds",
    "TriggerInfo",
]

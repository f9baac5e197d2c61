"""ledctl: Ordered control of Linux LED class devices."""

__version__ = "0.1.0"

from .blocking import BlockingController, OperationResult
from .controller import LEDController, register
from .models import AppConfig, BlinkDescriptor, BrightnessBounds, TriggerInfo
from .sysfs import DeviceRegistry, get_registry

__all__ = [
    "AppConfig",
    "BlinkDescriptor",
    "BlockingController",
    "BrightnessBounds",
    "DeviceRegistry",
    "LEDController",
    "OperationResult",
    "TriggerInfo",
    "get_registry",
    "register",
]

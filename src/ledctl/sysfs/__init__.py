"""Filesystem access to LED class devices."""

from .attributes import AttributeStore
from .registry import DEFAULT_ROOT, DeviceRegistry, get_registry

__all__ = ["DEFAULT_ROOT", "AttributeStore", "DeviceRegistry", "get_registry"]

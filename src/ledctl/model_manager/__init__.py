"""Model persistence helpers."""

from .persistence import ConfigFile

__all__ = ["ConfigFile"]

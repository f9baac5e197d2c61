"""Per-invocation CLI state shared by all commands."""

import logging
from pathlib import Path
from typing import Optional

from ledctl.controller import LEDController
from ledctl.exceptions import ConfigurationError
from ledctl.models import AppConfig
from ledctl.models.config import DEFAULT_CONFIG_PATH
from ledctl.sysfs import DeviceRegistry

logger = logging.getLogger(__name__)


class CliSession:
    """
    Lazily loaded configuration and LED access for one command.

    The config file is only read when a command needs it, so ``config
    reset`` and ``config path`` still work when the file is broken.
    """

    def __init__(self, config_path: Optional[Path] = None, root: Optional[Path] = None):
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._root = root
        self._config: Optional[AppConfig] = None
        self._registry: Optional[DeviceRegistry] = None

    @property
    def config(self) -> AppConfig:
        """
        Loaded configuration.

        Raises:
            ConfigFileInvalidError: If the config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        if self._config is None:
            self._config = AppConfig.load_or_default(self.config_path)
        return self._config

    def config_or_default(self) -> AppConfig:
        """Loaded configuration, or defaults if the file cannot be used."""
        try:
            return self.config
        except ConfigurationError as e:
            logger.debug(f"Ignoring unusable config for logging setup: {e}")
            return AppConfig()

    @property
    def root(self) -> Path:
        return self._root or self.config.leds_root

    @property
    def registry(self) -> DeviceRegistry:
        if self._registry is None:
            self._registry = DeviceRegistry(self.root)
        return self._registry

    def open_led(self, identifier: Optional[str]) -> LEDController:
        """
        Open an LED by name, falling back to the configured default LED.

        Raises:
            DeviceNotFoundError: If the LED does not exist
        """
        return LEDController(
            identifier or self.config.default_led,
            registry=self.registry,
            default_rate=self.config.blink_rate,
        )

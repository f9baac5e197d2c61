"""Settings read by the CLI (~/.ledctl/config.json)."""

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_serializer

from ledctl.model_manager.persistence import ConfigFile

DEFAULT_CONFIG_PATH = Path.home() / ".ledctl" / "config.json"


class AppConfig(BaseModel):
    """User settings for the ledctl command line."""

    leds_root: Path = Field(
        default=Path("/sys/class/leds"),
        description="Directory containing one sub-directory per LED",
    )
    default_led: Optional[str] = Field(
        default=None,
        description="LED used when a command does not name one",
    )
    blink_rate: float = Field(
        default=1.0,
        gt=0,
        description="Default blink speed multiplier for descriptors without a positive rate",
    )
    log_dir: Path = Field(
        default_factory=lambda: Path.home() / ".ledctl" / "logs",
        description="Directory for rotating log files",
    )

    @field_serializer("leds_root", "log_dir")
    def serialize_path(self, path: Path) -> str:
        return str(path)

    @classmethod
    def file(cls, path: Optional[Path] = None) -> ConfigFile["AppConfig"]:
        """The config file at `path`, or at ~/.ledctl/config.json."""
        return ConfigFile(path or DEFAULT_CONFIG_PATH, cls)

    @classmethod
    def load_or_default(cls, path: Optional[Path] = None) -> "AppConfig":
        """
        Load settings, or return defaults when the file does not exist.

        Raises:
            ConfigFileInvalidError: If the file is not valid JSON
            ConfigValidationError: If a value is rejected
        """
        return cls.file(path).load_or_default()

    def save(self, path: Optional[Path] = None) -> None:
        self.file(path).save(self)

    def updated(self, **changes: Any) -> "AppConfig":
        """Return a validated copy with `changes` applied.

        Raises:
            pydantic.ValidationError: If a new value is rejected
        """
        return self.model_validate({**self.model_dump(), **changes})

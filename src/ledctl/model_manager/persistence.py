"""JSON-backed storage for pydantic settings models.

`ConfigFile` binds a path to a model type. Writes go through a temporary
file that is renamed over the target, and the previous contents are kept
next to it as `<name>.bak`. Load failures surface as ConfigurationError
subclasses carrying recovery hints.
"""

import logging
import shutil
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from ledctl.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ConfigFile(Generic[M]):
    """
    A settings file holding one pydantic model.

    Example:
        ```python
        store = ConfigFile(Path("~/.ledctl/config.json").expanduser(), AppConfig)
        config = store.load_or_default()
        store.save(config.model_copy(update={"blink_rate": 2.0}))
        ```
    """

    def __init__(self, path: Path, model_type: type[M]):
        self.path = path
        self.model_type = model_type

    @property
    def backup_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".bak")

    @property
    def _temp_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + ".tmp")

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> M:
        """
        Read and validate the file.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigFileInvalidError: If the file is empty, unreadable or not JSON
            ConfigValidationError: If a value is rejected by the model
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise
        except OSError as e:
            raise ConfigFileInvalidError(str(self.path), f"Cannot read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(self.path), "File is empty")

        try:
            model = self.model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Rejected {self.path}: {e}")
            raise wrap_pydantic_error(e, str(self.path)) from e

        logger.debug(f"Loaded {self.model_type.__name__} from {self.path}")
        return model

    def load_or_default(self) -> M:
        """Load the file, or build a default model when it does not exist.

        A broken file still raises. The default is not written to disk.
        """
        try:
            return self.load()
        except FileNotFoundError:
            logger.info(f"{self.path} not found, using default {self.model_type.__name__}")
            return self.model_type()

    def save(self, model: M, backup: bool = True, indent: int = 2) -> None:
        """
        Write the model, keeping the previous file as a backup.

        Raises:
            OSError: If the directory or file cannot be written
            ConfigurationError: If the model cannot be serialized
        """
        try:
            payload = model.model_dump_json(indent=indent)
        except Exception as e:
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {self.path}",
                technical_message=f"Cannot serialize {type(model).__name__}: {e}",
            ) from e

        self.path.parent.mkdir(parents=True, exist_ok=True)
        if backup and self.path.exists():
            shutil.copy2(self.path, self.backup_path)
            logger.debug(f"Backed up {self.path} to {self.backup_path}")

        temp_path = self._temp_path
        try:
            temp_path.write_text(payload, encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as e:
            logger.error(f"Could not write {self.path}: {e}")
            raise
        finally:
            if temp_path.exists():
                temp_path.unlink()

        logger.debug(f"Saved {type(model).__name__} to {self.path}")

    def restore_backup(self) -> M:
        """Validate the backup and move it back in place of the current file.

        Raises:
            FileNotFoundError: If there is no backup
            ConfigurationError: If the backup itself is invalid
        """
        model = ConfigFile(self.backup_path, self.model_type).load()
        self.save(model, backup=False)
        self.backup_path.unlink()
        logger.info(f"Restored {self.path} from {self.backup_path}")
        return model

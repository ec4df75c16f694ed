"""Configuration management for the selfencrypt CLI."""

import json
import os
import shutil
import tempfile
from pathlib import Path

from common.constants import DATA_MAP_FILENAME, DEFAULT_STORAGE_DIRNAME, MAX_FILE_SIZE
from common.logging_config import get_logger

logger = get_logger(__name__)


class Config:
    """Manages CLI configuration stored in JSON file."""

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.selfencrypt/config.json)
        """
        self.config_path = Path(config_path)
        self.data = self._load()

    @staticmethod
    def default_config() -> dict:
        """
        Default settings, resolved from the environment at call time.

        The storage directory defaults to a folder under the system temp
        directory; CHUNK_STORE_PATH overrides it.
        """
        storage_dir = os.environ.get(
            "CHUNK_STORE_PATH",
            str(Path(tempfile.gettempdir()) / DEFAULT_STORAGE_DIRNAME),
        )
        return {
            "storage_dir": storage_dir,
            "max_file_size": MAX_FILE_SIZE,
            "verify_reads": True,
            "log_level": os.environ.get("LOG_LEVEL", "INFO"),
        }

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.selfencrypt' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be an object")
                config = self.default_config()
                config.update(data)
                return config
            except (ValueError, OSError) as e:
                backup_path = self.config_path.with_suffix('.json.bak')
                logger.warning(f"Ignoring unreadable config {self.config_path}: {e}")
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Could not back up config to {backup_path}: {copy_error}")
                return self.default_config()
        else:
            config = self.default_config()
            try:
                with open(self.config_path, 'w') as f:
                    json.dump(config, f, indent=2)
            except OSError as e:
                logger.debug(f"Could not write default config to {self.config_path}: {e}")
            return config

    def get_storage_dir(self) -> Path:
        """
        Get the chunk store directory.

        Returns:
            Directory holding chunks and the data map
        """
        value = self.data.get('storage_dir')
        if not isinstance(value, str) or not value:
            logger.warning(f"Ignoring invalid storage_dir {value!r} in {self.config_path}")
            value = self.default_config()['storage_dir']
        return Path(value).expanduser()

    def get_data_map_path(self) -> Path:
        """
        Get the data map file path.

        Returns:
            Path of the data map inside the storage directory
        """
        return self.get_storage_dir() / DATA_MAP_FILENAME

    def get_max_file_size(self) -> int:
        """
        Get the largest source file size accepted for encryption.

        Never more than MAX_FILE_SIZE. A value that is not a positive integer
        is ignored with a warning.
        """
        value = self.data.get('max_file_size', MAX_FILE_SIZE)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            logger.warning(f"Ignoring invalid max_file_size {value!r} in {self.config_path}")
            return MAX_FILE_SIZE
        return min(value, MAX_FILE_SIZE)

    def get_verify_reads(self) -> bool:
        """Whether chunk reads are checked against their address."""
        value = self.data.get('verify_reads', True)
        if not isinstance(value, bool):
            logger.warning(f"Ignoring invalid verify_reads {value!r} in {self.config_path}")
            return True
        return value

    def get_log_level(self) -> str:
        """Get the configured log level name."""
        return str(self.data.get('log_level', 'INFO')).upper()

"""
memfs Configuration Loader

Configuration management for the in-memory filesystem:
- JSON configuration file loading
- Validation of filesystem limits
- Default value handling
- Runtime configuration updates with dot-notation keys

Author: YSNRFD
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from memfs.logger import LogLevel, get_logger


class ConfigValidationError(Exception):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.key = key


@dataclass
class FilesystemConfig:
    """Filesystem configuration settings."""
    separator: str = "/"
    initial_buffer_size: int = 512
    create_default_mode: int = 0o666
    default_dir_mode: int = 0o777
    max_file_size: Optional[int] = None  # None = bounded only by memory


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the filesystem and its logging.
    """
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def validate_config(config: Config) -> None:
    """
    Check configuration values for consistency.

    Raises:
        ConfigValidationError: On the first invalid value
    """
    fs = config.filesystem

    if not isinstance(fs.separator, str) or len(fs.separator) != 1:
        raise ConfigValidationError(
            f"separator must be a single character, got {fs.separator!r}",
            key="filesystem.separator"
        )

    if not isinstance(fs.initial_buffer_size, int) or fs.initial_buffer_size < 0:
        raise ConfigValidationError(
            f"initial_buffer_size must be a non-negative integer, "
            f"got {fs.initial_buffer_size!r}",
            key="filesystem.initial_buffer_size"
        )

    if fs.max_file_size is not None and (
        not isinstance(fs.max_file_size, int) or fs.max_file_size <= 0
    ):
        raise ConfigValidationError(
            f"max_file_size must be a positive integer or null, "
            f"got {fs.max_file_size!r}",
            key="filesystem.max_file_size"
        )

    for key in ("create_default_mode", "default_dir_mode"):
        value = getattr(fs, key)
        if not isinstance(value, int) or value < 0:
            raise ConfigValidationError(
                f"{key} must be a non-negative integer, got {value!r}",
                key=f"filesystem.{key}"
            )

    if not isinstance(config.logging.level, str) or (
        config.logging.level.upper() not in LogLevel.__members__
    ):
        raise ConfigValidationError(
            f"level must be one of {', '.join(LogLevel.__members__)}, "
            f"got {config.logging.level!r}",
            key="logging.level"
        )


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating settings,
    and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('memfs.json')
        >>> config.filesystem.initial_buffer_size
        512
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigValidationError: If the file cannot be loaded, parsed or
                contains invalid values
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigValidationError(
                f"Configuration file not found: {config_path}"
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(
                f"Invalid JSON in configuration file: {e}"
            ) from e
        except OSError as e:
            raise ConfigValidationError(
                f"Cannot read configuration file: {e}"
            ) from e

        config = self._parse_config(data)
        validate_config(config)

        self._config = config
        self._loaded = True

        get_logger('config').debug(
            "Configuration loaded",
            context={'path': str(path)}
        )
        return self._config

    def _parse_config(self, data: Any) -> Config:
        """Parse configuration data into Config object."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        config = Config()

        if 'filesystem' in data:
            fs_data = data['filesystem']
            if not isinstance(fs_data, dict):
                raise ConfigValidationError(
                    "filesystem section must be an object", key="filesystem"
                )
            config.filesystem = FilesystemConfig(
                separator=fs_data.get('separator', config.filesystem.separator),
                initial_buffer_size=fs_data.get(
                    'initial_buffer_size', config.filesystem.initial_buffer_size
                ),
                create_default_mode=_parse_mode(fs_data.get(
                    'create_default_mode', config.filesystem.create_default_mode
                )),
                default_dir_mode=_parse_mode(fs_data.get(
                    'default_dir_mode', config.filesystem.default_dir_mode
                )),
                max_file_size=fs_data.get(
                    'max_file_size', config.filesystem.max_file_size
                ),
            )

        if 'logging' in data:
            log_data = data['logging']
            if not isinstance(log_data, dict):
                raise ConfigValidationError(
                    "logging section must be an object", key="logging"
                )
            config.logging = LoggingConfig(
                level=str(log_data.get('level', config.logging.level)).upper(),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get(
                    'console_output', config.logging.console_output
                ),
                use_colors=log_data.get('use_colors', config.logging.use_colors),
            )

        return config

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'filesystem.separator')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        The change is validated and kept in memory only.

        Raises:
            ConfigValidationError: If the key is unknown or the value invalid
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(
                    f"Invalid configuration key: {key}", key=key
                )

        final_key = parts[-1]
        if not hasattr(obj, '__dataclass_fields__') or final_key not in {
            f.name for f in fields(obj)
        }:
            raise ConfigValidationError(
                f"Invalid configuration key: {key}", key=key
            )

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            validate_config(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> None:
        """Restore the default configuration."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self._config)


def _parse_mode(value: Any) -> Any:
    """Accept modes written either as integers or as octal strings ("0o644")."""
    if isinstance(value, str):
        try:
            return int(value, 8)
        except ValueError:
            raise ConfigValidationError(f"Invalid mode: {value!r}") from None
    return value


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config

"""
memfs Bootstrap

Wires configuration, logging and the filesystem together:

    1. Load configuration (defaults when no file is given or found)
    2. Initialize logging from the logging section
    3. Create the filesystem from the filesystem section

Author: YSNRFD
Version: 1.0.0
"""

from pathlib import Path
from typing import Optional

from memfs.core.config_loader import Config, ConfigLoader, get_config
from memfs.filesystem.vfs import MemoryFilesystem
from memfs.logger import Logger, LogLevel, get_logger


def init_logging(config: Optional[Config] = None) -> None:
    """Initialize the logging system from the logging configuration."""
    config = config or get_config()

    Logger.initialize(
        level=LogLevel[config.logging.level.upper()],
        log_file=config.logging.log_file,
        use_colors=config.logging.use_colors,
        console_output=config.logging.console_output
    )


def new_filesystem(config_path: Optional[str] = None) -> MemoryFilesystem:
    """
    Create a filesystem the way an application would at startup.

    Args:
        config_path: Optional JSON configuration file. A missing file falls
            back to the defaults; an invalid one is an error.

    Raises:
        ConfigValidationError: If the file exists but is invalid
    """
    loader = ConfigLoader()
    missing = False

    if config_path is not None:
        if Path(config_path).exists():
            loader.load(config_path)
        else:
            missing = True

    config = loader.config
    init_logging(config)

    logger = get_logger('config')
    if missing:
        logger.warning(
            "Configuration file not found, using defaults",
            context={'path': config_path}
        )

    fs = MemoryFilesystem(config.filesystem)
    get_logger('filesystem').info(
        "Filesystem created",
        context={
            'separator': config.filesystem.separator,
            'max_file_size': config.filesystem.max_file_size,
        }
    )
    return fs


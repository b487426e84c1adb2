"""
memfs Core Module

Configuration loading and filesystem bootstrap helpers.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    ConfigValidationError,
    FilesystemConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'ConfigValidationError',
    'FilesystemConfig',
    'LoggingConfig',
    'get_config',
]

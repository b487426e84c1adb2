"""
memfs - A volatile in-memory hierarchical filesystem

Application code written against a file-like API can be tested or
sandboxed without touching the disk. Everything lives in process memory
and disappears with the filesystem object.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

from .exceptions import (
    FileSystemException,
    ReadOnlyError,
    WriteOnlyError,
    TooLargeError,
    NegativeSeekError,
    InvalidWhenceError,
    TooFarError,
    ClosedFileError,
    NotExistError,
    ExistError,
    IsDirectoryError,
    NotDirectoryError,
)
from .filesystem import (
    File,
    FileInfo,
    Filesystem,
    MemoryFilesystem,
    OpenFlag,
    Whence,
)
from .core.bootstrap import new_filesystem

__all__ = [
    'File',
    'FileInfo',
    'Filesystem',
    'MemoryFilesystem',
    'OpenFlag',
    'Whence',
    'new_filesystem',
    # Errors
    'FileSystemException',
    'ReadOnlyError',
    'WriteOnlyError',
    'TooLargeError',
    'NegativeSeekError',
    'InvalidWhenceError',
    'TooFarError',
    'ClosedFileError',
    'NotExistError',
    'ExistError',
    'IsDirectoryError',
    'NotDirectoryError',
]

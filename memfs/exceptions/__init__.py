"""
memfs Exception Hierarchy

All filesystem errors inherit from FileSystemException. Each subclass is a
fixed error kind callers can catch individually.

Architecture:
    FileSystemException (Base)
    ├── Handle errors
    │   ├── ReadOnlyError
    │   ├── WriteOnlyError
    │   ├── TooLargeError
    │   ├── NegativeSeekError
    │   ├── InvalidWhenceError
    │   ├── TooFarError
    │   └── ClosedFileError
    └── Tree errors
        ├── NotExistError
        ├── ExistError
        ├── IsDirectoryError
        └── NotDirectoryError
"""

from .fs_exceptions import (
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

__all__ = [
    "FileSystemException",
    # Handle errors
    "ReadOnlyError",
    "WriteOnlyError",
    "TooLargeError",
    "NegativeSeekError",
    "InvalidWhenceError",
    "TooFarError",
    "ClosedFileError",
    # Tree errors
    "NotExistError",
    "ExistError",
    "IsDirectoryError",
    "NotDirectoryError",
]

"""
Filesystem Exceptions

Exceptions raised by the in-memory filesystem, its open handles and the
path resolver. Every kind is local and recoverable: catching it leaves the
filesystem in a consistent state.

Handle operations raise the bare kind. Filesystem operations attach the
attempted operation ("open", "mkdir", "stat") and the path, so the
rendered message reads like a path error:

    open /etc/missing.txt: file does not exist

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: File path associated with the error (if applicable)
        operation: Operation that failed (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Structured details for logging
    """

    default_message = "filesystem error"
    error_code = 4000

    def __init__(
        self,
        message: Optional[str] = None,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.path = path
        self.operation = operation
        self.context = dict(context or {})
        if path is not None:
            self.context["path"] = path
        if operation is not None:
            self.context["operation"] = operation

    def with_path(self, operation: str, path: str) -> 'FileSystemException':
        """
        Return a copy of this error tagged with an operation and path.

        Used by the filesystem to turn a bare kind raised during path
        resolution into a path error, keeping the kind intact.
        """
        return type(self)(
            message=self.message,
            path=path,
            operation=operation,
            context=self.context
        )

    def __str__(self) -> str:
        if self.operation and self.path is not None:
            return f"{self.operation} {self.path}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"path={self.path!r}, operation={self.operation!r})"
        )


# Handle errors

class ReadOnlyError(FileSystemException):
    """Write attempted on a handle opened read-only."""

    default_message = "read-only file"
    error_code = 4101


class WriteOnlyError(FileSystemException):
    """Read attempted on a handle opened write-only."""

    default_message = "write-only file"
    error_code = 4102


class TooLargeError(FileSystemException):
    """
    File buffer cannot grow any further.

    Raised when the storage behind a file cannot be reallocated, either
    because the interpreter ran out of memory or because a configured
    maximum file size would be exceeded.

    Example:
        >>> raise TooLargeError(context={'requested': 1 << 40})
    """

    default_message = "file too large"
    error_code = 4103


class NegativeSeekError(FileSystemException):
    """Seek would move the cursor before the start of the file."""

    default_message = "negative seek offset"
    error_code = 4104


class InvalidWhenceError(FileSystemException):
    """Seek called with an unknown reference point."""

    default_message = "invalid seek whence"
    error_code = 4105


class TooFarError(FileSystemException):
    """Seek would move the cursor past the end of the data."""

    default_message = "seek past end of file"
    error_code = 4106


class ClosedFileError(FileSystemException):
    """I/O attempted on a handle that was already closed."""

    default_message = "file already closed"
    error_code = 4107


# Tree errors

class NotExistError(FileSystemException):
    """
    The path does not resolve to an existing node.

    Raised when the final component is missing, or when any
    intermediate component is missing or is a regular file.

    Example:
        >>> raise NotExistError(path="/tmp/missing", operation="open")
    """

    default_message = "file does not exist"
    error_code = 4001


class ExistError(FileSystemException):
    """
    A node already occupies the target path.

    Example:
        >>> raise ExistError(path="/tmp", operation="mkdir")
    """

    default_message = "file already exists"
    error_code = 4002


class IsDirectoryError(FileSystemException):
    """A file operation was attempted on a directory."""

    default_message = "file is a directory"
    error_code = 4008


class NotDirectoryError(FileSystemException):
    """A directory operation was attempted on a regular file."""

    default_message = "not a directory"
    error_code = 4009

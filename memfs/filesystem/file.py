"""
Open File Module

Open handles over file buffers:
- MemoryFile: cursor-based read/write/seek over a shared Buffer
- ReadOnlyFile / WriteOnlyFile: permission wrappers that block one
  operation and forward everything else

Reading at or past the end of the data is not an error: read() returns
b'' and readinto() returns 0. Permission and seek failures raise the
matching error kind and leave the cursor where it was.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional, Any

from .buffer import Buffer
from .flags import Whence
from memfs.exceptions import (
    ReadOnlyError,
    WriteOnlyError,
    NegativeSeekError,
    InvalidWhenceError,
    TooFarError,
    ClosedFileError,
)


class File(ABC):
    """
    Capability set of an open file.

    Implemented by the base handle and by the permission wrappers, so
    callers never need to know which one they hold.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Full path of the node the handle was opened on."""

    @property
    @abstractmethod
    def closed(self) -> bool:
        ...

    @abstractmethod
    def read(self, size: Optional[int] = -1) -> bytes:
        ...

    @abstractmethod
    def readinto(self, dest: Any) -> int:
        ...

    @abstractmethod
    def write(self, data: Any) -> int:
        ...

    @abstractmethod
    def seek(self, offset: int, whence: int = Whence.START) -> int:
        ...

    @abstractmethod
    def tell(self) -> int:
        ...

    @abstractmethod
    def close(self) -> None:
        ...

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def __enter__(self) -> 'File':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class MemoryFile(File):
    """
    Read-write handle over a Buffer.

    The cursor always satisfies 0 <= offset <= len(buffer) after any
    operation. Writes are synchronous: there is nothing to flush.

    Example:
        >>> f = MemoryFile('/foo.txt', Buffer())
        >>> f.write(b'Hello world!')
        12
        >>> f.seek(6)
        6
        >>> f.read()
        b'world!'
    """

    def __init__(self, name: str, buffer: Buffer) -> None:
        self._name = name
        self._buffer = buffer
        self._offset = 0
        self._closed = False

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} name={self._name!r} "
            f"offset={self._offset} closed={self._closed}>"
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise ClosedFileError(context={'name': self._name})

    def read(self, size: Optional[int] = -1) -> bytes:
        """
        Read up to size bytes from the cursor.

        Args:
            size: Bytes to read (None or negative for all remaining)

        Returns:
            Data read; b'' at end of data
        """
        self._check_open()

        if size is None:
            size = -1
        data = self._buffer.read_at(self._offset, size)
        self._offset += len(data)
        return data

    def readinto(self, dest: Any) -> int:
        """
        Copy bytes from the cursor into a writable buffer.

        Returns:
            Bytes copied, min(len(dest), remaining); 0 at end of data
        """
        self._check_open()

        if self._offset >= len(self._buffer):
            return 0

        view = memoryview(dest).cast('B')
        count = self._buffer.readinto_at(self._offset, view)
        self._offset += count
        return count

    def write(self, data: Any) -> int:
        """
        Write bytes at the cursor, growing the buffer when needed.

        Either every byte is written or, on TooLargeError, none is and the
        cursor does not move.

        Returns:
            Number of bytes written, always len(data)
        """
        self._check_open()

        view = memoryview(data).cast('B')
        n = len(view)
        end = self._offset + n

        if end > len(self._buffer):
            self._buffer.grow(n)

        self._buffer.write_at(self._offset, view)
        self._offset = end
        return n

    def seek(self, offset: int, whence: int = Whence.START) -> int:
        """
        Move the cursor.

        Seeking is bounded by the current length: a file cannot be
        extended by seeking past its end.

        Args:
            offset: Displacement relative to whence
            whence: Whence.START, Whence.CURRENT or Whence.END

        Returns:
            The new offset

        Raises:
            InvalidWhenceError: Unknown whence
            NegativeSeekError: Target before the start of the file
            TooFarError: Target past the end of the data
        """
        self._check_open()

        try:
            whence = Whence(whence)
        except ValueError:
            raise InvalidWhenceError(context={'whence': whence}) from None

        if whence is Whence.START:
            target = offset
        elif whence is Whence.CURRENT:
            target = self._offset + offset
        else:
            target = len(self._buffer) + offset

        if target < 0:
            raise NegativeSeekError(context={'offset': target})

        if target > len(self._buffer):
            raise TooFarError(
                context={'offset': target, 'size': len(self._buffer)}
            )

        self._offset = target
        return self._offset

    def tell(self) -> int:
        self._check_open()
        return self._offset

    def close(self) -> None:
        """Mark the handle closed. Closing twice is allowed."""
        self._closed = True


class FileWrapper(File):
    """Forwards every operation to the wrapped file."""

    def __init__(self, file: File) -> None:
        self._file = file

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self._file!r}>"

    @property
    def name(self) -> str:
        return self._file.name

    @property
    def closed(self) -> bool:
        return self._file.closed

    def read(self, size: Optional[int] = -1) -> bytes:
        return self._file.read(size)

    def readinto(self, dest: Any) -> int:
        return self._file.readinto(dest)

    def write(self, data: Any) -> int:
        return self._file.write(data)

    def seek(self, offset: int, whence: int = Whence.START) -> int:
        return self._file.seek(offset, whence)

    def tell(self) -> int:
        return self._file.tell()

    def close(self) -> None:
        self._file.close()

    def readable(self) -> bool:
        return self._file.readable()

    def writable(self) -> bool:
        return self._file.writable()


class ReadOnlyFile(FileWrapper):
    """Handle opened without write access."""

    def write(self, data: Any) -> int:
        raise ReadOnlyError(context={'name': self.name})

    def writable(self) -> bool:
        return False


class WriteOnlyFile(FileWrapper):
    """Handle opened without read access."""

    def read(self, size: Optional[int] = -1) -> bytes:
        raise WriteOnlyError(context={'name': self.name})

    def readinto(self, dest: Any) -> int:
        raise WriteOnlyError(context={'name': self.name})

    def readable(self) -> bool:
        return False

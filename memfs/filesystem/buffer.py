"""
Buffer Module

Growable byte storage backing a regular file.

A Buffer keeps a logical length (bytes currently valid) separate from its
physical capacity (bytes allocated). Growth doubles the capacity, so a
sequence of small appends costs amortized constant time per byte.

The same Buffer object is shared by the file node and by every handle
opened on it: a write through one handle is visible to every other
handle, whenever it was opened. Reallocation replaces the storage inside
the Buffer, never the Buffer itself, so the sharing survives growth.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional

from memfs.exceptions import TooLargeError
from memfs.logger import get_logger


INITIAL_DATA_SIZE = 512


class Buffer:
    """
    Growable in-memory byte store.

    Invariant: 0 <= len(buffer) <= buffer.capacity.

    Example:
        >>> buf = Buffer(capacity=4)
        >>> buf.grow(6)
        >>> len(buf), buf.capacity
        (6, 10)
    """

    __slots__ = ('_data', '_length', '_max_size')

    def __init__(
        self,
        capacity: int = INITIAL_DATA_SIZE,
        max_size: Optional[int] = None
    ) -> None:
        """
        Create an empty buffer.

        Args:
            capacity: Bytes to pre-allocate
            max_size: Upper bound on the logical length (None for no bound)
        """
        if capacity < 0:
            raise ValueError(f"Negative buffer capacity: {capacity}")
        self._data = self._allocate(capacity)
        self._length = 0
        self._max_size = max_size

    @staticmethod
    def _allocate(size: int) -> bytearray:
        # Every allocation failure surfaces as the same error kind.
        try:
            return bytearray(size)
        except (MemoryError, OverflowError):
            get_logger('buffer').warning(
                "Buffer allocation failed",
                context={'requested': size}
            )
            raise TooLargeError(context={'requested': size}) from None

    def __len__(self) -> int:
        return self._length

    def __repr__(self) -> str:
        return f"Buffer(length={self._length}, capacity={self.capacity})"

    @property
    def capacity(self) -> int:
        return len(self._data)

    @property
    def max_size(self) -> Optional[int]:
        return self._max_size

    def grow(self, n: int) -> None:
        """
        Extend the logical length by n bytes.

        Reallocates when the capacity is insufficient, to the larger of
        twice the current capacity and the current capacity plus n.
        Storage past the length has never been written, so the new
        region reads as zero bytes until a caller overwrites it.

        Raises:
            TooLargeError: If the storage cannot be allocated or max_size
                would be exceeded. The buffer is left untouched.
        """
        if n < 0:
            raise ValueError(f"Negative growth: {n}")

        needed = self._length + n

        if self._max_size is not None and needed > self._max_size:
            get_logger('buffer').warning(
                "Maximum file size exceeded",
                context={'requested': needed, 'max_size': self._max_size}
            )
            raise TooLargeError(
                context={'requested': needed, 'max_size': self._max_size}
            )

        capacity = self.capacity
        if needed > capacity:
            new_capacity = max(2 * capacity, capacity + n)
            data = self._allocate(new_capacity)
            data[:self._length] = self._data[:self._length]
            self._data = data

            get_logger('buffer').debug(
                "Buffer reallocated",
                context={'old_capacity': capacity, 'new_capacity': new_capacity}
            )

        self._length = needed

    def read_at(self, offset: int, size: int = -1) -> bytes:
        """Return up to size valid bytes starting at offset."""
        end = self._length if size < 0 else min(offset + size, self._length)
        if offset >= end:
            return b''
        return bytes(self._data[offset:end])

    def readinto_at(self, offset: int, dest: memoryview) -> int:
        """Copy valid bytes starting at offset into dest, return the count."""
        count = max(0, min(len(dest), self._length - offset))
        if count:
            dest[:count] = self._data[offset:offset + count]
        return count

    def write_at(self, offset: int, data: memoryview) -> None:
        """
        Overwrite bytes in place.

        The target range must lie within the logical length; grow() first
        when it does not.
        """
        end = offset + len(data)
        if offset < 0 or end > self._length:
            raise ValueError(
                f"Write range [{offset}, {end}) outside buffer of length {self._length}"
            )
        self._data[offset:end] = data

    def getvalue(self) -> bytes:
        """Return a copy of the valid bytes."""
        return bytes(self._data[:self._length])

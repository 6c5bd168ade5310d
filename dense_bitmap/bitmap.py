import logging
from typing import Iterator, Optional

from .base import (
    BITS,
    MASK,
    SHIFT,
    AllocationError,
    BitmapReleasedError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    byte_count,
    config,
)
from .utils import normalized_copy, popcount, range_mask


logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Bitmap:
    """
    Fixed-capacity dense bitmap storing membership of the integers ``0..size``.

    ``size`` is the highest addressable index, so a bitmap holds ``size + 1``
    bits backed by ``size // 8 + 1`` bytes. Bit ``i`` lives in byte ``i >> 3``
    at position ``i & 7`` (bit 0 is the least significant).

    Bits of the last byte beyond ``size`` ("tail bits") are not kept in any
    particular state by single-bit, range or fill operations. Everything that
    reads the buffer as a whole (count, algebra, equality, iteration) works on
    a normalised copy instead.

    >>> b = Bitmap(16)
    >>> b.set(0); b.set(15); b.set(16)
    >>> b.count()
    3
    >>> b.test(8)
    0
    """

    __slots__ = ("size", "_data")

    def __init__(self, size: int):
        if not _is_int(size) or size <= 0:
            raise InvalidArgumentError(f"Bitmap size must be a positive integer, got {size!r}")
        self.size = size
        self._data: Optional[bytearray] = self._allocate(byte_count(size))

    @staticmethod
    def _allocate(nbytes: int) -> bytearray:
        limit = config.get("max_bytes")
        if limit is not None and nbytes > limit:
            logger.error(f"Refusing to allocate {nbytes} bytes, configured limit is {limit}")
            raise AllocationError(f"Bitmap needs {nbytes} bytes, limit is {limit}")
        try:
            data = bytearray(nbytes)
        except (MemoryError, OverflowError) as e:
            logger.error(f"Failed to allocate {nbytes} bytes: {e}")
            raise AllocationError(f"Out of memory allocating {nbytes} bytes") from e
        logger.debug(f"Allocated bitmap storage of {nbytes} bytes")
        return data

    # --- storage ---

    @property
    def _storage(self) -> bytearray:
        if self._data is None:
            raise BitmapReleasedError("Bitmap storage has already been released")
        return self._data

    @property
    def capacity(self) -> int:
        """Number of addressable bits (``size + 1``)."""
        return self.size + 1

    @property
    def nbytes(self) -> int:
        return byte_count(self.size)

    @property
    def released(self) -> bool:
        return self._data is None

    def destroy(self):
        """Release the backing buffer. Calling it again is a no-op."""
        if self._data is not None:
            logger.debug(f"Released bitmap storage of {len(self._data)} bytes")
            self._data = None

    def __enter__(self) -> "Bitmap":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.destroy()

    def copy(self) -> "Bitmap":
        result = Bitmap(self.size)
        result._storage[:] = self._storage
        return result

    def as_bytes(self) -> bytes:
        """Snapshot of the storage with tail bits cleared."""
        return bytes(normalized_copy(self._storage, self.size))

    # --- single bits ---

    def _locate(self, index: int):
        if not _is_int(index):
            raise InvalidArgumentError(f"Bit index must be an integer, got {index!r}")
        if index < 0 or index > self.size:
            raise IndexOutOfRangeError(f"Index {index} outside 0..{self.size}")
        return index >> SHIFT, index & MASK

    def set(self, index: int):
        data = self._storage
        byte, bit = self._locate(index)
        data[byte] |= 1 << bit

    def clear(self, index: int):
        data = self._storage
        byte, bit = self._locate(index)
        data[byte] &= ~(1 << bit) & 0xFF

    def test(self, index: int) -> int:
        """Return 1 if bit ``index`` is set, else 0."""
        data = self._storage
        byte, bit = self._locate(index)
        return (data[byte] >> bit) & 1

    def set_all(self):
        data = self._storage
        data[:] = b"\xff" * len(data)

    def clear_all(self):
        data = self._storage
        data[:] = bytes(len(data))

    # --- ranges ---

    def set_range(self, begin: int, end: int):
        """Set every bit in ``[begin, end)``."""
        self._fill_range(begin, end, True)

    def clear_range(self, begin: int, end: int):
        """Clear every bit in ``[begin, end)``."""
        self._fill_range(begin, end, False)

    def _fill_range(self, begin: int, end: int, on: bool):
        data = self._storage
        if not (_is_int(begin) and _is_int(end)):
            raise InvalidArgumentError(f"Range bounds must be integers, got [{begin!r}, {end!r})")
        if not 0 <= begin <= end <= self.capacity:
            raise InvalidArgumentError(f"Range [{begin}, {end}) not within [0, {self.capacity}]")
        if begin == end:
            return

        start_byte, end_byte = begin >> SHIFT, end >> SHIFT
        lo, hi = begin & MASK, end & MASK

        if start_byte == end_byte:
            self._apply_mask(data, start_byte, range_mask(lo, hi), on)
            return

        self._apply_mask(data, start_byte, range_mask(lo, BITS), on)
        data[start_byte + 1:end_byte] = (b"\xff" if on else b"\x00") * (end_byte - start_byte - 1)
        # end on a byte boundary leaves nothing to mask (and may be one past the buffer)
        if hi:
            self._apply_mask(data, end_byte, range_mask(0, hi), on)

    @staticmethod
    def _apply_mask(data: bytearray, pos: int, mask: int, on: bool):
        if on:
            data[pos] |= mask
        else:
            data[pos] &= ~mask & 0xFF

    # --- whole-buffer reads ---

    def count(self) -> int:
        """Number of set bits in ``0..size``; tail bits are ignored, storage is untouched."""
        return popcount(normalized_copy(self._storage, self.size))

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, index) -> bool:
        if not _is_int(index) or index < 0 or index > self.size:
            return False
        return bool(self.test(index))

    def __iter__(self) -> Iterator[int]:
        for pos, byte in enumerate(normalized_copy(self._storage, self.size)):
            base = pos << SHIFT
            while byte:
                low = byte & -byte
                yield base + low.bit_length() - 1
                byte ^= low

    def __eq__(self, other) -> bool:
        if not isinstance(other, Bitmap):
            return NotImplemented
        return self.size == other.size and self.as_bytes() == other.as_bytes()

    __hash__ = None

    def __repr__(self) -> str:
        if self.released:
            return f"{type(self).__name__}(size={self.size}, released)"
        return f"{type(self).__name__}(size={self.size}, count={self.count()})"

    # --- algebra operators ---

    def __or__(self, other: "Bitmap") -> "Bitmap":
        from .algebra import bitmap_or
        return bitmap_or(self, other)

    def __and__(self, other: "Bitmap") -> "Bitmap":
        from .algebra import bitmap_and
        return bitmap_and(self, other)

    def __xor__(self, other: "Bitmap") -> "Bitmap":
        from .algebra import bitmap_xor
        return bitmap_xor(self, other)

    def __iand__(self, other: "Bitmap") -> "Bitmap":
        from .algebra import samesize_and
        return samesize_and(self, other)

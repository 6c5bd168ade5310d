from typing import Union

from .base import MASK


def _bits_in(n: int) -> int:
    count = 0
    while n:
        n &= n - 1  # drop the lowest set bit
        count += 1
    return count


# Number of '1' bits in each byte value (0-255)
BYTE_COUNTS = bytes(_bits_in(byte) for byte in range(256))


def tail_mask(size: int) -> int:
    """Mask of the meaningful bits in the last byte of a bitmap of ``size``."""
    return (1 << ((size & MASK) + 1)) - 1


def range_mask(lo: int, hi: int) -> int:
    """Single-byte mask covering bit positions ``[lo, hi)``, with 0 <= lo <= hi <= 8."""
    return (0xFF << lo) & ~(0xFF << hi) & 0xFF


def normalized_copy(data: Union[bytes, bytearray], size: int, pad_byte: int = 0x00) -> bytearray:
    """
    Return a copy of ``data`` whose tail bits are forced to ``pad_byte``'s value.

    The caller's buffer is never touched.
    """
    work = bytearray(data)
    if work:
        keep = tail_mask(size)
        work[-1] = (work[-1] & keep) | (pad_byte & ~keep & 0xFF)
    return work


def popcount(data: Union[bytes, bytearray]) -> int:
    return sum(BYTE_COUNTS[byte] for byte in data)

import operator
import os
from enum import Enum
from typing import Any, Callable, Dict, Optional


# 1 byte = 8 bits = 2^3 bits
BITS = 8
SHIFT = 3
MASK = 0x7


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return None
    value = int(raw)
    return value if value > 0 else None


config: Dict[str, Any] = {
    "max_bytes": _env_int("DENSE_BITMAP_MAX_BYTES"),
}


class BitmapError(Exception):
    """Base class for every error raised by the bitmap library."""


class AllocationError(BitmapError, MemoryError):
    """The backing buffer could not be allocated."""


class InvalidArgumentError(BitmapError, ValueError):
    """A caller contract was violated (bad size, range, alignment or operand)."""


class IndexOutOfRangeError(BitmapError, IndexError):
    """A single-bit index lies outside ``0..size``."""


class BitmapReleasedError(BitmapError, RuntimeError):
    """The bitmap's storage has already been released."""


class BitwiseOp(Enum):
    """Binary operators supported by the allocating set-algebra functions."""
    OR = "or"
    AND = "and"
    XOR = "xor"

    @property
    def pad_byte(self) -> int:
        """Identity value used for missing and tail bits (X op pad == X)."""
        return 0xFF if self is BitwiseOp.AND else 0x00

    @property
    def func(self) -> Callable[[int, int], int]:
        return {
            BitwiseOp.OR: operator.or_,
            BitwiseOp.AND: operator.and_,
            BitwiseOp.XOR: operator.xor,
        }[self]


def byte_count(size: int) -> int:
    """
    Number of bytes backing a bitmap of the given size.

    ``size`` is the highest addressable index, so ``size + 1`` bits are stored.
    When ``size`` is a multiple of 8 the bit ``size`` itself starts a new byte,
    hence the unconditional ``+ 1``.
    """
    return (size >> SHIFT) + 1

from typing import Optional

from .algebra import bitmap_and, bitmap_or, bitmap_xor, count, samesize_and
from .base import (
    AllocationError,
    BitmapError,
    BitmapReleasedError,
    BitwiseOp,
    IndexOutOfRangeError,
    InvalidArgumentError,
    byte_count,
    config,
)
from .bitmap import Bitmap
from .transfer import move_range_to_new, move_range_to_old


__all__ = [
    "Bitmap",
    "BitwiseOp",
    "BitmapError",
    "AllocationError",
    "InvalidArgumentError",
    "IndexOutOfRangeError",
    "BitmapReleasedError",
    "bitmap_or",
    "bitmap_and",
    "bitmap_xor",
    "samesize_and",
    "count",
    "move_range_to_new",
    "move_range_to_old",
    "byte_count",
    "config",
    "create",
    "destroy",
]

__version__ = "1.0.0"


def create(size: int) -> Bitmap:
    """
    Factory function for a zeroed bitmap addressing ``0..size``.

    Raises InvalidArgumentError for a non-positive size and AllocationError
    when the storage cannot be allocated.
    """
    return Bitmap(size)


def destroy(bitmap: Optional[Bitmap]):
    """Release ``bitmap``'s storage; ``None`` and released bitmaps are ignored."""
    if bitmap is not None:
        bitmap.destroy()

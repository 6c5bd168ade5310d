"""
Set algebra across bitmaps of possibly different sizes.

The allocating operators size their result to the larger operand. Over the
overlapping bytes the result is the true bitwise combination; the bytes only
the larger operand has are copied through unchanged. This is the same as
padding the smaller operand with the operator's identity (0 for OR/XOR,
1 for AND), which is also the value each operand's tail bits are forced to
before combining. Inputs are never modified.
"""
from .base import BitwiseOp, InvalidArgumentError
from .bitmap import Bitmap
from .utils import normalized_copy


def _check_operand(value, name: str):
    if not isinstance(value, Bitmap):
        raise InvalidArgumentError(f"{name} must be a Bitmap, got {type(value).__name__}")


def _to_int(data: bytearray) -> int:
    return int.from_bytes(data, "little")


def combine(x1: Bitmap, x2: Bitmap, op: BitwiseOp) -> Bitmap:
    """Return a new bitmap of ``x1 op x2`` sized to ``max(x1.size, x2.size)``."""
    _check_operand(x1, "x1")
    _check_operand(x2, "x2")

    pad = op.pad_byte
    left = normalized_copy(x1._storage, x1.size, pad)
    right = normalized_copy(x2._storage, x2.size, pad)

    result = Bitmap(max(x1.size, x2.size))
    width = result.nbytes
    left += bytes([pad]) * (width - len(left))
    right += bytes([pad]) * (width - len(right))

    combined = op.func(_to_int(left), _to_int(right))
    result._storage[:] = combined.to_bytes(width, "little")
    return result


def bitmap_or(x1: Bitmap, x2: Bitmap) -> Bitmap:
    return combine(x1, x2, BitwiseOp.OR)


def bitmap_and(x1: Bitmap, x2: Bitmap) -> Bitmap:
    return combine(x1, x2, BitwiseOp.AND)


def bitmap_xor(x1: Bitmap, x2: Bitmap) -> Bitmap:
    return combine(x1, x2, BitwiseOp.XOR)


def samesize_and(result: Bitmap, x2: Bitmap) -> Bitmap:
    """
    Intersect ``x2`` into ``result`` in place and return ``result``.

    Both bitmaps must have the same size. ``x2``'s tail bits count as 1, so
    ``result`` keeps whatever tail it had. ``x2`` may be ``result`` itself.
    """
    _check_operand(result, "result")
    _check_operand(x2, "x2")
    if result.size != x2.size:
        raise InvalidArgumentError(f"samesize_and needs equal sizes, got {result.size} and {x2.size}")

    other = normalized_copy(x2._storage, x2.size, 0xFF)
    data = result._storage
    data[:] = (_to_int(data) & _to_int(other)).to_bytes(len(data), "little")
    return result


def count(bitmap: Bitmap) -> int:
    """Population count of ``bitmap`` over ``0..size``."""
    _check_operand(bitmap, "bitmap")
    return bitmap.count()

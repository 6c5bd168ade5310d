"""
Byte-aligned region transfer between bitmaps.

Both directions copy whole bytes only: ``offset`` and ``count`` must be
multiples of 8 and ``count`` must be positive. No bit-level shifting is done.
"""
import logging

from .base import BITS, SHIFT, InvalidArgumentError
from .bitmap import Bitmap


logger = logging.getLogger(__name__)


def _reject(message: str):
    logger.error(message)
    raise InvalidArgumentError(message)


def _check_region(offset: int, count: int):
    for name, value in (("offset", offset), ("count", count)):
        if not isinstance(value, int) or isinstance(value, bool):
            _reject(f"{name} must be an integer, got {value!r}")
    if offset < 0 or offset % BITS:
        _reject(f"offset must be a non-negative multiple of {BITS}, got {offset}")
    if count <= 0 or count % BITS:
        _reject(f"count must be a positive multiple of {BITS}, got {count}")


def move_range_to_new(source: Bitmap, offset: int, count: int) -> Bitmap:
    """
    Copy bits ``[offset, offset + count)`` of ``source`` into a new bitmap.

    The new bitmap holds exactly ``count`` bits renumbered from 0, so its
    ``size`` is ``count - 1``.
    """
    if not isinstance(source, Bitmap):
        _reject(f"source must be a Bitmap, got {type(source).__name__}")
    _check_region(offset, count)
    if offset + count > source.capacity:
        _reject(f"Region [{offset}, {offset + count}) exceeds source capacity {source.capacity}")

    start = offset >> SHIFT
    result = Bitmap(count - 1)
    result._storage[:] = source._storage[start:start + (count >> SHIFT)]
    return result


def move_range_to_old(dest: Bitmap, source: Bitmap, offset: int, count: int):
    """Copy the first ``count`` bits of ``source`` into ``dest`` at bit ``offset``."""
    if not isinstance(dest, Bitmap):
        _reject(f"dest must be a Bitmap, got {type(dest).__name__}")
    if not isinstance(source, Bitmap):
        _reject(f"source must be a Bitmap, got {type(source).__name__}")
    _check_region(offset, count)
    if offset + count > dest.capacity:
        _reject(f"dest has no room for [{offset}, {offset + count}), capacity is {dest.capacity}")
    if count > source.capacity:
        _reject(f"source holds {source.capacity} bits, cannot copy {count}")

    start, nbytes = offset >> SHIFT, count >> SHIFT
    chunk = source._storage[:nbytes]
    dest._storage[start:start + nbytes] = chunk

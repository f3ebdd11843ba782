# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Fixed-width integer readers

Bounds-checked big/little-endian readers over a byte buffer. Every reader
returns 0 when the requested range does not lie entirely inside the buffer,
so a single bad offset inside camera-generated data never aborts a parse.

Copyright 2025 DNAi inc.
"""

import struct
from typing import Optional


def endian_prefix(little_endian: bool) -> str:
    """Return the struct byte-order prefix for the given order."""
    return '<' if little_endian else '>'


def _unpack(fmt: str, buffer: Optional[bytes], offset: int, little_endian: bool) -> int:
    size = struct.calcsize(fmt)
    if buffer is None or offset < 0 or offset + size > len(buffer):
        return 0
    return struct.unpack_from(endian_prefix(little_endian) + fmt, buffer, offset)[0]


def to_uint16(buffer: Optional[bytes], offset: int, little_endian: bool) -> int:
    """
    Read an unsigned 16-bit integer.

    Args:
        buffer: Source bytes
        offset: Offset of the first byte
        little_endian: True for Intel (II) order, False for Motorola (MM)

    Returns:
        The value, or 0 when the read would leave the buffer
    """
    return _unpack('H', buffer, offset, little_endian)


def to_int16(buffer: Optional[bytes], offset: int, little_endian: bool) -> int:
    """Read a signed 16-bit integer, 0 when out of range."""
    return _unpack('h', buffer, offset, little_endian)


def to_uint32(buffer: Optional[bytes], offset: int, little_endian: bool) -> int:
    """Read an unsigned 32-bit integer, 0 when out of range."""
    return _unpack('I', buffer, offset, little_endian)


def to_int32(buffer: Optional[bytes], offset: int, little_endian: bool) -> int:
    """
    Read a signed 32-bit integer, 0 when out of range.

    Counts and value offsets in a directory entry are read with this reader,
    so a corrupt entry can yield a negative count or offset. Callers treat
    negative offsets as out of range.
    """
    return _unpack('i', buffer, offset, little_endian)

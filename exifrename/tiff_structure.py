# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF container utilities

This module locates the TIFF container inside an arbitrary byte buffer
(for example the raw bytes of a JPEG file) and parses the 8-byte TIFF
header that starts it.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from exifrename.byte_reader import to_int32, to_uint16

logger = logging.getLogger(__name__)

# APP1 payload marker that precedes the TIFF header in JPEG files
EXIF_SIGNATURE = b'Exif\x00\x00'

TIFF_MAGIC = 42
TIFF_HEADER_SIZE = 8

# Shortest buffer worth scanning for a container
MIN_BUFFER_SIZE = 16


@dataclass(frozen=True)
class TiffHeader:
    """
    Parsed TIFF header.

    A header is valid only when the byte order marker is ``II`` or ``MM``
    and the magic number equals 42. Anything else is represented by the
    empty header, from which no further parsing proceeds.
    """
    little_endian: bool = False
    magic: int = 0
    first_ifd_offset: int = 0

    @property
    def is_valid(self) -> bool:
        return self.magic == TIFF_MAGIC

    @staticmethod
    def from_bytes(buffer: Optional[bytes], offset: int = 0) -> 'TiffHeader':
        """
        Parse a TIFF header.

        Args:
            buffer: Bytes containing the header
            offset: Offset of the byte order marker

        Returns:
            The parsed header, or ``EMPTY_HEADER`` when the bytes at
            ``offset`` are not a TIFF header
        """
        if buffer is None or offset < 0 or offset + TIFF_HEADER_SIZE > len(buffer):
            return EMPTY_HEADER

        marker = buffer[offset:offset + 2]
        if marker == b'II':
            little_endian = True
        elif marker == b'MM':
            little_endian = False
        else:
            return EMPTY_HEADER

        magic = to_uint16(buffer, offset + 2, little_endian)
        if magic != TIFF_MAGIC:
            logger.debug("Bad TIFF magic %d at offset %d", magic, offset)
            return EMPTY_HEADER

        return TiffHeader(
            little_endian=little_endian,
            magic=magic,
            first_ifd_offset=to_int32(buffer, offset + 4, little_endian),
        )


EMPTY_HEADER = TiffHeader()


TIFF_SIGNATURES = (b'II*\x00', b'MM\x00*')


def find_tiff_offset(buffer: Optional[bytes]) -> int:
    """
    Find where the TIFF container starts inside a buffer.

    The ``Exif\\0\\0`` marker is searched first; the TIFF header follows it
    directly, even when a bare signature appears earlier. Without that
    marker the buffer is scanned for a bare TIFF signature, and the earliest
    of the two signatures wins.

    Only ``II*\\0`` and ``MM\\0*`` are signatures. An order marker followed
    by ``0x00 0x2A`` regardless of byte order (``II\\0*``, ``MM*\\0``) is
    not matched: ``TiffHeader.from_bytes`` would read a magic other than 42
    from it and the decode would stop there. Buffers shorter than
    ``MIN_BUFFER_SIZE`` are rejected even if they hold a complete header.

    Args:
        buffer: Raw bytes, typically the leading part of an image file

    Returns:
        Offset of the TIFF header, or -1 when no container was found
    """
    if buffer is None or len(buffer) < MIN_BUFFER_SIZE:
        return -1

    exif_offset = buffer.find(EXIF_SIGNATURE)
    if exif_offset >= 0:
        return exif_offset + len(EXIF_SIGNATURE)

    # Magic 42 written in the order the marker announces
    matches = [buffer.find(signature) for signature in TIFF_SIGNATURES]
    matches = [index for index in matches if index >= 0]
    if not matches:
        logger.debug("No EXIF or TIFF signature in %d bytes", len(buffer))
        return -1

    return min(matches)

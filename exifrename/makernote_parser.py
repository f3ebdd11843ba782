# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
MakerNote parser

Nikon and Sony cameras store a complete TIFF structure inside the MakerNote
tag (0x927C), after a short vendor header:

    Nikon: "Nikon\\0" + version (4 bytes), then "MM\\0*" ...
    Sony:  "SONY DSC \\0\\0\\0", then the embedded TIFF

The payload is sliced out of the TIFF data, the vendor header skipped, and
the rest decoded with the same header and IFD decoders used for the outer
file. Offsets inside the MakerNote are relative to the embedded header.
MakerNotes are decoded on demand and never nested further.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from exifrename.exif_tags import (
    MAKERNOTE_TAG_NAMES,
    NIKON_IMAGE_COUNT,
    NIKON_SERIAL_NO,
    NIKON_SERIAL_NUMBER,
    NIKON_SHUTTER_COUNT,
    SONY_SEQUENCE_NUMBER,
)
from exifrename.ifd import ImageFileDirectory
from exifrename.interop_field import InteroperabilityField
from exifrename.tiff_structure import TiffHeader

logger = logging.getLogger(__name__)

NIKON = 'nikon'
SONY = 'sony'

# Bytes of vendor header before the embedded TIFF signature
NIKON_HEADER_SIZE = 10
SONY_HEADER_SIZE = 12

VENDOR_HEADER_SIZES = {
    NIKON: NIKON_HEADER_SIZE,
    SONY: SONY_HEADER_SIZE,
}

SERIAL_NO_PREFIX = 'NO='


def detect_vendor(make: Optional[str]) -> Optional[str]:
    """
    Identify a MakerNote vendor from the Make tag.

    Args:
        make: Camera manufacturer text

    Returns:
        ``'nikon'``, ``'sony'`` or None for any other manufacturer
    """
    if not make:
        return None
    lowered = make.lower()
    for vendor in VENDOR_HEADER_SIZES:
        if vendor in lowered:
            return vendor
    return None


@dataclass(frozen=True)
class MakerNote:
    """A decoded vendor MakerNote."""
    vendor: str
    header: TiffHeader
    ifd: ImageFileDirectory
    data: bytes = field(repr=False, compare=False)

    @staticmethod
    def from_field(
        tiff_data: Optional[bytes],
        maker_note_field: Optional[InteroperabilityField],
        vendor: str
    ) -> Optional['MakerNote']:
        """
        Decode the MakerNote payload of a field.

        Args:
            tiff_data: Outer TIFF data the field points into
            maker_note_field: The MakerNote field of the Exif IFD
            vendor: ``'nikon'`` or ``'sony'``

        Returns:
            The decoded MakerNote, or None when the payload is missing,
            out of range, or not a TIFF structure
        """
        if tiff_data is None or maker_note_field is None or vendor not in VENDOR_HEADER_SIZES:
            return None

        header_size = VENDOR_HEADER_SIZES[vendor]
        start = maker_note_field.value_offset + header_size
        length = maker_note_field.count - header_size

        if maker_note_field.value_offset <= 0 or length <= 0 or start + length > len(tiff_data):
            logger.debug("MakerNote payload out of range (offset=%d, count=%d)",
                         maker_note_field.value_offset, maker_note_field.count)
            return None

        data = bytes(tiff_data[start:start + length])

        header = TiffHeader.from_bytes(data, 0)
        if not header.is_valid:
            logger.debug("No TIFF header inside %s MakerNote", vendor)
            return None

        ifd = ImageFileDirectory.from_bytes(
            data, header.first_ifd_offset, header.little_endian, MAKERNOTE_TAG_NAMES[vendor]
        )
        if ifd is None:
            return None

        return MakerNote(vendor=vendor, header=header, ifd=ifd, data=data)

    def serial_number(self) -> str:
        """Nikon serial number, falling back to the ``NO=`` prefixed form."""
        if self.vendor != NIKON:
            return ''

        serial = self.ifd.string_value(NIKON_SERIAL_NUMBER)
        if serial:
            return serial

        serial = self.ifd.string_value(NIKON_SERIAL_NO)
        if serial.startswith(SERIAL_NO_PREFIX):
            return serial[len(SERIAL_NO_PREFIX):].strip()
        return serial

    def shutter_count(self) -> int:
        if self.vendor != NIKON:
            return 0
        return self.ifd.integer_value(NIKON_SHUTTER_COUNT)

    def sequence_number(self) -> int:
        if self.vendor == SONY:
            return self.ifd.integer_value(SONY_SEQUENCE_NUMBER)
        if self.vendor == NIKON:
            return self.ifd.integer_value(NIKON_IMAGE_COUNT)
        return 0

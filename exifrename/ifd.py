# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Image File Directory (IFD) decoder

An IFD is a 16-bit entry count, that many 12-byte interoperability fields,
and a 32-bit offset to the next IFD in the chain. The chain offset is kept
but never followed; sub-directories are reached through pointer tags.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

from exifrename.byte_reader import to_int32, to_uint16
from exifrename.interop_field import ENTRY_SIZE, ExifTagType, InteroperabilityField

logger = logging.getLogger(__name__)

# Most entries that fit in a 64KB window
MAX_IFD_ENTRIES = 5460

MIN_IFD_BUFFER_SIZE = 6

NO_TAG_NAMES: Mapping[int, str] = MappingProxyType({})


@dataclass(frozen=True)
class ImageFileDirectory:
    """
    A decoded IFD.

    Fields keep their on-disk order. Lookups return the first field with
    the requested tag. The typed value helpers return an empty string or 0
    for a missing tag, a tag of the wrong type, or an unreadable value.
    """
    fields: Tuple[InteroperabilityField, ...] = ()
    next_ifd_offset: int = 0
    tag_names: Mapping[int, str] = field(
        default_factory=lambda: NO_TAG_NAMES, repr=False, compare=False
    )

    @staticmethod
    def from_bytes(
        buffer: Optional[bytes],
        offset: int,
        little_endian: bool,
        tag_names: Optional[Mapping[int, str]] = None
    ) -> Optional['ImageFileDirectory']:
        """
        Decode the IFD at ``offset``.

        Args:
            buffer: TIFF data; offsets are relative to its first byte
            offset: Offset of the entry count
            little_endian: Byte order of the TIFF data
            tag_names: Namespace used to label the fields

        Returns:
            The directory, or None when the buffer is unusable or the entry
            count is larger than ``MAX_IFD_ENTRIES``
        """
        if buffer is None or offset < 0 or len(buffer) < MIN_IFD_BUFFER_SIZE:
            return None

        names = NO_TAG_NAMES if tag_names is None else tag_names

        number_of_entries = to_uint16(buffer, offset, little_endian)
        if number_of_entries > MAX_IFD_ENTRIES:
            logger.debug("Rejecting IFD at %d claiming %d entries", offset, number_of_entries)
            return None

        fields = []
        entry_offset = offset + 2
        for _ in range(number_of_entries):
            entry = InteroperabilityField.from_bytes(buffer, entry_offset, little_endian)
            if entry is None:
                logger.debug("IFD at %d truncated after %d entries", offset, len(fields))
                break
            if entry.tag in names:
                entry = replace(entry, tag_name=names[entry.tag])
            fields.append(entry)
            entry_offset += ENTRY_SIZE

        next_ifd_offset = to_int32(buffer, offset + 2 + number_of_entries * ENTRY_SIZE, little_endian)

        return ImageFileDirectory(
            fields=tuple(fields),
            next_ifd_offset=next_ifd_offset,
            tag_names=names,
        )

    def __iter__(self) -> Iterator[InteroperabilityField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def get_tag(self, tag: int) -> Optional[InteroperabilityField]:
        for entry in self.fields:
            if entry.tag == tag:
                return entry
        return None

    def string_value(self, tag: int) -> str:
        """Text of an ASCII or BYTE field with at least two bytes."""
        entry = self.get_tag(tag)
        if entry is None or entry.type_code not in (ExifTagType.BYTE, ExifTagType.ASCII):
            return ''
        if entry.count < 2:
            return ''
        return entry.as_string()

    def decimal_value(self, tag: int) -> float:
        entry = self.get_tag(tag)
        if entry is None or entry.type_code not in (ExifTagType.RATIONAL, ExifTagType.SRATIONAL):
            return 0.0
        return entry.as_decimal()

    def byte_value(self, tag: int) -> int:
        entry = self.get_tag(tag)
        if entry is None or entry.type_code != ExifTagType.BYTE:
            return 0
        if entry.count < 1 or not entry.is_inline:
            return 0
        return entry.as_byte()

    def short_value(self, tag: int) -> int:
        entry = self.get_tag(tag)
        if entry is None or entry.type_code != ExifTagType.SHORT or entry.count != 1:
            return 0
        return entry.as_short()

    def long_value(self, tag: int) -> int:
        entry = self.get_tag(tag)
        if entry is None or entry.type_code != ExifTagType.LONG or entry.count != 1:
            return 0
        return entry.as_long()

    def integer_value(self, tag: int) -> int:
        """
        SHORT or LONG value of a tag.

        Multi-valued SHORT fields give their first value; multi-valued LONG
        fields are stored at an offset and give 0.
        """
        entry = self.get_tag(tag)
        if entry is None or entry.count < 1:
            return 0
        if entry.type_code == ExifTagType.SHORT:
            return entry.as_short()
        if entry.type_code == ExifTagType.LONG:
            return self.long_value(tag)
        return 0

    def rational_triple(
        self,
        tag: int,
        allow_signed: bool = True
    ) -> Optional[Tuple[float, float, float]]:
        """
        First three rationals of a field, as used by DMS angles and GPS times.

        Args:
            tag: Tag identifier
            allow_signed: Also accept SRATIONAL fields

        Returns:
            Three floats, or None when the field is missing, of another type
            or holds fewer than three values
        """
        entry = self.get_tag(tag)
        if entry is None:
            return None

        allowed = (ExifTagType.RATIONAL, ExifTagType.SRATIONAL) if allow_signed else (ExifTagType.RATIONAL,)
        if entry.type_code not in allowed or entry.count < 3:
            return None

        values = entry.as_rationals(limit=3)
        if len(values) < 3:
            return None
        return values[0], values[1], values[2]

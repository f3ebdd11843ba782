# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Interoperability field decoder

An interoperability field is one 12-byte directory entry:

    tag (2 bytes) | type (2 bytes) | count (4 bytes) | value or offset (4 bytes)

When the value fits in four bytes it is stored inline in the last four
bytes of the entry; otherwise those bytes hold an offset into the TIFF
data. A field keeps both interpretations and the typed accessors pick the
right one.

None of the accessors raise on malformed data. Out-of-range reads give an
empty string, 0 or 0.0, which callers cannot tell apart from a stored zero.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional

from exifrename.byte_reader import to_int32, to_uint16, to_uint32


class ExifTagType(IntEnum):
    """EXIF tag data types"""
    BYTE = 1
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5
    UNDEFINED = 7
    SLONG = 9
    SRATIONAL = 10


# EXIF tag sizes in bytes
TAG_SIZES = {
    ExifTagType.BYTE: 1,
    ExifTagType.ASCII: 1,
    ExifTagType.SHORT: 2,
    ExifTagType.LONG: 4,
    ExifTagType.RATIONAL: 8,
    ExifTagType.UNDEFINED: 1,
    ExifTagType.SLONG: 4,
    ExifTagType.SRATIONAL: 8,
}

TYPE_NAMES = {
    ExifTagType.BYTE: "Byte",
    ExifTagType.ASCII: "ASCII",
    ExifTagType.SHORT: "Short",
    ExifTagType.LONG: "Long",
    ExifTagType.RATIONAL: "Rational",
    ExifTagType.UNDEFINED: "Undefined Byte",
    ExifTagType.SLONG: "Signed Long",
    ExifTagType.SRATIONAL: "Signed Rational",
}

ENTRY_SIZE = 12
INLINE_SIZE = 4


def rational(numerator: int, denominator: int) -> float:
    """
    Convert a numerator/denominator pair to a float.

    Returns 0.0 when either part is zero. A zero numerator is a real zero,
    a zero denominator means the camera left the value unset; both read as
    "no value" to the resolvers.
    """
    if numerator == 0 or denominator == 0:
        return 0.0
    return float(numerator) / float(denominator)


def dms_to_decimal_degrees(degrees: float, minutes: float, seconds: float) -> float:
    """
    Combine degrees, minutes and seconds into decimal degrees.

    Minutes and seconds are added to the magnitude of ``degrees`` and the
    sign of ``degrees`` is applied to the result.

    Args:
        degrees: Whole or fractional degrees, possibly negative
        minutes: Minutes of arc
        seconds: Seconds of arc

    Returns:
        Decimal degrees
    """
    decimal_degrees = abs(degrees)
    decimal_degrees += minutes / 60.0
    decimal_degrees += seconds / 3600.0

    if degrees < 0.0:
        decimal_degrees = -decimal_degrees

    return decimal_degrees


def _trim_nul(text: str) -> str:
    return text.strip('\x00')


@dataclass(frozen=True)
class InteroperabilityField:
    """
    One decoded directory entry.

    ``buffer`` is the TIFF data the entry was read from. It is shared with
    the owning directory and never copied, so offset-stored values are
    resolved against the same bytes the entry came from.
    """
    tag: int
    type_code: int
    count: int
    value_offset: int
    raw_bytes: bytes
    little_endian: bool
    tag_name: str = ''
    buffer: Optional[bytes] = field(default=None, repr=False, compare=False)

    @staticmethod
    def from_bytes(
        buffer: Optional[bytes],
        offset: int,
        little_endian: bool,
        tag_name: str = ''
    ) -> Optional['InteroperabilityField']:
        """
        Decode the 12-byte entry at ``offset``.

        Args:
            buffer: TIFF data
            offset: Offset of the entry
            little_endian: Byte order of the TIFF data
            tag_name: Display name for diagnostics

        Returns:
            The field, or None when the entry runs past the buffer
        """
        if buffer is None or offset < 0 or offset + ENTRY_SIZE > len(buffer):
            return None

        return InteroperabilityField(
            tag=to_uint16(buffer, offset, little_endian),
            type_code=to_uint16(buffer, offset + 2, little_endian),
            count=to_int32(buffer, offset + 4, little_endian),
            value_offset=to_int32(buffer, offset + 8, little_endian),
            raw_bytes=bytes(buffer[offset + 8:offset + 12]),
            little_endian=little_endian,
            tag_name=tag_name,
            buffer=buffer,
        )

    @property
    def type_name(self) -> str:
        try:
            return TYPE_NAMES[ExifTagType(self.type_code)]
        except ValueError:
            return "Unknown"

    @property
    def byte_length(self) -> int:
        """Size of the value in bytes, unknown types counted as bytes."""
        try:
            size = TAG_SIZES[ExifTagType(self.type_code)]
        except ValueError:
            size = 1
        return size * self.count

    @property
    def is_inline(self) -> bool:
        return self.byte_length <= INLINE_SIZE

    def _buffer(self, buffer: Optional[bytes]) -> Optional[bytes]:
        return self.buffer if buffer is None else buffer

    def as_byte(self) -> int:
        return self.raw_bytes[0]

    def as_short(self) -> int:
        """First inline SHORT, in the field's byte order."""
        return to_uint16(self.raw_bytes, 0, self.little_endian)

    def as_long(self) -> int:
        """Inline LONG (unsigned) or SLONG (signed)."""
        if self.type_code == ExifTagType.SLONG:
            return to_int32(self.raw_bytes, 0, self.little_endian)
        return to_uint32(self.raw_bytes, 0, self.little_endian)

    def _rational_at(self, buffer: Optional[bytes], offset: int) -> float:
        if self.type_code == ExifTagType.SRATIONAL:
            read = to_int32
        else:
            read = to_uint32
        numerator = read(buffer, offset, self.little_endian)
        denominator = read(buffer, offset + 4, self.little_endian)
        return rational(numerator, denominator)

    def as_decimal(self, buffer: Optional[bytes] = None) -> float:
        """
        Value of a RATIONAL or SRATIONAL field as a float.

        Args:
            buffer: Bytes the offset refers to; defaults to the owning buffer

        Returns:
            numerator / denominator, or 0.0 if either is zero or unreadable
        """
        return self._rational_at(self._buffer(buffer), self.value_offset)

    def as_rationals(self, buffer: Optional[bytes] = None, limit: Optional[int] = None) -> List[float]:
        """
        Rationals of a multi-valued field, in order.

        Args:
            buffer: Bytes the offset refers to; defaults to the owning buffer
            limit: Read at most this many values

        Returns:
            One float per value; unreadable values are 0.0
        """
        data = self._buffer(buffer)
        number = max(self.count, 0)
        if limit is not None:
            number = min(number, limit)
        if data is not None:
            # Never more values than the data can hold
            number = min(number, len(data) // 8 + 1)
        return [
            self._rational_at(data, self.value_offset + index * 8)
            for index in range(number)
        ]

    def as_string(self, buffer: Optional[bytes] = None) -> str:
        """
        Value of the field as text.

        Up to four bytes are read from the inline value as ASCII. Longer
        ASCII values are read from the offset. BYTE values may hold Windows
        XP strings, so their encoding is guessed from the first two bytes:
        a zero in the second byte means UTF-16LE, a zero in the first means
        UTF-16BE, and two non-zero bytes mean UTF-8. The guess can be wrong
        for short or unusual data.

        Args:
            buffer: Bytes the offset refers to; defaults to the owning buffer

        Returns:
            Decoded text with leading and trailing NULs removed, or an empty
            string when the value cannot be located
        """
        if self.count <= INLINE_SIZE:
            if self.count < 1:
                return ''
            return _trim_nul(self.raw_bytes[:self.count].decode('ascii', errors='replace'))

        data = self._buffer(buffer)
        offset = self.value_offset
        if data is None or offset <= 0 or offset + self.count > len(data):
            return ''

        value = data[offset:offset + self.count]

        if self.type_code == ExifTagType.ASCII:
            return _trim_nul(value.decode('ascii', errors='replace'))

        if self.type_code == ExifTagType.BYTE:
            first, second = value[0], value[1]
            even = value[:len(value) - len(value) % 2]
            if first != 0 and second == 0:
                return _trim_nul(even.decode('utf-16-le', errors='replace'))
            if first == 0 and second != 0:
                return _trim_nul(even.decode('utf-16-be', errors='replace'))
            if first != 0 and second != 0:
                return _trim_nul(value.decode('utf-8', errors='replace'))

        return ''

    def describe(self) -> str:
        """Single-line dump of the entry for diagnostics."""
        parts = [f"Tag: {self.tag:04X}"]
        if self.tag_name:
            parts[0] += f" ({self.tag_name})"
        parts.append(f"{self.type_name} ({self.type_code})")
        parts.append(f"Count: {self.count}")
        parts.append(f"Offset: {self.value_offset}")

        if self.count == 0:
            parts.append("Data: none")
        elif 0 < self.count <= INLINE_SIZE:
            parts.append("Data: " + self.raw_bytes[:self.count].hex().upper())

        if self.buffer is not None:
            if self.type_code == ExifTagType.ASCII:
                parts.append(f'Value: "{self.as_string()}"')
            elif self.type_code == ExifTagType.SHORT:
                parts.append(f"Value: {self.as_short()}")
            elif self.type_code in (ExifTagType.LONG, ExifTagType.SLONG):
                parts.append(f"Value: {self.as_long()}")
            elif self.type_code in (ExifTagType.RATIONAL, ExifTagType.SRATIONAL):
                parts.append(f"Value: {self.as_decimal()}")

        return ", ".join(parts)

    def __str__(self) -> str:
        return self.describe()

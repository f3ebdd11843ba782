# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF metadata parser

This module decodes the EXIF block of an image into an ``Exif`` object and
resolves the values needed to name a photograph: when it was taken, where,
with which camera, and the camera's shutter or sequence counters.

Decoding is total over its input. A buffer without a usable TIFF header
gives None; everything else decodes as far as the data allows, and any
value that cannot be read resolves to an empty string, 0 or a minimum
timestamp. Zero therefore means both "absent" and "stored as zero"; the
resolvers rely on that to fall through to the next source.

Copyright 2025 DNAi inc.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, List, Optional, Tuple

from exifrename.date_formatter import (
    add_sub_seconds,
    parse_exif_date,
    parse_exif_datetime,
    MIN_DATETIME,
)
from exifrename.exif_tags import (
    BODY_SERIAL_NUMBER,
    DATE_TIME_DIGITIZED,
    DATE_TIME_ORIGINAL,
    EXIF_IFD_POINTER,
    EXIF_TAG_NAMES,
    FOCAL_LENGTH,
    FOCAL_LENGTH_IN_35MM_FILM,
    GPS_ALTITUDE,
    GPS_ALTITUDE_REF,
    GPS_DATE_STAMP,
    GPS_IFD_POINTER,
    GPS_IMG_DIRECTION,
    GPS_LATITUDE,
    GPS_LATITUDE_REF,
    GPS_LONGITUDE,
    GPS_LONGITUDE_REF,
    GPS_TAG_NAMES,
    GPS_TIME_STAMP,
    IFD0_TAG_NAMES,
    IMAGE_MAKE,
    IMAGE_MODEL,
    MAKER_NOTE,
    PIXEL_X_DIMENSION,
    PIXEL_Y_DIMENSION,
    SUB_SEC_TIME_DIGITIZED,
    SUB_SEC_TIME_ORIGINAL,
    XP_KEYWORDS,
)
from exifrename.ifd import ImageFileDirectory
from exifrename.interop_field import ExifTagType, InteroperabilityField, dms_to_decimal_degrees
from exifrename.makernote_parser import MakerNote, detect_vendor
from exifrename.tiff_structure import TiffHeader, find_tiff_offset

logger = logging.getLogger(__name__)

ONE_MEGABYTE = 1048576

# Largest TIFF window copied out of the source buffer
TIFF_DATA_LIMIT = ONE_MEGABYTE

# GPS dates older than this are not substituted from the capture time
GPS_DATE_FIXUP_MIN_YEAR = 1601

FULL_CIRCLE = 360.0

IFD0_NAME = 'IFD0'
EXIF_IFD_NAME = 'ExifIFD'
GPS_IFD_NAME = 'GPS'


@dataclass(frozen=True)
class Exif:
    """
    Decoded EXIF block.

    Build instances with ``Exif.from_bytes``. ``exif_ifd`` and ``gps_ifd``
    are None when IFD0 has no pointer to them or the pointer leads nowhere
    readable.
    """
    header: TiffHeader
    ifd0: ImageFileDirectory
    exif_ifd: Optional[ImageFileDirectory] = None
    gps_ifd: Optional[ImageFileDirectory] = None
    tiff_data: bytes = field(default=b'', repr=False, compare=False)

    @staticmethod
    def from_bytes(data: Optional[bytes]) -> Optional['Exif']:
        """
        Decode the EXIF block found in ``data``.

        Args:
            data: Leading bytes of an image file, or a bare TIFF/EXIF block

        Returns:
            The decoded EXIF, or None when no valid TIFF header was found
        """
        tiff_offset = find_tiff_offset(data)
        if tiff_offset < 0:
            return None

        header = TiffHeader.from_bytes(data, tiff_offset)
        if not header.is_valid:
            logger.debug("Invalid TIFF header at offset %d", tiff_offset)
            return None

        tiff_data = bytes(data[tiff_offset:tiff_offset + TIFF_DATA_LIMIT])

        ifd0 = ImageFileDirectory.from_bytes(
            tiff_data, header.first_ifd_offset, header.little_endian, IFD0_TAG_NAMES
        )
        if ifd0 is None:
            logger.debug("IFD0 at %d could not be decoded", header.first_ifd_offset)
            ifd0 = ImageFileDirectory(tag_names=IFD0_TAG_NAMES)

        exif_ifd = Exif._sub_ifd(tiff_data, header, ifd0, EXIF_IFD_POINTER, EXIF_TAG_NAMES)
        gps_ifd = Exif._sub_ifd(tiff_data, header, ifd0, GPS_IFD_POINTER, GPS_TAG_NAMES)

        return Exif(
            header=header,
            ifd0=ifd0,
            exif_ifd=exif_ifd,
            gps_ifd=gps_ifd,
            tiff_data=tiff_data,
        )

    @staticmethod
    def _sub_ifd(tiff_data, header, ifd0, pointer_tag, tag_names) -> Optional[ImageFileDirectory]:
        pointer = ifd0.get_tag(pointer_tag)
        if pointer is None:
            return None
        return ImageFileDirectory.from_bytes(
            tiff_data, pointer.value_offset, header.little_endian, tag_names
        )

    # ------------------------------------------------------------------
    # Directory access
    # ------------------------------------------------------------------

    def directories(self) -> List[Tuple[str, ImageFileDirectory]]:
        """Decoded directories in lookup order: IFD0, Exif IFD, GPS IFD."""
        result = [(IFD0_NAME, self.ifd0)]
        if self.exif_ifd is not None:
            result.append((EXIF_IFD_NAME, self.exif_ifd))
        if self.gps_ifd is not None:
            result.append((GPS_IFD_NAME, self.gps_ifd))
        return result

    def fields(self) -> Iterator[Tuple[str, InteroperabilityField]]:
        """Every decoded field with the name of its directory."""
        for name, ifd in self.directories():
            for entry in ifd:
                yield name, entry

    # ------------------------------------------------------------------
    # Typed values with IFD0 -> Exif IFD -> GPS IFD fallback
    # ------------------------------------------------------------------

    def string_value(self, tag: int) -> str:
        for _, ifd in self.directories():
            value = ifd.string_value(tag)
            if value:
                return value
        return ''

    def decimal_value(self, tag: int) -> float:
        for _, ifd in self.directories():
            value = ifd.decimal_value(tag)
            if value != 0.0:
                return value
        return 0.0

    def byte_value(self, tag: int) -> int:
        for _, ifd in self.directories():
            value = ifd.byte_value(tag)
            if value != 0:
                return value
        return 0

    def degrees_value(self, ifd: Optional[ImageFileDirectory], tag: int) -> float:
        """
        Decimal degrees of a three-rational DMS field.

        Returns 0.0 when the directory is absent or the field is not a
        RATIONAL/SRATIONAL with at least three values.
        """
        if ifd is None:
            return 0.0
        parts = ifd.rational_triple(tag)
        if parts is None:
            return 0.0
        return dms_to_decimal_degrees(*parts)

    # ------------------------------------------------------------------
    # Camera identity
    # ------------------------------------------------------------------

    def make(self) -> str:
        return self.string_value(IMAGE_MAKE)

    def model(self) -> str:
        return self.string_value(IMAGE_MODEL)

    def _maker_note(self) -> Optional[MakerNote]:
        vendor = detect_vendor(self.make())
        if vendor is None or self.exif_ifd is None:
            return None
        return MakerNote.from_field(self.tiff_data, self.exif_ifd.get_tag(MAKER_NOTE), vendor)

    def serial_number(self) -> str:
        """
        Camera body serial number.

        BodySerialNumber is used when present; otherwise the Nikon MakerNote
        is consulted.
        """
        serial = self.string_value(BODY_SERIAL_NUMBER)
        if serial:
            return serial

        maker_note = self._maker_note()
        if maker_note is None:
            return ''
        return maker_note.serial_number()

    def shutter_count(self) -> int:
        """Number of shutter actuations recorded by Nikon bodies, else 0."""
        maker_note = self._maker_note()
        if maker_note is None:
            return 0
        return maker_note.shutter_count()

    def sequence_number(self) -> int:
        """Sony sequence number or Nikon image count, else 0."""
        maker_note = self._maker_note()
        if maker_note is None:
            return 0
        return maker_note.sequence_number()

    # ------------------------------------------------------------------
    # Capture time
    # ------------------------------------------------------------------

    def date_string(self) -> str:
        """Raw DateTimeOriginal text."""
        return self.string_value(DATE_TIME_ORIGINAL)

    def taken(self) -> datetime:
        """
        When the photograph was taken.

        DateTimeOriginal (0x9003) is read first, then DateTimeDigitized
        (0x9004). The SubSecTime tag matching whichever was used adds the
        fractional second. Without either tag the minimum datetime is
        returned.

        Returns:
            Naive local capture time
        """
        if self.exif_ifd is None:
            return MIN_DATETIME

        value = self.exif_ifd.string_value(DATE_TIME_ORIGINAL)
        sub_second_tag = SUB_SEC_TIME_ORIGINAL
        if not value:
            value = self.exif_ifd.string_value(DATE_TIME_DIGITIZED)
            sub_second_tag = SUB_SEC_TIME_DIGITIZED

        if not value:
            return MIN_DATETIME

        taken = parse_exif_datetime(value)
        return add_sub_seconds(taken, self.exif_ifd.string_value(sub_second_tag))

    # ------------------------------------------------------------------
    # GPS
    # ------------------------------------------------------------------

    def gps_time(self) -> timedelta:
        """
        GPSTimeStamp as a time of day.

        Fractions of the seconds value are kept to the millisecond.
        """
        if self.gps_ifd is None:
            return timedelta()

        parts = self.gps_ifd.rational_triple(GPS_TIME_STAMP, allow_signed=False)
        if parts is None:
            return timedelta()

        hours, minutes, seconds = parts
        partial_seconds = seconds - math.floor(seconds)
        return timedelta(
            hours=int(hours),
            minutes=int(minutes),
            seconds=int(seconds),
            milliseconds=int(partial_seconds * 1000.0),
        )

    def gps_date(self) -> date:
        """
        GPSDateStamp, or the capture date when the GPS date is missing.

        Some phones write GPSTimeStamp without GPSDateStamp; the date of
        ``taken()`` stands in for it in that case.
        """
        gps_date = date.min
        if self.gps_ifd is not None:
            gps_date = parse_exif_date(self.gps_ifd.string_value(GPS_DATE_STAMP))

        if gps_date.year == 1:
            taken = self.taken()
            if taken.year > GPS_DATE_FIXUP_MIN_YEAR:
                gps_date = taken.date()

        return gps_date

    def gps_date_time(self) -> datetime:
        """GPS date and time of day combined into a UTC datetime."""
        day = self.gps_date()
        time_of_day = self.gps_time()

        hours, remainder = divmod(time_of_day.seconds, 3600)
        minutes, seconds = divmod(remainder, 60)
        milliseconds = time_of_day.microseconds // 1000

        return datetime(
            day.year, day.month, day.day,
            hours, minutes, seconds, milliseconds * 1000,
            tzinfo=timezone.utc,
        )

    def latitude(self) -> float:
        """Signed decimal latitude, south negative."""
        value = self.degrees_value(self.gps_ifd, GPS_LATITUDE)
        if self.gps_ifd is not None and self.gps_ifd.string_value(GPS_LATITUDE_REF).upper() == 'S':
            value = -abs(value)
        return value

    def longitude(self) -> float:
        """Signed decimal longitude, west negative."""
        value = self.degrees_value(self.gps_ifd, GPS_LONGITUDE)
        if self.gps_ifd is not None and self.gps_ifd.string_value(GPS_LONGITUDE_REF).upper() == 'W':
            value = -abs(value)
        return value

    def altitude(self) -> float:
        """Altitude in metres, negative below sea level."""
        if self.gps_ifd is None:
            return 0.0
        value = self.gps_ifd.decimal_value(GPS_ALTITUDE)
        if self.gps_ifd.byte_value(GPS_ALTITUDE_REF) == 1:
            value = -value
        return value

    def compass_direction(self) -> float:
        """
        GPSImgDirection in degrees.

        Some devices store the direction as three DMS rationals instead of
        one rational; those are combined and anything at or past a full
        circle becomes 0.
        """
        if self.gps_ifd is None:
            return 0.0

        entry = self.gps_ifd.get_tag(GPS_IMG_DIRECTION)
        if entry is None or entry.type_code != ExifTagType.RATIONAL:
            return 0.0

        if entry.count == 3:
            parts = self.gps_ifd.rational_triple(GPS_IMG_DIRECTION, allow_signed=False)
            if parts is None:
                return 0.0
            direction = dms_to_decimal_degrees(*parts)
            if direction >= FULL_CIRCLE:
                direction = 0.0
            return direction

        return self.gps_ifd.decimal_value(GPS_IMG_DIRECTION)

    # ------------------------------------------------------------------
    # Image
    # ------------------------------------------------------------------

    def focal_length(self) -> float:
        """35mm-equivalent focal length when recorded, else FocalLength."""
        if self.exif_ifd is not None:
            value = float(self.exif_ifd.integer_value(FOCAL_LENGTH_IN_35MM_FILM))
            if value != 0.0:
                return value
        return self.decimal_value(FOCAL_LENGTH)

    def width(self) -> int:
        if self.exif_ifd is None:
            return 0
        return self.exif_ifd.integer_value(PIXEL_X_DIMENSION)

    def height(self) -> int:
        if self.exif_ifd is None:
            return 0
        return self.exif_ifd.integer_value(PIXEL_Y_DIMENSION)

    def tags(self) -> List[str]:
        """
        XPKeywords split on commas.

        An image without keywords gives ``['']``, the result of splitting
        an empty string.
        """
        return self.string_value(XP_KEYWORDS).split(',')

    def people_names(self) -> List[str]:
        return []

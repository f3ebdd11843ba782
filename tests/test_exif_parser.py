# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

import unittest
from datetime import date, datetime, timedelta, timezone

from exifrename.date_formatter import MIN_DATETIME
from exifrename.exif_parser import Exif
from exifrename.exif_tags import (
    BODY_SERIAL_NUMBER,
    DATE_TIME_DIGITIZED,
    DATE_TIME_ORIGINAL,
    FOCAL_LENGTH,
    FOCAL_LENGTH_IN_35MM_FILM,
    GPS_ALTITUDE,
    GPS_ALTITUDE_REF,
    GPS_DATE_STAMP,
    GPS_IMG_DIRECTION,
    GPS_LATITUDE,
    GPS_LATITUDE_REF,
    GPS_LONGITUDE,
    GPS_LONGITUDE_REF,
    GPS_TIME_STAMP,
    IMAGE_MAKE,
    IMAGE_MODEL,
    MAKER_NOTE,
    PIXEL_X_DIMENSION,
    PIXEL_Y_DIMENSION,
    SUB_SEC_TIME_DIGITIZED,
    SUB_SEC_TIME_ORIGINAL,
    XP_KEYWORDS,
)

from tiff_builder import TiffBuilder, nikon_maker_note, sony_maker_note, wrap_in_jpeg


def nikon_photo(little_endian=True):
    b = TiffBuilder(little_endian)
    return b.build(
        [
            b.ascii(IMAGE_MAKE, 'NIKON CORPORATION'),
            b.ascii(IMAGE_MODEL, 'NIKON D70'),
            b.byte(XP_KEYWORDS, 'sunset,beach\x00'.encode('utf-16-le')),
        ],
        exif=[
            b.ascii(DATE_TIME_ORIGINAL, '2007:12:06 17:32:03'),
            b.ascii(SUB_SEC_TIME_ORIGINAL, '5'),
            b.rational(FOCAL_LENGTH, (180, 10)),
            b.short(PIXEL_X_DIMENSION, 3008),
            b.long(PIXEL_Y_DIMENSION, 2000),
            b.undefined(MAKER_NOTE, nikon_maker_note()),
        ],
        gps=[
            b.ascii(GPS_LATITUDE_REF, 'S'),
            b.rational(GPS_LATITUDE, (33, 1), (51, 1), (3600, 100)),
            b.ascii(GPS_LONGITUDE_REF, 'E'),
            b.rational(GPS_LONGITUDE, (151, 1), (12, 1), (0, 1)),
            b.byte(GPS_ALTITUDE_REF, b'\x01'),
            b.rational(GPS_ALTITUDE, (125, 10)),
            b.rational(GPS_TIME_STAMP, (6, 1), (32, 1), (35250, 1000)),
            b.ascii(GPS_DATE_STAMP, '2007:12:06'),
            b.rational(GPS_IMG_DIRECTION, (9050, 100)),
        ],
    )


def photo_with(ifd0=(), exif=None, gps=None, little_endian=True):
    """Decode a photo whose entries are produced by callables taking the builder."""
    b = TiffBuilder(little_endian)
    return Exif.from_bytes(b.build(
        [make(b) for make in ifd0],
        exif=None if exif is None else [make(b) for make in exif],
        gps=None if gps is None else [make(b) for make in gps],
    ))


class TestExifDecode(unittest.TestCase):

    def test_bare_tiff(self):
        exif = Exif.from_bytes(nikon_photo())
        self.assertIsNotNone(exif)
        self.assertTrue(exif.header.little_endian)
        self.assertIsNotNone(exif.exif_ifd)
        self.assertIsNotNone(exif.gps_ifd)

    def test_jpeg(self):
        exif = Exif.from_bytes(wrap_in_jpeg(nikon_photo()))
        self.assertEqual(exif.make(), 'NIKON CORPORATION')
        self.assertEqual(exif.shutter_count(), 48211)

    def test_structural_failures(self):
        self.assertIsNone(Exif.from_bytes(None))
        self.assertIsNone(Exif.from_bytes(b''))
        self.assertIsNone(Exif.from_bytes(b'\x00' * 64))
        self.assertIsNone(Exif.from_bytes(b'Exif\x00\x00' + b'\x01' * 32))

    def test_directories_and_fields(self):
        exif = Exif.from_bytes(nikon_photo())
        self.assertEqual([name for name, _ in exif.directories()], ['IFD0', 'ExifIFD', 'GPS'])
        names = {(ifd_name, entry.tag_name) for ifd_name, entry in exif.fields()}
        self.assertIn(('IFD0', 'Make'), names)
        self.assertIn(('ExifIFD', 'DateTimeOriginal'), names)
        self.assertIn(('GPS', 'GPSLatitude'), names)

    def test_header_only(self):
        exif = Exif.from_bytes(b'II*\x00\x08\x00\x00\x00' + b'\x00' * 8)
        self.assertIsNotNone(exif)
        self.assertEqual(len(exif.ifd0), 0)
        self.assertIsNone(exif.exif_ifd)
        self.assertIsNone(exif.gps_ifd)
        self.assertEqual(exif.make(), '')
        self.assertEqual(exif.taken(), MIN_DATETIME)
        self.assertEqual(exif.focal_length(), 0.0)
        self.assertEqual(exif.width(), 0)
        self.assertEqual(exif.shutter_count(), 0)
        self.assertEqual(exif.latitude(), 0.0)
        self.assertEqual(exif.compass_direction(), 0.0)
        self.assertEqual(exif.gps_date_time(), datetime(1, 1, 1, tzinfo=timezone.utc))

    def test_unreadable_sub_ifd_pointer(self):
        b = TiffBuilder()
        data = b.build([b.ascii(IMAGE_MAKE, 'Canon'), b.long(0x8769, 100000)])
        exif = Exif.from_bytes(data)
        self.assertEqual(exif.make(), 'Canon')
        self.assertEqual(len(exif.exif_ifd), 0)
        self.assertEqual(exif.taken(), MIN_DATETIME)


class TestNikonPhoto(unittest.TestCase):

    def setUp(self):
        self.exif = Exif.from_bytes(nikon_photo())

    def test_camera(self):
        self.assertEqual(self.exif.make(), 'NIKON CORPORATION')
        self.assertEqual(self.exif.model(), 'NIKON D70')
        self.assertEqual(self.exif.serial_number(), '3012345')
        self.assertEqual(self.exif.shutter_count(), 48211)
        self.assertEqual(self.exif.sequence_number(), 1234)

    def test_taken(self):
        self.assertEqual(self.exif.date_string(), '2007:12:06 17:32:03')
        self.assertEqual(self.exif.taken(), datetime(2007, 12, 6, 17, 32, 3, 500000))

    def test_image(self):
        self.assertEqual(self.exif.focal_length(), 18.0)
        self.assertEqual(self.exif.width(), 3008)
        self.assertEqual(self.exif.height(), 2000)
        self.assertEqual(self.exif.tags(), ['sunset', 'beach'])
        self.assertEqual(self.exif.people_names(), [])

    def test_gps(self):
        self.assertAlmostEqual(self.exif.latitude(), -33.86)
        self.assertAlmostEqual(self.exif.longitude(), 151.2)
        self.assertEqual(self.exif.altitude(), -12.5)
        self.assertEqual(self.exif.compass_direction(), 90.5)
        self.assertEqual(self.exif.gps_time(), timedelta(hours=6, minutes=32, seconds=35, milliseconds=250))
        self.assertEqual(self.exif.gps_date(), date(2007, 12, 6))
        self.assertEqual(
            self.exif.gps_date_time(),
            datetime(2007, 12, 6, 6, 32, 35, 250000, tzinfo=timezone.utc)
        )

    def test_big_endian_file(self):
        exif = Exif.from_bytes(nikon_photo(little_endian=False))
        self.assertFalse(exif.header.little_endian)
        self.assertEqual(exif.model(), 'NIKON D70')
        self.assertEqual(exif.taken(), self.exif.taken())
        self.assertEqual(exif.width(), 3008)
        self.assertEqual(exif.shutter_count(), 48211)
        self.assertAlmostEqual(exif.latitude(), -33.86)


class TestResolvers(unittest.TestCase):

    def test_body_serial_number_preferred(self):
        exif = photo_with(
            [lambda b: b.ascii(IMAGE_MAKE, 'NIKON')],
            exif=[
                lambda b: b.ascii(BODY_SERIAL_NUMBER, '99887766'),
                lambda b: b.undefined(MAKER_NOTE, nikon_maker_note()),
            ],
        )
        self.assertEqual(exif.serial_number(), '99887766')

    def test_other_vendor_has_no_counters(self):
        exif = photo_with(
            [lambda b: b.ascii(IMAGE_MAKE, 'Canon')],
            exif=[lambda b: b.undefined(MAKER_NOTE, nikon_maker_note())],
        )
        self.assertEqual(exif.shutter_count(), 0)
        self.assertEqual(exif.sequence_number(), 0)
        self.assertEqual(exif.serial_number(), '')

    def test_sony_sequence_number(self):
        exif = photo_with(
            [lambda b: b.ascii(IMAGE_MAKE, 'SONY')],
            exif=[lambda b: b.undefined(MAKER_NOTE, sony_maker_note(412))],
        )
        self.assertEqual(exif.sequence_number(), 412)
        self.assertEqual(exif.shutter_count(), 0)

    def test_digitized_fallback(self):
        exif = photo_with(exif=[
            lambda b: b.ascii(DATE_TIME_DIGITIZED, '2010-07-01T07:09:13.5-04:00'),
            lambda b: b.ascii(SUB_SEC_TIME_ORIGINAL, '9'),
            lambda b: b.ascii(SUB_SEC_TIME_DIGITIZED, '25'),
        ])
        self.assertEqual(exif.taken(), datetime(2010, 7, 1, 7, 9, 13, 250000))

    def test_zero_sub_seconds(self):
        exif = photo_with(exif=[
            lambda b: b.ascii(DATE_TIME_ORIGINAL, '2007:12:06 17:32:03'),
            lambda b: b.ascii(SUB_SEC_TIME_ORIGINAL, '0'),
        ])
        self.assertEqual(exif.taken(), datetime(2007, 12, 6, 17, 32, 3))

    def test_malformed_date(self):
        exif = photo_with(exif=[lambda b: b.ascii(DATE_TIME_ORIGINAL, '2007/12/06 17:32:03')])
        self.assertEqual(exif.taken(), MIN_DATETIME)

    def test_gps_date_taken_from_capture_time(self):
        exif = photo_with(
            exif=[lambda b: b.ascii(DATE_TIME_ORIGINAL, '2019:05:04 23:10:00')],
            gps=[lambda b: b.rational(GPS_TIME_STAMP, (3, 1), (10, 1), (0, 1))],
        )
        self.assertEqual(exif.gps_date(), date(2019, 5, 4))
        self.assertEqual(exif.gps_date_time(), datetime(2019, 5, 4, 3, 10, 0, tzinfo=timezone.utc))

    def test_gps_time_requires_unsigned_rationals(self):
        exif = photo_with(gps=[lambda b: b.srational(GPS_TIME_STAMP, (3, 1), (10, 1), (0, 1))])
        self.assertEqual(exif.gps_time(), timedelta())

    def test_western_longitude(self):
        exif = photo_with(gps=[
            lambda b: b.ascii(GPS_LONGITUDE_REF, 'W'),
            lambda b: b.rational(GPS_LONGITUDE, (73, 1), (59, 1), (0, 1)),
        ])
        self.assertLess(exif.longitude(), 0.0)

    def test_signed_degrees(self):
        exif = photo_with(gps=[lambda b: b.srational(GPS_LATITUDE, (-10, 1), (30, 1), (0, 1))])
        self.assertEqual(exif.latitude(), -10.5)

    def test_compass_direction_as_dms(self):
        exif = photo_with(gps=[lambda b: b.rational(GPS_IMG_DIRECTION, (10, 1), (30, 1), (0, 1))])
        self.assertEqual(exif.compass_direction(), 10.5)

    def test_compass_direction_full_circle(self):
        exif = photo_with(gps=[lambda b: b.rational(GPS_IMG_DIRECTION, (360, 1), (0, 1), (0, 1))])
        self.assertEqual(exif.compass_direction(), 0.0)

    def test_compass_direction_signed_type_ignored(self):
        exif = photo_with(gps=[lambda b: b.srational(GPS_IMG_DIRECTION, (45, 1))])
        self.assertEqual(exif.compass_direction(), 0.0)

    def test_focal_length_35mm_preferred(self):
        exif = photo_with(exif=[
            lambda b: b.rational(FOCAL_LENGTH, (180, 10)),
            lambda b: b.short(FOCAL_LENGTH_IN_35MM_FILM, 27),
        ])
        self.assertEqual(exif.focal_length(), 27.0)

    def test_tags_without_keywords(self):
        exif = photo_with([lambda b: b.ascii(IMAGE_MAKE, 'Canon')])
        self.assertEqual(exif.tags(), [''])

    def test_utf8_keywords(self):
        exif = photo_with([lambda b: b.byte(XP_KEYWORDS, b'tree,lake')])
        self.assertEqual(exif.tags(), ['tree', 'lake'])


if __name__ == '__main__':
    unittest.main()

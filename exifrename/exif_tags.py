# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF tag definitions

Tag identifiers used by the value resolvers, and the human-readable tag name
tables for the three directory namespaces (IFD0, Exif sub-IFD, GPS sub-IFD).
The name tables only label fields for diagnostics; decoding never depends
on them. They are read-only and shared by every parse.

Only the tags the resolvers need, plus common ones for diagnostics.

Copyright 2025 DNAi inc.
"""

from types import MappingProxyType

# ============================================================
# IFD0 (Image) tags
# ============================================================
IMAGE_MAKE = 0x010F
IMAGE_MODEL = 0x0110
XP_KEYWORDS = 0x9C9E
EXIF_IFD_POINTER = 0x8769
GPS_IFD_POINTER = 0x8825

# ============================================================
# Exif sub-IFD tags
# ============================================================
DATE_TIME_ORIGINAL = 0x9003
DATE_TIME_DIGITIZED = 0x9004
FOCAL_LENGTH = 0x920A
MAKER_NOTE = 0x927C
SUB_SEC_TIME_ORIGINAL = 0x9291
SUB_SEC_TIME_DIGITIZED = 0x9292
PIXEL_X_DIMENSION = 0xA002
PIXEL_Y_DIMENSION = 0xA003
FOCAL_LENGTH_IN_35MM_FILM = 0xA405
BODY_SERIAL_NUMBER = 0xA431

# ============================================================
# GPS sub-IFD tags
# ============================================================
GPS_LATITUDE_REF = 0x01
GPS_LATITUDE = 0x02
GPS_LONGITUDE_REF = 0x03
GPS_LONGITUDE = 0x04
GPS_ALTITUDE_REF = 0x05
GPS_ALTITUDE = 0x06
GPS_TIME_STAMP = 0x07
GPS_IMG_DIRECTION = 0x11
GPS_DATE_STAMP = 0x1D

# ============================================================
# MakerNote tags
# ============================================================
NIKON_SERIAL_NUMBER = 0x001D
NIKON_SERIAL_NO = 0x00A0
NIKON_IMAGE_COUNT = 0x00A5
NIKON_SHUTTER_COUNT = 0x00A7
SONY_SEQUENCE_NUMBER = 0xB04A


IFD0_TAG_NAMES = MappingProxyType({
    0x0100: "ImageWidth",
    0x0101: "ImageLength",
    0x0102: "BitsPerSample",
    0x010E: "ImageDescription",
    0x010F: "Make",
    0x0110: "Model",
    0x0112: "Orientation",
    0x011A: "XResolution",
    0x011B: "YResolution",
    0x0128: "ResolutionUnit",
    0x0131: "Software",
    0x0132: "DateTime",
    0x013B: "Artist",
    0x0213: "YCbCrPositioning",
    0x4746: "Rating",
    0x4747: "XP_DIP_XML",
    0x4748: "HDViewInfo",
    0x4749: "RatingPercent",
    0x8298: "Copyright",
    0x8769: "ExifIFDPointer",
    0x8825: "GPSIFDPointer",
    0x9216: "TIFF/EPStandardID",
    0x9C9B: "XPTitle",
    0x9C9C: "XPComment",
    0x9C9D: "XPAuthor",
    0x9C9E: "XPKeywords",
    0x9C9F: "XPSubject",
    0xEA1C: "Padding",
})

EXIF_TAG_NAMES = MappingProxyType({
    0x829A: "ExposureTime",
    0x829D: "FNumber",
    0x8822: "ExposureProgram",
    0x8827: "ISO",
    0x9000: "ExifVersion",
    0x9003: "DateTimeOriginal",
    0x9004: "DateTimeDigitized",
    0x9101: "ComponentsConfiguration",
    0x9102: "CompressedBitsPerPixel",
    0x9202: "ApertureValue",
    0x9204: "ExposureBiasValue",
    0x9205: "MaxApertureValue",
    0x9206: "SubjectDistance",
    0x9207: "MeteringMode",
    0x9208: "LightSource",
    0x9209: "Flash",
    0x920A: "FocalLength",
    0x927C: "MakerNote",
    0x9286: "UserComment",
    0x9290: "SubSecTime",
    0x9291: "SubSecTimeOriginal",
    0x9292: "SubSecTimeDigitized",
    0xA000: "FlashpixVersion",
    0xA001: "ColorSpace",
    0xA002: "PixelXDimension",
    0xA003: "PixelYDimension",
    0xA005: "InteropOffset",
    0xA217: "SensingMethod",
    0xA300: "FileSource",
    0xA301: "SceneType",
    0xA302: "CFAPattern",
    0xA401: "CustomRendered",
    0xA402: "ExposureMode",
    0xA403: "WhiteBalance",
    0xA404: "DigitalZoomRatio",
    0xA405: "FocalLengthIn35mmFilm",
    0xA406: "SceneCaptureType",
    0xA407: "GainControl",
    0xA408: "Contrast",
    0xA409: "Saturation",
    0xA40A: "Sharpness",
    0xA40B: "DeviceSettingDescription",
    0xA40C: "SubjectDistanceRange",
    0xA431: "BodySerialNumber",
    0xEA1C: "Padding",
    0xEA1D: "OffsetSchema",
})

GPS_TAG_NAMES = MappingProxyType({
    0x00: "GPSVersionID",
    0x01: "GPSLatitudeRef",
    0x02: "GPSLatitude",
    0x03: "GPSLongitudeRef",
    0x04: "GPSLongitude",
    0x05: "GPSAltitudeRef",
    0x06: "GPSAltitude",
    0x07: "GPSTimeStamp",
    0x08: "GPSSatellites",
    0x09: "GPSStatus",
    0x0A: "GPSMeasureMode",
    0x10: "GPSImgDirectionRef",
    0x11: "GPSImgDirection",
    0x12: "GPSMapDatum",
    0x1D: "GPSDateStamp",
})

# MakerNote names, keyed by vendor
MAKERNOTE_TAG_NAMES = MappingProxyType({
    'nikon': MappingProxyType({
        0x001D: "SerialNumber",
        0x00A0: "SerialNO",
        0x00A5: "ImageCount",
        0x00A7: "ShutterCount",
    }),
    'sony': MappingProxyType({
        0xB04A: "SequenceNumber",
    }),
})

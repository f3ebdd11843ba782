# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
exifrename - EXIF decoding for naming photographs

A pure Python decoder for the EXIF block of image files. It locates the
TIFF container, walks IFD0 and the Exif and GPS sub-directories, and
resolves capture time, GPS position, camera identity and the shutter and
sequence counters Nikon and Sony keep in their MakerNotes.

The decoder performs no I/O and never raises on malformed data. A small
renaming layer built on it names photographs after the moment they were
taken.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.3"
__author__ = "DNAi inc."

from exifrename.exif_parser import Exif
from exifrename.tiff_structure import TiffHeader, find_tiff_offset
from exifrename.ifd import ImageFileDirectory
from exifrename.interop_field import (
    ExifTagType,
    InteroperabilityField,
    dms_to_decimal_degrees,
    rational,
)
from exifrename.date_formatter import parse_exif_datetime, parse_exif_date
from exifrename.config import RenameConfig
from exifrename.exceptions import ExifRenameError, MetadataReadError, RenameError
from exifrename.renamer import (
    RenameResult,
    batch_rename,
    build_filename,
    collect_files,
    process_file,
    read_exif,
)

__all__ = [
    "Exif",
    "TiffHeader",
    "find_tiff_offset",
    "ImageFileDirectory",
    "ExifTagType",
    "InteroperabilityField",
    "dms_to_decimal_degrees",
    "rational",
    "parse_exif_datetime",
    "parse_exif_date",
    "RenameConfig",
    "ExifRenameError",
    "MetadataReadError",
    "RenameError",
    "RenameResult",
    "batch_rename",
    "build_filename",
    "collect_files",
    "process_file",
    "read_exif",
]

# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for exifrename

Renames photographs to ``YYYYMMDD_HHMMSS_N.ext`` using their EXIF capture
time and camera counters, or dumps the decoded EXIF fields.

Copyright 2025 DNAi inc.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from exifrename import __version__
from exifrename.config import RenameConfig
from exifrename.exceptions import ExifRenameError
from exifrename.renamer import STATUS_ERROR, batch_rename, collect_files, read_exif

logger = logging.getLogger('exifrename')


def setup_logger(verbose: bool) -> None:
    """Configure the package logger, replacing any handler from an earlier call."""
    if verbose:
        log_level = logging.DEBUG
        log_format = '%(levelname)-7s %(name)s: %(message)s'
    else:
        log_level = logging.INFO
        log_format = '%(message)s'
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(log_format))
    stream.setLevel(log_level)
    logger.setLevel(log_level)
    logger.addHandler(stream)


def describe_file(file_path: Path, read_size: int) -> List[str]:
    """
    Describe the decoded EXIF of a file.

    Args:
        file_path: Image file
        read_size: Maximum number of leading bytes to read

    Returns:
        Output lines: one per decoded field, then the resolved values

    Raises:
        MetadataReadError: If the file holds no readable EXIF data
    """
    exif = read_exif(file_path, read_size)

    byte_order = 'Little-endian (Intel, II)' if exif.header.little_endian else 'Big-endian (Motorola, MM)'
    lines = [f"== {file_path}", f"Byte order: {byte_order}"]
    for ifd_name, entry in exif.fields():
        lines.append(f"{ifd_name}: {entry.describe()}")

    lines.extend([
        f"Make: {exif.make()}",
        f"Model: {exif.model()}",
        f"Serial number: {exif.serial_number()}",
        f"Taken: {exif.taken().isoformat()}",
        f"GPS date/time: {exif.gps_date_time().isoformat()}",
        f"Latitude: {exif.latitude()}",
        f"Longitude: {exif.longitude()}",
        f"Altitude: {exif.altitude()}",
        f"Compass direction: {exif.compass_direction()}",
        f"Focal length: {exif.focal_length()}",
        f"Width: {exif.width()}",
        f"Height: {exif.height()}",
        f"Shutter count: {exif.shutter_count()}",
        f"Sequence number: {exif.sequence_number()}",
        f"Tags: {', '.join(exif.tags())}",
    ])
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='exifrename',
        description="Rename photographs after the time they were taken",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Rename every photograph below a directory
  exifrename ~/Pictures/import

  # Show the new names without renaming
  exifrename --dry-run IMG_0001.JPG IMG_0002.JPG

  # Print the decoded EXIF fields
  exifrename --dump DSC_0042.NEF
        """
    )
    parser.add_argument('files', nargs='+', help='File(s) or directory(ies) to process')
    parser.add_argument('-n', '--dry-run', action='store_true', help='Report new names without renaming')
    parser.add_argument('--dump', action='store_true', help='Print decoded EXIF fields instead of renaming')
    parser.add_argument('-w', '--workers', type=int, default=None, help='Number of worker threads (default: CPU count)')
    parser.add_argument('-d', '--date-format', default=None, help='strftime format of the timestamp part')
    parser.add_argument('--overwrite', action='store_true', help='Replace files that already have the new name')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug output')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        0 on success, 1 when any file could not be renamed, 2 on usage errors
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(args.verbose)

    try:
        config_options = {
            'max_workers': args.workers,
            'dry_run': args.dry_run,
            'overwrite': args.overwrite,
        }
        if args.date_format:
            config_options['date_format'] = args.date_format
        config = RenameConfig(**config_options)
    except ValueError as e:
        parser.error(str(e))

    files = collect_files(args.files)

    if args.dump:
        status = 0
        for file_path in files:
            try:
                print("\n".join(describe_file(file_path, config.read_size)))
            except ExifRenameError as e:
                logger.warning("%s", e.message)
                status = 1
        return status

    results = batch_rename(files, config)
    return 1 if any(result.status == STATUS_ERROR for result in results) else 0


if __name__ == "__main__":
    sys.exit(main())

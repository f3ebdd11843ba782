# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Date parsing and formatting utilities

EXIF stores timestamps as fixed-layout text. The parsers here accept only
the layouts cameras actually write and return a minimum sentinel instead of
a partial date for anything else.

Copyright 2025 DNAi inc.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional

# Sentinels returned for unparseable input
MIN_DATETIME = datetime.min
MIN_DATE = date.min

DEFAULT_FILENAME_FORMAT = '%Y%m%d_%H%M%S'

# Shortest accepted date/time string, e.g. "2007:12:06 17:32:0"
MIN_DATETIME_LENGTH = 18

# One strftime directive, so an escaped '%%' is consumed whole
_DIRECTIVE = re.compile(r'%.', re.DOTALL)


def _to_int(text: str) -> Optional[int]:
    try:
        return int(text)
    except ValueError:
        return None


def parse_exif_datetime(date_string: Optional[str]) -> datetime:
    """
    Parse an EXIF date/time string.

    Supports formats:
    - YYYY:MM:DD HH:MM:SS
    - YYYY-MM-DD HH:MM:SS
    - YYYY-MM-DDTHH:MM:SS.s+HH:MM (fraction and zone are ignored)

    The separators at indices 4, 7, 13 and 16 are checked literally.

    Args:
        date_string: Text read from a DateTime tag

    Returns:
        Naive datetime, or ``MIN_DATETIME`` when the string does not match
        or names an impossible date
    """
    #           11111111112
    # 012345678901234567890
    # 2007:12:06 17:32:03
    # 2010-07-01T07:09:13.5-04:00
    if not date_string or len(date_string) < MIN_DATETIME_LENGTH:
        return MIN_DATETIME

    if (date_string[4] not in ':-' or date_string[7] not in ':-'
            or date_string[13] != ':' or date_string[16] != ':'):
        return MIN_DATETIME

    parts = [
        _to_int(date_string[0:4]),
        _to_int(date_string[5:7]),
        _to_int(date_string[8:10]),
        _to_int(date_string[11:13]),
        _to_int(date_string[14:16]),
        _to_int(date_string[17:19]),
    ]
    if any(part is None for part in parts):
        return MIN_DATETIME

    try:
        return datetime(*parts)
    except ValueError:
        return MIN_DATETIME


def parse_exif_date(date_string: Optional[str]) -> date:
    """
    Parse a ``YYYY:MM:DD`` date such as GPSDateStamp.

    Returns ``MIN_DATE`` for anything that is not exactly that layout.
    """
    if not date_string or len(date_string) != 10:
        return MIN_DATE

    if date_string[4] != ':' or date_string[7] != ':':
        return MIN_DATE

    year = _to_int(date_string[0:4])
    month = _to_int(date_string[5:7])
    day = _to_int(date_string[8:10])
    if year is None or month is None or day is None:
        return MIN_DATE

    try:
        return date(year, month, day)
    except ValueError:
        return MIN_DATE


def parse_sub_seconds(sub_seconds: Optional[str]) -> float:
    """
    Interpret a SubSecTime value as a fraction of a second.

    The digits are the decimals after "0.", so "5" is half a second and
    "123" is 0.123 seconds.

    Returns:
        The fraction, or 0.0 when the text is not a run of digits
    """
    if not sub_seconds:
        return 0.0
    try:
        return float('0.' + sub_seconds.strip())
    except ValueError:
        return 0.0


def add_sub_seconds(timestamp: datetime, sub_seconds: Optional[str]) -> datetime:
    """Shift ``timestamp`` forward by a positive SubSecTime fraction."""
    fraction = parse_sub_seconds(sub_seconds)
    if fraction <= 0.0:
        return timestamp
    try:
        return timestamp + timedelta(seconds=fraction)
    except OverflowError:
        return timestamp


def format_filename_timestamp(timestamp: datetime, format_string: str = DEFAULT_FILENAME_FORMAT) -> str:
    """
    Format a timestamp for use in a filename.

    Args:
        timestamp: Time the photograph was taken
        format_string: strftime format

    Returns:
        Formatted string, e.g. ``20071206_173203``
    """
    # strftime does not zero-pad years below 1000 on every platform
    year = f'{timestamp.year:04d}'
    format_string = _DIRECTIVE.sub(
        lambda match: year if match.group(0) == '%Y' else match.group(0), format_string
    )
    return timestamp.strftime(format_string)

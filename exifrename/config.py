# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Rename configuration

Copyright 2025 DNAi inc.
"""

import os
from typing import Optional

from exifrename.date_formatter import DEFAULT_FILENAME_FORMAT

ONE_MEGABYTE = 1048576

# Leading bytes read from each file; EXIF sits near the start
DEFAULT_READ_SIZE = 20 * ONE_MEGABYTE


class RenameConfig:
    """
    Configuration for renaming photographs.

    Defaults reproduce the classic behaviour: read up to 20MB of each
    file, name it ``YYYYMMDD_HHMMSS_N.ext`` and rename in place, using one
    worker per CPU.
    """

    def __init__(
        self,
        read_size: int = DEFAULT_READ_SIZE,
        max_workers: Optional[int] = None,
        date_format: str = DEFAULT_FILENAME_FORMAT,
        dry_run: bool = False,
        overwrite: bool = False,
    ):
        """
        Args:
            read_size: Maximum number of leading bytes read per file
            max_workers: Worker threads; defaults to the CPU count
            date_format: strftime format for the timestamp part of the name
            dry_run: Report new names without renaming
            overwrite: Replace an existing file with the new name
        """
        if read_size <= 0:
            raise ValueError("read_size must be positive")
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be positive")

        self.read_size = read_size
        self.max_workers = max_workers or os.cpu_count() or 1
        self.date_format = date_format
        self.dry_run = dry_run
        self.overwrite = overwrite

    def __repr__(self) -> str:
        return (f"RenameConfig(read_size={self.read_size}, max_workers={self.max_workers}, "
                f"date_format={self.date_format!r}, dry_run={self.dry_run}, "
                f"overwrite={self.overwrite})")

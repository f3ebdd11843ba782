# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Rename photographs from their EXIF data.

This module provides the file handling around the decoder: collecting
files, reading their leading bytes, choosing a new name from the capture
time and camera counters, renaming, and running all of it over many files
at once.

Copyright 2025 DNAi inc.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from exifrename.config import DEFAULT_READ_SIZE, RenameConfig
from exifrename.date_formatter import DEFAULT_FILENAME_FORMAT, format_filename_timestamp
from exifrename.exceptions import MetadataReadError, RenameError
from exifrename.exif_parser import Exif

logger = logging.getLogger(__name__)

STATUS_RENAMED = 'renamed'
STATUS_UNCHANGED = 'unchanged'
STATUS_SKIPPED = 'skipped'
STATUS_DRY_RUN = 'dry-run'
STATUS_ERROR = 'error'

# Serializes the exists check and the rename across worker threads
_rename_lock = threading.Lock()


@dataclass
class RenameResult:
    """Outcome of processing one file."""
    source: Path
    target: Optional[Path] = None
    status: str = STATUS_SKIPPED
    message: str = ''


def collect_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """
    Expand command-line arguments into a list of files.

    Directories are walked recursively. Paths that do not exist are logged
    and left out.

    Args:
        paths: Files and directories

    Returns:
        Absolute file paths, directory contents in sorted order
    """
    files = []
    for entry in paths:
        path = Path(entry)
        if path.is_dir():
            files.extend(sorted(p.resolve() for p in path.rglob('*') if p.is_file()))
        elif path.is_file():
            files.append(path.resolve())
        else:
            logger.warning("No such file or directory: %s", path)
    return files


def read_leading_bytes(file_path: Union[str, Path], read_size: int = DEFAULT_READ_SIZE) -> bytes:
    """
    Read the start of a file.

    Args:
        file_path: File to read
        read_size: Maximum number of bytes to read

    Returns:
        Up to ``read_size`` bytes

    Raises:
        MetadataReadError: If the file cannot be read or is empty
    """
    path = Path(file_path)
    try:
        with open(path, 'rb') as f:
            data = f.read(read_size)
    except OSError as e:
        raise MetadataReadError(f"Cannot read {path}: {e}") from e

    if not data:
        raise MetadataReadError(f"{path} is empty")
    return data


def read_exif(file_path: Union[str, Path], read_size: int = DEFAULT_READ_SIZE) -> Exif:
    """
    Decode the EXIF data of a file.

    Raises:
        MetadataReadError: If the file cannot be read or holds no EXIF data
    """
    data = read_leading_bytes(file_path, read_size)
    exif = Exif.from_bytes(data)
    if exif is None:
        raise MetadataReadError(f"No EXIF data found in {file_path}")
    return exif


def build_filename(
    exif: Exif,
    file_number: int,
    extension: str,
    date_format: str = DEFAULT_FILENAME_FORMAT
) -> str:
    """
    Choose a new filename for a photograph.

    The name is the capture time followed by the shutter count, the
    sequence number, or ``file_number``, whichever is found first.

    Args:
        exif: Decoded EXIF of the file
        file_number: Position of the file in the batch
        extension: Original extension, including the dot
        date_format: strftime format of the timestamp

    Returns:
        New filename, e.g. ``20071206_173203_48211.jpg``
    """
    final_field = exif.shutter_count()
    if final_field == 0:
        final_field = exif.sequence_number()
    if final_field == 0:
        final_field = file_number

    timestamp = format_filename_timestamp(exif.taken(), date_format)
    return f"{timestamp}_{final_field}{extension}"


def rename_file(source: Path, new_name: str, overwrite: bool = False) -> Path:
    """
    Rename a file within its directory.

    The existence check and the rename run under one lock, so two workers
    that pick the same name cannot both claim it.

    Raises:
        RenameError: If the target exists and ``overwrite`` is off, or the
            rename fails
    """
    target = source.with_name(new_name)

    with _rename_lock:
        if target.exists() and not overwrite:
            raise RenameError(f"{target} already exists")
        try:
            if overwrite:
                source.replace(target)
            else:
                source.rename(target)
        except OSError as e:
            raise RenameError(f"Cannot rename {source} to {new_name}: {e}") from e

    return target


def process_file(
    file_path: Union[str, Path],
    file_number: int,
    config: Optional[RenameConfig] = None
) -> RenameResult:
    """
    Rename one photograph after its EXIF data.

    Files without readable EXIF are skipped. Rename failures are reported
    in the result rather than raised, so one bad file does not stop a batch.

    Args:
        file_path: File to rename
        file_number: Position of the file in the batch, used when the
            camera recorded no counter
        config: Rename configuration

    Returns:
        What happened to the file
    """
    config = config or RenameConfig()
    path = Path(file_path)

    try:
        exif = read_exif(path, config.read_size)
    except MetadataReadError as e:
        logger.warning("Skipping %s: %s", path, e.message)
        return RenameResult(source=path, status=STATUS_SKIPPED, message=e.message)

    new_name = build_filename(exif, file_number, path.suffix, config.date_format)
    target = path.with_name(new_name)

    if new_name == path.name:
        logger.debug("%s already named", path)
        return RenameResult(source=path, target=target, status=STATUS_UNCHANGED)

    if config.dry_run:
        logger.info("Would rename %s -> %s", path, new_name)
        return RenameResult(source=path, target=target, status=STATUS_DRY_RUN)

    try:
        target = rename_file(path, new_name, config.overwrite)
    except RenameError as e:
        logger.warning("%s", e.message)
        return RenameResult(source=path, target=target, status=STATUS_ERROR, message=e.message)

    logger.info("Renamed %s -> %s", path, new_name)
    return RenameResult(source=path, target=target, status=STATUS_RENAMED)


def batch_rename(
    file_paths: List[Union[str, Path]],
    config: Optional[RenameConfig] = None,
    error_handler: Optional[Callable[[Path, Exception], None]] = None
) -> List[RenameResult]:
    """
    Rename many photographs concurrently.

    Each file is decoded and renamed independently on a thread pool. The
    position of a file in ``file_paths`` is its fallback number.

    Args:
        file_paths: Files to rename
        config: Rename configuration
        error_handler: Optional callback for unexpected errors (path, exception)

    Returns:
        One result per file, in input order

    Example:
        >>> results = batch_rename(collect_files(['DCIM']))
        >>> renamed = [r for r in results if r.status == STATUS_RENAMED]
    """
    config = config or RenameConfig()
    paths = [Path(p) for p in file_paths]

    with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
        futures = [
            executor.submit(process_file, path, file_number, config)
            for file_number, path in enumerate(paths)
        ]

        results = []
        for path, future in zip(paths, futures):
            try:
                results.append(future.result())
            except Exception as e:
                if error_handler:
                    error_handler(path, e)
                else:
                    logger.exception("Unexpected error processing %s", path)
                results.append(RenameResult(source=path, status=STATUS_ERROR, message=str(e)))

    return results

# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for exifrename

The EXIF decoder never raises on bad data; these exceptions belong to the
file handling around it.

Copyright 2025 DNAi inc.
"""


class ExifRenameError(Exception):
    """
    Base exception for all exifrename errors.

    All exifrename exceptions inherit from this class, allowing
    catch-all error handling for a single file in a batch.
    """
    def __init__(self, message: str = ""):
        """
        Args:
            message: What went wrong, including the file involved
        """
        self.message = message
        super().__init__(message)


class MetadataReadError(ExifRenameError):
    """
    Raised when a file yields no usable EXIF data.

    Covers:
    - The file cannot be opened or read
    - The file is empty
    - No TIFF/EXIF container with a valid header is found
    """
    pass


class RenameError(ExifRenameError):
    """
    Raised when a file cannot be renamed.

    Covers:
    - A file with the new name already exists
    - The operating system refuses the rename
    """
    pass

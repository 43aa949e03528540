# core/errors.py
"""
Error taxonomy for scanning, probing and file operations.

Three families, one per fallible stage:
- ScanError: the source folder cannot be enumerated (aborts the run)
- ProbeError: a file's dimensions cannot be read (fails that file only)
- OperationError: a file cannot be placed at its destination (fails that file only)
"""

from pathlib import Path
from typing import Optional, Union


class PixOrderError(Exception):
    """Base error for the project."""

    default_message = "PixOrder error"

    def __init__(
        self,
        message: Optional[str] = None,
        path: Union[str, Path, None] = None,
    ):
        self.message = message or self.default_message
        self.path = Path(path) if path is not None else None
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.path is not None:
            return f"{self.message}: {self.path}"
        return self.message


def os_error_reason(error: BaseException) -> str:
    """
    Short reason text for an exception, without the file name.

    str(OSError) embeds the filename, which PixOrderError already appends,
    so strerror is used when present.
    """
    strerror = getattr(error, "strerror", None)
    return strerror or str(error)


class RuleFileError(PixOrderError):
    default_message = "Invalid rules file"


# Scanner


class ScanError(PixOrderError):
    default_message = "Cannot scan folder"


class FolderNotADirectoryError(ScanError):
    default_message = "The specified path is not a directory"


class FolderAccessDeniedError(ScanError):
    default_message = "Access denied to the specified directory"


class InvalidFolderPathError(ScanError):
    default_message = "The specified path is invalid"


# Metadata probe


class ProbeError(PixOrderError):
    default_message = "Cannot read media dimensions"


class UnsupportedFileTypeError(ProbeError):
    default_message = "Unsupported file type"


class UnreadableFileError(ProbeError):
    default_message = "Cannot read file"


class UnreadableMetadataError(ProbeError):
    default_message = "Cannot read file metadata"


class UnreadableDimensionsError(ProbeError):
    default_message = "Cannot read file dimensions"


class NoVideoTrackError(ProbeError):
    default_message = "Video file has no video track"


# File operations


class OperationError(PixOrderError):
    default_message = "File operation error"


class FileSkippedError(OperationError):
    default_message = "File was skipped due to conflict"


class CannotCreateDirectoryError(OperationError):
    default_message = "Cannot create destination directory"


class FileOperationFailedError(OperationError):
    default_message = "File operation failed"


__all__ = [
    "PixOrderError",
    "RuleFileError",
    "ScanError",
    "FolderNotADirectoryError",
    "FolderAccessDeniedError",
    "InvalidFolderPathError",
    "ProbeError",
    "UnsupportedFileTypeError",
    "UnreadableFileError",
    "UnreadableMetadataError",
    "UnreadableDimensionsError",
    "NoVideoTrackError",
    "OperationError",
    "FileSkippedError",
    "CannotCreateDirectoryError",
    "FileOperationFailedError",
    "os_error_reason",
]

"""
Exception definitions for the sampling pipeline.

- SamplerError: base class, carries a user-facing message and details
- InvalidFileTypeError: a selected file is not a CSV
- FileTooLargeError: a selected file exceeds the size ceiling
- SchemaMismatchError: column count differs across files
- InvalidSampleRateError: sample stride is not a positive integer
- FileReadError: a selected file could not be opened
- StorageError: cached column model could not be decoded
"""
from typing import Any, Dict, Optional


class SamplerError(Exception):
    """Base exception for pipeline errors."""

    kind = "SamplerError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidFileTypeError(SamplerError):
    kind = "InvalidFileType"


class FileTooLargeError(SamplerError):
    kind = "FileTooLarge"


class SchemaMismatchError(SamplerError):
    kind = "SchemaMismatch"


class InvalidSampleRateError(SamplerError):
    kind = "InvalidSampleRate"


class StorageError(SamplerError):
    kind = "Storage"


class FileReadError(SamplerError):
    kind = "FileRead"

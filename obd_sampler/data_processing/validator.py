from typing import Sequence

from obd_sampler.data_processing.exceptions import FileTooLargeError, InvalidFileTypeError
from obd_sampler.data_processing.models import RawFile
from obd_sampler.settings import CSV_MIME_TYPE, MAX_FILE_SIZE_BYTES


class FileValidator:
    """Checks a candidate file set against the type and size policy."""

    def __init__(self, max_size_bytes: int = MAX_FILE_SIZE_BYTES, mime_type: str = CSV_MIME_TYPE):
        self.max_size_bytes = max_size_bytes
        self.mime_type = mime_type

    def validate(self, files: Sequence[RawFile]) -> None:
        """
        Accept the set only if every file is a CSV and below the size ceiling.
        The type is checked over the whole set before the size.

        Raises:
            InvalidFileTypeError: a file is not declared as CSV
            FileTooLargeError: a file is at or above the ceiling
        """
        wrong_type = [f.name for f in files if f.mime_type != self.mime_type]
        if wrong_type:
            raise InvalidFileTypeError(
                "File type is incorrect. Make sure it is a .csv file",
                {"files": wrong_type},
            )

        too_large = [f.name for f in files if not f.size_bytes < self.max_size_bytes]
        if too_large:
            raise FileTooLargeError(
                f"File is too large. {self.max_size_bytes // 1000000}MB max.",
                {"files": too_large, "max_size_bytes": self.max_size_bytes},
            )


def validate_files(files: Sequence[RawFile], max_size_bytes: int = MAX_FILE_SIZE_BYTES) -> None:
    FileValidator(max_size_bytes).validate(files)

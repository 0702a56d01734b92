from typing import List, Sequence

from obd_sampler.data_processing.exceptions import FileReadError
from obd_sampler.data_processing.models import RawFile
from obd_sampler.settings import DEFAULT_ENCODING


class SequentialReader:
    """
    Reads accepted files strictly one at a time, in list order.
    The index only moves when the caller calls advance(), which the controller
    does after the file's consolidation step succeeded.
    """

    def __init__(self, files: Sequence[RawFile], encoding: str = DEFAULT_ENCODING):
        self.files: List[RawFile] = list(files)
        self.encoding = encoding
        self.current_index = 0
        self.is_reading = False

    @property
    def done(self) -> bool:
        return self.current_index >= len(self.files)

    @property
    def current_file(self) -> RawFile:
        return self.files[self.current_index]

    def read_current(self) -> str:
        """Read the file at current_index and return its text."""
        if self.is_reading:
            raise RuntimeError("A file read is already in progress")
        if self.done:
            raise IndexError("All files have been read")

        self.is_reading = True
        try:
            raw = self.current_file
            print(f"[IO] Reading {raw.name} ({self.current_index + 1}/{len(self.files)})")
            return raw.read_text(self.encoding)
        except OSError as e:
            raise FileReadError(f"Could not read {raw.name}", {"file": raw.name, "error": str(e)}) from e
        finally:
            self.is_reading = False

    def advance(self) -> None:
        if self.done:
            raise IndexError("All files have been read")
        self.current_index += 1

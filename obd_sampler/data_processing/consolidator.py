from typing import List, Optional, Tuple

from obd_sampler.data_processing.exceptions import SchemaMismatchError
from obd_sampler.data_processing.models import ConsolidatedDataset
from obd_sampler.settings import FIELD_DELIMITER, LINE_SEPARATOR


def split_lines(content: str) -> Tuple[str, List[str]]:
    """
    Split file content into (header_line, data_lines).
    Windows line endings are tolerated and the empty line left by a
    terminating newline is dropped.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in content.split(LINE_SEPARATOR)]
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines[0], lines[1:]


class Consolidator:
    """
    Appends the rows of each file to a running dataset.
    The first file fixes the header and column count for the session.
    """

    def __init__(self):
        self.header_line: Optional[str] = None
        self.column_count: Optional[int] = None
        self.rows: List[str] = []
        self.files_consolidated = 0

    def consolidate(self, content: str, source_name: str = "") -> int:
        """
        Consolidate one file's content.

        Args:
            content: raw text of the file
            source_name: file name, used in messages

        Returns:
            Number of data rows appended

        Raises:
            SchemaMismatchError: header field count differs from the first file
        """
        header_line, data_lines = split_lines(content)
        new_column_count = len(header_line.split(FIELD_DELIMITER))

        if self.column_count is None:
            self.header_line = header_line
            self.column_count = new_column_count
        elif new_column_count != self.column_count:
            raise SchemaMismatchError(
                "Number of columns is not the same across files. Please try again.",
                {
                    "file": source_name,
                    "expected_columns": self.column_count,
                    "found_columns": new_column_count,
                },
            )

        self.rows.extend(data_lines)
        self.files_consolidated += 1
        print(f"[PIPELINE] Consolidated {source_name or 'file'}: {len(data_lines)} rows, {len(self.rows)} total")
        return len(data_lines)

    def dataset(self) -> ConsolidatedDataset:
        if self.header_line is None:
            raise ValueError("No file has been consolidated")
        return ConsolidatedDataset(header_line=self.header_line, rows=list(self.rows))

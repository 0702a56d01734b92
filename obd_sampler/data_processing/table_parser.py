from typing import List

from obd_sampler.data_processing.models import ParsedTable, SampledDataset
from obd_sampler.settings import FIELD_DELIMITER


def fit_row(fields: List[str], width: int) -> List[str]:
    """Pad a short row with empty strings or truncate a long one to width."""
    if len(fields) < width:
        return fields + [""] * (width - len(fields))
    return fields[:width]


def parse_table(sampled: SampledDataset) -> ParsedTable:
    """
    Split the header and every sampled row on the field delimiter.
    Rows whose width differs from the header are padded/truncated and counted.
    """
    header = sampled.header_line.split(FIELD_DELIMITER)
    width = len(header)

    rows = []
    mismatches = 0
    for line in sampled.rows:
        fields = line.split(FIELD_DELIMITER)
        if len(fields) != width:
            mismatches += 1
            fields = fit_row(fields, width)
        rows.append(fields)

    if mismatches:
        print(f"[WARN] {mismatches} row(s) did not have {width} fields and were padded or truncated")
    return ParsedTable(header=header, rows=rows, width_mismatches=mismatches)

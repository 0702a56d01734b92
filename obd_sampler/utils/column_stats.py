"""
Column statistics for the OBD2 sampler.
Builds a ColumnModel per column: raw values, integer subset, min/max/average.
"""
import math
import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from obd_sampler.data_processing.models import ColumnModel, ColumnSet, ParsedTable

# Optional leading whitespace and sign, then at least one digit; the rest is ignored
LEADING_INT_PATTERN = r"^[\s\ufeff]*([+-]?[0-9]+)"
_LEADING_INT_RE = re.compile(LEADING_INT_PATTERN)


def parse_leading_int(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a value, truncating anything after it.
    "3.7abc" -> 3, " -12 km" -> -12, ".5" -> None, "" -> None
    """
    if value is None:
        return None
    match = _LEADING_INT_RE.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def format_number(value: float) -> str:
    """Display form of a statistic: NaN as 'NaN', whole floats without decimals"""
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "NaN"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ColumnStats:
    """Compute statistics for a single column"""

    @staticmethod
    def analyze_column(column_data: pd.Series, column_name: str) -> ColumnModel:
        """
        Analyze a column of raw field strings.

        Args:
            column_data: pandas Series of strings, one per row
            column_name: header name of the column

        Returns:
            ColumnModel with the integer subset and its min/max/avg
        """
        values = ["" if pd.isna(v) else str(v) for v in column_data.tolist()]
        numeric_values = ColumnStats._parse_integers(pd.Series(values, dtype=object))
        stats = ColumnStats._analyze_numeric(numeric_values)
        return ColumnModel(
            name=column_name,
            values=values,
            numeric_values=numeric_values,
            min=stats["min"],
            max=stats["max"],
            avg=stats["avg"],
        )

    @staticmethod
    def _parse_integers(column_data: pd.Series) -> List[int]:
        """Keep the values that start with an integer, truncated to it"""
        if column_data.empty:
            return []
        matches = column_data.str.extract(LEADING_INT_PATTERN, expand=False).dropna()
        return [int(m) for m in matches]

    @staticmethod
    def _analyze_numeric(numeric_values: Sequence[int]) -> Dict[str, float]:
        """min/max/avg of the integer subset; NaN when it is empty"""
        if len(numeric_values) == 0:
            return {"min": float("nan"), "max": float("nan"), "avg": float("nan")}

        clean_data = pd.Series(list(numeric_values))
        return {
            "min": int(clean_data.min()),
            "max": int(clean_data.max()),
            "avg": float(sum(numeric_values) / len(numeric_values)),
        }


class ColumnStatsFactory:
    """Factory to create column models from various sources"""

    @staticmethod
    def from_table(table: ParsedTable) -> ColumnSet:
        """
        Build the column set of a parsed table, keyed by column index.

        Args:
            table: header names and (width-fitted) rows

        Returns:
            Dict of column index -> ColumnModel
        """
        frame = table.to_frame()
        columns = {}
        for index, name in enumerate(table.header):
            columns[index] = ColumnStats.analyze_column(frame[index], name)
        eligible = sum(1 for c in columns.values() if c.eligible)
        print(f"[PIPELINE] Computed statistics for {len(columns)} columns ({eligible} chartable)")
        return columns

    @staticmethod
    def from_values(column_name: str, values: Sequence[str]) -> ColumnModel:
        return ColumnStats.analyze_column(pd.Series(list(values), dtype=object), column_name)

    @staticmethod
    def from_snapshot(data: Dict[str, Any]) -> ColumnModel:
        """
        Restore a serialized column. Stored statistics are kept as they are;
        the integer subset is re-derived from the values when it was not stored.
        """
        column = ColumnModel.from_dict(data)
        if "numericValues" not in data:
            column.numeric_values = ColumnStats._parse_integers(pd.Series(column.values, dtype=object))
        return column


def eligible_fields(columns: ColumnSet) -> List[Tuple[int, str]]:
    """(index, name) of every column holding at least one integer, in index order"""
    return [(index, columns[index].name) for index in sorted(columns) if columns[index].eligible]

"""
Data model of the sampling pipeline.
Every stage returns a new object; nothing here is mutated after construction
except the consolidator's running row list.
"""
import math
import mimetypes
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from obd_sampler.settings import CSV_MIME_TYPE, DEFAULT_ENCODING, FIELD_DELIMITER, LINE_SEPARATOR


@dataclass(frozen=True)
class RawFile:
    """Handle on a selected file. content is None until the file is read."""
    name: str
    mime_type: str
    size_bytes: int
    path: Optional[str] = None
    content: Optional[str] = None

    @classmethod
    def from_path(cls, path: str) -> "RawFile":
        """Build a handle from a path on disk, deriving MIME type and size."""
        name = os.path.basename(path)
        if name.lower().endswith(".csv"):
            mime_type = CSV_MIME_TYPE
        else:
            mime_type = mimetypes.guess_type(name)[0] or "application/octet-stream"
        return cls(name=name, mime_type=mime_type, size_bytes=os.path.getsize(path), path=path)

    @classmethod
    def from_text(cls, name: str, content: str, mime_type: str = CSV_MIME_TYPE) -> "RawFile":
        """Build an in-memory handle (size is the UTF-8 byte length)."""
        return cls(name=name, mime_type=mime_type, size_bytes=len(content.encode("utf-8")), content=content)

    def read_text(self, encoding: str = DEFAULT_ENCODING) -> str:
        if self.content is not None:
            return self.content
        if self.path is None:
            raise ValueError(f"File {self.name} has neither content nor path")
        with open(self.path, "r", encoding=encoding, errors="replace", newline="") as f:
            return f.read()


@dataclass
class ConsolidatedDataset:
    header_line: str
    rows: List[str]

    @property
    def header(self) -> List[str]:
        return self.header_line.split(FIELD_DELIMITER)

    @property
    def column_count(self) -> int:
        return len(self.header)


@dataclass
class SampledDataset:
    header_line: str
    rows: List[str]
    stride: int

    def to_text(self) -> str:
        """Header followed by the sampled rows, newline separated."""
        return LINE_SEPARATOR.join([self.header_line, *self.rows])


@dataclass
class ParsedTable:
    header: List[str]
    rows: List[List[str]]
    width_mismatches: int = 0

    def to_frame(self):
        """Return the table as a DataFrame of strings with positional columns."""
        import pandas as pd
        return pd.DataFrame(self.rows, columns=range(len(self.header)), dtype=object)


def _json_number(value: float) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _from_json_number(value: Any) -> float:
    return float("nan") if value is None else value


@dataclass
class ColumnModel:
    """Values of one column plus the statistics of its integer subset."""
    name: str
    values: List[str]
    numeric_values: List[int] = field(default_factory=list)
    min: float = float("nan")
    max: float = float("nan")
    avg: float = float("nan")

    @property
    def eligible(self) -> bool:
        """A column can be charted only when it holds at least one integer."""
        return len(self.numeric_values) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "values": list(self.values),
            "numericValues": list(self.numeric_values),
            "min": _json_number(self.min),
            "max": _json_number(self.max),
            "avg": _json_number(self.avg),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColumnModel":
        return cls(
            name=str(data["name"]),
            values=[str(v) for v in data.get("values", [])],
            numeric_values=[int(v) for v in data.get("numericValues", [])],
            min=_from_json_number(data.get("min")),
            max=_from_json_number(data.get("max")),
            avg=_from_json_number(data.get("avg")),
        )


ColumnSet = Dict[int, ColumnModel]


def columns_to_dict(columns: ColumnSet) -> Dict[str, Dict[str, Any]]:
    return {str(index): column.to_dict() for index, column in columns.items()}


@dataclass(frozen=True)
class ChartPoint:
    x: int
    y: int


@dataclass
class ChartSeries:
    name: str
    points: List[ChartPoint]
    average_line: Optional[Tuple[ChartPoint, ChartPoint]] = None

    def svg_points(self) -> str:
        """Points in polyline form: 'x,y x,y ...'"""
        return " ".join(f"{p.x},{p.y}" for p in self.points)

    def flat_coords(self) -> List[int]:
        """Points flattened for tkinter Canvas.create_line"""
        coords: List[int] = []
        for p in self.points:
            coords.extend((p.x, p.y))
        return coords

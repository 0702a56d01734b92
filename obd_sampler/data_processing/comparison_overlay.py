"""
Comparison overlay: a second column set projected alongside the primary one.

The overlay comes either from the bundled example drive log or from a column
set previously saved to local storage. Primary and overlay series are each
scaled against their own max, so the comparison is not normalized to a common
scale.
"""
import json
from enum import Enum
from typing import Callable, Optional

from obd_sampler.data_processing.chart_projector import project_column
from obd_sampler.data_processing.exceptions import StorageError
from obd_sampler.data_processing.models import ChartSeries, ColumnModel, ColumnSet, columns_to_dict
from obd_sampler.infrastructure.example_dataset import load_example_columns
from obd_sampler.infrastructure.interfaces import IKeyValueStore
from obd_sampler.settings import CACHE_KEY, GRAPH_HEIGHT, GRAPH_WIDTH
from obd_sampler.utils.column_stats import ColumnStatsFactory


class OverlaySource(Enum):
    EXAMPLE = "example"
    CACHED = "cached"


class ComparisonOverlay:
    """Supplies and projects the secondary column set"""

    def __init__(self, store: IKeyValueStore, key: str = CACHE_KEY,
                 example_loader: Callable[[], ColumnSet] = load_example_columns):
        self.store = store
        self.key = key
        self.example_loader = example_loader
        self._example: Optional[ColumnSet] = None

    # ------------------------------------------------------------------
    # Cached column set
    # ------------------------------------------------------------------
    def save(self, columns: ColumnSet) -> None:
        """Serialize a column set to the storage slot, replacing what was there."""
        self.store.set_item(self.key, json.dumps(columns_to_dict(columns)))
        print(f"[PIPELINE] Cached {len(columns)} columns under '{self.key}'")

    def clear(self) -> None:
        self.store.remove_item(self.key)
        print(f"[PIPELINE] Cleared cached columns '{self.key}'")

    def has_cached(self) -> bool:
        return self.store.get_item(self.key) is not None

    def load_cached(self) -> Optional[ColumnSet]:
        """Restore the cached column set, or None when nothing was saved."""
        raw = self.store.get_item(self.key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
            return {int(index): ColumnStatsFactory.from_snapshot(column) for index, column in data.items()}
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StorageError(f"Cached columns '{self.key}' could not be read", {"error": str(e)}) from e

    # ------------------------------------------------------------------
    # Example column set
    # ------------------------------------------------------------------
    def load_example(self) -> ColumnSet:
        if self._example is None:
            self._example = self.example_loader()
        return self._example

    def columns_for(self, source: OverlaySource) -> Optional[ColumnSet]:
        if source == OverlaySource.EXAMPLE:
            return self.load_example()
        return self.load_cached()

    # ------------------------------------------------------------------
    # Matching and projection
    # ------------------------------------------------------------------
    @staticmethod
    def match(overlay_columns: Optional[ColumnSet], index: int,
              primary: Optional[ColumnModel] = None) -> Optional[ColumnModel]:
        """
        Pick the overlay column to compare with the primary column:
        same name first, then same index. Ineligible columns are never returned.
        """
        if not overlay_columns:
            return None
        if primary is not None:
            for key in sorted(overlay_columns):
                candidate = overlay_columns[key]
                if candidate.name == primary.name and candidate.eligible:
                    return candidate
        candidate = overlay_columns.get(index)
        if candidate is not None and candidate.eligible:
            return candidate
        return None

    def project(self, source: OverlaySource, index: int, primary: Optional[ColumnModel] = None,
                width: int = GRAPH_WIDTH, height: int = GRAPH_HEIGHT) -> Optional[ChartSeries]:
        column = self.match(self.columns_for(source), index, primary)
        if column is None:
            return None
        return project_column(column, width, height)

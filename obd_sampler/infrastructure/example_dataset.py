import json
import os
from typing import Optional

from obd_sampler.data_processing.models import ColumnSet
from obd_sampler.utils.column_stats import ColumnStatsFactory
from obd_sampler.utils.io import get_path

EXAMPLE_COLUMNS_FILE = get_path(os.path.join("..", "data", "example_columns.json"), __file__)


def load_example_columns(path: Optional[str] = None) -> ColumnSet:
    """Load the bundled example column set (a short drive log)."""
    path = path or EXAMPLE_COLUMNS_FILE
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    print(f"[LOADER] Loaded example dataset: {len(data)} columns")
    return {int(index): ColumnStatsFactory.from_snapshot(column) for index, column in data.items()}

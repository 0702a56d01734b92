"""
Tests for the comparison overlay, local storage and the bundled example dataset.

Run with:
    pytest tests/test_comparison_overlay.py -v
"""

import json
import os

import pytest

from obd_sampler.data_processing.comparison_overlay import ComparisonOverlay, OverlaySource
from obd_sampler.data_processing.exceptions import StorageError
from obd_sampler.infrastructure.example_dataset import EXAMPLE_COLUMNS_FILE, load_example_columns
from obd_sampler.infrastructure.local_storage import LocalStorage
from obd_sampler.settings import CACHE_KEY
from obd_sampler.utils.column_stats import ColumnStatsFactory


@pytest.fixture
def primaryColumns():
    """Column set of a freshly processed upload."""
    return {
        0: ColumnStatsFactory.from_values('GPS Time', ['t0', 't1']),
        1: ColumnStatsFactory.from_values('Speed (OBD)(km/h)', ['2', '4', '6']),
    }


# ================================================================================
# Cache
# ================================================================================

class TestCache:
    """Tests for saving and restoring the cached column set."""

    def test_saveThenLoad_restoresEveryColumn(self, memoryStore, primaryColumns):
        """
        Given: A saved column set
        When: load_cached() is called
        Then: Names, values and stats come back, including NaN stats
        """
        overlay = ComparisonOverlay(memoryStore)

        overlay.save(primaryColumns)
        restored = overlay.load_cached()

        assert set(restored) == {0, 1}
        assert restored[1].name == 'Speed (OBD)(km/h)'
        assert restored[1].numeric_values == [2, 4, 6]
        assert restored[1].avg == 4
        assert not restored[0].eligible

    def test_save_usesCachedColumnsKey(self, memoryStore, primaryColumns):
        ComparisonOverlay(memoryStore).save(primaryColumns)

        data = json.loads(memoryStore.get_item(CACHE_KEY))
        assert data['1']['numericValues'] == [2, 4, 6]
        assert data['0']['max'] is None

    def test_save_twice_lastWriteWins(self, memoryStore, primaryColumns):
        overlay = ComparisonOverlay(memoryStore)
        overlay.save(primaryColumns)

        overlay.save({0: ColumnStatsFactory.from_values('Rpm', ['800'])})

        assert list(overlay.load_cached()) == [0]

    def test_clear_removesCache(self, memoryStore, primaryColumns):
        overlay = ComparisonOverlay(memoryStore)
        overlay.save(primaryColumns)

        overlay.clear()

        assert not overlay.has_cached()
        assert overlay.load_cached() is None

    def test_loadCached_invalidJson_raisesStorageError(self, memoryStore):
        memoryStore.set_item(CACHE_KEY, '{not json')

        with pytest.raises(StorageError) as excInfo:
            ComparisonOverlay(memoryStore).load_cached()

        assert excInfo.value.kind == 'Storage'


# ================================================================================
# Matching and projection
# ================================================================================

class TestMatch:
    """Tests for choosing the overlay column."""

    def test_match_sameName_winsOverIndex(self, primaryColumns):
        """
        Given: An overlay whose matching name sits at another index
        When: matched
        Then: The column with the same name is returned
        """
        overlayColumns = {
            1: ColumnStatsFactory.from_values('Engine RPM(rpm)', ['800']),
            3: ColumnStatsFactory.from_values('Speed (OBD)(km/h)', ['10', '20']),
        }

        column = ComparisonOverlay.match(overlayColumns, 1, primaryColumns[1])

        assert column.numeric_values == [10, 20]

    def test_match_noSameName_fallsBackToIndex(self, primaryColumns):
        overlayColumns = {1: ColumnStatsFactory.from_values('Other', ['5'])}

        column = ComparisonOverlay.match(overlayColumns, 1, primaryColumns[1])

        assert column.name == 'Other'

    def test_match_ineligibleColumn_returnsNone(self, primaryColumns):
        overlayColumns = {1: ColumnStatsFactory.from_values('Other', ['n/a'])}

        assert ComparisonOverlay.match(overlayColumns, 1, primaryColumns[1]) is None

    def test_match_noOverlay_returnsNone(self):
        assert ComparisonOverlay.match(None, 0) is None
        assert ComparisonOverlay.match({}, 0) is None

    def test_project_cachedSource_scaledAgainstOwnMax(self, memoryStore):
        """
        Given: A cached column with max 12
        When: projected
        Then: Its max value is at the top regardless of the primary column
        """
        overlay = ComparisonOverlay(memoryStore)
        overlay.save({0: ColumnStatsFactory.from_values('Speed', ['6', '12'])})

        series = overlay.project(OverlaySource.CACHED, 0, width=800, height=400)

        assert series.svg_points() == '0,200 400,0'

    def test_project_cachedSourceEmpty_returnsNone(self, memoryStore):
        assert ComparisonOverlay(memoryStore).project(OverlaySource.CACHED, 1) is None

    def test_project_exampleSource_usesLoaderOnce(self, memoryStore):
        calls = []

        def loader():
            calls.append(1)
            return {0: ColumnStatsFactory.from_values('Speed', ['1', '2'])}

        overlay = ComparisonOverlay(memoryStore, example_loader=loader)
        overlay.project(OverlaySource.EXAMPLE, 0)
        series = overlay.project(OverlaySource.EXAMPLE, 0)

        assert len(series.points) == 2
        assert calls == [1]


# ================================================================================
# Example dataset
# ================================================================================

class TestExampleDataset:
    """Tests for the bundled example column set."""

    def test_loadExampleColumns_bundledFile_hasChartableColumns(self):
        """
        Given: The bundled example file
        When: loaded
        Then: The time column is not chartable and Engine RPM is
        """
        columns = load_example_columns()

        assert os.path.isfile(EXAMPLE_COLUMNS_FILE)
        assert not columns[0].eligible
        assert columns[1].name == 'Engine RPM(rpm)'
        assert len(columns[1].numeric_values) == 12
        assert columns[1].min == 780
        assert columns[1].max == 2610


# ================================================================================
# Local storage
# ================================================================================

class TestLocalStorage:
    """Tests for the JSON file key/value store."""

    def test_setItem_persistsAcrossInstances(self, tmp_path):
        LocalStorage(str(tmp_path)).set_item('k', 'v')

        assert LocalStorage(str(tmp_path)).get_item('k') == 'v'

    def test_getItem_missingFile_returnsNone(self, tmp_path):
        assert LocalStorage(str(tmp_path / 'nothing')).get_item('k') is None

    def test_removeItem_keepsOtherKeys(self, tmp_path):
        store = LocalStorage(str(tmp_path))
        store.set_item('a', '1')
        store.set_item('b', '2')

        store.remove_item('a')

        assert store.get_item('a') is None
        assert store.get_item('b') == '2'

    def test_getItem_corruptFile_raisesStorageError(self, tmp_path):
        store = LocalStorage(str(tmp_path))
        with open(store.file_path, 'w', encoding='utf-8') as f:
            f.write('[broken')

        with pytest.raises(StorageError):
            store.get_item('k')

"""
Tests for the command line entry point.

Run with:
    pytest tests/test_cli.py -v
"""

import os

import pytest

import script
from obd_sampler.settings import CACHE_KEY
from obd_sampler.infrastructure.local_storage import LocalStorage


@pytest.fixture
def driveLog(writeCsv):
    return writeCsv('logs/drive.csv', 'GPS Time,Speed (OBD)(km/h)\nt0,2\nt1,4\nt2,6\nt3,8\n')


class TestMain:
    """Tests for script.main()."""

    def test_main_sampleRateTwo_writesSampledFile(self, driveLog, tmp_path, capsys):
        """
        Given: A drive log with 4 rows
        When: run with -r 2 and an output folder
        Then: sampled-data.csv holds the header and rows 0 and 2
        """
        outDir = tmp_path / 'out'

        code = script.main([driveLog, '-r', '2', '-o', str(outDir), '--storage-dir', str(tmp_path / 's')])

        assert code == 0
        with open(outDir / 'sampled-data.csv', encoding='utf-8', newline='') as f:
            assert f.read() == 'GPS Time,Speed (OBD)(km/h)\nt0,2\nt2,6'
        assert 'Speed (OBD)(km/h): max 6 | avg 4 | min 2' in capsys.readouterr().out

    def test_main_folderPath_collectsCsvFiles(self, driveLog, tmp_path):
        code = script.main([os.path.dirname(driveLog), '-r', '1', '--storage-dir', str(tmp_path / 's')])

        assert code == 0

    def test_main_invalidSampleRate_returnsTwo(self, driveLog, capsys):
        assert script.main([driveLog, '-r', '0']) == 2
        assert '[ERROR]' in capsys.readouterr().out

    def test_main_missingPath_returnsOne(self, tmp_path):
        assert script.main([str(tmp_path / 'missing.csv')]) == 1

    def test_main_schemaMismatch_returnsOne(self, writeCsv, tmp_path):
        first = writeCsv('a.csv', 'a,b\n1,2')
        second = writeCsv('b.csv', 'a,b,c\n1,2,3')

        assert script.main([first, second, '-r', '1', '--storage-dir', str(tmp_path / 's')]) == 1

    def test_main_fieldAndPlot_savesPng(self, driveLog, tmp_path):
        """
        Given: A drive log
        When: run with --field, --plot and the example overlay
        Then: A PNG chart is written
        """
        plot = tmp_path / 'chart.png'

        code = script.main([driveLog, '-r', '1', '-f', 'Speed (OBD)(km/h)', '-p', str(plot),
                            '--overlay', 'example', '--storage-dir', str(tmp_path / 's')])

        assert code == 0
        assert plot.read_bytes()[:4] == b'\x89PNG'

    def test_main_fieldByIndex_isResolved(self, driveLog, tmp_path, capsys):
        code = script.main([driveLog, '-r', '1', '-f', '1', '--storage-dir', str(tmp_path / 's')])

        assert code == 0
        assert 'Speed (OBD)(km/h): 4 points' in capsys.readouterr().out

    def test_main_nonNumericField_returnsOne(self, driveLog, tmp_path):
        assert script.main([driveLog, '-r', '1', '-f', 'GPS Time', '--storage-dir', str(tmp_path / 's')]) == 1

    def test_main_saveThenClearCache(self, driveLog, tmp_path):
        storageDir = str(tmp_path / 's')

        assert script.main([driveLog, '-r', '1', '--save-cache', '--storage-dir', storageDir]) == 0
        assert LocalStorage(storageDir).get_item(CACHE_KEY) is not None

        assert script.main(['--clear-cache', '--storage-dir', storageDir]) == 0
        assert LocalStorage(storageDir).get_item(CACHE_KEY) is None

    def test_main_cachedOverlayWithoutCache_warns(self, driveLog, tmp_path, capsys):
        code = script.main([driveLog, '-r', '1', '-f', '1', '--overlay', 'cached',
                            '--storage-dir', str(tmp_path / 's')])

        out = capsys.readouterr().out
        assert code == 0
        assert 'Nothing cached yet' in out
        assert "No cached column to compare with 'Speed (OBD)(km/h)'" in out

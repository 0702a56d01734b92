"""
Pytest configuration and shared fixtures.

Fixtures defined here are available to all test files automatically.

Usage:
    def test_something(writeCsv, memoryStore):
        path = writeCsv('log.csv', 'a,b\\n1,2')
"""

from pathlib import Path
from typing import Callable, List

import pytest

from obd_sampler.controller.pipeline_controller import PipelineController
from obd_sampler.data_processing.models import RawFile
from obd_sampler.infrastructure.local_storage import MemoryStorage
from obd_sampler.settings import PipelineConfig


# ================================================================================
# File Fixtures
# ================================================================================

@pytest.fixture
def writeCsv(tmp_path: Path) -> Callable[[str, str], str]:
    """
    Provide a factory writing a CSV file into a temporary folder.

    Returns:
        Function (fileName, content) -> absolute path
    """
    def _write(fileName: str, content: str) -> str:
        path = tmp_path / fileName
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8', newline='')
        return str(path)

    return _write


@pytest.fixture
def twoFileSet() -> List[RawFile]:
    """
    Provide two in-memory files sharing the header 'a,b'.

    Returns:
        [F0 with rows 1,2 and 3,4; F1 with row 5,6]
    """
    return [
        RawFile.from_text('first.csv', 'a,b\n1,2\n3,4'),
        RawFile.from_text('second.csv', 'a,b\n5,6'),
    ]


# ================================================================================
# Storage and Controller Fixtures
# ================================================================================

@pytest.fixture
def memoryStore() -> MemoryStorage:
    """Provide an in-process key/value store."""
    return MemoryStorage()


@pytest.fixture
def sampleConfig(tmp_path: Path) -> PipelineConfig:
    """
    Provide a configuration with stride 1 and a temporary storage folder.
    """
    return PipelineConfig(sample_rate=1, storage_dir=str(tmp_path / 'storage'))


@pytest.fixture
def controller(sampleConfig: PipelineConfig, memoryStore: MemoryStorage) -> PipelineController:
    """Provide a controller backed by the in-process store."""
    return PipelineController(sampleConfig, store=memoryStore)

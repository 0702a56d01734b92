"""
Configuration for the OBD2 data sampler.
Module constants are the defaults used by the GUI variables and CLI options.
"""
import os
from dataclasses import dataclass, field

ONE_MEGABYTE = 1000000  # Bytes

DEFAULT_SAMPLE_RATE = 60
MAX_FILE_SIZE_BYTES = ONE_MEGABYTE * 10
CSV_MIME_TYPE = "text/csv"
DEFAULT_ENCODING = "utf-8"

FIELD_DELIMITER = ","
LINE_SEPARATOR = "\n"

GRAPH_WIDTH = 800
GRAPH_HEIGHT = 400

DOWNLOAD_FILE_NAME = "sampled-data.csv"

CACHE_KEY = "cachedColumns"
STORAGE_FILE_NAME = "local_storage.json"
STORAGE_DIR_ENV = "OBD_SAMPLER_HOME"


def default_storage_dir() -> str:
    """Storage folder: $OBD_SAMPLER_HOME or ~/.obd_sampler"""
    return os.environ.get(STORAGE_DIR_ENV) or os.path.join(os.path.expanduser("~"), ".obd_sampler")


@dataclass
class PipelineConfig:
    """Settings shared by the controller, the GUI and the CLI."""
    sample_rate: int = DEFAULT_SAMPLE_RATE
    max_file_size_bytes: int = MAX_FILE_SIZE_BYTES
    graph_width: int = GRAPH_WIDTH
    graph_height: int = GRAPH_HEIGHT
    encoding: str = DEFAULT_ENCODING
    storage_dir: str = field(default_factory=default_storage_dir)

from enum import Enum
from typing import List, Optional

from obd_sampler.data_processing.comparison_overlay import OverlaySource
from obd_sampler.data_processing.consolidator import Consolidator
from obd_sampler.data_processing.models import ColumnModel, ColumnSet, ConsolidatedDataset, ParsedTable, RawFile, SampledDataset
from obd_sampler.data_processing.reader import SequentialReader
from obd_sampler.settings import DEFAULT_SAMPLE_RATE


class PipelineStage(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    READING = "reading"
    CONSOLIDATING = "consolidating"
    SAMPLING = "sampling"
    PARSING = "parsing"
    COMPUTING_STATS = "computing_stats"
    READY = "ready"
    FAILED = "failed"


class SamplerSession:
    """
    Holds the application state/data model of one user session.
    Decoupled from Controller logic and View.
    reset() drops the current generation but keeps the user's settings.
    """
    def __init__(self, sample_rate: int = DEFAULT_SAMPLE_RATE):
        # Settings, kept across uploads
        self.sample_rate: int = sample_rate
        self.overlay_source: OverlaySource = OverlaySource.EXAMPLE
        self.overlay_enabled: bool = False
        self.reset()

    def reset(self) -> None:
        self.stage: PipelineStage = PipelineStage.IDLE
        self.files: List[RawFile] = []
        self.reader: Optional[SequentialReader] = None
        self.consolidator: Optional[Consolidator] = None
        self.consolidated: Optional[ConsolidatedDataset] = None
        self.sampled: Optional[SampledDataset] = None
        self.download_text: Optional[str] = None
        self.table: Optional[ParsedTable] = None
        self.columns: Optional[ColumnSet] = None
        self.selected_field: Optional[int] = None
        self.error: Optional[str] = None
        self.error_kind: Optional[str] = None

    @property
    def number_of_files(self) -> int:
        return len(self.files)

    @property
    def current_file_index(self) -> int:
        return self.reader.current_index if self.reader else 0

    @property
    def selected_column(self) -> Optional[ColumnModel]:
        if self.columns is None or self.selected_field is None:
            return None
        return self.columns.get(self.selected_field)

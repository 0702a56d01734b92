from typing import List, Sequence, Tuple

from obd_sampler.data_processing.chart_projector import project_column
from obd_sampler.data_processing.consolidator import Consolidator
from obd_sampler.data_processing.models import (
    ChartSeries,
    ColumnModel,
    ColumnSet,
    ConsolidatedDataset,
    ParsedTable,
    RawFile,
    SampledDataset,
)
from obd_sampler.data_processing.reader import SequentialReader
from obd_sampler.data_processing.sampler import Sampler
from obd_sampler.data_processing.table_parser import parse_table
from obd_sampler.data_processing.validator import FileValidator
from obd_sampler.settings import DEFAULT_ENCODING, GRAPH_HEIGHT, GRAPH_WIDTH, MAX_FILE_SIZE_BYTES
from obd_sampler.utils.column_stats import ColumnStatsFactory, eligible_fields


class PipelineService:
    """
    Core service layer for the sampling pipeline.
    Stateless: every method takes its input and returns a new object.
    Separates the stage logic from the controller and the GUI.
    """

    def validate_files(self, files: Sequence[RawFile], max_size_bytes: int = MAX_FILE_SIZE_BYTES) -> None:
        FileValidator(max_size_bytes).validate(files)

    def create_reader(self, files: Sequence[RawFile], encoding: str = DEFAULT_ENCODING) -> SequentialReader:
        return SequentialReader(files, encoding)

    def consolidate_all(self, files: Sequence[RawFile], encoding: str = DEFAULT_ENCODING) -> ConsolidatedDataset:
        """
        Read and consolidate files in order, stopping at the first schema mismatch.
        Used where no intermediate state needs to be observed.
        """
        reader = self.create_reader(files, encoding)
        consolidator = Consolidator()
        while not reader.done:
            content = reader.read_current()
            consolidator.consolidate(content, reader.current_file.name)
            reader.advance()
        return consolidator.dataset()

    def sample(self, dataset: ConsolidatedDataset, stride: int) -> SampledDataset:
        return Sampler(stride).sample(dataset)

    def parse(self, sampled: SampledDataset) -> ParsedTable:
        return parse_table(sampled)

    def compute_columns(self, table: ParsedTable) -> ColumnSet:
        return ColumnStatsFactory.from_table(table)

    def eligible_fields(self, columns: ColumnSet) -> List[Tuple[int, str]]:
        return eligible_fields(columns)

    def project(self, column: ColumnModel, width: int = GRAPH_WIDTH, height: int = GRAPH_HEIGHT) -> ChartSeries:
        return project_column(column, width, height)

    def process(self, files: Sequence[RawFile], stride: int,
                encoding: str = DEFAULT_ENCODING) -> Tuple[SampledDataset, ParsedTable, ColumnSet]:
        """
        Run every stage on a file set.

        Args:
            files: accepted or candidate CSV files, in order
            stride: keep 1 out of every `stride` rows
            encoding: text encoding of the files

        Returns:
            (sampled dataset, parsed table, column set)
        """
        self.validate_files(files)
        dataset = self.consolidate_all(files, encoding)
        sampled = self.sample(dataset, stride)
        table = self.parse(sampled)
        return sampled, table, self.compute_columns(table)

import threading
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from obd_sampler.controller.context import PipelineStage, SamplerSession
from obd_sampler.data_processing.comparison_overlay import ComparisonOverlay, OverlaySource
from obd_sampler.data_processing.consolidator import Consolidator
from obd_sampler.data_processing.exceptions import SamplerError
from obd_sampler.data_processing.models import ChartSeries, RawFile
from obd_sampler.data_processing.pipeline_service import PipelineService
from obd_sampler.data_processing.sampler import validate_sample_rate
from obd_sampler.infrastructure.interfaces import IKeyValueStore
from obd_sampler.infrastructure.local_storage import LocalStorage
from obd_sampler.settings import PipelineConfig
from obd_sampler.utils.io import write_sampled_file


class PipelineController:
    """
    Drives the pipeline through its stages for one session.
    Delegates stage logic to PipelineService.
    Responsible for threading and for reporting state changes to the view.
    Owns the application state (SamplerSession).
    """

    def __init__(self,
                 config: Optional[PipelineConfig] = None,
                 store: Optional[IKeyValueStore] = None,
                 service: Optional[PipelineService] = None,
                 on_change: Optional[Callable[[SamplerSession], None]] = None):
        self.config = config or PipelineConfig()
        self.service = service or PipelineService()
        self.context = SamplerSession(validate_sample_rate(self.config.sample_rate))
        self.overlay = ComparisonOverlay(store or LocalStorage(self.config.storage_dir))
        self.on_change = on_change
        self._run_lock = threading.Lock()
        self._running = False

    # ------------------------------------------------------------------
    # State handling
    # ------------------------------------------------------------------
    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self.context)

    def _transition(self, expected: Iterable[PipelineStage], new_stage: PipelineStage) -> None:
        """Move to new_stage, checking that the current stage allows it."""
        current = self.context.stage
        if current not in expected:
            raise RuntimeError(f"Cannot move from {current.value} to {new_stage.value}")
        self.context.stage = new_stage
        print(f"[PIPELINE] {current.value} -> {new_stage.value}")
        self._notify()

    def _report_error(self, error: SamplerError) -> None:
        """Latest error replaces any previous one"""
        self.context.error = error.message
        self.context.error_kind = error.kind
        print(f"[ERROR] {error.kind}: {error.message}")

    def _fail(self, error: SamplerError) -> None:
        """Abort the current upload: clear the accepted files and consolidated rows."""
        self._report_error(error)
        ctx = self.context
        ctx.files = []
        ctx.reader = None
        ctx.consolidator = None
        ctx.consolidated = None
        ctx.stage = PipelineStage.FAILED
        self._notify()

    @property
    def is_running(self) -> bool:
        return self._running

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def set_sample_rate(self, value: Any) -> int:
        """Set the stride used by the next sampling run. Raises InvalidSampleRateError."""
        rate = validate_sample_rate(value)
        self.context.sample_rate = rate
        return rate

    def set_overlay_source(self, source: OverlaySource) -> None:
        self.context.overlay_source = OverlaySource(source)
        self._notify()

    def set_overlay_enabled(self, enabled: bool) -> None:
        self.context.overlay_enabled = bool(enabled)
        self._notify()

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------
    def select_files(self, files: Sequence[RawFile]) -> bool:
        """
        Start a new generation with a candidate file set.
        All downstream state of the previous upload is dropped first.

        Returns:
            True if the set was accepted
        """
        if self._running:
            raise RuntimeError("Pipeline is already running")

        self.context.reset()
        self.context.stage = PipelineStage.VALIDATING
        try:
            self.service.validate_files(files, self.config.max_file_size_bytes)
        except SamplerError as e:
            self._fail(e)
            return False

        self.context.files = list(files)
        if not files:
            self.context.stage = PipelineStage.IDLE
            self._notify()
            return True

        print(f"[PIPELINE] Accepted {len(files)} file(s)")
        self.context.reader = self.service.create_reader(self.context.files, self.config.encoding)
        self.context.consolidator = Consolidator()
        self._transition({PipelineStage.VALIDATING}, PipelineStage.READING)
        return True

    def load_paths(self, paths: Sequence[str]) -> bool:
        """select_files() for files on disk"""
        return self.select_files([RawFile.from_path(p) for p in paths])

    def run(self) -> SamplerSession:
        """
        Run every remaining stage of the accepted file set, in order:
        read and consolidate each file, then sample, parse and compute statistics.
        Errors are recorded in the session and end the run in FAILED.
        """
        with self._run_lock:
            if self._running:
                raise RuntimeError("Pipeline is already running")
            self._running = True
        try:
            if self.context.stage == PipelineStage.READING:
                self._run_stages()
        finally:
            self._running = False
        return self.context

    def _run_stages(self) -> None:
        ctx = self.context
        try:
            while not ctx.reader.done:
                content = ctx.reader.read_current()
                self._transition({PipelineStage.READING}, PipelineStage.CONSOLIDATING)
                ctx.consolidator.consolidate(content, ctx.reader.current_file.name)
                ctx.reader.advance()
                ctx.error = None
                ctx.error_kind = None
                if not ctx.reader.done:
                    self._transition({PipelineStage.CONSOLIDATING}, PipelineStage.READING)

            ctx.consolidated = ctx.consolidator.dataset()
            self._transition({PipelineStage.CONSOLIDATING}, PipelineStage.SAMPLING)
            ctx.sampled = self.service.sample(ctx.consolidated, ctx.sample_rate)
            ctx.download_text = ctx.sampled.to_text()

            self._transition({PipelineStage.SAMPLING}, PipelineStage.PARSING)
            ctx.table = self.service.parse(ctx.sampled)

            self._transition({PipelineStage.PARSING}, PipelineStage.COMPUTING_STATS)
            ctx.columns = self.service.compute_columns(ctx.table)

            self._transition({PipelineStage.COMPUTING_STATS}, PipelineStage.READY)
        except SamplerError as e:
            self._fail(e)

    def run_async(self, on_done: Optional[Callable[[SamplerSession], None]] = None) -> threading.Thread:
        """Run the pipeline in a worker thread so the UI stays responsive."""
        def worker():
            try:
                self.run()
            except Exception as e:
                print(f"[ERROR] Pipeline failed: {e}")
                raise
            finally:
                if on_done is not None:
                    on_done(self.context)

        thread = threading.Thread(target=worker, daemon=True)
        thread.start()
        return thread

    def reset(self) -> None:
        self.context.reset()
        self._notify()

    # ------------------------------------------------------------------
    # Fields and charts
    # ------------------------------------------------------------------
    def eligible_fields(self) -> List[Tuple[int, str]]:
        if self.context.columns is None:
            return []
        return self.service.eligible_fields(self.context.columns)

    def select_field(self, index: Optional[int]) -> None:
        """Select the column to chart; None clears the selection."""
        if index is None:
            self.context.selected_field = None
            self._notify()
            return
        columns = self.context.columns
        if columns is None or index not in columns:
            raise ValueError(f"Unknown field: {index}")
        if not columns[index].eligible:
            raise ValueError(f"Field '{columns[index].name}' has no integer values to chart")
        self.context.selected_field = index
        self._notify()

    def primary_series(self) -> Optional[ChartSeries]:
        column = self.context.selected_column
        if column is None:
            return None
        return self.service.project(column, self.config.graph_width, self.config.graph_height)

    def overlay_series(self) -> Optional[ChartSeries]:
        ctx = self.context
        if not ctx.overlay_enabled or ctx.selected_column is None:
            return None
        try:
            return self.overlay.project(ctx.overlay_source, ctx.selected_field, ctx.selected_column,
                                        self.config.graph_width, self.config.graph_height)
        except SamplerError as e:
            self._report_error(e)
            return None

    def export_chart(self, path: str) -> str:
        """Render the selected field (and overlay) to a PNG file."""
        from obd_sampler.utils.chart_export import save_chart_png

        primary = self.primary_series()
        if primary is None:
            raise RuntimeError("No field selected")
        return save_chart_png(primary, self.overlay_series(), path,
                              self.config.graph_width, self.config.graph_height)

    # ------------------------------------------------------------------
    # Cache and download
    # ------------------------------------------------------------------
    def save_cache(self) -> None:
        if not self.context.columns:
            raise RuntimeError("No columns to cache")
        self.overlay.save(self.context.columns)

    def clear_cache(self) -> None:
        self.overlay.clear()

    def download_text(self) -> Optional[str]:
        return self.context.download_text

    def save_download(self, output_dir: str) -> str:
        if self.context.download_text is None:
            raise RuntimeError("Files have not been sampled yet")
        return write_sampled_file(self.context.download_text, output_dir, encoding=self.config.encoding)

from tkinter import filedialog, messagebox
from typing import TYPE_CHECKING, Dict, List

from obd_sampler.controller.context import PipelineStage, SamplerSession
from obd_sampler.data_processing.comparison_overlay import OverlaySource
from obd_sampler.data_processing.exceptions import SamplerError
from obd_sampler.settings import DOWNLOAD_FILE_NAME
from obd_sampler.utils.column_stats import format_number

if TYPE_CHECKING:
    from obd_sampler.gui.main_window import SamplerGUI


class PipelineActions:
    """Handles all pipeline actions (upload, field selection, overlay, cache, download)"""

    def __init__(self, gui: "SamplerGUI"):
        self.gui = gui
        self.controller = gui.controller
        self._field_index_by_label: Dict[str, int] = {}

        # Connect button commands
        self.gui.btn_download.config(command=self.action_download)
        self.gui.btn_save_cache.config(command=self.action_save_cache)
        self.gui.btn_clear_cache.config(command=self.action_clear_cache)
        self.gui.btn_export_chart.config(command=self.action_export_chart)
        self.gui.chk_overlay.config(command=self.action_toggle_overlay)
        self.gui.radio_example.config(command=self.action_overlay_source)
        self.gui.radio_cached.config(command=self.action_overlay_source)
        self.gui.combo_field.bind("<<ComboboxSelected>>", self.on_field_selected)

    # ------------------------------------------------------------------
    # Upload
    # ------------------------------------------------------------------
    def start_upload(self, paths: List[str]) -> None:
        """Validate the selected files and run the pipeline in a worker thread."""
        if self.controller.is_running:
            messagebox.showwarning("Busy", "Files are still being processed.")
            return

        try:
            self.controller.set_sample_rate(self.gui.sample_rate_var.get())
        except SamplerError as e:
            self._show_error(e.message)
            print(f"[ERROR] {e.message}")
            return

        self._reset_field_widgets()
        try:
            accepted = self.controller.load_paths(paths)
        except OSError as e:
            self._show_error(f"Could not open file: {e}")
            print(f"[ERROR] Could not open file: {e}")
            return
        if not accepted:
            self.refresh()
            return

        self.gui.status_var.set(f"Processing {len(paths)} file(s)...")
        self.controller.run_async(on_done=lambda _ctx: self.gui.root.after(0, self.refresh))

    # ------------------------------------------------------------------
    # View refresh (main thread only)
    # ------------------------------------------------------------------
    def refresh(self) -> None:
        ctx: SamplerSession = self.controller.context
        self._show_error(ctx.error or "")

        sampled = ctx.sampled is not None
        self.gui.btn_download.config(state="normal" if sampled else "disabled")
        self.gui.btn_save_cache.config(state="normal" if ctx.columns else "disabled")

        if ctx.stage == PipelineStage.READY:
            self.gui.status_var.set(
                f"{len(ctx.consolidated.rows)} rows from {ctx.number_of_files} file(s), "
                f"{len(ctx.sampled.rows)} after sampling"
            )
            self._populate_fields()
        elif ctx.stage == PipelineStage.FAILED:
            self.gui.status_var.set("Select one or more .csv files")

        self._refresh_selection()

    def _populate_fields(self) -> None:
        fields = self.controller.eligible_fields()
        self._field_index_by_label = {f"{index}: {name}": index for index, name in fields}
        self.gui.combo_field.config(values=list(self._field_index_by_label), state="readonly" if fields else "disabled")

    def _reset_field_widgets(self) -> None:
        self._field_index_by_label = {}
        self.gui.field_var.set("")
        self.gui.combo_field.config(values=[], state="disabled")
        self.gui.chart_view.clear()

    def _refresh_selection(self) -> None:
        column = self.controller.context.selected_column
        if column is None:
            for var in (self.gui.max_var, self.gui.avg_var, self.gui.min_var):
                var.set("")
            self.gui.btn_export_chart.config(state="disabled")
            self.gui.chart_view.clear()
            return

        self.gui.max_var.set(format_number(column.max))
        self.gui.avg_var.set(format_number(column.avg))
        self.gui.min_var.set(format_number(column.min))
        self.gui.btn_export_chart.config(state="normal")
        self.gui.chart_view.draw(self.controller.primary_series(), self.controller.overlay_series())
        self._show_error(self.controller.context.error or "")

    def _show_error(self, message: str) -> None:
        self.gui.error_var.set(message)

    # ------------------------------------------------------------------
    # Field and overlay
    # ------------------------------------------------------------------
    def on_field_selected(self, event=None) -> None:
        index = self._field_index_by_label.get(self.gui.field_var.get())
        try:
            self.controller.select_field(index)
        except ValueError as e:
            print(f"[ERROR] {e}")
            return
        self._refresh_selection()

    def action_toggle_overlay(self) -> None:
        self.controller.set_overlay_enabled(self.gui.overlay_enabled_var.get())
        self._refresh_selection()

    def action_overlay_source(self) -> None:
        self.controller.set_overlay_source(OverlaySource(self.gui.overlay_source_var.get()))
        self._refresh_selection()

    # ------------------------------------------------------------------
    # Cache, download and export
    # ------------------------------------------------------------------
    def action_save_cache(self) -> None:
        try:
            self.controller.save_cache()
        except RuntimeError as e:
            messagebox.showwarning("Nothing to cache", str(e))
            return
        messagebox.showinfo("Cached", "Column data saved for later comparison.")
        self._refresh_selection()

    def action_clear_cache(self) -> None:
        self.controller.clear_cache()
        self._refresh_selection()

    def action_download(self) -> None:
        folder = filedialog.askdirectory(title=f"Folder for {DOWNLOAD_FILE_NAME}")
        if not folder:
            return
        try:
            path = self.controller.save_download(folder)
        except (RuntimeError, OSError) as e:
            messagebox.showerror("Error", f"Failed to save sampled data: {e}")
            return
        messagebox.showinfo("Success", f"Sampled data saved to {path}")

    def action_export_chart(self) -> None:
        path = filedialog.asksaveasfilename(defaultextension=".png", filetypes=[("PNG image", "*.png")])
        if not path:
            return
        try:
            self.controller.export_chart(path)
        except (RuntimeError, OSError) as e:
            messagebox.showerror("Error", f"Failed to save chart: {e}")

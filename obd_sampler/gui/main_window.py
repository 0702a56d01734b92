#!/usr/bin/env python3
"""Main GUI window for the OBD2 data sampler"""
import tkinter as tk
from tkinter import ttk
from typing import Optional

from obd_sampler.controller.pipeline_controller import PipelineController
from obd_sampler.data_processing.comparison_overlay import OverlaySource
from obd_sampler.settings import PipelineConfig

# Global UI constants
MAIN_WINDOW_TITLE = "OBD2 data sampler"
MAIN_WINDOW_GEOMETRY = "900x860"
LOG_FRAME_HEIGHT = 8


class SamplerGUI:
    """Main GUI application for the OBD2 data sampler"""

    def __init__(self, root: tk.Tk, config: Optional[PipelineConfig] = None):
        self.root = root
        self.root.title(MAIN_WINDOW_TITLE)
        self.root.geometry(MAIN_WINDOW_GEOMETRY)

        self.controller = PipelineController(config)
        self.config = self.controller.config

        # UI variables
        self.sample_rate_var = tk.StringVar(value=str(self.config.sample_rate))
        self.error_var = tk.StringVar(value="")
        self.status_var = tk.StringVar(value="Select one or more .csv files")
        self.field_var = tk.StringVar(value="")
        self.max_var = tk.StringVar(value="")
        self.avg_var = tk.StringVar(value="")
        self.min_var = tk.StringVar(value="")
        self.overlay_enabled_var = tk.BooleanVar(value=False)
        self.overlay_source_var = tk.StringVar(value=OverlaySource.EXAMPLE.value)

        # UI style
        self._setup_styles()

        # Layout
        self._setup_header_frame(self.root)
        self._setup_field_frame(self.root)
        self._setup_chart_frame(self.root)
        self._setup_log_frame(self.root)

        # Import sub-components AFTER all widgets are created
        from obd_sampler.gui.file_manager import FileManager
        from obd_sampler.gui.chart_view import ChartView
        from obd_sampler.gui.pipeline_actions import PipelineActions

        self.chart_view = ChartView(self.chart_canvas)
        self.pipeline_actions = PipelineActions(self)
        self.file_manager = FileManager(self)

    def _setup_styles(self) -> None:
        """Configure UI styles"""
        style = ttk.Style()
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass
        style.configure("Accent.TButton", foreground="white", background="#007acc")
        style.map("Accent.TButton", background=[("active", "#2b88d8")])
        style.configure("Error.TLabel", foreground="red")

    def _setup_header_frame(self, parent) -> None:
        """Create the top bar: sample rate, file selection and download"""
        header_frame = ttk.Frame(parent)
        header_frame.pack(fill="x", padx=10, pady=8)

        ttk.Label(header_frame, text="Sample rate: 1 out of every").pack(side="left")
        self.entry_sample_rate = ttk.Entry(header_frame, textvariable=self.sample_rate_var, width=8)
        self.entry_sample_rate.pack(side="left", padx=(4, 12))

        self.btn_select_files = ttk.Button(header_frame, text="Select Files", style="Accent.TButton")
        self.btn_select_files.pack(side="left", padx=6)

        self.btn_download = ttk.Button(header_frame, text="Download sampled data", state="disabled")
        self.btn_download.pack(side="left", padx=6)

        ttk.Label(header_frame, textvariable=self.status_var).pack(side="left", padx=10)

        ttk.Label(parent, textvariable=self.error_var, style="Error.TLabel").pack(anchor="w", padx=10)

    def _setup_field_frame(self, parent) -> None:
        """Create field selector, statistics read-out and overlay controls"""
        field_frame = ttk.Frame(parent)
        field_frame.pack(fill="x", padx=10, pady=6)

        ttk.Label(field_frame, text="Field:").grid(row=0, column=0, sticky="e", padx=4, pady=4)
        self.combo_field = ttk.Combobox(field_frame, textvariable=self.field_var, state="disabled", width=40)
        self.combo_field.grid(row=0, column=1, sticky="w", padx=4, pady=4)

        stats_frame = ttk.Frame(field_frame)
        stats_frame.grid(row=1, column=0, columnspan=2, sticky="w", padx=4)
        for column, (label, var) in enumerate((("max:", self.max_var), ("avg:", self.avg_var), ("min:", self.min_var))):
            ttk.Label(stats_frame, text=label).grid(row=0, column=column * 2, sticky="e", padx=(0, 2))
            ttk.Label(stats_frame, textvariable=var, width=18).grid(row=0, column=column * 2 + 1, sticky="w")

        overlay_frame = ttk.LabelFrame(field_frame, text="Comparison")
        overlay_frame.grid(row=0, column=2, rowspan=2, sticky="ne", padx=(24, 0))

        self.chk_overlay = ttk.Checkbutton(overlay_frame, text="Show overlay", variable=self.overlay_enabled_var)
        self.chk_overlay.grid(row=0, column=0, columnspan=2, sticky="w", padx=4, pady=2)

        self.radio_example = ttk.Radiobutton(overlay_frame, text="Example", value=OverlaySource.EXAMPLE.value,
                                             variable=self.overlay_source_var)
        self.radio_example.grid(row=1, column=0, sticky="w", padx=4)
        self.radio_cached = ttk.Radiobutton(overlay_frame, text="Cached", value=OverlaySource.CACHED.value,
                                            variable=self.overlay_source_var)
        self.radio_cached.grid(row=1, column=1, sticky="w", padx=4)

        self.btn_save_cache = ttk.Button(overlay_frame, text="Save to cache", state="disabled")
        self.btn_save_cache.grid(row=2, column=0, sticky="we", padx=4, pady=4)
        self.btn_clear_cache = ttk.Button(overlay_frame, text="Clear cache")
        self.btn_clear_cache.grid(row=2, column=1, sticky="we", padx=4, pady=4)

        self.btn_export_chart = ttk.Button(overlay_frame, text="Save chart image", state="disabled")
        self.btn_export_chart.grid(row=3, column=0, columnspan=2, sticky="we", padx=4, pady=(0, 4))

    def _setup_chart_frame(self, parent) -> None:
        """Create the fixed-size chart canvas"""
        chart_frame = ttk.Frame(parent)
        chart_frame.pack(padx=10, pady=(16, 16))

        self.chart_canvas = tk.Canvas(
            chart_frame,
            width=self.config.graph_width,
            height=self.config.graph_height,
            background="white",
            highlightthickness=1,
            highlightbackground="gray"
        )
        self.chart_canvas.pack()

    def _setup_log_frame(self, parent) -> None:
        """Create compact log panel at the bottom"""
        log_frame = ttk.LabelFrame(parent, text="Log")
        log_frame.pack(fill="both", expand=True, padx=10, pady=(0, 8))

        self.text_log = tk.Text(log_frame, height=LOG_FRAME_HEIGHT, state="disabled", wrap="word")
        self.text_log.tag_config("error", foreground="red")
        self.text_log.tag_config("pipeline", foreground="#007acc")
        self.text_log.tag_config("info", foreground="gray20")

        log_scroll = ttk.Scrollbar(log_frame, orient="vertical", command=self.text_log.yview)
        self.text_log.config(yscrollcommand=log_scroll.set)

        self.text_log.pack(side="left", fill="both", expand=True, padx=2, pady=2)
        log_scroll.pack(side="right", fill="y")

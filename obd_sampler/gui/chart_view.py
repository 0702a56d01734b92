"""
Chart drawing on a Tkinter canvas.
Displays the projected series of the selected field and the overlay series.
"""
import tkinter as tk
from typing import Optional

from obd_sampler.data_processing.models import ChartSeries
from obd_sampler.utils.chart_export import AVERAGE_COLOR, OVERLAY_AVERAGE_COLOR, OVERLAY_COLOR, PRIMARY_COLOR

SERIES_TAG = "series"


class ChartView:
    """Draws chart series as polylines on a fixed-size canvas"""

    def __init__(self, canvas: tk.Canvas):
        self.canvas = canvas

    def clear(self) -> None:
        self.canvas.delete(SERIES_TAG)

    def draw(self, primary: Optional[ChartSeries], overlay: Optional[ChartSeries] = None) -> None:
        """Redraw the canvas; the overlay is drawn first so the primary stays on top"""
        self.clear()
        if overlay is not None:
            self._draw_series(overlay, OVERLAY_COLOR, OVERLAY_AVERAGE_COLOR, dash=(4, 2))
        if primary is not None:
            self._draw_series(primary, PRIMARY_COLOR, AVERAGE_COLOR)

    def _draw_series(self, series: ChartSeries, color: str, average_color: str, dash=None) -> None:
        coords = series.flat_coords()
        if len(coords) >= 4:
            self.canvas.create_line(*coords, fill=color, width=1, dash=dash, tags=SERIES_TAG)
        elif len(coords) == 2:
            # a single value has no segment to draw
            x, y = coords
            self.canvas.create_oval(x - 1, y - 1, x + 1, y + 1, outline=color, tags=SERIES_TAG)

        if series.average_line is not None:
            start, end = series.average_line
            self.canvas.create_line(start.x, start.y, end.x, end.y, fill=average_color, width=1,
                                    dash=dash, tags=SERIES_TAG)

"""
Render projected chart series to an image with matplotlib.
Coordinates are already in pixels, so the axes span the canvas exactly and
the y axis is inverted to keep the canvas orientation (y grows downward).
"""
import os
from typing import Optional

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from obd_sampler.data_processing.models import ChartSeries
from obd_sampler.settings import GRAPH_HEIGHT, GRAPH_WIDTH
from obd_sampler.utils.io import ensure_folder

PRIMARY_COLOR = "#0074d9"
AVERAGE_COLOR = "blue"
OVERLAY_COLOR = "#ff851b"
OVERLAY_AVERAGE_COLOR = "#ff4136"
DPI = 100


def _draw_series(ax, series: ChartSeries, color: str, average_color: str, linestyle: str = "-") -> None:
    if series.points:
        ax.plot([p.x for p in series.points], [p.y for p in series.points],
                color=color, linewidth=1, linestyle=linestyle, label=series.name)
    if series.average_line is not None:
        start, end = series.average_line
        ax.plot([start.x, end.x], [start.y, end.y], color=average_color, linewidth=1,
                linestyle=linestyle, label=f"{series.name} avg")


def build_chart_figure(primary: ChartSeries, overlay: Optional[ChartSeries] = None,
                       width: int = GRAPH_WIDTH, height: int = GRAPH_HEIGHT) -> Figure:
    """Figure of width x height pixels with the primary series and optional overlay"""
    fig = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_edgecolor("gray")

    _draw_series(ax, primary, PRIMARY_COLOR, AVERAGE_COLOR)
    if overlay is not None:
        _draw_series(ax, overlay, OVERLAY_COLOR, OVERLAY_AVERAGE_COLOR, linestyle="--")
    if primary.points or (overlay is not None and overlay.points):
        ax.legend(loc="upper right", fontsize="small")
    return fig


def save_chart_png(primary: ChartSeries, overlay: Optional[ChartSeries], output_path: str,
                   width: int = GRAPH_WIDTH, height: int = GRAPH_HEIGHT) -> str:
    """
    Save the chart as a PNG image.

    Args:
        primary: series of the selected field
        overlay: example/cached series drawn dashed, or None
        output_path: target .png path
        width: canvas width in pixels
        height: canvas height in pixels

    Returns:
        output_path
    """
    ensure_folder(os.path.dirname(output_path))
    fig = build_chart_figure(primary, overlay, width, height)
    FigureCanvasAgg(fig).print_png(output_path)
    print(f"[INFO] Saved chart → {output_path}")
    return output_path

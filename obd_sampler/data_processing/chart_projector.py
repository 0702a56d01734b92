"""
Projection of a column onto a fixed-size plotting surface.

x is spread over the integer subset (position within that subsequence, not the
original row index), y is the value scaled against the column's own max and
inverted so that larger values sit higher on a y-down canvas.
"""
import math
from typing import Optional, Tuple

import numpy as np

from obd_sampler.data_processing.models import ChartPoint, ChartSeries, ColumnModel
from obd_sampler.settings import GRAPH_HEIGHT, GRAPH_WIDTH


def _scale_ratio(values: np.ndarray, maximum: float) -> np.ndarray:
    """value / max, with a zero or undefined max collapsed to 0"""
    if maximum is None or not math.isfinite(maximum) or maximum == 0:
        return np.zeros_like(values, dtype=float)
    return values / maximum


def project_y(values: np.ndarray, maximum: float, height: int = GRAPH_HEIGHT) -> np.ndarray:
    """y = height - floor(height / 100 * (value / max * 100))"""
    values = np.asarray(values, dtype=float)
    ratio = _scale_ratio(values, maximum)
    return height - np.floor((height / 100) * (ratio * 100))


def project_x(count: int, width: int = GRAPH_WIDTH) -> np.ndarray:
    """x = floor(width / count * index) for index in range(count)"""
    if count == 0:
        return np.array([], dtype=float)
    return np.floor((width / count) * np.arange(count))


def average_line(column: ColumnModel, width: int = GRAPH_WIDTH,
                 height: int = GRAPH_HEIGHT) -> Optional[Tuple[ChartPoint, ChartPoint]]:
    """Horizontal line at the projected average, None when avg is undefined"""
    if column.avg is None or not math.isfinite(column.avg):
        return None
    y = project_y(np.array([column.avg]), column.max, height)[0]
    if not math.isfinite(y):
        return None
    return ChartPoint(0, int(y)), ChartPoint(width, int(y))


def project_column(column: ColumnModel, width: int = GRAPH_WIDTH, height: int = GRAPH_HEIGHT) -> ChartSeries:
    """
    Map the integer values of a column onto pixel coordinates.

    Args:
        column: column model with numeric_values and max/avg
        width: canvas width in pixels
        height: canvas height in pixels

    Returns:
        ChartSeries with one point per integer value and the average line
    """
    values = np.asarray(column.numeric_values, dtype=float)
    if values.size == 0:
        return ChartSeries(name=column.name, points=[], average_line=None)

    xs = project_x(values.size, width)
    ys = project_y(values, column.max, height)
    points = [ChartPoint(int(x), int(y)) for x, y in zip(xs, ys)]
    return ChartSeries(name=column.name, points=points, average_line=average_line(column, width, height))


class ChartProjector:
    """Projects column models onto a canvas of fixed size"""

    def __init__(self, width: int = GRAPH_WIDTH, height: int = GRAPH_HEIGHT):
        self.width = width
        self.height = height

    def project(self, column: ColumnModel) -> ChartSeries:
        return project_column(column, self.width, self.height)

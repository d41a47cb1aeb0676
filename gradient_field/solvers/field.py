from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import math
import numpy as np
import pandas as pd
from ..config import AXIS_RANGE, GRID_SCALE, ARROW_LENGTH, MIN_ARROW_MAGNITUDE
from ..core.model import FieldFunction
from ..core.types import InvalidArgumentError, Point, Vector2

def to_canvas(value: float) -> float:
    return (value + AXIS_RANGE) * GRID_SCALE

def to_math(pixel: float) -> float:
    return pixel / GRID_SCALE - AXIS_RANGE

@dataclass(frozen=True)
class Probe:
    point: Point
    value: float
    gradient: Vector2
    magnitude: float

def probe(function: FieldFunction, point: Point, limit: float = AXIS_RANGE) -> Probe:
    """Height and gradient under the dragged point, clamped to the visible axes."""
    p = Point(float(point[0]), float(point[1])).clamp(limit)
    grad = function.gradient_at(p.x, p.y)
    return Probe(point=p, value=function.evaluate(p.x, p.y), gradient=grad, magnitude=grad.magnitude)

@dataclass(frozen=True)
class HeatmapGrid:
    xs: np.ndarray
    ys: np.ndarray
    values: np.ndarray

    @property
    def extent(self):
        return (float(self.xs[0]), float(self.xs[-1]), float(self.ys[0]), float(self.ys[-1]))

    def defined_fraction(self) -> float:
        return float(np.count_nonzero(~np.isnan(self.values))) / self.values.size

def sample_heatmap(function: FieldFunction, resolution: int = 150, limit: float = AXIS_RANGE) -> HeatmapGrid:
    """Evaluate ``function`` on a ``resolution x resolution`` grid.

    ``values[i, j]`` is ``f(xs[j], ys[i])``. Undefined points stay nan so the
    caller can render them as gaps.
    """
    if resolution < 2:
        raise InvalidArgumentError(f"resolution must be at least 2, got {resolution}")
    xs = np.linspace(-limit, limit, resolution)
    ys = np.linspace(-limit, limit, resolution)
    values = np.empty((resolution, resolution), dtype=float)
    for i, y in enumerate(ys):
        for j, x in enumerate(xs):
            values[i, j] = function.evaluate(float(x), float(y))
    return HeatmapGrid(xs=xs, ys=ys, values=values)

def arrow_centers(step: float = 1.0, limit: float = AXIS_RANGE) -> np.ndarray:
    if not step > 0:
        raise InvalidArgumentError(f"step must be strictly positive, got {step!r}")
    start = -math.floor(limit) + step / 2
    return np.arange(start, limit, step)

def sample_vectors(function: FieldFunction, step: float = 1.0, limit: float = AXIS_RANGE,
                   min_magnitude: Optional[float] = MIN_ARROW_MAGNITUDE) -> pd.DataFrame:
    """Gradient arrows at cell centers, one row per arrow.

    ``display_length`` squashes the magnitude into ``[0, ARROW_LENGTH)`` so
    steep regions do not produce huge arrows.
    """
    centers = arrow_centers(step, limit)
    rows = []
    for x in centers:
        for y in centers:
            g = function.gradient_at(float(x), float(y))
            m = g.magnitude
            if math.isnan(m):
                m = 0.0
            rows.append({"x": float(x), "y": float(y), "dx": g.dx, "dy": g.dy, "magnitude": m,
                         "display_length": ARROW_LENGTH * m / (m + 1)})
    df = pd.DataFrame(rows, columns=["x", "y", "dx", "dy", "magnitude", "display_length"])
    if min_magnitude is not None:
        df = df[df["magnitude"] > min_magnitude].reset_index(drop=True)
    return df

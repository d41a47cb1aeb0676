from __future__ import annotations
from typing import Optional
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from .config import AXIS_RANGE, ARROW_LENGTH, COLOR_DOMAIN, COLORMAP, GRID_SCALE, POINT_ARROW_SCALE
from .core.model import FieldFunction
from .core.types import Point
from .solvers.field import probe, sample_heatmap, sample_vectors

def plot_field(function: FieldFunction, point: Optional[Point] = None, ax: Optional[Axes] = None,
               resolution: int = 150, step: float = 1.0, show_heatmap: bool = True,
               show_vectors: bool = True) -> Axes:
    """Heatmap of ``function`` with its gradient field on top.

    Undefined samples are left transparent. When ``point`` is given the
    gradient there is drawn as a highlighted arrow.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 6))

    if show_heatmap:
        grid = sample_heatmap(function, resolution)
        cmap = plt.get_cmap(COLORMAP).copy()
        cmap.set_bad(alpha=0.0)
        image = ax.imshow(np.ma.masked_invalid(grid.values), origin="lower", extent=grid.extent,
                          cmap=cmap, vmin=COLOR_DOMAIN[0], vmax=COLOR_DOMAIN[1])
        ax.figure.colorbar(image, ax=ax, shrink=0.8, label="f(x, y)")
    else:
        ax.set_facecolor("#1e293b")

    if show_vectors:
        df = sample_vectors(function, step)
        if not df.empty:
            # unit direction scaled by the squashed length
            scale = df["display_length"] / df["magnitude"] / ARROW_LENGTH * step * 0.8
            ax.quiver(df["x"], df["y"], df["dx"] * scale, df["dy"] * scale,
                      color="white", alpha=0.5, angles="xy", scale_units="xy", scale=1)

    if point is not None:
        p = probe(function, point)
        ax.plot([p.point.x], [p.point.y], "o", color="white", markeredgecolor="black")
        if p.magnitude > 0.001:
            ax.quiver([p.point.x], [p.point.y], [p.gradient.dx], [p.gradient.dy],
                      color="#fbbf24", angles="xy", scale_units="xy", scale=GRID_SCALE / POINT_ARROW_SCALE, width=0.008)

    ax.set_xlim(-AXIS_RANGE, AXIS_RANGE)
    ax.set_ylim(-AXIS_RANGE, AXIS_RANGE)
    ax.set_aspect("equal")
    ax.set_xlabel("x"); ax.set_ylabel("y")
    ax.set_title(function.formula)
    return ax

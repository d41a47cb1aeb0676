"""
Configuration
=============
Global constants shared by the numerical core, the sampling helpers and the UI.

Exports:
    CANVAS_SIZE (int): Edge length of the square drawing area, in pixels.
    GRID_SCALE (int): Pixels per math unit.
    AXIS_RANGE (float): Both axes span [-AXIS_RANGE, AXIS_RANGE].
    DEFAULT_EPSILON (float): Step size of the finite-difference gradient.
"""
from typing import Tuple

CANVAS_SIZE: int = 600
GRID_SCALE: int = 40
AXIS_RANGE: float = 7.5

DEFAULT_EPSILON: float = 1e-4

# Heatmap values outside this window saturate the colormap
COLOR_DOMAIN: Tuple[float, float] = (-4.0, 4.0)
COLORMAP: str = "turbo"

# Vector field arrows, in pixels
ARROW_LENGTH: float = 20.0
MIN_ARROW_MAGNITUDE: float = 0.01
POINT_ARROW_SCALE: float = 40.0

COMPILE_CACHE_SIZE: int = 256

LOG_FORMAT: str = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATEFMT: str = "%H:%M:%S"

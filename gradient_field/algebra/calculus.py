from __future__ import annotations
from typing import Callable
import math
from ..config import DEFAULT_EPSILON
from ..core.types import InvalidArgumentError, Vector2, ZERO

ScalarFn = Callable[[float, float], float]

def gradient(fn: ScalarFn, x: float, y: float, epsilon: float = DEFAULT_EPSILON) -> Vector2:
    """Central finite-difference estimate of ``(df/dx, df/dy)`` at ``(x, y)``.

    If ``fn`` is undefined (nan) at the point itself the zero vector is
    returned without sampling further. A component whose difference quotient
    is nan is reported as 0, independently of the other one.
    """
    if not epsilon > 0:
        raise InvalidArgumentError(f"epsilon must be strictly positive, got {epsilon!r}")
    if math.isnan(fn(x, y)):
        return ZERO
    dx = (fn(x + epsilon, y) - fn(x - epsilon, y)) / (2 * epsilon)
    dy = (fn(x, y + epsilon) - fn(x, y - epsilon)) / (2 * epsilon)
    return Vector2(0.0 if math.isnan(dx) else dx, 0.0 if math.isnan(dy) else dy)
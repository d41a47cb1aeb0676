from __future__ import annotations
from typing import Dict, List
import math
from .model import BuiltinFunction
from .types import Vector2

# Closed-form surfaces offered next to user formulas. `expression` is written
# in the compiler's grammar so each one can also be rebuilt from text.

def _peak(x: float, y: float) -> float:
    return 4 - (x * x + y * y) / 4

def _peak_grad(x: float, y: float) -> Vector2:
    return Vector2(-x / 2, -y / 2)

def _saddle(x: float, y: float) -> float:
    return (x * x - y * y) / 4

def _saddle_grad(x: float, y: float) -> Vector2:
    return Vector2(x / 2, -y / 2)

def _waves(x: float, y: float) -> float:
    return math.sin(x) * math.cos(y)

def _waves_grad(x: float, y: float) -> Vector2:
    return Vector2(math.cos(x) * math.cos(y), -math.sin(x) * math.sin(y))

def _multi_peak(x: float, y: float) -> float:
    return math.sin(x / 1.5) + math.cos(y / 1.5) + 0.1 * x

def _multi_peak_grad(x: float, y: float) -> Vector2:
    return Vector2(math.cos(x / 1.5) / 1.5 + 0.1, -math.sin(y / 1.5) / 1.5)

BUILTIN_FUNCTIONS: List[BuiltinFunction] = [
    BuiltinFunction(
        id="peak", name="The Peak",
        formula="f(x, y) = 4 - (x² + y²)/4",
        expression="4 - (x^2 + y^2)/4",
        description="A simple paraboloid; the gradient always points to the summit (the maximum).",
        fn=_peak, grad=_peak_grad),
    BuiltinFunction(
        id="saddle", name="The Saddle",
        formula="f(x, y) = (x² - y²)/4",
        expression="(x^2 - y^2)/4",
        description="Rises along one axis and falls along the other; the flow takes the shape of a saddle.",
        fn=_saddle, grad=_saddle_grad),
    BuiltinFunction(
        id="waves", name="Waves",
        formula="f(x, y) = sin(x) · cos(y)",
        expression="sin(x) * cos(y)",
        description="Periodic crests and troughs showing how the gradient repeats.",
        fn=_waves, grad=_waves_grad),
    BuiltinFunction(
        id="complex", name="Multi-Peak",
        formula="f(x, y) = sin(x/1.5) + cos(y/1.5) + 0.1x",
        expression="sin(x/1.5) + cos(y/1.5) + 0.1*x",
        description="A richer terrain with several local maxima and minima.",
        fn=_multi_peak, grad=_multi_peak_grad),
]

_BY_ID: Dict[str, BuiltinFunction] = {f.id: f for f in BUILTIN_FUNCTIONS}

def get_builtin(function_id: str) -> BuiltinFunction:
    try:
        return _BY_ID[function_id]
    except KeyError:
        raise KeyError(f"Unknown built-in function {function_id!r}; known: {sorted(_BY_ID)}") from None

def default_function() -> BuiltinFunction:
    return BUILTIN_FUNCTIONS[0]

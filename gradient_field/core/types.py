from __future__ import annotations
from typing import NamedTuple, Optional
import math

class CompileError(ValueError):
    """Base class for formulas that cannot be turned into a function."""

class EmptyExpressionError(CompileError):
    def __init__(self, message: str = "Expression is empty"):
        super().__init__(message)

class ExpressionSyntaxError(CompileError):
    def __init__(self, message: str, position: Optional[int] = None):
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at position {position})"
        super().__init__(message)

    def shifted(self, offset: int) -> ExpressionSyntaxError:
        if self.position is None or offset == 0:
            return self
        return ExpressionSyntaxError(self.message, self.position + offset)

class InvalidArgumentError(ValueError): ...

class Point(NamedTuple):
    x: float
    y: float

    def clamp(self, limit: float) -> Point:
        return Point(max(-limit, min(limit, self.x)), max(-limit, min(limit, self.y)))

class Vector2(NamedTuple):
    dx: float
    dy: float

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)

ZERO = Vector2(0.0, 0.0)

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple, runtime_checkable
import logging
from .types import CompileError, InvalidArgumentError, Vector2
from ..algebra.calculus import gradient
from ..algebra.compiler import CompiledFunction, compile_expression
from ..config import DEFAULT_EPSILON

logger = logging.getLogger(__name__)

@runtime_checkable
class FieldFunction(Protocol):
    """Anything that can be evaluated and differentiated at a point."""
    name: str
    formula: str
    description: str

    def evaluate(self, x: float, y: float) -> float: ...
    def gradient_at(self, x: float, y: float) -> Vector2: ...

@dataclass(frozen=True)
class BuiltinFunction:
    id: str
    name: str
    formula: str
    expression: str
    description: str
    fn: Callable[[float, float], float]
    grad: Callable[[float, float], Vector2]

    def evaluate(self, x: float, y: float) -> float:
        return self.fn(x, y)

    def gradient_at(self, x: float, y: float) -> Vector2:
        return self.grad(x, y)

@dataclass(frozen=True)
class UserFunction:
    compiled: CompiledFunction
    epsilon: float = DEFAULT_EPSILON
    name: str = "Custom function"
    description: str = "A surface defined by your own formula."
    id: str = "custom"

    def __post_init__(self):
        if not self.epsilon > 0:
            raise InvalidArgumentError(f"epsilon must be strictly positive, got {self.epsilon!r}")

    @property
    def formula(self) -> str:
        return f"f(x, y) = {self.compiled.expression}"

    def evaluate(self, x: float, y: float) -> float:
        return self.compiled(x, y)

    def gradient_at(self, x: float, y: float) -> Vector2:
        return gradient(self.compiled, x, y, self.epsilon)

def build_user_function(expression: str, epsilon: float = DEFAULT_EPSILON) -> UserFunction:
    return UserFunction(compile_expression(expression), epsilon=epsilon)

def switch_user_formula(current: FieldFunction, expression: str,
                        epsilon: float = DEFAULT_EPSILON) -> Tuple[FieldFunction, Optional[CompileError]]:
    """Compile ``expression``; on failure keep ``current`` and hand back the error."""
    try:
        return build_user_function(expression, epsilon), None
    except CompileError as exc:
        logger.info("Keeping %r, formula rejected: %s", current.name, exc)
        return current, exc

from __future__ import annotations
from functools import lru_cache
from typing import Dict
import logging
import math
import sympy as sp
from ..config import COMPILE_CACHE_SIZE
from ..core.types import CompileError, ExpressionSyntaxError
from .nodes import Node
from .parsing import make_expr, normalize

logger = logging.getLogger(__name__)

# Everything that may go wrong while walking a well-formed tree
_EVALUATION_ERRORS = (ArithmeticError, ValueError, TypeError, RecursionError)

class CompiledFunction:
    """Callable ``f(x, y) -> float`` built from a user formula.

    Calls never raise: points where the formula is undefined (division by
    zero, ``sqrt`` or ``log`` out of domain) and points where the result is
    not finite (overflow, infinite input) evaluate to ``nan``.
    Instances hold no mutable state and may be shared between threads.
    """
    __slots__ = ("_expression", "_tree")

    def __init__(self, expression: str, tree: Node):
        object.__setattr__(self, "_expression", expression)
        object.__setattr__(self, "_tree", tree)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def tree(self) -> Node:
        return self._tree

    def __call__(self, x: float, y: float) -> float:
        try:
            value = self._tree.evaluate(float(x), float(y))
        except _EVALUATION_ERRORS:
            return math.nan
        value = float(value)
        # overflow surfaces either as OverflowError or as a silent inf
        return value if math.isfinite(value) else math.nan

    def to_sympy(self) -> sp.Expr:
        symbols: Dict[str, sp.Symbol] = {n: sp.Symbol(n, real=True) for n in ("x", "y")}
        return self._tree.to_sympy(symbols)

    def latex(self) -> str:
        return sp.latex(self.to_sympy())

    def __repr__(self) -> str:
        return f"CompiledFunction({self._expression!r})"

def compile_expression(expression: str) -> CompiledFunction:
    """Compile a formula in ``x`` and ``y`` into a :class:`CompiledFunction`.

    Raises:
        EmptyExpressionError: ``expression`` is blank.
        ExpressionSyntaxError: ``expression`` is not a valid formula.
        TypeError: ``expression`` is not a string.
    """
    if not isinstance(expression, str):
        raise TypeError(f"expression must be a str, not {type(expression).__name__}")
    try:
        return _compile_normalized(normalize(expression))
    except ExpressionSyntaxError as exc:
        # the cache works on stripped text
        offset = len(expression) - len(expression.lstrip())
        raise exc.shifted(offset) from None

@lru_cache(maxsize=COMPILE_CACHE_SIZE)
def _compile_normalized(source: str) -> CompiledFunction:
    try:
        tree = make_expr(source)
    except CompileError as exc:
        logger.debug("Rejected expression %r: %s", source, exc)
        raise
    return CompiledFunction(source, tree)

compile_expression.cache_clear = _compile_normalized.cache_clear
compile_expression.cache_info = _compile_normalized.cache_info

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Tuple, Union
import math
import operator
import sympy as sp

# Expression tree over a closed node set. Every node evaluates eagerly with
# the `math` module and can be mirrored as a SymPy expression for display.

_NUMERIC_FUNCS: Dict[str, Callable[[float], float]] = {
    "sin": math.sin, "cos": math.cos, "tan": math.tan,
    "sqrt": math.sqrt, "abs": abs,
    "log": math.log, "ln": math.log, "exp": math.exp,
}

_SYMBOLIC_FUNCS: Dict[str, Callable[[sp.Expr], sp.Expr]] = {
    "sin": sp.sin, "cos": sp.cos, "tan": sp.tan,
    "sqrt": sp.sqrt, "abs": sp.Abs,
    "log": sp.log, "ln": sp.log, "exp": sp.exp,
}

_CONSTANTS: Dict[str, Tuple[float, sp.Expr]] = {
    "pi": (math.pi, sp.pi),
    "e": (math.e, sp.E),
}

_BINARY_OPS: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add, "-": operator.sub,
    "*": operator.mul, "/": operator.truediv,
    "^": operator.pow,
}

def function_names():
    return frozenset(_NUMERIC_FUNCS)

def constant_names():
    return frozenset(_CONSTANTS)

Symbols = Dict[str, sp.Symbol]

@dataclass(frozen=True)
class Literal:
    value: float

    def evaluate(self, x: float, y: float) -> float:
        return self.value

    def to_sympy(self, symbols: Symbols) -> sp.Expr:
        if float(self.value).is_integer():
            return sp.Integer(int(self.value))
        return sp.Float(self.value)

@dataclass(frozen=True)
class Variable:
    name: str

    def __post_init__(self):
        if self.name not in ("x", "y"):
            raise ValueError(f"Unknown variable {self.name!r}")

    def evaluate(self, x: float, y: float) -> float:
        return x if self.name == "x" else y

    def to_sympy(self, symbols: Symbols) -> sp.Expr:
        return symbols[self.name]

@dataclass(frozen=True)
class Constant:
    name: str

    def __post_init__(self):
        if self.name not in _CONSTANTS:
            raise ValueError(f"Unknown constant {self.name!r}")

    def evaluate(self, x: float, y: float) -> float:
        return _CONSTANTS[self.name][0]

    def to_sympy(self, symbols: Symbols) -> sp.Expr:
        return _CONSTANTS[self.name][1]

@dataclass(frozen=True)
class UnaryOp:
    op: str
    operand: Node

    def evaluate(self, x: float, y: float) -> float:
        value = self.operand.evaluate(x, y)
        return -value if self.op == "-" else value

    def to_sympy(self, symbols: Symbols) -> sp.Expr:
        inner = self.operand.to_sympy(symbols)
        return -inner if self.op == "-" else inner

@dataclass(frozen=True)
class UnaryFunction:
    name: str
    argument: Node

    def __post_init__(self):
        if self.name not in _NUMERIC_FUNCS:
            raise ValueError(f"Unknown function {self.name!r}")

    def evaluate(self, x: float, y: float) -> float:
        return _NUMERIC_FUNCS[self.name](self.argument.evaluate(x, y))

    def to_sympy(self, symbols: Symbols) -> sp.Expr:
        return _SYMBOLIC_FUNCS[self.name](self.argument.to_sympy(symbols))

@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: Node
    right: Node

    def __post_init__(self):
        if self.op not in _BINARY_OPS:
            raise ValueError(f"Unknown operator {self.op!r}")

    def evaluate(self, x: float, y: float) -> float:
        result = _BINARY_OPS[self.op](self.left.evaluate(x, y), self.right.evaluate(x, y))
        # negative base with fractional exponent
        if isinstance(result, complex):
            return math.nan
        return result

    def to_sympy(self, symbols: Symbols) -> sp.Expr:
        a, b = self.left.to_sympy(symbols), self.right.to_sympy(symbols)
        if self.op == "+": return a + b
        if self.op == "-": return a - b
        if self.op == "*": return a * b
        if self.op == "/": return a / b
        return a ** b

Node = Union[Literal, Variable, Constant, UnaryOp, UnaryFunction, BinaryOp]

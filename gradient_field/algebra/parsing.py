from __future__ import annotations
from dataclasses import dataclass
from typing import FrozenSet, List
import re
from ..core.types import EmptyExpressionError, ExpressionSyntaxError
from .nodes import (Node, Literal, Variable, Constant, UnaryOp, UnaryFunction, BinaryOp,
                    function_names, constant_names)

VARIABLES: FrozenSet[str] = frozenset({"x", "y"})

_TOKEN_RE = re.compile(r"""
    (?P<ws>\s+)
  | (?P<number>(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?)
  | (?P<name>[a-z_][a-z0-9_]*)
  | (?P<op>[-+*/^])
  | (?P<lparen>\()
  | (?P<rparen>\))
""", re.VERBOSE)

@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int

def allowed_names() -> FrozenSet[str]:
    return VARIABLES | function_names() | constant_names()

def normalize(text: str) -> str:
    return text.strip().lower()

def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise ExpressionSyntaxError(f"Unexpected character {text[pos]!r}", pos)
        kind = m.lastgroup
        if kind != "ws":
            tokens.append(Token(kind, m.group(), pos))
        pos = m.end()
    tokens.append(Token("end", "", len(text)))
    return tokens

class _Parser:
    """Recursive descent over

        expr  := term (('+' | '-') term)*
        term  := unary (('*' | '/') unary)*
        unary := ('+' | '-') unary | power
        power := atom ('^' unary)?
        atom  := number | variable | constant | function '(' expr ')' | '(' expr ')'

    `^` is right-associative and binds tighter than a leading minus.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0

    @property
    def current(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def expect(self, kind: str, what: str) -> Token:
        tok = self.current
        if tok.kind != kind:
            raise ExpressionSyntaxError(f"Expected {what}, found {_describe(tok)}", tok.pos)
        return self.advance()

    def parse(self) -> Node:
        node = self.expr()
        if self.current.kind != "end":
            raise ExpressionSyntaxError(f"Unexpected {_describe(self.current)}", self.current.pos)
        return node

    def expr(self) -> Node:
        node = self.term()
        while self.current.kind == "op" and self.current.text in "+-":
            op = self.advance().text
            node = BinaryOp(op, node, self.term())
        return node

    def term(self) -> Node:
        node = self.unary()
        while self.current.kind == "op" and self.current.text in "*/":
            op = self.advance().text
            node = BinaryOp(op, node, self.unary())
        return node

    def unary(self) -> Node:
        if self.current.kind == "op" and self.current.text in "+-":
            op = self.advance().text
            return UnaryOp(op, self.unary())
        return self.power()

    def power(self) -> Node:
        base = self.atom()
        if self.current.kind == "op" and self.current.text == "^":
            self.advance()
            return BinaryOp("^", base, self.unary())
        return base

    def atom(self) -> Node:
        tok = self.current
        if tok.kind == "number":
            self.advance()
            return Literal(float(tok.text))
        if tok.kind == "lparen":
            self.advance()
            node = self.expr()
            self.expect("rparen", "')'")
            return node
        if tok.kind == "name":
            self.advance()
            if tok.text in VARIABLES:
                return Variable(tok.text)
            if tok.text in constant_names():
                return Constant(tok.text)
            if tok.text in function_names():
                self.expect("lparen", f"'(' after {tok.text}")
                arg = self.expr()
                self.expect("rparen", "')'")
                return UnaryFunction(tok.text, arg)
            raise ExpressionSyntaxError(f"Unknown identifier {tok.text!r}", tok.pos)
        raise ExpressionSyntaxError(f"Unexpected {_describe(tok)}", tok.pos)

def _describe(tok: Token) -> str:
    return "end of expression" if tok.kind == "end" else repr(tok.text)

def make_expr(text: str) -> Node:
    """Parse a formula in `x` and `y` into an expression tree.

    Names are matched case-insensitively and as whole identifiers only, so
    `sinx` is an unknown identifier rather than `sin` applied to `x`.
    """
    if not text.strip():
        raise EmptyExpressionError()
    try:
        # positions refer to the text as given, leading whitespace included
        return _Parser(tokenize(text.lower())).parse()
    except RecursionError:
        raise ExpressionSyntaxError("Expression is nested too deeply") from None

import math
from concurrent.futures import ThreadPoolExecutor

import pytest
import sympy as sp

from gradient_field.algebra.calculus import gradient
from gradient_field.algebra.compiler import CompiledFunction, compile_expression
from gradient_field.core.types import EmptyExpressionError, ExpressionSyntaxError


@pytest.mark.parametrize("text", ["", "   "])
def test_blank_expression_is_rejected(text):
    with pytest.raises(EmptyExpressionError):
        compile_expression(text)


def test_non_string_is_a_type_error():
    with pytest.raises(TypeError):
        compile_expression(None)


def test_sum():
    f = compile_expression("x + y")
    assert isinstance(f, CompiledFunction)
    assert f(2, 3) == 5


def test_paraboloid_and_its_gradient():
    f = compile_expression("x^2 + y^2")
    assert f(3, 4) == 25
    g = gradient(f, 3, 4)
    assert g.dx == pytest.approx(6, abs=1e-2)
    assert g.dy == pytest.approx(8, abs=1e-2)


@pytest.mark.parametrize("text,x,y,expected", [
    ("2 ^ 3 ^ 2", 0, 0, 512),
    ("-x^2", 3, 0, -9),
    ("2 * pi", 0, 0, 2 * math.pi),
    ("E^x", 1, 0, math.e),
    ("ln(e) + log(1)", 0, 0, 1),
    ("abs(x - y)", 1, 4, 3),
    ("sqrt(x) * exp(y)", 4, 0, 2),
    ("tan(x) + sin(y) + cos(0)", 0, 0, 1),
    ("1.5e1 / .5", 0, 0, 30),
    ("+x - -y", 1, 2, 3),
])
def test_evaluation(text, x, y, expected):
    assert compile_expression(text)(x, y) == pytest.approx(expected)


@pytest.mark.parametrize("text,x,y", [
    ("1 / x", 0, 0),
    ("sqrt(x)", -1, 0),
    ("log(x)", 0, 0),
    ("ln(x)", -2, 0),
    ("x ^ (1/3)", -8, 0),
    ("exp(x)", 1000, 0),
    ("0 ^ x", -1, 0),
])
def test_undefined_points_return_nan(text, x, y):
    assert math.isnan(compile_expression(text)(x, y))


def test_division_by_zero_short_circuits_gradient():
    f = compile_expression("1 / x")
    assert math.isnan(f(0, 0))
    assert gradient(f, 0, 0) == (0, 0)


def test_nan_is_distinct_from_zero():
    f = compile_expression("sqrt(x)")
    assert f(0, 0) == 0
    assert math.isnan(f(-1, 0))


def test_whole_word_matching():
    with pytest.raises(ExpressionSyntaxError):
        compile_expression("sinx")
    assert compile_expression("sin(x)")(math.pi / 2, 0) == pytest.approx(1)


def test_compiling_twice_is_deterministic():
    f = compile_expression("sin(x) * y + x^2")
    compile_expression.cache_clear()
    g = compile_expression("sin(x) * y + x^2")
    assert f is not g
    for x, y in [(0, 0), (1.5, -2), (-3.25, 7), (1e-3, 1e3)]:
        assert f(x, y) == g(x, y)


def test_cache_is_keyed_by_normalized_text():
    assert compile_expression(" X + Y ") is compile_expression("x + y")
    assert compile_expression.cache_info().hits >= 1


def test_compiled_function_is_immutable():
    f = compile_expression("x")
    with pytest.raises(AttributeError):
        f.foo = 1
    with pytest.raises(AttributeError):
        f._tree = None
    with pytest.raises(AttributeError):
        del f._tree
    assert f(2, 0) == 2
    assert f.expression == "x"


def test_never_raises_on_odd_inputs():
    f = compile_expression("x / y")
    assert math.isnan(f(1, 0))
    assert math.isnan(f("a", 1))
    assert math.isnan(f(float("inf"), 1))


def test_safe_to_share_between_threads():
    f = compile_expression("x * y - sin(x)")
    points = [(i * 0.1, -i * 0.2) for i in range(200)]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda p: f(*p), points))
    assert results == [f(*p) for p in points]


def test_to_sympy_and_latex():
    x, y = sp.symbols("x y", real=True)
    f = compile_expression("x^2 + 3*y - ln(x)")
    assert sp.simplify(f.to_sympy() - (x**2 + 3 * y - sp.log(x))) == 0
    assert "x^{2}" in f.latex()
    assert compile_expression("0.5 * x").to_sympy() == sp.Float(0.5) * x


def test_overflow_is_nan_however_it_is_written():
    square_pow = compile_expression("x^2")
    square_mul = compile_expression("x*x")
    assert math.isnan(square_pow(1e200, 0))
    assert math.isnan(square_mul(1e200, 0))
    assert math.isnan(compile_expression("exp(x)")(1000, 0))
    assert math.isnan(compile_expression("x * 10")(1e308, 0))
    assert square_pow(3, 0) == square_mul(3, 0) == 9
    assert gradient(square_pow, 1e200, 0) == gradient(square_mul, 1e200, 0) == (0, 0)


@pytest.mark.parametrize("text,position", [("   x + z", 7), ("\tsinx", 1), ("x + z", 4)])
def test_syntax_error_position_counts_leading_whitespace(text, position):
    with pytest.raises(ExpressionSyntaxError) as info:
        compile_expression(text)
    assert info.value.position == position
    assert f"position {position}" in str(info.value)


def test_cached_failure_keeps_positions_per_input():
    with pytest.raises(ExpressionSyntaxError) as first:
        compile_expression("x $")
    with pytest.raises(ExpressionSyntaxError) as second:
        compile_expression("  x $")
    assert (first.value.position, second.value.position) == (2, 4)

import matplotlib
matplotlib.use("Agg")

import pytest

from gradient_field.algebra.compiler import compile_expression


@pytest.fixture(autouse=True)
def fresh_compile_cache():
    compile_expression.cache_clear()
    yield
    compile_expression.cache_clear()

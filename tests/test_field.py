import math

import matplotlib.pyplot as plt
import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from gradient_field.config import ARROW_LENGTH, AXIS_RANGE, CANVAS_SIZE
from gradient_field.core.builtins import get_builtin
from gradient_field.core.model import build_user_function
from gradient_field.core.types import InvalidArgumentError, Point
from gradient_field.plotting import plot_field
from gradient_field.solvers.field import (arrow_centers, probe, sample_heatmap, sample_vectors, to_canvas,
                                          to_math)


def test_canvas_mapping():
    assert to_canvas(-AXIS_RANGE) == 0
    assert to_canvas(AXIS_RANGE) == CANVAS_SIZE
    assert to_math(CANVAS_SIZE / 2) == 0
    assert to_math(to_canvas(1.25)) == pytest.approx(1.25)


def test_probe_clamps_to_axes():
    p = probe(get_builtin("peak"), Point(100, -100))
    assert p.point == Point(7.5, -7.5)
    assert p.value == pytest.approx(-24.125)
    assert p.gradient == (-3.75, 3.75)
    assert p.magnitude == pytest.approx(math.hypot(3.75, 3.75))


def test_probe_accepts_plain_tuples():
    p = probe(get_builtin("saddle"), (2.0, 1.0))
    assert p.point == Point(2.0, 1.0)
    assert p.gradient == (1.0, -0.5)


def test_heatmap_layout():
    peak = get_builtin("peak")
    grid = sample_heatmap(peak, resolution=5)
    assert grid.values.shape == (5, 5)
    assert_array_equal(grid.xs, np.linspace(-7.5, 7.5, 5))
    assert grid.values[2, 2] == 4
    assert grid.values[0, 4] == peak.evaluate(grid.xs[4], grid.ys[0])
    assert grid.extent == (-7.5, 7.5, -7.5, 7.5)


def test_heatmap_keeps_undefined_points():
    grid = sample_heatmap(build_user_function("sqrt(x)"), resolution=4)
    assert np.isnan(grid.values[:, :2]).all()
    assert not np.isnan(grid.values[:, 2:]).any()
    assert grid.defined_fraction() == 0.5


def test_heatmap_resolution_validation():
    with pytest.raises(InvalidArgumentError):
        sample_heatmap(get_builtin("peak"), resolution=1)


def test_arrow_centers():
    assert_allclose(arrow_centers(), np.arange(-6.5, 7.0, 1.0))
    with pytest.raises(InvalidArgumentError):
        arrow_centers(0)


def test_vector_field():
    df = sample_vectors(get_builtin("peak"))
    assert list(df.columns) == ["x", "y", "dx", "dy", "magnitude", "display_length"]
    assert len(df) == 14 * 14
    assert_allclose(df["dx"], -df["x"] / 2)
    assert (df["display_length"] < ARROW_LENGTH).all()
    assert_allclose(df["display_length"], ARROW_LENGTH * df["magnitude"] / (df["magnitude"] + 1))


def test_flat_vectors_are_dropped():
    f = build_user_function("1")
    assert sample_vectors(f).empty
    assert len(sample_vectors(f, min_magnitude=None)) == 14 * 14


def test_plot_field():
    peak = get_builtin("peak")
    ax = plot_field(peak, Point(1.0, 1.0), resolution=20)
    assert ax.get_title() == peak.formula
    assert ax.get_xlim() == (-AXIS_RANGE, AXIS_RANGE)
    plt.close(ax.figure)


def test_plot_field_with_undefined_region():
    fig, ax = plt.subplots()
    out = plot_field(build_user_function("log(x) + y"), Point(-1.0, 0.0), ax=ax, resolution=20)
    assert out is ax
    plt.close(fig)

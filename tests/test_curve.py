"""Tests for the materialised HilbertCurve."""

import numpy as np
import pytest

from hilbertplot.curve.curve import HilbertCurve
from hilbertplot.curve.indexer import index_to_coord
from hilbertplot.errors import DomainError


def test_build_shapes():
    curve = HilbertCurve.build(3)
    assert curve.order == 3
    assert curve.side == 8
    assert len(curve) == 64
    assert curve.points.shape == (64, 2)
    assert curve.index_grid.shape == (8, 8)


def test_points_follow_indexer():
    curve = HilbertCurve.build(3)
    for i in range(len(curve)):
        assert tuple(int(v) for v in curve.points[i]) == index_to_coord(3, i)


def test_index_grid_is_a_permutation():
    curve = HilbertCurve.build(4)
    np.testing.assert_array_equal(np.sort(curve.index_grid.ravel()), np.arange(256))


def test_index_grid_uses_row_major_layout():
    curve = HilbertCurve.build(2)
    # index 5 sits at x=0, y=3
    assert curve.index_grid[3, 0] == 5
    assert curve.index_of(0, 3) == 5
    assert curve.index_of(1, 3) == 6


def test_arrays_are_read_only():
    curve = HilbertCurve.build(2)
    with pytest.raises(ValueError):
        curve.points[0, 0] = 9
    with pytest.raises(ValueError):
        curve.index_grid[0, 0] = 9


def test_order_zero():
    curve = HilbertCurve.build(0)
    assert len(curve) == 1
    assert curve.side == 1
    np.testing.assert_array_equal(curve.index_difference_map(), [[0.0]])
    assert curve.mean_index_difference() == 0.0


def test_build_rejects_bad_order():
    with pytest.raises(DomainError):
        HilbertCurve.build(-1)


def test_index_difference_map_order_one():
    # index_grid for order 1: [[0, 3], [1, 2]]
    curve = HilbertCurve.build(1)
    np.testing.assert_array_equal(curve.index_grid, [[0, 3], [1, 2]])
    diff = curve.index_difference_map()
    expected = np.array([
        [(3 + 1 + 2) / 3, (3 + 2 + 1) / 3],
        [(1 + 1 + 2) / 3, (2 + 1 + 1) / 3],
    ])
    np.testing.assert_allclose(diff, expected)


def test_index_difference_map_is_positive_off_order_zero():
    diff = HilbertCurve.build(3).index_difference_map()
    assert diff.shape == (8, 8)
    assert np.all(diff >= 1.0)


def test_seams_have_largest_differences():
    curve = HilbertCurve.build(3)
    diff = curve.index_difference_map()
    # the centre seam between quadrants beats any corner cell
    assert diff[3:5, 3:5].min() > diff[0, 0]


def test_to_svg():
    svg = HilbertCurve.build(1).to_svg(color="blue", stroke_width=0.5)
    assert svg.startswith("<?xml")
    assert "<path" in svg
    assert "stroke:blue" in svg
    assert "stroke-width:0.5px" in svg
    # y flipped: (0,0) (0,1) (1,1) (1,0) -> (0,1) (0,0) (1,0) (1,1)
    assert 'd="M 0,1 0,0 1,0 1,1"' in svg
    assert svg.rstrip().endswith("</svg>")

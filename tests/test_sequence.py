"""Tests for data-sequence helpers."""

import numpy as np
import pytest

from hilbertplot.data.sequence import (
    as_sequence,
    granularity,
    hamming_similarity,
    manhattan_distance,
    normalize,
    shannon_entropy,
    summary,
)


def test_as_sequence():
    out = as_sequence([1, 2, 3])
    assert out.dtype == np.float64
    assert as_sequence([1j]).dtype == np.complex128
    with pytest.raises(ValueError):
        as_sequence([[1, 2]])
    with pytest.raises(TypeError):
        as_sequence(["x"])


def test_granularity():
    np.testing.assert_allclose(granularity([1, 3, 5, 7, 9], 2), [2, 2, 6, 6, 9])
    np.testing.assert_allclose(granularity([1, 2, 3, 4], 1), [1, 2, 3, 4])
    np.testing.assert_allclose(granularity([0, 0, 6, 1, 2, 3], 3), [2, 2, 2, 2, 2, 2])


def test_granularity_bounds():
    with pytest.raises(ValueError):
        granularity([], 1)
    with pytest.raises(ValueError):
        granularity([1, 2, 3], 2)
    with pytest.raises(ValueError):
        granularity([1, 2, 3, 4], 0)


def test_granularity_leaves_input_alone():
    x = np.array([1.0, 3.0, 5.0, 7.0])
    granularity(x, 2)
    np.testing.assert_array_equal(x, [1.0, 3.0, 5.0, 7.0])


def test_normalize():
    np.testing.assert_allclose(normalize([2, 4, 6]), [0.0, 0.5, 1.0])
    np.testing.assert_array_equal(normalize([5, 5, 5]), [0.0, 0.0, 0.0])
    assert normalize([]).shape == (0,)


def test_summary():
    st = summary([1.0, 2.0, 3.0, 4.0])
    assert st.n == 4
    assert st.min == 1.0
    assert st.max == 4.0
    assert st.mean == pytest.approx(2.5)
    assert st.std == pytest.approx(np.std([1, 2, 3, 4], ddof=1))
    assert summary([7.0]).std == 0.0
    with pytest.raises(ValueError):
        summary([])


def test_entropy_constant_is_zero():
    assert shannon_entropy(np.full(100, 3.0)) == 0.0


def test_entropy_uniform_two_levels_is_one():
    assert shannon_entropy([0.0, 1.0] * 50) == pytest.approx(1.0)


def test_entropy_bounds(rng):
    for x in (rng.normal(size=500), rng.integers(0, 256, size=1000).astype(float), [0, 0, 0, 1]):
        h = shannon_entropy(x)
        assert 0.0 <= h <= 1.0 + 1e-12


def test_entropy_skewed_below_one():
    assert shannon_entropy([0.0, 0.0, 0.0, 1.0]) < 1.0


def test_entropy_validation():
    with pytest.raises(ValueError):
        shannon_entropy([])
    with pytest.raises(ValueError):
        shannon_entropy([1.0, 2.0], levels=0)


def test_hamming_similarity():
    np.testing.assert_array_equal(hamming_similarity([1, 2, 3, 4], [1, 0, 3]), [1.0, 0.0, 1.0, 0.0])


def test_manhattan_distance():
    np.testing.assert_array_equal(manhattan_distance([1, 5, 3], [2, 2, 3, 9]), [1.0, 3.0, 0.0])
    np.testing.assert_array_equal(manhattan_distance([1, 5], [0]), [1.0, 0.0])

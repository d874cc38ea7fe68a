"""Tests for the overflow policy registry and the built-in policies."""

import numpy as np
import pytest

from hilbertplot.errors import SequenceOverflowError
from hilbertplot.mapping import overflow
from hilbertplot.mapping.overflow import (
    PolicyNotRegistered,
    is_registered,
    list_policies,
    register_overflow_policy,
    resolve_overflow,
)


@pytest.fixture
def clean_registry():
    saved = dict(overflow._REGISTRY)
    yield
    overflow._REGISTRY.clear()
    overflow._REGISTRY.update(saved)


def test_builtin_policies_registered():
    assert list_policies() == ["decimate", "mean_pool", "reject", "spectral_reduce"]
    assert is_registered(" Mean_Pool ")
    assert not is_registered("nope")


def test_unknown_policy():
    with pytest.raises(PolicyNotRegistered):
        resolve_overflow("nope", np.arange(8.0), 4)
    with pytest.raises(KeyError):
        resolve_overflow("nope", np.arange(8.0), 4)


def test_sequence_that_fits_is_returned_unchanged():
    seq = np.arange(4.0)
    assert resolve_overflow("reject", seq, 4) is seq
    assert resolve_overflow("decimate", seq, 16) is seq


def test_reject():
    with pytest.raises(SequenceOverflowError):
        resolve_overflow("reject", np.arange(5.0), 4)
    with pytest.raises(OverflowError):
        resolve_overflow("reject", np.arange(5.0), 4)


def test_decimate():
    out = resolve_overflow("decimate", np.arange(8.0), 4)
    np.testing.assert_array_equal(out, [0.0, 2.0, 4.0, 6.0])
    out = resolve_overflow("decimate", np.arange(10.0), 4)
    np.testing.assert_array_equal(out, [0.0, 2.0, 5.0, 7.0])


def test_mean_pool():
    out = resolve_overflow("mean_pool", np.arange(8.0), 4)
    np.testing.assert_allclose(out, [0.5, 2.5, 4.5, 6.5])
    # uneven blocks: edges 0, 2, 5, 7, 10
    out = resolve_overflow("mean_pool", np.arange(10.0), 4)
    np.testing.assert_allclose(out, [0.5, 3.0, 5.5, 8.0])


def test_mean_pool_preserves_mean_for_even_blocks(rng):
    x = rng.normal(size=64)
    out = resolve_overflow("mean_pool", x, 16)
    assert out.mean() == pytest.approx(x.mean())


def test_spectral_reduce_constant():
    out = resolve_overflow("spectral_reduce", np.full(64, 2.5), 16)
    assert out.shape == (16,)
    assert out.dtype == np.float64
    np.testing.assert_allclose(out, 2.5, atol=1e-12)


def test_spectral_reduce_keeps_low_frequency():
    L, C = 64, 16
    t = np.arange(L)
    x = 1.0 + np.cos(2 * np.pi * 2 * t / L)
    out = resolve_overflow("spectral_reduce", x, C)
    s = np.arange(C)
    np.testing.assert_allclose(out, 1.0 + np.cos(2 * np.pi * 2 * s / C), atol=1e-12)


def test_spectral_reduce_odd_capacity():
    out = resolve_overflow("spectral_reduce", np.full(20, -1.0), 5)
    np.testing.assert_allclose(out, -1.0, atol=1e-12)


def test_spectral_reduce_complex_input():
    x = np.full(32, 1.0 + 2.0j)
    out = resolve_overflow("spectral_reduce", x, 8)
    assert np.iscomplexobj(out)
    np.testing.assert_allclose(out, 1.0 + 2.0j, atol=1e-12)


def test_register_custom_policy(clean_registry):
    @register_overflow_policy("first_block")
    def first_block(seq, capacity):
        return seq[:capacity]

    assert is_registered("first_block")
    np.testing.assert_array_equal(resolve_overflow("first_block", np.arange(6.0), 4), [0, 1, 2, 3])


def test_duplicate_registration(clean_registry):
    with pytest.raises(KeyError):
        @register_overflow_policy("decimate")
        def again(seq, capacity):
            return seq[:capacity]


def test_bad_policy_name():
    with pytest.raises(ValueError):
        register_overflow_policy("  ")


def test_policy_output_shape_checked(clean_registry):
    @register_overflow_policy("broken")
    def broken(seq, capacity):
        return seq[: capacity - 1]

    with pytest.raises(RuntimeError):
        resolve_overflow("broken", np.arange(8.0), 4)


def test_spectral_reduce_keeps_output_nyquist_amplitude():
    L, C = 64, 16
    t = np.arange(L)
    # frequency 8 of 64 lands exactly on the Nyquist bin of the 16-sample output
    x = np.cos(2 * np.pi * 8 * t / L)
    out = resolve_overflow("spectral_reduce", x, C)
    np.testing.assert_allclose(out, np.cos(np.pi * np.arange(C)), atol=1e-12)
    np.testing.assert_allclose(out, x[:: L // C], atol=1e-12)

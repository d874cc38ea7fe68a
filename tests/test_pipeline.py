"""Tests for PlotConfig, config_from_dict and run()."""

import logging
import threading

import numpy as np
import pytest

from hilbertplot.errors import InvalidLengthError, SequenceOverflowError
from hilbertplot.mapping.mapper import map_from_grid
from hilbertplot.pipeline.plot_pipeline import (
    DEFAULT_MAX_ORDER,
    PlotConfig,
    PlotConfigError,
    config_from_dict,
    run,
)
from hilbertplot.spectral.filters import FilterSpec


# -----------------------------------------------------------------------------
# PlotConfig
# -----------------------------------------------------------------------------

def test_defaults():
    cfg = PlotConfig()
    assert cfg.order is None
    assert cfg.spectral_filter is None
    assert cfg.overflow_policy == "reject"
    assert cfg.fill_value == 0.0
    assert cfg.max_order == DEFAULT_MAX_ORDER


@pytest.mark.parametrize(
    "kwargs",
    [
        {"order": -1},
        {"order": True},
        {"order": 2.0},
        {"max_order": -3},
        {"overflow_policy": "nope"},
        {"spectral_filter": 42},
    ],
)
def test_invalid_config(kwargs):
    with pytest.raises(PlotConfigError):
        PlotConfig(**kwargs)


def test_resolve_order():
    assert PlotConfig(order=5).resolve_order(3) == 5
    assert PlotConfig().resolve_order(0) == 0
    assert PlotConfig().resolve_order(16) == 2
    assert PlotConfig().resolve_order(17) == 3
    assert PlotConfig(max_order=2).resolve_order(1000) == 2


# -----------------------------------------------------------------------------
# config_from_dict
# -----------------------------------------------------------------------------

def test_config_from_dict_full():
    cfg = config_from_dict(
        {
            "plot": {
                "order": 4,
                "max_order": 8,
                "overflow_policy": " Mean_Pool ",
                "fill_value": "nan",
                "spectral_filter": {"kind": "lowpass", "cutoff": 0.25},
            }
        }
    )
    assert cfg.order == 4
    assert cfg.max_order == 8
    assert cfg.overflow_policy == "mean_pool"
    assert np.isnan(cfg.fill_value)
    assert cfg.spectral_filter == FilterSpec(kind="lowpass", cutoff=0.25)


def test_config_from_dict_defaults():
    assert config_from_dict({}) == PlotConfig()
    assert config_from_dict({"plot": None}) == PlotConfig()
    assert config_from_dict({"plot": {"order": "auto"}}).order is None
    assert config_from_dict({"plot": {"order": "3"}}).order == 3


@pytest.mark.parametrize(
    "plot",
    [
        {"order": "three"},
        {"order": 2.5},
        {"order": -1},
        {"order": True},
        {"max_order": "x"},
        {"overflow_policy": "unknown"},
        {"fill_value": "abc"},
        {"spectral_filter": {"kind": "notch"}},
        {"spectral_filter": {"kind": "lowpass", "cutoff": "lots"}},
        {"spectral_filter": "lowpass"},
    ],
)
def test_config_from_dict_errors(plot):
    with pytest.raises(PlotConfigError):
        config_from_dict({"plot": plot})


def test_config_from_dict_type_errors():
    with pytest.raises(TypeError):
        config_from_dict(["plot"])
    with pytest.raises(TypeError):
        config_from_dict({"plot": [1, 2]})


# -----------------------------------------------------------------------------
# run
# -----------------------------------------------------------------------------

def test_run_automatic_order(rng):
    seq = rng.normal(size=50)
    grid = run(PlotConfig(), seq)
    assert grid.order == 3
    assert grid.n_samples == 50
    np.testing.assert_array_equal(grid.to_sequence(), seq)


def test_run_fixed_order_underfill():
    grid = run(PlotConfig(order=2, fill_value=float("nan")), [1.0, 2.0])
    assert grid.shape == (4, 4)
    assert np.isnan(grid.values).sum() == 14


def test_run_overflow_rejected():
    with pytest.raises(SequenceOverflowError):
        run(PlotConfig(order=1), np.arange(5.0))


def test_run_overflow_policy():
    grid = run(PlotConfig(order=1, overflow_policy="decimate"), np.arange(8.0))
    np.testing.assert_array_equal(grid.to_sequence(), [0.0, 2.0, 4.0, 6.0])


def test_run_max_order_caps_auto_order():
    grid = run(PlotConfig(max_order=1, overflow_policy="mean_pool"), np.arange(8.0))
    assert grid.order == 1
    np.testing.assert_allclose(grid.to_sequence(), [0.5, 2.5, 4.5, 6.5])


def test_run_empty_sequence():
    grid = run(PlotConfig(), [])
    assert grid.order == 0
    assert grid.n_samples == 0


def test_run_with_filter_spec():
    t = np.arange(64)
    slow = np.cos(2 * np.pi * t / 64)
    fast = np.cos(2 * np.pi * 20 * t / 64)
    grid = run(PlotConfig(spectral_filter=FilterSpec(kind="lowpass", cutoff=4)), slow + fast)
    assert grid.order == 3
    np.testing.assert_allclose(map_from_grid(3, grid), slow, atol=1e-12)


def test_run_with_raw_predicate():
    grid = run(PlotConfig(spectral_filter=lambda k: k == 0), np.array([1.0, 2.0, 3.0, 6.0]))
    np.testing.assert_allclose(grid.to_sequence(), [3.0, 3.0, 3.0, 3.0], atol=1e-12)


def test_run_filter_on_empty_sequence():
    with pytest.raises(InvalidLengthError):
        run(PlotConfig(spectral_filter=lambda k: True), [])


def test_run_rejects_2d():
    with pytest.raises(ValueError):
        run(PlotConfig(), np.zeros((2, 2)))


def test_run_does_not_modify_input(rng):
    seq = rng.normal(size=16)
    before = seq.copy()
    run(PlotConfig(spectral_filter=FilterSpec(kind="highpass", cutoff=2)), seq)
    np.testing.assert_array_equal(seq, before)


def test_run_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="hilbertplot.pipeline"):
        run(PlotConfig(order=1, overflow_policy="decimate"), np.arange(8.0))
    messages = [r.getMessage() for r in caplog.records if r.name == "hilbertplot.pipeline"]
    assert any("overflow policy 'decimate'" in m for m in messages)
    assert any("order-1 grid" in m for m in messages)


def test_run_is_thread_safe(rng):
    seqs = [rng.normal(size=64) for _ in range(8)]
    results = [None] * len(seqs)
    config = PlotConfig(order=3)

    def work(i):
        results[i] = run(config, seqs[i])

    threads = [threading.Thread(target=work, args=(i,)) for i in range(len(seqs))]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    for seq, grid in zip(seqs, results):
        np.testing.assert_array_equal(grid.to_sequence(), seq)

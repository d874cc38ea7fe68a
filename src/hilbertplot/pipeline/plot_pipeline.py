"""
hilbertplot.pipeline.plot_pipeline
==================================

sequence -> [spectral filter] -> [overflow policy] -> curve mapping -> grid

run(config, sequence) is a pure function of its arguments: no I/O, no shared
mutable state, every buffer is allocated per call. Independent calls can run
concurrently on separate threads.

Supported config shape
----------------------
We read pipeline settings from cfg["plot"] by convention.

plot:
  order: 8                  # curve order; omit or null -> smallest order that fits
  max_order: 12             # upper bound for the automatic order
  overflow_policy: reject   # reject | decimate | spectral_reduce | mean_pool
  fill_value: 0.0           # value for unfilled cells ("nan" accepted)
  spectral_filter:          # optional, see hilbertplot.spectral.filters
    kind: lowpass
    cutoff: 0.25
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Union

import numpy as np

from hilbertplot.curve.indexer import curve_length, order_for_length
from hilbertplot.mapping import overflow
from hilbertplot.mapping.mapper import HilbertGrid, map_to_grid
from hilbertplot.spectral.filters import FilterSpec, apply_filter, filter_spec_from_dict


logger = logging.getLogger("hilbertplot.pipeline")

SpectralFilter = Union[FilterSpec, Callable[[int], bool]]

DEFAULT_MAX_ORDER = 12


class PlotConfigError(ValueError):
    """Raised for invalid or inconsistent plot configuration."""


# -----------------------------------------------------------------------------
# Config container
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PlotConfig:
    """
    Pipeline settings.

    order:
      Curve order, or None to pick the smallest order whose 4^order cells
      hold the (filtered) sequence, capped by max_order.
    spectral_filter:
      None, a FilterSpec, or a raw predicate k -> bool over frequency index
      k in [0, N).
    overflow_policy:
      Name of a registered overflow policy.
    fill_value:
      Value for cells beyond the end of the sequence.
    """
    order: Optional[int] = None
    spectral_filter: Optional[SpectralFilter] = None
    overflow_policy: str = "reject"
    fill_value: float = 0.0
    max_order: int = DEFAULT_MAX_ORDER

    def __post_init__(self) -> None:
        if self.order is not None:
            if isinstance(self.order, bool) or not isinstance(self.order, (int, np.integer)) or self.order < 0:
                raise PlotConfigError(f"plot.order must be an integer >= 0 or None (got {self.order!r})")
        if isinstance(self.max_order, bool) or not isinstance(self.max_order, (int, np.integer)) or self.max_order < 0:
            raise PlotConfigError(f"plot.max_order must be an integer >= 0 (got {self.max_order!r})")
        if not overflow.is_registered(self.overflow_policy):
            raise PlotConfigError(
                f"plot.overflow_policy must be one of {overflow.list_policies()}, got: {self.overflow_policy!r}"
            )
        if self.spectral_filter is not None and not (
            isinstance(self.spectral_filter, FilterSpec) or callable(self.spectral_filter)
        ):
            raise PlotConfigError(
                f"plot.spectral_filter must be a FilterSpec or a callable, got {type(self.spectral_filter).__name__}"
            )

    def resolve_order(self, n_samples: int) -> int:
        """Curve order used for a sequence of n_samples values."""
        if self.order is not None:
            return int(self.order)
        return min(order_for_length(n_samples), int(self.max_order))


# -----------------------------------------------------------------------------
# Config parsing helpers
# -----------------------------------------------------------------------------

def _get_plot_cfg(cfg: Mapping[str, Any]) -> Mapping[str, Any]:
    if not isinstance(cfg, Mapping):
        raise TypeError("cfg must be a mapping.")
    plot_cfg = cfg.get("plot", {})
    if plot_cfg is None:
        return {}
    if not isinstance(plot_cfg, Mapping):
        raise TypeError("cfg['plot'] must be a mapping.")
    return plot_cfg


def _as_int(x: Any, name: str) -> int:
    if isinstance(x, bool):
        raise PlotConfigError(f"Invalid int for {name}: {x!r}")
    try:
        xi = int(x)
    except (TypeError, ValueError) as e:
        raise PlotConfigError(f"Invalid int for {name}: {x!r}") from e
    if xi != x and not isinstance(x, str):
        raise PlotConfigError(f"Invalid int for {name}: {x!r}")
    if xi < 0:
        raise PlotConfigError(f"{name} must be >= 0 (got {xi})")
    return xi


def _as_float(x: Any, name: str) -> float:
    try:
        return float(x)
    except (TypeError, ValueError) as e:
        raise PlotConfigError(f"Invalid float for {name}: {x!r}") from e


def config_from_dict(cfg: Mapping[str, Any]) -> PlotConfig:
    """
    Build a PlotConfig from a loaded YAML dict (reads cfg["plot"]).

    Missing keys take the PlotConfig defaults.
    """
    plot_cfg = _get_plot_cfg(cfg)
    kwargs: Dict[str, Any] = {}

    raw_order = plot_cfg.get("order", None)
    if raw_order is not None and str(raw_order).strip().lower() != "auto":
        kwargs["order"] = _as_int(raw_order, "plot.order")

    if plot_cfg.get("max_order", None) is not None:
        kwargs["max_order"] = _as_int(plot_cfg["max_order"], "plot.max_order")

    if plot_cfg.get("overflow_policy", None) is not None:
        kwargs["overflow_policy"] = str(plot_cfg["overflow_policy"]).strip().lower()

    if plot_cfg.get("fill_value", None) is not None:
        kwargs["fill_value"] = _as_float(plot_cfg["fill_value"], "plot.fill_value")

    raw_filter = plot_cfg.get("spectral_filter", None)
    if raw_filter:
        try:
            kwargs["spectral_filter"] = filter_spec_from_dict(raw_filter)
        except (TypeError, ValueError) as e:
            raise PlotConfigError(f"Invalid plot.spectral_filter: {e}") from e

    return PlotConfig(**kwargs)


# ============================================================
# RUN
# ============================================================

def _predicate_for(spectral_filter: SpectralFilter, n: int) -> Callable[[int], bool]:
    if isinstance(spectral_filter, FilterSpec):
        return spectral_filter.predicate(n)
    return spectral_filter


def run(config: PlotConfig, sequence) -> HilbertGrid:
    """
    Run the plot pipeline on one sequence.

    Steps
    -----
    1) validate the sequence (1D, numeric)
    2) apply config.spectral_filter over the full sequence, if any
    3) choose the curve order (config.order or automatic)
    4) map onto the curve; sequences longer than 4^order go through
       config.overflow_policy, shorter ones are padded with config.fill_value

    Returns
    -------
    HilbertGrid, owned by the caller.

    Raises
    ------
    InvalidLengthError     spectral filter requested on an empty sequence
    SequenceOverflowError  sequence too long under the 'reject' policy
    """
    seq = np.asarray(sequence)
    if seq.ndim != 1:
        raise ValueError(f"sequence must be one-dimensional, got shape {seq.shape}")

    n_in = int(seq.shape[0])
    logger.debug("pipeline input: n=%d dtype=%s", n_in, seq.dtype)

    if config.spectral_filter is not None:
        predicate = _predicate_for(config.spectral_filter, n_in)
        seq = apply_filter(seq, predicate)
        logger.debug("spectral filter applied: %r", config.spectral_filter)

    order = config.resolve_order(n_in)
    capacity = curve_length(order)
    if n_in > capacity:
        logger.debug(
            "sequence longer than curve (n=%d > %d); overflow policy '%s'",
            n_in, capacity, config.overflow_policy,
        )

    grid = map_to_grid(
        order,
        seq,
        overflow_policy=config.overflow_policy,
        fill_value=config.fill_value,
    )
    logger.debug("mapped onto order-%d grid (%dx%d, %d samples)", order, grid.side, grid.side, grid.n_samples)
    return grid

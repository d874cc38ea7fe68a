"""
hilbertplot.mapping.mapper
==========================

Project a 1D sequence onto the cells of a Hilbert curve and back.

Grid layout
-----------
Every grid is a dense (2^n, 2^n) array indexed values[y, x] (row = y,
column = x), so sample i lands at

    values[y_i, x_i] = sequence[i],   (x_i, y_i) = index_to_coord(order, i)

Length policy
-------------
L == 4^n : direct placement
L <  4^n : samples fill curve positions 0..L-1, the rest hold fill_value
           (0.0 by default; pass float("nan") for an explicit "unset" marker)
L >  4^n : reduced to 4^n samples by the named overflow policy
           (see hilbertplot.mapping.overflow; default 'reject' raises)

The grid dtype follows the input: complex input gives a complex grid,
everything else is stored as float64.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from hilbertplot.curve.curve import HilbertCurve
from hilbertplot.curve.indexer import (
    coord_to_index,
    curve_length,
    curve_side,
    indices_to_coords,
)
from hilbertplot.mapping.overflow import resolve_overflow


# -----------------------------------------------------------------------------
# Public grid container
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HilbertGrid:
    """
    Dense grid produced by map_to_grid().

    Fields
    ------
    values:     (2^n, 2^n) array, values[y, x]
    order:      curve order n
    n_samples:  number of curve positions (from index 0) that carry input
                samples; positions >= n_samples hold fill_value
    fill_value: value of the unfilled cells
    """
    values: np.ndarray
    order: int
    n_samples: int
    fill_value: Union[float, complex] = 0.0

    @property
    def side(self) -> int:
        return int(self.values.shape[0])

    @property
    def shape(self) -> tuple:
        return tuple(self.values.shape)

    @property
    def capacity(self) -> int:
        return curve_length(self.order)

    def value_at(self, x: int, y: int):
        """Value stored in cell (x, y)."""
        self.index_at(x, y)
        return self.values[y, x]

    def index_at(self, x: int, y: int) -> int:
        """Curve index of cell (x, y); raises DomainError outside the grid."""
        return coord_to_index(self.order, (x, y))

    def is_filled(self, x: int, y: int) -> bool:
        """True if cell (x, y) carries an input sample rather than fill_value."""
        return self.index_at(x, y) < self.n_samples

    def to_sequence(self) -> np.ndarray:
        """Samples in curve order (the first n_samples positions)."""
        return map_from_grid(self.order, self)


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _as_samples(sequence) -> np.ndarray:
    arr = np.asarray(sequence)
    if arr.ndim != 1:
        raise ValueError(f"sequence must be one-dimensional, got shape {arr.shape}")
    if np.iscomplexobj(arr):
        return arr.astype(np.complex128)
    if arr.size and not (np.issubdtype(arr.dtype, np.number) or arr.dtype == bool):
        raise TypeError(f"sequence must be numeric, got dtype {arr.dtype}")
    return arr.astype(np.float64)


def index_map(order: int) -> np.ndarray:
    """(2^n, 2^n) int64 array with the curve index of every cell, [y, x] layout."""
    return np.array(HilbertCurve.build(order).index_grid)


# ============================================================
# MAPPING
# ============================================================

def map_to_grid(
    order: int,
    sequence,
    *,
    overflow_policy: str = "reject",
    fill_value: Union[float, complex] = 0.0,
) -> HilbertGrid:
    """
    Place a sequence on the cells of an order-n Hilbert curve.

    Parameters
    ----------
    order : int
      Curve order n >= 0.
    sequence : array_like, shape (L,)
      Real or complex samples. L may be 0.
    overflow_policy : str
      Registered overflow policy applied when L > 4^n.
    fill_value : float or complex
      Value for cells beyond the end of the sequence.

    Returns
    -------
    HilbertGrid

    Raises
    ------
    DomainError            bad order
    SequenceOverflowError  L > 4^n under the 'reject' policy
    PolicyNotRegistered    unknown overflow policy
    """
    capacity = curve_length(order)
    side = curve_side(order)
    seq = _as_samples(sequence)

    if seq.shape[0] > capacity:
        seq = _as_samples(resolve_overflow(overflow_policy, seq, capacity))

    L = int(seq.shape[0])
    dtype = np.result_type(seq.dtype, np.asarray(fill_value).dtype)
    values = np.full((side, side), fill_value, dtype=dtype)
    if L:
        xs, ys = indices_to_coords(order, np.arange(L, dtype=np.int64))
        values[ys, xs] = seq

    return HilbertGrid(values=values, order=int(order), n_samples=L, fill_value=fill_value)


def map_from_grid(
    order: int,
    grid: Union[HilbertGrid, np.ndarray],
    n_samples: Optional[int] = None,
) -> np.ndarray:
    """
    Read a grid back into curve order.

    Parameters
    ----------
    order : int
    grid : HilbertGrid or array of shape (2^n, 2^n)
    n_samples : int or None
      How many curve positions to read. Defaults to grid.n_samples for a
      HilbertGrid and 4^n for a bare array.

    Returns
    -------
    np.ndarray, shape (n_samples,)
      sequence[i] = values[y_i, x_i]
    """
    capacity = curve_length(order)
    side = curve_side(order)

    if isinstance(grid, HilbertGrid):
        if grid.order != int(order):
            raise ValueError(f"Grid has order {grid.order}, expected {order}")
        values = grid.values
        default_n = grid.n_samples
    else:
        values = np.asarray(grid)
        default_n = capacity

    if values.shape != (side, side):
        raise ValueError(f"Grid shape {values.shape} does not match order {order} ({side}x{side})")

    n = default_n if n_samples is None else int(n_samples)
    if not 0 <= n <= capacity:
        raise ValueError(f"n_samples must be in [0, {capacity}] (got {n})")

    xs, ys = indices_to_coords(order, np.arange(n, dtype=np.int64))
    return values[ys, xs].copy()


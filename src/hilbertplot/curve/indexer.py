"""
hilbertplot.curve.indexer
=========================

Bijection between a Hilbert curve index and a grid coordinate.

A curve of order n covers a 2^n x 2^n grid; the curve index runs over
[0, 4^n). Both directions are exact integer bit manipulation, processed as an
explicit loop over bit pairs (no recursion), so any order works with plain
Python ints.

Orientation
-----------
The curve starts at (0, 0) and ends at (2^n - 1, 0). For order 1:

    index : 0      1      2      3
    (x,y) : (0,0)  (0,1)  (1,1)  (1,0)

For order 2 the first quadrant is transposed, so the walk begins along x:

    (0,0) (1,0) (1,1) (0,1) (0,2) (0,3) (1,3) (1,2)
    (2,2) (2,3) (3,3) (3,2) (3,1) (2,1) (2,0) (3,0)

Conventions
-----------
• Coordinates are (x, y) tuples, x = column, y = row.
• Scalar functions accept Python ints (and numpy integers). Floats and bools
  are rejected rather than truncated.
• Vectorised helpers work on int64 arrays and therefore stop at order 31.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from hilbertplot.errors import DomainError


Coord = Tuple[int, int]

# int64 arrays hold indices up to 4^31 - 1
MAX_ARRAY_ORDER = 31


# ============================================================
# VALIDATION
# ============================================================

def _as_index_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise DomainError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _check_order(order) -> int:
    n = _as_index_int(order, "order")
    if n < 0:
        raise DomainError(f"Curve order must be >= 0 (got {n})")
    return n


def curve_side(order: int) -> int:
    """Grid side length 2^order."""
    return 1 << _check_order(order)


def curve_length(order: int) -> int:
    """Number of cells (and curve positions) 4^order."""
    return 1 << (2 * _check_order(order))


def order_for_length(n_samples: int) -> int:
    """
    Smallest curve order whose 4^order cells hold n_samples values.

    order_for_length(0) == order_for_length(1) == 0
    order_for_length(16) == 2, order_for_length(17) == 3
    """
    n = _as_index_int(n_samples, "n_samples")
    if n < 0:
        raise DomainError(f"n_samples must be >= 0 (got {n})")
    if n <= 1:
        return 0
    # ceil(log4(n)) from the bit length of n-1
    return int(math.ceil((n - 1).bit_length() / 2))


# ============================================================
# SCALAR CONVERSION
# ============================================================

def index_to_coord(order: int, index: int) -> Coord:
    """
    Map a curve index to its (x, y) grid coordinate.

    Raises
    ------
    DomainError
      If order < 0 or index is outside [0, 4^order).
    """
    n = _check_order(order)
    d = _as_index_int(index, "index")
    if not 0 <= d < (1 << (2 * n)):
        raise DomainError(f"Index {d} outside [0, {1 << (2 * n)}) for order {n}")

    side = 1 << n
    x = y = 0
    s = 1
    t = d
    while s < side:
        rx = 1 & (t >> 1)
        ry = 1 & (t ^ rx)
        if ry == 0:
            if rx == 1:
                x = s - 1 - x
                y = s - 1 - y
            x, y = y, x
        x += s * rx
        y += s * ry
        t >>= 2
        s <<= 1
    return x, y


def coord_to_index(order: int, coord: Coord) -> int:
    """
    Map an (x, y) grid coordinate to its curve index.

    Raises
    ------
    DomainError
      If order < 0 or x/y are outside [0, 2^order).
    """
    n = _check_order(order)
    try:
        x_raw, y_raw = coord
    except (TypeError, ValueError) as e:
        raise DomainError(f"Coordinate must be an (x, y) pair, got {coord!r}") from e
    x = _as_index_int(x_raw, "x")
    y = _as_index_int(y_raw, "y")

    side = 1 << n
    if not (0 <= x < side and 0 <= y < side):
        raise DomainError(f"Coordinate ({x}, {y}) outside [0, {side}) for order {n}")

    d = 0
    s = side >> 1
    while s > 0:
        rx = 1 if x & s else 0
        ry = 1 if y & s else 0
        d += s * s * ((3 * rx) ^ ry)
        if ry == 0:
            if rx == 1:
                x = side - 1 - x
                y = side - 1 - y
            x, y = y, x
        s >>= 1
    return d


# ============================================================
# VECTORISED CONVERSION
# ============================================================

def _check_array_order(order) -> int:
    n = _check_order(order)
    if n > MAX_ARRAY_ORDER:
        raise DomainError(f"Array conversion supports order <= {MAX_ARRAY_ORDER} (got {n})")
    return n


def indices_to_coords(order: int, indices) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorised index_to_coord.

    Parameters
    ----------
    order : int
    indices : array_like of int
      Any shape; every entry must lie in [0, 4^order).

    Returns
    -------
    xs, ys : np.ndarray (int64)
      Same shape as indices.
    """
    n = _check_array_order(order)
    t = np.asarray(indices)
    if t.size and not np.issubdtype(t.dtype, np.integer):
        raise DomainError(f"indices must be integers, got dtype {t.dtype}")
    t = t.astype(np.int64, copy=True)
    if t.size and (t.min() < 0 or t.max() >= (1 << (2 * n))):
        raise DomainError(f"indices outside [0, {1 << (2 * n)}) for order {n}")

    x = np.zeros_like(t)
    y = np.zeros_like(t)
    s = 1
    side = 1 << n
    while s < side:
        rx = 1 & (t >> 1)
        ry = 1 & (t ^ rx)
        flip = (ry == 0) & (rx == 1)
        x = np.where(flip, s - 1 - x, x)
        y = np.where(flip, s - 1 - y, y)
        swap = ry == 0
        x, y = np.where(swap, y, x), np.where(swap, x, y)
        x = x + s * rx
        y = y + s * ry
        t = t >> 2
        s <<= 1
    return x, y


def coords_to_indices(order: int, xs, ys) -> np.ndarray:
    """
    Vectorised coord_to_index.

    xs and ys must broadcast to a common shape; every entry must lie in
    [0, 2^order).
    """
    n = _check_array_order(order)
    x = np.asarray(xs)
    y = np.asarray(ys)
    for name, arr in (("xs", x), ("ys", y)):
        if arr.size and not np.issubdtype(arr.dtype, np.integer):
            raise DomainError(f"{name} must be integers, got dtype {arr.dtype}")
    x, y = np.broadcast_arrays(x.astype(np.int64), y.astype(np.int64))
    x = x.copy()
    y = y.copy()

    side = 1 << n
    if x.size and (x.min() < 0 or x.max() >= side or y.min() < 0 or y.max() >= side):
        raise DomainError(f"coordinates outside [0, {side}) for order {n}")

    d = np.zeros_like(x)
    s = side >> 1
    while s > 0:
        rx = ((x & s) > 0).astype(np.int64)
        ry = ((y & s) > 0).astype(np.int64)
        d += s * s * ((3 * rx) ^ ry)
        flip = (ry == 0) & (rx == 1)
        x = np.where(flip, side - 1 - x, x)
        y = np.where(flip, side - 1 - y, y)
        swap = ry == 0
        x, y = np.where(swap, y, x), np.where(swap, x, y)
        s >>= 1
    return d

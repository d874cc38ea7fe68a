"""
hilbertplot.data.sequence
=========================

Helpers for the linear data vectors fed into a Hilbert plot.

Everything here takes array_like input and returns new arrays; inputs are
never modified in place.

Contents
--------
• as_sequence        : validate/convert to a 1D float or complex array
• granularity        : block averaging (coarse-grain) with an untouched tail
• shannon_entropy    : normalised histogram entropy in [0, 1]
• summary            : n/min/max/mean/std in one pass-friendly container
• normalize          : rescale to [0, 1]
• hamming_similarity / manhattan_distance : element-wise comparisons
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


ENTROPY_LEVELS = 65535


# ============================================================
# CONVERSION
# ============================================================

def as_sequence(data) -> np.ndarray:
    """
    Return data as a 1D float64 (or complex128) array.

    Raises ValueError for anything that is not one-dimensional, TypeError for
    non-numeric input.
    """
    arr = np.asarray(data)
    if arr.ndim != 1:
        raise ValueError(f"Data sequence must be one-dimensional, got shape {arr.shape}")
    if np.iscomplexobj(arr):
        return arr.astype(np.complex128)
    if arr.size and not (np.issubdtype(arr.dtype, np.number) or arr.dtype == bool):
        raise TypeError(f"Data sequence must be numeric, got dtype {arr.dtype}")
    return arr.astype(np.float64)


# ============================================================
# TRANSFORMS
# ============================================================

def granularity(data, n: int) -> np.ndarray:
    """
    Replace consecutive blocks of n samples by their mean.

    The output has the same length as the input. Samples after the last full
    block are copied unchanged.

    Example
    -------
    >>> granularity([1, 3, 5, 7, 9], 2)
    array([2., 2., 6., 6., 9.])
    """
    x = as_sequence(data)
    n = int(n)
    if x.shape[0] == 0:
        raise ValueError("Data sequence is empty.")
    if n <= 0 or n > x.shape[0] // 2:
        raise ValueError(f"Granularity must be in [1, {x.shape[0] // 2}] (got {n})")

    n_full = (x.shape[0] // n) * n
    out = x.copy()
    blocks = x[:n_full].reshape(-1, n).mean(axis=1)
    out[:n_full] = np.repeat(blocks, n)
    return out


def normalize(data) -> np.ndarray:
    """Rescale real data to [0, 1]. Constant (or empty) data maps to zeros."""
    x = as_sequence(data)
    if np.iscomplexobj(x):
        raise TypeError("normalize() expects real data")
    if x.shape[0] == 0:
        return x
    lo = float(np.min(x))
    hi = float(np.max(x))
    if hi == lo:
        return np.zeros_like(x)
    return (x - lo) / (hi - lo)


# ============================================================
# STATISTICS
# ============================================================

@dataclass(frozen=True)
class SequenceSummary:
    n: int
    min: float
    max: float
    mean: float
    std: float


def summary(data) -> SequenceSummary:
    """
    Basic statistics of real data.

    std is the sample standard deviation (ddof=1); 0.0 when n < 2.
    Empty input raises ValueError.
    """
    x = as_sequence(data)
    if np.iscomplexobj(x):
        raise TypeError("summary() expects real data")
    if x.shape[0] == 0:
        raise ValueError("Data sequence is empty.")
    std = float(np.std(x, ddof=1)) if x.shape[0] >= 2 else 0.0
    return SequenceSummary(
        n=int(x.shape[0]),
        min=float(np.min(x)),
        max=float(np.max(x)),
        mean=float(np.mean(x)),
        std=std,
    )


def shannon_entropy(data, levels: int = ENTROPY_LEVELS) -> float:
    """
    Normalised Shannon entropy of real data.

    Values are quantised into `levels` equal-width bins between min and max;
    the entropy of the bin histogram is divided by log(number of occupied
    bins), so the result lies in [0, 1]. Constant data gives 0.0.
    """
    x = as_sequence(data)
    if np.iscomplexobj(x):
        raise TypeError("shannon_entropy() expects real data")
    if x.shape[0] == 0:
        raise ValueError("Data sequence is empty.")
    levels = int(levels)
    if levels < 1:
        raise ValueError(f"levels must be >= 1 (got {levels})")

    lo = float(np.min(x))
    hi = float(np.max(x))
    if hi == lo:
        return 0.0

    bins = np.floor((x - lo) * (levels / (hi - lo))).astype(np.int64)
    counts = np.bincount(bins, minlength=levels + 1)
    counts = counts[counts > 0]
    if counts.shape[0] < 2:
        return 0.0

    p = counts / float(x.shape[0])
    h = -float(np.sum(p * np.log(p)))
    return h / float(np.log(counts.shape[0]))


# ============================================================
# COMPARISONS
# ============================================================

def _aligned(a, b):
    x = as_sequence(a)
    y = as_sequence(b)
    n = min(x.shape[0], y.shape[0])
    return x, y, n


def hamming_similarity(a, b) -> np.ndarray:
    """
    1.0 where a[i] == b[i], else 0.0; length of a.

    Positions beyond the end of b count as mismatches.
    """
    x, y, n = _aligned(a, b)
    out = np.zeros(x.shape[0], dtype=float)
    out[:n] = (x[:n] == y[:n]).astype(float)
    return out


def manhattan_distance(a, b) -> np.ndarray:
    """
    |a[i] - b[i]| element-wise; length of a.

    Positions beyond the end of b are 0.0.
    """
    x, y, n = _aligned(a, b)
    out = np.zeros(x.shape[0], dtype=float)
    out[:n] = np.abs(x[:n] - y[:n])
    return out

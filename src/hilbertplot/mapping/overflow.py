"""
hilbertplot.mapping.overflow
============================

Registry of *overflow policies*: what to do when a sequence holds more
samples than the curve has cells (L > C = 4^order).

Usage
-----
    from hilbertplot.mapping.overflow import resolve_overflow
    reduced = resolve_overflow("decimate", seq, capacity=4**order)

To add a policy:
  • implement fn(sequence, capacity) -> np.ndarray of length capacity
  • register it via @register_overflow_policy("my_policy")

Built-in policies
-----------------
reject          raise SequenceOverflowError (the default in PlotConfig)
decimate        keep samples at floor(i * L / C), i = 0..C-1
spectral_reduce Fourier resampling: keep the C lowest-|frequency| bins of the
                length-L spectrum, inverse at length C, scale by C / L. For
                even C the output Nyquist bin is X[C/2] + X[L - C/2]
mean_pool       mean of the samples in [floor(i*L/C), floor((i+1)*L/C))

Policies are only consulted when L > C; shorter sequences are padded by the
mapper instead.
"""

from __future__ import annotations

from typing import Callable, Dict

import numpy as np

from hilbertplot.errors import SequenceOverflowError
from hilbertplot.spectral import transform


PolicyFn = Callable[[np.ndarray, int], np.ndarray]


# -----------------------------------------------------------------------------
# Registry storage
# -----------------------------------------------------------------------------

_REGISTRY: Dict[str, PolicyFn] = {}


class PolicyNotRegistered(KeyError):
    """Raised when resolve_overflow() is called for a name that is not registered."""


def register_overflow_policy(name: str) -> Callable[[PolicyFn], PolicyFn]:
    """
    Decorator to register an overflow policy under a given name.

    Example
    -------
    @register_overflow_policy("first_block")
    def first_block(seq, capacity):
        return seq[:capacity]
    """
    if not isinstance(name, str) or not name.strip():
        raise ValueError("Policy name must be a non-empty string.")
    key = name.strip().lower()

    def _decorator(fn: PolicyFn) -> PolicyFn:
        if key in _REGISTRY:
            raise KeyError(f"Overflow policy '{key}' already registered.")
        _REGISTRY[key] = fn
        return fn

    return _decorator


def is_registered(name: str) -> bool:
    """Return True if a policy name is registered."""
    return str(name).strip().lower() in _REGISTRY


def list_policies() -> list[str]:
    """List all registered policy names (sorted)."""
    return sorted(_REGISTRY.keys())


def resolve_overflow(name: str, sequence: np.ndarray, capacity: int) -> np.ndarray:
    """
    Reduce sequence to exactly `capacity` samples using the named policy.

    Sequences that already fit are returned unchanged.

    Raises
    ------
    PolicyNotRegistered
      If the policy name is unknown.
    SequenceOverflowError
      From the 'reject' policy.
    """
    key = str(name).strip().lower()
    fn = _REGISTRY.get(key)
    if fn is None:
        raise PolicyNotRegistered(f"Overflow policy '{key}' not registered. Registered: {list_policies()}")

    seq = np.asarray(sequence)
    if seq.shape[0] <= capacity:
        return seq

    out = np.asarray(fn(seq, int(capacity)))
    if out.shape != (capacity,):
        raise RuntimeError(
            f"Overflow policy '{key}' returned shape {out.shape}, expected ({capacity},)"
        )
    return out


# ============================================================
# BUILT-IN POLICIES
# ============================================================

@register_overflow_policy("reject")
def _reject(seq: np.ndarray, capacity: int) -> np.ndarray:
    raise SequenceOverflowError(
        f"Sequence of length {seq.shape[0]} exceeds curve capacity {capacity} "
        "(overflow policy 'reject')"
    )


@register_overflow_policy("decimate")
def _decimate(seq: np.ndarray, capacity: int) -> np.ndarray:
    L = seq.shape[0]
    idx = (np.arange(capacity, dtype=np.int64) * L) // capacity
    return seq[idx]


@register_overflow_policy("mean_pool")
def _mean_pool(seq: np.ndarray, capacity: int) -> np.ndarray:
    L = seq.shape[0]
    edges = (np.arange(capacity + 1, dtype=np.int64) * L) // capacity
    # L > capacity, so every block holds at least one sample
    sums = np.add.reduceat(seq, edges[:-1])
    return sums / np.diff(edges)


@register_overflow_policy("spectral_reduce")
def _spectral_reduce(seq: np.ndarray, capacity: int) -> np.ndarray:
    L = seq.shape[0]
    X = transform.forward(seq)

    # DC + positive bins first, negative bins at the end, as in forward()
    n_pos = (capacity + 1) // 2
    n_neg = capacity - n_pos
    Y = np.zeros(capacity, dtype=np.complex128)
    Y[:n_pos] = X[:n_pos]
    if n_neg:
        Y[capacity - n_neg:] = X[L - n_neg:]
    if capacity % 2 == 0:
        # both halves of the input fold onto the single output Nyquist bin
        Y[capacity // 2] += X[capacity // 2]

    y = transform.inverse(Y) * (capacity / L)
    if np.iscomplexobj(seq):
        return y
    return np.ascontiguousarray(y.real)

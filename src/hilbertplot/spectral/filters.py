"""
hilbertplot.spectral.filters
============================

Frequency predicates for transform.filter() and their YAML form.

Predicates act on the *signed* bin of coefficient k,

    signed_bin(k, N) = k        for k <= N // 2
                     = k - N    otherwise

and compare its absolute value, so the positive and negative halves of the
spectrum are treated alike and filtered real input stays real.

Supported config shapes
-----------------------
plot:
  spectral_filter:
    kind: lowpass        # keep |bin| <= cutoff
    cutoff: 32

  spectral_filter:
    kind: highpass       # keep |bin| >= cutoff
    cutoff: 4

  spectral_filter:
    kind: bandpass       # keep low <= |bin| <= high
    low: 4
    high: 64

A cutoff in (0, 1) is read as a fraction of the Nyquist bin N // 2.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import numpy as np

from hilbertplot.spectral import transform
from hilbertplot.spectral.transform import FrequencyPredicate


FILTER_KINDS = ("lowpass", "highpass", "bandpass")


# -----------------------------------------------------------------------------
# Predicate factories
# -----------------------------------------------------------------------------

def signed_bin(k: int, n: int) -> int:
    """Signed frequency bin of coefficient k in a length-n spectrum."""
    return k if k <= n // 2 else k - n


def _resolve_bin(value: float, n: int) -> float:
    value = float(value)
    if 0.0 < value < 1.0:
        return value * (n // 2)
    return value


def lowpass(n: int, cutoff: float) -> FrequencyPredicate:
    """Keep bins with |signed bin| <= cutoff."""
    c = _resolve_bin(cutoff, n)

    def _pred(k: int) -> bool:
        return abs(signed_bin(k, n)) <= c

    return _pred


def highpass(n: int, cutoff: float) -> FrequencyPredicate:
    """Keep bins with |signed bin| >= cutoff."""
    c = _resolve_bin(cutoff, n)

    def _pred(k: int) -> bool:
        return abs(signed_bin(k, n)) >= c

    return _pred


def bandpass(n: int, low: float, high: float) -> FrequencyPredicate:
    """Keep bins with low <= |signed bin| <= high."""
    lo = _resolve_bin(low, n)
    hi = _resolve_bin(high, n)
    if hi < lo:
        raise ValueError(f"bandpass needs low <= high (got low={low}, high={high})")

    def _pred(k: int) -> bool:
        return lo <= abs(signed_bin(k, n)) <= hi

    return _pred


# -----------------------------------------------------------------------------
# Config form
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FilterSpec:
    """
    Length-independent description of a frequency filter.

    The predicate depends on the transform length, which is only known once
    the input sequence arrives; predicate(n) builds it.
    """
    kind: str
    cutoff: Optional[float] = None
    low: Optional[float] = None
    high: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind not in FILTER_KINDS:
            raise ValueError(f"Unsupported filter kind: {self.kind!r}. Supported: {FILTER_KINDS}")
        if self.kind in ("lowpass", "highpass") and self.cutoff is None:
            raise ValueError(f"{self.kind} filter needs 'cutoff'")
        if self.kind == "bandpass" and (self.low is None or self.high is None):
            raise ValueError("bandpass filter needs 'low' and 'high'")
        for name in ("cutoff", "low", "high"):
            v = getattr(self, name)
            if v is not None and (not np.isfinite(v) or v < 0):
                raise ValueError(f"filter {name} must be a finite value >= 0 (got {v})")

    def predicate(self, n: int) -> FrequencyPredicate:
        if self.kind == "lowpass":
            return lowpass(n, self.cutoff)
        if self.kind == "highpass":
            return highpass(n, self.cutoff)
        return bandpass(n, self.low, self.high)


def filter_spec_from_dict(cfg: Mapping[str, Any]) -> FilterSpec:
    """
    Build a FilterSpec from a config mapping (see module docstring).

    Raises ValueError for unknown kinds or missing/invalid numbers.
    """
    if not isinstance(cfg, Mapping):
        raise TypeError(f"spectral_filter must be a mapping, got {type(cfg).__name__}")
    kind = str(cfg.get("kind", "")).strip().lower()

    values: Dict[str, Optional[float]] = {}
    for key in ("cutoff", "low", "high"):
        raw = cfg.get(key, None)
        if raw is None:
            values[key] = None
            continue
        try:
            values[key] = float(raw)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid float for spectral_filter.{key}: {raw!r}") from e

    return FilterSpec(kind=kind, **values)


# -----------------------------------------------------------------------------
# One-shot helper
# -----------------------------------------------------------------------------

def apply_filter(sequence, predicate: FrequencyPredicate) -> np.ndarray:
    """
    forward -> filter -> inverse.

    Real input gives real output (the imaginary residue is dropped); complex
    input stays complex.
    """
    x = np.asarray(sequence)
    X = transform.filter(transform.forward(x), predicate)
    return transform.inverse(X, real=not np.iscomplexobj(x))

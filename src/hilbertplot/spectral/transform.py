"""
hilbertplot.spectral.transform
==============================

Thin wrapper around scipy.fft with one pinned normalisation convention.

Convention
----------
• forward:  X[k] = sum_j x[j] exp(-2πi jk/N)          (no scaling)
• inverse:  x[j] = (1/N) sum_k X[k] exp(+2πi jk/N)
• coefficient k corresponds to frequency k * fs / N, k in [0, N)

norm="backward" is passed explicitly on every call, so a change of library
default cannot silently change the scaling.

Length policy
-------------
scipy.fft handles every length N >= 1 (mixed radix + Bluestein), so input is
never padded or truncated. Only empty or non-1D input is rejected with
InvalidLengthError.

Every call allocates its own output buffer; inputs are never modified.
"""

from __future__ import annotations

from typing import Callable

import numpy as np
import scipy.fft

from hilbertplot.errors import InvalidLengthError


FrequencyPredicate = Callable[[int], bool]

NORM = "backward"


# ============================================================
# VALIDATION
# ============================================================

def _as_1d(sequence, name: str) -> np.ndarray:
    arr = np.asarray(sequence)
    if arr.ndim != 1:
        raise InvalidLengthError(f"{name} must be one-dimensional, got shape {arr.shape}")
    if arr.shape[0] == 0:
        raise InvalidLengthError(f"{name} must not be empty")
    if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == bool):
        raise TypeError(f"{name} must be numeric, got dtype {arr.dtype}")
    return arr


# ============================================================
# FORWARD / INVERSE
# ============================================================

def forward(sequence) -> np.ndarray:
    """
    Unnormalised forward DFT.

    Parameters
    ----------
    sequence : array_like, shape (N,)
      Real or complex samples, N >= 1.

    Returns
    -------
    spectrum : np.ndarray, complex128, shape (N,)
    """
    x = _as_1d(sequence, "sequence")
    return scipy.fft.fft(x.astype(np.complex128), norm=NORM)


def inverse(spectrum, *, real: bool = False) -> np.ndarray:
    """
    Inverse DFT including the 1/N factor, so inverse(forward(x)) == x.

    Parameters
    ----------
    spectrum : array_like, shape (N,)
    real : bool
      Return only the real part. Use for spectra of real input (or spectra
      filtered with a symmetric predicate) where the imaginary part is
      rounding noise.
    """
    X = _as_1d(spectrum, "spectrum")
    x = scipy.fft.ifft(X.astype(np.complex128), norm=NORM)
    if real:
        return np.ascontiguousarray(x.real)
    return x


def frequencies(n: int, sample_rate: float = 1.0) -> np.ndarray:
    """
    Frequency axis k * fs / N for k in [0, N), in forward() coefficient order.

    Note: unlike scipy.fft.fftfreq this does not wrap the upper half to
    negative values.
    """
    n = int(n)
    if n <= 0:
        raise InvalidLengthError(f"Transform length must be >= 1 (got {n})")
    return np.arange(n, dtype=float) * float(sample_rate) / n


def filter(spectrum, predicate: FrequencyPredicate) -> np.ndarray:
    """
    Zero every coefficient k for which predicate(k) is false.

    predicate is called once per frequency index k in [0, N) with a Python
    int. Returns a new buffer; the input spectrum is left untouched.
    """
    X = _as_1d(spectrum, "spectrum")
    keep = np.fromiter((bool(predicate(k)) for k in range(X.shape[0])), dtype=bool, count=X.shape[0])
    out = X.astype(np.complex128, copy=True)
    out[~keep] = 0.0
    return out


# ============================================================
# POWER SPECTRA
# ============================================================

def power_spectrum(sequence, *, log: bool = False) -> np.ndarray:
    """
    Centred, mirrored power spectrum of a real sequence, length N.

    Layout (h = N // 2):

        out[h]     = |X_0|^2
        out[h - i] = |X_i|^2       for i = 1..h
        out[h + i] = |X_i|^2       for i = 1..N-1-h

    DC sits at index h. For odd N the result is symmetric about h; for even
    N the Nyquist power |X_h|^2 appears once, at out[0].

    With log=True positive entries are replaced by log(sqrt(p)) = log|X|;
    zero entries stay 0.
    """
    x = _as_1d(sequence, "sequence")
    n = x.shape[0]
    X = scipy.fft.rfft(np.asarray(x, dtype=float), norm=NORM)
    h = n // 2
    p = (X.real ** 2 + X.imag ** 2)[: h + 1]

    out = np.zeros(n, dtype=float)
    out[h] = p[0]
    if h:
        out[:h] = p[1:][::-1]
        out[h + 1:] = p[1:n - h]

    if log:
        pos = out > 0
        out[pos] = np.log(np.sqrt(out[pos]))
    return out


def grid_power_spectrum(values, *, log: bool = False) -> np.ndarray:
    """
    Centred 2D power spectrum |fft2(values)|^2 with DC moved to the centre.

    log=True returns log1p(p), which keeps the zero floor at zero.
    """
    arr = np.asarray(values)
    if arr.ndim != 2 or arr.size == 0:
        raise InvalidLengthError(f"values must be a non-empty 2D array, got shape {arr.shape}")
    X = scipy.fft.fft2(arr.astype(np.complex128), norm=NORM)
    p = scipy.fft.fftshift(X.real ** 2 + X.imag ** 2)
    if log:
        return np.log1p(p)
    return p

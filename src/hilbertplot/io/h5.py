"""
h5.py
=====

Read data sequences out of HDF5 files.

Typical input: an acquisition file holding one or more numeric channels,

    run.h5
      /signals/ch0    float64 (N,)
      /signals/ch1    float64 (N,)
      /image          uint8   (H, W)

h5_read_sequence(path, "/signals/ch0") returns ch0 as a 1D array; 2D
datasets such as /image need flatten=True.

Files are only ever opened read-only: hilbertplot does not write HDF5.
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import List, Union

import numpy as np
import h5py


PathLike = Union[str, Path]


# ============================================================
# HELPERS
# ============================================================

def _normalize_h5_path(path: str) -> str:
    """'signals//ch0' -> '/signals/ch0'. Backslashes count as separators."""
    if not path:
        raise ValueError("Empty HDF5 path is not allowed.")
    p = "/" + str(path).replace("\\", "/").lstrip("/")
    return posixpath.normpath(p)


def open_h5(path: PathLike, mode: str = "r") -> h5py.File:
    """h5py.File(path, "r"). Any other mode is refused with ValueError."""
    if mode != "r":
        raise ValueError(f"HDF5 input is opened read-only; mode must be 'r' (got {mode!r})")
    return h5py.File(Path(path).expanduser().resolve(), "r")


# ============================================================
# READERS
# ============================================================

def h5_list_datasets(h5: h5py.File) -> List[str]:
    """Absolute paths of all datasets below the root group, sorted."""
    names: List[str] = []

    def _collect(name, obj):
        if isinstance(obj, h5py.Dataset):
            names.append("/" + name)

    h5.visititems(_collect)
    return sorted(names)


def h5_read_array(h5: h5py.File, path: str) -> np.ndarray:
    """
    Load the dataset at `path` into memory.

    Raises
    ------
    KeyError
      Nothing at `path`, or `path` is a group.
    TypeError
      The dataset holds strings, compound records or other non-numeric data.
    """
    key = _normalize_h5_path(path)
    obj = h5.get(key)
    if obj is None:
        raise KeyError(f"Dataset not found: {key}. Available: {h5_list_datasets(h5)}")
    if not isinstance(obj, h5py.Dataset):
        raise KeyError(f"{key} is a group, not a dataset")

    arr = np.asarray(obj[()])
    if not (np.issubdtype(arr.dtype, np.number) or arr.dtype == bool):
        raise TypeError(f"Dataset {key} is not numeric (dtype={arr.dtype})")
    return arr


def h5_read_sequence(path: PathLike, dataset: str, *, flatten: bool = False) -> np.ndarray:
    """
    Read one dataset from the file at `path` as a 1D sequence.

    Scalars become length-1 sequences. Datasets with more than one axis raise
    ValueError unless flatten=True, which reads them in row-major order.
    """
    with open_h5(path) as h5:
        arr = h5_read_array(h5, dataset)

    if arr.ndim <= 1:
        return arr.reshape(-1)
    if not flatten:
        raise ValueError(f"Dataset {dataset} has shape {arr.shape}; pass flatten=True to read it as 1D")
    return arr.ravel(order="C")

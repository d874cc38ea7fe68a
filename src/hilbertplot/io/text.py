"""
hilbertplot.io.text
===================

Readers that turn files into 1D data sequences.

• load_plain_text : every number found in a text file, in order. Anything that
                    is not part of a number (commas, labels, units, newlines)
                    acts as a separator.
• load_bytes      : raw bytes of any file as values 0..255 (the classic
                    "binary visualisation" input).
• load_sequence   : dispatch on file suffix (.h5/.hdf5 -> HDF5, .txt/.csv/.dat
                    -> text, anything else -> bytes).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

import numpy as np


PathLike = Union[str, Path]

TEXT_SUFFIXES = (".txt", ".csv", ".dat", ".tsv")
H5_SUFFIXES = (".h5", ".hdf5")

_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def parse_numbers(text: str) -> np.ndarray:
    """
    Extract all numbers from text as float64.

    >>> parse_numbers("t=1, v=-2.5e1; 3")
    array([  1. , -25. ,   3. ])
    """
    return np.array([float(tok) for tok in _NUMBER_RE.findall(text)], dtype=float)


def load_plain_text(path: PathLike) -> np.ndarray:
    """Read a text file and return every number in it (see parse_numbers)."""
    path = Path(path).expanduser().resolve()
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_numbers(f.read())


def load_bytes(path: PathLike, *, offset: int = 0, count: Optional[int] = None) -> np.ndarray:
    """
    Read raw bytes as float64 values in [0, 255].

    offset / count select a window of the file (count=None reads to the end).
    """
    path = Path(path).expanduser().resolve()
    if offset < 0:
        raise ValueError(f"offset must be >= 0 (got {offset})")
    raw = np.fromfile(path, dtype=np.uint8, count=-1 if count is None else int(count), offset=int(offset))
    return raw.astype(float)


def load_sequence(path: PathLike, *, dataset: Optional[str] = None) -> np.ndarray:
    """
    Load a data sequence, picking the reader from the file suffix.

    HDF5 files need `dataset` (path of the array inside the file).
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix in H5_SUFFIXES:
        from hilbertplot.io.h5 import h5_read_sequence
        if not dataset:
            raise ValueError(f"HDF5 input {path} needs a dataset path")
        return h5_read_sequence(path, dataset)
    if suffix in TEXT_SUFFIXES:
        return load_plain_text(path)
    return load_bytes(path)

"""
plot_grid.py
============

Rendering helpers for Hilbert plot grids.

Plots provided (pure plotting; no file I/O):
- grid_to_image        : grid values -> [0, 1] intensity matrix (+ optional
                         highlight of curve seams)
- plot_hilbert_grid    : heatmap of a HilbertGrid
- plot_grid_spectrum   : heatmap of the centred 2D power spectrum of a grid

Conventions
-----------
- grids are (2^n, 2^n) arrays indexed [y, x]
- imshow(origin="lower") so cell (0, 0), the start of the curve, sits at the
  bottom-left corner
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt

from hilbertplot.curve.curve import HilbertCurve
from hilbertplot.mapping.mapper import HilbertGrid
from hilbertplot.spectral.transform import grid_power_spectrum

from .style import default_fig_ax, plot_header, set_axes_square


HIGHLIGHT_VALUE = 2.0


def _grid_values(grid: Union[HilbertGrid, np.ndarray]) -> np.ndarray:
    values = grid.values if isinstance(grid, HilbertGrid) else np.asarray(grid)
    if values.ndim != 2:
        raise ValueError(f"grid must be 2D, got shape {values.shape}")
    if np.iscomplexobj(values):
        values = np.abs(values)
    return np.asarray(values, float)


def grid_to_image(grid: Union[HilbertGrid, np.ndarray], threshold: float = 0.0) -> np.ndarray:
    """
    Normalise grid values to [0, 1].

    Complex grids are shown by magnitude. NaN cells (unset) stay NaN. A
    constant grid maps to zeros.

    If threshold > 0 and grid is a HilbertGrid, cells whose curve-index
    difference to their neighbours exceeds threshold times the grid mean are
    set to HIGHLIGHT_VALUE (2.0), marking the seams between curve quadrants.
    """
    values = _grid_values(grid)
    finite = np.isfinite(values)
    img = np.full(values.shape, np.nan)
    if finite.any():
        lo = float(np.min(values[finite]))
        hi = float(np.max(values[finite]))
        scale = 0.0 if hi == lo else 1.0 / (hi - lo)
        img[finite] = (values[finite] - lo) * scale

    if threshold > 0:
        if not isinstance(grid, HilbertGrid):
            raise TypeError("threshold highlighting needs a HilbertGrid (curve order required)")
        curve = HilbertCurve.build(grid.order)
        mean_diff = curve.mean_index_difference()
        if mean_diff > 0:
            img[curve.index_difference_map() / mean_diff > threshold] = HIGHLIGHT_VALUE
    return img


def plot_hilbert_grid(
    grid: HilbertGrid,
    *,
    title: str = "Hilbert plot",
    subtitle: Optional[str] = None,
    cmap: str = "viridis",
    threshold: float = 0.0,
    colorbar: bool = True,
    ax: Optional[plt.Axes] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Heatmap of grid.values (magnitude for complex grids).

    threshold > 0 plots grid_to_image(grid, threshold) instead: values scaled
    to [0, 1] with curve seams drawn at HIGHLIGHT_VALUE.

    Returns
    -------
    fig, ax
    """
    if threshold > 0:
        values = grid_to_image(grid, threshold=threshold)
    else:
        values = _grid_values(grid)
    if ax is None:
        fig, ax = default_fig_ax(figsize=(7, 7))
    else:
        fig = ax.figure

    if subtitle is None:
        subtitle = f"order {grid.order} ({grid.side}x{grid.side}), {grid.n_samples} samples"
    plot_header(ax, title=title, subtitle=subtitle)

    side = grid.side
    im = ax.imshow(
        values,
        origin="lower",
        extent=[-0.5, side - 0.5, -0.5, side - 0.5],
        cmap=cmap,
        interpolation="nearest",
    )
    if colorbar:
        fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)

    set_axes_square(ax)
    return fig, ax


def plot_grid_spectrum(
    grid: HilbertGrid,
    *,
    log: bool = True,
    title: str = "Hilbert plot spectrum",
    cmap: str = "magma",
) -> Tuple[plt.Figure, plt.Axes]:
    """Heatmap of the centred 2D power spectrum of grid.values."""
    power = grid_power_spectrum(np.nan_to_num(grid.values), log=log)

    fig, ax = default_fig_ax(figsize=(7, 7))
    ax.set_xlabel("kx")
    ax.set_ylabel("ky")
    plot_header(ax, title=title, subtitle="log(1 + |F|²)" if log else "|F|²")

    side = grid.side
    im = ax.imshow(
        power,
        origin="lower",
        extent=[-side / 2 - 0.5, side / 2 - 0.5, -side / 2 - 0.5, side / 2 - 0.5],
        cmap=cmap,
        interpolation="nearest",
    )
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    set_axes_square(ax)
    return fig, ax

"""
style.py
========

Shared matplotlib settings for Hilbert plots.

Grids are images of square cells, so every axis that shows one is forced to
an equal aspect ratio and images default to nearest-neighbour sampling.
"""

from __future__ import annotations

from typing import Optional, Tuple

import matplotlib.pyplot as plt


MPL_DEFAULTS = {
    "figure.dpi": 120,
    "savefig.dpi": 160,
    "axes.grid": False,
    "axes.titlesize": 11,
    "axes.labelsize": 10,
    "image.interpolation": "nearest",
    "image.origin": "lower",
}


def apply_mpl_defaults() -> None:
    """Update plt.rcParams with MPL_DEFAULTS. Scripts call this once."""
    plt.rcParams.update(MPL_DEFAULTS)


def set_axes_square(ax: plt.Axes) -> None:
    """Square cells: one data unit is the same length on x and y."""
    ax.set_aspect("equal", adjustable="box")


def plot_header(ax: plt.Axes, *, title: str, subtitle: Optional[str] = None) -> None:
    """Main title with an optional detail line below it."""
    ax.set_title(title if not subtitle else f"{title}\n{subtitle}")


def default_fig_ax(figsize: Tuple[float, float] = (7, 7)):
    """New figure + axes labelled with grid coordinates x (column) and y (row)."""
    fig, ax = plt.subplots(figsize=figsize)
    ax.set_xlabel("x (column)")
    ax.set_ylabel("y (row)")
    return fig, ax

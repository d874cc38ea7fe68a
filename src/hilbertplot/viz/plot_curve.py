"""
plot_curve.py
=============

Draw the Hilbert curve path itself.

Pure plotting: builds the curve from its order, returns matplotlib Figure/Axes.
"""

from __future__ import annotations

from typing import Optional, Tuple

import matplotlib.pyplot as plt

from hilbertplot.curve.curve import HilbertCurve

from .style import default_fig_ax, plot_header, set_axes_square


def plot_curve_path(
    order: int,
    *,
    color: str = "tab:red",
    linewidth: float = 1.0,
    annotate: bool = False,
    ax: Optional[plt.Axes] = None,
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Plot the order-n curve as a polyline through cell centres.

    annotate=True writes the curve index next to each vertex (only sensible
    for small orders).
    """
    curve = HilbertCurve.build(order)
    if ax is None:
        fig, ax = default_fig_ax(figsize=(6, 6))
    else:
        fig = ax.figure

    xs = curve.points[:, 0]
    ys = curve.points[:, 1]
    ax.plot(xs, ys, color=color, lw=linewidth)
    ax.plot(xs[:1], ys[:1], "o", color=color, ms=4)

    if annotate:
        for i, (x, y) in enumerate(zip(xs, ys)):
            ax.annotate(str(i), (x, y), textcoords="offset points", xytext=(3, 3), fontsize=7)

    side = curve.side
    ax.set_xlim(-0.5, side - 0.5)
    ax.set_ylim(-0.5, side - 0.5)
    plot_header(ax, title=f"Hilbert curve, order {curve.order}", subtitle=f"{side}x{side} cells")
    set_axes_square(ax)
    return fig, ax

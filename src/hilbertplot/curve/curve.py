"""
hilbertplot.curve.curve
=======================

Materialised Hilbert curve of a given order.

The indexer converts one position at a time; this module builds the whole
curve once and derives per-cell quantities from it:

  - points        : (4^n, 2) int array, rows [x, y] in curve order
  - index_grid    : (2^n, 2^n) int array, index_grid[y, x] = curve index
  - index_difference_map : mean |index delta| between a cell and its (up to 8)
                    neighbours. Large values mark places where neighbouring
                    cells are far apart along the curve (quadrant seams).

Shapes follow the row-major (y, x) layout used for every grid in hilbertplot.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from hilbertplot.curve.indexer import curve_length, curve_side, indices_to_coords


# -----------------------------------------------------------------------------
# Public curve container
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HilbertCurve:
    """
    Immutable Hilbert curve of order n.

    Shapes
    ------
    points:     (4^n, 2)
    index_grid: (2^n, 2^n)
    """
    order: int
    points: np.ndarray
    index_grid: np.ndarray

    @classmethod
    def build(cls, order: int) -> "HilbertCurve":
        n = curve_length(order)
        xs, ys = indices_to_coords(order, np.arange(n, dtype=np.int64))
        points = np.stack([xs, ys], axis=1)

        side = curve_side(order)
        index_grid = np.empty((side, side), dtype=np.int64)
        index_grid[ys, xs] = np.arange(n, dtype=np.int64)

        points.setflags(write=False)
        index_grid.setflags(write=False)
        return cls(order=int(order), points=points, index_grid=index_grid)

    @property
    def side(self) -> int:
        return int(self.index_grid.shape[0])

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def index_of(self, x: int, y: int) -> int:
        """Curve index of cell (x, y)."""
        return int(self.index_grid[y, x])

    def index_difference_map(self) -> np.ndarray:
        """
        Mean absolute curve-index difference to the 8-neighbourhood.

        Border cells average over the neighbours that exist. Order 0 (a single
        cell with no neighbours) yields [[0.0]].
        """
        idx = self.index_grid.astype(float)
        side = self.side
        total = np.zeros_like(idx)
        count = np.zeros_like(idx)

        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                if dx == 0 and dy == 0:
                    continue
                # overlapping windows of the cell and its (dx, dy) neighbour
                ys_c = slice(max(0, -dy), side - max(0, dy))
                xs_c = slice(max(0, -dx), side - max(0, dx))
                ys_n = slice(max(0, dy), side - max(0, -dy))
                xs_n = slice(max(0, dx), side - max(0, -dx))
                total[ys_c, xs_c] += np.abs(idx[ys_c, xs_c] - idx[ys_n, xs_n])
                count[ys_c, xs_c] += 1.0

        return np.divide(total, count, out=np.zeros_like(total), where=count > 0)

    def mean_index_difference(self) -> float:
        """Grid-average of index_difference_map()."""
        return float(np.mean(self.index_difference_map()))

    def to_svg(self, color: str = "red", stroke_width: float = 0.2) -> str:
        """
        SVG document with the curve drawn as a single path.

        y is flipped so the curve origin sits at the bottom-left, as in a
        plot with a y axis pointing up.
        """
        side = self.side
        xs = self.points[:, 0]
        ys = side - 1 - self.points[:, 1]
        path = " ".join(f"{int(x)},{int(y)}" for x, y in zip(xs, ys))

        lines = [
            '<?xml version="1.0" encoding="UTF-8" standalone="no"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{side}" height="{side}" '
            f'viewBox="-0.5 -0.5 {side} {side}" version="1.1">',
            "<g>",
            "<path",
            f'style="fill:none;stroke:{color};stroke-width:{stroke_width}px;'
            'stroke-linecap:butt;stroke-linejoin:miter;stroke-opacity:1"',
            f'd="M {path}"/>',
            "</g>",
            "</svg>",
        ]
        return "\n".join(lines)

#!/usr/bin/env python3
"""
01_hilbert_plot.py
==================

Render a data file as a Hilbert plot.

What it does
------------
• Loads the input sequence (text numbers, raw bytes, or an HDF5 dataset)
• Loads the plot config (YAML, `plot:` section) from --config, or discovers
  <base-dir>/configs/<config-stem>.yaml
• Runs hilbertplot.pipeline.plot_pipeline.run()
• Saves figures under <out-dir>/:
    hilbert_plot.<fmt>            grid heatmap
    hilbert_spectrum.<fmt>        2D power spectrum of the grid (--spectrum)
    hilbert_curve_o<n>.svg        the curve path as SVG (--curve-svg)
• Logs to console and <out-dir>/run.log

Usage
-----
python scripts/01_hilbert_plot.py --input data/firmware.bin --out-dir out/fw
python scripts/01_hilbert_plot.py --input data/signal.txt --config configs/hilbert_plot.yaml --spectrum
python scripts/01_hilbert_plot.py --input data/run.h5 --dataset /signals/ch0 --order 9
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from hilbertplot.curve.curve import HilbertCurve
from hilbertplot.data.sequence import shannon_entropy, summary
from hilbertplot.io import config as cfgio
from hilbertplot.io.logging_utils import setup_logger
from hilbertplot.io.text import load_sequence
from hilbertplot.pipeline.plot_pipeline import config_from_dict, run
from hilbertplot.viz.plot_grid import plot_grid_spectrum, plot_hilbert_grid
from hilbertplot.viz.style import apply_mpl_defaults


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Render a data file as a Hilbert plot")
    p.add_argument("--input", required=True, help="Input file (.txt/.csv/.dat numbers, .h5 dataset, anything else = raw bytes)")
    p.add_argument("--dataset", type=str, default="", help="Dataset path inside an HDF5 input (e.g. /signals/ch0)")
    p.add_argument("--config", type=str, default="", help="Plot config YAML. If empty, discovered under --base-dir")
    p.add_argument("--base-dir", type=str, default="", help="Base directory holding configs/ (default: inferred repo root)")
    p.add_argument("--config-stem", type=str, default="hilbert_plot", help="Config file stem to use when discovering")
    p.add_argument("--order", type=int, default=None, help="Override plot.order")
    p.add_argument("--overflow-policy", type=str, default="", help="Override plot.overflow_policy")
    p.add_argument("--out-dir", type=str, default="out", help="Output directory for figures and run.log")
    p.add_argument("--formats", nargs="+", default=["png"], help="e.g. png pdf")
    p.add_argument("--dpi", type=int, default=160, help="DPI for raster outputs")
    p.add_argument("--threshold", type=float, default=0.0, help="Highlight curve seams above this index-difference ratio (0 = off)")
    p.add_argument("--spectrum", action="store_true", help="Also plot the 2D power spectrum of the grid")
    p.add_argument("--curve-svg", action="store_true", help="Also write the curve path as SVG")
    p.add_argument("--log-level", type=str, default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return p.parse_args()


def save_figure(fig: plt.Figure, out_base: Path, formats: Sequence[str], dpi: int = 160) -> None:
    out_base.parent.mkdir(parents=True, exist_ok=True)
    for fmt in formats:
        fmt = fmt.lower().lstrip(".")
        fig.savefig(out_base.with_suffix(f".{fmt}"), dpi=dpi, bbox_inches="tight")


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config.strip():
        return Path(args.config).expanduser().resolve()
    project_root = cfgio.infer_project_root(__file__)
    base_dir = Path(args.base_dir).expanduser().resolve() if args.base_dir.strip() else project_root
    config_dir = cfgio.find_config_dir(base_dir)
    config_map = cfgio.build_config_map(cfgio.discover_yaml_files(config_dir))
    return cfgio.pick_config(config_map, args.config_stem)


def main() -> None:
    args = parse_args()

    out_dir = Path(args.out_dir).expanduser().resolve()
    out_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logger(out_dir / "run.log", level=args.log_level)

    logger.info("========== Hilbert plot ==========")
    input_path = Path(args.input).expanduser().resolve()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    logger.info("input: %s", str(input_path))

    # --- config ---
    config_path = _resolve_config_path(args)
    cfg = cfgio.load_yaml(config_path)
    plot_cfg = dict(cfg.get("plot") or {})
    if args.order is not None:
        plot_cfg["order"] = args.order
    if args.overflow_policy.strip():
        plot_cfg["overflow_policy"] = args.overflow_policy.strip()
    config = config_from_dict({"plot": plot_cfg})
    logger.info("config: %s", str(config_path))
    logger.info("plot config: %s", config)

    # --- data ---
    seq = load_sequence(input_path, dataset=args.dataset.strip() or None)
    logger.info("Loaded %d samples", seq.shape[0])
    if seq.shape[0]:
        # complex samples are summarised by magnitude
        is_complex = np.iscomplexobj(seq)
        mag = np.abs(seq) if is_complex else seq
        st = summary(mag)
        logger.info(
            "Input stats%s: min=%g max=%g mean=%g std=%g entropy=%.4f",
            " (|x|)" if is_complex else "",
            st.min, st.max, st.mean, st.std, shannon_entropy(mag),
        )

    # --- pipeline ---
    grid = run(config, seq)
    logger.info("Grid: order=%d side=%d samples=%d", grid.order, grid.side, grid.n_samples)

    # --- figures ---
    apply_mpl_defaults()

    fig, _ = plot_hilbert_grid(grid, title=f"Hilbert plot: {input_path.name}", threshold=args.threshold)
    save_figure(fig, out_dir / "hilbert_plot", args.formats, dpi=args.dpi)
    plt.close(fig)
    logger.info("Wrote hilbert_plot (%s)", ", ".join(args.formats))

    if args.spectrum:
        fig, _ = plot_grid_spectrum(grid)
        save_figure(fig, out_dir / "hilbert_spectrum", args.formats, dpi=args.dpi)
        plt.close(fig)
        logger.info("Wrote hilbert_spectrum (%s)", ", ".join(args.formats))

    if args.curve_svg:
        svg_path = out_dir / f"hilbert_curve_o{grid.order}.svg"
        svg_path.write_text(HilbertCurve.build(grid.order).to_svg(), encoding="utf-8")
        logger.info("Wrote %s", svg_path.name)

    logger.info("Done.")


if __name__ == "__main__":
    main()

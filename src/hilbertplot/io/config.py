"""
hilbertplot.io.config
=====================

Locate and load the YAML files that drive the plot scripts.

Layout assumed by the scripts:

    <repo>/
      configs/hilbert_plot.yaml     (or config/)
      scripts/01_hilbert_plot.py

A config is addressed by its *stem* (file name without .yaml/.yml). Stems are
unique inside one config directory.

This module only finds and parses files. Turning the parsed mapping into a
PlotConfig is hilbertplot.pipeline.plot_pipeline.config_from_dict.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

import yaml


PathLike = Union[str, Path]

CONFIG_DIR_NAMES = ("configs", "config")
YAML_SUFFIXES = (".yaml", ".yml")


def _resolved(p: PathLike) -> Path:
    return Path(p).expanduser().resolve()


# ============================================================
# DISCOVERY
# ============================================================

def infer_project_root(script_file: PathLike) -> Path:
    """Repo root for a script living in <repo>/scripts/."""
    return _resolved(script_file).parents[1]


def find_config_dir(base_dir: PathLike, preferred: Optional[str] = None) -> Path:
    """
    Return the config directory below base_dir.

    With `preferred` only base_dir/<preferred> is considered; otherwise the
    names in CONFIG_DIR_NAMES are tried in order.
    """
    base = _resolved(base_dir)
    names = (preferred,) if preferred else CONFIG_DIR_NAMES
    candidates = [base / name for name in names]
    for c in candidates:
        if c.is_dir():
            return c
    raise FileNotFoundError(
        f"No config directory under {base} (looked for: {', '.join(str(c) for c in candidates)})"
    )


def discover_yaml_files(config_dir: PathLike, recursive: bool = False) -> List[Path]:
    """YAML files in config_dir, sorted case-insensitively by file name."""
    root = _resolved(config_dir)
    if not root.exists():
        raise FileNotFoundError(f"Config directory does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    walker = root.rglob("*") if recursive else root.glob("*")
    found = [p.resolve() for p in walker if p.is_file() and p.suffix.lower() in YAML_SUFFIXES]
    return sorted(found, key=lambda p: p.name.lower())


def stem_no_ext(p: PathLike) -> str:
    """'hilbert_plot.yaml' -> 'hilbert_plot' (only the last suffix is removed)."""
    return Path(p).name.rsplit(".", 1)[0]


def build_config_map(yaml_paths: Iterable[PathLike]) -> Dict[str, Path]:
    """
    stem -> path for every file in yaml_paths.

    Two files sharing a stem (e.g. plot.yaml and plot.yml) raise ValueError
    listing every clash.
    """
    by_stem: Dict[str, List[Path]] = {}
    for p in yaml_paths:
        path = _resolved(p)
        by_stem.setdefault(stem_no_ext(path), []).append(path)

    clashes = {s: ps for s, ps in by_stem.items() if len(ps) > 1}
    if clashes:
        detail = "\n".join(
            f"  {s}: " + ", ".join(str(p) for p in ps) for s, ps in sorted(clashes.items())
        )
        raise ValueError(f"Config stems must be unique; duplicates:\n{detail}")

    return {s: ps[0] for s, ps in by_stem.items()}


def pick_config(config_map: Mapping[str, Path], stem: str) -> Path:
    """Path registered for `stem`; FileNotFoundError names the stems on offer."""
    key = str(stem).strip()
    try:
        return config_map[key]
    except KeyError:
        available = ", ".join(sorted(config_map)) or "<none>"
        raise FileNotFoundError(
            f"No config with stem '{key}' (available: {available}). "
            "Stems are file names without .yaml/.yml."
        ) from None


# ============================================================
# LOADING
# ============================================================

def load_yaml(path: PathLike) -> Dict[str, Any]:
    """
    yaml.safe_load a config file.

    An empty file gives {}; any top level other than a mapping is a
    TypeError.
    """
    path = _resolved(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{path}: top-level YAML must be a mapping, got {type(data).__name__}")
    return data

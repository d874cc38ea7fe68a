"""
hilbertplot.viz
===============

matplotlib renderers for curves and grids.

Every function here takes in-memory objects (HilbertGrid, curve order) and
returns (fig, ax). Reading inputs and saving figures is left to the scripts,
e.g. scripts/01_hilbert_plot.py.
"""

"""
hilbertplot
===========

Hilbert curves and Hilbert plots of linear data.

Subpackages
-----------
• curve     : index <-> (x, y) conversion, materialised curves
• spectral  : scipy.fft wrapper (pinned normalisation) + frequency filters
• mapping   : sequence <-> grid projection, overflow policies
• data      : data-sequence helpers (granularity, entropy, stats)
• pipeline  : PlotConfig + run()
• io        : YAML config, logging, input readers (text, bytes, HDF5)
• viz       : matplotlib rendering of grids and curves
"""

__version__ = "0.1.0"

"""
Density estimation, extrema detection and summary statistics.
"""

from .density import DensityCurve, estimate_density, make_grid
from .extrema import find_local_maxima, find_local_minima, find_local_minima_xy
from .summary import Summary, compute_summary

__all__ = [
    "DensityCurve",
    "estimate_density",
    "make_grid",
    "find_local_maxima",
    "find_local_minima",
    "find_local_minima_xy",
    "Summary",
    "compute_summary",
]

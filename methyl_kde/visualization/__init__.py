"""
Visualization modules for methylation KDE analysis.
"""

from .plots import PlotGenerator
from .style import get_color_palette, get_style_params

__all__ = ["PlotGenerator", "get_color_palette", "get_style_params"]

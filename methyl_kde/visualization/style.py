"""
Publication-ready plotting style configuration.
"""

from typing import Any, Dict, Optional


def get_style_params(config: Optional[Any] = None) -> Dict[str, Any]:
    """
    Matplotlib rc parameters for publication-quality figures.

    The parameters are returned rather than applied so callers can scope
    them with ``matplotlib.pyplot.rc_context``.

    Args:
        config: Optional configuration object with viz_params
    """
    params = {
        "dpi": 300,
        "font_sizes": {
            "title": 12,
            "label": 11,
            "tick": 10,
            "legend": 9
        }
    }

    if config is not None and hasattr(config, "viz_params"):
        params.update(config.viz_params)

    return {
        "font.family": "sans-serif",
        "font.sans-serif": ["Arial", "Helvetica", "DejaVu Sans"],
        "font.size": params["font_sizes"]["tick"],
        "axes.titlesize": params["font_sizes"]["title"],
        "axes.labelsize": params["font_sizes"]["label"],
        "xtick.labelsize": params["font_sizes"]["tick"],
        "ytick.labelsize": params["font_sizes"]["tick"],
        "legend.fontsize": params["font_sizes"]["legend"],
        "savefig.dpi": params["dpi"],
        "savefig.bbox": "tight",
        "savefig.pad_inches": 0.1,
        "axes.linewidth": 1.0,
        "axes.spines.top": False,
        "axes.spines.right": False,
        "pdf.fonttype": 42,
        "ps.fonttype": 42,
    }


def get_color_palette(config: Optional[Any] = None) -> Dict[str, str]:
    """
    Get consistent color palette for plots.

    Args:
        config: Optional configuration object

    Returns:
        Dictionary mapping plot element names to colors
    """
    default_colors = {
        "histogram": "#69b3a2",
        "histogram_edge": "white",
        "kde": "#ff6b6b",
        "minima": "red",
        "minima_fill": "white",
    }

    if config is not None and hasattr(config, "viz_params"):
        colors = config.viz_params.get("colors", {})
        default_colors.update(colors)

    return default_colors

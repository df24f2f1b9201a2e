"""
Plotting functions for methylation KDE visualization.

Every plotting method builds its own Figure and returns it; nothing relies
on the pyplot "current figure".
"""

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

from ..analysis.density import DensityCurve
from .style import get_color_palette, get_style_params

logger = logging.getLogger(__name__)


class PlotGenerator:
    """
    Generate publication-ready histogram + KDE plots.
    """

    def __init__(self, config: Optional[Any] = None):
        """
        Initialize plot generator.

        Args:
            config: Configuration object with visualization parameters
        """
        self.config = config
        self.colors = get_color_palette(config)
        self.style = get_style_params(config)

        self.fig_sizes = {
            "wide": (10, 6)
        }
        self.hist_bins = 20
        self.dpi = 300
        self.format = "pdf"
        self.labels = {
            "title": "Histogram + KDE",
            "x": "Average methylation",
            "y": "Density"
        }

        if config is not None and hasattr(config, "viz_params"):
            viz = config.viz_params
            if "figure_sizes" in viz:
                self.fig_sizes.update(
                    {k: tuple(v) for k, v in viz["figure_sizes"].items()}
                )
            self.hist_bins = viz.get("hist_bins", self.hist_bins)
            self.dpi = viz.get("dpi", self.dpi)
            self.format = viz.get("format", self.format)
            self.labels.update(viz.get("labels", {}))

    def plot_histogram_kde(
        self,
        samples: Sequence[float],
        curve: DensityCurve,
        title: Optional[str] = None
    ) -> Figure:
        """
        Histogram of raw samples (normalized to density) with the KDE curve.

        Args:
            samples: Raw methylation values
            curve: Density curve to overlay
            title: Optional custom title

        Returns:
            The new Figure
        """
        with plt.rc_context(self.style):
            fig, ax = plt.subplots(figsize=self.fig_sizes["wide"])

            sns.histplot(
                x=pd.Series(np.array(samples, dtype=float), name="met_ave"),
                bins=self.hist_bins,
                stat="density",
                alpha=0.7,
                color=self.colors["histogram"],
                edgecolor=self.colors["histogram_edge"],
                linewidth=0.5,
                ax=ax,
            )
            ax.plot(curve.x, curve.y, color=self.colors["kde"], lw=2, label="KDE")

            ax.set_xlim(0, 1)
            ax.set_xlabel(self.labels["x"])
            ax.set_ylabel(self.labels["y"])
            ax.set_title(title or self.labels["title"])
            ax.grid(True, alpha=0.3, linestyle="--", axis="y")

        return fig

    def annotate_minima(self, fig: Figure, curve: DensityCurve, minima: Sequence[float]) -> Figure:
        """
        Mark each minimum on the first axes of ``fig`` with a hollow point
        and a "Min:<x>" label.
        """
        ax = fig.axes[0]
        minima = np.asarray(minima, dtype=float)
        minima_y = curve.value_at(minima)

        ax.scatter(
            minima,
            minima_y,
            s=60,
            marker="o",
            facecolors=self.colors["minima_fill"],
            edgecolors=self.colors["minima"],
            linewidths=1.5,
            zorder=3,
        )
        for x, y in zip(minima, minima_y):
            ax.annotate(
                f"Min:{round(float(x), 1)}",
                xy=(x, y),
                xytext=(0, 12),
                textcoords="offset points",
                ha="center",
                color=self.colors["minima"],
                fontweight="bold",
            )
        return fig

    def plot_minima(
        self,
        samples: Sequence[float],
        curve: DensityCurve,
        minima: Sequence[float],
        title: Optional[str] = None
    ) -> Figure:
        """
        Histogram + KDE with detected minima annotated.

        Args:
            samples: Raw methylation values
            curve: Density curve to overlay
            minima: Minima x-coordinates
            title: Optional custom title

        Returns:
            The new Figure
        """
        fig = self.plot_histogram_kde(samples, curve, title=title)
        with plt.rc_context(self.style):
            self.annotate_minima(fig, curve, minima)
        return fig

    def save_figure(self, fig: Figure, output_path: Union[str, Path]) -> Path:
        """
        Save ``fig`` and close it.

        Args:
            fig: Figure to save
            output_path: Destination file

        Returns:
            The output path
        """
        output_path = Path(output_path)
        logger.info(f"Saving figure -> {output_path}")
        try:
            with plt.rc_context(self.style):
                fig.savefig(output_path, format=self.format, dpi=self.dpi)
        finally:
            plt.close(fig)
        return output_path

"""
Methylation KDE analysis pipeline.

Loads per-sample average methylation values, computes summary statistics,
estimates the density on a fixed grid, detects local minima (candidate
thresholds between methylation classes) and persists the report and plots.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

from .analysis import (
    DensityCurve,
    Summary,
    compute_summary,
    estimate_density,
    find_local_maxima,
    find_local_minima,
)
from .data_loaders import SampleLoader
from .exceptions import OutputError
from .reporting import format_report, write_report
from .utils.config import Config, load_config
from .visualization import PlotGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    """Everything computed for one sample set."""

    samples: np.ndarray
    summary: Summary
    curve: DensityCurve
    minima: np.ndarray
    maxima: np.ndarray

    @property
    def has_minima(self) -> bool:
        return self.minima.size > 0


class KDEAnalysisPipeline:
    """
    Main pipeline class for the KDE minima analysis.

    Encapsulates all steps: data loading, summary statistics, density
    estimation, minima detection, reporting and plotting.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize pipeline with configuration.

        Args:
            config: Configuration object (default: built-in defaults)
        """
        self.config = config if config is not None else load_config()

        self.loader = SampleLoader(self.config)
        self.plotter = PlotGenerator(self.config)

    def load_samples(self, input_path: Optional[Union[str, Path]] = None) -> np.ndarray:
        """Load the configured (or given) input file into a sample array."""
        return self.loader.load_samples(file_path=input_path)

    def analyze(self, samples) -> AnalysisResult:
        """
        Run summary, density estimation and minima detection.

        Args:
            samples: 1-D sequence of methylation values

        Returns:
            AnalysisResult
        """
        samples = np.array(samples, dtype=float).ravel()
        samples.setflags(write=False)
        params = self.config.kde_params

        summary = compute_summary(samples)
        logger.info(
            f"Summary: n={summary.count}, mean={summary.mean:.4f}, "
            f"median={summary.median:.4f}, sd={summary.std:.4f}"
        )
        logger.debug(f"Summary record: {summary.to_dict()}")

        curve = estimate_density(
            samples,
            bandwidth=params["bandwidth"],
            domain_low=params["domain_low"],
            domain_high=params["domain_high"],
            grid_step=params["grid_step"],
            method=params.get("method", "direct")
        )
        minima = find_local_minima(curve)
        maxima = find_local_maxima(curve)
        logger.debug(f"Density peaks at: {np.round(maxima, 2).tolist()}")

        return AnalysisResult(
            samples=samples,
            summary=summary,
            curve=curve,
            minima=minima,
            maxima=maxima
        )

    def run(self, input_path: Optional[Union[str, Path]] = None) -> AnalysisResult:
        """Load the input file and analyze it."""
        return self.analyze(self.load_samples(input_path))

    def prepare_output_dir(self, output_dir: Optional[Union[str, Path]] = None) -> Path:
        """
        Create the output directory.

        Raises:
            OutputError: If the directory cannot be created
        """
        if output_dir is None:
            output_dir = self.config.get_output_dir()
        else:
            output_dir = self.config.resolve_path(output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Could not create output directory {output_dir}: {e}") from e
        return output_dir

    def save_outputs(
        self,
        result: AnalysisResult,
        output_dir: Optional[Union[str, Path]] = None,
        plots: bool = True
    ) -> Dict[str, Path]:
        """
        Write the report and figures.

        The minima figure is only written when minima were detected.

        Args:
            result: Analysis result to persist
            output_dir: Output directory (default: config output.dir)
            plots: Whether to render figures

        Returns:
            Mapping of artifact name to written path

        Raises:
            OutputError: If any artifact cannot be written. The exception
                carries ``result``.
        """
        try:
            output_dir = self.prepare_output_dir(output_dir)
        except OutputError as e:
            e.result = result
            raise

        written: Dict[str, Path] = {}
        try:
            if plots:
                fig = self.plotter.plot_histogram_kde(result.samples, result.curve)
                written["histogram"] = self.plotter.save_figure(
                    fig, self.config.get_output_path("histogram_file", output_dir)
                )

                if result.has_minima:
                    fig = self.plotter.plot_minima(result.samples, result.curve, result.minima)
                    written["minima_plot"] = self.plotter.save_figure(
                        fig, self.config.get_output_path("minima_plot_file", output_dir)
                    )

            report = format_report(
                result.summary,
                result.minima,
                title=self.config.report.get("title", "HLA methylation KDE analysis")
            )
            written["report"] = write_report(
                report, self.config.get_output_path("report_file", output_dir)
            )
        except OSError as e:
            raise OutputError(f"Failed to write output to {output_dir}: {e}", result=result) from e

        return written

"""
Plain-text rendering of summary statistics and detected minima.
"""

import logging
from pathlib import Path
from typing import List, Sequence, Union

from ..analysis.summary import Summary

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "HLA methylation KDE analysis"
NONE_DETECTED = "None detected."


def _fmt(value: float, digits: int = 2) -> str:
    return str(round(float(value), digits))


def format_summary_lines(summary: Summary) -> List[str]:
    """Console lines for every summary statistic, rounded to 2 decimals."""
    return [
        f"Number of samples: {summary.count}",
        f"Mean: {_fmt(summary.mean)}",
        f"Median: {_fmt(summary.median)}",
        f"SD: {_fmt(summary.std)}",
        f"Min: {_fmt(summary.min)}",
        f"Max: {_fmt(summary.max)}",
    ]


def format_minima_lines(minima: Sequence[float], indent: str = "") -> List[str]:
    """One numbered line per minimum, or a single "None detected." line."""
    if len(minima) == 0:
        return [f"{indent}{NONE_DETECTED}"]
    return [
        f"{indent}Min {i} : {_fmt(x)}"
        for i, x in enumerate(minima, start=1)
    ]


def format_report(
    summary: Summary,
    minima: Sequence[float],
    title: str = DEFAULT_TITLE
) -> str:
    """
    Build the text report.

    Args:
        summary: Summary statistics of the sample set
        minima: Detected local minima x-coordinates, ascending
        title: First line of the report

    Returns:
        Report text with a trailing newline
    """
    lines = [
        title,
        "=" * len(title),
        f"Number of samples: {summary.count}",
        f"Mean: {_fmt(summary.mean)}",
        f"Median: {_fmt(summary.median)}",
        f"SD: {_fmt(summary.std)}",
        "",
        "Detected local minima:",
    ]
    lines.extend(format_minima_lines(minima, indent="  "))
    return "\n".join(lines) + "\n"


def write_report(text: str, output_path: Union[str, Path]) -> Path:
    """Write report text to ``output_path`` and return the path."""
    output_path = Path(output_path)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info(f"Report saved to {output_path}")
    return output_path

#!/usr/bin/env python3
"""
Methylation KDE Minima Analysis

Main entry point: summary statistics, Gaussian KDE, local minima detection,
histogram + KDE figures and a text report for per-sample average methylation.

Usage:
    python main.py                                  # Run with configs/default.yaml defaults
    python main.py --input data/HLA_BISseq.xlsx     # Analyze a specific file
    python main.py --column average --bandwidth 0.05
    python main.py --skip-plots                     # Report only

Examples:
    # Analyze a CSV export with a narrower kernel
    python main.py --input data/HLA_BISseq.csv --bandwidth 0.03

    # Use a custom configuration and write results elsewhere
    python main.py --config configs/default.yaml --output-dir results/hla
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports when run as a script
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from methyl_kde.exceptions import KDEAnalysisError, OutputError
from methyl_kde.pipeline import KDEAnalysisPipeline
from methyl_kde.reporting import format_minima_lines, format_summary_lines
from methyl_kde.utils.config import load_config
from methyl_kde.utils.logging_utils import setup_logger

logger = logging.getLogger("methyl_kde.main")


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Histogram + KDE analysis and local minima detection for methylation data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument("--input", help="Input table (.xlsx, .csv or .tsv)")
    parser.add_argument("--column", help="Column with average methylation (default: average)")
    parser.add_argument("--sheet", help="Excel sheet name or index (default: first sheet)")
    parser.add_argument("--output-dir", help="Directory for figures and report (default: figures)")
    parser.add_argument("--bandwidth", type=float, help="Gaussian kernel bandwidth (default: 0.05)")
    parser.add_argument("--grid-step", type=float, help="Evaluation grid step (default: 0.01)")
    parser.add_argument("--domain-low", type=float, help="Lower domain bound (default: 0)")
    parser.add_argument("--domain-high", type=float, help="Upper domain bound (default: 1)")
    parser.add_argument(
        "--method",
        choices=["direct", "binned"],
        help="Density evaluation method (default: direct)"
    )
    parser.add_argument("--config", help="Path to custom configuration file")
    parser.add_argument("--skip-plots", action="store_true", help="Skip figure generation")
    parser.add_argument("--log-file", help="Also write the log to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    return parser


def _parse_sheet(sheet):
    if sheet is None:
        return None
    return int(sheet) if sheet.isdigit() else sheet


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    setup_logger(
        "methyl_kde",
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        capture_warnings=True
    )

    logger.info("=" * 60)
    logger.info("Methylation KDE Minima Analysis")
    logger.info("=" * 60)

    try:
        config = load_config(config_file=args.config)
        config.update("data", path=args.input, column=args.column, sheet=_parse_sheet(args.sheet))
        config.update(
            "kde_params",
            bandwidth=args.bandwidth,
            grid_step=args.grid_step,
            domain_low=args.domain_low,
            domain_high=args.domain_high,
            method=args.method
        )
        config.update("output", dir=args.output_dir)
        logger.debug(repr(config))
        logger.debug(f"Settings: {config.to_dict()}")

        pipeline = KDEAnalysisPipeline(config)
        output_dir = pipeline.prepare_output_dir()

        result = pipeline.run()

        logger.info("")
        for line in format_summary_lines(result.summary):
            logger.info(line)

        logger.info("")
        logger.info("Detected local minima:")
        for line in format_minima_lines(result.minima):
            logger.info(line)

        pipeline.save_outputs(result, output_dir, plots=not args.skip_plots)

    except OutputError as e:
        if e.result is None:
            logger.error(f"Analysis failed: {e}")
        else:
            logger.error(f"Analysis completed but output could not be saved: {e}")
        return 1

    except KDEAnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        return 1

    logger.info("")
    logger.info("=== Completed ===")
    logger.info(f"Output saved to: {output_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

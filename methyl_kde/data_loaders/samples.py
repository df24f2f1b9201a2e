"""
Sample loader for per-sample average methylation values.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd

from ..exceptions import DataError

logger = logging.getLogger(__name__)

EXCEL_SUFFIXES = {".xlsx", ".xlsm"}
TAB_SUFFIXES = {".tsv", ".txt", ".tab"}


class SampleLoader:
    """
    Load a single numeric methylation column from a tabular file.

    Handles:
    - Excel workbooks (first sheet by default), CSV and TSV files
    - Missing value removal
    - Validation that the column is numeric and finite
    """

    def __init__(self, config: Any = None):
        """
        Initialize the loader.

        Args:
            config: Configuration object with base_dir and data settings
        """
        self.config = config
        self._cache: Dict[str, pd.DataFrame] = {}

    def _resolve_path(self, file_path: Union[str, Path]) -> Path:
        if self.config is not None:
            return self.config.resolve_path(file_path)
        return Path(file_path)

    @staticmethod
    def _validate_file(path: Path) -> None:
        if not path.exists():
            raise DataError(f"Data file not found: {path}")
        if not path.is_file():
            raise DataError(f"Path is not a file: {path}")

    def load(
        self,
        file_path: Union[str, Path],
        sheet: Union[int, str] = 0,
        **kwargs
    ) -> pd.DataFrame:
        """
        Load a table from file.

        Args:
            file_path: Path to an Excel, CSV or TSV file
            sheet: Sheet index or name (Excel only)
            **kwargs: Passed through to the pandas reader

        Returns:
            DataFrame with the file contents
        """
        path = self._resolve_path(file_path)
        self._validate_file(path)

        cache_key = f"{path}::{sheet}"
        if cache_key in self._cache:
            logger.debug(f"Loading from cache: {path.name}")
            return self._cache[cache_key].copy()

        logger.info(f"Loading methylation data from {path.name}...")
        suffix = path.suffix.lower()
        try:
            if suffix in EXCEL_SUFFIXES:
                df = pd.read_excel(path, sheet_name=sheet, **kwargs)
            elif suffix in TAB_SUFFIXES:
                df = pd.read_csv(path, sep="\t", **kwargs)
            else:
                df = pd.read_csv(path, **kwargs)
        except (ValueError, OSError, pd.errors.ParserError) as e:
            raise DataError(f"Could not read {path}: {e}") from e

        self._cache[cache_key] = df.copy()
        logger.info(f"Loaded {df.shape[0]} rows x {df.shape[1]} columns")
        return df

    def extract_samples(self, df: pd.DataFrame, column: str) -> np.ndarray:
        """
        Extract a validated sample array from a DataFrame column.

        Args:
            df: Table containing the column
            column: Name of the numeric methylation column

        Returns:
            1-D float array with missing values removed

        Raises:
            DataError: If the column is absent, not numeric, contains
                infinite values, or has no values left after NA removal
        """
        if column not in df.columns:
            raise DataError(
                f"Column '{column}' not found. Available columns: {list(df.columns)}"
            )

        values = df[column]
        if isinstance(values, pd.DataFrame):
            raise DataError(f"Column name '{column}' is not unique")

        try:
            values = pd.to_numeric(values, errors="raise")
        except (ValueError, TypeError) as e:
            raise DataError(f"Column '{column}' is not numeric: {e}") from e

        n_missing = int(values.isna().sum())
        if n_missing > 0:
            logger.info(f"Dropped {n_missing} missing values from '{column}'")
        samples = values.dropna().to_numpy(dtype=float)

        if samples.size == 0:
            raise DataError(f"No values left in column '{column}' after removing missing values")

        if not np.all(np.isfinite(samples)):
            raise DataError(f"Column '{column}' contains infinite values")

        n_outside = int(np.sum((samples < 0) | (samples > 1)))
        if n_outside > 0:
            logger.warning(f"{n_outside} values in '{column}' fall outside [0, 1]")

        return samples

    def clear_cache(self) -> None:
        """Drop cached tables."""
        self._cache.clear()
        logger.debug("Sample cache cleared")

    def load_samples(
        self,
        file_path: Optional[Union[str, Path]] = None,
        column: Optional[str] = None,
        sheet: Optional[Union[int, str]] = None
    ) -> np.ndarray:
        """
        Load the sample set from file, falling back to configured defaults.

        Args:
            file_path: Path to data file (default: config data.path)
            column: Column name (default: config data.column)
            sheet: Sheet index or name (default: config data.sheet)

        Returns:
            1-D float array of methylation values
        """
        data_cfg = self.config.data if self.config is not None else {}
        if file_path is None and data_cfg.get("path") is not None:
            file_path = self.config.get_input_path()
        column = column if column is not None else data_cfg.get("column", "average")
        sheet = sheet if sheet is not None else data_cfg.get("sheet", 0)

        if file_path is None:
            raise DataError("No input file configured")

        df = self.load(file_path, sheet=sheet)
        samples = self.extract_samples(df, column)
        logger.info(f"Loaded {samples.size} samples from column '{column}'")
        return samples

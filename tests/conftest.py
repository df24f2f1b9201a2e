"""
Shared fixtures for the methylation KDE tests.
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from methyl_kde.utils.config import Config


@pytest.fixture
def bimodal_samples():
    """Two tight clusters of identical values at 0.1 and 0.9."""
    return np.array([0.1, 0.1, 0.1, 0.9, 0.9, 0.9])


@pytest.fixture
def unimodal_samples():
    return np.array([0.5, 0.5, 0.5, 0.5])


@pytest.fixture
def two_population_samples():
    """Evenly spread hypo- and hypermethylated populations."""
    return np.concatenate([
        np.linspace(0.1, 0.3, 60),
        np.linspace(0.65, 0.85, 90),
    ])


@pytest.fixture
def config(tmp_path):
    """Default configuration rooted in a temporary directory."""
    return Config(base_dir=tmp_path)


@pytest.fixture
def write_table(tmp_path):
    """Write a single-column table and return its path."""

    def _write(values, name="samples.csv", column="average", **extra_columns):
        df = pd.DataFrame({column: values, **extra_columns})
        path = tmp_path / name
        if path.suffix == ".xlsx":
            df.to_excel(path, index=False)
        elif path.suffix == ".tsv":
            df.to_csv(path, sep="\t", index=False)
        else:
            df.to_csv(path, index=False)
        return path

    return _write

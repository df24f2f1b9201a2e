"""
Descriptive statistics for a methylation sample set.
"""

from dataclasses import asdict, dataclass
from typing import Dict

import numpy as np
import pandas as pd

from ..exceptions import DataError


@dataclass(frozen=True)
class Summary:
    count: int
    mean: float
    median: float
    std: float
    min: float
    max: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_summary(samples) -> Summary:
    """
    Compute count, mean, median, standard deviation, min and max.

    The standard deviation uses the sample (n - 1) formula. With a single
    sample it is undefined and returned as NaN.

    Args:
        samples: Non-empty 1-D sequence of finite values

    Returns:
        Summary record

    Raises:
        DataError: If ``samples`` is empty
    """
    values = pd.Series(np.asarray(samples, dtype=float).ravel())
    if values.empty:
        raise DataError("Cannot summarize an empty sample set")

    return Summary(
        count=int(values.size),
        mean=float(values.mean()),
        median=float(values.median()),
        std=float(values.std(ddof=1)),
        min=float(values.min()),
        max=float(values.max())
    )

"""
Local extrema of a gridded density curve by sign-change analysis.

A minimum is reported at grid index ``i + 1`` wherever the sign of the first
difference goes from -1 to +1, i.e. ``diff(sign(diff(y)))[i] == 2``. Flat
stretches produce other values and are not reported.
"""

import logging
from typing import Optional

import numpy as np

from .density import DensityCurve

logger = logging.getLogger(__name__)


def _sign_change_indices(y: np.ndarray, target: int) -> np.ndarray:
    if y.size < 3:
        return np.array([], dtype=int)
    return np.flatnonzero(np.diff(np.sign(np.diff(y))) == target) + 1


def _select(
    x: np.ndarray,
    idx: np.ndarray,
    domain_low: Optional[float],
    domain_high: Optional[float]
) -> np.ndarray:
    points = x[idx]
    if domain_low is not None:
        points = points[points >= domain_low]
    if domain_high is not None:
        points = points[points <= domain_high]
    # np.unique sorts ascending and drops duplicates
    return np.unique(points)


def find_local_minima_xy(
    x,
    y,
    domain_low: Optional[float] = None,
    domain_high: Optional[float] = None
) -> np.ndarray:
    """
    Find strict down-then-up transitions of ``y`` over ``x``.

    Args:
        x: Grid x-coordinates
        y: Values on the grid, same length as ``x``
        domain_low: Optional lower bound on reported positions
        domain_high: Optional upper bound on reported positions

    Returns:
        Ascending, duplicate-free array of x-coordinates (may be empty)
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"x and y lengths differ: {x.size} vs {y.size}")

    idx = _sign_change_indices(y, 2)
    return _select(x, idx, domain_low, domain_high)


def find_local_minima(curve: DensityCurve) -> np.ndarray:
    """Local minima of a density curve, restricted to its domain."""
    minima = find_local_minima_xy(curve.x, curve.y, curve.domain_low, curve.domain_high)
    logger.info(f"Detected {minima.size} local minima")
    return minima


def find_local_maxima(curve: DensityCurve) -> np.ndarray:
    """Local maxima (up-then-down transitions) of a density curve."""
    idx = _sign_change_indices(np.asarray(curve.y), -2)
    return _select(np.asarray(curve.x), idx, curve.domain_low, curve.domain_high)

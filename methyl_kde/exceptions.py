"""
Error types raised by the KDE analysis pipeline.
"""

from typing import Any, Optional


class KDEAnalysisError(Exception):
    """Base class for all analysis errors."""


class ConfigError(KDEAnalysisError, ValueError):
    """Configuration file is unreadable or contains an invalid section."""


class DataError(KDEAnalysisError, ValueError):
    """Input is unreadable, the column is missing or invalid, or no samples remain."""


class EstimationError(KDEAnalysisError, ValueError):
    """Invalid density parameters or too few samples for a Gaussian KDE."""


class OutputError(KDEAnalysisError, OSError):
    """
    Writing an output artifact failed.

    The analysis result computed before the failure is kept on ``result``
    so callers can still use it.
    """

    def __init__(self, message: str, result: Optional[Any] = None):
        super().__init__(message)
        self.result = result

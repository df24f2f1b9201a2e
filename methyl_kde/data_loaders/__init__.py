"""
Data loading modules for methylation KDE analysis.

This module provides the loader that turns tabular files (Excel, CSV, TSV)
into validated numeric sample arrays.
"""

from .samples import SampleLoader

__all__ = ["SampleLoader"]

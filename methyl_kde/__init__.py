"""
Methylation KDE Minima Analysis

Descriptive statistics, Gaussian kernel density estimation and local
minima detection for one-dimensional DNA methylation fraction data.
"""

__version__ = "1.0.0"
__author__ = "Waterland Lab, Baylor College of Medicine"

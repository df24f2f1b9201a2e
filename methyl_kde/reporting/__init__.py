"""
Text reporting for methylation KDE analysis.
"""

from .text_report import format_minima_lines, format_report, format_summary_lines, write_report

__all__ = ["format_minima_lines", "format_report", "format_summary_lines", "write_report"]

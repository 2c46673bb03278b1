"""Presentation-ready views of an analysis."""

from .table import TableRow, build_rows, to_tsv
from .summary import render_summary, summarize_zman, format_day
from .chart import ChartSeries, build_chart_series, value_range

__all__ = [
    "TableRow",
    "build_rows",
    "to_tsv",
    "render_summary",
    "summarize_zman",
    "format_day",
    "ChartSeries",
    "build_chart_series",
    "value_range",
]

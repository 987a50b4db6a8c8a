"""Aggregators behind the three engagement charts.

Pure pandas/numpy functions: five-number summary per group (boxplot), mean per
(outer, inner) key pair (grouped bar chart) and mean per normalized date
(line chart). None of them mutate their input.
"""

from engagement_charts.chart_widget.algorithms.daily_mean import daily_means, normalize_date_key, parse_date_key
from engagement_charts.chart_widget.algorithms.five_number import five_number_summary, group_five_number_summaries
from engagement_charts.chart_widget.algorithms.two_key_mean import two_key_means

__all__ = [
    "daily_means",
    "five_number_summary",
    "group_five_number_summaries",
    "normalize_date_key",
    "parse_date_key",
    "two_key_means",
]

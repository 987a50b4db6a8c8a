"""Engagement chart widget: aggregation, Plotly figures and the load/fan-out pipeline.

ChartPanel (engagement_charts.chart_widget.chart_panel) needs nicegui and is
not imported here.
"""

from engagement_charts.chart_widget.chart_config import ChartKind, ChartLayout
from engagement_charts.chart_widget.figure_generator import FigureGenerator
from engagement_charts.chart_widget.pipeline import ChainResult, ChartChain, default_chains, load_dataset, run_chains
from engagement_charts.chart_widget.records import CoercionError, DatasetLoadError, coerce_likes

__all__ = [
    "ChainResult",
    "ChartChain",
    "ChartKind",
    "ChartLayout",
    "CoercionError",
    "DatasetLoadError",
    "FigureGenerator",
    "coerce_likes",
    "default_chains",
    "load_dataset",
    "run_chains",
]

"""Plotly figure generation for the engagement charts.

This module provides the FigureGenerator class for turning the three
aggregates (five-number summaries, platform/post-type means, daily means)
into Plotly figure dictionaries, keeping figure construction apart from the
page and the data pipeline.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from engagement_charts.chart_widget.chart_config import (
    BARPLOT_LAYOUT,
    BOXPLOT_LAYOUT,
    LINEPLOT_LAYOUT,
    ChartKind,
    ChartLayout,
)
from engagement_charts.chart_widget.models import DailyMean, GroupSummary, PlatformTypeMean
from engagement_charts.chart_widget.scales import y_domain
from engagement_charts.utils.logging import get_logger

logger = get_logger(__name__)

BOX_FILL_COLOR = "#cfe8ff"
BOX_LINE_COLOR = "black"
LINE_COLOR = "steelblue"
# PostType colors, cycled when there are more post types than colors
POST_TYPE_COLORS = ["#1f77b4", "#ff7f0e", "#2ca02c"]


class FigureGenerator:
    """Generates Plotly figure dictionaries for the boxplot, grouped bar and line charts.

    Attributes:
        boxplot_layout: Size and margins of the boxplot.
        barplot_layout: Size and margins of the grouped bar chart.
        lineplot_layout: Size and margins of the line chart.
    """

    def __init__(
        self,
        *,
        boxplot_layout: ChartLayout = BOXPLOT_LAYOUT,
        barplot_layout: ChartLayout = BARPLOT_LAYOUT,
        lineplot_layout: ChartLayout = LINEPLOT_LAYOUT,
    ) -> None:
        self.boxplot_layout = boxplot_layout
        self.barplot_layout = barplot_layout
        self.lineplot_layout = lineplot_layout

    def _base_layout(self, layout: ChartLayout, *, x_title: str, y_title: str, y_values: list[float]) -> dict:
        """Layout shared by all charts: fixed pixel size, margins, axis titles, [0, nice max] y range."""
        return dict(
            width=layout.width,
            height=layout.height,
            margin=layout.plotly_margin(),
            xaxis=dict(title=x_title),
            yaxis=dict(title=y_title, range=y_domain(y_values), zeroline=False),
            plot_bgcolor="white",
            showlegend=False,
        )

    def boxplot(self, summaries: pd.DataFrame, *, key_col: str = "AgeGroup", y_title: str = "Likes") -> dict:
        """Boxplot from precomputed five-number summaries.

        Whiskers run from min to max, the box from q1 to q3, with a median line.
        Groups with an undefined summary are skipped.

        Args:
            summaries: Output of group_five_number_summaries().
            key_col: Group column in summaries (x axis).
            y_title: Y axis title.
        """
        rows = GroupSummary.from_frame(summaries, key_col=key_col)
        drawn = [s for s in rows if not s.is_empty]
        skipped = [s.group for s in rows if s.is_empty]
        if skipped:
            logger.warning(f"boxplot: skipping groups with no finite values: {skipped}")

        fig = go.Figure()
        if drawn:
            fig.add_trace(go.Box(
                x=[s.group for s in drawn],
                lowerfence=[s.min for s in drawn],
                q1=[s.q1 for s in drawn],
                median=[s.median for s in drawn],
                q3=[s.q3 for s in drawn],
                upperfence=[s.max for s in drawn],
                name=key_col,
                fillcolor=BOX_FILL_COLOR,
                line=dict(color=BOX_LINE_COLOR, width=1),
                whiskerwidth=0.5,
                boxpoints=False,
                showlegend=False,
            ))

        layout = self._base_layout(
            self.boxplot_layout,
            x_title="Age Group",
            y_title=y_title,
            y_values=[s.max for s in drawn],
        )
        layout["xaxis"].update(type="category", categoryorder="array", categoryarray=[s.group for s in rows])
        fig.update_layout(**layout)
        logger.debug(f"boxplot: {len(drawn)} boxes, {len(skipped)} skipped")
        return fig.to_dict()

    def grouped_barplot(
        self,
        means: pd.DataFrame,
        *,
        outer_col: str = "Platform",
        inner_col: str = "PostType",
        mean_col: str = "AvgLikes",
    ) -> dict:
        """Grouped bar chart: one bucket per outer key, one colored bar per inner key, plus a legend.

        Args:
            means: Output of two_key_means().
            outer_col: Bucket column (x axis).
            inner_col: Bar/legend column.
            mean_col: Bar height column.
        """
        rows = PlatformTypeMean.from_frame(means, outer_col=outer_col, inner_col=inner_col, mean_col=mean_col)
        platforms = list(dict.fromkeys(r.platform for r in rows))
        post_types = list(dict.fromkeys(r.post_type for r in rows))

        bad = [(r.platform, r.post_type) for r in rows if not r.is_finite]
        if bad:
            logger.warning(f"grouped_barplot: skipping pairs with undefined mean: {bad}")

        fig = go.Figure()
        for i, post_type in enumerate(post_types):
            bars = [r for r in rows if r.post_type == post_type and r.is_finite]
            fig.add_trace(go.Bar(
                x=[r.platform for r in bars],
                y=[r.avg_likes for r in bars],
                name=post_type,
                marker_color=POST_TYPE_COLORS[i % len(POST_TYPE_COLORS)],
                offsetgroup=post_type,
            ))

        layout = self._base_layout(
            self.barplot_layout,
            x_title="Platform",
            y_title="Average Likes",
            y_values=[r.avg_likes for r in rows],
        )
        layout.update(
            barmode="group",
            bargap=0.2,
            bargroupgap=0.08,
            showlegend=True,
            legend=dict(x=1.02, xanchor="left", y=1.0, yanchor="top", title=dict(text=inner_col)),
        )
        layout["xaxis"].update(type="category", categoryorder="array", categoryarray=platforms)
        fig.update_layout(**layout)
        logger.debug(f"grouped_barplot: {len(platforms)} platforms x {len(post_types)} post types")
        return fig.to_dict()

    def lineplot(self, daily: pd.DataFrame, *, date_col: str = "Date", mean_col: str = "AvgLikes") -> dict:
        """Time-series line of mean likes per day with a marker on each day.

        Args:
            daily: Output of daily_means(), already sorted by date.
            date_col: Normalized date column (used for hover text).
            mean_col: Y column.
        """
        rows = [r for r in DailyMean.from_frame(daily, date_col=date_col, mean_col=mean_col) if r.is_finite]

        fig = go.Figure()
        fig.add_trace(go.Scatter(
            x=[r.date_obj.to_pydatetime() for r in rows],
            y=[r.avg_likes for r in rows],
            text=[r.date for r in rows],
            mode="lines+markers",
            line=dict(color=LINE_COLOR, width=2.5, shape="spline"),
            marker=dict(color=LINE_COLOR, size=8),
            name=mean_col,
            hovertemplate="%{text}<br>%{y:.1f}<extra></extra>",
        ))

        layout = self._base_layout(
            self.lineplot_layout,
            x_title="Date",
            y_title="Average Likes",
            y_values=[r.avg_likes for r in rows],
        )
        layout["xaxis"].update(
            type="date",
            tickformat="%m/%d",
            tickangle=-35,
            nticks=max(len(rows), 2),
        )
        fig.update_layout(**layout)
        logger.debug(f"lineplot: {len(rows)} points")
        return fig.to_dict()

    def make_figure(self, kind: ChartKind | str, aggregate: pd.DataFrame, *, title: Optional[str] = None) -> dict:
        """Dispatch on chart kind (ChartKind or its value: 'boxplot', 'barplot', 'lineplot').

        Raises:
            ValueError: For an unknown kind.
        """
        kind = ChartKind(kind)
        logger.info(f"FigureGenerator.make_figure: kind={kind.value}, rows={len(aggregate)}")
        if kind == ChartKind.BOXPLOT:
            result = self.boxplot(aggregate)
        elif kind == ChartKind.BARPLOT:
            result = self.grouped_barplot(aggregate)
        else:
            result = self.lineplot(aggregate)
        if title:
            result.setdefault("layout", {})["title"] = {"text": title}
        return result

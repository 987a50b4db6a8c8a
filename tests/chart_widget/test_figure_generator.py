"""Unit tests: Plotly figure dicts built from the three aggregates.

Note: plotly fig.to_dict() may use binary serialization (bdata/dtype) for
numeric arrays; _values() decodes that.
"""

from __future__ import annotations

import base64
from typing import Any

import numpy as np
import pandas as pd
import pytest

from engagement_charts.chart_widget.algorithms.daily_mean import daily_means
from engagement_charts.chart_widget.algorithms.five_number import group_five_number_summaries
from engagement_charts.chart_widget.algorithms.two_key_mean import two_key_means
from engagement_charts.chart_widget.chart_config import BOXPLOT_LAYOUT, ChartKind, ChartLayout
from engagement_charts.chart_widget.figure_generator import POST_TYPE_COLORS, FigureGenerator
from engagement_charts.chart_widget.records import coerce_likes


def _values(obj: Any) -> list:
    """Decode plotly binary serialization (dtype + bdata) if present."""
    if isinstance(obj, dict) and "bdata" in obj and "dtype" in obj:
        b = base64.b64decode(obj["bdata"])
        return np.frombuffer(b, dtype=np.dtype(obj["dtype"])).tolist()
    return list(np.asarray(obj).tolist())


@pytest.fixture
def fg() -> FigureGenerator:
    return FigureGenerator()


@pytest.fixture
def records(raw_records) -> pd.DataFrame:
    return coerce_likes(raw_records)


def test_boxplot_uses_precomputed_summary(fg):
    df = pd.DataFrame({"AgeGroup": ["18-25"] * 3 + ["26-35"], "Likes": [10.0, 20.0, 30.0, 5.0]})
    fig = fg.boxplot(group_five_number_summaries(df))

    assert len(fig["data"]) == 1
    box = fig["data"][0]
    assert box["type"] == "box"
    assert _values(box["x"]) == ["18-25", "26-35"]
    assert _values(box["lowerfence"]) == [10.0, 5.0]
    assert _values(box["q1"]) == [15.0, 5.0]
    assert _values(box["median"]) == [20.0, 5.0]
    assert _values(box["q3"]) == [25.0, 5.0]
    assert _values(box["upperfence"]) == [30.0, 5.0]
    assert box["fillcolor"] == "#cfe8ff"


def test_boxplot_layout_size_titles_and_y_range(fg):
    df = pd.DataFrame({"AgeGroup": ["a", "a"], "Likes": [3.0, 93.0]})
    layout = fg.boxplot(group_five_number_summaries(df))["layout"]
    assert layout["width"] == BOXPLOT_LAYOUT.width
    assert layout["height"] == BOXPLOT_LAYOUT.height
    assert layout["margin"] == {"l": 70, "r": 30, "t": 30, "b": 60}
    assert list(layout["yaxis"]["range"]) == [0.0, 100.0]
    assert layout["xaxis"]["title"]["text"] == "Age Group"
    assert layout["yaxis"]["title"]["text"] == "Likes"


def test_boxplot_skips_empty_groups(fg):
    """A group with no finite values gets no box, but keeps its axis slot."""
    df = pd.DataFrame({"AgeGroup": ["a", "b"], "Likes": [1.0, np.nan]})
    fig = fg.boxplot(group_five_number_summaries(df))
    assert _values(fig["data"][0]["x"]) == ["a"]
    assert list(fig["layout"]["xaxis"]["categoryarray"]) == ["a", "b"]


def test_boxplot_all_groups_empty_has_no_trace(fg):
    df = pd.DataFrame({"AgeGroup": ["a"], "Likes": [np.nan]})
    fig = fg.boxplot(group_five_number_summaries(df))
    assert fig["data"] == [] or len(fig["data"]) == 0
    assert list(fig["layout"]["yaxis"]["range"]) == [0.0, 1.0]


def test_grouped_barplot_one_trace_per_post_type(fg, records):
    fig = fg.grouped_barplot(two_key_means(records))
    names = [t["name"] for t in fig["data"]]
    # inner keys in first-seen order
    assert names == ["Photo", "Video", "Link"]
    assert all(t["type"] == "bar" for t in fig["data"])
    assert fig["layout"]["barmode"] == "group"
    assert fig["layout"]["showlegend"] is True
    assert [t["marker"]["color"] for t in fig["data"]] == POST_TYPE_COLORS


def test_grouped_barplot_bar_heights(fg, records):
    fig = fg.grouped_barplot(two_key_means(records))
    photo = next(t for t in fig["data"] if t["name"] == "Photo")
    heights = dict(zip(_values(photo["x"]), _values(photo["y"])))
    assert heights == {"Instagram": 150.0, "Facebook": 10.0}


def test_grouped_barplot_skips_nan_means(fg, records):
    """Twitter/Link only has a non-numeric value -> no bar, trace still present for the legend."""
    fig = fg.grouped_barplot(two_key_means(records))
    link = next(t for t in fig["data"] if t["name"] == "Link")
    assert _values(link["x"]) == []


def test_grouped_barplot_colors_cycle():
    df = pd.DataFrame({
        "Platform": ["A"] * 4,
        "PostType": ["p", "q", "r", "s"],
        "Likes": [1.0, 2.0, 3.0, 4.0],
    })
    fig = FigureGenerator().grouped_barplot(two_key_means(df))
    assert fig["data"][3]["marker"]["color"] == POST_TYPE_COLORS[0]


def test_lineplot_points_sorted_with_markers(fg, records):
    fig = fg.lineplot(daily_means(records))
    trace = fig["data"][0]
    assert trace["type"] == "scatter"
    assert trace["mode"] == "lines+markers"
    assert trace["line"]["shape"] == "spline"
    assert trace["line"]["color"] == "steelblue"
    # 3/3 has a NaN mean and is not drawn
    assert _values(trace["text"]) == ["3/1/2024", "3/2/2024"]
    assert _values(trace["y"]) == [125.0, 65.0]
    assert fig["layout"]["xaxis"]["tickformat"] == "%m/%d"
    assert fig["layout"]["xaxis"]["tickangle"] == -35


def test_custom_layout_is_applied():
    small = ChartLayout(top=5, right=5, bottom=5, left=5, width=300, height=200)
    fig = FigureGenerator(lineplot_layout=small).lineplot(
        daily_means(pd.DataFrame({"Date": ["3/1/2024"], "Likes": [1.0]}))
    )
    assert fig["layout"]["width"] == 300
    assert fig["layout"]["height"] == 200


@pytest.mark.parametrize("kind", [ChartKind.BOXPLOT, "barplot", "lineplot"])
def test_make_figure_dispatch(fg, records, kind):
    aggregates = {
        "boxplot": group_five_number_summaries(records),
        "barplot": two_key_means(records),
        "lineplot": daily_means(records),
    }
    name = ChartKind(kind).value
    fig = fg.make_figure(kind, aggregates[name], title="T")
    assert fig["data"]
    assert fig["layout"]["title"] == {"text": "T"}


def test_make_figure_unknown_kind_raises(fg, records):
    with pytest.raises(ValueError):
        fg.make_figure("pie", two_key_means(records))

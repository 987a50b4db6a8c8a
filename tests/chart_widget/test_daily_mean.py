"""Unit tests for date normalization and the daily mean aggregator (line chart data)."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from engagement_charts.chart_widget.algorithms.daily_mean import (
    daily_means,
    normalize_date_key,
    parse_date_key,
)
from engagement_charts.chart_widget.records import coerce_likes


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("3/2/2024 (Saturday)", "3/2/2024"),
        ("3/2/2024", "3/2/2024"),
        ("3/2\t(Sat)", "3/2"),
        ("", ""),
        (None, ""),
        (np.nan, ""),
    ],
)
def test_normalize_date_key(raw, expected):
    assert normalize_date_key(raw) == expected


def test_parse_full_date():
    assert parse_date_key("3/2/2024") == pd.Timestamp(2024, 3, 2)


def test_parse_month_day_without_year():
    ts = parse_date_key("3/7")
    assert (ts.month, ts.day) == (3, 7)
    assert ts.year == 1904


def test_parse_leap_day_without_year():
    ts = parse_date_key("2/29")
    assert (ts.month, ts.day) == (2, 29)


def test_daily_means_keeps_year_less_leap_day():
    df = pd.DataFrame({
        "Date": ["3/1 (Friday)", "2/29 (Thursday)"],
        "Likes": [10.0, 20.0],
    })
    out = daily_means(df)
    assert out["Date"].tolist() == ["2/29", "3/1"]
    assert out["AvgLikes"].tolist() == [20.0, 10.0]


@pytest.mark.parametrize("key", ["not-a-date", "", "2024-03-02", "13/45/2024"])
def test_parse_unparseable_is_nat(key):
    assert pd.isna(parse_date_key(key))


def test_daily_means_groups_by_normalized_date_and_sorts(raw_records):
    out = daily_means(coerce_likes(raw_records))
    assert out.columns.tolist() == ["Date", "DateObj", "AvgLikes"]
    assert out["Date"].tolist() == ["3/1/2024", "3/2/2024", "3/3/2024"]
    assert out["DateObj"].is_monotonic_increasing
    # 3/1: 200, 50 ; 3/2: 100, 30
    assert out["AvgLikes"].iloc[0] == 125.0
    assert out["AvgLikes"].iloc[1] == 65.0


def test_unparseable_date_is_excluded_not_null(raw_records):
    out = daily_means(coerce_likes(raw_records))
    assert "not-a-date" not in set(out["Date"])
    assert out["DateObj"].notna().all()


def test_date_with_only_bad_likes_keeps_nan_mean(raw_records):
    """3/3 only has 'abc' likes: the date parses, so it stays with a NaN mean."""
    out = daily_means(coerce_likes(raw_records)).set_index("Date")
    assert np.isnan(out.loc["3/3/2024", "AvgLikes"])


def test_mixed_formats_sort_chronologically():
    df = pd.DataFrame({
        "Date": ["3/5/2024 (Tuesday)", "3/1", "3/3/2024 (Sunday)"],
        "Likes": [1.0, 2.0, 3.0],
    })
    out = daily_means(df)
    # year-less date parses to 1904, so it sorts first
    assert out["Date"].tolist() == ["3/1", "3/3/2024", "3/5/2024"]


def test_missing_date_column_raises():
    with pytest.raises(KeyError):
        daily_means(pd.DataFrame({"Likes": [1.0]}))


def test_input_not_mutated(raw_records):
    df = coerce_likes(raw_records)
    before = df.copy()
    daily_means(df)
    pd.testing.assert_frame_equal(df, before)

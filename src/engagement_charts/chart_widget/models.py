"""Typed rows for the three chart aggregates.

The aggregators return DataFrames; FigureGenerator walks them as these
read-only dataclasses.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import pandas as pd

from engagement_charts.chart_widget.algorithms.daily_mean import DATE_OBJ_COL
from engagement_charts.chart_widget.algorithms.five_number import SUMMARY_FIELDS
from engagement_charts.chart_widget.algorithms.two_key_mean import MEAN_COL
from engagement_charts.chart_widget.records import AGE_GROUP_COL, DATE_COL, PLATFORM_COL, POST_TYPE_COL


def _is_finite(x: Any) -> bool:
    try:
        return math.isfinite(float(x))
    except (TypeError, ValueError):
        return False


@dataclass(frozen=True)
class GroupSummary:
    """Five-number summary of one group; all fields NaN when the group had no finite values."""
    group: str
    min: float
    q1: float
    median: float
    q3: float
    max: float

    @property
    def is_empty(self) -> bool:
        return not all(_is_finite(getattr(self, f)) for f in SUMMARY_FIELDS)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, key_col: str = AGE_GROUP_COL) -> list["GroupSummary"]:
        return [
            cls(group=str(row[key_col]), **{f: float(row[f]) for f in SUMMARY_FIELDS})
            for _, row in df.iterrows()
        ]


@dataclass(frozen=True)
class PlatformTypeMean:
    """Mean likes for one (platform, post type) pair."""
    platform: str
    post_type: str
    avg_likes: float

    @property
    def is_finite(self) -> bool:
        return _is_finite(self.avg_likes)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        outer_col: str = PLATFORM_COL,
        inner_col: str = POST_TYPE_COL,
        mean_col: str = MEAN_COL,
    ) -> list["PlatformTypeMean"]:
        return [
            cls(platform=str(o), post_type=str(i), avg_likes=float(m))
            for o, i, m in zip(df[outer_col], df[inner_col], df[mean_col])
        ]


@dataclass(frozen=True)
class DailyMean:
    """Mean likes for one normalized date."""
    date: str
    date_obj: pd.Timestamp
    avg_likes: float

    @property
    def is_finite(self) -> bool:
        return _is_finite(self.avg_likes)

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        date_col: str = DATE_COL,
        mean_col: str = MEAN_COL,
    ) -> list["DailyMean"]:
        return [
            cls(date=str(d), date_obj=pd.Timestamp(t), avg_likes=float(m))
            for d, t, m in zip(df[date_col], df[DATE_OBJ_COL], df[mean_col])
        ]

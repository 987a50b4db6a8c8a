"""
Mean of a value column per calendar day, for the time-series line chart.

Raw dates may carry a trailing annotation after whitespace, e.g.
"3/2/2024 (Saturday)". The part before the first whitespace is both the
grouping key and the text parsed into a date:

  1. "%m/%d/%Y"  (3/2/2024)
  2. "%m/%d"     (3/2, year unresolved -> 1904, a leap year; fine for ordering only)

The first format that parses wins. Keys that match neither format are dropped
together with their mean. The result is sorted by the parsed date.
"""

from __future__ import annotations

import pandas as pd

from engagement_charts.chart_widget.algorithms.two_key_mean import MEAN_COL
from engagement_charts.chart_widget.records import DATE_COL, LIKES_COL, require_numeric
from engagement_charts.utils.logging import get_logger

logger = get_logger(__name__)

DATE_FORMATS = ("%m/%d/%Y", "%m/%d")
DATE_OBJ_COL = "DateObj"
# year-less keys get a leap year so 2/29 parses
YEARLESS_REFERENCE_YEAR = 1904


def normalize_date_key(raw) -> str:
    """Return the text before the first whitespace, or "" for a missing date."""
    if raw is None or (not isinstance(raw, str) and pd.isna(raw)):
        return ""
    parts = str(raw).split(maxsplit=1)
    return parts[0] if parts else ""


def parse_date_keys(keys: pd.Series) -> pd.Series:
    """Parse normalized keys with DATE_FORMATS in order; unparseable -> NaT."""
    keys = keys.astype(str)
    parsed = pd.Series(pd.NaT, index=keys.index, dtype="datetime64[ns]")
    for fmt in DATE_FORMATS:
        todo = parsed.isna()
        if not todo.any():
            break
        if "%Y" in fmt:
            parsed[todo] = pd.to_datetime(keys[todo], format=fmt, errors="coerce")
        else:
            with_year = keys[todo] + f"/{YEARLESS_REFERENCE_YEAR}"
            parsed[todo] = pd.to_datetime(with_year, format=f"{fmt}/%Y", errors="coerce")
    return parsed


def parse_date_key(key: str) -> pd.Timestamp:
    """Parse one normalized key; returns NaT when no format matches."""
    return parse_date_keys(pd.Series([key])).iloc[0]


def daily_means(
    df: pd.DataFrame,
    date_col: str = DATE_COL,
    value_col: str = LIKES_COL,
    *,
    mean_col: str = MEAN_COL,
) -> pd.DataFrame:
    """One mean per normalized date, sorted ascending by parsed date.

    Args:
        df: Records with value_col already numeric.
        date_col: Raw date text column.
        value_col: Numeric column to average.
        mean_col: Output column name for the mean.

    Returns:
        DataFrame with columns [date_col, "DateObj", mean_col]. Dates that do
        not parse are not included.
    """
    if date_col not in df.columns:
        raise KeyError(f"df must contain column {date_col!r}; found {list(df.columns)}")

    tmp = pd.DataFrame({
        date_col: df[date_col].map(normalize_date_key),
        mean_col: require_numeric(df, value_col),
    })
    agg = tmp.groupby(date_col, sort=False)[mean_col].mean().reset_index()
    agg[DATE_OBJ_COL] = parse_date_keys(agg[date_col])

    unparsed = agg[DATE_OBJ_COL].isna()
    if unparsed.any():
        logger.debug(f"daily_means: dropping unparseable date keys {agg.loc[unparsed, date_col].tolist()}")

    out = agg.loc[~unparsed].sort_values(DATE_OBJ_COL, kind="stable").reset_index(drop=True)
    return out[[date_col, DATE_OBJ_COL, mean_col]]

"""
Five-number summary per group, for the age-group boxplot.

For each group the finite values are sorted ascending; min and max are the
first and last elements, and q1/median/q3 are interpolated quantiles at
0.25/0.50/0.75 using the sorted-sample rule index = f * (n - 1), linearly
interpolated between the floor and ceil neighbours (numpy's "linear" method).

A group whose values are all missing still gets a row, with every field NaN.
The boxplot renderer skips such rows.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from engagement_charts.chart_widget.records import (
    AGE_GROUP_COL,
    LIKES_COL,
    KeyExtractor,
    key_name,
    require_numeric,
    resolve_key,
)

SUMMARY_FIELDS = ("min", "q1", "median", "q3", "max")
QUANTILE_FRACTIONS = (0.25, 0.50, 0.75)


def five_number_summary(values) -> dict[str, float]:
    """Compute {min, q1, median, q3, max} over the finite entries of values.

    Returns all-NaN fields when there are no finite values.
    """
    arr = np.asarray(values, dtype=float)
    arr = np.sort(arr[np.isfinite(arr)])
    if arr.size == 0:
        return dict.fromkeys(SUMMARY_FIELDS, np.nan)
    q1, median, q3 = np.quantile(arr, QUANTILE_FRACTIONS, method="linear")
    return {
        "min": float(arr[0]),
        "q1": float(q1),
        "median": float(median),
        "q3": float(q3),
        "max": float(arr[-1]),
    }


def group_five_number_summaries(
    df: pd.DataFrame,
    key: KeyExtractor = AGE_GROUP_COL,
    value_col: str = LIKES_COL,
) -> pd.DataFrame:
    """One five-number summary per distinct key value.

    Args:
        df: Records with value_col already numeric (see coerce_likes).
        key: Grouping column name or key extractor.
        value_col: Numeric column to summarise.

    Returns:
        DataFrame with the key column followed by min, q1, median, q3, max;
        one row per group in first-seen key order. Rows with a missing key
        are ignored.
    """
    keys = resolve_key(df, key)
    y = require_numeric(df, value_col)
    name = key_name(key, "key")

    rows = []
    for group, sub in y.groupby(keys, sort=False):
        rows.append({name: group, **five_number_summary(sub.to_numpy())})
    return pd.DataFrame(rows, columns=[name, *SUMMARY_FIELDS])

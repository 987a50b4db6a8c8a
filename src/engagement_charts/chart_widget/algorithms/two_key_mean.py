"""
Mean of a value column for every (outer, inner) key pair present in the data.

Used by the grouped bar chart: outer = Platform (x buckets), inner = PostType
(bars inside each bucket, and the legend).

Ordering: outer keys appear in first-seen order and, inside each outer key,
inner keys appear in first-seen order, the same as a nested group-by built in
one pass over the records. With sort_keys=True both levels are sorted
lexically instead so the output does not depend on input row order.

Combinations that never occur are not synthesized.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from engagement_charts.chart_widget.records import (
    LIKES_COL,
    PLATFORM_COL,
    POST_TYPE_COL,
    KeyExtractor,
    key_name,
    require_numeric,
    resolve_key,
)

MEAN_COL = "AvgLikes"


def two_key_means(
    df: pd.DataFrame,
    outer: KeyExtractor = PLATFORM_COL,
    inner: KeyExtractor = POST_TYPE_COL,
    value_col: str = LIKES_COL,
    *,
    sort_keys: bool = False,
    names: Optional[tuple[str, str]] = None,
    mean_col: str = MEAN_COL,
) -> pd.DataFrame:
    """Flattened (outer, inner, mean) triples.

    Args:
        df: Records with value_col already numeric.
        outer: Outer grouping column or key extractor.
        inner: Inner grouping column or key extractor.
        value_col: Numeric column to average. NaN values are skipped; a pair
            with no finite value gets a NaN mean.
        sort_keys: Sort both key levels lexically instead of first-seen order.
        names: Output column names for (outer, inner). Defaults to the key
            column names, or "outer"/"inner" for callables.
        mean_col: Output column name for the mean.

    Returns:
        DataFrame with columns [outer_name, inner_name, mean_col].
    """
    outer_name, inner_name = names or (key_name(outer, "outer"), key_name(inner, "inner"))
    if outer_name == inner_name:
        raise ValueError(f"outer and inner output names must differ, got {outer_name!r} twice")

    tmp = pd.DataFrame({
        outer_name: resolve_key(df, outer),
        inner_name: resolve_key(df, inner),
        mean_col: require_numeric(df, value_col),
    }).dropna(subset=[outer_name, inner_name])

    agg = (
        tmp.groupby([outer_name, inner_name], sort=sort_keys)[mean_col]
        .mean()
        .reset_index()
    )

    if not sort_keys:
        # pair order is first-seen per pair; regroup so each outer key's pairs are contiguous
        outer_rank = {k: i for i, k in enumerate(pd.unique(tmp[outer_name]))}
        order = agg[outer_name].map(outer_rank).to_numpy()
        agg = agg.iloc[order.argsort(kind="stable")].reset_index(drop=True)

    return agg[[outer_name, inner_name, mean_col]]

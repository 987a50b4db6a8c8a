"""Record columns and numeric coercion for the social-media dataset.

The loader reads every column as text; coerce_likes() turns the Likes column
into floats so the aggregators can work on it. Values that are not finite
non-negative numbers become NaN and drop out of every statistic.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Union

import numpy as np
import pandas as pd

from engagement_charts.utils.logging import get_logger

logger = get_logger(__name__)

PLATFORM_COL = "Platform"
POST_TYPE_COL = "PostType"
AGE_GROUP_COL = "AgeGroup"
DATE_COL = "Date"
LIKES_COL = "Likes"

RECORD_COLUMNS = (PLATFORM_COL, POST_TYPE_COL, AGE_GROUP_COL, DATE_COL, LIKES_COL)

# column name, or a callable returning one key per row
KeyExtractor = Union[str, Callable[[pd.DataFrame], pd.Series]]


class CoercionError(ValueError):
    """A value column could not be used as numbers."""


def coerce_likes(
    df: pd.DataFrame,
    *,
    value_col: str = LIKES_COL,
    strict: bool = False,
) -> pd.DataFrame:
    """Return a copy of df with value_col converted to float.

    Args:
        df: Records as loaded (strings are fine).
        value_col: Column to convert.
        strict: If True, raise CoercionError when any non-empty value does not
            parse as a number. If False, such values become NaN.

    Returns:
        New dataframe; df is left untouched.

    Raises:
        KeyError: If value_col is missing.
        CoercionError: In strict mode, for unparseable values.
    """
    if value_col not in df.columns:
        raise KeyError(f"df must contain column {value_col!r}; found {list(df.columns)}")

    raw = df[value_col]
    y = pd.to_numeric(raw, errors="coerce").astype(float)

    # empty cells are missing data, not parse failures
    blank = raw.isna() | raw.astype(str).str.strip().eq("")
    unparsed = y.isna() & ~blank
    if strict and unparsed.any():
        bad = raw[unparsed].astype(str).unique().tolist()[:5]
        raise CoercionError(
            f"{int(unparsed.sum())} value(s) in {value_col!r} are not numbers, e.g. {bad}"
        )

    invalid = ~np.isfinite(y) | (y < 0)
    n_dropped = int((invalid & ~blank).sum())
    if n_dropped:
        logger.warning(f"coerce_likes: {n_dropped} non-finite or negative {value_col!r} value(s) set to NaN")

    out = df.copy()
    out[value_col] = y.where(~invalid, np.nan)
    return out


def require_numeric(df: pd.DataFrame, value_col: str) -> pd.Series:
    """Return df[value_col] as float, raising CoercionError if it was never coerced."""
    if value_col not in df.columns:
        raise KeyError(f"df must contain column {value_col!r}; found {list(df.columns)}")
    s = df[value_col]
    if not pd.api.types.is_numeric_dtype(s):
        raise CoercionError(f"column {value_col!r} is {s.dtype}; run coerce_likes() first")
    return s.astype(float)


def resolve_key(df: pd.DataFrame, key: KeyExtractor) -> pd.Series:
    """Turn a grouping key (column name or callable) into a Series aligned with df."""
    if callable(key):
        s = key(df)
        if not isinstance(s, pd.Series):
            s = pd.Series(s, index=df.index)
        return s
    if key not in df.columns:
        raise KeyError(f"df must contain grouping column {key!r}; found {list(df.columns)}")
    return df[key]


def key_name(key: KeyExtractor, default: str) -> str:
    """Column name to use for a key in aggregate output."""
    return key if isinstance(key, str) else default


class DatasetLoadError(RuntimeError):
    """The dataset file could not be read."""


def read_social_media_csv(path: Union[str, Path]) -> pd.DataFrame:
    """Read the dataset with every column as text; only empty cells become NaN.

    No schema check is done here: a chart whose column is missing fails on
    its own when it aggregates.

    Raises:
        DatasetLoadError: If the file is missing, unreadable, empty or not parseable.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""], skipinitialspace=True)
    except FileNotFoundError as e:
        raise DatasetLoadError(f"Dataset not found: {path}") from e
    except OSError as e:
        raise DatasetLoadError(f"Could not read dataset {path}: {e}") from e
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise DatasetLoadError(f"Could not parse dataset {path}: {e}") from e
    df.columns = [str(c).strip() for c in df.columns]
    logger.info(f"read_social_media_csv: {len(df)} rows, columns={list(df.columns)} from {path}")
    return df

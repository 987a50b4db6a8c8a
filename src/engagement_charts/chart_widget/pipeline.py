"""Load once, then fan out to one chain per chart.

The dataset is read off the event loop a single time. Each ChartChain then
receives the same loaded frame (read-only), aggregates it and hands the
aggregate to its renderer. Chains share nothing else: one chain raising
(e.g. a missing column) is logged and reported in its ChainResult while the
other chains still render.

A load failure is not swallowed; it propagates to the caller of run_chains().
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

import pandas as pd

from engagement_charts.chart_widget.algorithms.daily_mean import daily_means
from engagement_charts.chart_widget.algorithms.five_number import group_five_number_summaries
from engagement_charts.chart_widget.algorithms.two_key_mean import two_key_means
from engagement_charts.chart_widget.chart_config import ChartKind
from engagement_charts.chart_widget.figure_generator import FigureGenerator
from engagement_charts.chart_widget.records import coerce_likes, read_social_media_csv
from engagement_charts.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartChain:
    """One Aggregate -> Render chain.

    Attributes:
        name: Chain/container name (e.g. "boxplot").
        transform: Pure function from the loaded records to an aggregate.
        render: Called with the aggregate; draws it.
    """
    name: str
    transform: Callable[[pd.DataFrame], Any]
    render: Callable[[Any], None]


@dataclass(frozen=True)
class ChainResult:
    """Outcome of one chain run."""
    name: str
    aggregate: Any = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def load_dataset(path: Union[str, Path], *, strict: bool = False) -> pd.DataFrame:
    """Read the CSV in a worker thread and coerce Likes to numbers.

    Raises:
        DatasetLoadError: If the file cannot be read.
        CoercionError: In strict mode, for non-numeric Likes.
    """
    raw = await asyncio.to_thread(read_social_media_csv, path)
    return coerce_likes(raw, strict=strict)


def _run_chain(chain: ChartChain, df: pd.DataFrame) -> ChainResult:
    """Run one chain synchronously, converting any failure into a ChainResult."""
    try:
        aggregate = chain.transform(df)
        chain.render(aggregate)
    except Exception as e:
        logger.exception(f"chain {chain.name!r} failed: {e}")
        return ChainResult(name=chain.name, error=e)
    logger.info(f"chain {chain.name!r} rendered")
    return ChainResult(name=chain.name, aggregate=aggregate)


async def run_chains(
    dataset: Union[Awaitable[pd.DataFrame], pd.DataFrame],
    chains: Sequence[ChartChain],
) -> dict[str, ChainResult]:
    """Await the dataset once and run every chain against it.

    Args:
        dataset: A coroutine/future resolving to the coerced records, or the
            records themselves.
        chains: Chains to run; names must be unique.

    Returns:
        Mapping chain name -> ChainResult, in chain order.

    Raises:
        ValueError: On duplicate chain names (a pending dataset coroutine is closed).
        DatasetLoadError: If loading fails (no chain runs).
    """
    names = [c.name for c in chains]
    if len(set(names)) != len(names):
        if inspect.iscoroutine(dataset):
            dataset.close()
        raise ValueError(f"Chain names must be unique, got {names}")

    if isinstance(dataset, pd.DataFrame):
        df = dataset
    else:
        df = await asyncio.ensure_future(dataset)

    async def _continue(chain: ChartChain) -> ChainResult:
        return _run_chain(chain, df)

    results = await asyncio.gather(*(_continue(c) for c in chains))
    failed = [r.name for r in results if not r.ok]
    if failed:
        logger.warning(f"run_chains: {len(failed)} of {len(results)} chain(s) failed: {failed}")
    return {r.name: r for r in results}


def default_chains(
    renderers: dict[ChartKind, Callable[[dict], None]],
    *,
    figure_generator: Optional[FigureGenerator] = None,
    sort_keys: bool = False,
) -> list[ChartChain]:
    """The boxplot, grouped bar and line chart chains.

    Args:
        renderers: Per chart kind, a callable receiving the Plotly figure dict
            (typically ChartPanel.show).
        figure_generator: Builds the figures; a default one if omitted.
        sort_keys: Passed to two_key_means() for deterministic bar ordering.
    """
    fg = figure_generator or FigureGenerator()

    def _render(kind: ChartKind) -> Callable[[pd.DataFrame], None]:
        def _draw(aggregate: pd.DataFrame) -> None:
            renderers[kind](fg.make_figure(kind, aggregate))
        return _draw

    return [
        ChartChain(
            name=ChartKind.BOXPLOT.value,
            transform=group_five_number_summaries,
            render=_render(ChartKind.BOXPLOT),
        ),
        ChartChain(
            name=ChartKind.BARPLOT.value,
            transform=lambda df: two_key_means(df, sort_keys=sort_keys),
            render=_render(ChartKind.BARPLOT),
        ),
        ChartChain(
            name=ChartKind.LINEPLOT.value,
            transform=daily_means,
            render=_render(ChartKind.LINEPLOT),
        ),
    ]

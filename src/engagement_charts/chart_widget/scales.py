"""Linear y-domain helpers for the charts.

Every chart uses a [0, max] y domain extended to a round upper bound, the
same way a "nice" linear scale does: pick a 1/2/5 x 10^k tick step for about
`count` ticks and round the max up to a multiple of it.
"""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np


def tick_increment(start: float, stop: float, count: int = 10) -> float:
    """Tick step of the form 1, 2 or 5 x 10^k for roughly `count` ticks over [start, stop]."""
    step = (stop - start) / max(count, 1)
    if step <= 0:
        return 0.0
    power = math.floor(math.log10(step))
    error = step / 10 ** power
    if error >= math.sqrt(50):
        factor = 10
    elif error >= math.sqrt(10):
        factor = 5
    elif error >= math.sqrt(2):
        factor = 2
    else:
        factor = 1
    return factor * 10 ** power


def nice_upper_bound(max_value: float, count: int = 10) -> float:
    """Round max_value up so that [0, max] ends on a tick.

    Non-positive or non-finite input returns 0.
    """
    if not math.isfinite(max_value) or max_value <= 0:
        return 0.0
    stop = float(max_value)
    prev_step = None
    # settles within a couple of passes; the cap guards float oscillation
    for _ in range(10):
        step = tick_increment(0.0, stop, count)
        if step == prev_step or step <= 0:
            break
        stop = math.ceil(stop / step) * step
        prev_step = step
    return float(round(stop, 12))


def y_domain(values: Iterable[float], count: int = 10) -> list[float]:
    """[0, nice max] over the finite values; [0, 1] when there are none or all are 0."""
    arr = np.asarray(list(values), dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return [0.0, 1.0]
    top = nice_upper_bound(float(arr.max()), count)
    return [0.0, top if top > 0 else 1.0]

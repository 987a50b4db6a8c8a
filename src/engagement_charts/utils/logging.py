"""Logger setup for the chart pipeline and the chart page.

Modules under chart_widget/ only call get_logger(__name__); loading,
coercion warnings, skipped boxes and failed chains all log through the
"engagement_charts" logger. chart_app.main() is the one caller of
configure_logging(), which attaches a stderr handler to that logger with the
level from ENGAGEMENT_CHARTS_LOG_LEVEL. Nothing is written to disk.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "engagement_charts"
LOG_LEVEL_ENV = "ENGAGEMENT_CHARTS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the engagement_charts logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        ENGAGEMENT_CHARTS_LOG_LEVEL env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        do nothing when a stderr handler is already attached.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    formatter = logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'engagement_charts' package logger.
    """
    if name is None:
        name = PACKAGE_LOGGER
    return logging.getLogger(name)

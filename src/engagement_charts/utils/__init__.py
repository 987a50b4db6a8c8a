"""Utility functions for engagement_charts.

setUpGuiDefaults lives in engagement_charts.utils.gui_defaults and is not
re-exported here so that the headless modules never import nicegui.
"""

from .logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]

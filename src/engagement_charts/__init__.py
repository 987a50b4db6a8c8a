"""
engagement_charts: boxplot, grouped bar and time-series charts of social-media engagement.

This package provides:
- Aggregators over a social-media dataset (five-number summary per age group,
  mean likes per platform/post type, mean likes per day)
- Plotly figure generation for the three charts
- A NiceGUI page that loads the dataset once and renders each chart into its
  own container
- Logging utilities for library and application use

For logging configuration in scripts:
    ```python
    from engagement_charts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from engagement_charts.utils.logging import configure_logging, get_logger

# NullHandler so logs don't reach the root logger unless an application
# configures logging. The chart app calls configure_logging() to add a real handler.
_logger = logging.getLogger("engagement_charts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "configure_logging",
    "get_logger",
]

__version__ = "0.1.0"

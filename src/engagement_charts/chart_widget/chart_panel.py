"""Named chart container on the NiceGUI page.

A ChartPanel owns one container element. Every show()/show_error() clears the
container first, so rendering the same chart again replaces it instead of
stacking a second plot underneath.
"""

from __future__ import annotations

from typing import Optional

from nicegui import ui

from engagement_charts.utils.logging import get_logger

logger = get_logger(__name__)


class ChartPanel:
    """One chart slot (e.g. 'boxplot') on the page.

    Args:
        name: Container name, also used as the element's HTML id.
        title: Optional heading shown above the chart.
        container: Existing element to draw into. A new ui.column is created
            when omitted (call inside the parent's `with` block).
    """

    def __init__(
        self,
        name: str,
        *,
        title: Optional[str] = None,
        container: Optional[ui.element] = None,
    ) -> None:
        self.name = name
        self.title = title
        self._container = container if container is not None else ui.column().classes("w-full")
        self._container.props(f"id={name}")
        self._plot: Optional[ui.plotly] = None
        self.render_count = 0

    @property
    def container(self) -> ui.element:
        return self._container

    def show(self, figure: dict) -> None:
        """Replace the container content with the given Plotly figure dict."""
        self._container.clear()
        with self._container:
            if self.title:
                ui.label(self.title).classes("text-lg font-bold")
            self._plot = ui.plotly(figure).classes("w-full")
        self.render_count += 1
        logger.debug(f"ChartPanel[{self.name}]: rendered (count={self.render_count})")

    def show_error(self, message: str) -> None:
        """Replace the container content with an error message."""
        self._container.clear()
        self._plot = None
        with self._container:
            if self.title:
                ui.label(self.title).classes("text-lg font-bold")
            ui.label(message).classes("text-negative")
        logger.debug(f"ChartPanel[{self.name}]: error shown: {message}")

    def show_loading(self) -> None:
        """Replace the container content with a spinner."""
        self._container.clear()
        self._plot = None
        with self._container:
            ui.spinner(size="md")

"""Header component for the chart app.

Provides build_chart_header() with title, dataset name and a reload button.
"""

from __future__ import annotations

from typing import Awaitable, Callable

from nicegui import ui


def build_chart_header(
    *,
    dataset_name: str,
    on_reload: Callable[[], Awaitable[None]],
    title: str = "Social Media Engagement",
) -> ui.button:
    """Build header with title on the left, dataset name and reload button on the right.

    Args:
        dataset_name: Shown next to the reload button.
        on_reload: Coroutine function re-running all charts.
        title: Header title.

    Returns:
        The reload button.
    """
    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 36px; height: 36px; padding: 0 8px;"
    ):
        with ui.row().classes("items-center gap-2"):
            ui.label(title).classes("!text-lg font-bold italic text-white")

        with ui.row().classes("items-center gap-2"):
            ui.label(dataset_name).classes("text-white")
            reload_btn = ui.button(icon="refresh", on_click=on_reload).props(
                "flat round dense text-color=white"
            ).tooltip("Reload dataset and redraw charts")

    return reload_btn

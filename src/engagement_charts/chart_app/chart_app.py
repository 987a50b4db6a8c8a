"""Chart app: NiceGUI page showing the boxplot, grouped bar chart and line chart.

Uses the @ui.page("/") pattern. The dataset is loaded once per refresh and
fanned out to the three chart chains; each chart lives in its own named
container ("boxplot", "barplot", "lineplot") that is replaced on every refresh.

Run:
    python -m engagement_charts.chart_app.chart_app

Env vars:
    ENGAGEMENT_CHARTS_CSV: dataset path (default data/socialMedia.csv)
    ENGAGEMENT_CHARTS_GUI_NATIVE: 1/0 (default 0)
    ENGAGEMENT_CHARTS_GUI_RELOAD: 1/0 (default 0)
    ENGAGEMENT_CHARTS_LOG_LEVEL: logging level (default INFO)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from nicegui import ui

from engagement_charts.chart_app import header, schema
from engagement_charts.chart_widget.chart_config import ChartKind
from engagement_charts.chart_widget.chart_panel import ChartPanel
from engagement_charts.chart_widget.figure_generator import FigureGenerator
from engagement_charts.chart_widget.pipeline import ChainResult, default_chains, load_dataset, run_chains
from engagement_charts.chart_widget.records import CoercionError, DatasetLoadError
from engagement_charts.utils.gui_defaults import setUpGuiDefaults
from engagement_charts.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

CHART_TITLES = {
    ChartKind.BOXPLOT: "Likes by Age Group",
    ChartKind.BARPLOT: "Average Likes by Platform and Post Type",
    ChartKind.LINEPLOT: "Average Likes per Day",
}


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: int) -> int:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class ChartPage:
    """The three chart panels plus the refresh logic that fills them.

    Args:
        csv_path: Dataset to load on every refresh.
        figure_generator: Builds the Plotly figures; default layouts if omitted.
        sort_keys: Lexical instead of first-seen ordering for the bar chart.
    """

    def __init__(
        self,
        csv_path: Path,
        *,
        figure_generator: Optional[FigureGenerator] = None,
        sort_keys: bool = False,
    ) -> None:
        self.csv_path = Path(csv_path)
        self.figure_generator = figure_generator or FigureGenerator()
        self.sort_keys = sort_keys
        self.panels: dict[ChartKind, ChartPanel] = {}

    def build(self) -> None:
        """Create one named container per chart, in page order."""
        for kind in ChartKind:
            self.panels[kind] = ChartPanel(kind.value, title=CHART_TITLES[kind])

    async def refresh(self) -> dict[str, ChainResult]:
        """Load the dataset and redraw every chart.

        A load failure is shown in every panel; a chain failure only in its own panel.

        Returns:
            Chain results by name; empty when loading failed.
        """
        if not self.panels:
            raise RuntimeError("ChartPage.build() must be called before refresh()")

        for panel in self.panels.values():
            panel.show_loading()

        chains = default_chains(
            {kind: panel.show for kind, panel in self.panels.items()},
            figure_generator=self.figure_generator,
            sort_keys=self.sort_keys,
        )
        try:
            results = await run_chains(load_dataset(self.csv_path), chains)
        except (DatasetLoadError, CoercionError) as e:
            logger.error(f"Failed to load {self.csv_path}: {e}")
            for panel in self.panels.values():
                panel.show_error(f"Failed to load: {e}")
            return {}

        for kind, panel in self.panels.items():
            result = results.get(kind.value)
            if result is not None and not result.ok:
                panel.show_error(f"Failed to draw {kind.value}: {result.error}")
        return results


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
def home() -> None:
    """Home page: header + the three charts."""

    setUpGuiDefaults("text-sm")

    ui.page_title("Social Media Engagement")

    csv_path = schema.resolve_csv_path()
    page = ChartPage(csv_path)

    header.build_chart_header(dataset_name=csv_path.name, on_reload=page.refresh)

    with ui.column().classes("w-full gap-4 p-4"):
        page.build()

    # draw after the client connects so the spinners show first
    ui.timer(0.1, page.refresh, once=True)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the chart app.

    Defaults (no env vars, no args):
      - native=False
      - reload=False
    """
    configure_logging()

    native_bool = _env_bool("ENGAGEMENT_CHARTS_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("ENGAGEMENT_CHARTS_GUI_RELOAD", False) if reload is None else reload

    if native_bool:
        from nicegui import native as native_module
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting chart app: port=%s reload=%s native=%s csv=%s",
        port,
        reload,
        native_bool,
        schema.resolve_csv_path(),
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "title": "Social Media Engagement",
    }
    if native_bool:
        run_kwargs["window_size"] = (1000, 1400)
    ui.run(**run_kwargs)


if __name__ in {"__main__", "__mp_main__"}:
    main()

"""Chart kinds and fixed layout configuration.

This module defines the ChartKind enum and the ChartLayout dataclass holding
the pixel size and margins of each chart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChartKind(Enum):
    """The three charts; values double as container names on the page."""
    BOXPLOT = "boxplot"
    BARPLOT = "barplot"
    LINEPLOT = "lineplot"


@dataclass(frozen=True)
class ChartLayout:
    """Pixel size and margins of one chart.

    width/height are the total size; the plotting area is what is left after
    subtracting the margins.
    """
    top: int
    right: int
    bottom: int
    left: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.inner_width <= 0 or self.inner_height <= 0:
            raise ValueError(
                f"Margins leave no plotting area: width={self.width} height={self.height} "
                f"margins=({self.top}, {self.right}, {self.bottom}, {self.left})"
            )

    @property
    def inner_width(self) -> int:
        return self.width - self.left - self.right

    @property
    def inner_height(self) -> int:
        return self.height - self.top - self.bottom

    def plotly_margin(self) -> dict[str, int]:
        """Margins in Plotly's layout.margin form."""
        return dict(l=self.left, r=self.right, t=self.top, b=self.bottom)

    def to_dict(self) -> dict[str, Any]:
        """Serialize ChartLayout to dictionary."""
        return {
            "margin": {
                "top": self.top,
                "right": self.right,
                "bottom": self.bottom,
                "left": self.left,
            },
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartLayout":
        """Deserialize ChartLayout from dictionary.

        Raises:
            ValueError: If width/height or any margin is missing.
        """
        margin = data.get("margin")
        if not isinstance(margin, dict):
            raise ValueError("ChartLayout needs a 'margin' dict with top/right/bottom/left")
        try:
            return cls(
                top=int(margin["top"]),
                right=int(margin["right"]),
                bottom=int(margin["bottom"]),
                left=int(margin["left"]),
                width=int(data["width"]),
                height=int(data["height"]),
            )
        except KeyError as e:
            raise ValueError(f"ChartLayout is missing {e.args[0]!r}") from e


BOXPLOT_LAYOUT = ChartLayout(top=30, right=30, bottom=60, left=70, width=750, height=420)
BARPLOT_LAYOUT = ChartLayout(top=30, right=200, bottom=70, left=70, width=900, height=430)
LINEPLOT_LAYOUT = ChartLayout(top=30, right=30, bottom=85, left=70, width=900, height=430)

DEFAULT_LAYOUTS: dict[ChartKind, ChartLayout] = {
    ChartKind.BOXPLOT: BOXPLOT_LAYOUT,
    ChartKind.BARPLOT: BARPLOT_LAYOUT,
    ChartKind.LINEPLOT: LINEPLOT_LAYOUT,
}

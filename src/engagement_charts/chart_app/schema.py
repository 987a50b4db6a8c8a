"""Dataset location for the chart app.

Resolves which CSV the page loads: the ENGAGEMENT_CHARTS_CSV env var if set,
otherwise data/socialMedia.csv at the project root.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

# Default CSV to load
DEFAULT_CSV = "socialMedia.csv"
CSV_ENV = "ENGAGEMENT_CHARTS_CSV"


def get_data_dir() -> Path:
    """Resolve the project's data/ directory.

    Package layout: <root>/src/engagement_charts/chart_app/schema.py
    Data: <root>/data/
    """
    # schema.py -> chart_app -> engagement_charts -> src -> project root
    pkg_root = Path(__file__).resolve().parent.parent.parent.parent
    return pkg_root / "data"


def get_data_csv_files() -> list[str]:
    """List .csv filenames in data/ (sorted)."""
    data_dir = get_data_dir()
    if not data_dir.exists():
        return []
    return sorted(f.name for f in data_dir.iterdir() if f.suffix.lower() == ".csv")


def resolve_csv_path(filename: Optional[str] = None) -> Path:
    """Path of the dataset to load.

    Order: explicit filename (relative to data/ unless absolute), then the
    ENGAGEMENT_CHARTS_CSV env var, then data/socialMedia.csv. The file is not
    required to exist; loading reports a missing file.
    """
    name = filename or os.getenv(CSV_ENV) or DEFAULT_CSV
    path = Path(name).expanduser()
    if path.is_absolute():
        return path
    if filename is None and os.getenv(CSV_ENV):
        # env var paths are relative to the working directory
        return path.resolve()
    return get_data_dir() / path

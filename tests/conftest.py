# tests/conftest.py
"""Pytest configuration and shared fixtures."""
from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture
def raw_records() -> pd.DataFrame:
    """Records as the loader returns them (all text)."""
    return pd.DataFrame({
        "Platform": ["Instagram", "Instagram", "Facebook", "Instagram", "Facebook", "Twitter"],
        "PostType": ["Photo", "Photo", "Video", "Video", "Photo", "Link"],
        "AgeGroup": ["18-25", "18-25", "26-35", "18-25", "26-35", "36-45"],
        "Date": [
            "3/2/2024 (Saturday)",
            "3/1/2024 (Friday)",
            "3/2/2024 (Saturday)",
            "3/1/2024 (Friday)",
            "not-a-date",
            "3/3/2024 (Sunday)",
        ],
        "Likes": ["100", "200", "30", "50", "10", "abc"],
    })


@pytest.fixture
def csv_path(tmp_path: Path) -> Path:
    """A small dataset on disk."""
    path = tmp_path / "socialMedia.csv"
    path.write_text(
        "Platform,PostType,AgeGroup,Date,Likes\n"
        "Instagram,Photo,18-25,3/1/2024 (Friday),10\n"
        "Instagram,Photo,18-25,3/1/2024 (Friday),20\n"
        "Instagram,Video,18-25,3/2/2024 (Saturday),30\n"
        "Facebook,Photo,26-35,3/2/2024 (Saturday),40\n"
        "Facebook,Video,26-35,3/3/2024 (Sunday),\n"
    )
    return path

"""Test configuration for the task toolbox."""

from pathlib import Path
import sys

import numpy as np
import pandas as pd
import pytest


# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def mixed_df() -> pd.DataFrame:
    """Small frame with numeric, categorical and ordered columns plus a class target."""
    return pd.DataFrame(
        {
            "num": [1.0, 2.5, 3.0, 4.5, 5.0, 6.5],
            "count": pd.Series([1, 2, 3, 4, 5, 6], dtype="int64"),
            "color": pd.Categorical(["red", "blue", "red", "blue", "red", "blue"]),
            "size": pd.Categorical(
                ["s", "m", "l", "s", "m", "l"],
                categories=["s", "m", "l"],
                ordered=True,
            ),
            "label": pd.Categorical(["yes", "no", "yes", "no", "yes", "no"]),
        },
    )


@pytest.fixture
def empty_level_df() -> pd.DataFrame:
    """Frame whose categorical column ``c`` declares a level ``hi`` that is never observed."""
    return pd.DataFrame(
        {
            "a": [1.0, 2.0, 3.0],
            "c": pd.Categorical(["lo", "mid", "lo"], categories=["lo", "mid", "hi"]),
        },
    )


@pytest.fixture
def spatial_df() -> pd.DataFrame:
    """Frame with coordinates ``x``/``y`` and two features."""
    rng = np.random.default_rng(0)
    return pd.DataFrame(
        {
            "x": rng.uniform(0, 10, size=8),
            "y": rng.uniform(0, 10, size=8),
            "elev": rng.normal(100, 5, size=8),
            "soil": pd.Categorical(["a", "b"] * 4),
        },
    )

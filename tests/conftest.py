"""
Shared test configuration and fixtures.

Adds the repository root to sys.path so `import correlogram_utils`,
`import color_utils` and `from utils.X import Y` work without installing.
"""

import os
import sys

import numpy as np
import pandas as pd
import pytest

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def sample_data():
    """Three numeric columns, one label column and one constant column"""
    rng = np.random.default_rng(7)
    x = np.arange(20, dtype=float)
    return pd.DataFrame({
        'X': x,
        'Y': 2 * x + rng.normal(0, 3, size=20),
        'Z': rng.normal(0, 1, size=20),
        'label': [f"s{i}" for i in range(20)],
        'const': np.ones(20)
    })

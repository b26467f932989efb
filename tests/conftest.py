#!/usr/bin/env python3
"""
Pytest configuration and fixtures
"""

import pytest
import pandas as pd
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from src.analytics.config import load_config


METRIC_COLUMNS = [
    'Progressive Passes', 'Key Passes', 'Interceptions', 'Tackles', 'Tackles Won',
    'Passes into Final Third', 'Long Passes Attempted', 'Long Passes Success %',
    'Total Passes Attempted', 'Total Passes Success %', 'Total Blocks',
]


@pytest.fixture
def sample_season_data():
    """
    Sample season stats: seven players, four of them eligible midfielders.

    Carl is too old, Dan has too few minutes (400 of 1260), Eli is a forward.
    """
    return {
        'Player': ['Ana Lopes', 'Ben Okafor', 'Carl Weiss', 'Dan Murphy',
                   'Eli Santos', 'Finn Berg', 'Gus Tanaka'],
        'Squad': ['Alpha FC', 'Beta FC', 'Gamma FC', 'Delta FC',
                  'Alpha FC', 'Gamma FC', 'Beta FC'],
        'Pos': ['MF', 'MF', 'MF', 'MF', 'FW', 'MF', 'MF'],
        'Age': [24, 28, 35, 22, 25, 30, 21],
        'Min': [1080, 900, 1200, 400, 1200, 720, 630],
        'Progressive Passes': [72, 40, 60, 10, 20, 24, 14],
        'Key Passes': [24, 30, 12, 2, 30, 8, 7],
        'Interceptions': [12, 15, 20, 3, 2, 24, 7],
        'Tackles': [24, 20, 30, 4, 6, 32, 14],
        'Tackles Won': [12, 15, 18, 2, 3, 16, 7],
        'Passes into Final Third': [60, 50, 45, 6, 10, 16, 21],
        'Long Passes Attempted': [48, 30, 50, 5, 4, 40, 14],
        'Long Passes Success %': [62.5, 55.0, 60.0, 50.0, 40.0, 70.0, 48.0],
        'Total Passes Attempted': [720, 600, 800, 150, 300, 480, 350],
        'Total Passes Success %': [88.0, 85.5, 90.0, 80.0, 75.0, 91.0, 82.0],
        'Total Blocks': [6, 5, 12, 1, 2, 16, 3],
    }


@pytest.fixture
def sample_season_df(sample_season_data):
    """Sample season DataFrame for testing"""
    return pd.DataFrame(sample_season_data)


@pytest.fixture
def sample_season_csv(sample_season_df, tmp_path):
    """Sample season stats CSV file for testing"""
    file_path = tmp_path / 'season_stats.csv'
    sample_season_df.to_csv(file_path, index=False)
    return file_path


@pytest.fixture
def analysis_config():
    """Bundled analysis configuration"""
    return load_config()


@pytest.fixture
def metric_columns():
    """Raw metric columns of the sample season"""
    return list(METRIC_COLUMNS)

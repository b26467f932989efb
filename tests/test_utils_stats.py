#!/usr/bin/env python3
"""
Test suite for min-max normalization and percentile clamping
"""

import pytest
import numpy as np
import pandas as pd
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from src.analytics.utils_stats import (
    clamp_to_band,
    minmax_normalize,
    minmax_scale,
    percentile_band
)


@pytest.fixture
def rate_table():
    return pd.DataFrame({
        'Player': ['A', 'B', 'C', 'D'],
        'Squad': ['W', 'X', 'Y', 'Z'],
        'Min': [900.0, 1000.0, 1100.0, 1200.0],
        'Key Passes p90': [0.5, 2.0, 1.0, 3.5],
        'Tackles p90': [4.0, 1.0, 2.5, 2.0],
        'Total Blocks p90': [1.0, 1.0, 1.0, 1.0],
    })


class TestMinMaxNormalize:
    """Test cases for min-max normalization"""

    def test_values_within_unit_interval(self, rate_table):
        """Test that every normalized value lies in [0, 1]"""
        metrics = ['Key Passes p90', 'Tackles p90']
        out = minmax_normalize(rate_table, metrics)
        assert ((out[metrics] >= 0) & (out[metrics] <= 1)).all().all()

    def test_extremes_hit_zero_and_one(self, rate_table):
        """Test that each non-constant column reaches exactly 0 and 1"""
        metrics = ['Key Passes p90', 'Tackles p90']
        out = minmax_normalize(rate_table, metrics)
        for metric in metrics:
            assert out[metric].min() == 0.0
            assert out[metric].max() == 1.0

    def test_known_values(self, rate_table):
        """Test normalized values against hand computation"""
        out = minmax_normalize(rate_table, ['Key Passes p90'])
        assert out['Key Passes p90'].tolist() == pytest.approx([0.0, 0.5, 1 / 6, 1.0])

    def test_constant_column_maps_to_zero(self, rate_table):
        """Test that a zero-variance metric becomes 0 for everyone"""
        out = minmax_normalize(rate_table, ['Total Blocks p90'])
        assert out['Total Blocks p90'].tolist() == [0.0, 0.0, 0.0, 0.0]
        assert not out['Total Blocks p90'].isna().any()

    def test_identity_and_minutes_untouched(self, rate_table):
        """Test that non-metric columns pass through"""
        out = minmax_normalize(rate_table, ['Key Passes p90'])
        assert out['Player'].tolist() == rate_table['Player'].tolist()
        assert out['Min'].tolist() == rate_table['Min'].tolist()
        # Unlisted metrics keep their units
        assert out['Tackles p90'].tolist() == rate_table['Tackles p90'].tolist()

    def test_input_is_not_mutated(self, rate_table):
        """Test that normalization returns a new table"""
        before = rate_table.copy()
        minmax_normalize(rate_table, ['Key Passes p90', 'Tackles p90'])
        pd.testing.assert_frame_equal(rate_table, before)

    def test_single_player_maps_to_zero(self):
        """Test that a one-row population is treated as constant"""
        out = minmax_scale(pd.Series([3.0]))
        assert out.tolist() == [0.0]

    def test_empty_series(self):
        """Test that an empty series stays empty"""
        assert minmax_scale(pd.Series([], dtype=float)).empty


class TestPercentileBand:
    """Test cases for the percentile band and clamping"""

    def test_band_rows_and_values(self, rate_table):
        """Test band layout and linear-interpolated quantiles"""
        band = percentile_band(rate_table, ['Key Passes p90', 'Tackles p90'])
        assert list(band.index) == ['max', 'min']
        values = rate_table['Key Passes p90'].to_numpy()
        assert band.loc['max', 'Key Passes p90'] == pytest.approx(np.percentile(values, 95))
        assert band.loc['min', 'Key Passes p90'] == pytest.approx(np.percentile(values, 5))

    def test_clamp_within_band(self, rate_table):
        """Test that every clamped value lies inside its band"""
        metrics = ['Key Passes p90', 'Tackles p90']
        band = percentile_band(rate_table, metrics)
        clamped = clamp_to_band(rate_table[metrics], band)
        for metric in metrics:
            assert (clamped[metric] >= band.loc['min', metric]).all()
            assert (clamped[metric] <= band.loc['max', metric]).all()

    def test_clamp_only_touches_outliers(self):
        """Test that in-band values are unchanged"""
        band = pd.DataFrame({'m': [10.0, 2.0]}, index=['max', 'min'])
        rows = pd.DataFrame({'m': [1.0, 5.0, 12.0]})
        clamped = clamp_to_band(rows, band)
        assert clamped['m'].tolist() == [2.0, 5.0, 10.0]


if __name__ == "__main__":
    pytest.main([__file__])

#!/usr/bin/env python3
"""
Test suite for player table schemas
"""

import pytest
import pandas as pd
from pathlib import Path
import sys

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

from src.schema.player_stats_schema import (
    PlayerStatsSchema,
    validate_dataframe,
    validate_normalized
)
from src.utils.errors import PipelineError, SchemaError


def _player_table(**overrides):
    data = {
        'Player': ['Ana Lopes', 'Ben Okafor'],
        'Squad': ['Alpha FC', 'Beta FC'],
        'Age': [24.0, 28.0],
        'Min': [1080.0, 900.0],
        'Key Passes': [24.0, 30.0],
    }
    data.update(overrides)
    return pd.DataFrame(data)


class TestPlayerStatsSchema:
    """Test cases for PlayerStatsSchema validation"""

    def test_valid_data_passes_validation(self):
        """Test that valid data passes schema validation"""
        df = _player_table()
        validated_df = validate_dataframe(df)

        assert len(validated_df) == 2
        assert list(validated_df.columns) == list(df.columns)

    def test_metric_columns_allowed(self):
        """Test that extra metric columns are not rejected"""
        df = _player_table(**{'Tackles p90': [1.0, 2.0]})
        assert 'Tackles p90' in validate_dataframe(df).columns

    def test_integer_minutes_coerced(self):
        """Test that integer minutes are coerced to float"""
        validated_df = validate_dataframe(_player_table(Min=[1080, 900]))
        assert validated_df['Min'].dtype == float

    def test_negative_minutes_fail(self):
        """Test that negative minutes fail validation"""
        with pytest.raises(SchemaError):
            validate_dataframe(_player_table(Min=[-5.0, 900.0]))

    def test_missing_age_allowed(self):
        """Test that Age may be missing"""
        validated_df = validate_dataframe(_player_table(Age=[None, 28.0]))
        assert validated_df['Age'].isna().sum() == 1

    def test_missing_required_column(self):
        """Test that a table without Squad fails validation"""
        df = _player_table().drop(columns=['Squad'])
        with pytest.raises(SchemaError):
            validate_dataframe(df, PlayerStatsSchema)

    def test_schema_error_is_pipeline_error(self):
        """Test the error hierarchy used by the CLI"""
        with pytest.raises(PipelineError):
            validate_dataframe(_player_table(Min=[-1.0, 0.0]))


class TestNormalizedSchema:
    """Test cases for the normalized metric range check"""

    def test_unit_interval_passes(self):
        """Test that values within [0, 1] pass"""
        df = pd.DataFrame({'Player': ['A', 'B'], 'm': [0.0, 1.0]})
        assert validate_normalized(df, ['m'])['m'].tolist() == [0.0, 1.0]

    def test_out_of_range_fails(self):
        """Test that a value above 1 fails"""
        df = pd.DataFrame({'Player': ['A', 'B'], 'm': [0.5, 1.5]})
        with pytest.raises(SchemaError):
            validate_normalized(df, ['m'])

    def test_missing_value_fails(self):
        """Test that NaN is not a normalized value"""
        df = pd.DataFrame({'Player': ['A', 'B'], 'm': [0.5, None]})
        with pytest.raises(SchemaError):
            validate_normalized(df, ['m'])

    def test_unlisted_columns_ignored(self):
        """Test that only listed metrics are range-checked"""
        df = pd.DataFrame({'Player': ['A'], 'm': [0.5], 'Min': [900.0]})
        validate_normalized(df, ['m'])


if __name__ == "__main__":
    pytest.main([__file__])

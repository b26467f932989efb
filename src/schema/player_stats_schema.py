#!/usr/bin/env python3
"""
Player Season Stats Schema Definition

Pandera schemas for the tables flowing through the midfielder ranking
pipeline: the ingested per-player identity columns, and the [0, 1] metric
range guaranteed after min-max normalization.
"""

from typing import List

import pandas as pd
import pandera as pa
from pandera.typing import Series

from src.utils.errors import SchemaError


class PlayerStatsSchema(pa.DataFrameModel):
    """
    Pandera schema for the filtered player table.

    Fields:
    - Player: Player name
    - Squad: Club name
    - Age: Age in years
    - Min: Minutes played across the competition phase
    """

    Player: Series[str] = pa.Field(description="Player name")

    Squad: Series[str] = pa.Field(description="Club name")

    Age: Series[float] = pa.Field(
        description="Age in years",
        ge=0,
        nullable=True
    )

    Min: Series[float] = pa.Field(
        description="Minutes played",
        ge=0
    )

    class Config:
        """Pandera configuration."""
        coerce = True
        strict = False  # Metric columns vary per analysis


def validate_dataframe(df: pd.DataFrame, schema=PlayerStatsSchema) -> pd.DataFrame:
    """
    Validate a DataFrame against a pandera schema.

    Args:
        df: pandas DataFrame to validate
        schema: Pandera schema (default: PlayerStatsSchema)

    Returns:
        Validated DataFrame

    Raises:
        SchemaError: If validation fails
    """
    try:
        return schema.validate(df)
    except (pa.errors.SchemaError, pa.errors.SchemaErrors) as e:
        raise SchemaError(f"Schema validation failed: {e}") from e


def normalized_metrics_schema(metric_names: List[str]) -> pa.DataFrameSchema:
    """Schema asserting every listed metric lies within [0, 1]."""
    return pa.DataFrameSchema(
        {
            name: pa.Column(float, checks=pa.Check.in_range(0.0, 1.0), coerce=True)
            for name in metric_names
        },
        strict=False,
    )


def validate_normalized(df: pd.DataFrame, metric_names: List[str]) -> pd.DataFrame:
    """
    Check the min-max invariant at the normalization stage boundary.

    Args:
        df: Normalized player table
        metric_names: Metric columns that must lie within [0, 1]

    Returns:
        Validated DataFrame

    Raises:
        SchemaError: If any value falls outside [0, 1] or is missing
    """
    return validate_dataframe(df, normalized_metrics_schema(metric_names))

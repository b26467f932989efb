#!/usr/bin/env python3
"""
Player loading and eligibility filtering for the midfielder rankings.

Selects midfielders who are young enough and have played enough of their
squad's minutes, and trims the table down to identity fields plus the
metrics chosen for the analysis.
"""

import logging
import re
from pathlib import Path
from typing import List, Union

import pandas as pd

from src.schema.player_stats_schema import validate_dataframe
from src.utils.errors import ParseError, SchemaError

logger = logging.getLogger(__name__)

IDENTITY_COLUMNS = ['Player', 'Squad', 'Age']
MINUTES_COLUMN = 'Min'
POSITION_COLUMN = 'Pos'
SQUAD_MATCHES_PLAYED = 14

# FBref exports ages as "years-days", e.g. "27-114"
_AGE_YEARS_DAYS = re.compile(r"^(\d+)-\d+$")
# Only properly grouped thousands, so "62,5" is not read as 625
_THOUSANDS = r"^-?\d{1,3}(?:,\d{3})+(?:\.\d+)?$"


def load_player_stats(path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a season player stats CSV.

    Args:
        path: CSV file path

    Returns:
        Raw DataFrame, one row per player-season
    """
    path = Path(path)
    df = pd.read_csv(path)
    logger.info(f"Loaded {len(df)} player rows from {path}")
    return df


def coerce_numeric(series: pd.Series, column: str) -> pd.Series:
    """
    Coerce a column that may arrive as text into floats.

    Blank cells become NaN. Grouped thousands separators ("1,080") are
    stripped; any other comma, such as a decimal comma, is a parse error.
    For the Age column, "years-days" values keep their years part.

    Args:
        series: Column values
        column: Column name, used in error messages

    Returns:
        Float series

    Raises:
        ParseError: If a non-blank value cannot be parsed
    """
    if pd.api.types.is_numeric_dtype(series):
        return series.astype(float)

    text = series.astype('string').str.strip()
    grouped = text.str.fullmatch(_THOUSANDS, na=False).astype(bool)
    text = text.mask(grouped, text.str.replace(',', '', regex=False))
    if column == 'Age':
        text = text.str.replace(_AGE_YEARS_DAYS, r"\1", regex=True)
    blank = text.isna() | (text == '')

    numeric = pd.to_numeric(text.mask(blank), errors='coerce')
    failed = numeric.isna() & ~blank
    if failed.any():
        raise ParseError(column, series[failed].unique().tolist())

    return numeric.astype(float)


def minutes_share_pct(minutes: pd.Series, squad_matches_played: int = SQUAD_MATCHES_PLAYED) -> pd.Series:
    """Share of the squad's available minutes a player was on the pitch, in percent."""
    return minutes / (90 * squad_matches_played) * 100


def filter_players(df: pd.DataFrame, metric_names: List[str], max_age: float,
                   min_minutes_pct: float, squad_matches_played: int = SQUAD_MATCHES_PLAYED,
                   position: str = 'MF') -> pd.DataFrame:
    """
    Keep eligible players and project to identity fields, minutes and metrics.

    Args:
        df: Raw player table
        metric_names: Metric columns to keep, in analysis order
        max_age: Oldest eligible age (inclusive)
        min_minutes_pct: Minimum share of squad minutes played, in percent
        squad_matches_played: Matches in the competition phase
        position: Position code to keep

    Returns:
        New DataFrame with columns IDENTITY_COLUMNS + ['Min'] + metric_names

    Raises:
        SchemaError: If a required column or requested metric is missing
        ParseError: If a numeric column holds non-numeric text
    """
    required = [POSITION_COLUMN] + IDENTITY_COLUMNS + [MINUTES_COLUMN]
    missing_cols = [col for col in required if col not in df.columns]
    if missing_cols:
        raise SchemaError(f"Missing required columns: {missing_cols}")

    missing_metrics = [m for m in metric_names if m not in df.columns]
    if missing_metrics:
        raise SchemaError(f"Requested metrics not in input: {missing_metrics}")

    keep = IDENTITY_COLUMNS + [MINUTES_COLUMN] + list(metric_names)
    out = df[[POSITION_COLUMN] + keep].copy()

    for col in ['Age', MINUTES_COLUMN] + list(metric_names):
        out[col] = coerce_numeric(out[col], col)

    initial_count = len(out)
    out = out[out[POSITION_COLUMN].astype(str).str.strip() == position]
    logger.info(f"Position filter ({position}): {len(out)}/{initial_count} players")

    share = minutes_share_pct(out[MINUTES_COLUMN], squad_matches_played)
    mask = (out['Age'] <= max_age) & (share >= min_minutes_pct)
    out = out[mask]
    logger.info(
        f"Eligibility filter (age <= {max_age}, minutes >= {min_minutes_pct}% "
        f"of {squad_matches_played} matches): {len(out)} players"
    )

    if out.empty:
        logger.warning("No players passed the eligibility filter")

    out = out[keep]
    return validate_dataframe(out)

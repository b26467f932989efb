#!/usr/bin/env python3
"""
Head-to-head comparison data for the top-ranked midfielders.

Pulls the leading players' rate-converted metrics (original units, not the
[0, 1] scores), clamps outliers to the population's 5th-95th percentile band
and stacks bounds and players into the matrix the radar renderer expects.
"""

import logging
from typing import List, Tuple

import pandas as pd

from src.analytics.utils_stats import clamp_to_band, percentile_band
from src.utils.errors import ConfigError, SchemaError

logger = logging.getLogger(__name__)


def build_comparison(score_table: pd.DataFrame, rate_table: pd.DataFrame,
                     display_metrics: List[str], n: int = 2,
                     q_low: float = 0.05, q_high: float = 0.95) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Select the top n ranked players and clamp their metrics for display.

    Args:
        score_table: Ranked ScoreTable (must carry 'Player')
        rate_table: Full filtered, rate-converted player table
        display_metrics: Reduced metric subset shown on the radar
        n: Number of players to compare
        q_low: Lower clamp quantile
        q_high: Upper clamp quantile

    Returns:
        Tuple of (band, players): band is indexed ['max', 'min'], players is
        indexed by player name in rank order with clamped metric values

    Raises:
        ConfigError: If n is not positive
        SchemaError: If a display metric or join column is missing, or a
            ranked player has no row in the rate table
    """
    if n <= 0:
        raise ConfigError(f"Comparison size must be positive, got {n}")

    missing = [m for m in display_metrics if m not in rate_table.columns]
    if missing:
        raise SchemaError(f"Display metrics not in rate table: {missing}")
    if 'Player' not in score_table.columns:
        raise SchemaError("ScoreTable has no 'Player' column")

    keys = ['Player']
    if 'Squad' in score_table.columns and 'Squad' in rate_table.columns:
        keys.append('Squad')

    selected = score_table.head(n)[keys].reset_index(drop=True)
    lookup = rate_table[keys + list(display_metrics)].drop_duplicates(subset=keys)
    players = selected.merge(lookup, on=keys, how='left')

    unmatched = players[display_metrics].isna().all(axis=1)
    if unmatched.any():
        raise SchemaError(f"Ranked players missing from rate table: {players.loc[unmatched, 'Player'].tolist()}")

    players = players.set_index('Player')[list(display_metrics)]

    band = percentile_band(rate_table, display_metrics, q_low=q_low, q_high=q_high)
    clamped = clamp_to_band(players, band)

    n_clamped = int((clamped != players).sum().sum())
    logger.info(f"Comparison: {len(clamped)} players, {n_clamped} values clamped to "
                f"p{q_low * 100:.0f}-p{q_high * 100:.0f} band")
    return band, clamped


def radar_frame(band: pd.DataFrame, players: pd.DataFrame) -> pd.DataFrame:
    """
    Stack bounds and player rows for the radar renderer.

    Row order is fixed: max bounds, min bounds, then one row per player.
    """
    return pd.concat([band.loc[['max', 'min']], players])

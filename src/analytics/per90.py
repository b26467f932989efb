#!/usr/bin/env python3
"""
Per-90 rate conversion for cumulative player metrics.

Cumulative season totals are rescaled to an expected value over a standard
90-minute match so players with different minutes are comparable. Also
derives tackle success percentage from the converted tackle counters.
"""

import logging
from typing import List

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

PER90_SUFFIX = " p90"
TACKLES = "Tackles"
TACKLES_WON = "Tackles Won"
TACKLE_SUCCESS = "Tackle Success %"


def per90_name(metric: str) -> str:
    """Column name of a metric after rate conversion."""
    return f"{metric}{PER90_SUFFIX}"


def scored_metric_names(metrics: List[str], cumulative_metrics: List[str]) -> List[str]:
    """
    Column names produced by to_per90, in table order.

    Args:
        metrics: Raw metric columns, in analysis order
        cumulative_metrics: Subset converted to per-90 rates

    Returns:
        Metric names after renaming and the tackle success derivation
    """
    cumulative = set(cumulative_metrics)
    names = [per90_name(m) if m in cumulative else m for m in metrics]

    if TACKLES in cumulative and TACKLES_WON in cumulative:
        idx = names.index(per90_name(TACKLES_WON))
        names[idx] = TACKLE_SUCCESS

    return names


def safe_ratio(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Elementwise division that yields 0 wherever the denominator is 0."""
    num = numerator.to_numpy(dtype=float)
    den = denominator.to_numpy(dtype=float)
    out = np.zeros_like(num)
    np.divide(num, den, out=out, where=den != 0)
    return pd.Series(out, index=numerator.index)


def to_per90(df: pd.DataFrame, cumulative_metric_names: List[str],
             minutes_col: str = 'Min') -> pd.DataFrame:
    """
    Convert cumulative totals to per-90 rates.

    Each listed metric v becomes v / (minutes / 90) and is renamed with a
    " p90" suffix. A player with zero minutes gets 0, not NaN. When both
    tackle counters are converted, "Tackle Success %" replaces
    "Tackles Won p90". Remaining missing values are filled with 0 last.

    Args:
        df: Filtered player table
        cumulative_metric_names: Metrics holding season totals
        minutes_col: Minutes played column

    Returns:
        New DataFrame with rate columns
    """
    out = df.copy()
    matches_equiv = out[minutes_col] / 90

    zero_minutes = int((out[minutes_col] == 0).sum())
    if zero_minutes:
        logger.warning(f"{zero_minutes} players with 0 minutes, their per-90 rates are set to 0")

    renames = {}
    for metric in cumulative_metric_names:
        out[metric] = safe_ratio(out[metric], matches_equiv)
        renames[metric] = per90_name(metric)
    out = out.rename(columns=renames)

    won_col = per90_name(TACKLES_WON)
    tackles_col = per90_name(TACKLES)
    if won_col in out.columns and tackles_col in out.columns:
        success = safe_ratio(out[won_col], out[tackles_col]) * 100
        out.insert(out.columns.get_loc(won_col), TACKLE_SUCCESS, success)
        out = out.drop(columns=[won_col])

    numeric_cols = out.select_dtypes(include='number').columns
    n_missing = int(out[numeric_cols].isna().sum().sum())
    if n_missing:
        logger.info(f"Filling {n_missing} missing metric values with 0")
    out[numeric_cols] = out[numeric_cols].fillna(0)

    logger.info(f"Converted {len(cumulative_metric_names)} metrics to per-90 for {len(out)} players")
    return out

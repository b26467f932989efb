#!/usr/bin/env python3
"""
Statistical utilities for the midfielder ranking pipeline.

Min-max scaling of metric columns for scoring, and the percentile band used
to clamp outliers on the radar comparison.
"""

import logging
from typing import List

import pandas as pd

logger = logging.getLogger(__name__)


def minmax_scale(x: pd.Series) -> pd.Series:
    """
    Rescale a series to [0, 1] using its own min and max.

    Args:
        x: Input series

    Returns:
        Scaled series; a constant series maps to 0 everywhere
    """
    if x.empty:
        return x.astype(float)

    lo = x.min()
    hi = x.max()

    if hi == lo:
        return pd.Series(0.0, index=x.index)

    return (x - lo) / (hi - lo)


def minmax_normalize(df: pd.DataFrame, metric_names: List[str]) -> pd.DataFrame:
    """
    Min-max normalize each metric column independently over the player population.

    Non-metric columns (identity, minutes) pass through untouched.

    Args:
        df: Rate-converted player table
        metric_names: Columns to rescale

    Returns:
        New DataFrame with metric columns in [0, 1]
    """
    out = df.copy()
    for metric in metric_names:
        col = out[metric].astype(float)
        if len(col) and col.min() == col.max():
            logger.warning(f"Metric '{metric}' is constant ({col.min():.3f}), normalized to 0")
        out[metric] = minmax_scale(col)

    logger.debug(f"Normalized {len(metric_names)} metrics over {len(out)} players")
    return out


def percentile_band(df: pd.DataFrame, metric_names: List[str],
                    q_low: float = 0.05, q_high: float = 0.95) -> pd.DataFrame:
    """
    Compute per-metric upper and lower percentile bounds.

    Args:
        df: Player table in display units
        metric_names: Metrics to bound
        q_low: Lower quantile (default 0.05)
        q_high: Upper quantile (default 0.95)

    Returns:
        Two-row DataFrame indexed ['max', 'min'] with one column per metric
    """
    band = df[metric_names].astype(float).quantile([q_high, q_low])
    band.index = ['max', 'min']
    return band


def clamp_to_band(df: pd.DataFrame, band: pd.DataFrame) -> pd.DataFrame:
    """
    Clip each metric column into its [min, max] band row.

    Args:
        df: Rows to clamp, columns matching the band
        band: Output of percentile_band

    Returns:
        Clamped copy of df
    """
    cols = list(band.columns)
    out = df.copy()
    out[cols] = out[cols].astype(float).clip(
        lower=band.loc['min', cols], upper=band.loc['max', cols], axis=1
    )
    return out

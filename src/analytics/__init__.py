"""
Analytics module for the midfielder ranking pipeline.

This module provides eligibility filtering, per-90 rate conversion,
min-max normalization, weighted scoring and the radar comparison.
"""

from .scoring_engine import run_pipeline, score_players
from .player_filter import filter_players, load_player_stats
from .per90 import to_per90
from .utils_stats import minmax_normalize, percentile_band, clamp_to_band
from .comparison import build_comparison, radar_frame

__all__ = [
    'run_pipeline',
    'score_players',
    'filter_players',
    'load_player_stats',
    'to_per90',
    'minmax_normalize',
    'percentile_band',
    'clamp_to_band',
    'build_comparison',
    'radar_frame'
]

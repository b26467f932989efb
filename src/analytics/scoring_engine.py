#!/usr/bin/env python3
"""
Midfielder Scoring Engine

Ranks midfielders from one competition season by a weighted sum of min-max
normalized per-90 metrics, and prepares the radar comparison of the leaders.

Stages (each returns a new table):
    1. Filter eligible midfielders
    2. Per-90 rate conversion
    3. Min-max normalization
    4. Weighted scoring and top-N ranking
    5. Percentile-clamped radar comparison
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Union

import pandas as pd

from src.analytics.comparison import build_comparison, radar_frame
from src.analytics.config import DEFAULT_CONFIG_PATH, apply_overrides, load_config, validate_config
from src.analytics.per90 import to_per90
from src.analytics.player_filter import filter_players, load_player_stats
from src.analytics.utils_stats import minmax_normalize
from src.io.safe_write import safe_write_csv, safe_write_json, verify_file_integrity
from src.schema.player_stats_schema import validate_normalized
from src.utils.errors import ConfigError, PipelineError, SchemaError
from src.utils.json_safety import serialize_paths
from src.utils.logger import get_logger

logger = logging.getLogger(__name__)

SCORE_COLUMN = 'Score'


def resolve_weights(weights: Union[Mapping[str, float], Sequence[float]],
                    metric_columns: List[str]) -> Dict[str, float]:
    """
    Turn a weight mapping or positional vector into a validated mapping.

    Args:
        weights: metric -> weight mapping, or one weight per metric in order
        metric_columns: Scored metric columns

    Returns:
        Mapping from metric name to weight

    Raises:
        ConfigError: If the weights do not cover exactly the metric columns
    """
    if isinstance(weights, Mapping):
        missing = [m for m in metric_columns if m not in weights]
        extra = [m for m in weights if m not in metric_columns]
        if missing or extra:
            raise ConfigError(f"Weights do not match metrics (missing: {missing}, unexpected: {extra})")
        return {m: float(weights[m]) for m in metric_columns}

    weights = list(weights)
    if len(weights) != len(metric_columns):
        raise ConfigError(
            f"Got {len(weights)} weights for {len(metric_columns)} metrics"
        )
    return {m: float(w) for m, w in zip(metric_columns, weights)}


def compute_scores(df: pd.DataFrame, weights: Mapping[str, float]) -> pd.Series:
    """Score = 10 * sum(weight * normalized metric), rounded to 3 decimals."""
    total = pd.Series(0.0, index=df.index)
    for metric, weight in weights.items():
        total = total + weight * df[metric].astype(float)
    return (10 * total).round(3)


def score_players(df: pd.DataFrame, weights: Union[Mapping[str, float], Sequence[float]],
                  metric_columns: List[str], display_columns: List[str],
                  top_n: int) -> pd.DataFrame:
    """
    Score, rank and truncate the normalized player table.

    Ties keep their input order (stable sort). If fewer than top_n players
    are eligible, all of them are returned.

    Args:
        df: Min-max normalized player table
        weights: Weight mapping or positional vector over metric_columns
        metric_columns: Normalized metric columns to combine
        display_columns: Columns kept next to the score
        top_n: Number of rows to keep

    Returns:
        ScoreTable: display_columns + ['Score'], sorted by Score descending

    Raises:
        ConfigError: On a weight/metric mismatch or non-positive top_n
        SchemaError: If a metric or display column is missing
    """
    weight_map = resolve_weights(weights, metric_columns)

    if top_n <= 0:
        raise ConfigError(f"top_n must be positive, got {top_n}")

    missing = [c for c in list(metric_columns) + list(display_columns) if c not in df.columns]
    if missing:
        raise SchemaError(f"Missing columns for scoring: {missing}")

    table = df[list(display_columns)].copy()
    table[SCORE_COLUMN] = compute_scores(df, weight_map)

    table = table.sort_values(SCORE_COLUMN, ascending=False, kind='mergesort')

    if len(table) < top_n:
        logger.info(f"Only {len(table)} eligible players for a top {top_n}")
    table = table.head(top_n)

    if not table.empty:
        logger.info(f"Score range (top {len(table)}): [{table[SCORE_COLUMN].min():.3f}, "
                    f"{table[SCORE_COLUMN].max():.3f}]")
    return table


def run_pipeline(df: pd.DataFrame, config: Dict[str, Any]) -> Dict[str, pd.DataFrame]:
    """
    Run every stage over one season table.

    Args:
        df: Raw player table
        config: Validated analysis configuration

    Returns:
        Dictionary of stage outputs: filtered, rates, normalized, scores,
        band, comparison and radar
    """
    metric_columns = validate_config(config)

    # Stage 1: Filter
    logger.info("Stage 1: Filtering eligible players")
    filtered = filter_players(
        df, config['METRICS'], config['MAX_AGE'], config['MIN_MINUTES_PCT'],
        squad_matches_played=config['SQUAD_MATCHES_PLAYED'],
        position=config['POSITION'],
    )

    # Stage 2: Per-90 rates
    logger.info("Stage 2: Per-90 rate conversion")
    rates = to_per90(filtered, config['CUMULATIVE_METRICS'])

    # Stage 3: Min-max
    logger.info("Stage 3: Min-max normalization")
    normalized = validate_normalized(minmax_normalize(rates, metric_columns), metric_columns)

    # Stage 4: Score
    logger.info("Stage 4: Weighted scoring")
    scores = score_players(
        normalized, config['METRIC_WEIGHTS'], metric_columns,
        config['DISPLAY_COLUMNS'], config['TOP_N'],
    )

    result = {
        'filtered': filtered,
        'rates': rates,
        'normalized': normalized,
        'scores': scores,
    }

    # Stage 5: Radar comparison
    if scores.empty:
        logger.warning("No players ranked, skipping radar comparison")
        return result

    logger.info("Stage 5: Radar comparison")
    band, players = build_comparison(
        scores, rates, config['RADAR_METRICS'], config['RADAR_PLAYERS'],
        q_low=config.get('PERCENTILE_LOW', 0.05),
        q_high=config.get('PERCENTILE_HIGH', 0.95),
    )
    result['band'] = band
    result['comparison'] = players
    result['radar'] = radar_frame(band, players)

    logger.info(f"Ranking complete: {len(scores)} players ranked")
    return result


def main():
    """CLI entry point for the midfielder rankings."""
    parser = argparse.ArgumentParser(description="Midfielder Scoring Engine")
    parser.add_argument("--input", type=str, required=True,
                        help="Season player stats CSV")
    parser.add_argument("--config", type=str, default=str(DEFAULT_CONFIG_PATH),
                        help="Configuration file path")
    parser.add_argument("--output-root", type=str, default="data/rankings",
                        help="Output directory")
    parser.add_argument("--max-age", type=float, default=None,
                        help="Oldest eligible age (overrides config)")
    parser.add_argument("--min-minutes-pct", type=float, default=None,
                        help="Minimum share of squad minutes, in percent (overrides config)")
    parser.add_argument("--top-n", type=int, default=None,
                        help="Number of ranked players to keep (overrides config)")
    parser.add_argument("--radar-players", type=int, default=None,
                        help="Number of players on the radar (overrides config)")
    parser.add_argument("--no-radar", action="store_true",
                        help="Skip drawing the radar chart")

    args = parser.parse_args()

    output_dir = Path(args.output_root)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M")
    get_logger(log_path=output_dir / "logs" / "rankings.log")

    try:
        config = load_config(args.config)
        config = apply_overrides(config, {
            'MAX_AGE': args.max_age,
            'MIN_MINUTES_PCT': args.min_minutes_pct,
            'TOP_N': args.top_n,
            'RADAR_PLAYERS': args.radar_players,
        })

        df = load_player_stats(args.input)
        result = run_pipeline(df, config)
        scores = result['scores']

        if scores.empty:
            logger.warning("No rankings generated")
            return

        logger.info(f"Top {len(scores)} midfielders:\n{scores.to_string(index=False)}")

        rankings_file = output_dir / f"rankings_{timestamp}.csv"
        write_info = safe_write_csv(scores, rankings_file)
        if not verify_file_integrity(write_info['path'], write_info['checksum']):
            raise PipelineError(f"Checksum mismatch after writing {rankings_file}")

        radar_file = None
        if not args.no_radar and 'radar' in result:
            from src.viz.radar_chart import plot_radar

            players = list(result['comparison'].index)
            radar_file = plot_radar(
                result['radar'],
                output_dir / f"radar_{timestamp}.png",
                title=" vs ".join(players),
                colors=config.get('RADAR_COLORS'),
                labels=config.get('RADAR_LABELS'),
            )

        summary = {
            'timestamp': timestamp,
            'input': args.input,
            'eligible_players': len(result['filtered']),
            'ranked_players': len(scores),
            'rankings_file': write_info['path'],
            'rankings_checksum': write_info['checksum'],
            'radar_file': radar_file,
            'config': config,
        }
        safe_write_json(serialize_paths(summary), output_dir / f"summary_{timestamp}.json")

        print(f"Ranking complete! {len(scores)} midfielders ranked")

    except PipelineError as e:
        logger.error(f"Ranking failed: {e}")
        raise


if __name__ == "__main__":
    main()

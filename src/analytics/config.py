#!/usr/bin/env python3
"""
Analysis parameter loading for the midfielder ranking pipeline.

Parameters live in ``ranking_config.yaml`` next to this module. They are fixed
per analysis run; CLI flags may override individual thresholds.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from src.analytics.per90 import scored_metric_names
from src.utils.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).with_name("ranking_config.yaml")

REQUIRED_KEYS = [
    'POSITION', 'MAX_AGE', 'MIN_MINUTES_PCT', 'SQUAD_MATCHES_PLAYED',
    'METRICS', 'CUMULATIVE_METRICS', 'METRIC_WEIGHTS', 'DISPLAY_COLUMNS',
    'TOP_N', 'RADAR_PLAYERS', 'RADAR_METRICS',
]


def load_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load and validate the YAML analysis configuration.

    Args:
        path: YAML file path (defaults to the bundled ranking_config.yaml)

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigError: If the file is not a mapping or fails validation
    """
    path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    logger.info(f"Loading analysis config from {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse config {path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(config).__name__}")

    validate_config(config)
    return config


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Check parameter consistency before any data is touched.

    The weight mapping must name exactly the scored metrics (raw metrics after
    per-90 renaming and the tackle success derivation).

    Args:
        config: Configuration dictionary

    Returns:
        Scored metric names, in column order

    Raises:
        ConfigError: On missing keys, bad thresholds or a weight/metric mismatch
    """
    missing = [key for key in REQUIRED_KEYS if key not in config]
    if missing:
        raise ConfigError(f"Missing config keys: {missing}")

    if config['MAX_AGE'] <= 0:
        raise ConfigError(f"MAX_AGE must be positive, got {config['MAX_AGE']}")
    if not 0 <= config['MIN_MINUTES_PCT'] <= 100:
        raise ConfigError(f"MIN_MINUTES_PCT must be within [0, 100], got {config['MIN_MINUTES_PCT']}")
    if config['SQUAD_MATCHES_PLAYED'] <= 0:
        raise ConfigError("SQUAD_MATCHES_PLAYED must be positive")
    if config['TOP_N'] <= 0:
        raise ConfigError(f"TOP_N must be positive, got {config['TOP_N']}")
    if config['RADAR_PLAYERS'] <= 0:
        raise ConfigError(f"RADAR_PLAYERS must be positive, got {config['RADAR_PLAYERS']}")

    unknown = [m for m in config['CUMULATIVE_METRICS'] if m not in config['METRICS']]
    if unknown:
        raise ConfigError(f"CUMULATIVE_METRICS not listed in METRICS: {unknown}")

    scored = scored_metric_names(config['METRICS'], config['CUMULATIVE_METRICS'])

    weights = config['METRIC_WEIGHTS']
    if not isinstance(weights, dict):
        raise ConfigError("METRIC_WEIGHTS must map metric name to weight")

    missing_weights = [m for m in scored if m not in weights]
    extra_weights = [m for m in weights if m not in scored]
    if missing_weights or extra_weights:
        raise ConfigError(
            f"METRIC_WEIGHTS does not match scored metrics "
            f"(missing: {missing_weights}, unexpected: {extra_weights})"
        )

    total = sum(weights.values())
    if abs(total - 1.0) > 1e-6:
        logger.warning(f"Metric weights sum to {total:.3f}, not 1.0")

    bad_radar = [m for m in config['RADAR_METRICS'] if m not in scored]
    if bad_radar:
        raise ConfigError(f"RADAR_METRICS not produced by the pipeline: {bad_radar}")

    labels = config.get('RADAR_LABELS')
    if labels is not None and len(labels) != len(config['RADAR_METRICS']):
        raise ConfigError("RADAR_LABELS must have one label per RADAR_METRICS entry")

    low = config.get('PERCENTILE_LOW', 0.05)
    high = config.get('PERCENTILE_HIGH', 0.95)
    if not 0 <= low < high <= 1:
        raise ConfigError(f"Percentile band must satisfy 0 <= low < high <= 1, got ({low}, {high})")

    return scored


def apply_overrides(base_cfg: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply parameter overrides (None values are ignored) and revalidate.

    Args:
        base_cfg: Base configuration dictionary
        overrides: Override parameters

    Returns:
        New configuration with overrides applied
    """
    config = base_cfg.copy()
    config.update({k: v for k, v in overrides.items() if v is not None})
    validate_config(config)
    return config

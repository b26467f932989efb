#!/usr/bin/env python3
"""
Radar chart drawing for the midfielder comparison.

Consumes the stacked matrix from ``radar_frame``: the first row holds each
axis' maximum, the second its minimum, and every following row is one
player's polygon.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_COLORS = ["#1f77b4", "#d62728", "#2ca02c", "#ff7f0e"]


def _radar_angles(n: int):
    return np.linspace(0, 2 * np.pi, n, endpoint=False).tolist() + [0]


def scale_to_axes(frame: pd.DataFrame) -> pd.DataFrame:
    """Map player rows onto [0, 1] per axis using the max/min bound rows."""
    hi = frame.iloc[0].astype(float)
    lo = frame.iloc[1].astype(float)
    span = (hi - lo).replace(0, np.nan)
    scaled = (frame.iloc[2:].astype(float) - lo) / span
    return scaled.fillna(0.0).clip(0.0, 1.0)


def plot_radar(frame: pd.DataFrame, out_path: Union[str, Path], title: str = "",
               colors: Optional[List[str]] = None,
               labels: Optional[List[str]] = None) -> Path:
    """
    Draw one filled polygon per player and save the figure.

    Args:
        frame: [max row, min row, player rows...] with one column per axis
        out_path: Image destination
        title: Chart title
        colors: One color per player series
        labels: Axis labels (defaults to column names)

    Returns:
        Path of the saved image
    """
    if len(frame) < 3:
        raise ValueError("Radar frame needs bound rows and at least one player row")

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    colors = colors or DEFAULT_COLORS
    labels = labels or list(frame.columns)
    scaled = scale_to_axes(frame)
    angles = _radar_angles(len(labels))

    fig, ax = plt.subplots(figsize=(7, 7), subplot_kw=dict(projection="polar"))
    try:
        for i, (player, row) in enumerate(scaled.iterrows()):
            color = colors[i % len(colors)]
            values = row.tolist() + [row.iloc[0]]
            ax.plot(angles, values, "o-", linewidth=2, color=color, label=str(player))
            ax.fill(angles, values, alpha=0.25, color=color)

        ax.set_xticks(angles[:-1])
        ax.set_xticklabels(labels)
        ax.set_yticklabels([])
        ax.set_ylim(0, 1)
        ax.set_title(title)
        ax.legend(loc="upper right", bbox_to_anchor=(1.25, 1.1))
        plt.tight_layout()

        fig.savefig(out_path, dpi=150, bbox_inches="tight")
    finally:
        plt.close(fig)

    logger.info(f"Radar chart saved to {out_path}")
    return out_path

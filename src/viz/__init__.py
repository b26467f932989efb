"""
Chart rendering for the midfielder comparison.
"""

from .radar_chart import plot_radar, scale_to_axes

__all__ = [
    'plot_radar',
    'scale_to_axes'
]

#!/usr/bin/env python3
"""
JSON Safety Utilities - Handle Path serialization for run summaries.
"""

from pathlib import Path
from typing import Any


def serialize_paths(obj: Any) -> Any:
    """
    Recursively convert Path objects to forward-slash strings for JSON serialization.

    Args:
        obj: Any Python object that may contain Path objects

    Returns:
        Object with all Path instances converted to strings
    """
    if isinstance(obj, Path):
        return obj.as_posix()
    elif isinstance(obj, dict):
        return {k: serialize_paths(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [serialize_paths(x) for x in obj]
    elif isinstance(obj, tuple):
        return tuple(serialize_paths(x) for x in obj)
    return obj

"""Shared utilities for the play interaction analysis system."""

from .config_loader import load_config, load_merged_config, get_nested_config, get_section, merge_config
from .geometry import (
    Point2D,
    Movement,
    center,
    distance,
    box_distance,
    movement,
    union_box,
    round_half_up,
    clamp,
    safe_mean,
)
from .serialization import to_serializable, get_field, save_json

__all__ = [
    'load_config',
    'load_merged_config',
    'get_nested_config',
    'get_section',
    'merge_config',
    'Point2D',
    'Movement',
    'center',
    'distance',
    'box_distance',
    'movement',
    'union_box',
    'round_half_up',
    'clamp',
    'safe_mean',
    'to_serializable',
    'get_field',
    'save_json',
]

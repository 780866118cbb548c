"""
Child activity level from frame-to-frame center movement of the first
'person' object track.
"""

import logging
from typing import Dict, Optional, Tuple

from utils.config_loader import get_section
from utils.geometry import center_shift, clamp, safe_mean
from video_annotations.models import VideoIntelligenceResults
from .data_models import ActivityAnalysis
from .emotional import in_range

logger = logging.getLogger(__name__)

STATIC = 'static'
MODERATE = 'moderate'
DYNAMIC = 'dynamic'


def classify_activity_level(movement_score: float, config: Dict = None) -> str:
    if config is None:
        config = {}

    levels = get_section(config, 'play_analysis').get('activity_levels', {})
    if movement_score > levels.get('dynamic', 15):
        return DYNAMIC
    if movement_score > levels.get('moderate', 5):
        return MODERATE
    return STATIC


def analyze_child_activity(
    results: VideoIntelligenceResults,
    config: Dict = None,
    time_range: Optional[Tuple[float, float]] = None
) -> ActivityAnalysis:
    """
    Movement score = average per-frame center shift * 100, clamped to [0, 100].

    Tracks with fewer than two frames are static with all-zero metrics.
    """
    if config is None:
        config = {}

    movement_threshold = get_section(config, 'play_analysis').get('movement_threshold', 0.05)

    persons = results.person_tracks()
    if not persons:
        return ActivityAnalysis()

    frames = [f for f in persons[0].frames if in_range(f.time_offset, time_range)]
    if len(frames) < 2:
        return ActivityAnalysis()

    movements = [center_shift(prev.box, cur.box) for prev, cur in zip(frames, frames[1:])]
    average = safe_mean(movements)
    movement_score = clamp(average * 100, 0.0, 100.0)

    return ActivityAnalysis(
        child_activity_level=classify_activity_level(movement_score, config),
        movement_score=movement_score,
        average_movement_per_second=average,
        movement_frames=sum(1 for m in movements if m > movement_threshold),
        total_frames=len(frames)
    )

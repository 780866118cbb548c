"""
Optimal play window selection and overall engagement.

Fixed-length windows from the start of the video are scored from the
emotional, spatial and activity aggregates of the annotations inside
each window. The best windows are returned highest score first.
"""

import logging
from typing import Dict, List, Tuple

from utils.config_loader import get_section
from utils.geometry import clamp, round_half_up
from video_annotations.models import VideoIntelligenceResults
from .activity import DYNAMIC, MODERATE, analyze_child_activity
from .data_models import (
    ActivityAnalysis,
    EmotionalAnalysis,
    OptimalPlayTime,
    PlayPeriod,
    SpatialAnalysis,
)
from .emotional import analyze_emotional_attributes
from .spatial import analyze_spatial_proximity

logger = logging.getLogger(__name__)

# (predicate over window aggregates, bonus, reason)
WINDOW_RULES = [
    (lambda emo, spa, act: emo.child_smiling_ratio > 20, 20, 'high smiling ratio'),
    (lambda emo, spa, act: 30 < spa.proximity_ratio < 80, 15, 'comfortable distance maintained'),
    (lambda emo, spa, act: act.child_activity_level in (MODERATE, DYNAMIC), 15, 'active play'),
]
BASELINE_REASON = 'baseline assessment'


def score_window(
    emotional: EmotionalAnalysis,
    spatial: SpatialAnalysis,
    activity: ActivityAnalysis,
    base_score: int = 50
) -> Tuple[int, str]:
    """Window score (capped at 100) and its comma-joined reasons."""
    score = base_score
    reasons = []
    for predicate, bonus, reason in WINDOW_RULES:
        if predicate(emotional, spatial, activity):
            score += bonus
            reasons.append(reason)
    return min(100, score), ', '.join(reasons) or BASELINE_REASON


def overall_engagement_score(
    emotional: EmotionalAnalysis,
    spatial: SpatialAnalysis,
    activity: ActivityAnalysis
) -> int:
    """0.3 * smiling ratio + 0.3 * proximity ratio + 0.4 * movement score, in [0, 100]."""
    raw = (
        emotional.child_smiling_ratio * 0.3
        + spatial.proximity_ratio * 0.3
        + activity.movement_score * 0.4
    )
    return int(clamp(round_half_up(raw), 0, 100))


def analyze_optimal_play_time(
    results: VideoIntelligenceResults,
    emotional: EmotionalAnalysis,
    spatial: SpatialAnalysis,
    activity: ActivityAnalysis,
    config: Dict = None
) -> OptimalPlayTime:
    """
    Score each window and keep the top ones.

    Args:
        results: Annotation bundle (windows are re-aggregated from it)
        emotional: Whole-video emotional analysis (engagement score)
        spatial: Whole-video spatial analysis (engagement score)
        activity: Whole-video activity analysis (engagement score)
        config: Full configuration dict (reads 'play_analysis.optimal_window')
    """
    if config is None:
        config = {}

    window_config = get_section(config, 'play_analysis').get('optimal_window', {})
    window_seconds = window_config.get('window_seconds', 30)
    window_count = window_config.get('window_count', 3)
    base_score = window_config.get('base_score', 50)
    top_windows = window_config.get('top_windows', 2)

    periods: List[PlayPeriod] = []
    for index in range(window_count):
        time_range = (index * window_seconds, (index + 1) * window_seconds)
        score, reason = score_window(
            analyze_emotional_attributes(results, config, time_range),
            analyze_spatial_proximity(results, config, time_range),
            analyze_child_activity(results, config, time_range),
            base_score
        )
        periods.append(PlayPeriod(
            start_time=float(time_range[0]),
            end_time=float(time_range[1]),
            score=score,
            reason=reason
        ))
        logger.debug(f"Window {time_range[0]}-{time_range[1]}s scored {score} ({reason})")

    best = sorted(periods, key=lambda p: p.score, reverse=True)[:top_windows]

    return OptimalPlayTime(
        best_periods=best,
        overall_engagement_score=overall_engagement_score(emotional, spatial, activity)
    )

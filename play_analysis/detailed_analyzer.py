"""
Detailed play analysis over raw annotations.

Runs the five sub-analyses (emotional, spatial, activity, toy
interaction, optimal play window) and bundles them.
"""

import logging
from typing import Dict

from video_annotations.models import VideoIntelligenceResults
from .activity import analyze_child_activity
from .data_models import DetailedPlayAnalysis
from .emotional import analyze_emotional_attributes
from .optimal_window import analyze_optimal_play_time
from .spatial import analyze_spatial_proximity
from .toy_interaction import analyze_toy_interaction

logger = logging.getLogger(__name__)


def has_person_data(results: VideoIntelligenceResults) -> bool:
    """True when any person track or person/face detection frame exists."""
    if any(track.frames for track in results.person_tracks()):
        return True
    for annotation in list(results.person_detection) + list(results.face_detection):
        if any(track.timestamped_objects for track in annotation.tracks):
            return True
    return False


def perform_detailed_play_analysis(results, config: Dict = None) -> DetailedPlayAnalysis:
    """
    Compute the detailed play analysis bundle.

    Args:
        results: VideoIntelligenceResults or its raw dict form
        config: Full configuration dict

    Returns:
        DetailedPlayAnalysis; has_sufficient_data is False (and every
        metric zero) when no person data exists
    """
    if config is None:
        config = {}

    results = VideoIntelligenceResults.from_dict(results)
    logger.info("Starting detailed play analysis")

    if not has_person_data(results):
        logger.warning("No person data in annotations; detailed analysis is empty")
        return DetailedPlayAnalysis(has_sufficient_data=False)

    emotional = analyze_emotional_attributes(results, config)
    spatial = analyze_spatial_proximity(results, config)
    activity = analyze_child_activity(results, config)
    interaction = analyze_toy_interaction(results, config)
    optimal = analyze_optimal_play_time(results, emotional, spatial, activity, config)

    logger.info(
        f"Detailed analysis complete: smiling {emotional.child_smiling_ratio:.1f}%, "
        f"proximity {spatial.proximity_ratio:.1f}%, activity {activity.child_activity_level}, "
        f"toy interaction {interaction.toy_interaction_ratio:.1f}%, "
        f"engagement {optimal.overall_engagement_score}"
    )

    return DetailedPlayAnalysis(
        emotional_analysis=emotional,
        spatial_analysis=spatial,
        activity_analysis=activity,
        interaction_analysis=interaction,
        optimal_play_time=optimal,
        has_sufficient_data=True
    )

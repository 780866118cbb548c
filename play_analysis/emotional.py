"""
Emotional attributes: smiling and camera gaze.

Every person-detection frame is counted as a child frame; face detections
only add to the raw smiling / gaze counts.
"""

import logging
from typing import Dict, Optional, Tuple

from video_annotations.models import VideoIntelligenceResults
from .data_models import EmotionalAnalysis

logger = logging.getLogger(__name__)

SMILING = 'smiling'
LOOKING_AT_CAMERA = 'looking_at_camera'


def in_range(time_offset: float, time_range: Optional[Tuple[float, float]]) -> bool:
    """True when time_offset lies in [start, end), or when no range is given."""
    if time_range is None:
        return True
    start, end = time_range
    return start <= time_offset < end


def analyze_emotional_attributes(
    results: VideoIntelligenceResults,
    config: Dict = None,
    time_range: Optional[Tuple[float, float]] = None
) -> EmotionalAnalysis:
    """
    Count smiling / looking-at-camera detections.

    Args:
        results: Annotation bundle
        config: Unused; accepted for a uniform analyzer signature
        time_range: Optional [start, end) window in seconds

    Returns:
        EmotionalAnalysis with child smiling ratio in percent
    """
    smiling = 0
    looking = 0
    child_smiling_frames = 0
    total_child_frames = 0

    for annotation in results.person_detection:
        for track in annotation.tracks:
            for obj in track.timestamped_objects:
                if not in_range(obj.time_offset, time_range):
                    continue
                total_child_frames += 1
                if obj.has_attribute(SMILING):
                    smiling += 1
                    child_smiling_frames += 1
                if obj.has_attribute(LOOKING_AT_CAMERA):
                    looking += 1

    for annotation in results.face_detection:
        for track in annotation.tracks:
            for obj in track.timestamped_objects:
                if not in_range(obj.time_offset, time_range):
                    continue
                if obj.has_attribute(SMILING):
                    smiling += 1
                if obj.has_attribute(LOOKING_AT_CAMERA):
                    looking += 1

    ratio = (child_smiling_frames / total_child_frames) * 100 if total_child_frames > 0 else 0.0

    return EmotionalAnalysis(
        smiling_detections=smiling,
        looking_at_camera_detections=looking,
        child_smiling_ratio=ratio,
        child_smiling_frames=child_smiling_frames,
        total_child_frames=total_child_frames
    )

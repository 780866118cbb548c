"""
Child-toy interaction from proximity between the first 'person' track
and toy-like object tracks, aligned by frame index.
"""

import logging
from typing import Dict, Optional, Tuple

from utils.config_loader import get_section
from utils.geometry import box_distance
from video_annotations.models import VideoIntelligenceResults
from .data_models import InteractionPeak, ToyInteractionAnalysis
from .emotional import in_range

logger = logging.getLogger(__name__)

DEFAULT_TOY_KEYWORDS = ['toy', 'ball', 'doll', 'block']


def analyze_toy_interaction(
    results: VideoIntelligenceResults,
    config: Dict = None,
    time_range: Optional[Tuple[float, float]] = None
) -> ToyInteractionAnalysis:
    """
    A child frame is an interaction frame when any toy is within the
    interaction threshold in the same frame index. Intensity = 1 - distance
    of the closest toy; frames above the peak threshold become peaks.
    """
    if config is None:
        config = {}

    play_config = get_section(config, 'play_analysis')
    keywords = play_config.get('toy_keywords', DEFAULT_TOY_KEYWORDS)
    threshold = play_config.get('toy_interaction_threshold', 0.4)
    peak_threshold = play_config.get('peak_intensity_threshold', 0.5)
    max_peaks = play_config.get('max_interaction_peaks', 20)

    toys = results.matching_tracks(keywords)
    persons = results.person_tracks()

    if not persons or not toys:
        return ToyInteractionAnalysis()

    child = persons[0]
    interaction_frames = 0
    total_frames = 0
    peaks = []

    for index, child_frame in enumerate(child.frames):
        if not in_range(child_frame.time_offset, time_range):
            continue
        total_frames += 1

        distances = [
            box_distance(child_frame.box, toy.frames[index].box)
            for toy in toys if index < len(toy.frames)
        ]
        near = [d for d in distances if d <= threshold]
        if not near:
            continue

        interaction_frames += 1
        intensity = max(0.0, 1 - min(near))
        if intensity > peak_threshold:
            peaks.append(InteractionPeak(time_offset=child_frame.time_offset, intensity=intensity))

    ratio = interaction_frames / total_frames * 100 if total_frames > 0 else 0.0

    return ToyInteractionAnalysis(
        toy_interaction_ratio=ratio,
        toy_interaction_frames=interaction_frames,
        total_play_frames=total_frames,
        detected_toys=[toy.description or 'unknown' for toy in toys],
        interaction_peaks=peaks[:max_peaks]
    )

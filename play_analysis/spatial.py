"""
Parent-child spatial proximity.

The first two 'person' object tracks are taken as parent and child in
annotation order (not identity-verified) and compared frame by frame
by array index.
"""

import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from utils.config_loader import get_section
from utils.geometry import box_distance
from video_annotations.models import VideoIntelligenceResults
from .data_models import DistanceSample, SpatialAnalysis
from .emotional import in_range

logger = logging.getLogger(__name__)


def spread_samples(samples: List[DistanceSample], limit: int) -> List[DistanceSample]:
    """At most limit samples evenly spaced over the whole session, first and last included."""
    if limit <= 0:
        return []
    if len(samples) <= limit:
        return list(samples)
    indices = np.unique(np.round(np.linspace(0, len(samples) - 1, limit)).astype(int))
    return [samples[i] for i in indices]


def analyze_spatial_proximity(
    results: VideoIntelligenceResults,
    config: Dict = None,
    time_range: Optional[Tuple[float, float]] = None
) -> SpatialAnalysis:
    """
    Distance statistics between the two person tracks.

    Without two person tracks or aligned frames every statistic is 0.
    distance_over_time is thinned to max_distance_samples points spread
    across the session; the statistics use every aligned frame.
    """
    if config is None:
        config = {}

    play_config = get_section(config, 'play_analysis')
    proximity_threshold = play_config.get('proximity_threshold', 0.3)
    max_samples = play_config.get('max_distance_samples', 100)

    persons = results.person_tracks()
    samples = []

    if len(persons) >= 2:
        parent, child = persons[0], persons[1]
        for parent_frame, child_frame in zip(parent.frames, child.frames):
            if not in_range(parent_frame.time_offset, time_range):
                continue
            samples.append(DistanceSample(
                time_offset=parent_frame.time_offset,
                distance=box_distance(parent_frame.box, child_frame.box)
            ))
    elif time_range is None:
        logger.debug(f"Spatial analysis needs two person tracks, found {len(persons)}")

    if not samples:
        return SpatialAnalysis()

    distances = np.array([s.distance for s in samples], dtype=float)
    close = int(np.sum(distances <= proximity_threshold))

    return SpatialAnalysis(
        average_distance=float(np.mean(distances)),
        min_distance=float(np.min(distances)),
        max_distance=float(np.max(distances)),
        proximity_ratio=close / len(samples) * 100,
        distance_over_time=spread_samples(samples, max_samples),
        sample_count=len(samples)
    )

"""
Parent/child attribution of person detections.

Two strategies:

- 'frame': every detection is labelled on its own from box size and
  vertical position. No identity continuity across frames, so one person
  can flip between parent and child.
- 'track': each detection track is an actor identity; the track gets a
  single role by majority vote of the per-frame rule (ties go to parent).

Both return two time-ordered series of ActorObservation.
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Tuple

from utils.config_loader import get_section
from video_annotations.models import NormalizedBoundingBox, VideoIntelligenceResults
from .data_models import ActorObservation
from .enums import Actor

logger = logging.getLogger(__name__)

STRATEGIES = ('frame', 'track')


def identify_actor(
    box: NormalizedBoundingBox,
    size_threshold: float = 0.3,
    top_threshold: float = 0.3
) -> Actor:
    """
    Heuristic role of a single detection.

    Larger boxes (width + height) or boxes starting near the top of the
    frame are taken to be the adult. Empty boxes carry no evidence and
    default to child.
    """
    if box.is_empty:
        return Actor.CHILD

    size = box.width + box.height
    if size > size_threshold or box.top < top_threshold:
        return Actor.PARENT

    return Actor.CHILD


def normalize_timing(series: List[ActorObservation], frame_interval: float = 1.0) -> List[ActorObservation]:
    """
    Sort a series by time; when it carries no timing (all offsets equal)
    use frame index * frame_interval instead.
    """
    if not series:
        return []

    if len({obs.time_offset for obs in series}) <= 1:
        return [replace(obs, time_offset=i * frame_interval) for i, obs in enumerate(series)]

    return sorted(series, key=lambda obs: obs.time_offset)


def frame_end_time(series: List[ActorObservation], index: int, frame_interval: float = 1.0) -> float:
    """End of the frame at index: next frame's time, or one interval later."""
    start = series[index].time_offset
    if index + 1 < len(series):
        nxt = series[index + 1].time_offset
        if nxt > start:
            return nxt
    return start + frame_interval


def separate_actors(
    results: VideoIntelligenceResults,
    config: Dict = None
) -> Tuple[List[ActorObservation], List[ActorObservation]]:
    """
    Split person detections into parent and child series.

    Args:
        results: Annotation bundle
        config: Full configuration dict (reads 'gesture_analysis')

    Returns:
        (parent_series, child_series), each time-ordered
    """
    if config is None:
        config = {}

    gesture_config = get_section(config, 'gesture_analysis')
    strategy = gesture_config.get('actor_identification', 'frame')
    size_threshold = gesture_config.get('parent_size_threshold', 0.3)
    top_threshold = gesture_config.get('parent_top_threshold', 0.3)
    frame_interval = gesture_config.get('default_frame_interval', 1.0)

    if strategy not in STRATEGIES:
        logger.warning(f"Unknown actor identification strategy '{strategy}', using 'frame'")
        strategy = 'frame'

    parent: List[ActorObservation] = []
    child: List[ActorObservation] = []

    track_id = 0
    for annotation in results.person_detection:
        for track in annotation.tracks:
            objects = track.timestamped_objects
            roles = [identify_actor(obj.box, size_threshold, top_threshold) for obj in objects]

            if strategy == 'track' and roles:
                votes = Counter(roles)
                track_role = Actor.PARENT if votes[Actor.PARENT] >= votes[Actor.CHILD] else Actor.CHILD
                roles = [track_role] * len(roles)

            for obj, role in zip(objects, roles):
                observation = ActorObservation(
                    box=obj.box,
                    time_offset=obj.time_offset,
                    actor=role,
                    track_id=track_id
                )
                (parent if role == Actor.PARENT else child).append(observation)

            track_id += 1

    parent = normalize_timing(parent, frame_interval)
    child = normalize_timing(child, frame_interval)

    logger.debug(
        f"Actor identification ({strategy}): {len(parent)} parent, "
        f"{len(child)} child observations from {track_id} tracks"
    )

    return parent, child

"""
Aggregation of detected gestures into patterns, interaction groups,
summary statistics and parent-child synchrony.
"""

import logging
from collections import Counter
from typing import Dict, List

from utils.config_loader import get_section
from utils.geometry import safe_mean
from .classifiers import classify_interaction_group, describe_interaction_group
from .data_models import (
    DetectedGesture,
    GesturePattern,
    GestureStatistics,
    InteractionGesture,
    ParentChildGestureSync,
)
from .enums import Actor, GestureType

logger = logging.getLogger(__name__)

# Social importance of each gesture type for pattern significance
GESTURE_WEIGHTS = {
    GestureType.HUGGING: 1.0,
    GestureType.HIGH_FIVE: 0.9,
    GestureType.HOLDING_HANDS: 0.9,
    GestureType.POINTING: 0.8,
    GestureType.GIVING: 0.8,
    GestureType.CLAPPING: 0.7,
    GestureType.WAVING: 0.6,
    GestureType.REACHING: 0.5,
    GestureType.WALKING: 0.3,
    GestureType.SITTING: 0.2,
    GestureType.STANDING: 0.1,
    GestureType.UNKNOWN: 0.0,
}
DEFAULT_GESTURE_WEIGHT = 0.5

ACTOR_ORDER = (Actor.PARENT, Actor.CHILD, Actor.BOTH)


def _plurality(counts: Counter, order) -> object:
    """Most frequent key; ties go to the earliest key in order."""
    return max(order, key=lambda key: counts.get(key, 0))


def pattern_significance(frequency: int, avg_duration: float, gesture_type: GestureType) -> float:
    frequency_score = min(1.0, frequency / 10)
    duration_score = min(1.0, avg_duration / 5)
    weight = GESTURE_WEIGHTS.get(gesture_type, DEFAULT_GESTURE_WEIGHT)
    return frequency_score * 0.4 + duration_score * 0.3 + weight * 0.3


def analyze_gesture_patterns(gestures: List[DetectedGesture], config: Dict = None) -> List[GesturePattern]:
    """
    One pattern per gesture type; patterns at or below the significance
    threshold are dropped.
    """
    if config is None:
        config = {}

    threshold = get_section(config, 'gesture_analysis').get('pattern_significance_threshold', 0.3)

    groups: Dict[GestureType, List[DetectedGesture]] = {}
    for gesture in gestures:
        groups.setdefault(gesture.type, []).append(gesture)

    patterns = []
    for gesture_type, group in groups.items():
        frequency = len(group)
        avg_duration = sum(g.duration for g in group) / frequency

        person_counts = Counter(g.person for g in group)
        context_counts = Counter(g.context for g in group)
        contexts_in_order = list(dict.fromkeys(g.context for g in group))

        significance = pattern_significance(frequency, avg_duration, gesture_type)

        if significance > threshold:
            patterns.append(GesturePattern(
                pattern=gesture_type,
                frequency=frequency,
                duration=avg_duration,
                person=_plurality(person_counts, ACTOR_ORDER),
                context=_plurality(context_counts, contexts_in_order),
                significance=round(significance, 4)
            ))

    logger.debug(f"{len(patterns)} significant gesture patterns out of {len(groups)} types")

    return patterns


def is_interaction_gesture(gesture: DetectedGesture) -> bool:
    return gesture.person == Actor.BOTH or 'interaction' in gesture.context


def group_by_time(gestures: List[DetectedGesture], max_gap: float = 2.0) -> List[List[DetectedGesture]]:
    """Greedy grouping of start-sorted gestures separated by at most max_gap seconds."""
    groups: List[List[DetectedGesture]] = []
    current: List[DetectedGesture] = []

    for gesture in sorted(gestures, key=lambda g: g.start_time):
        if current and gesture.start_time - current[-1].end_time > max_gap:
            groups.append(current)
            current = []
        current.append(gesture)

    if current:
        groups.append(current)

    return groups


def interaction_quality(group: List[DetectedGesture]) -> float:
    avg_confidence = safe_mean(g.confidence for g in group)
    avg_intensity = safe_mean(g.intensity for g in group)
    duration = max(g.end_time for g in group) - min(g.start_time for g in group)
    return avg_confidence * 0.4 + avg_intensity * 0.3 + min(1.0, duration / 5) * 0.3


def interaction_mutuality(group: List[DetectedGesture]) -> float:
    """1 - normalized imbalance between parent and child contributions."""
    parent = sum(1 for g in group if g.person in (Actor.PARENT, Actor.BOTH))
    child = sum(1 for g in group if g.person in (Actor.CHILD, Actor.BOTH))
    total = parent + child
    if total == 0:
        return 0.0
    return 1 - abs(parent - child) / total


def analyze_interaction_gestures(gestures: List[DetectedGesture], config: Dict = None) -> List[InteractionGesture]:
    """Group cross-actor / interaction-context gestures into interaction events."""
    if config is None:
        config = {}

    max_gap = get_section(config, 'gesture_analysis').get('interaction_group_gap', 2.0)

    interactions = []
    for group in group_by_time([g for g in gestures if is_interaction_gesture(g)], max_gap):
        participants = []
        for gesture in group:
            actors = (Actor.PARENT, Actor.CHILD) if gesture.person == Actor.BOTH else (gesture.person,)
            for actor in actors:
                if actor not in participants:
                    participants.append(actor)

        interaction_type = classify_interaction_group(g.type for g in group)

        interactions.append(InteractionGesture(
            type=interaction_type,
            participants=participants,
            start_time=min(g.start_time for g in group),
            end_time=max(g.end_time for g in group),
            quality=round(interaction_quality(group), 4),
            mutuality=round(interaction_mutuality(group), 4),
            description=describe_interaction_group(interaction_type),
            gesture_count=len(group)
        ))

    return interactions


def calculate_gesture_statistics(gestures: List[DetectedGesture]) -> GestureStatistics:
    total = len(gestures)
    if total == 0:
        return GestureStatistics()

    by_type = Counter(g.type.value for g in gestures)
    video_duration = max(g.end_time for g in gestures)

    return GestureStatistics(
        total_gestures=total,
        gestures_by_person={
            actor.value: sum(1 for g in gestures if g.person == actor) for actor in ACTOR_ORDER
        },
        gestures_by_type=dict(by_type),
        average_gesture_duration=sum(g.duration for g in gestures) / total,
        gesture_frequency=total / video_duration if video_duration > 0 else 0.0,
        most_common_gesture=max(by_type, key=by_type.get)
    )


def analyze_parent_child_sync(gestures: List[DetectedGesture], config: Dict = None) -> ParentChildGestureSync:
    """
    Pairwise timing comparison of every parent gesture with every child gesture.

    - gap <= synchronized_window: synchronized (and mirrored when same type)
    - synchronized_window < gap <= response_window: response
    - same type and imitation_min_gap < gap <= imitation_max_gap: imitation
    """
    if config is None:
        config = {}

    sync_config = get_section(config, 'gesture_analysis').get('sync', {})
    sync_window = sync_config.get('synchronized_window', 1.0)
    response_window = sync_config.get('response_window', 3.0)
    imitation_min = sync_config.get('imitation_min_gap', 0.5)
    imitation_max = sync_config.get('imitation_max_gap', 5.0)

    parent = [g for g in gestures if g.person == Actor.PARENT]
    child = [g for g in gestures if g.person == Actor.CHILD]
    both = [g for g in gestures if g.person == Actor.BOTH]

    synchronized = mirrored = response = imitation = 0

    for p in parent:
        for c in child:
            gap = abs(p.start_time - c.start_time)
            same_type = p.type == c.type

            if gap <= sync_window:
                synchronized += 1
                if same_type:
                    mirrored += 1

            if sync_window < gap <= response_window:
                response += 1

            if same_type and imitation_min < gap <= imitation_max:
                imitation += 1

    total = len(parent) + len(child)
    score = (synchronized + mirrored + len(both)) / total if total > 0 else 0.0

    return ParentChildGestureSync(
        synchronized_gestures=synchronized,
        mirrored_gestures=mirrored,
        response_gestures=response,
        gesture_imitation=imitation,
        sync_score=round(max(0.0, min(1.0, score)), 4)
    )

"""
Basic gesture detection from person detections and object tracks.

Pipeline:
1. Split person detections into parent and child series
2. Per actor, per consecutive frame pair: movement, position and
   object-interaction gestures
3. Per aligned frame index: parent-child pair gestures
4. Drop gestures below the confidence threshold
5. Aggregate into patterns, interaction groups, statistics and synchrony

This is a coarse heuristic over bounding boxes only, not pose estimation.
"""

import logging
from typing import Dict, List

from utils.config_loader import get_section
from utils.geometry import box_distance, center, movement, union_box
from video_annotations.models import ObjectTrack, VideoIntelligenceResults
from .actor_identification import frame_end_time, separate_actors
from .aggregation import (
    analyze_gesture_patterns,
    analyze_interaction_gestures,
    analyze_parent_child_sync,
    calculate_gesture_statistics,
)
from .classifiers import (
    classify_movement,
    classify_object_interaction,
    classify_pair_interaction,
    classify_position,
    describe_gesture,
    describe_object_interaction,
    describe_pair_gesture,
    infer_context,
    movement_confidence,
    movement_intensity,
    object_interaction_confidence,
    object_interaction_intensity,
    pair_confidence,
    pair_intensity,
    position_confidence,
    position_intensity,
)
from .data_models import ActorObservation, BasicGestureAnalysis, DetectedGesture
from .enums import Actor, GestureType

logger = logging.getLogger(__name__)


class BasicGestureDetector:
    """
    Heuristic gesture detector.

    Args:
        config: Full configuration dict; thresholds are read from the
            'gesture_analysis' section
    """

    def __init__(self, config: Dict = None):
        self.config = config if config is not None else {}

        gesture_config = get_section(self.config, 'gesture_analysis')
        self.confidence_threshold = gesture_config.get('confidence_threshold', 0.6)
        self.proximity_threshold = gesture_config.get('proximity_threshold', 0.2)
        self.frame_interval = gesture_config.get('default_frame_interval', 1.0)
        self.object_time_tolerance = gesture_config.get('object_time_tolerance', 0.5)
        self.actor_identification = gesture_config.get('actor_identification', 'frame')

    def analyze_basic_gestures(self, results: VideoIntelligenceResults) -> BasicGestureAnalysis:
        """
        Run gesture detection on an annotation bundle.

        Args:
            results: VideoIntelligenceResults or its raw dict form

        Returns:
            BasicGestureAnalysis (empty when no person detections exist)
        """
        results = VideoIntelligenceResults.from_dict(results)
        logger.info("Starting basic gesture analysis")

        gestures = self.detect_gestures(results)

        analysis = BasicGestureAnalysis(
            detected_gestures=gestures,
            gesture_patterns=analyze_gesture_patterns(gestures, self.config),
            interaction_gestures=analyze_interaction_gestures(gestures, self.config),
            gesture_statistics=calculate_gesture_statistics(gestures),
            parent_child_gesture_sync=analyze_parent_child_sync(gestures, self.config),
            actor_identification=self.actor_identification
        )

        logger.info(
            f"Gesture analysis complete: {len(gestures)} gestures, "
            f"{len(analysis.gesture_patterns)} patterns, "
            f"{len(analysis.interaction_gestures)} interactions, "
            f"sync score {analysis.parent_child_gesture_sync.sync_score:.2f}"
        )

        return analysis

    def detect_gestures(self, results: VideoIntelligenceResults) -> List[DetectedGesture]:
        """All gestures at or above the confidence threshold."""
        parent, child = separate_actors(results, self.config)

        if not parent and not child:
            logger.warning("No person detections available for gesture analysis")
            return []

        objects = results.non_person_tracks()

        candidates: List[DetectedGesture] = []
        candidates.extend(self.detect_actor_gestures(parent, Actor.PARENT, objects))
        candidates.extend(self.detect_actor_gestures(child, Actor.CHILD, objects))
        candidates.extend(self.detect_pair_gestures(parent, child))

        kept = [g for g in candidates if g.confidence >= self.confidence_threshold]

        logger.debug(f"Kept {len(kept)} of {len(candidates)} candidate gestures")

        return kept

    def detect_actor_gestures(
        self,
        series: List[ActorObservation],
        actor: Actor,
        objects: List[ObjectTrack]
    ) -> List[DetectedGesture]:
        """Movement, position and object gestures over consecutive frame pairs."""
        gestures = []

        for i in range(len(series) - 1):
            current, nxt = series[i], series[i + 1]
            start = current.time_offset
            end = frame_end_time(series, i, self.frame_interval)
            move = movement(current.box, nxt.box)

            gesture_type = classify_movement(move)
            if gesture_type != GestureType.UNKNOWN:
                gestures.append(DetectedGesture(
                    id=f"{actor.value}_{gesture_type.value}_{i}",
                    type=gesture_type,
                    person=actor,
                    start_time=start,
                    end_time=end,
                    confidence=movement_confidence(move),
                    intensity=movement_intensity(move),
                    bounding_box=current.box,
                    description=describe_gesture(gesture_type, actor),
                    context=infer_context(gesture_type)
                ))

            gesture_type = classify_position(current.box)
            if gesture_type != GestureType.UNKNOWN:
                gestures.append(DetectedGesture(
                    id=f"{actor.value}_{gesture_type.value}_{i}",
                    type=gesture_type,
                    person=actor,
                    start_time=start,
                    end_time=end,
                    confidence=position_confidence(current.box),
                    intensity=position_intensity(current.box),
                    bounding_box=current.box,
                    description=describe_gesture(gesture_type, actor),
                    context=infer_context(gesture_type)
                ))

            for object_index, track in enumerate(objects):
                frame = track.frame_near(start, self.object_time_tolerance)
                if frame is None:
                    continue

                proximity = box_distance(current.box, frame.box)
                if proximity >= self.proximity_threshold:
                    continue

                gesture_type = classify_object_interaction(move, proximity)
                if gesture_type == GestureType.UNKNOWN:
                    continue

                name = track.label or 'object'
                gestures.append(DetectedGesture(
                    id=f"{actor.value}_{gesture_type.value}_{i}_{object_index}",
                    type=gesture_type,
                    person=actor,
                    start_time=start,
                    end_time=end,
                    confidence=object_interaction_confidence(proximity, self.proximity_threshold),
                    intensity=object_interaction_intensity(move, proximity, self.proximity_threshold),
                    bounding_box=current.box,
                    description=describe_object_interaction(gesture_type, name),
                    context=f"interacting_with_{name}"
                ))

        return gestures

    def detect_pair_gestures(
        self,
        parent: List[ActorObservation],
        child: List[ActorObservation]
    ) -> List[DetectedGesture]:
        """Joint gestures for frames aligned by index across the two series."""
        gestures = []

        for i in range(min(len(parent), len(child))):
            p, c = parent[i], child[i]
            proximity = box_distance(p.box, c.box)

            if proximity >= self.proximity_threshold:
                continue

            gesture_type = classify_pair_interaction(center(p.box), center(c.box), proximity)
            if gesture_type == GestureType.UNKNOWN:
                continue

            start = min(p.time_offset, c.time_offset)
            end = max(
                frame_end_time(parent, i, self.frame_interval),
                frame_end_time(child, i, self.frame_interval)
            )

            gestures.append(DetectedGesture(
                id=f"interaction_{gesture_type.value}_{i}",
                type=gesture_type,
                person=Actor.BOTH,
                start_time=start,
                end_time=end,
                confidence=pair_confidence(proximity, self.proximity_threshold),
                intensity=pair_intensity(proximity, self.proximity_threshold),
                bounding_box=union_box([p.box, c.box]),
                description=describe_pair_gesture(gesture_type),
                context='parent_child_interaction'
            ))

        return gestures


def analyze_basic_gestures(results, config: Dict = None) -> BasicGestureAnalysis:
    """Convenience wrapper around BasicGestureDetector."""
    return BasicGestureDetector(config).analyze_basic_gestures(results)

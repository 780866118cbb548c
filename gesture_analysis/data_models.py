"""
Data models for gesture detection results.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from video_annotations.models import NormalizedBoundingBox
from .enums import Actor, GestureType, InteractionType


@dataclass
class ActorObservation:
    """One bounding-box observation attributed to an actor."""
    box: NormalizedBoundingBox
    time_offset: float
    actor: Actor
    track_id: int = 0


@dataclass
class DetectedGesture:
    """
    Single classified gesture event.

    Attributes:
        id: '{actor}_{type}_{frame}' style identifier
        type: Gesture label
        person: Performing actor (parent, child or both)
        start_time: Start in seconds from video start
        end_time: End in seconds (>= start_time)
        confidence: Detection confidence (0-1)
        intensity: Movement / proximity magnitude (0-1)
        bounding_box: Box the gesture was observed in
        description: Human-readable description
        context: Inferred context label (e.g. 'attention_directing')
    """
    id: str
    type: GestureType
    person: Actor
    start_time: float
    end_time: float
    confidence: float
    intensity: float
    bounding_box: NormalizedBoundingBox
    description: str
    context: str

    def __post_init__(self):
        self.end_time = max(self.start_time, self.end_time)
        self.confidence = round(max(0.0, min(1.0, self.confidence)), 4)
        self.intensity = round(max(0.0, min(1.0, self.intensity)), 4)

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


@dataclass
class GesturePattern:
    """Aggregate over all gestures of one type."""
    pattern: GestureType
    frequency: int
    duration: float  # Average gesture duration (s)
    person: Actor  # Dominant actor
    context: str  # Dominant context
    significance: float  # 0-1


@dataclass
class InteractionGesture:
    """
    Temporally grouped cluster of interaction gestures.

    Attributes:
        type: Interaction category
        participants: Actors taking part ('parent', 'child')
        start_time: Earliest gesture start
        end_time: Latest gesture end
        quality: Weighted confidence/intensity/duration (0-1)
        mutuality: Balance of contribution between actors (0-1)
        description: Human-readable description
        gesture_count: Gestures in the group
    """
    type: InteractionType
    participants: List[Actor]
    start_time: float
    end_time: float
    quality: float
    mutuality: float
    description: str
    gesture_count: int = 0


@dataclass
class GestureStatistics:
    """Summary counts over all surviving gestures."""
    total_gestures: int = 0
    gestures_by_person: Dict[str, int] = field(
        default_factory=lambda: {'parent': 0, 'child': 0, 'both': 0}
    )
    gestures_by_type: Dict[str, int] = field(default_factory=dict)
    average_gesture_duration: float = 0.0
    gesture_frequency: float = 0.0  # Gestures per second of covered video
    most_common_gesture: str = GestureType.UNKNOWN.value


@dataclass
class ParentChildGestureSync:
    """Pairwise parent/child gesture timing counts and a 0-1 sync score."""
    synchronized_gestures: int = 0
    mirrored_gestures: int = 0
    response_gestures: int = 0
    gesture_imitation: int = 0
    sync_score: float = 0.0


@dataclass
class BasicGestureAnalysis:
    """Complete output of the gesture detector."""
    detected_gestures: List[DetectedGesture] = field(default_factory=list)
    gesture_patterns: List[GesturePattern] = field(default_factory=list)
    interaction_gestures: List[InteractionGesture] = field(default_factory=list)
    gesture_statistics: GestureStatistics = field(default_factory=GestureStatistics)
    parent_child_gesture_sync: ParentChildGestureSync = field(default_factory=ParentChildGestureSync)
    actor_identification: str = "frame"

    def gestures_by(self, actor: Actor) -> List[DetectedGesture]:
        return [g for g in self.detected_gestures if g.person == actor]

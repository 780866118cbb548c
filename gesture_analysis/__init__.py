"""
Gesture analysis module.

Classifies coarse gestures of an inferred parent and child from
bounding-box time series:
- Per-actor movement, posture and object-interaction gestures
- Parent-child joint gestures (hugging, high five, holding hands, giving)
- Gesture patterns, grouped interaction events and statistics
- Parent-child gesture synchrony

Actor roles are inferred heuristically from box size and position;
they are not verified person identities.
"""

from .enums import GestureType, InteractionType, Actor
from .data_models import (
    ActorObservation,
    DetectedGesture,
    GesturePattern,
    InteractionGesture,
    GestureStatistics,
    ParentChildGestureSync,
    BasicGestureAnalysis,
)
from .actor_identification import identify_actor, separate_actors
from .detector import BasicGestureDetector, analyze_basic_gestures

__all__ = [
    'GestureType',
    'InteractionType',
    'Actor',
    'ActorObservation',
    'DetectedGesture',
    'GesturePattern',
    'InteractionGesture',
    'GestureStatistics',
    'ParentChildGestureSync',
    'BasicGestureAnalysis',
    'identify_actor',
    'separate_actors',
    'BasicGestureDetector',
    'analyze_basic_gestures',
]

"""
Video annotation input model.

Typed, read-only view of the annotation bundle produced by an external
video-intelligence service: object tracks, person/face detections and
speech transcription with word timing.
"""

from .models import (
    parse_time_offset,
    NormalizedBoundingBox,
    ObjectFrame,
    ObjectTrack,
    DetectionAttribute,
    TimestampedObject,
    DetectionTrack,
    DetectionAnnotation,
    WordInfo,
    SpeechAlternative,
    SpeechTranscription,
    ShotChange,
    ExplicitContentFrame,
    VideoIntelligenceResults,
)
from .loader import load_annotations

__all__ = [
    'parse_time_offset',
    'NormalizedBoundingBox',
    'ObjectFrame',
    'ObjectTrack',
    'DetectionAttribute',
    'TimestampedObject',
    'DetectionTrack',
    'DetectionAnnotation',
    'WordInfo',
    'SpeechAlternative',
    'SpeechTranscription',
    'ShotChange',
    'ExplicitContentFrame',
    'VideoIntelligenceResults',
    'load_annotations',
]

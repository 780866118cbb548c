"""
Typed model of video-intelligence annotation results.

The annotation source (a hosted video-intelligence API or a recorded
fixture) delivers JSON with camelCase keys. These dataclasses are the
read-only view the analyzers work on:

- ObjectTrack: labelled entity with per-frame normalized bounding boxes
- DetectionAnnotation: person/face detections (tracks of timestamped objects
  carrying named attributes such as 'smiling' or 'looking_at_camera')
- SpeechTranscription: transcript alternatives with word timing and speaker tags

Parsing never raises on malformed content: missing boxes become the zero box,
unparseable time offsets become 0.0 and missing collections become empty lists.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', '1', 'yes')


def parse_time_offset(value: Any) -> float:
    """
    Convert an annotation time offset to seconds.

    Accepts '1.5s', '1.5', numbers, {'seconds': 1, 'nanos': 500000000}
    and None. Anything unparseable is 0.0.
    """
    if value is None:
        return 0.0

    if isinstance(value, bool):
        return 0.0

    if isinstance(value, (int, float)):
        return max(0.0, float(value))

    if isinstance(value, str):
        text = value.strip().rstrip('s')
        try:
            return max(0.0, float(text))
        except ValueError:
            logger.debug(f"Unparseable time offset: {value!r}")
            return 0.0

    if isinstance(value, dict):
        try:
            seconds = float(value.get('seconds') or 0)
            nanos = float(value.get('nanos') or 0)
        except (TypeError, ValueError):
            logger.debug(f"Unparseable time offset: {value!r}")
            return 0.0
        return max(0.0, seconds + nanos / 1e9)

    return 0.0


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _as_list(value: Any) -> List:
    return value if isinstance(value, list) else []


@dataclass
class NormalizedBoundingBox:
    """
    Bounding box in normalized frame coordinates.

    All coordinates are clamped to [0, 1] and ordered so that
    left <= right and top <= bottom.
    """
    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0

    def __post_init__(self):
        left = max(0.0, min(1.0, _as_float(self.left)))
        right = max(0.0, min(1.0, _as_float(self.right)))
        top = max(0.0, min(1.0, _as_float(self.top)))
        bottom = max(0.0, min(1.0, _as_float(self.bottom)))
        self.left, self.right = min(left, right), max(left, right)
        self.top, self.bottom = min(top, bottom), max(top, bottom)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0.0 and self.height == 0.0

    @classmethod
    def from_dict(cls, data: Any) -> 'NormalizedBoundingBox':
        """
        Build a box from {left, top, right, bottom} or a {'vertices': [...]}
        polygon (vertex 0 = top-left, vertex 2 = bottom-right).
        """
        if isinstance(data, NormalizedBoundingBox):
            return data

        if not isinstance(data, dict):
            return cls()

        vertices = data.get('vertices')
        if isinstance(vertices, list):
            if len(vertices) >= 4 and all(isinstance(v, dict) for v in vertices[:4]):
                return cls(
                    left=vertices[0].get('x') or 0.0,
                    top=vertices[0].get('y') or 0.0,
                    right=vertices[2].get('x') or 0.0,
                    bottom=vertices[2].get('y') or 0.0
                )
            return cls()

        return cls(
            left=data.get('left') or 0.0,
            top=data.get('top') or 0.0,
            right=data.get('right') or 0.0,
            bottom=data.get('bottom') or 0.0
        )


@dataclass
class ObjectFrame:
    """One frame of an object track."""
    box: NormalizedBoundingBox
    time_offset: float

    @classmethod
    def from_dict(cls, data: Any) -> 'ObjectFrame':
        data = data if isinstance(data, dict) else {}
        return cls(
            box=NormalizedBoundingBox.from_dict(data.get('normalizedBoundingBox')),
            time_offset=parse_time_offset(data.get('timeOffset'))
        )


@dataclass
class ObjectTrack:
    """
    Tracked entity (e.g. 'person', 'ball') with ordered frames.

    Attributes:
        description: Entity label from the annotation source
        confidence: Track confidence (0-1)
        frames: Ordered per-frame boxes
        entity_id: Knowledge-graph id of the entity, if any
    """
    description: str
    confidence: float = 0.0
    frames: List[ObjectFrame] = field(default_factory=list)
    entity_id: str = ""

    @property
    def label(self) -> str:
        return self.description.strip().lower()

    def frame_near(self, time_offset: float, tolerance: float) -> Optional[ObjectFrame]:
        """Return the frame closest in time to time_offset within tolerance."""
        best = None
        best_gap = None
        for frame in self.frames:
            gap = abs(frame.time_offset - time_offset)
            if gap <= tolerance and (best_gap is None or gap < best_gap):
                best, best_gap = frame, gap
        return best

    @classmethod
    def from_dict(cls, data: Any) -> 'ObjectTrack':
        data = data if isinstance(data, dict) else {}
        entity = data.get('entity') if isinstance(data.get('entity'), dict) else {}
        return cls(
            description=str(entity.get('description') or ''),
            confidence=_as_float(data.get('confidence')),
            frames=[ObjectFrame.from_dict(f) for f in _as_list(data.get('frames'))],
            entity_id=str(entity.get('entityId') or '')
        )


@dataclass
class DetectionAttribute:
    """Named attribute of a detection ('smiling', 'looking_at_camera', ...)."""
    name: str
    value: str = ""
    confidence: float = 0.0

    @property
    def is_true(self) -> bool:
        return self.value.strip().lower() in TRUE_VALUES

    @classmethod
    def from_dict(cls, data: Any) -> 'DetectionAttribute':
        data = data if isinstance(data, dict) else {}
        return cls(
            name=str(data.get('name') or ''),
            value=str(data.get('value') if data.get('value') is not None else ''),
            confidence=_as_float(data.get('confidence'))
        )


@dataclass
class TimestampedObject:
    """A single detection of a person or face at one time offset."""
    box: NormalizedBoundingBox
    time_offset: float
    attributes: List[DetectionAttribute] = field(default_factory=list)

    def has_attribute(self, name: str) -> bool:
        """True when the named attribute is present with a true-like value."""
        return any(attr.name == name and attr.is_true for attr in self.attributes)

    @classmethod
    def from_dict(cls, data: Any) -> 'TimestampedObject':
        data = data if isinstance(data, dict) else {}
        raw_box = data.get('normalizedBoundingBox')
        if raw_box is None:
            raw_box = data.get('boundingBox')
        return cls(
            box=NormalizedBoundingBox.from_dict(raw_box),
            time_offset=parse_time_offset(data.get('timeOffset')),
            attributes=[DetectionAttribute.from_dict(a) for a in _as_list(data.get('attributes'))]
        )


@dataclass
class DetectionTrack:
    """Track of timestamped detections belonging to one detected individual."""
    timestamped_objects: List[TimestampedObject] = field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> 'DetectionTrack':
        data = data if isinstance(data, dict) else {}
        segment = data.get('segment') if isinstance(data.get('segment'), dict) else {}
        objects = [TimestampedObject.from_dict(o) for o in _as_list(data.get('timestampedObjects'))]
        start = parse_time_offset(segment.get('startTimeOffset'))
        end = parse_time_offset(segment.get('endTimeOffset'))
        return cls(timestamped_objects=objects, start_time=start, end_time=max(start, end))


@dataclass
class DetectionAnnotation:
    """Person or face detection annotation: an ordered list of tracks."""
    tracks: List[DetectionTrack] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'DetectionAnnotation':
        data = data if isinstance(data, dict) else {}
        return cls(tracks=[DetectionTrack.from_dict(t) for t in _as_list(data.get('tracks'))])


@dataclass
class WordInfo:
    """Single recognized word with timing and optional speaker tag."""
    word: str
    start_time: float = 0.0
    end_time: float = 0.0
    confidence: float = 0.0
    speaker_tag: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'WordInfo':
        data = data if isinstance(data, dict) else {}
        start = parse_time_offset(data.get('startTime'))
        end = parse_time_offset(data.get('endTime'))
        speaker_tag = data.get('speakerTag')
        try:
            speaker_tag = int(speaker_tag) if speaker_tag is not None else None
        except (TypeError, ValueError):
            speaker_tag = None
        return cls(
            word=str(data.get('word') or ''),
            start_time=start,
            end_time=max(start, end),
            confidence=_as_float(data.get('confidence')),
            speaker_tag=speaker_tag
        )


@dataclass
class SpeechAlternative:
    """One transcript hypothesis for a speech segment."""
    transcript: str = ""
    confidence: float = 0.0
    words: List[WordInfo] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> 'SpeechAlternative':
        data = data if isinstance(data, dict) else {}
        return cls(
            transcript=str(data.get('transcript') or ''),
            confidence=_as_float(data.get('confidence')),
            words=[WordInfo.from_dict(w) for w in _as_list(data.get('words'))]
        )


@dataclass
class SpeechTranscription:
    """Transcribed speech segment; the first alternative is the best one."""
    alternatives: List[SpeechAlternative] = field(default_factory=list)
    language_code: str = ""

    @property
    def best(self) -> Optional[SpeechAlternative]:
        return self.alternatives[0] if self.alternatives else None

    @classmethod
    def from_dict(cls, data: Any) -> 'SpeechTranscription':
        data = data if isinstance(data, dict) else {}
        return cls(
            alternatives=[SpeechAlternative.from_dict(a) for a in _as_list(data.get('alternatives'))],
            language_code=str(data.get('languageCode') or '')
        )


@dataclass
class ShotChange:
    """Camera shot boundary."""
    start_time: float
    end_time: float

    @classmethod
    def from_dict(cls, data: Any) -> 'ShotChange':
        data = data if isinstance(data, dict) else {}
        start = parse_time_offset(data.get('startTimeOffset'))
        end = parse_time_offset(data.get('endTimeOffset'))
        return cls(start_time=start, end_time=max(start, end))


@dataclass
class ExplicitContentFrame:
    """Explicit-content likelihood for one frame."""
    time_offset: float
    likelihood: str = "UNKNOWN"

    @classmethod
    def from_dict(cls, data: Any) -> 'ExplicitContentFrame':
        data = data if isinstance(data, dict) else {}
        return cls(
            time_offset=parse_time_offset(data.get('timeOffset')),
            likelihood=str(data.get('pornographyLikelihood') or 'UNKNOWN')
        )


@dataclass
class VideoIntelligenceResults:
    """
    Complete annotation bundle for one video.

    Attributes:
        object_tracking: Tracked entities (people, toys, furniture...)
        speech_transcription: Speech segments
        face_detection: Face detection annotations
        person_detection: Person detection annotations
        shot_changes: Shot boundaries
        explicit_content: Explicit-content frames
    """
    object_tracking: List[ObjectTrack] = field(default_factory=list)
    speech_transcription: List[SpeechTranscription] = field(default_factory=list)
    face_detection: List[DetectionAnnotation] = field(default_factory=list)
    person_detection: List[DetectionAnnotation] = field(default_factory=list)
    shot_changes: List[ShotChange] = field(default_factory=list)
    explicit_content: List[ExplicitContentFrame] = field(default_factory=list)

    def person_tracks(self) -> List[ObjectTrack]:
        """Object tracks labelled exactly 'person', in annotation order."""
        return [track for track in self.object_tracking if track.label == 'person']

    def matching_tracks(self, keywords) -> List[ObjectTrack]:
        """Object tracks whose label contains any of the keywords."""
        keywords = [k.lower() for k in keywords]
        return [
            track for track in self.object_tracking
            if any(keyword in track.label for keyword in keywords)
        ]

    def non_person_tracks(self) -> List[ObjectTrack]:
        return [track for track in self.object_tracking if track.label != 'person']

    @property
    def is_empty(self) -> bool:
        return not (self.object_tracking or self.person_detection
                    or self.face_detection or self.speech_transcription)

    @classmethod
    def from_dict(cls, data: Any) -> 'VideoIntelligenceResults':
        """Parse the camelCase JSON produced by the annotation source."""
        if isinstance(data, VideoIntelligenceResults):
            return data

        data = data if isinstance(data, dict) else {}

        explicit_frames = []
        for annotation in _as_list(data.get('explicitContent')):
            if isinstance(annotation, dict) and 'frames' in annotation:
                explicit_frames.extend(
                    ExplicitContentFrame.from_dict(f) for f in _as_list(annotation.get('frames'))
                )
            else:
                explicit_frames.append(ExplicitContentFrame.from_dict(annotation))

        return cls(
            object_tracking=[ObjectTrack.from_dict(o) for o in _as_list(data.get('objectTracking'))],
            speech_transcription=[
                SpeechTranscription.from_dict(s) for s in _as_list(data.get('speechTranscription'))
            ],
            face_detection=[DetectionAnnotation.from_dict(f) for f in _as_list(data.get('faceDetection'))],
            person_detection=[DetectionAnnotation.from_dict(p) for p in _as_list(data.get('personDetection'))],
            shot_changes=[ShotChange.from_dict(s) for s in _as_list(data.get('shotChanges'))],
            explicit_content=explicit_frames
        )

"""
Data models for detailed play analysis and language interaction.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class EmotionalAnalysis:
    """
    Smiling and gaze attributes from person and face detections.

    Attributes:
        smiling_detections: Detections with smiling=true (person + face)
        looking_at_camera_detections: Detections with looking_at_camera=true
        child_smiling_ratio: Smiling child frames / child frames (0-100)
        child_smiling_frames: Person-detection frames with smiling=true
        total_child_frames: All person-detection frames
    """
    smiling_detections: int = 0
    looking_at_camera_detections: int = 0
    child_smiling_ratio: float = 0.0
    child_smiling_frames: int = 0
    total_child_frames: int = 0


@dataclass
class DistanceSample:
    time_offset: float
    distance: float


@dataclass
class SpatialAnalysis:
    """Parent-child distance statistics (normalized units, ratio 0-100)."""
    average_distance: float = 0.0
    min_distance: float = 0.0
    max_distance: float = 0.0
    proximity_ratio: float = 0.0
    distance_over_time: List[DistanceSample] = field(default_factory=list)
    sample_count: int = 0


@dataclass
class ActivityAnalysis:
    """Child movement intensity."""
    child_activity_level: str = 'static'  # static | moderate | dynamic
    movement_score: float = 0.0  # 0-100
    average_movement_per_second: float = 0.0
    movement_frames: int = 0
    total_frames: int = 0


@dataclass
class InteractionPeak:
    time_offset: float
    intensity: float


@dataclass
class ToyInteractionAnalysis:
    """Child proximity to toy-like objects."""
    toy_interaction_ratio: float = 0.0  # 0-100
    toy_interaction_frames: int = 0
    total_play_frames: int = 0
    detected_toys: List[str] = field(default_factory=list)
    interaction_peaks: List[InteractionPeak] = field(default_factory=list)


@dataclass
class PlayPeriod:
    """Scored candidate play window."""
    start_time: float
    end_time: float
    score: int
    reason: str


@dataclass
class OptimalPlayTime:
    best_periods: List[PlayPeriod] = field(default_factory=list)
    overall_engagement_score: int = 0


@dataclass
class DetailedPlayAnalysis:
    """
    Bundle of the five detailed sub-analyses.

    has_sufficient_data is False when the annotations contain no person
    data of any kind; scores are then all zero.
    """
    emotional_analysis: EmotionalAnalysis = field(default_factory=EmotionalAnalysis)
    spatial_analysis: SpatialAnalysis = field(default_factory=SpatialAnalysis)
    activity_analysis: ActivityAnalysis = field(default_factory=ActivityAnalysis)
    interaction_analysis: ToyInteractionAnalysis = field(default_factory=ToyInteractionAnalysis)
    optimal_play_time: OptimalPlayTime = field(default_factory=OptimalPlayTime)
    has_sufficient_data: bool = True


@dataclass
class Utterance:
    """Consecutive words of one speaker."""
    speaker_tag: int
    text: str
    start_time: float
    end_time: float
    word_count: int
    confidence: float = 0.0


@dataclass
class SpeakerStats:
    speaker_tag: int
    role: str  # parent | child
    utterance_count: int = 0
    average_words_per_utterance: float = 0.0
    total_words: int = 0
    average_interval: float = 0.0  # Seconds between own utterances


@dataclass
class ConversationPatterns:
    turn_count: int = 0
    average_response_time: float = 0.0
    parent_initiations: int = 0
    child_initiations: int = 0
    parent_utterance_share: float = 0.0  # 0-1


@dataclass
class UtteranceTypes:
    questions: int = 0
    instructions: int = 0
    emotion_expressions: int = 0
    praise: int = 0


@dataclass
class KeywordSummary:
    top_keywords: List[Dict] = field(default_factory=list)  # [{'word', 'count'}]
    unique_words: int = 0
    total_words: int = 0


@dataclass
class SpeechTimelineBucket:
    """Utterance counts per role in one minute of video."""
    start_time: float
    end_time: float
    parent_utterances: int = 0
    child_utterances: int = 0


@dataclass
class LanguageInteractionAnalysis:
    """Speech-derived interaction metrics."""
    utterances: List[Utterance] = field(default_factory=list)
    speaker_stats: List[SpeakerStats] = field(default_factory=list)
    conversation_patterns: ConversationPatterns = field(default_factory=ConversationPatterns)
    utterance_types: UtteranceTypes = field(default_factory=UtteranceTypes)
    keywords: KeywordSummary = field(default_factory=KeywordSummary)
    timeline: List[SpeechTimelineBucket] = field(default_factory=list)
    vocabulary_diversity: float = 0.0  # unique / total words (0-1)
    has_speech: bool = False

"""
Data models for the integrated (video + speech) analysis.

Signal fields that cannot be derived from the available modalities are
None; downstream scoring substitutes neutral defaults for them.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class PhysicalInteractionSignals:
    proximity_score: Optional[float] = None  # 0-100
    average_response_time: Optional[float] = None  # seconds
    space_utilization: Optional[float] = None  # 0-100
    safety_indicators: Optional[float] = None  # 0-100


@dataclass
class EmotionalInteractionSignals:
    overall_engagement: Optional[float] = None  # 0-100
    emotional_synchrony: Optional[float] = None  # 0-1
    positive_interaction_ratio: Optional[float] = None  # 0-1
    conflict_resolution_score: Optional[float] = None  # 0-100


@dataclass
class LanguageInteractionSignals:
    vocabulary_diversity: Optional[float] = None  # 0-100
    scaffolding_level: Optional[float] = None  # 0-100
    turn_taking_balance: Optional[float] = None  # 0-1
    response_appropriateness: Optional[float] = None  # 0-1
    complexity_score: Optional[float] = None  # 0-100
    unique_expression_count: Optional[int] = None


@dataclass
class PlayPatternSignals:
    diversity_score: Optional[float] = None  # 0-100
    material_variety: Optional[float] = None  # 0-100
    imaginative_play_score: Optional[float] = None  # 0-100
    problem_solving_instances: Optional[int] = None


@dataclass
class Synchronization:
    """Parent-child synchrony components (0-1)."""
    emotional_synchrony: float = 0.7
    behavioral_synchrony: float = 0.79
    linguistic_synchrony: float = 0.85
    temporal_synchrony: float = 0.73


@dataclass
class ParentProfile:
    engagement: float = 0.5
    responsiveness: float = 0.5
    supportiveness: float = 0.75
    emotional_regulation: float = 0.5


@dataclass
class ChildProfile:
    participation: float = 0.5
    expressiveness: float = 0.68
    receptiveness: float = 0.5
    emotional_expression: float = 0.6


@dataclass
class ParticipantProfiles:
    parent: ParentProfile = field(default_factory=ParentProfile)
    child: ChildProfile = field(default_factory=ChildProfile)


@dataclass
class ProximityPattern:
    """Proximity level of one time range of the session."""
    time_range: str  # e.g. '0-30s'
    level: str  # close | moderate | distant
    appropriateness: float  # 0-1


@dataclass
class PhysicalPatterns:
    proximity_patterns: List[ProximityPattern] = field(default_factory=list)
    movement_synchronization: float = 0.79
    shared_activities: float = 0.82


@dataclass
class VerbalPatterns:
    conversation_balance: float = 0.5  # Child share of utterances (0-1)
    response_quality: float = 0.5
    language_development_support: float = 0.76
    turn_taking_quality: float = 0.5


@dataclass
class EmotionalPatterns:
    emotional_mirroring: float = 0.81
    positive_affect_sharing: float = 0.45
    emotional_support: float = 0.78
    co_regulation: float = 0.74


@dataclass
class InteractionPatterns:
    physical: PhysicalPatterns = field(default_factory=PhysicalPatterns)
    verbal: VerbalPatterns = field(default_factory=VerbalPatterns)
    emotional: EmotionalPatterns = field(default_factory=EmotionalPatterns)


@dataclass
class RiskFactor:
    factor: str
    severity: str  # low | moderate | high
    description: str


@dataclass
class Strength:
    area: str
    score: int  # 0-100
    description: str


@dataclass
class DevelopmentalIndicator:
    score: int  # 0-100
    areas: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class DevelopmentalIndicators:
    language: DevelopmentalIndicator
    social: DevelopmentalIndicator
    emotional: DevelopmentalIndicator
    cognitive: DevelopmentalIndicator


@dataclass
class DataQuality:
    video: int = 0
    audio: int = 0
    overall: int = 0


@dataclass
class AnalysisMetadata:
    analysis_version: str
    confidence_level: int
    data_quality: DataQuality


@dataclass
class IntegratedAnalysis:
    """
    Fused view of one play session.

    Attributes:
        session_id: Session identifier
        overall_score: Mean of parent, child, synchrony and interaction composites (0-100)
        interaction_quality: Interaction composite (0-100)
        physical_interaction .. play_patterns: Signals consumed by the evaluation
        average_attention_span: Mean sustained-activity span (s), None if unknown
        max_attention_span: Longest sustained-activity span (s), None if unknown
        insufficient_data: True when neither video nor speech carried usable data
    """
    session_id: str
    overall_score: int
    interaction_quality: int
    physical_interaction: PhysicalInteractionSignals
    emotional_interaction: EmotionalInteractionSignals
    language_interaction: LanguageInteractionSignals
    play_patterns: PlayPatternSignals
    average_attention_span: Optional[float]
    max_attention_span: Optional[float]
    synchronization: Synchronization
    participant_profiles: ParticipantProfiles
    interaction_patterns: InteractionPatterns
    key_findings: List[str]
    recommendations: List[str]
    risk_factors: List[RiskFactor]
    strengths: List[Strength]
    developmental_indicators: DevelopmentalIndicators
    metadata: AnalysisMetadata
    completed_at: str
    insufficient_data: bool = False

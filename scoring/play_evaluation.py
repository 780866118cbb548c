"""
Play Evaluation System.

Maps aggregated interaction signals (not raw annotations) to seven
sub-scores, a weighted overall score and a four-tier letter grade.

Sub-scores (0-100):
- Interaction quality: proximity, engagement, response speed
- Development support: vocabulary diversity, play diversity, scaffolding
- Play environment: space use, material variety, safety
- Communication: turn-taking balance, response appropriateness, complexity
- Emotional connection: synchrony, positive interactions, conflict resolution
- Attention span: average and longest sustained activity
- Creativity: imaginative play, problem solving, unique expressions

Overall = 0.25 IQ + 0.20 DS + 0.15 PE + 0.20 COM + 0.15 EMO + 0.03 ATT + 0.02 CRE

Missing signals take neutral defaults; an explicit 0 is a real value.

Grade (this table only; reports use their own eight-tier scale):
- A: >= 90
- B: >= 80
- C: >= 70
- D: otherwise
"""

import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from utils.config_loader import get_section
from utils.geometry import clamp, round_half_up
from utils.serialization import get_field
from .insight_rules import (
    DEVELOPMENT_GOALS,
    GENERAL_RECOMMENDATIONS,
    IMPROVEMENT_RULES,
    INSUFFICIENT_DATA_IMPROVEMENT,
    STRENGTH_RULES,
    apply_rules,
    tier_recommendations,
)

logger = logging.getLogger(__name__)

EVALUATION_VERSION = '2.0.0'

EVALUATION_CRITERIA = [
    'physical_interaction',
    'emotional_connection',
    'language_development',
    'play_patterns',
    'attention_span',
    'creativity_indicators',
]

DEFAULT_OVERALL_WEIGHTS = {
    'interaction_quality': 0.25,
    'development_support': 0.20,
    'play_environment': 0.15,
    'communication_score': 0.20,
    'emotional_connection': 0.15,
    'attention_span': 0.03,
    'creativity': 0.02,
}

# Neutral defaults used when an upstream signal is absent
NEUTRAL_SIGNALS = {
    'proximity_score': 70,
    'overall_engagement': 75,
    'average_response_time': 2.0,
    'vocabulary_diversity': 70,
    'diversity_score': 75,
    'scaffolding_level': 60,
    'space_utilization': 80,
    'material_variety': 70,
    'safety_indicators': 90,
    'turn_taking_balance': 0.7,
    'response_appropriateness': 0.8,
    'complexity_score': 70,
    'emotional_synchrony': 0.75,
    'positive_interaction_ratio': 0.8,
    'conflict_resolution_score': 70,
    'average_attention_span': 45,
    'max_attention_span': 120,
    'imaginative_play_score': 70,
    'problem_solving_instances': 0,
    'unique_expression_count': 5,
}

QUICK_EVALUATION_DEFAULT = 75


@dataclass
class EvaluationScores:
    """Eight named scores, each 0-100."""
    overall: int = 0
    interaction_quality: int = 0
    development_support: int = 0
    play_environment: int = 0
    communication_score: int = 0
    emotional_connection: int = 0
    attention_span: int = 0
    creativity: int = 0


@dataclass
class EvaluationInsights:
    strengths: List[str] = field(default_factory=list)
    improvements: List[str] = field(default_factory=list)
    development_goals: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class EvaluationMetadata:
    evaluation_version: str = EVALUATION_VERSION
    criteria: List[str] = field(default_factory=lambda: list(EVALUATION_CRITERIA))
    processing_time: float = 0.0  # milliseconds


@dataclass
class PlayEvaluationResult:
    """
    Evaluation of one play session.

    Attributes:
        session_id: Session identifier ('unknown' if absent)
        scores: EvaluationScores
        insights: Rule-derived strengths, improvements, goals, recommendations
        grade: 'A', 'B', 'C' or 'D'
        evaluated_at: ISO-8601 timestamp
        metadata: Version, criteria and processing time
        insufficient_data: True when the input carried no usable signal
    """
    session_id: str
    scores: EvaluationScores
    insights: EvaluationInsights
    grade: str
    evaluated_at: str
    metadata: EvaluationMetadata
    insufficient_data: bool = False


def calculate_grade(overall_score: float) -> str:
    """Four-tier grade for evaluation scores."""
    if overall_score >= 90:
        return 'A'
    if overall_score >= 80:
        return 'B'
    if overall_score >= 70:
        return 'C'
    return 'D'


def _signal(section: Any, name: str) -> float:
    """Numeric signal from a section, or its neutral default when absent."""
    value = get_field(section, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return NEUTRAL_SIGNALS[name]
    value = float(value)
    if not math.isfinite(value):
        return NEUTRAL_SIGNALS[name]
    return value


def interaction_quality_score(physical: Any, emotional: Any) -> float:
    proximity = _signal(physical, 'proximity_score')
    engagement = _signal(emotional, 'overall_engagement')
    response_time = _signal(physical, 'average_response_time')
    response_score = max(0.0, 100 - response_time * 10)
    return proximity * 0.4 + engagement * 0.4 + response_score * 0.2


def development_support_score(language: Any, play: Any) -> float:
    vocabulary = _signal(language, 'vocabulary_diversity')
    play_diversity = _signal(play, 'diversity_score')
    scaffolding = _signal(language, 'scaffolding_level')
    return vocabulary * 0.35 + play_diversity * 0.35 + scaffolding * 0.30


def play_environment_score(play: Any, physical: Any) -> float:
    space = _signal(physical, 'space_utilization')
    materials = _signal(play, 'material_variety')
    safety = _signal(physical, 'safety_indicators')
    return space * 0.4 + materials * 0.35 + safety * 0.25


def communication_score(language: Any) -> float:
    turn_taking = _signal(language, 'turn_taking_balance')
    appropriateness = _signal(language, 'response_appropriateness')
    complexity = _signal(language, 'complexity_score')
    return turn_taking * 40 + appropriateness * 35 + complexity * 0.25


def emotional_connection_score(emotional: Any) -> float:
    synchrony = _signal(emotional, 'emotional_synchrony')
    positive = _signal(emotional, 'positive_interaction_ratio')
    conflict = _signal(emotional, 'conflict_resolution_score')
    return synchrony * 35 + positive * 40 + conflict * 0.25


def attention_span_score(analysis: Any) -> float:
    """45 s average earns the 80-point base; 120 s maximum earns the 10-point bonus."""
    average = _signal(analysis, 'average_attention_span')
    maximum = _signal(analysis, 'max_attention_span')
    base = 80 if average >= 45 else average * 1.78
    bonus = 10 if maximum >= 120 else (maximum / 120) * 10
    return min(100, base + bonus)


def creativity_score(play: Any, language: Any) -> float:
    imaginative = _signal(play, 'imaginative_play_score')
    problem_solving = min(100, _signal(play, 'problem_solving_instances') * 20)
    expressions = min(100, _signal(language, 'unique_expression_count') * 4)
    return imaginative * 0.6 + problem_solving * 0.25 + expressions * 0.15


class PlayEvaluationSystem:
    """
    Scores a play session from its integrated analysis.

    Usage:
        evaluator = PlayEvaluationSystem(config)
        result = evaluator.evaluate_play_session(integrated)
    """

    def __init__(self, config: Dict = None):
        self.config = config if config is not None else {}
        weights = get_section(self.config, 'evaluation').get('overall_weights', {})
        self.weights = {**DEFAULT_OVERALL_WEIGHTS, **(weights or {})}

    def evaluate_play_session(self, integrated: Any) -> PlayEvaluationResult:
        """
        Evaluate one session.

        Args:
            integrated: IntegratedAnalysis, or a mapping with camelCase or
                snake_case keys (physicalInteraction, emotionalInteraction,
                languageInteraction, playPatterns, averageAttentionSpan, ...)

        Returns:
            PlayEvaluationResult
        """
        started = time.perf_counter()
        integrated = integrated if integrated is not None else {}
        session_id = str(get_field(integrated, 'session_id', None) or 'unknown')

        logger.info(f"Starting play evaluation for session {session_id}")

        if get_field(integrated, 'insufficient_data', False) is True:
            logger.warning(f"Session {session_id}: insufficient data, returning zero scores")
            return self._insufficient_result(session_id, started)

        scores = self.calculate_scores(integrated)
        insights = self.generate_insights(scores)
        grade = calculate_grade(scores.overall)

        result = PlayEvaluationResult(
            session_id=session_id,
            scores=scores,
            insights=insights,
            grade=grade,
            evaluated_at=datetime.now(timezone.utc).isoformat(),
            metadata=EvaluationMetadata(processing_time=self._elapsed_ms(started))
        )

        logger.info(f"Play evaluation complete: overall {scores.overall}, grade {grade}")

        return result

    def calculate_scores(self, integrated: Any) -> EvaluationScores:
        physical = get_field(integrated, 'physical_interaction', {}) or {}
        emotional = get_field(integrated, 'emotional_interaction', {}) or {}
        language = get_field(integrated, 'language_interaction', {}) or {}
        play = get_field(integrated, 'play_patterns', {}) or {}

        raw = {
            'interaction_quality': interaction_quality_score(physical, emotional),
            'development_support': development_support_score(language, play),
            'play_environment': play_environment_score(play, physical),
            'communication_score': communication_score(language),
            'emotional_connection': emotional_connection_score(emotional),
            'attention_span': attention_span_score(integrated),
            'creativity': creativity_score(play, language),
        }
        raw = {name: clamp(value, 0.0, 100.0) for name, value in raw.items()}

        overall = sum(raw[name] * self.weights.get(name, 0.0) for name in raw)

        logger.debug(f"Raw evaluation sub-scores: {raw}, overall {overall:.4f}")

        return EvaluationScores(
            overall=int(clamp(round_half_up(overall), 0, 100)),
            **{name: round_half_up(value) for name, value in raw.items()}
        )

    @staticmethod
    def generate_insights(scores: EvaluationScores) -> EvaluationInsights:
        return EvaluationInsights(
            strengths=apply_rules(STRENGTH_RULES, scores),
            improvements=apply_rules(IMPROVEMENT_RULES, scores),
            development_goals=list(DEVELOPMENT_GOALS),
            recommendations=tier_recommendations(scores.overall) + list(GENERAL_RECOMMENDATIONS)
        )

    def quick_evaluation(self, basic_data: Any) -> Dict[str, Any]:
        """
        Simplified evaluation from an overall score alone.

        Returns:
            {'score': score clamped to [50, 100] (default 75), 'grade': grade}
        """
        value = get_field(basic_data, 'overall_score', None)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            value = QUICK_EVALUATION_DEFAULT
        score = max(50, min(100, value))
        return {'score': score, 'grade': calculate_grade(score)}

    def _insufficient_result(self, session_id: str, started: float) -> PlayEvaluationResult:
        return PlayEvaluationResult(
            session_id=session_id,
            scores=EvaluationScores(),
            insights=EvaluationInsights(
                improvements=[INSUFFICIENT_DATA_IMPROVEMENT],
                development_goals=list(DEVELOPMENT_GOALS),
                recommendations=list(GENERAL_RECOMMENDATIONS)
            ),
            grade=calculate_grade(0),
            evaluated_at=datetime.now(timezone.utc).isoformat(),
            metadata=EvaluationMetadata(processing_time=self._elapsed_ms(started)),
            insufficient_data=True
        )

    @staticmethod
    def _elapsed_ms(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 3)

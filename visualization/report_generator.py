"""
Comprehensive report generation.

Composes the video, voice, integrated and evaluation results of one
session into a single structured report:
- Executive summary (blended overall score, 8-tier grade, strengths, risks)
- Physical / verbal / emotional sections with per-metric breakdowns
- Play patterns and developmental indicators
- Actionable insights and participant profiles
- Temporal analysis (timeline, peak moments, patterns)
- Immediate / short-term / long-term recommendations and resources

Inputs may be the pipeline dataclasses or their JSON form (camelCase keys);
anything missing falls back to the same neutral defaults the integrated
analysis uses, so a bare {integrated: {overallScore: ...}} still produces
a complete report.
"""

import logging
import math
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from fusion.data_models import InteractionPatterns, ParticipantProfiles, Synchronization
from utils.config_loader import get_section
from utils.geometry import clamp, round_half_up, safe_mean
from utils.serialization import get_field, save_json
from .temporal_analysis import TemporalAnalysis, derive_temporal_analysis

logger = logging.getLogger(__name__)

REPORT_VERSION = '2.0.0'
REPORT_TYPES = ('parent', 'professional', 'detailed')
MOTOR_DEFAULT_SCORE = 78


@dataclass
class ExecutiveSummary:
    overall_score: int
    grade: str  # A+ .. F
    key_strengths: List[str]
    priority_areas: List[str]
    risk_level: str  # low | moderate | high
    confidence: float


@dataclass
class InteractionSection:
    """Scored breakdown of one interaction domain."""
    score: int
    grade: str
    strengths: List[str]
    improvements: List[str]
    key_observations: List[str]
    metrics: Dict[str, int]


@dataclass
class DominantPattern:
    type: str
    frequency: float  # 0-1
    quality: float  # 0-1
    description: str


@dataclass
class PlayPatternSection:
    dominant_patterns: List[DominantPattern]
    variability: float
    engagement: float
    creativity: float
    observations: List[str]


@dataclass
class DevelopmentArea:
    score: int
    milestones: List[str]
    recommendations: List[str]


@dataclass
class DevelopmentalSection:
    language: DevelopmentArea
    social: DevelopmentArea
    emotional: DevelopmentArea
    cognitive: DevelopmentArea
    motor: DevelopmentArea


@dataclass
class DetailedAnalysis:
    physical_interaction: InteractionSection
    verbal_interaction: InteractionSection
    emotional_interaction: InteractionSection
    play_patterns: PlayPatternSection
    developmental_indicators: DevelopmentalSection


@dataclass
class ActionableInsight:
    category: str  # language | social | emotional | cognitive | play | parenting
    priority: str  # high | medium | low
    title: str
    description: str
    specific_actions: List[str]
    expected_outcome: str
    timeframe: str


@dataclass
class ParticipantReport:
    role: str
    strengths: List[str]
    growth_areas: List[str]
    behavior_patterns: List[str]
    communication_style: str
    engagement_level: int
    support_needs: List[str]


@dataclass
class ParticipantReports:
    parent: ParticipantReport
    child: ParticipantReport


@dataclass
class Recommendation:
    title: str
    description: str
    rationale: str
    implementation: List[str] = field(default_factory=list)
    resources: List[str] = field(default_factory=list)
    success_indicators: List[str] = field(default_factory=list)


@dataclass
class RecommendationPlan:
    immediate: List[Recommendation] = field(default_factory=list)
    short_term: List[Recommendation] = field(default_factory=list)
    long_term: List[Recommendation] = field(default_factory=list)


@dataclass
class Resource:
    type: str  # article | video | book | activity | professional
    title: str
    description: str
    relevance: str  # high | medium | low
    url: Optional[str] = None


@dataclass
class ReportMetadata:
    analysis_version: str
    confidence_level: float
    data_quality: Dict[str, float]
    processing_time: float  # milliseconds


@dataclass
class ComprehensiveReport:
    """
    Complete session report.

    Attributes:
        report_id: Random UUID
        session_id: Session identifier
        generated_at: ISO-8601 timestamp
        report_type: parent | professional | detailed
        executive_summary: Headline score, grade and priorities
        detailed_analysis: Per-domain sections
        actionable_insights: Threshold-triggered insights
        participant_profiles: Parent and child profiles
        temporal_analysis: Timeline, peak moments, patterns
        recommendations: Immediate / short-term / long-term plan
        resources: Further reading and support
        metadata: Version, confidence, data quality, processing time
    """
    report_id: str
    session_id: str
    generated_at: str
    report_type: str
    executive_summary: ExecutiveSummary
    detailed_analysis: DetailedAnalysis
    actionable_insights: List[ActionableInsight]
    participant_profiles: ParticipantReports
    temporal_analysis: TemporalAnalysis
    recommendations: RecommendationPlan
    resources: List[Resource]
    metadata: ReportMetadata


def determine_report_grade(score: float) -> str:
    """Eight-tier report grade (A+ .. F)."""
    if score >= 95:
        return 'A+'
    if score >= 90:
        return 'A'
    if score >= 85:
        return 'B+'
    if score >= 80:
        return 'B'
    if score >= 75:
        return 'C+'
    if score >= 70:
        return 'C'
    if score >= 60:
        return 'D'
    return 'F'


def section_grade(score: float) -> str:
    """Four-tier grade for individual report sections."""
    if score >= 90:
        return 'A'
    if score >= 80:
        return 'B'
    if score >= 70:
        return 'C'
    return 'D'


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _pct(value: Any) -> int:
    return int(clamp(round_half_up((_number(value) or 0.0) * 100), 0, 100))


def _fraction(section: Any, name: str, default: float) -> float:
    value = _number(get_field(section, name))
    return clamp(default if value is None else value)


class ComprehensiveReportGenerator:
    """
    Builds ComprehensiveReport objects.

    Usage:
        generator = ComprehensiveReportGenerator(config)
        report = generator.generate_report(session_id, {
            'video': ..., 'voice': ..., 'integrated': ..., 'evaluation': ...
        })
    """

    def __init__(self, config: Dict = None):
        self.config = config if config is not None else {}
        report_config = get_section(self.config, 'report')
        self.integrated_weight = report_config.get('integrated_weight', 0.6)
        self.evaluation_weight = report_config.get('evaluation_weight', 0.4)
        self.default_report_type = report_config.get('report_type', 'parent')

    def generate_report(
        self,
        session_id: str,
        analysis_results: Dict,
        options: Dict = None
    ) -> ComprehensiveReport:
        """
        Generate the report for one session.

        Args:
            session_id: Session identifier
            analysis_results: {'video', 'voice', 'integrated', 'evaluation'}
            options: {'report_type': 'parent' | 'professional' | 'detailed'}

        Returns:
            ComprehensiveReport

        Raises:
            ValueError: Unknown report type
        """
        started = time.perf_counter()
        options = options or {}
        report_type = options.get('report_type') or options.get('reportType') or self.default_report_type
        if report_type not in REPORT_TYPES:
            raise ValueError(f"Unknown report type: {report_type} (expected one of {REPORT_TYPES})")

        analysis_results = analysis_results or {}
        integrated = get_field(analysis_results, 'integrated', {}) or {}
        evaluation = get_field(analysis_results, 'evaluation', {}) or {}
        video = get_field(analysis_results, 'video', {}) or {}

        logger.info(f"Generating {report_type} report for session {session_id}")

        overall_score = self.calculate_overall_score(integrated, evaluation)
        metadata = get_field(integrated, 'metadata', {}) or {}
        confidence = clamp(_number(get_field(metadata, 'confidence_level')) or 0, 0, 100)

        insights = self.generate_actionable_insights(integrated)

        report = ComprehensiveReport(
            report_id=str(uuid.uuid4()),
            session_id=session_id,
            generated_at=datetime.now(timezone.utc).isoformat(),
            report_type=report_type,
            executive_summary=self.generate_executive_summary(integrated, overall_score, confidence),
            detailed_analysis=self.generate_detailed_analysis(integrated, evaluation, video),
            actionable_insights=insights,
            participant_profiles=self.generate_participant_profiles(integrated),
            temporal_analysis=derive_temporal_analysis(video, self.config),
            recommendations=self.generate_recommendations(overall_score, insights, report_type),
            resources=self.generate_resources(insights, report_type),
            metadata=ReportMetadata(
                analysis_version=REPORT_VERSION,
                confidence_level=confidence,
                data_quality=self._data_quality(metadata),
                processing_time=0.0
            )
        )
        report.metadata.processing_time = round((time.perf_counter() - started) * 1000, 3)

        logger.info(
            f"Report {report.report_id} generated: overall {overall_score}, "
            f"grade {report.executive_summary.grade}"
        )

        return report

    def calculate_overall_score(self, integrated: Any, evaluation: Any) -> int:
        """Weighted blend of integrated and evaluation scores clamped to [0, 100]; evaluation falls back to integrated."""
        integrated_score = _number(get_field(integrated, 'overall_score'))
        if integrated_score is None:
            logger.warning("Integrated analysis has no overall score, using 0")
            integrated_score = 0.0

        scores = get_field(evaluation, 'scores', {}) or {}
        evaluation_score = _number(get_field(scores, 'overall'))
        if evaluation_score is None:
            evaluation_score = integrated_score

        blended = round_half_up(
            integrated_score * self.integrated_weight + evaluation_score * self.evaluation_weight
        )
        return int(clamp(blended, 0, 100))

    @staticmethod
    def generate_executive_summary(integrated: Any, overall_score: int, confidence: float) -> ExecutiveSummary:
        strengths = list(get_field(integrated, 'strengths', []) or [])
        strengths.sort(key=lambda s: _number(get_field(s, 'score')) or 0, reverse=True)

        risks = list(get_field(integrated, 'risk_factors', []) or [])
        severities = [get_field(r, 'severity', 'low') for r in risks]

        if 'high' in severities:
            risk_level = 'high'
        elif 'moderate' in severities:
            risk_level = 'moderate'
        else:
            risk_level = 'low'

        return ExecutiveSummary(
            overall_score=overall_score,
            grade=determine_report_grade(overall_score),
            key_strengths=[get_field(s, 'description', '') for s in strengths[:3]],
            priority_areas=[
                get_field(r, 'description', '')
                for r, severity in zip(risks, severities)
                if severity in ('high', 'moderate')
            ][:3],
            risk_level=risk_level,
            confidence=confidence
        )

    def generate_detailed_analysis(self, integrated: Any, evaluation: Any, video: Any) -> DetailedAnalysis:
        patterns = get_field(integrated, 'interaction_patterns', None) or InteractionPatterns()
        return DetailedAnalysis(
            physical_interaction=self.analyze_physical_interaction(get_field(patterns, 'physical', {}) or {}),
            verbal_interaction=self.analyze_verbal_interaction(get_field(patterns, 'verbal', {}) or {}),
            emotional_interaction=self.analyze_emotional_interaction(get_field(patterns, 'emotional', {}) or {}),
            play_patterns=self.analyze_play_patterns(video, integrated, evaluation),
            developmental_indicators=self.analyze_developmental_indicators(integrated)
        )

    @staticmethod
    def analyze_physical_interaction(physical: Any) -> InteractionSection:
        proximity_patterns = get_field(physical, 'proximity_patterns', []) or []
        proximity = clamp(safe_mean(
            _number(get_field(p, 'appropriateness')) for p in proximity_patterns
        ))
        sync = _fraction(physical, 'movement_synchronization', 0.79)
        shared = _fraction(physical, 'shared_activities', 0.82)
        score = round_half_up((proximity + sync + shared) / 3 * 100)

        strengths = []
        if sync > 0.8:
            strengths.append('Well synchronized movement')
        if shared > 0.8:
            strengths.append('High participation in shared activities')

        improvements = []
        if sync < 0.6:
            improvements.append('Improve movement synchronization')
        if shared < 0.6:
            improvements.append('Increase shared activities')

        return InteractionSection(
            score=score,
            grade=section_grade(score),
            strengths=strengths or ['Appropriate physical interaction'],
            improvements=improvements,
            key_observations=[
                f"{len(proximity_patterns)} proximity patterns observed",
                f"Movement synchronization: {_pct(sync)}%",
                f"Shared activity participation: {_pct(shared)}%",
            ],
            metrics={
                'proximity': _pct(proximity),
                'synchronization': _pct(sync),
                'sharedActivities': _pct(shared),
            }
        )

    @staticmethod
    def analyze_verbal_interaction(verbal: Any) -> InteractionSection:
        balance = _fraction(verbal, 'conversation_balance', 0.5)
        response = _fraction(verbal, 'response_quality', 0.5)
        support = _fraction(verbal, 'language_development_support', 0.76)
        turn_taking = _fraction(verbal, 'turn_taking_quality', 0.5)
        score = round_half_up((balance + response + support + turn_taking) / 4 * 100)

        strengths = []
        if response > 0.8:
            strengths.append('High response quality')
        if turn_taking > 0.8:
            strengths.append('Good conversational turn-taking')

        improvements = []
        if balance < 0.3:
            improvements.append('Balance the conversation')
        if support < 0.6:
            improvements.append('Strengthen language development support')

        return InteractionSection(
            score=score,
            grade=section_grade(score),
            strengths=strengths or ['Basic verbal interaction'],
            improvements=improvements,
            key_observations=[
                f"Conversation balance: {_pct(balance)}%",
                f"Response quality: {_pct(response)}%",
                f"Language development support: {_pct(support)}%",
            ],
            metrics={
                'balance': _pct(balance),
                'responseQuality': _pct(response),
                'developmentSupport': _pct(support),
                'turnTaking': _pct(turn_taking),
            }
        )

    @staticmethod
    def analyze_emotional_interaction(emotional: Any) -> InteractionSection:
        mirroring = _fraction(emotional, 'emotional_mirroring', 0.81)
        positive = _fraction(emotional, 'positive_affect_sharing', 0.45)
        support = _fraction(emotional, 'emotional_support', 0.78)
        co_regulation = _fraction(emotional, 'co_regulation', 0.74)
        score = round_half_up((mirroring + positive + support + co_regulation) / 4 * 100)

        strengths = []
        if positive > 0.8:
            strengths.append('Frequent sharing of positive emotions')
        if support > 0.8:
            strengths.append('Ample emotional support')

        improvements = []
        if mirroring < 0.6:
            improvements.append('Improve emotional mirroring')
        if co_regulation < 0.6:
            improvements.append('Strengthen co-regulation of emotions')

        return InteractionSection(
            score=score,
            grade=section_grade(score),
            strengths=strengths or ['Basic emotional interaction'],
            improvements=improvements,
            key_observations=[
                f"Emotional mirroring: {_pct(mirroring)}%",
                f"Positive affect sharing: {_pct(positive)}%",
                f"Co-regulation: {_pct(co_regulation)}%",
            ],
            metrics={
                'mirroring': _pct(mirroring),
                'positiveAffect': _pct(positive),
                'support': _pct(support),
                'coRegulation': _pct(co_regulation),
            }
        )

    @staticmethod
    def analyze_play_patterns(video: Any, integrated: Any, evaluation: Any) -> PlayPatternSection:
        """Dominant patterns from gesture patterns; a fixed example when there are none."""
        emotional = get_field(integrated, 'emotional_interaction', {}) or {}
        engagement = _number(get_field(emotional, 'overall_engagement'))
        engagement = 0.88 if engagement is None else round(clamp(engagement / 100), 2)

        scores = get_field(evaluation, 'scores', {}) or {}
        creativity = _number(get_field(scores, 'creativity'))
        creativity = 0.82 if creativity is None else round(clamp(creativity / 100), 2)

        gesture_analysis = get_field(video, 'gesture_analysis', {}) or {}
        gesture_patterns = list(get_field(gesture_analysis, 'gesture_patterns', []) or [])

        if not gesture_patterns:
            return PlayPatternSection(
                dominant_patterns=[
                    DominantPattern('cooperative play', 0.8, 0.85,
                                    'Parent and child work together toward a goal'),
                    DominantPattern('imitation play', 0.6, 0.75,
                                    "Imitating each other's actions and enjoying it"),
                    DominantPattern('creative play', 0.7, 0.8,
                                    'Free play that draws on imagination'),
                ],
                variability=0.75,
                engagement=engagement,
                creativity=creativity,
                observations=[
                    'Shows a balanced range of play types',
                    'Both parent and child participate actively',
                    'Creative ideas come up often',
                ]
            )

        total = sum(int(get_field(p, 'frequency', 0) or 0) for p in gesture_patterns) or 1
        gesture_patterns.sort(key=lambda p: _number(get_field(p, 'significance')) or 0, reverse=True)

        dominant = []
        for item in gesture_patterns[:3]:
            kind = get_field(item, 'pattern', 'unknown')
            kind = str(getattr(kind, 'value', kind))
            person = get_field(item, 'person', 'both')
            person = str(getattr(person, 'value', person))
            frequency = int(get_field(item, 'frequency', 0) or 0)
            dominant.append(DominantPattern(
                type=kind.replace('_', ' '),
                frequency=round(frequency / total, 2),
                quality=round(_number(get_field(item, 'significance')) or 0.0, 2),
                description=f"{kind.replace('_', ' ').capitalize()} observed {frequency} times, mostly by {person}"
            ))

        kinds = [get_field(p, 'pattern') for p in gesture_patterns]
        distinct = len({str(getattr(kind, 'value', kind)) for kind in kinds})

        observations = [f"{distinct} recurring gesture patterns detected"]
        if engagement >= 0.7:
            observations.append('Both parent and child participate actively')
        if creativity >= 0.75:
            observations.append('Creative ideas come up often')

        return PlayPatternSection(
            dominant_patterns=dominant,
            variability=round(min(1.0, distinct / 5), 2),
            engagement=engagement,
            creativity=creativity,
            observations=observations
        )

    @staticmethod
    def analyze_developmental_indicators(integrated: Any) -> DevelopmentalSection:
        indicators = get_field(integrated, 'developmental_indicators', {}) or {}

        def area(name: str, milestones: List[str]) -> DevelopmentArea:
            indicator = get_field(indicators, name, {}) or {}
            return DevelopmentArea(
                score=int(clamp(round_half_up(_number(get_field(indicator, 'score')) or 0), 0, 100)),
                milestones=milestones,
                recommendations=list(get_field(indicator, 'recommendations', []) or [])
            )

        return DevelopmentalSection(
            language=area('language', [
                'Appropriate amount of speech', 'Clear self-expression', 'Question-answer patterns'
            ]),
            social=area('social', ['Taking turns', 'Cooperative play', 'Sharing emotions']),
            emotional=area('emotional', [
                'Recognizing emotions', 'Expressing emotions', 'Regulating emotions'
            ]),
            cognitive=area('cognitive', ['Problem solving', 'Sustained attention', 'Using memory']),
            motor=DevelopmentArea(
                score=MOTOR_DEFAULT_SCORE,
                milestones=['Fine motor control', 'Gross motor coordination', 'Hand-eye coordination'],
                recommendations=['Add more fine-motor activities', 'Vary physical activities']
            )
        )

    @staticmethod
    def generate_actionable_insights(integrated: Any) -> List[ActionableInsight]:
        insights = []

        indicators = get_field(integrated, 'developmental_indicators', {}) or {}
        language_score = _number(get_field(get_field(indicators, 'language', {}) or {}, 'score'))
        if language_score is not None and language_score < 80:
            insights.append(ActionableInsight(
                category='language',
                priority='high',
                title='Strengthen language development support',
                description="The child's language development needs additional support",
                specific_actions=[
                    'Wait longer for the child to speak',
                    'Use more open-ended questions',
                    "Expand on the child's words when repeating them back",
                ],
                expected_outcome='Improved expressive language and communication',
                timeframe='2-4 weeks'
            ))

        synchronization = get_field(integrated, 'synchronization', None) or Synchronization()
        emotional_synchrony = _fraction(synchronization, 'emotional_synchrony', 0.7)
        if emotional_synchrony < 0.7:
            insights.append(ActionableInsight(
                category='emotional',
                priority='medium',
                title='Strengthen emotional connection',
                description='Parent-child emotional synchrony can be improved',
                specific_actions=[
                    "Acknowledge and reflect the child's feelings first",
                    "Talk at the child's eye level",
                    'Express positive emotions more often',
                ],
                expected_outcome='Closer emotional bond and greater security',
                timeframe='1-3 weeks'
            ))

        return insights

    @staticmethod
    def generate_participant_profiles(integrated: Any) -> ParticipantReports:
        profiles = get_field(integrated, 'participant_profiles', None) or ParticipantProfiles()
        parent = get_field(profiles, 'parent', {}) or {}
        child = get_field(profiles, 'child', {}) or {}

        engagement = _fraction(parent, 'engagement', 0.5)
        responsiveness = _fraction(parent, 'responsiveness', 0.5)
        supportiveness = _fraction(parent, 'supportiveness', 0.75)
        regulation = _fraction(parent, 'emotional_regulation', 0.5)

        parent_strengths = []
        if engagement > 0.8:
            parent_strengths.append('High engagement')
        if responsiveness > 0.8:
            parent_strengths.append('Strong responsiveness')
        if supportiveness > 0.8:
            parent_strengths.append('Ample support')

        parent_growth = []
        if regulation < 0.6:
            parent_growth.append('Emotional regulation skills')
        if responsiveness < 0.6:
            parent_growth.append("Responsiveness to the child's cues")

        parent_needs = []
        if regulation < 0.7:
            parent_needs.append('Guidance on emotional regulation')
        if supportiveness < 0.7:
            parent_needs.append('Effective ways to offer support')

        participation = _fraction(child, 'participation', 0.5)
        expressiveness = _fraction(child, 'expressiveness', 0.68)
        receptiveness = _fraction(child, 'receptiveness', 0.5)
        expression = _fraction(child, 'emotional_expression', 0.6)

        child_strengths = []
        if participation > 0.8:
            child_strengths.append('Active participation')
        if expressiveness > 0.8:
            child_strengths.append('Rich expressiveness')

        child_growth = []
        if expression < 0.6:
            child_growth.append('Emotional expression')
        if receptiveness < 0.6:
            child_growth.append('Receptiveness')

        child_needs = []
        if expression < 0.7:
            child_needs.append('Support for expressing emotions')
        if participation < 0.7:
            child_needs.append('Motivation to participate')

        return ParticipantReports(
            parent=ParticipantReport(
                role='parent',
                strengths=parent_strengths or ['Basic parenting skills'],
                growth_areas=parent_growth,
                behavior_patterns=['Warm parenting', 'Responsive interaction', 'Active participation'],
                communication_style=communication_style(engagement=engagement),
                engagement_level=_pct(engagement),
                support_needs=parent_needs
            ),
            child=ParticipantReport(
                role='child',
                strengths=child_strengths or ['Basic participation'],
                growth_areas=child_growth,
                behavior_patterns=['Curious exploration', 'Positive responses', 'Social interaction'],
                communication_style=communication_style(
                    participation=participation, expressiveness=expressiveness
                ),
                engagement_level=_pct(participation),
                support_needs=child_needs
            )
        )

    @staticmethod
    def generate_recommendations(
        overall_score: int,
        insights: List[ActionableInsight],
        report_type: str
    ) -> RecommendationPlan:
        plan = RecommendationPlan()

        if overall_score >= 80:
            plan.immediate.append(Recommendation(
                title='Keep up positive interaction',
                description='Continue the current strong interaction patterns',
                rationale='A good foundation is already in place',
                implementation=['Keep the current approach', "Keep observing the child's reactions"],
                resources=['Parenting journal'],
                success_indicators=['Sustained participation by the child', 'Positive reactions']
            ))
        else:
            plan.immediate.append(Recommendation(
                title='Make time for focused play',
                description='Set aside regular, distraction-free play time',
                rationale='More shared play gives more chances to connect',
                implementation=['Plan a daily play slot', 'Put phones and screens away'],
                resources=['Play activity ideas'],
                success_indicators=['Longer play sessions', 'More shared attention']
            ))

        categories = {insight.category for insight in insights}
        if 'language' in categories or not insights:
            plan.short_term.append(Recommendation(
                title='More language-building activities',
                description='Try a variety of language-rich activities',
                rationale='Language development benefits from extra support',
                implementation=['Read books together more often', 'Talk more during daily routines'],
                resources=['Age-appropriate book list', 'Language development guide'],
                success_indicators=['More speech', 'Greater vocabulary variety']
            ))
        if 'emotional' in categories:
            plan.short_term.append(Recommendation(
                title='Emotion coaching during play',
                description="Name and reflect the child's feelings as they come up",
                rationale='Emotional synchrony can be improved',
                implementation=['Label feelings out loud', 'Mirror positive emotions'],
                resources=['Emotion coaching guide'],
                success_indicators=['Child names own feelings', 'Fewer escalations']
            ))

        plan.long_term.append(Recommendation(
            title='Consider professional advice',
            description='Consult a child development specialist if needed',
            rationale='For continuing developmental support',
            implementation=['Contact a specialist service', 'Schedule regular assessments'],
            resources=['Development center information', 'Specialist contacts'],
            success_indicators=['Professional guidance in place']
        ))
        if report_type in ('professional', 'detailed'):
            plan.long_term.append(Recommendation(
                title='Track progress across sessions',
                description='Record and analyze a play session every few weeks',
                rationale='Trends over time are more reliable than a single session',
                implementation=['Record under similar conditions', 'Compare section scores between reports'],
                resources=['Previous session reports'],
                success_indicators=['Stable or rising section scores']
            ))

        return plan

    @staticmethod
    def generate_resources(insights: List[ActionableInsight], report_type: str) -> List[Resource]:
        resources = [
            Resource('article', 'Parent-child play interaction guide',
                     'Expert advice on effective play interaction', 'high'),
            Resource('activity', 'Language development play activities',
                     'Easy language-building games to play at home', 'high'),
            Resource('professional', 'Pediatric development consultation',
                     'Professional developmental assessment and counseling', 'medium'),
        ]
        if any(insight.category == 'emotional' for insight in insights):
            resources.append(Resource('book', 'Emotion coaching for parents',
                                      "Helping children understand and express feelings", 'medium'))
        return resources

    @staticmethod
    def _data_quality(metadata: Any) -> Dict[str, float]:
        quality = get_field(metadata, 'data_quality', {}) or {}
        return {
            key: _number(get_field(quality, key)) or 0
            for key in ('video', 'audio', 'overall')
        }


def communication_style(
    engagement: float = None,
    participation: float = None,
    expressiveness: float = None
) -> str:
    """First matching trait wins: engagement, participation, expressiveness."""
    if engagement is not None and engagement > 0.8:
        return 'proactive'
    if participation is not None and participation > 0.8:
        return 'lively'
    if expressiveness is not None and expressiveness > 0.7:
        return 'expressive'
    return 'gentle'


def save_report_json(report: ComprehensiveReport, output_path) -> Path:
    """Write the report's JSON form (camelCase keys)."""
    return save_json(report, output_path)

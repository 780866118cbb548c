"""
Integrated analysis: fusion of video-derived and speech-derived signals.

Inputs are the outputs of the gesture detector, the detailed play
analyzer and the language interaction analyzer. Each signal is derived
from whichever modality carries it; when that modality is missing the
signal keeps a neutral default (None for evaluation signals, a fixed
prior for profile / synchrony components).

Overall score:
    overall = mean(parent, child, synchrony, interaction composites) * 100
    interaction = mean(movement sync, conversation balance, emotional mirroring) * 100

When neither video nor speech carries usable data the result is flagged
insufficient_data with overall_score 0.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from gesture_analysis.data_models import BasicGestureAnalysis
from gesture_analysis.enums import InteractionType
from play_analysis.data_models import DetailedPlayAnalysis, LanguageInteractionAnalysis
from utils.config_loader import get_section
from utils.geometry import clamp, round_half_up, safe_mean
from .data_models import (
    AnalysisMetadata,
    ChildProfile,
    DataQuality,
    DevelopmentalIndicator,
    DevelopmentalIndicators,
    EmotionalInteractionSignals,
    EmotionalPatterns,
    IntegratedAnalysis,
    InteractionPatterns,
    LanguageInteractionSignals,
    ParentProfile,
    ParticipantProfiles,
    PhysicalInteractionSignals,
    PhysicalPatterns,
    PlayPatternSignals,
    ProximityPattern,
    RiskFactor,
    Strength,
    Synchronization,
    VerbalPatterns,
)

logger = logging.getLogger(__name__)

ANALYSIS_VERSION = '2.0.0'
PROXIMITY_WINDOW_SECONDS = 30
EXPLICIT_LIKELY = ('LIKELY', 'VERY_LIKELY')


def _blend(values: List[Optional[float]], default: float) -> float:
    """Mean of the available values clamped to [0, 1], or default when none are available."""
    available = [v for v in values if v is not None]
    if not available:
        return default
    return clamp(safe_mean(available))


class IntegratedAnalysisEngine:
    """
    Fuses per-modality analyses into one IntegratedAnalysis.

    Usage:
        engine = IntegratedAnalysisEngine(config)
        integrated = engine.analyze(detailed, gestures, language, session_id)
    """

    def __init__(self, config: Dict = None):
        self.config = config if config is not None else {}
        self.attention_gap = get_section(self.config, 'fusion').get('attention_gap', 3.0)
        self.proximity_threshold = get_section(self.config, 'play_analysis').get('proximity_threshold', 0.3)

    def analyze(
        self,
        detailed: Optional[DetailedPlayAnalysis],
        gestures: Optional[BasicGestureAnalysis],
        language: Optional[LanguageInteractionAnalysis],
        session_id: str,
        explicit_content: Optional[List] = None
    ) -> IntegratedAnalysis:
        """
        Build the integrated analysis for one session.

        Args:
            detailed: Detailed play analysis (None if unavailable)
            gestures: Gesture analysis (None if unavailable)
            language: Language interaction analysis (None if unavailable)
            session_id: Session identifier
            explicit_content: ExplicitContentFrame list for the safety signal

        Returns:
            IntegratedAnalysis
        """
        logger.info(f"Starting integrated analysis for session {session_id}")

        has_video = detailed is not None and detailed.has_sufficient_data
        has_speech = language is not None and language.has_speech
        has_gestures = gestures is not None and bool(gestures.detected_gestures)

        detailed = detailed if has_video else None
        language = language if has_speech else None
        gestures = gestures if gestures is not None else BasicGestureAnalysis()

        synchronization = self._synchronization(detailed, gestures, language, has_gestures)
        profiles = self._participant_profiles(detailed, gestures, language)
        patterns = self._interaction_patterns(detailed, gestures, language, synchronization, profiles, has_gestures)
        indicators = self._developmental_indicators(detailed, gestures, language)

        insufficient = not has_video and not has_speech
        if insufficient:
            logger.warning(f"Session {session_id}: no usable video or speech data")
            overall, interaction = 0, 0
        else:
            overall, interaction = self._overall_scores(profiles, synchronization, patterns)

        findings, recommendations = self._insights(profiles, synchronization, patterns, insufficient)
        risks, strengths = self._risks_and_strengths(profiles, patterns, indicators)
        quality = self._data_quality(detailed, language, gestures)
        average_span, max_span = self._attention_spans(gestures)

        integrated = IntegratedAnalysis(
            session_id=session_id,
            overall_score=overall,
            interaction_quality=interaction,
            physical_interaction=self._physical_signals(detailed, language, explicit_content),
            emotional_interaction=EmotionalInteractionSignals(
                overall_engagement=(
                    float(detailed.optimal_play_time.overall_engagement_score) if detailed else None
                ),
                emotional_synchrony=synchronization.emotional_synchrony if has_gestures else None,
                positive_interaction_ratio=patterns.emotional.positive_affect_sharing if detailed else None,
                conflict_resolution_score=None
            ),
            language_interaction=self._language_signals(language, patterns),
            play_patterns=self._play_pattern_signals(detailed, gestures, has_gestures),
            average_attention_span=average_span,
            max_attention_span=max_span,
            synchronization=synchronization,
            participant_profiles=profiles,
            interaction_patterns=patterns,
            key_findings=findings,
            recommendations=recommendations,
            risk_factors=risks,
            strengths=strengths,
            developmental_indicators=indicators,
            metadata=AnalysisMetadata(
                analysis_version=ANALYSIS_VERSION,
                confidence_level=round_half_up(quality.overall * 0.9),
                data_quality=quality
            ),
            completed_at=datetime.now(timezone.utc).isoformat(),
            insufficient_data=insufficient
        )

        logger.info(
            f"Integrated analysis complete: overall {overall}, interaction {interaction}, "
            f"video={has_video}, speech={has_speech}, gestures={has_gestures}"
        )

        return integrated

    # Synchrony and profiles

    def _synchronization(self, detailed, gestures, language, has_gestures) -> Synchronization:
        sync = gestures.parent_child_gesture_sync
        mutuality = [i.mutuality for i in gestures.interaction_gestures]

        linguistic = None
        temporal = None
        if language is not None:
            share = language.conversation_patterns.parent_utterance_share
            linguistic = 1 - abs(share - 0.5) * 2
            if language.conversation_patterns.turn_count > 0:
                max_response = get_section(self.config, 'language_analysis').get('max_response_time', 30.0)
                temporal = 1 - language.conversation_patterns.average_response_time / max_response

        return Synchronization(
            emotional_synchrony=_blend([safe_mean(mutuality)] if mutuality else [], 0.7),
            behavioral_synchrony=_blend([sync.sync_score] if has_gestures else [], 0.79),
            linguistic_synchrony=_blend([linguistic], 0.85),
            temporal_synchrony=_blend([temporal], 0.73)
        )

    def _participant_profiles(self, detailed, gestures, language) -> ParticipantProfiles:
        parent = ParentProfile()
        child = ChildProfile()

        if detailed is not None:
            spatial = detailed.spatial_analysis
            emotional = detailed.emotional_analysis
            activity = detailed.activity_analysis
            toys = detailed.interaction_analysis

            if spatial.sample_count > 0:
                parent.engagement = clamp(spatial.proximity_ratio / 100)

            participation = []
            if activity.total_frames > 0:
                participation.append(activity.movement_score / 15)
            if toys.total_play_frames > 0:
                participation.append(toys.toy_interaction_ratio / 100)
            child.participation = _blend([min(1.0, v) for v in participation], child.participation)

            if emotional.total_child_frames > 0:
                smile = min(1.0, emotional.child_smiling_ratio / 50)
                child.expressiveness = smile
                child.emotional_expression = smile

        if gestures.interaction_gestures:
            parent.emotional_regulation = clamp(safe_mean(i.quality for i in gestures.interaction_gestures))

        if language is not None:
            conversation = language.conversation_patterns
            parent_utterances = max(1, round_half_up(conversation.parent_utterance_share * len(language.utterances)))
            types = language.utterance_types

            if conversation.turn_count > 0:
                parent.responsiveness = self._response_appropriateness(conversation.average_response_time)
                child.receptiveness = clamp(conversation.turn_count / max(1, len(language.utterances) - 1))

            parent.supportiveness = clamp((types.praise + types.instructions) / parent_utterances)

            child_share = 1 - conversation.parent_utterance_share
            child.expressiveness = _blend(
                [child.expressiveness if detailed is not None else None, min(1.0, child_share * 2)],
                child.expressiveness
            )

        return ParticipantProfiles(parent=parent, child=child)

    @staticmethod
    def _response_appropriateness(average_response_time: float) -> float:
        """1.0 up to 2 s, falling linearly to 0 at 10 s."""
        return clamp(1 - max(0.0, average_response_time - 2.0) / 8.0)

    # Interaction patterns

    def _proximity_patterns(self, detailed) -> List[ProximityPattern]:
        if detailed is None or not detailed.spatial_analysis.distance_over_time:
            return []

        windows: Dict[int, List[float]] = {}
        for sample in detailed.spatial_analysis.distance_over_time:
            windows.setdefault(int(sample.time_offset // PROXIMITY_WINDOW_SECONDS), []).append(sample.distance)

        patterns = []
        for index in sorted(windows):
            mean_distance = safe_mean(windows[index])
            if mean_distance <= self.proximity_threshold:
                level, appropriateness = 'close', 0.9
            elif mean_distance <= 0.5:
                level, appropriateness = 'moderate', 0.8
            else:
                level, appropriateness = 'distant', 0.5
            start = index * PROXIMITY_WINDOW_SECONDS
            patterns.append(ProximityPattern(
                time_range=f"{start}-{start + PROXIMITY_WINDOW_SECONDS}s",
                level=level,
                appropriateness=appropriateness
            ))
        return patterns

    def _interaction_patterns(self, detailed, gestures, language, synchronization, profiles, has_gestures) -> InteractionPatterns:
        physical = PhysicalPatterns(
            proximity_patterns=self._proximity_patterns(detailed),
            movement_synchronization=synchronization.behavioral_synchrony
        )
        if detailed is not None and detailed.interaction_analysis.total_play_frames > 0:
            physical.shared_activities = clamp(detailed.interaction_analysis.toy_interaction_ratio / 100)

        verbal = VerbalPatterns(
            response_quality=profiles.parent.responsiveness,
            turn_taking_quality=profiles.child.receptiveness
        )
        emotional = EmotionalPatterns()

        if language is not None:
            conversation = language.conversation_patterns
            types = language.utterance_types
            parent_utterances = max(1, round_half_up(conversation.parent_utterance_share * len(language.utterances)))
            verbal.conversation_balance = clamp(1 - conversation.parent_utterance_share)
            verbal.language_development_support = clamp((types.questions + types.instructions) / parent_utterances)
            emotional.emotional_support = clamp(
                (types.praise + types.emotion_expressions) / parent_utterances + 0.5
            )

        sync = gestures.parent_child_gesture_sync
        if has_gestures and sync.synchronized_gestures > 0:
            emotional.emotional_mirroring = clamp(sync.mirrored_gestures / sync.synchronized_gestures)

        if detailed is not None:
            emotional.positive_affect_sharing = 0.87 if detailed.emotional_analysis.smiling_detections > 0 else 0.45

        if gestures.interaction_gestures:
            emotional.co_regulation = profiles.parent.emotional_regulation

        return InteractionPatterns(physical=physical, verbal=verbal, emotional=emotional)

    def _developmental_indicators(self, detailed, gestures, language) -> DevelopmentalIndicators:
        child_tag = get_section(self.config, 'language_analysis').get('child_speaker_tag', 2)
        child_utterances = 0
        if language is not None:
            child_utterances = sum(1 for u in language.utterances if u.speaker_tag == child_tag)

        smiling_frames = detailed.emotional_analysis.child_smiling_frames if detailed is not None else 0
        social = _blend([
            gestures.parent_child_gesture_sync.sync_score if gestures.detected_gestures else None,
            1 - abs(language.conversation_patterns.parent_utterance_share - 0.5) * 2 if language else None,
        ], 0.7)
        cognitive = 75
        if detailed is not None and detailed.interaction_analysis.total_play_frames > 0:
            cognitive = round_half_up(60 + 0.3 * detailed.interaction_analysis.toy_interaction_ratio)

        return DevelopmentalIndicators(
            language=DevelopmentalIndicator(
                score=min(100, child_utterances * 10 + 40),
                areas=['utterance frequency', 'vocabulary diversity', 'sentence structure'],
                recommendations=['Ask more open questions', 'Introduce new words during play']
            ),
            social=DevelopmentalIndicator(
                score=round_half_up(social * 100),
                areas=['turn taking', 'shared attention', 'cooperative play'],
                recommendations=['Practice simple social rules', 'Play more cooperative games']
            ),
            emotional=DevelopmentalIndicator(
                score=min(100, smiling_frames * 15 + 50),
                areas=['emotional expression', 'emotion recognition', 'emotion regulation'],
                recommendations=['Name feelings as they happen', 'Practice calming strategies together']
            ),
            cognitive=DevelopmentalIndicator(
                score=int(clamp(cognitive, 0, 100)),
                areas=['problem solving', 'sustained attention', 'memory'],
                recommendations=['Add problem-solving play', 'Try focused attention activities']
            )
        )

    # Scores and insights

    @staticmethod
    def _overall_scores(profiles, synchronization, patterns):
        p, c = profiles.parent, profiles.child
        parent_score = safe_mean([p.engagement, p.responsiveness, p.supportiveness, p.emotional_regulation])
        child_score = safe_mean([c.participation, c.expressiveness, c.receptiveness, c.emotional_expression])
        sync_score = safe_mean([
            synchronization.emotional_synchrony,
            synchronization.behavioral_synchrony,
            synchronization.linguistic_synchrony,
            synchronization.temporal_synchrony,
        ])
        interaction_score = safe_mean([
            patterns.physical.movement_synchronization,
            patterns.verbal.conversation_balance,
            patterns.emotional.emotional_mirroring,
        ])

        overall = round_half_up((parent_score + child_score + sync_score + interaction_score) / 4 * 100)
        interaction = round_half_up(interaction_score * 100)
        return int(clamp(overall, 0, 100)), int(clamp(interaction, 0, 100))

    @staticmethod
    def _insights(profiles, synchronization, patterns, insufficient):
        findings: List[str] = []
        recommendations: List[str] = []

        if insufficient:
            findings.append('Insufficient data: no person or speech was detected in the recording')
            recommendations.append('Record again with both participants clearly visible and audible')
            return findings, recommendations

        if profiles.parent.engagement > 0.8:
            findings.append('The parent is actively engaged in play')
        elif profiles.parent.engagement < 0.5:
            findings.append('Parent engagement could be increased')
            recommendations.append('Join the play more actively')

        if profiles.child.expressiveness > 0.7:
            findings.append('The child expresses themselves well')
        else:
            findings.append('Encouraging the child to express more would help')
            recommendations.append('Invite the child to talk about what they are doing')

        if synchronization.emotional_synchrony > 0.8:
            findings.append('A strong emotional connection between parent and child is observed')
        elif synchronization.emotional_synchrony < 0.6:
            findings.append('The emotional connection could be strengthened')
            recommendations.append("Respond more sensitively to the child's feelings")

        balance = patterns.verbal.conversation_balance
        if balance < 0.3:
            findings.append('The parent tends to lead the conversation')
            recommendations.append('Give the child more chances to speak')
        elif balance > 0.7:
            findings.append('The child tends to lead the conversation')
            recommendations.append('Offer gentle guidance during play')

        return findings, recommendations

    @staticmethod
    def _risks_and_strengths(profiles, patterns, indicators):
        risks: List[RiskFactor] = []
        strengths: List[Strength] = []

        if profiles.parent.responsiveness < 0.5:
            risks.append(RiskFactor(
                factor='Low parent responsiveness',
                severity='moderate',
                description="Responses to the child's cues are limited"
            ))

        if indicators.language.score < 60:
            risks.append(RiskFactor(
                factor='Language development risk',
                severity='high',
                description='Language development may need additional support'
            ))

        if patterns.emotional.positive_affect_sharing > 0.8:
            strengths.append(Strength(
                area='Positive affect sharing',
                score=round_half_up(patterns.emotional.positive_affect_sharing * 100),
                description='Parent and child share positive emotions often'
            ))

        if profiles.child.participation > 0.7:
            strengths.append(Strength(
                area='High participation',
                score=round_half_up(profiles.child.participation * 100),
                description='The child participates actively in play'
            ))

        return risks, strengths

    # Evaluation signals

    def _physical_signals(self, detailed, language, explicit_content) -> PhysicalInteractionSignals:
        signals = PhysicalInteractionSignals()

        if detailed is not None:
            if detailed.spatial_analysis.sample_count > 0:
                signals.proximity_score = detailed.spatial_analysis.proximity_ratio
            if detailed.activity_analysis.total_frames > 0:
                signals.space_utilization = clamp(50 + detailed.activity_analysis.movement_score * 3, 0, 100)

        if language is not None and language.conversation_patterns.turn_count > 0:
            signals.average_response_time = language.conversation_patterns.average_response_time

        if explicit_content:
            flagged = sum(1 for frame in explicit_content if frame.likelihood in EXPLICIT_LIKELY)
            signals.safety_indicators = clamp(100 - 10 * flagged, 0, 100)

        return signals

    @staticmethod
    def _language_signals(language, patterns) -> LanguageInteractionSignals:
        if language is None:
            return LanguageInteractionSignals()

        stats = language.speaker_stats
        avg_words = safe_mean(s.average_words_per_utterance for s in stats)
        share = language.conversation_patterns.parent_utterance_share

        return LanguageInteractionSignals(
            vocabulary_diversity=clamp(language.vocabulary_diversity * 100, 0, 100),
            scaffolding_level=clamp(patterns.verbal.language_development_support * 100, 0, 100),
            turn_taking_balance=clamp(1 - abs(share - 0.5) * 2),
            response_appropriateness=patterns.verbal.response_quality,
            complexity_score=clamp(avg_words * 10, 0, 100),
            unique_expression_count=language.keywords.unique_words
        )

    @staticmethod
    def _play_pattern_signals(detailed, gestures, has_gestures) -> PlayPatternSignals:
        signals = PlayPatternSignals()

        if has_gestures:
            distinct = len({g.type for g in gestures.detected_gestures})
            signals.diversity_score = clamp(distinct * 15, 0, 100)
            signals.problem_solving_instances = sum(
                1 for i in gestures.interaction_gestures
                if i.type in (InteractionType.COOPERATIVE, InteractionType.GUIDING)
            )

        if detailed is not None and detailed.interaction_analysis.detected_toys:
            distinct_toys = len(set(detailed.interaction_analysis.detected_toys))
            signals.material_variety = clamp(distinct_toys * 25, 0, 100)

        return signals

    def _attention_spans(self, gestures):
        """Spans of continuous gesture activity, merged across gaps up to attention_gap seconds."""
        intervals = sorted((g.start_time, g.end_time) for g in gestures.detected_gestures)
        if not intervals:
            return None, None

        spans = []
        start, end = intervals[0]
        for s, e in intervals[1:]:
            if s - end <= self.attention_gap:
                end = max(end, e)
            else:
                spans.append(end - start)
                start, end = s, e
        spans.append(end - start)

        return safe_mean(spans), float(max(spans))

    @staticmethod
    def _data_quality(detailed, language, gestures) -> DataQuality:
        video = 30
        if detailed is not None:
            video += detailed.emotional_analysis.total_child_frames * 2
            video += detailed.spatial_analysis.sample_count * 2
        video += len(gestures.detected_gestures)

        audio = 40
        if language is not None:
            audio += len(language.speaker_stats) * 20 + len(language.utterances) * 5

        video, audio = min(100, video), min(100, audio)
        return DataQuality(video=video, audio=audio, overall=round_half_up((video + audio) / 2))


def build_integrated_analysis(
    detailed: Optional[DetailedPlayAnalysis],
    gestures: Optional[BasicGestureAnalysis],
    language: Optional[LanguageInteractionAnalysis],
    session_id: str,
    config: Dict = None,
    explicit_content: Optional[List] = None
) -> IntegratedAnalysis:
    """Convenience wrapper around IntegratedAnalysisEngine."""
    return IntegratedAnalysisEngine(config).analyze(detailed, gestures, language, session_id, explicit_content)

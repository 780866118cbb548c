"""
Unit tests for the play evaluation system.

Tests cover:
- Neutral defaults (golden all-defaults session)
- Explicit zero signals
- Insufficient data handling
- Grade table and weighted overall
- Quick evaluation
"""

import sys
from pathlib import Path

import pytest  # pyright: ignore[reportMissingImports]

sys.path.insert(0, str(Path(__file__).parent.parent))

from fusion import build_integrated_analysis
from scoring import EvaluationScores, PlayEvaluationSystem, calculate_grade
from scoring.insight_rules import INSUFFICIENT_DATA_IMPROVEMENT
from scoring.play_evaluation import (
    attention_span_score,
    communication_score,
    interaction_quality_score,
)


class TestNeutralDefaults:
    """A session with no signals scores on neutral defaults."""

    def test_golden_scores(self):
        result = PlayEvaluationSystem().evaluate_play_session({})

        assert result.session_id == 'unknown'
        assert result.scores == EvaluationScores(
            overall=74,
            interaction_quality=74,
            development_support=69,
            play_environment=79,
            communication_score=74,
            emotional_connection=76,
            attention_span=90,
            creativity=45
        )
        assert result.grade == 'C'
        assert result.insufficient_data is False

    def test_golden_insights(self):
        result = PlayEvaluationSystem().evaluate_play_session({})
        assert result.insights.strengths == []
        assert result.insights.improvements == []
        assert len(result.insights.development_goals) == 3
        assert result.insights.recommendations[0] == 'Express positive feedback and encouragement more often'
        assert len(result.insights.recommendations) == 4

    def test_none_input(self):
        result = PlayEvaluationSystem().evaluate_play_session(None)
        assert result.scores.overall == 74

    def test_metadata(self):
        result = PlayEvaluationSystem().evaluate_play_session({'sessionId': 'abc'})
        assert result.session_id == 'abc'
        assert result.metadata.evaluation_version == '2.0.0'
        assert len(result.metadata.criteria) == 6
        assert result.metadata.processing_time >= 0


class TestSignals:
    """Explicit signal values flow through the formulas."""

    def test_zero_is_a_real_value(self):
        assert interaction_quality_score({'proximityScore': 0}, {}) == pytest.approx(46.0)
        result = PlayEvaluationSystem().evaluate_play_session({'physicalInteraction': {'proximityScore': 0}})
        assert result.scores.interaction_quality == 46

    def test_non_numeric_falls_back(self):
        assert interaction_quality_score({'proximityScore': 'high'}, {}) == pytest.approx(74.0)
        assert interaction_quality_score({'proximityScore': float('nan')}, {}) == pytest.approx(74.0)
        assert interaction_quality_score({'proximityScore': True}, {}) == pytest.approx(74.0)

    def test_snake_case_keys(self):
        result = PlayEvaluationSystem().evaluate_play_session({
            'language_interaction': {'turn_taking_balance': 1.0, 'response_appropriateness': 1.0,
                                     'complexity_score': 100},
        })
        assert result.scores.communication_score == 100

    def test_sub_scores_clamped(self):
        assert communication_score({'turnTakingBalance': 2.0}) > 100
        result = PlayEvaluationSystem().evaluate_play_session({
            'languageInteraction': {'turnTakingBalance': 2.0},
        })
        assert result.scores.communication_score == 100

    def test_attention_span(self):
        assert attention_span_score({}) == pytest.approx(90.0)
        assert attention_span_score({'averageAttentionSpan': 10, 'maxAttentionSpan': 60}) == pytest.approx(22.8)

    def test_high_signals_earn_strengths(self):
        result = PlayEvaluationSystem().evaluate_play_session({
            'physicalInteraction': {'proximityScore': 100, 'averageResponseTime': 0},
            'emotionalInteraction': {'overallEngagement': 100},
        })
        assert result.scores.interaction_quality == 100
        assert 'Lively interaction between parent and child is observed' in result.insights.strengths

    def test_integrated_analysis_input(self):
        integrated = build_integrated_analysis(None, None, None, 'session-x')
        integrated.insufficient_data = False
        result = PlayEvaluationSystem().evaluate_play_session(integrated)
        assert result.session_id == 'session-x'
        assert result.scores.overall == 74


class TestInsufficientData:
    """Sessions flagged insufficient get zero scores."""

    def test_zero_scores(self):
        integrated = build_integrated_analysis(None, None, None, 'empty')
        result = PlayEvaluationSystem().evaluate_play_session(integrated)

        assert result.insufficient_data is True
        assert result.scores == EvaluationScores()
        assert result.grade == 'D'
        assert result.insights.improvements == [INSUFFICIENT_DATA_IMPROVEMENT]

    def test_mapping_flag(self):
        result = PlayEvaluationSystem().evaluate_play_session({'insufficientData': True})
        assert result.scores.overall == 0


class TestGrades:
    """Grade table and overall weighting."""

    @pytest.mark.parametrize('score,grade', [
        (100, 'A'), (90, 'A'), (89, 'B'), (80, 'B'), (79, 'C'), (70, 'C'), (69, 'D'), (0, 'D'),
    ])
    def test_grade_boundaries(self, score, grade):
        assert calculate_grade(score) == grade

    def test_grade_monotonic(self):
        order = {'D': 0, 'C': 1, 'B': 2, 'A': 3}
        grades = [order[calculate_grade(s)] for s in range(0, 101)]
        assert grades == sorted(grades)

    def test_custom_weights(self):
        config = {'evaluation': {'overall_weights': {
            'interaction_quality': 1.0,
            'development_support': 0.0,
            'play_environment': 0.0,
            'communication_score': 0.0,
            'emotional_connection': 0.0,
            'attention_span': 0.0,
            'creativity': 0.0,
        }}}
        result = PlayEvaluationSystem(config).evaluate_play_session({})
        assert result.scores.overall == 74


class TestQuickEvaluation:
    """Simplified evaluation from an overall score."""

    def test_default(self):
        assert PlayEvaluationSystem().quick_evaluation({}) == {'score': 75, 'grade': 'C'}

    def test_clamped_low(self):
        assert PlayEvaluationSystem().quick_evaluation({'overallScore': 10}) == {'score': 50, 'grade': 'D'}

    def test_clamped_high(self):
        assert PlayEvaluationSystem().quick_evaluation({'overall_score': 150}) == {'score': 100, 'grade': 'A'}

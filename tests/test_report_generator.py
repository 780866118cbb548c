"""
Unit tests for the comprehensive report generator and temporal analysis.

Tests cover:
- Blended overall score and eight-tier grade
- Report types and recommendations
- Minimal input (defaults fill every section)
- Temporal analysis (derived vs placeholder)
- JSON export and the full in-memory pipeline
"""

import json
import sys
from pathlib import Path

import pytest  # pyright: ignore[reportMissingImports]

sys.path.insert(0, str(Path(__file__).parent.parent))

from main import run_pipeline, write_outputs
from play_analysis import analyze_spatial_proximity
from play_analysis.data_models import DetailedPlayAnalysis, DistanceSample, SpatialAnalysis
from utils.config_loader import load_config
from visualization import (
    ComprehensiveReportGenerator,
    derive_temporal_analysis,
    determine_report_grade,
    save_report_json,
    section_grade,
)
from visualization.temporal_analysis import detect_closeness_peaks, format_timestamp
from video_annotations import VideoIntelligenceResults


MINIMAL_RESULTS = {
    'integrated': {'overallScore': 95},
    'evaluation': {'scores': {'overall': 85}},
}


class TestGrades:
    """Report and section grade tables."""

    @pytest.mark.parametrize('score,grade', [
        (100, 'A+'), (95, 'A+'), (94, 'A'), (90, 'A'), (85, 'B+'), (80, 'B'),
        (75, 'C+'), (70, 'C'), (60, 'D'), (59, 'F'), (0, 'F'),
    ])
    def test_report_grade(self, score, grade):
        assert determine_report_grade(score) == grade

    def test_section_grade(self):
        assert section_grade(90) == 'A'
        assert section_grade(80) == 'B'
        assert section_grade(70) == 'C'
        assert section_grade(69) == 'D'


class TestOverallScore:
    """Blending of integrated and evaluation scores."""

    def test_minimal_input(self):
        report = ComprehensiveReportGenerator().generate_report('s5', MINIMAL_RESULTS)
        assert report.executive_summary.overall_score == 91
        assert report.executive_summary.grade == 'A'

    def test_evaluation_falls_back_to_integrated(self):
        generator = ComprehensiveReportGenerator()
        assert generator.calculate_overall_score({'overallScore': 72}, {}) == 72

    def test_missing_integrated_score_is_zero(self):
        generator = ComprehensiveReportGenerator()
        assert generator.calculate_overall_score({}, {'scores': {'overall': 50}}) == 20

    def test_configured_weights(self):
        generator = ComprehensiveReportGenerator({'report': {'integrated_weight': 0.5, 'evaluation_weight': 0.5}})
        assert generator.calculate_overall_score({'overallScore': 90}, {'scores': {'overall': 70}}) == 80


class TestScoreBounds:
    """Out-of-range upstream values never push report scores outside [0, 100]."""

    def test_overall_capped_high(self):
        report = ComprehensiveReportGenerator().generate_report('s', {
            'integrated': {'overallScore': 150},
            'evaluation': {'scores': {'overall': 120}},
        })
        assert report.executive_summary.overall_score == 100
        assert report.executive_summary.grade == 'A+'

    def test_overall_floored_low(self):
        generator = ComprehensiveReportGenerator()
        assert generator.calculate_overall_score({'overallScore': -50}, {'scores': {'overall': -10}}) == 0

    def test_verbal_fraction_above_one(self):
        section = ComprehensiveReportGenerator.analyze_verbal_interaction({'conversationBalance': 4.0})
        assert section.metrics['balance'] == 100
        assert section.score == 69

    def test_physical_fractions_out_of_range(self):
        section = ComprehensiveReportGenerator.analyze_physical_interaction({
            'movementSynchronization': 5.0,
            'sharedActivities': -3.0,
        })
        assert section.metrics['synchronization'] == 100
        assert section.metrics['sharedActivities'] == 0
        assert section.score == 33

    def test_developmental_and_play_pattern_values(self):
        integrated = {
            'overallScore': 250,
            'developmentalIndicators': {'language': {'score': 180}, 'social': {'score': -20}},
            'emotionalInteraction': {'overallEngagement': 400},
        }
        report = ComprehensiveReportGenerator().generate_report('s', {
            'integrated': integrated,
            'evaluation': {'scores': {'overall': 90, 'creativity': -30}},
        })
        indicators = report.detailed_analysis.developmental_indicators
        assert indicators.language.score == 100
        assert indicators.social.score == 0
        assert report.detailed_analysis.play_patterns.engagement == 1.0
        assert report.detailed_analysis.play_patterns.creativity == 0.0
        assert 0 <= report.executive_summary.overall_score <= 100


class TestMinimalReport:
    """A bare integrated score still yields every section."""

    def test_sections_present(self):
        report = ComprehensiveReportGenerator().generate_report('s5', MINIMAL_RESULTS)

        assert report.session_id == 's5'
        assert report.report_type == 'parent'
        assert report.executive_summary.risk_level == 'low'
        assert report.executive_summary.key_strengths == []
        assert report.detailed_analysis.physical_interaction.metrics['synchronization'] == 79
        assert len(report.detailed_analysis.play_patterns.dominant_patterns) == 3
        assert report.detailed_analysis.developmental_indicators.motor.score == 78
        assert report.detailed_analysis.developmental_indicators.language.score == 0
        assert report.metadata.analysis_version == '2.0.0'

    def test_no_insights_by_default(self):
        report = ComprehensiveReportGenerator().generate_report('s5', MINIMAL_RESULTS)
        assert report.actionable_insights == []
        assert len(report.resources) == 3

    def test_recommendations_for_high_score(self):
        report = ComprehensiveReportGenerator().generate_report('s5', MINIMAL_RESULTS)
        plan = report.recommendations
        assert plan.immediate[0].title == 'Keep up positive interaction'
        assert plan.short_term[0].title == 'More language-building activities'
        assert [r.title for r in plan.long_term] == ['Consider professional advice']

    def test_profiles_from_defaults(self):
        report = ComprehensiveReportGenerator().generate_report('s5', MINIMAL_RESULTS)
        assert report.participant_profiles.parent.role == 'parent'
        assert report.participant_profiles.parent.communication_style == 'gentle'
        assert report.participant_profiles.child.engagement_level == 50


class TestInsights:
    """Threshold-triggered insights."""

    def test_language_and_emotional_insights(self):
        integrated = {
            'overallScore': 60,
            'developmentalIndicators': {'language': {'score': 50}},
            'synchronization': {'emotionalSynchrony': 0.5},
            'riskFactors': [{'factor': 'x', 'severity': 'high', 'description': 'Needs support'}],
        }
        report = ComprehensiveReportGenerator().generate_report('s', {'integrated': integrated})

        assert [i.category for i in report.actionable_insights] == ['language', 'emotional']
        assert report.executive_summary.risk_level == 'high'
        assert report.executive_summary.priority_areas == ['Needs support']
        assert report.recommendations.immediate[0].title == 'Make time for focused play'
        assert len(report.recommendations.short_term) == 2
        assert len(report.resources) == 4

    def test_strengths_sorted_by_score(self):
        integrated = {'overallScore': 80, 'strengths': [
            {'area': 'a', 'score': 60, 'description': 'low'},
            {'area': 'b', 'score': 90, 'description': 'high'},
            {'area': 'c', 'score': 75, 'description': 'mid'},
            {'area': 'd', 'score': 70, 'description': 'other'},
        ]}
        report = ComprehensiveReportGenerator().generate_report('s', {'integrated': integrated})
        assert report.executive_summary.key_strengths == ['high', 'mid', 'other']


class TestReportTypes:
    """Report audience options."""

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError):
            ComprehensiveReportGenerator().generate_report('s', MINIMAL_RESULTS, {'report_type': 'summary'})

    def test_professional_adds_tracking(self):
        report = ComprehensiveReportGenerator().generate_report(
            's', MINIMAL_RESULTS, {'reportType': 'professional'}
        )
        assert report.report_type == 'professional'
        assert len(report.recommendations.long_term) == 2


class TestTemporalAnalysis:
    """Timeline and peak moments."""

    def test_format_timestamp(self):
        assert format_timestamp(0) == '0:00'
        assert format_timestamp(135.7) == '2:15'

    def test_placeholder_when_no_data(self):
        temporal = derive_temporal_analysis({})
        assert temporal.source == 'placeholder'
        assert len(temporal.timeline) == 3
        assert temporal.peak_moments[0].impact == 'positive'

    def test_closeness_peaks(self):
        distances = [0.6, 0.2, 0.6, 0.6, 0.1, 0.6]
        detailed = DetailedPlayAnalysis(spatial_analysis=SpatialAnalysis(
            distance_over_time=[DistanceSample(i * 5.0, d) for i, d in enumerate(distances)],
            sample_count=len(distances)
        ))
        peaks = detect_closeness_peaks(detailed)

        assert len(peaks) == 2
        assert [p.start_time for p in peaks] == ['0:02', '0:17']
        assert [p.end_time for p in peaks] == ['0:07', '0:22']
        assert all(p.impact == 'positive' for p in peaks)

    def test_too_few_samples(self):
        detailed = DetailedPlayAnalysis(spatial_analysis=SpatialAnalysis(
            distance_over_time=[DistanceSample(0.0, 0.1), DistanceSample(1.0, 0.5)]
        ))
        assert detect_closeness_peaks(detailed) == []

    def test_derived_from_bundle(self):
        distances = [0.6, 0.2, 0.6, 0.6, 0.1, 0.6]
        detailed = DetailedPlayAnalysis(spatial_analysis=SpatialAnalysis(
            distance_over_time=[DistanceSample(i * 5.0, d) for i, d in enumerate(distances)]
        ))
        temporal = derive_temporal_analysis({'detailed_analysis': detailed}, {'report': {'max_peak_moments': 1}})
        assert temporal.source == 'derived'
        assert len(temporal.peak_moments) == 1
        assert temporal.peak_moments[0].start_time == '0:17'

    def test_peak_late_in_long_session(self):
        far = {'left': 0.5, 'top': 0.5, 'right': 0.7, 'bottom': 0.7}
        near = {'left': 0.15, 'top': 0.1, 'right': 0.35, 'bottom': 0.3}
        parent = {'left': 0.1, 'top': 0.1, 'right': 0.3, 'bottom': 0.3}
        child = [near if 130 <= t < 140 else far for t in range(150)]
        results = VideoIntelligenceResults.from_dict({'objectTracking': [
            {'entity': {'description': 'person'}, 'frames': [
                {'normalizedBoundingBox': parent, 'timeOffset': f"{t}s"} for t in range(150)
            ]},
            {'entity': {'description': 'person'}, 'frames': [
                {'normalizedBoundingBox': box, 'timeOffset': f"{t}s"} for t, box in enumerate(child)
            ]},
        ]})
        detailed = DetailedPlayAnalysis(spatial_analysis=analyze_spatial_proximity(results))
        peaks = detect_closeness_peaks(detailed)

        assert len(peaks) == 1
        assert peaks[0].start_time.startswith('2:')
        assert peaks[0].impact == 'positive'


PARENT_BOX = {'left': 0.3, 'top': 0.1, 'right': 0.5, 'bottom': 0.5}
CHILD_BOX = {'left': 0.35, 'top': 0.33, 'right': 0.45, 'bottom': 0.43}

SESSION = {
    'personDetection': [{'tracks': [
        {'timestampedObjects': [{'normalizedBoundingBox': PARENT_BOX, 'timeOffset': '0s'}]},
        {'timestampedObjects': [{
            'normalizedBoundingBox': CHILD_BOX,
            'timeOffset': '0s',
            'attributes': [{'name': 'smiling', 'value': 'true'}],
        }]},
    ]}],
    'speechTranscription': [{'alternatives': [{'transcript': '', 'words': [
        {'word': 'what', 'startTime': '0s', 'endTime': '0.4s', 'speakerTag': 1},
        {'word': 'is', 'startTime': '0.4s', 'endTime': '0.8s', 'speakerTag': 1},
        {'word': 'this', 'startTime': '0.8s', 'endTime': '1.2s', 'speakerTag': 1},
        {'word': 'ball', 'startTime': '2s', 'endTime': '2.4s', 'speakerTag': 2},
    ]}]}],
}


class TestPipeline:
    """End-to-end run through main.run_pipeline."""

    def test_run_pipeline(self):
        outputs = run_pipeline(SESSION, load_config(), session_id='pipeline-test')

        assert outputs['integrated_analysis'].insufficient_data is False
        assert outputs['evaluation'].grade in ('A', 'B', 'C', 'D')
        report = outputs['report']
        assert report.session_id == 'pipeline-test'
        assert 0 <= report.executive_summary.overall_score <= 100
        assert report.temporal_analysis.source == 'derived'

    def test_empty_annotations(self):
        outputs = run_pipeline({}, {}, session_id='empty')
        assert outputs['integrated_analysis'].insufficient_data is True
        assert outputs['evaluation'].scores.overall == 0
        assert outputs['report'].executive_summary.overall_score == 0
        assert outputs['report'].executive_summary.grade == 'F'

    def test_write_outputs(self, tmp_path):
        outputs = run_pipeline(SESSION, {}, session_id='written')
        paths = write_outputs(outputs, tmp_path)

        assert paths['report'].exists()
        data = json.loads(paths['report'].read_text(encoding='utf-8'))
        assert data['sessionId'] == 'written'
        assert 'reportId' in data
        assert 'executiveSummary' in data
        assert (tmp_path / 'play_evaluation.json').exists()

    def test_save_report_json(self, tmp_path):
        report = ComprehensiveReportGenerator().generate_report('s5', MINIMAL_RESULTS)
        path = save_report_json(report, tmp_path / 'nested' / 'report.json')
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data['executiveSummary']['overallScore'] == 91
        assert data['temporalAnalysis']['source'] == 'placeholder'

"""
Unit tests for the detailed play analysis module.

Tests cover:
- Spatial proximity between the two person tracks
- Child activity level
- Emotional attributes
- Toy interaction and peaks
- Optimal play windows and engagement
- Empty / degenerate input (no division by zero)
"""

import json
import math
import sys
from pathlib import Path

import pytest  # pyright: ignore[reportMissingImports]

sys.path.insert(0, str(Path(__file__).parent.parent))

from play_analysis import (
    analyze_child_activity,
    analyze_emotional_attributes,
    analyze_optimal_play_time,
    analyze_spatial_proximity,
    analyze_toy_interaction,
    perform_detailed_play_analysis,
)
from play_analysis.activity import classify_activity_level
from play_analysis.data_models import ActivityAnalysis, EmotionalAnalysis, SpatialAnalysis
from play_analysis.optimal_window import BASELINE_REASON, overall_engagement_score, score_window
from utils.serialization import to_serializable
from video_annotations import VideoIntelligenceResults


def track(description, boxes, times=None):
    frames = []
    for i, box in enumerate(boxes):
        frame = {'normalizedBoundingBox': box}
        if times is not None:
            frame['timeOffset'] = f"{times[i]}s"
        frames.append(frame)
    return {'entity': {'description': description}, 'frames': frames}


def results_of(*tracks, **extra):
    data = {'objectTracking': list(tracks)}
    data.update(extra)
    return VideoIntelligenceResults.from_dict(data)


BOX_A = {'left': 0.1, 'top': 0.1, 'right': 0.3, 'bottom': 0.3}
BOX_B = {'left': 0.5, 'top': 0.5, 'right': 0.7, 'bottom': 0.7}


class TestSpatialProximity:
    """Test parent-child distance statistics."""

    def test_single_frame_distance(self):
        results = results_of(track('person', [BOX_A]), track('person', [BOX_B]))
        spatial = analyze_spatial_proximity(results)

        assert spatial.sample_count == 1
        assert spatial.average_distance == pytest.approx(math.hypot(0.4, 0.4), abs=1e-6)
        assert spatial.average_distance == pytest.approx(0.566, abs=1e-3)
        assert spatial.proximity_ratio == 0.0
        assert len(spatial.distance_over_time) == 1

    def test_close_frames_count_toward_ratio(self):
        near = {'left': 0.15, 'top': 0.1, 'right': 0.35, 'bottom': 0.3}
        results = results_of(track('person', [BOX_A, BOX_A]), track('person', [near, BOX_B]))
        spatial = analyze_spatial_proximity(results)
        assert spatial.proximity_ratio == pytest.approx(50.0)
        assert spatial.min_distance == pytest.approx(0.05)

    def test_one_person_gives_zeros(self):
        spatial = analyze_spatial_proximity(results_of(track('person', [BOX_A])))
        assert spatial.sample_count == 0
        assert spatial.average_distance == 0.0
        assert spatial.proximity_ratio == 0.0

    def test_samples_capped(self):
        boxes = [BOX_A] * 5
        times = [0, 1, 2, 3, 4]
        results = results_of(track('person', boxes, times), track('person', boxes, times))
        spatial = analyze_spatial_proximity(results, {'play_analysis': {'max_distance_samples': 3}})
        assert spatial.sample_count == 5
        assert [s.time_offset for s in spatial.distance_over_time] == [0.0, 2.0, 4.0]

    def test_long_session_samples_span_whole_session(self):
        times = list(range(150))
        near = {'left': 0.15, 'top': 0.1, 'right': 0.35, 'bottom': 0.3}
        child = [near if 130 <= t < 140 else BOX_B for t in times]
        spatial = analyze_spatial_proximity(
            results_of(track('person', [BOX_A] * 150, times), track('person', child, times))
        )

        assert spatial.sample_count == 150
        assert len(spatial.distance_over_time) == 100
        assert spatial.distance_over_time[0].time_offset == 0.0
        assert spatial.distance_over_time[-1].time_offset == 149.0
        offsets = [s.time_offset for s in spatial.distance_over_time]
        assert offsets == sorted(offsets)
        assert any(130 <= s.time_offset < 140 for s in spatial.distance_over_time)
        assert spatial.min_distance == pytest.approx(0.05)


class TestChildActivity:
    """Test movement score and activity level."""

    def test_identical_frames_are_static(self):
        activity = analyze_child_activity(results_of(track('person', [BOX_A, BOX_A])))
        assert activity.child_activity_level == 'static'
        assert activity.movement_score == 0
        assert activity.total_frames == 2

    def test_large_movement_is_dynamic(self):
        activity = analyze_child_activity(results_of(track('person', [BOX_A, BOX_B])))
        assert activity.movement_score == pytest.approx(math.hypot(0.4, 0.4) * 100)
        assert activity.child_activity_level == 'dynamic'
        assert activity.movement_frames == 1

    def test_single_frame_is_static(self):
        activity = analyze_child_activity(results_of(track('person', [BOX_A])))
        assert activity == ActivityAnalysis()

    def test_level_thresholds(self):
        assert classify_activity_level(16) == 'dynamic'
        assert classify_activity_level(10) == 'moderate'
        assert classify_activity_level(5) == 'static'


class TestEmotionalAttributes:
    """Test smiling and gaze counts."""

    def test_smiling_ratio(self):
        detection = {'tracks': [{'timestampedObjects': [
            {'timeOffset': '0s', 'attributes': [{'name': 'smiling', 'value': 'true'}]},
            {'timeOffset': '1s', 'attributes': [{'name': 'looking_at_camera', 'value': 'true'}]},
        ]}]}
        face = {'tracks': [{'timestampedObjects': [
            {'timeOffset': '0s', 'attributes': [{'name': 'smiling', 'value': 'true'}]},
        ]}]}
        results = results_of(personDetection=[detection], faceDetection=[face])
        emotional = analyze_emotional_attributes(results)

        assert emotional.total_child_frames == 2
        assert emotional.child_smiling_frames == 1
        assert emotional.child_smiling_ratio == pytest.approx(50.0)
        assert emotional.smiling_detections == 2
        assert emotional.looking_at_camera_detections == 1

    def test_time_range_is_half_open(self):
        detection = {'tracks': [{'timestampedObjects': [
            {'timeOffset': '0s', 'attributes': [{'name': 'smiling', 'value': 'true'}]},
            {'timeOffset': '30s', 'attributes': [{'name': 'smiling', 'value': 'true'}]},
        ]}]}
        results = results_of(personDetection=[detection])
        emotional = analyze_emotional_attributes(results, time_range=(0, 30))
        assert emotional.total_child_frames == 1

    def test_no_detections(self):
        emotional = analyze_emotional_attributes(results_of())
        assert emotional.child_smiling_ratio == 0.0


class TestToyInteraction:
    """Test child-toy proximity."""

    def test_toy_near_child(self):
        ball = {'left': 0.12, 'top': 0.12, 'right': 0.32, 'bottom': 0.32}
        results = results_of(
            track('person', [BOX_A, BOX_A], [0, 1]),
            track('Ball', [ball, BOX_B], [0, 1])
        )
        toy = analyze_toy_interaction(results)

        assert toy.total_play_frames == 2
        assert toy.toy_interaction_frames == 1
        assert toy.toy_interaction_ratio == pytest.approx(50.0)
        assert toy.detected_toys == ['Ball']
        assert len(toy.interaction_peaks) == 1
        assert toy.interaction_peaks[0].time_offset == 0.0

    def test_no_toys(self):
        toy = analyze_toy_interaction(results_of(track('person', [BOX_A])))
        assert toy.toy_interaction_ratio == 0.0
        assert toy.detected_toys == []


class TestOptimalPlayTime:
    """Test window scoring and engagement."""

    def test_baseline_window(self):
        score, reason = score_window(EmotionalAnalysis(), SpatialAnalysis(), ActivityAnalysis())
        assert score == 50
        assert reason == BASELINE_REASON

    def test_all_rules_fire(self):
        score, reason = score_window(
            EmotionalAnalysis(child_smiling_ratio=40),
            SpatialAnalysis(proximity_ratio=50),
            ActivityAnalysis(child_activity_level='dynamic')
        )
        assert score == 100
        assert reason == 'high smiling ratio, comfortable distance maintained, active play'

    def test_engagement_score(self):
        assert overall_engagement_score(
            EmotionalAnalysis(child_smiling_ratio=50),
            SpatialAnalysis(proximity_ratio=50),
            ActivityAnalysis(movement_score=50)
        ) == 50

    def test_top_windows_sorted(self):
        boxes = [BOX_A, BOX_B, BOX_A, BOX_A]
        results = results_of(track('person', boxes, [0, 10, 40, 50]))
        optimal = analyze_optimal_play_time(
            results, EmotionalAnalysis(), SpatialAnalysis(), ActivityAnalysis()
        )
        assert len(optimal.best_periods) == 2
        assert optimal.best_periods[0].start_time == 0.0
        assert optimal.best_periods[0].score == 65
        assert optimal.best_periods[1].score == 50
        assert optimal.best_periods[0].score >= optimal.best_periods[1].score


class TestDetailedPlayAnalysis:
    """Test the combined analyzer."""

    def test_no_person_data(self):
        detailed = perform_detailed_play_analysis({})
        assert detailed.has_sufficient_data is False
        assert detailed.spatial_analysis.proximity_ratio == 0.0
        assert detailed.optimal_play_time.best_periods == []

    def test_full_bundle(self):
        detailed = perform_detailed_play_analysis({'objectTracking': [
            track('person', [BOX_A, BOX_A]),
            track('person', [BOX_B, BOX_B]),
        ]})
        assert detailed.has_sufficient_data is True
        assert detailed.spatial_analysis.sample_count == 2
        assert detailed.activity_analysis.child_activity_level == 'static'
        assert len(detailed.optimal_play_time.best_periods) == 2
        for value in (
            detailed.spatial_analysis.average_distance,
            detailed.activity_analysis.movement_score,
            detailed.emotional_analysis.child_smiling_ratio,
        ):
            assert math.isfinite(value)

    def test_repeat_runs_identical(self):
        near = {'left': 0.15, 'top': 0.1, 'right': 0.35, 'bottom': 0.3}
        times = [0, 10, 20, 30, 40, 50]
        data = {'objectTracking': [
            track('person', [BOX_A] * 6, times),
            track('person', [near, BOX_B, near, BOX_B, near, BOX_B], times),
            track('toy', [near, near], [10, 40]),
        ]}

        first = json.dumps(to_serializable(perform_detailed_play_analysis(data)), sort_keys=True)
        second = json.dumps(to_serializable(perform_detailed_play_analysis(data)), sort_keys=True)
        assert first == second
        assert json.loads(first)['hasSufficientData'] is True

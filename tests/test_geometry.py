"""
Unit tests for bounding-box geometry utilities.

Tests cover:
- Centers and distances
- Movement vectors and direction octants
- Half-up rounding and clamping
- Malformed input (missing boxes, NaN)
"""

import math
import sys
from pathlib import Path

import pytest  # pyright: ignore[reportMissingImports]

sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.geometry import (
    STATIONARY,
    Point2D,
    box_distance,
    center,
    clamp,
    direction_of,
    distance,
    movement,
    round_half_up,
    safe_mean,
    union_box,
)
from video_annotations.models import NormalizedBoundingBox


class TestCenterAndDistance:
    """Test center and distance computation."""

    def test_center_of_box(self):
        c = center({'left': 0.2, 'top': 0.4, 'right': 0.6, 'bottom': 0.8})
        assert c.x == pytest.approx(0.4)
        assert c.y == pytest.approx(0.6)

    def test_center_of_missing_box_is_origin(self):
        assert center(None) == Point2D(0.0, 0.0)

    def test_distance_is_euclidean(self):
        assert distance(Point2D(0, 0), Point2D(0.3, 0.4)) == pytest.approx(0.5)

    def test_box_distance_symmetric(self):
        a = {'left': 0.1, 'top': 0.1, 'right': 0.2, 'bottom': 0.2}
        b = {'left': 0.5, 'top': 0.5, 'right': 0.7, 'bottom': 0.7}
        assert box_distance(a, b) == pytest.approx(box_distance(b, a))
        assert box_distance(a, a) == 0.0

    def test_vertices_form_accepted(self):
        box = NormalizedBoundingBox.from_dict({'vertices': [
            {'x': 0.1, 'y': 0.2}, {'x': 0.3, 'y': 0.2},
            {'x': 0.3, 'y': 0.6}, {'x': 0.1, 'y': 0.6},
        ]})
        assert box.left == pytest.approx(0.1)
        assert box.bottom == pytest.approx(0.6)


class TestMovement:
    """Test frame-to-frame movement vectors."""

    def test_rightward_movement(self):
        a = {'left': 0.1, 'top': 0.1, 'right': 0.2, 'bottom': 0.2}
        b = {'left': 0.2, 'top': 0.1, 'right': 0.3, 'bottom': 0.2}
        m = movement(a, b)
        assert m.dx == pytest.approx(0.1)
        assert m.dy == pytest.approx(0.0)
        assert m.speed == pytest.approx(0.1)
        assert m.direction == 'right'
        assert m.d_size == pytest.approx(0.0)

    def test_downward_is_positive_y(self):
        assert direction_of(0.0, 0.1) == 'down'
        assert direction_of(0.0, -0.1) == 'up'
        assert direction_of(-0.1, 0.0) == 'left'
        assert direction_of(0.1, 0.1) == 'down-right'

    def test_tiny_movement_is_stationary(self):
        assert direction_of(0.0001, 0.0) == STATIONARY

    def test_size_change_is_area_delta(self):
        a = {'left': 0.0, 'top': 0.0, 'right': 0.1, 'bottom': 0.1}
        b = {'left': 0.0, 'top': 0.0, 'right': 0.2, 'bottom': 0.2}
        assert movement(a, b).d_size == pytest.approx(0.03)

    def test_malformed_boxes_give_zero_movement(self):
        m = movement(None, 'garbage')
        assert m.speed == 0.0
        assert m.direction == STATIONARY


class TestNumericHelpers:
    """Test rounding, clamping and means."""

    def test_round_half_up(self):
        assert round_half_up(73.5) == 74
        assert round_half_up(68.75) == 69
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(73.7625) == 74

    def test_round_half_up_non_finite(self):
        assert round_half_up(float('nan')) == 0
        assert round_half_up(None) == 0

    def test_clamp(self):
        assert clamp(1.5) == 1.0
        assert clamp(-0.2) == 0.0
        assert clamp(float('nan')) == 0.0
        assert clamp(None, 10, 20) == 10
        assert clamp(150, 0, 100) == 100

    def test_safe_mean_empty(self):
        assert safe_mean([]) == 0.0
        assert safe_mean([1.0, None, float('nan'), 3.0]) == pytest.approx(2.0)

    def test_union_box(self):
        box = union_box([
            {'left': 0.1, 'top': 0.2, 'right': 0.3, 'bottom': 0.4},
            {'left': 0.2, 'top': 0.1, 'right': 0.5, 'bottom': 0.3},
        ])
        assert (box.left, box.top, box.right, box.bottom) == pytest.approx((0.1, 0.1, 0.5, 0.4))
        assert union_box([]).is_empty

    def test_results_always_finite(self):
        m = movement({'left': float('nan')}, {'right': 2.0})
        assert math.isfinite(m.speed)

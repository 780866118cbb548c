"""
Bounding-box geometry primitives.

All coordinates are normalized to [0, 1] frame space. Functions are
total: malformed boxes are coerced to the zero box, so results are
always finite and distances/speeds are non-negative.
"""

import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

import numpy as np

from video_annotations.models import NormalizedBoundingBox

# Octants clockwise from +x. Image y grows downward, so +90 degrees is 'down'.
DIRECTIONS = [
    'right', 'down-right', 'down', 'down-left',
    'left', 'up-left', 'up', 'up-right',
]
STATIONARY = 'stationary'
SPEED_FLOOR = 1e-3


@dataclass(frozen=True)
class Point2D:
    """Point in normalized frame coordinates."""
    x: float
    y: float


@dataclass(frozen=True)
class Movement:
    """
    Frame-to-frame displacement of a bounding box.

    Attributes:
        dx: Horizontal shift of the left edge
        dy: Vertical shift of the top edge (positive = down)
        d_size: Change in box area
        speed: Euclidean length of (dx, dy)
        direction: Compass octant or 'stationary'
    """
    dx: float
    dy: float
    d_size: float
    speed: float
    direction: str


def round_half_up(value: float) -> int:
    """
    Round .5 upward (toward +inf), as dashboards expect.

    The value is first rounded to 9 decimals so representation error
    (73.49999999999999 for 73.5) does not flip the result.
    """
    if value is None or not math.isfinite(value):
        return 0
    return int(math.floor(round(value, 9) + 0.5))


def clamp(value: Optional[float], low: float = 0.0, high: float = 1.0) -> float:
    """Clamp to [low, high]; None, NaN and inf collapse to low."""
    if value is None:
        return low
    value = float(value)
    if not math.isfinite(value):
        return low
    return float(np.clip(value, low, high))


def safe_mean(values: Iterable[float]) -> float:
    """Mean of the finite values, 0.0 when there are none."""
    finite = [float(v) for v in values if v is not None and math.isfinite(v)]
    if not finite:
        return 0.0
    return float(np.mean(finite))


def coerce_box(box: Any) -> NormalizedBoundingBox:
    """Accept a NormalizedBoundingBox or any dict form; anything else is the zero box."""
    return NormalizedBoundingBox.from_dict(box)


def center(box: Any) -> Point2D:
    """Midpoint of a bounding box."""
    box = coerce_box(box)
    return Point2D(
        x=(box.left + box.right) / 2,
        y=(box.top + box.bottom) / 2
    )


def distance(p1: Point2D, p2: Point2D) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def box_distance(box_a: Any, box_b: Any) -> float:
    """Distance between the centers of two boxes."""
    return distance(center(box_a), center(box_b))


def direction_of(dx: float, dy: float) -> str:
    """Bucket a displacement into one of 8 45-degree octants."""
    if math.hypot(dx, dy) < SPEED_FLOOR:
        return STATIONARY
    angle = math.degrees(math.atan2(dy, dx))
    octant = int(((angle + 22.5) % 360) // 45)
    return DIRECTIONS[octant % 8]


def movement(box_a: Any, box_b: Any) -> Movement:
    """
    Displacement between two consecutive boxes of the same actor.

    Shift is measured on the top-left corner; size change is the
    difference in area.
    """
    box_a = coerce_box(box_a)
    box_b = coerce_box(box_b)

    dx = box_b.left - box_a.left
    dy = box_b.top - box_a.top
    d_size = box_b.area - box_a.area

    return Movement(
        dx=dx,
        dy=dy,
        d_size=d_size,
        speed=math.hypot(dx, dy),
        direction=direction_of(dx, dy)
    )


def center_shift(box_a: Any, box_b: Any) -> float:
    """Distance travelled by the box center between two frames."""
    return box_distance(box_a, box_b)


def union_box(boxes: List[Any]) -> NormalizedBoundingBox:
    """Smallest box containing all given boxes."""
    boxes = [coerce_box(b) for b in boxes]
    if not boxes:
        return NormalizedBoundingBox()
    return NormalizedBoundingBox(
        left=min(b.left for b in boxes),
        top=min(b.top for b in boxes),
        right=max(b.right for b in boxes),
        bottom=max(b.bottom for b in boxes)
    )

"""
Threshold classifiers and scoring curves for gestures.

Every rule table is ordered; the first matching rule wins.

Movement (consecutive frames of one actor):
- fast upward vertical movement -> jumping
- horizontal movement -> walking / running
- large area change -> leaning (grows) / stretching (shrinks)
- small movement -> waving
- upward movement -> pointing

Position (single frame): standing, sitting, stretching, jumping.

Object interaction (actor near a tracked object): reaching, picking_up,
putting_down, touching, showing, pointing.

Pair interaction (parent and child close together): hugging, high_five,
holding_hands, giving.
"""

from typing import Optional

from utils.geometry import Movement, Point2D
from video_annotations.models import NormalizedBoundingBox
from .enums import Actor, GestureType, InteractionType

# Plausible human movement band (normalized units per frame)
SPEED_BAND = (0.02, 0.15)
# Plausible person box area band
SIZE_BAND = (0.1, 0.8)

GESTURE_CONTEXTS = {
    GestureType.POINTING: 'attention_directing',
    GestureType.WAVING: 'greeting_or_farewell',
    GestureType.CLAPPING: 'celebration_or_approval',
    GestureType.HUGGING: 'affection_expression',
    GestureType.REACHING: 'object_interaction',
    GestureType.JUMPING: 'excitement_or_play',
    GestureType.WALKING: 'movement_or_exploration',
    GestureType.RUNNING: 'high_energy_play',
    GestureType.SITTING: 'rest_or_focus',
    GestureType.STANDING: 'attention_or_readiness',
    GestureType.DANCING: 'joyful_expression',
    GestureType.HIGH_FIVE: 'celebration_or_encouragement',
    GestureType.HOLDING_HANDS: 'connection_or_guidance',
    GestureType.GIVING: 'sharing_or_helping',
    GestureType.TAKING: 'receiving_or_accepting',
    GestureType.SHOWING: 'communication_or_teaching',
    GestureType.UNKNOWN: 'general_activity',
}

GESTURE_DESCRIPTIONS = {
    GestureType.POINTING: "{person} is pointing at something",
    GestureType.WAVING: "{person} is waving",
    GestureType.CLAPPING: "{person} is clapping",
    GestureType.HUGGING: "{person} is hugging",
    GestureType.REACHING: "{person} is reaching out",
    GestureType.JUMPING: "{person} is jumping",
    GestureType.WALKING: "{person} is walking",
    GestureType.RUNNING: "{person} is running",
    GestureType.SITTING: "{person} is sitting",
    GestureType.STANDING: "{person} is standing",
    GestureType.DANCING: "{person} is dancing",
    GestureType.HIGH_FIVE: "Giving a high five",
    GestureType.HOLDING_HANDS: "Holding hands",
    GestureType.GIVING: "{person} is giving something",
    GestureType.TAKING: "{person} is taking something",
    GestureType.SHOWING: "{person} is showing something",
    GestureType.UNKNOWN: "{person} gesture could not be recognized",
}

PAIR_DESCRIPTIONS = {
    GestureType.HUGGING: "Sharing a warm hug",
    GestureType.HIGH_FIVE: "Sharing a cheerful high five",
    GestureType.HOLDING_HANDS: "Holding hands affectionately",
    GestureType.GIVING: "Handing something to each other",
    GestureType.UNKNOWN: "Interacting",
}

INTERACTION_DESCRIPTIONS = {
    InteractionType.COOPERATIVE: "Working together cooperatively",
    InteractionType.IMITATIVE: "Playing by imitating each other",
    InteractionType.PLAYFUL: "Playing joyfully",
    InteractionType.SUPPORTIVE: "Supporting and encouraging each other",
    InteractionType.GUIDING: "Guiding and directing",
    InteractionType.RESPONSIVE: "Responding to each other",
    InteractionType.PARALLEL: "Doing similar activities side by side",
    InteractionType.FOLLOWING: "Following along and learning",
}


def classify_movement(move: Movement) -> GestureType:
    """Gesture implied by the displacement between two frames."""
    dx, dy, speed = move.dx, move.dy, move.speed

    if speed > 0.1 and abs(dy) > abs(dx) and dy < 0:
        return GestureType.JUMPING

    if speed > 0.05 and abs(dx) > abs(dy):
        return GestureType.RUNNING if speed > 0.1 else GestureType.WALKING

    if abs(move.d_size) > 0.05:
        return GestureType.LEANING if move.d_size > 0 else GestureType.STRETCHING

    if 0.01 < speed < 0.03:
        return GestureType.WAVING

    if move.direction == 'up' and speed > 0.03:
        return GestureType.POINTING

    return GestureType.UNKNOWN


def classify_position(box: NormalizedBoundingBox) -> GestureType:
    """Static pose from box shape and vertical placement."""
    height = box.height
    width = box.width
    center_y = (box.top + box.bottom) / 2

    if height > 0.6:
        return GestureType.STANDING

    if height < 0.4:
        return GestureType.SITTING

    if width > height * 1.2:
        return GestureType.STRETCHING

    if center_y < 0.3:
        return GestureType.JUMPING

    return GestureType.UNKNOWN


def classify_object_interaction(move: Movement, proximity: float) -> GestureType:
    """Interaction with a nearby object from actor movement and distance."""
    if proximity < 0.15:
        if move.speed > 0.05:
            return GestureType.REACHING
        if move.direction == 'down':
            return GestureType.PICKING_UP
        if move.direction == 'up':
            return GestureType.PUTTING_DOWN
        return GestureType.TOUCHING

    if proximity < 0.25:
        if move.direction == 'up':
            return GestureType.SHOWING
        return GestureType.POINTING

    return GestureType.UNKNOWN


def classify_pair_interaction(parent_center: Point2D, child_center: Point2D, proximity: float) -> GestureType:
    """Joint gesture of a close parent/child pair."""
    if proximity < 0.1:
        return GestureType.HUGGING

    if proximity < 0.15:
        height_diff = abs(parent_center.y - child_center.y)
        return GestureType.HIGH_FIVE if height_diff < 0.1 else GestureType.HOLDING_HANDS

    if proximity < 0.2:
        return GestureType.GIVING

    return GestureType.UNKNOWN


def classify_interaction_group(gesture_types) -> InteractionType:
    """Interaction category of a gesture group, by first matching gesture set."""
    present = set(gesture_types)
    rules = [
        ({GestureType.GIVING, GestureType.TAKING}, InteractionType.COOPERATIVE),
        ({GestureType.CLAPPING, GestureType.WAVING}, InteractionType.IMITATIVE),
        ({GestureType.HIGH_FIVE, GestureType.DANCING}, InteractionType.PLAYFUL),
        ({GestureType.HUGGING, GestureType.HOLDING_HANDS}, InteractionType.SUPPORTIVE),
        ({GestureType.POINTING, GestureType.SHOWING}, InteractionType.GUIDING),
    ]
    for trigger, interaction_type in rules:
        if present & trigger:
            return interaction_type
    return InteractionType.RESPONSIVE


def movement_confidence(move: Movement) -> float:
    """Peaks in the middle of the plausible speed band, degrades outside it."""
    low, high = SPEED_BAND
    speed = move.speed

    if low <= speed <= high:
        mid = (low + high) / 2
        closeness = 1 - abs(speed - mid) / (mid - low)
        return 0.8 + 0.2 * closeness

    if speed < low:
        return 0.4 + 0.3 * (speed / low)

    return 0.5 + 0.3 * max(0.0, 1 - (speed - high) / high)


def movement_intensity(move: Movement) -> float:
    speed_intensity = min(1.0, move.speed / 0.2)
    size_intensity = min(1.0, abs(move.d_size) / 0.1)
    return (speed_intensity + size_intensity) / 2


def position_confidence(box: NormalizedBoundingBox) -> float:
    """Highest for mid-sized boxes; ramps toward the band from outside."""
    low, high = SIZE_BAND
    size = box.area

    if low <= size <= high:
        mid = (low + high) / 2
        return 0.7 + 0.3 * (1 - abs(size - mid) / (mid - low))

    if size < low:
        return 0.5 + 0.3 * (size / low)

    return 0.5 + 0.3 * max(0.0, 1 - (size - high) / (1 - high))


def position_intensity(box: NormalizedBoundingBox) -> float:
    return min(1.0, box.area / 0.5)


def object_interaction_confidence(proximity: float, threshold: float = 0.2) -> float:
    return 0.5 + max(0.0, 1 - proximity / threshold) * 0.5


def object_interaction_intensity(move: Movement, proximity: float, threshold: float = 0.2) -> float:
    movement_part = min(1.0, move.speed / 0.1)
    proximity_part = max(0.0, 1 - proximity / threshold)
    return (movement_part + proximity_part) / 2


def pair_confidence(proximity: float, threshold: float = 0.2) -> float:
    return max(0.5, 1 - proximity / threshold)


def pair_intensity(proximity: float, threshold: float = 0.2) -> float:
    return max(0.0, 1 - proximity / threshold)


def infer_context(gesture_type: GestureType) -> str:
    return GESTURE_CONTEXTS.get(gesture_type, 'unknown_context')


def describe_gesture(gesture_type: GestureType, person: Actor) -> str:
    template = GESTURE_DESCRIPTIONS.get(gesture_type)
    label = person.value.capitalize()
    if template is None:
        return f"{label} {gesture_type.value} gesture"
    return template.format(person=label)


def describe_pair_gesture(gesture_type: GestureType) -> str:
    return PAIR_DESCRIPTIONS.get(gesture_type, f"{gesture_type.value} interaction")


def describe_object_interaction(gesture_type: GestureType, object_name: Optional[str]) -> str:
    return f"{gesture_type.value} interaction with {object_name or 'object'}"


def describe_interaction_group(interaction_type: InteractionType) -> str:
    return INTERACTION_DESCRIPTIONS.get(interaction_type, "Interacting")

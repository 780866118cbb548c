"""
Enumerations for gesture and interaction analysis.
"""

from enum import Enum


class GestureType(Enum):
    """Closed set of gesture labels."""
    POINTING = "pointing"
    WAVING = "waving"
    CLAPPING = "clapping"
    HUGGING = "hugging"
    REACHING = "reaching"
    PUSHING = "pushing"
    PULLING = "pulling"
    THROWING = "throwing"
    CATCHING = "catching"
    PICKING_UP = "picking_up"
    PUTTING_DOWN = "putting_down"
    SHOWING = "showing"
    GIVING = "giving"
    TAKING = "taking"
    STRETCHING = "stretching"
    LEANING = "leaning"
    SITTING = "sitting"
    STANDING = "standing"
    WALKING = "walking"
    RUNNING = "running"
    JUMPING = "jumping"
    DANCING = "dancing"
    NODDING = "nodding"
    SHAKING_HEAD = "shaking_head"
    TOUCHING = "touching"
    HOLDING_HANDS = "holding_hands"
    HIGH_FIVE = "high_five"
    UNKNOWN = "unknown"


class InteractionType(Enum):
    """Kinds of grouped parent-child interaction."""
    COOPERATIVE = "cooperative"  # Doing something together
    PARALLEL = "parallel"  # Similar activity side by side
    IMITATIVE = "imitative"  # Copying each other
    RESPONSIVE = "responsive"  # Reacting to each other
    PLAYFUL = "playful"
    SUPPORTIVE = "supportive"
    GUIDING = "guiding"  # Directing attention or action
    FOLLOWING = "following"


class Actor(Enum):
    """Who performed a gesture."""
    PARENT = "parent"
    CHILD = "child"
    BOTH = "both"

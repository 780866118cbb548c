"""
Detailed play analysis module.

Reductions over raw video annotations:
1. Emotional: smiling / camera-gaze detections, child smiling ratio
2. Spatial: parent-child distance statistics and proximity ratio
3. Activity: child movement score and activity level
4. Toy interaction: child proximity to toy-like objects, intensity peaks
5. Optimal play time: best fixed windows and overall engagement
Plus language interaction metrics from diarized speech.
"""

from .data_models import (
    EmotionalAnalysis,
    SpatialAnalysis,
    DistanceSample,
    ActivityAnalysis,
    ToyInteractionAnalysis,
    InteractionPeak,
    PlayPeriod,
    OptimalPlayTime,
    DetailedPlayAnalysis,
    LanguageInteractionAnalysis,
)
from .emotional import analyze_emotional_attributes
from .spatial import analyze_spatial_proximity
from .activity import analyze_child_activity
from .toy_interaction import analyze_toy_interaction
from .optimal_window import analyze_optimal_play_time
from .detailed_analyzer import perform_detailed_play_analysis
from .language_interaction import analyze_language_interaction

__all__ = [
    'EmotionalAnalysis',
    'SpatialAnalysis',
    'DistanceSample',
    'ActivityAnalysis',
    'ToyInteractionAnalysis',
    'InteractionPeak',
    'PlayPeriod',
    'OptimalPlayTime',
    'DetailedPlayAnalysis',
    'LanguageInteractionAnalysis',
    'analyze_emotional_attributes',
    'analyze_spatial_proximity',
    'analyze_child_activity',
    'analyze_toy_interaction',
    'analyze_optimal_play_time',
    'perform_detailed_play_analysis',
    'analyze_language_interaction',
]

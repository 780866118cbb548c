"""
Multimodal fusion module.

Combines gesture, detailed play and language analyses into one integrated
analysis of the session:
- Evaluation signals (physical, emotional, language, play patterns, attention)
- Synchrony components and participant profiles
- Interaction patterns, findings, risks, strengths and developmental indicators

Signals missing a source modality fall back to neutral defaults so that
partial recordings still produce a complete, explainable result.
"""

from .data_models import (
    IntegratedAnalysis,
    PhysicalInteractionSignals,
    EmotionalInteractionSignals,
    LanguageInteractionSignals,
    PlayPatternSignals,
    Synchronization,
    ParticipantProfiles,
    InteractionPatterns,
)
from .integrated_analysis import IntegratedAnalysisEngine, build_integrated_analysis

__all__ = [
    'IntegratedAnalysis',
    'PhysicalInteractionSignals',
    'EmotionalInteractionSignals',
    'LanguageInteractionSignals',
    'PlayPatternSignals',
    'Synchronization',
    'ParticipantProfiles',
    'InteractionPatterns',
    'IntegratedAnalysisEngine',
    'build_integrated_analysis',
]

"""
Play evaluation scoring module.

Turns an integrated session analysis into interpretable scores:
1. Interaction Quality (0-100)
2. Development Support (0-100)
3. Play Environment (0-100)
4. Communication (0-100)
5. Emotional Connection (0-100)
6. Attention Span (0-100)
7. Creativity (0-100)

plus a weighted overall score, a letter grade and rule-based insights.

All scores are:
- Interpretable (0-100 scale, higher = better)
- Explainable (fixed weighted formulas over named signals)
- Non-diagnostic (observation of play, not clinical assessment)
"""

from .play_evaluation import (
    PlayEvaluationSystem,
    PlayEvaluationResult,
    EvaluationScores,
    EvaluationInsights,
    EvaluationMetadata,
    calculate_grade,
)

__all__ = [
    'PlayEvaluationSystem',
    'PlayEvaluationResult',
    'EvaluationScores',
    'EvaluationInsights',
    'EvaluationMetadata',
    'calculate_grade',
]

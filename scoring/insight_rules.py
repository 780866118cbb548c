"""
Rule tables for evaluation insights.

Each rule is (predicate over EvaluationScores, text). Tables are
evaluated in order and every matching rule contributes its text.
"""

from typing import Callable, List, Tuple

Rule = Tuple[Callable, str]

STRENGTH_RULES: List[Rule] = [
    (lambda s: s.interaction_quality >= 80, 'Lively interaction between parent and child is observed'),
    (lambda s: s.communication_score >= 80, 'Verbal communication is very active and effective'),
    (lambda s: s.emotional_connection >= 80, 'Emotional bonding and attunement are excellent'),
    (lambda s: s.creativity >= 75, 'Play is creative and imaginative'),
]

IMPROVEMENT_RULES: List[Rule] = [
    (lambda s: s.attention_span < 70, 'Activities that lengthen attention span are needed'),
    (lambda s: s.communication_score < 70, 'Talk more during play for richer verbal interaction'),
    (lambda s: s.play_environment < 75, 'Make better use of the play space and materials'),
    (lambda s: s.emotional_connection < 70, 'Express more emotional connection and empathy'),
]

DEVELOPMENT_GOALS: List[str] = [
    'Support balanced language and social development',
    'Build creative thinking and problem-solving skills',
    'Strengthen focus and persistence',
]

# (minimum overall score, recommendations); first matching tier wins
RECOMMENDATION_TIERS: List[Tuple[int, List[str]]] = [
    (85, [
        'Keep up the current excellent interaction patterns',
        'Offer more complex play and challenges',
    ]),
    (70, [
        'Express positive feedback and encouragement more often',
        "Respect and support the child's lead in play",
    ]),
    (0, [
        'Spend more time playing and try more focused interaction',
        'Consider consulting a child development professional',
    ]),
]

GENERAL_RECOMMENDATIONS: List[str] = [
    'Set aside at least 30 minutes of quality play time every day',
    'Help the child put their feelings into words',
]

INSUFFICIENT_DATA_IMPROVEMENT = (
    'Insufficient data: the recording did not contain enough detectable interaction to evaluate'
)


def apply_rules(rules: List[Rule], scores) -> List[str]:
    return [text for predicate, text in rules if predicate(scores)]


def tier_recommendations(overall: float) -> List[str]:
    for minimum, texts in RECOMMENDATION_TIERS:
        if overall >= minimum:
            return list(texts)
    return list(RECOMMENDATION_TIERS[-1][1])

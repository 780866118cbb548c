"""
Reporting module.

Composes pipeline outputs into the comprehensive session report:
- Executive summary with an eight-tier grade
- Physical, verbal and emotional interaction sections
- Participant profiles, insights and tiered recommendations
- Temporal analysis derived from gesture groups, toy peaks and closeness peaks

All wording is observational and non-diagnostic.
"""

from .report_generator import (
    ComprehensiveReportGenerator,
    ComprehensiveReport,
    determine_report_grade,
    section_grade,
    save_report_json,
)
from .temporal_analysis import (
    TemporalAnalysis,
    derive_temporal_analysis,
    placeholder_temporal_analysis,
)

__all__ = [
    'ComprehensiveReportGenerator',
    'ComprehensiveReport',
    'determine_report_grade',
    'section_grade',
    'save_report_json',
    'TemporalAnalysis',
    'derive_temporal_analysis',
    'placeholder_temporal_analysis',
]

"""
Temporal analysis of a play session.

Builds the report's timeline, peak moments and recurring patterns from
the video bundle:
- Timeline points from interaction gesture groups and toy-interaction peaks
- Peak moments from the parent-child closeness curve (1 - distance), using
  scipy peak detection with an adaptive height threshold
- Recurring patterns from the detected gesture patterns

When the bundle carries none of these, a fixed example is returned and
marked with source='placeholder' so consumers can tell the two apart.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np
from scipy import signal

from utils.config_loader import get_section
from utils.serialization import get_field

logger = logging.getLogger(__name__)

SOURCE_DERIVED = 'derived'
SOURCE_PLACEHOLDER = 'placeholder'

CLOSE_DISTANCE = 0.3


@dataclass
class TimelinePoint:
    timestamp: str  # m:ss
    description: str
    significance: str  # high | medium | low
    category: str
    time_offset: float = 0.0


@dataclass
class PeakMoment:
    start_time: str
    end_time: str
    description: str
    impact: str  # positive | neutral | concerning
    learning_opportunity: str


@dataclass
class TemporalPattern:
    pattern: str
    frequency: str
    significance: str
    recommendation: str


@dataclass
class TemporalAnalysis:
    timeline: List[TimelinePoint] = field(default_factory=list)
    peak_moments: List[PeakMoment] = field(default_factory=list)
    patterns: List[TemporalPattern] = field(default_factory=list)
    source: str = SOURCE_PLACEHOLDER


def format_timestamp(seconds: float) -> str:
    """Seconds -> 'm:ss'."""
    seconds = max(0, int(seconds or 0))
    return f"{seconds // 60}:{seconds % 60:02d}"


def _significance(value: float) -> str:
    if value >= 0.7:
        return 'high'
    if value >= 0.4:
        return 'medium'
    return 'low'


def placeholder_temporal_analysis() -> TemporalAnalysis:
    """Fixed example used when no temporal data is available."""
    return TemporalAnalysis(
        timeline=[
            TimelinePoint('0:30', 'Play starts with high interest', 'high', 'engagement', 30.0),
            TimelinePoint('2:15', 'Cooperative interaction begins', 'high', 'cooperation', 135.0),
            TimelinePoint('4:20', 'Creative idea introduced', 'medium', 'creativity', 260.0),
        ],
        peak_moments=[
            PeakMoment(
                start_time='2:00',
                end_time='3:30',
                description='Most active interaction period',
                impact='positive',
                learning_opportunity='Try to create moments like this more often'
            )
        ],
        patterns=[
            TemporalPattern(
                pattern='High engagement early in the session',
                frequency='every session',
                significance='A positive start matters',
                recommendation='Always make the start of play exciting'
            )
        ],
        source=SOURCE_PLACEHOLDER
    )


def timeline_from_interactions(gesture_analysis: Any) -> List[TimelinePoint]:
    points = []
    for group in get_field(gesture_analysis, 'interaction_gestures', []) or []:
        start = float(get_field(group, 'start_time', 0.0) or 0.0)
        group_type = get_field(group, 'type', 'interaction')
        points.append(TimelinePoint(
            timestamp=format_timestamp(start),
            description=get_field(group, 'description', '') or 'Interaction',
            significance=_significance(float(get_field(group, 'quality', 0.0) or 0.0)),
            category=getattr(group_type, 'value', group_type),
            time_offset=start
        ))
    return points


def timeline_from_toy_peaks(detailed_analysis: Any) -> List[TimelinePoint]:
    toy = get_field(detailed_analysis, 'interaction_analysis', {}) or {}
    points = []
    for peak in get_field(toy, 'interaction_peaks', []) or []:
        offset = float(get_field(peak, 'time_offset', 0.0) or 0.0)
        intensity = float(get_field(peak, 'intensity', 0.0) or 0.0)
        points.append(TimelinePoint(
            timestamp=format_timestamp(offset),
            description='Intense play with toys',
            significance=_significance(intensity),
            category='toy_play',
            time_offset=offset
        ))
    return points


def detect_closeness_peaks(
    detailed_analysis: Any,
    max_peaks: int = 3
) -> List[PeakMoment]:
    """
    Peaks of parent-child closeness over time.

    Height threshold adapts to the session: mean + 0.5 * std of the
    closeness curve. Each peak spans its half-prominence width.
    """
    spatial = get_field(detailed_analysis, 'spatial_analysis', {}) or {}
    samples = get_field(spatial, 'distance_over_time', []) or []
    if len(samples) < 3:
        return []

    times = np.array([float(get_field(s, 'time_offset', 0.0) or 0.0) for s in samples])
    distances = np.array([float(get_field(s, 'distance', 0.0) or 0.0) for s in samples])
    closeness = 1.0 - np.clip(distances, 0.0, 1.0)

    threshold = np.mean(closeness) + 0.5 * np.std(closeness)
    peaks, _ = signal.find_peaks(closeness, height=threshold)
    if len(peaks) == 0:
        return []

    _, _, left_ips, right_ips = signal.peak_widths(closeness, peaks, rel_height=0.5)
    sample_index = np.arange(len(times))
    starts = np.interp(left_ips, sample_index, times)
    ends = np.interp(right_ips, sample_index, times)

    order = np.argsort(-closeness[peaks], kind='stable')[:max_peaks]

    moments = []
    for i in sorted(order, key=lambda k: times[peaks[k]]):
        peak_distance = distances[peaks[i]]
        is_close = peak_distance <= CLOSE_DISTANCE
        moments.append(PeakMoment(
            start_time=format_timestamp(starts[i]),
            end_time=format_timestamp(ends[i]),
            description=(
                'Parent and child play side by side' if is_close
                else 'Parent and child move closer together'
            ),
            impact='positive' if is_close else 'neutral',
            learning_opportunity='Try to create moments like this more often'
        ))
    return moments


def patterns_from_gestures(gesture_analysis: Any) -> List[TemporalPattern]:
    patterns = []
    for item in get_field(gesture_analysis, 'gesture_patterns', []) or []:
        kind = get_field(item, 'pattern', 'unknown')
        kind = getattr(kind, 'value', kind)
        significance = float(get_field(item, 'significance', 0.0) or 0.0)
        frequency = int(get_field(item, 'frequency', 0) or 0)
        patterns.append(TemporalPattern(
            pattern=f"Repeated {str(kind).replace('_', ' ')}",
            frequency=f"{frequency} times",
            significance=f"{_significance(significance)} significance ({significance:.2f})",
            recommendation=(
                'Build on this recurring behavior during play' if significance >= 0.5
                else 'Watch whether this behavior grows over sessions'
            )
        ))
    return patterns


def derive_temporal_analysis(video: Any, config: Dict = None) -> TemporalAnalysis:
    """
    Derive the temporal analysis from the video bundle.

    Args:
        video: Mapping (or object) with 'gesture_analysis' and/or
            'detailed_analysis' entries
        config: Configuration dict ('report' section)

    Returns:
        TemporalAnalysis with source 'derived', or the placeholder
    """
    config = config if config is not None else {}
    report_config = get_section(config, 'report')
    max_points = report_config.get('max_timeline_points', 10)
    max_peaks = report_config.get('max_peak_moments', 3)

    gesture_analysis = get_field(video, 'gesture_analysis', None)
    detailed_analysis = get_field(video, 'detailed_analysis', None)

    timeline = timeline_from_interactions(gesture_analysis) + timeline_from_toy_peaks(detailed_analysis)
    timeline.sort(key=lambda p: p.time_offset)
    peak_moments = detect_closeness_peaks(detailed_analysis, max_peaks)
    patterns = patterns_from_gestures(gesture_analysis)

    if not (timeline or peak_moments or patterns):
        logger.info("No temporal data in video bundle, using placeholder temporal analysis")
        return placeholder_temporal_analysis()

    logger.info(
        f"Temporal analysis: {len(timeline)} timeline points, "
        f"{len(peak_moments)} peak moments, {len(patterns)} patterns"
    )

    return TemporalAnalysis(
        timeline=timeline[:max_points],
        peak_moments=peak_moments,
        patterns=patterns,
        source=SOURCE_DERIVED
    )

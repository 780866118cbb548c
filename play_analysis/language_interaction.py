"""
Language interaction analysis from diarized speech transcription.

Words are grouped into utterances per speaker tag, then summarized:
- Per-speaker statistics (utterances, words, pacing)
- Conversation patterns (turn taking, response time, initiations)
- Utterance types (questions, instructions, emotion words, praise)
- Keywords and vocabulary diversity
- Per-minute utterance timeline by role

Speaker roles are assigned by tag: child_speaker_tag is the child,
every other tag is treated as the parent.
"""

import logging
import re
from collections import Counter
from typing import Dict, List

from utils.config_loader import get_section
from utils.geometry import safe_mean
from video_annotations.models import VideoIntelligenceResults, WordInfo
from .data_models import (
    ConversationPatterns,
    KeywordSummary,
    LanguageInteractionAnalysis,
    SpeakerStats,
    SpeechTimelineBucket,
    Utterance,
    UtteranceTypes,
)

logger = logging.getLogger(__name__)

PARENT = 'parent'
CHILD = 'child'

DEFAULT_QUESTION_WORDS = ['what', 'why', 'how', 'where', 'when', 'who', 'which']
DEFAULT_INSTRUCTION_WORDS = ["let's", 'try', 'together', 'can you', 'put', 'give', 'look']
DEFAULT_EMOTION_WORDS = ['happy', 'sad', 'fun', 'scary', 'angry', 'love', 'like', 'excited', 'wow']
DEFAULT_PRAISE_WORDS = ['good', 'great', 'well done', 'nice', 'awesome', 'amazing', 'perfect', 'good job']

STOPWORDS = {
    'the', 'a', 'an', 'and', 'or', 'but', 'is', 'are', 'was', 'were', 'be', 'to',
    'of', 'in', 'on', 'at', 'it', 'this', 'that', 'you', 'i', 'we', 'he', 'she',
    'they', 'me', 'my', 'your', 'do', 'so', 'oh', 'um', 'uh', 'okay', 'ok',
}
MIN_KEYWORD_COUNT = 2
TOP_KEYWORDS = 10
TIMELINE_BUCKET_SECONDS = 60.0
MAX_SPEAKER_INTERVAL = 300.0

TOKEN_PATTERN = re.compile(r"[a-z0-9']+")


def _contains_any(text: str, keywords: List[str]) -> bool:
    """Whole-word (or whole-phrase) match of any keyword."""
    return any(
        re.search(r'(?<![\w\'])' + re.escape(keyword.lower()) + r'(?![\w\'])', text)
        for keyword in keywords
    )


def collect_words(results: VideoIntelligenceResults) -> List[WordInfo]:
    """
    Time-ordered words of the best alternative of every segment.

    When diarization is present, only speaker-tagged words are kept (the
    tagged copy repeats the whole transcript); untagged words get tag 0.
    """
    words = []
    for segment in results.speech_transcription:
        best = segment.best
        if best is not None:
            words.extend(w for w in best.words if w.word)

    tagged = [w for w in words if w.speaker_tag]
    if tagged:
        words = tagged

    return sorted(words, key=lambda w: w.start_time)


def build_utterances(words: List[WordInfo], max_gap: float = 1.5) -> List[Utterance]:
    """Consecutive words of one speaker separated by at most max_gap seconds."""
    utterances: List[Utterance] = []
    current: List[WordInfo] = []

    def flush():
        if current:
            utterances.append(Utterance(
                speaker_tag=current[0].speaker_tag or 0,
                text=' '.join(w.word for w in current),
                start_time=current[0].start_time,
                end_time=max(w.end_time for w in current),
                word_count=len(current),
                confidence=safe_mean(w.confidence for w in current)
            ))

    for word in words:
        if current and (
            (word.speaker_tag or 0) != (current[-1].speaker_tag or 0)
            or word.start_time - current[-1].end_time > max_gap
        ):
            flush()
            current = []
        current.append(word)

    flush()
    return utterances


def speaker_role(speaker_tag: int, child_speaker_tag: int = 2) -> str:
    return CHILD if speaker_tag == child_speaker_tag else PARENT


def calculate_speaker_stats(utterances: List[Utterance], child_speaker_tag: int = 2) -> List[SpeakerStats]:
    by_speaker: Dict[int, List[Utterance]] = {}
    for utterance in utterances:
        by_speaker.setdefault(utterance.speaker_tag, []).append(utterance)

    stats = []
    for tag in sorted(by_speaker):
        own = by_speaker[tag]
        total_words = sum(u.word_count for u in own)
        intervals = [
            b.start_time - a.start_time
            for a, b in zip(own, own[1:])
            if 0 < b.start_time - a.start_time < MAX_SPEAKER_INTERVAL
        ]
        stats.append(SpeakerStats(
            speaker_tag=tag,
            role=speaker_role(tag, child_speaker_tag),
            utterance_count=len(own),
            average_words_per_utterance=round(total_words / len(own), 1),
            total_words=total_words,
            average_interval=round(safe_mean(intervals), 1)
        ))
    return stats


def analyze_conversation_patterns(utterances: List[Utterance], config: Dict = None) -> ConversationPatterns:
    """
    Turns are speaker switches answered within max_response_time; an
    initiation is the first utterance or one after initiation_silence
    seconds of silence.
    """
    if config is None:
        config = {}

    language_config = get_section(config, 'language_analysis')
    child_tag = language_config.get('child_speaker_tag', 2)
    max_response = language_config.get('max_response_time', 30.0)
    silence = language_config.get('initiation_silence', 5.0)

    if not utterances:
        return ConversationPatterns()

    response_times = []
    initiations = Counter()

    for index, utterance in enumerate(utterances):
        role = speaker_role(utterance.speaker_tag, child_tag)
        if index == 0:
            initiations[role] += 1
            continue

        prev = utterances[index - 1]
        gap = utterance.start_time - prev.end_time

        if gap > silence:
            initiations[role] += 1

        if utterance.speaker_tag != prev.speaker_tag and 0 < gap < max_response:
            response_times.append(gap)

    parent_count = sum(1 for u in utterances if speaker_role(u.speaker_tag, child_tag) == PARENT)

    return ConversationPatterns(
        turn_count=len(response_times),
        average_response_time=round(safe_mean(response_times), 2),
        parent_initiations=initiations[PARENT],
        child_initiations=initiations[CHILD],
        parent_utterance_share=parent_count / len(utterances)
    )


def classify_utterance_types(utterances: List[Utterance], config: Dict = None) -> UtteranceTypes:
    if config is None:
        config = {}

    language_config = get_section(config, 'language_analysis')
    question_words = language_config.get('question_words', DEFAULT_QUESTION_WORDS)
    instruction_words = language_config.get('instruction_words', DEFAULT_INSTRUCTION_WORDS)
    emotion_words = language_config.get('emotion_words', DEFAULT_EMOTION_WORDS)
    praise_words = language_config.get('praise_words', DEFAULT_PRAISE_WORDS)

    types = UtteranceTypes()
    for utterance in utterances:
        text = utterance.text.lower().strip()
        if '?' in text or _contains_any(text, question_words):
            types.questions += 1
        if _contains_any(text, instruction_words):
            types.instructions += 1
        if _contains_any(text, emotion_words):
            types.emotion_expressions += 1
        if _contains_any(text, praise_words):
            types.praise += 1
    return types


def extract_keywords(utterances: List[Utterance]) -> KeywordSummary:
    """Top repeated content words (stopwords, one-letter words and numbers removed)."""
    tokens = []
    for utterance in utterances:
        tokens.extend(TOKEN_PATTERN.findall(utterance.text.lower()))

    content = [t for t in tokens if len(t) > 1 and t not in STOPWORDS and not t.isdigit()]
    frequency = Counter(content)

    top = [
        {'word': word, 'count': count}
        for word, count in frequency.most_common()
        if count >= MIN_KEYWORD_COUNT
    ][:TOP_KEYWORDS]

    return KeywordSummary(top_keywords=top, unique_words=len(frequency), total_words=len(content))


def build_timeline(utterances: List[Utterance], child_speaker_tag: int = 2) -> List[SpeechTimelineBucket]:
    if not utterances:
        return []

    last_start = max(u.start_time for u in utterances)
    bucket_count = max(1, int(last_start // TIMELINE_BUCKET_SECONDS) + 1)

    buckets = [
        SpeechTimelineBucket(start_time=i * TIMELINE_BUCKET_SECONDS, end_time=(i + 1) * TIMELINE_BUCKET_SECONDS)
        for i in range(bucket_count)
    ]
    for utterance in utterances:
        bucket = buckets[min(bucket_count - 1, int(utterance.start_time // TIMELINE_BUCKET_SECONDS))]
        if speaker_role(utterance.speaker_tag, child_speaker_tag) == CHILD:
            bucket.child_utterances += 1
        else:
            bucket.parent_utterances += 1
    return buckets


def analyze_language_interaction(results, config: Dict = None) -> LanguageInteractionAnalysis:
    """
    Analyze parent-child verbal interaction.

    Args:
        results: VideoIntelligenceResults or its raw dict form
        config: Full configuration dict (reads 'language_analysis')

    Returns:
        LanguageInteractionAnalysis (has_speech False when no words exist)
    """
    if config is None:
        config = {}

    results = VideoIntelligenceResults.from_dict(results)
    language_config = get_section(config, 'language_analysis')
    child_tag = language_config.get('child_speaker_tag', 2)
    utterance_gap = language_config.get('utterance_gap', 1.5)

    words = collect_words(results)
    if not words:
        logger.warning("No speech transcription data available")
        return LanguageInteractionAnalysis()

    utterances = build_utterances(words, utterance_gap)
    keywords = extract_keywords(utterances)

    analysis = LanguageInteractionAnalysis(
        utterances=utterances,
        speaker_stats=calculate_speaker_stats(utterances, child_tag),
        conversation_patterns=analyze_conversation_patterns(utterances, config),
        utterance_types=classify_utterance_types(utterances, config),
        keywords=keywords,
        timeline=build_timeline(utterances, child_tag),
        vocabulary_diversity=keywords.unique_words / keywords.total_words if keywords.total_words else 0.0,
        has_speech=True
    )

    logger.info(
        f"Language analysis complete: {len(utterances)} utterances from "
        f"{len(analysis.speaker_stats)} speakers, {analysis.conversation_patterns.turn_count} turns"
    )

    return analysis

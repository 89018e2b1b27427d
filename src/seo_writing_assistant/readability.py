"""
Readability scoring.

Computes the Flesch reading ease of content from sentence, word and syllable
statistics. The reported score is clamped to [0, 100] so the composite SEO
score always receives a bounded input.
"""

import math
from typing import Optional

from .models import ReadabilityResult, TokenStream
from .text_stats import count_syllables, require_text, tokenize

SCORE_MIN = 0.0
SCORE_MAX = 100.0


def clamp_score(value: float, low: float = SCORE_MIN, high: float = SCORE_MAX) -> float:
    """
    Clamp a score into [low, high].

    Non-finite values collapse to ``low`` so callers never see NaN or
    infinity.
    """
    if not math.isfinite(value):
        return low
    return max(low, min(high, value))


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> float:
    """
    Raw, unclamped Flesch reading ease.

    Zero words scores 0. Words without any sentence are treated as a single
    implicit sentence.
    """
    if words <= 0:
        return 0.0
    sentences = max(1, sentences)
    return 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)


def readability_from_stream(stream: TokenStream) -> ReadabilityResult:
    """Compute readability from an already tokenized stream."""
    total_words = stream.word_count
    if total_words == 0:
        return ReadabilityResult()

    total_sentences = max(1, stream.sentence_count)
    total_syllables = sum(count_syllables(word) for word in stream.words)
    score = flesch_reading_ease(total_words, total_sentences, total_syllables)

    return ReadabilityResult(
        flesch_kincaid=round(clamp_score(score), 2),
        total_sentences=total_sentences,
        total_words=total_words,
        average_syllables_per_word=round(total_syllables / total_words, 2),
    )


def calculate_readability(content: str, stream: Optional[TokenStream] = None) -> ReadabilityResult:
    """
    Calculate readability statistics for content.

    Args:
        content: Text to score.
        stream: Optional pre-computed token stream of ``content``.

    Returns:
        ReadabilityResult with fleschKincaid clamped to [0, 100].

    Raises:
        InvalidInputError: If content is not a string.
    """
    require_text(content)
    if stream is None:
        stream = tokenize(content)
    return readability_from_stream(stream)

"""
SEO analysis module.

This module combines the tokenizer, keyword extractor and readability scorer
into a single SEO analysis:
- Measure keyword density for supplied or extracted keywords
- Score content length, density, readability and sentence structure
- Merge the sub-scores into a weighted 0-100 score with recommendations

Everything here is a pure function of its arguments. Any string input,
including the empty string, produces a complete SEOAnalysis.
"""

import math
from collections.abc import Sequence
from typing import Optional

from .config import DEFAULT_SCORING, ScoringConfig
from .keyword_extractor import extract_keywords_from_stream
from .models import ReadabilityResult, ScoreBreakdown, SEOAnalysis, TokenStream
from .readability import clamp_score, readability_from_stream
from .text_stats import InvalidInputError, normalize_phrase, require_text, tokenize


# Recommendation messages
RECOMMEND_LONGER = "Increase content length to at least {min_words} words"
RECOMMEND_SHORTER = "Reduce content length to under {max_words} words"
RECOMMEND_MORE_KEYWORDS = "Use your target keywords more often (aim for {low:g}-{high:g}% density)"
RECOMMEND_FEWER_KEYWORDS = "Reduce keyword repetition to avoid over-optimization"
RECOMMEND_READABILITY = "Use shorter sentences and simpler words to improve readability"
RECOMMEND_STRUCTURE = "Vary sentence length to make the content more engaging"


def _require_keywords(keywords: Optional[Sequence[str]]) -> list[str]:
    if keywords is None:
        return []
    if isinstance(keywords, str) or not isinstance(keywords, Sequence):
        raise InvalidInputError(
            f"keywords must be a sequence of strings, got {type(keywords).__name__}"
        )
    for kw in keywords:
        require_text(kw, name="keyword")
    return list(keywords)


def count_phrase_occurrences(phrase: str, stream: TokenStream) -> int:
    """
    Count case-insensitive occurrences of a phrase in a token stream.

    Multi-word phrases are matched with a sliding window over the tokens.
    """
    target = normalize_phrase(phrase)
    size = len(target)
    if size == 0 or size > stream.word_count:
        return 0

    words = stream.words
    return sum(
        1
        for i in range(len(words) - size + 1)
        if words[i:i + size] == target
    )


def calculate_keyword_density(phrase: str, stream: TokenStream) -> float:
    """
    Calculate keyword density as percentage.

    Args:
        phrase: Keyword phrase.
        stream: Tokenized content.

    Returns:
        occurrences / total words * 100, unrounded.
    """
    total_words = stream.word_count
    if total_words == 0:
        return 0.0
    return count_phrase_occurrences(phrase, stream) / total_words * 100


# =============================================================================
# Sub-scores
# =============================================================================

def score_length(word_count: int, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """100 inside the length band, linear falloff on both sides."""
    if word_count < config.length_band_min:
        score = 100.0 * word_count / config.length_band_min
    elif word_count <= config.length_band_max:
        score = 100.0
    else:
        excess = word_count - config.length_band_max
        score = 100.0 * (1 - excess / config.length_falloff_words)
    return clamp_score(score)


def score_density(
    densities: Sequence[float], config: ScoringConfig = DEFAULT_SCORING
) -> float:
    """
    Score the average keyword density.

    No keywords and 0% both score 0. Inside the band scores 100. Above the
    band the score falls to 0 at the density ceiling.
    """
    if not densities:
        return 0.0
    average = sum(densities) / len(densities)

    if average < config.density_band_min:
        score = 100.0 * average / config.density_band_min
    elif average <= config.density_band_max:
        score = 100.0
    else:
        span = config.density_ceiling - config.density_band_max
        score = 100.0 * (config.density_ceiling - average) / span
    return clamp_score(score)


def score_readability(readability: ReadabilityResult) -> float:
    """Higher reading ease maps linearly to a higher score."""
    return clamp_score(readability.flesch_kincaid)


def sentence_length_deviation(stream: TokenStream) -> float:
    """Population standard deviation of sentence word counts."""
    lengths = stream.sentence_lengths()
    if not lengths:
        return 0.0
    mean = sum(lengths) / len(lengths)
    variance = sum((n - mean) ** 2 for n in lengths) / len(lengths)
    return math.sqrt(variance)


def score_structure(stream: TokenStream, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Reward sentence-length variety; fixed default otherwise."""
    if stream.word_count == 0:
        return 0.0
    if sentence_length_deviation(stream) >= config.structure_std_threshold:
        return 100.0
    return clamp_score(config.structure_default_score)


def composite_score(breakdown: ScoreBreakdown, config: ScoringConfig = DEFAULT_SCORING) -> int:
    """Weighted sum of the sub-scores, rounded and clamped to [0, 100]."""
    total = (
        config.length_weight * breakdown.length
        + config.density_weight * breakdown.keyword_density
        + config.readability_weight * breakdown.readability
        + config.structure_weight * breakdown.structure
    )
    return int(clamp_score(round(total)))


# =============================================================================
# Recommendations
# =============================================================================

def build_recommendations(
    breakdown: ScoreBreakdown,
    word_count: int,
    average_density: float,
    config: ScoringConfig = DEFAULT_SCORING,
) -> list[str]:
    """
    One recommendation per sub-score below the threshold.

    Order is fixed: length, density, readability, structure.
    """
    threshold = config.recommendation_threshold
    recommendations = []

    if breakdown.length < threshold:
        if word_count > config.length_band_max:
            recommendations.append(RECOMMEND_SHORTER.format(max_words=config.length_band_max))
        else:
            recommendations.append(RECOMMEND_LONGER.format(min_words=config.length_band_min))

    if breakdown.keyword_density < threshold:
        if average_density > config.density_band_max:
            recommendations.append(RECOMMEND_FEWER_KEYWORDS)
        else:
            recommendations.append(RECOMMEND_MORE_KEYWORDS.format(
                low=config.density_band_min, high=config.density_band_max,
            ))

    if breakdown.readability < threshold:
        recommendations.append(RECOMMEND_READABILITY)

    if breakdown.structure < threshold:
        recommendations.append(RECOMMEND_STRUCTURE)

    return recommendations


# =============================================================================
# Composer
# =============================================================================

def analyze_seo(
    content: str,
    keywords: Optional[Sequence[str]] = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> SEOAnalysis:
    """
    Analyze content for SEO.

    Args:
        content: Text to analyze. Empty text yields a zero analysis.
        keywords: Target keywords. When omitted or empty, up to
            ``config.auto_keyword_count`` keywords are extracted.
        config: Scoring constants.

    Returns:
        SEOAnalysis with score, per-keyword density (percent, 2 decimals),
        readability, word count, breakdown and recommendations.

    Raises:
        InvalidInputError: If content is not a string or keywords is not a
            sequence of strings.
    """
    require_text(content)
    targets = _require_keywords(keywords)

    stream = tokenize(content)
    if not targets:
        targets = extract_keywords_from_stream(stream, config.auto_keyword_count)

    raw_densities = {kw: calculate_keyword_density(kw, stream) for kw in targets}
    readability = readability_from_stream(stream)

    breakdown = ScoreBreakdown(
        length=round(score_length(stream.word_count, config), 2),
        keyword_density=round(score_density(list(raw_densities.values()), config), 2),
        readability=round(score_readability(readability), 2),
        structure=round(score_structure(stream, config), 2),
    )

    average_density = (
        sum(raw_densities.values()) / len(raw_densities) if raw_densities else 0.0
    )

    return SEOAnalysis(
        score=composite_score(breakdown, config),
        keyword_density={kw: round(d, 2) for kw, d in raw_densities.items()},
        readability=readability,
        word_count=stream.word_count,
        recommendations=tuple(
            build_recommendations(breakdown, stream.word_count, average_density, config)
        ),
        breakdown=breakdown,
    )

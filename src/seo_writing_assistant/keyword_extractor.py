"""
Keyword extraction.

Ranks single words and 2-3 word phrases of a text by how often they occur.
Ranking is fully deterministic:

1. occurrence count, descending
2. candidate text length, descending (more specific phrases first)
3. position of first occurrence, ascending
"""

from typing import Any

from .models import KeywordCandidate, TokenStream
from .text_stats import InvalidInputError, is_stop_word, require_text, tokenize

MAX_PHRASE_WORDS = 3


def _require_count(count: Any) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(count, bool) or not isinstance(count, int):
        raise InvalidInputError(f"count must be an integer, got {type(count).__name__}")
    if count < 0:
        raise InvalidInputError(f"count must be >= 0, got {count}")
    return count


def _is_candidate(tokens: tuple[str, ...]) -> bool:
    """Phrases may contain stop words inside, but not at either edge."""
    return not is_stop_word(tokens[0]) and not is_stop_word(tokens[-1])


def collect_candidates(stream: TokenStream) -> list[KeywordCandidate]:
    """
    Build the deduplicated candidate set of a token stream.

    Phrases never cross a sentence boundary.
    """
    counts: dict[str, int] = {}
    first_seen: dict[str, int] = {}

    for span in stream.sentences:
        sentence = stream.sentence_words(span)
        for offset in range(len(sentence)):
            for size in range(1, MAX_PHRASE_WORDS + 1):
                gram = sentence[offset:offset + size]
                if len(gram) < size:
                    break
                if not _is_candidate(gram):
                    continue
                text = " ".join(gram)
                counts[text] = counts.get(text, 0) + 1
                first_seen.setdefault(text, span.start + offset)

    total_words = stream.word_count
    return [
        KeywordCandidate(
            text=text,
            count=count,
            density=count / total_words if total_words else 0.0,
            first_position=first_seen[text],
        )
        for text, count in counts.items()
    ]


def rank_candidates(candidates: list[KeywordCandidate]) -> list[KeywordCandidate]:
    """Sort candidates by count, then text length, then first position."""
    return sorted(
        candidates,
        key=lambda c: (-c.count, -len(c.text), c.first_position),
    )


def rank_keyword_candidates(content: str) -> list[KeywordCandidate]:
    """
    Return every keyword candidate of ``content`` in ranked order.

    Raises:
        InvalidInputError: If content is not a string.
    """
    require_text(content)
    return rank_candidates(collect_candidates(tokenize(content)))


def extract_keywords(content: str, count: int) -> list[str]:
    """
    Extract the top keywords and key phrases from content.

    Args:
        content: Text to analyze.
        count: Maximum number of keywords to return (>= 0).

    Returns:
        Up to ``count`` keyword strings, best first. Fewer are returned when
        the content has fewer candidates; stop-word-only content yields [].

    Raises:
        InvalidInputError: If content is not a string or count is not a
            non-negative integer.
    """
    require_text(content)
    count = _require_count(count)
    if count == 0:
        return []
    return [c.text for c in rank_keyword_candidates(content)[:count]]


def extract_keywords_from_stream(stream: TokenStream, count: int) -> list[str]:
    """Same as extract_keywords, for an already tokenized text."""
    count = _require_count(count)
    if count == 0:
        return []
    return [c.text for c in rank_candidates(collect_candidates(stream))[:count]]

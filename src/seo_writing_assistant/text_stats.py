"""
Tokenization and text statistics.

Splits raw content into lowercase word tokens and sentence spans, counts
syllables, and holds the stop-word list shared by keyword extraction.

Known simplification: sentences are split on every run of ``.``, ``!`` or
``?``. Abbreviations ("Dr. Smith") and decimals ("3.5") therefore create
extra sentence breaks.
"""

import re
from typing import Any

from .models import SentenceSpan, TokenStream


class InvalidInputError(Exception):
    """Raised when the analysis engine receives input of the wrong type."""
    pass


# Common English stopwords
STOP_WORDS: frozenset[str] = frozenset({
    "the", "a", "an", "and", "or", "but", "nor", "in", "on", "at", "to", "for",
    "of", "with", "by", "from", "into", "onto", "about", "over", "under",
    "above", "below", "between", "through", "during", "before", "after",
    "up", "down", "out", "off", "again", "further", "once", "until", "while",
    "is", "are", "was", "were", "be", "been", "being", "am",
    "have", "has", "had", "having", "do", "does", "did", "doing",
    "will", "would", "could", "should", "may", "might", "must", "shall", "can",
    "this", "that", "these", "those", "it", "its", "itself",
    "you", "your", "yours", "yourself", "we", "our", "ours", "us",
    "they", "their", "theirs", "them", "themselves",
    "he", "she", "him", "her", "hers", "his", "himself", "herself",
    "my", "mine", "myself", "i", "me",
    "as", "if", "when", "where", "why", "how", "what", "which", "who", "whom",
    "all", "any", "each", "every", "both", "few", "more", "most", "other",
    "some", "such", "no", "not", "only", "own", "same", "so", "than",
    "too", "very", "just", "also", "now", "here", "there", "then",
    "because", "whether", "s", "t", "don't", "it's",
})

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_EDGE_PUNCTUATION = re.compile(r"^[\W_]+|[\W_]+$")
_NON_LETTERS = re.compile(r"[^a-z]")
_VOWEL_GROUP = re.compile(r"[aeiouy]+")
_VOWELS = "aeiouy"


def require_text(value: Any, name: str = "content") -> str:
    """Return ``value`` if it is a string, otherwise raise InvalidInputError."""
    if not isinstance(value, str):
        raise InvalidInputError(
            f"{name} must be a string, got {type(value).__name__}"
        )
    return value


def normalize_token(raw: str) -> str:
    """Lowercase a raw word and strip leading/trailing punctuation."""
    return _EDGE_PUNCTUATION.sub("", raw).lower()


def split_words(text: str) -> list[str]:
    """Split text on whitespace into normalized, non-empty tokens."""
    tokens = []
    for raw in text.split():
        token = normalize_token(raw)
        if token:
            tokens.append(token)
    return tokens


def normalize_phrase(phrase: str) -> tuple[str, ...]:
    """
    Tokenize a keyword or phrase the same way content words are tokenized.

    Sentence punctuation inside the phrase is treated like whitespace, so
    "SEO." and "seo" normalize identically.
    """
    return tuple(split_words(_SENTENCE_SPLIT.sub(" ", phrase)))


def tokenize(content: str) -> TokenStream:
    """
    Split content into word tokens and sentence spans.

    Args:
        content: Raw text. Empty or whitespace-only text is allowed.

    Returns:
        TokenStream with lowercase words and one span per non-empty sentence.

    Raises:
        InvalidInputError: If content is not a string.
    """
    require_text(content)

    words: list[str] = []
    sentences: list[SentenceSpan] = []

    for chunk in _SENTENCE_SPLIT.split(content):
        tokens = split_words(chunk)
        if not tokens:
            continue
        start = len(words)
        words.extend(tokens)
        sentences.append(SentenceSpan(start=start, end=len(words)))

    return TokenStream(words=tuple(words), sentences=tuple(sentences))


def count_syllables(word: str) -> int:
    """
    Estimate the syllable count of an English word.

    Counts vowel groups, drops a silent trailing "e" and restores the
    syllable of a consonant + "le" ending ("table"). Any non-empty word has
    at least one syllable, including numbers such as "2024".
    """
    word = normalize_token(word)
    if not word:
        return 0

    letters = _NON_LETTERS.sub("", word)
    if len(letters) <= 3:
        return 1

    count = len(_VOWEL_GROUP.findall(letters))

    # Adjust for silent 'e'
    if letters.endswith("e") and count > 1:
        count -= 1
    # Adjust for 'le' ending
    if letters.endswith("le") and letters[-3] not in _VOWELS:
        count += 1

    return max(1, count)


def is_stop_word(token: str) -> bool:
    return token in STOP_WORDS

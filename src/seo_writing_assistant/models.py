"""
Data models for the SEO Writing Assistant.

This module defines the structures produced by the analysis engine. All of
them are frozen dataclasses built fresh per call; ``to_dict`` renders the
camelCase JSON shape expected by the HTTP layer and by persistence.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SentenceSpan:
    """Half-open range of token indices belonging to one sentence."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class TokenStream:
    """
    Lowercase word tokens of a text plus its sentence boundaries.

    Sentence spans are contiguous and non-overlapping, so together they
    cover every token exactly once.
    """
    words: tuple[str, ...] = ()
    sentences: tuple[SentenceSpan, ...] = ()

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    def sentence_words(self, span: SentenceSpan) -> tuple[str, ...]:
        """Return the tokens of a single sentence."""
        return self.words[span.start:span.end]

    def sentence_lengths(self) -> list[int]:
        """Word count of each sentence, in order."""
        return [span.length for span in self.sentences]


@dataclass(frozen=True)
class KeywordCandidate:
    """A ranked keyword or 2-3 word phrase found in content."""
    text: str
    count: int
    density: float  # occurrences / total words (0-1)
    first_position: int

    @property
    def word_length(self) -> int:
        return len(self.text.split())

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "count": self.count,
            "density": self.density,
            "firstPosition": self.first_position,
        }


@dataclass(frozen=True)
class ReadabilityResult:
    """Flesch reading ease plus the statistics it was computed from."""
    flesch_kincaid: float = 0.0
    total_sentences: int = 0
    total_words: int = 0
    average_syllables_per_word: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "fleschKincaid": self.flesch_kincaid,
            "totalSentences": self.total_sentences,
            "totalWords": self.total_words,
            "averageSyllablesPerWord": self.average_syllables_per_word,
        }


@dataclass(frozen=True)
class ScoreBreakdown:
    """The four clamped sub-scores feeding the composite SEO score."""
    length: float = 0.0
    keyword_density: float = 0.0
    readability: float = 0.0
    structure: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "length": self.length,
            "keywordDensity": self.keyword_density,
            "readability": self.readability,
            "structure": self.structure,
        }


@dataclass(frozen=True)
class SEOAnalysis:
    """Result of a full SEO analysis of one piece of content."""
    score: int
    keyword_density: dict[str, float]
    readability: ReadabilityResult
    word_count: int
    recommendations: tuple[str, ...] = ()
    breakdown: ScoreBreakdown = field(default_factory=ScoreBreakdown)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "keywordDensity": dict(self.keyword_density),
            "readability": self.readability.to_dict(),
            "wordCount": self.word_count,
            "recommendations": list(self.recommendations),
            "breakdown": self.breakdown.to_dict(),
        }

"""Tests for readability scoring."""

import math

import pytest

from seo_writing_assistant.readability import (
    calculate_readability,
    clamp_score,
    flesch_reading_ease,
)
from seo_writing_assistant.text_stats import InvalidInputError


class TestCalculateReadability:
    """Tests for the calculate_readability function."""

    def test_empty_content(self):
        """Test that empty content yields all zeros."""
        result = calculate_readability("")

        assert result.to_dict() == {
            "fleschKincaid": 0,
            "totalSentences": 0,
            "totalWords": 0,
            "averageSyllablesPerWord": 0,
        }

    def test_scenario_values(self, scenario_text):
        """Test exact statistics for a known text."""
        result = calculate_readability(scenario_text)

        # 15 syllables over 11 words in 3 sentences
        assert result.total_words == 11
        assert result.total_sentences == 3
        assert result.average_syllables_per_word == 1.36
        assert result.flesch_kincaid == 87.75

    def test_no_terminator_counts_as_one_sentence(self):
        """Test that unpunctuated text still has a defined score."""
        result = calculate_readability("cats sit")

        assert result.total_sentences == 1
        assert result.total_words == 2
        assert 0 <= result.flesch_kincaid <= 100

    def test_single_word(self):
        """Test a single-word input."""
        result = calculate_readability("Hi")

        assert result.total_words == 1
        assert result.total_sentences == 1
        assert result.flesch_kincaid == 100.0  # 206.835 - 1.015 - 84.6 = 121.22, clamped

    def test_clamped_at_zero_for_dense_text(self):
        """Test that very hard text is clamped to 0 instead of going negative."""
        text = " ".join(["internationalization"] * 40) + "."
        result = calculate_readability(text)

        assert result.flesch_kincaid == 0.0

    @pytest.mark.parametrize("content", [
        "",
        "a",
        "Go!",
        "...",
        "Supercalifragilisticexpialidocious antidisestablishmentarianism.",
        "I. Am. A. Cat.",
        "word " * 500,
    ])
    def test_always_within_bounds(self, content):
        """Test the clamping invariant for assorted inputs."""
        score = calculate_readability(content).flesch_kincaid

        assert math.isfinite(score)
        assert 0 <= score <= 100

    def test_idempotent(self, article_text):
        """Test that repeated calls give identical results."""
        assert calculate_readability(article_text) == calculate_readability(article_text)

    def test_rejects_non_string(self):
        """Test that non-string input raises InvalidInputError."""
        with pytest.raises(InvalidInputError):
            calculate_readability(123)


class TestFleschReadingEase:
    """Tests for the raw formula."""

    def test_zero_words(self):
        assert flesch_reading_ease(0, 0, 0) == 0.0

    def test_zero_sentences_treated_as_one(self):
        assert flesch_reading_ease(10, 0, 15) == flesch_reading_ease(10, 1, 15)

    def test_unclamped(self):
        assert flesch_reading_ease(1, 1, 1) == pytest.approx(121.22)


class TestClampScore:
    """Tests for the clamp boundary function."""

    @pytest.mark.parametrize("value,expected", [
        (-5.0, 0.0),
        (0.0, 0.0),
        (42.5, 42.5),
        (100.0, 100.0),
        (250.0, 100.0),
        (float("inf"), 0.0),
        (float("-inf"), 0.0),
        (float("nan"), 0.0),
    ])
    def test_clamp(self, value, expected):
        assert clamp_score(value) == expected

    def test_custom_bounds(self):
        assert clamp_score(7, low=1, high=5) == 5

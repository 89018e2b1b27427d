# -*- coding: utf-8 -*-
"""
Centralized configuration for the SEO Writing Assistant.

Two dataclasses live here:
- ScoringConfig: the constants of the SEO composite score (weights, bands,
  thresholds). Immutable so a single instance can be shared across threads.
- AppConfig: runtime settings for the service layer (LLM, database, limits),
  usually built from environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_LLM_MODEL = "claude-sonnet-4-20250514"
DEFAULT_DATABASE_URL = "sqlite:///./seo_writing_assistant.db"


class ConfigError(Exception):
    """Raised when configuration values are inconsistent."""
    pass


@dataclass(frozen=True)
class ScoringConfig:
    """
    Constants for the SEO composite score.

    Attributes:
        length_weight, density_weight, readability_weight, structure_weight:
            Sub-score weights. Must sum to 1.0.

        length_band_min / length_band_max: Word count range scoring 100.
            Below the band the score rises linearly from 0 words; above it
            the score falls linearly to 0 over ``length_falloff_words``.

        density_band_min / density_band_max: Average keyword density (%)
            scoring 100. Below the band the score rises linearly from 0%;
            above it the score falls linearly to 0 at ``density_ceiling``.

        structure_std_threshold: Minimum standard deviation of sentence
            word counts that counts as varied sentence structure.
        structure_default_score: Structure score when the threshold is
            not met.

        recommendation_threshold: Sub-scores below this value produce a
            recommendation.

        auto_keyword_count: Keywords extracted when the caller supplies none.
    """

    # Weights
    length_weight: float = 0.2
    density_weight: float = 0.35
    readability_weight: float = 0.3
    structure_weight: float = 0.15

    # Length curve (words)
    length_band_min: int = 300
    length_band_max: int = 1500
    length_falloff_words: int = 3000

    # Density curve (percent)
    density_band_min: float = 1.0
    density_band_max: float = 3.0
    density_ceiling: float = 5.0

    # Structure
    structure_std_threshold: float = 3.0
    structure_default_score: float = 50.0

    # Recommendations
    recommendation_threshold: float = 60.0

    # Keyword extraction
    auto_keyword_count: int = 5

    def __post_init__(self) -> None:
        total = (
            self.length_weight
            + self.density_weight
            + self.readability_weight
            + self.structure_weight
        )
        if abs(total - 1.0) > 1e-9:
            raise ConfigError(f"Scoring weights must sum to 1.0, got {total}")
        if not 0 < self.length_band_min <= self.length_band_max:
            raise ConfigError("length band must satisfy 0 < min <= max")
        if not 0 < self.density_band_min <= self.density_band_max < self.density_ceiling:
            raise ConfigError("density band must satisfy 0 < min <= max < ceiling")
        if self.length_falloff_words <= 0:
            raise ConfigError("length_falloff_words must be positive")


DEFAULT_SCORING = ScoringConfig()


@dataclass
class AppConfig:
    """
    Runtime settings for the content service and HTTP layer.

    Attributes:
        anthropic_api_key: Key for the LLM provider. None disables AI routes.
        llm_model: Model identifier passed to the Anthropic SDK.
        llm_timeout_seconds: Upper bound for a single LLM call.
        database_url: SQLAlchemy URL for drafts and optimization sessions.
        draft_list_limit: Maximum drafts returned by a listing.
        default_tone: Tone used for rewrites when none is requested.
    """

    anthropic_api_key: Optional[str] = None
    llm_model: str = DEFAULT_LLM_MODEL
    llm_timeout_seconds: float = 60.0
    database_url: str = DEFAULT_DATABASE_URL
    draft_list_limit: int = 50
    default_tone: str = "professional"

    def __post_init__(self) -> None:
        # Some hosts expose postgres:// but SQLAlchemy requires postgresql://
        if self.database_url.startswith("postgres://"):
            self.database_url = self.database_url.replace("postgres://", "postgresql://", 1)
        if self.llm_timeout_seconds <= 0:
            raise ConfigError("llm_timeout_seconds must be positive")
        if self.draft_list_limit <= 0:
            raise ConfigError("draft_list_limit must be positive")

    @property
    def has_llm(self) -> bool:
        """Check whether an API key is available for LLM calls."""
        return bool(self.anthropic_api_key)

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "AppConfig":
        """Build configuration from environment variables."""
        env = os.environ if environ is None else environ
        try:
            timeout = float(env.get("LLM_TIMEOUT_SECONDS", 60.0))
            limit = int(env.get("DRAFT_LIST_LIMIT", 50))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting: {e}") from e

        return cls(
            anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
            llm_model=env.get("LLM_MODEL", DEFAULT_LLM_MODEL),
            llm_timeout_seconds=timeout,
            database_url=env.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            draft_list_limit=limit,
        )

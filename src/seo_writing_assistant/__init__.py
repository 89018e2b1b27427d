"""
SEO Writing Assistant

Content-writing assistance with a deterministic SEO scoring engine:
- Scores content for length, keyword density, readability and structure
- Extracts ranked keywords and key phrases
- Rewrites, proofreads and generates meta tags through an LLM
- Stores drafts and optimization sessions per user
"""

__version__ = "1.0.0"
__author__ = "SEO Writing Assistant Team"

from .config import AppConfig, ScoringConfig

from .models import (
    KeywordCandidate,
    ReadabilityResult,
    ScoreBreakdown,
    SentenceSpan,
    SEOAnalysis,
    TokenStream,
)

# Analysis engine
from .text_stats import (
    InvalidInputError,
    STOP_WORDS,
    count_syllables,
    tokenize,
)

from .keyword_extractor import (
    extract_keywords,
    rank_keyword_candidates,
)

from .readability import (
    calculate_readability,
    clamp_score,
)

from .analysis import (
    analyze_seo,
    calculate_keyword_density,
)

__all__ = [
    # Config
    "AppConfig",
    "ScoringConfig",
    # Models
    "KeywordCandidate",
    "ReadabilityResult",
    "ScoreBreakdown",
    "SentenceSpan",
    "SEOAnalysis",
    "TokenStream",
    # Engine
    "InvalidInputError",
    "STOP_WORDS",
    "count_syllables",
    "tokenize",
    "extract_keywords",
    "rank_keyword_candidates",
    "calculate_readability",
    "clamp_score",
    "analyze_seo",
    "calculate_keyword_density",
]

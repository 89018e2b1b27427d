"""
Content-writing assistance service.

Orchestrates the SEO analysis engine, the LLM collaborator and draft
persistence for the HTTP layer:
- analyze: AI analysis and SEO analysis run concurrently
- rewrite: LLM rewrite, then both versions are scored and compared
- proofread: LLM corrections, then readability of the corrected text
- meta: LLM meta tags for a supplied or extracted primary keyword

The engine and the Anthropic SDK are synchronous, so both run in worker
threads and are joined with asyncio.gather. LLM calls are bounded by a
timeout; their failures never touch an SEO result computed alongside.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Protocol, Sequence

from .analysis import analyze_seo
from .config import DEFAULT_SCORING, AppConfig, ScoringConfig
from .drafts import DraftRepository, PersistenceError
from .keyword_extractor import extract_keywords
from .llm_client import LLMClientError
from .readability import calculate_readability
from .text_stats import InvalidInputError

logger = logging.getLogger(__name__)

DEFAULT_META_KEYWORD = "content"


class WritingAssistant(Protocol):
    """The LLM operations the service depends on."""

    def rewrite_content(self, content: str, keywords: list[str], tone: str) -> str: ...

    def proofread_content(self, content: str, target_audience: Optional[str] = None) -> dict: ...

    def generate_meta(self, content: str, keyword: str) -> dict: ...

    def analyze_content(self, content: str) -> dict: ...


class ContentServiceError(Exception):
    """
    A failure with a stable, client-safe message.

    The underlying cause is logged and chained, never put in ``message``.
    """

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ContentValidationError(ContentServiceError):
    """The request content is missing or malformed."""

    status_code = 400


def require_content(content: Any) -> str:
    """Reject missing, non-string and whitespace-only content."""
    if not isinstance(content, str) or not content.strip():
        raise ContentValidationError("Content is required")
    return content


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContentService:
    """Request-level orchestration of analysis, LLM calls and persistence."""

    def __init__(
        self,
        llm_client: Optional[WritingAssistant] = None,
        repository: Optional[DraftRepository] = None,
        config: Optional[AppConfig] = None,
        scoring: ScoringConfig = DEFAULT_SCORING,
    ):
        self.llm_client = llm_client
        self.repository = repository
        self.config = config or AppConfig()
        self.scoring = scoring

    # -- helpers --------------------------------------------------------------

    async def _call_llm(self, operation: str, *args: Any) -> Any:
        """Run a blocking LLM method in a thread with the configured timeout."""
        if self.llm_client is None:
            raise LLMClientError("LLM client is not configured (missing ANTHROPIC_API_KEY)")
        method: Callable[..., Any] = getattr(self.llm_client, operation)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(method, *args),
                timeout=self.config.llm_timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise LLMClientError(
                f"LLM call timed out after {self.config.llm_timeout_seconds}s"
            ) from e

    async def _analyze(self, content: str, keywords: Optional[Sequence[str]] = None):
        return await asyncio.to_thread(analyze_seo, content, keywords, self.scoring)

    # -- SEO engine ---------------------------------------------------------

    def analyze_seo(self, content: Any, keywords: Optional[Sequence[str]] = None) -> dict:
        """Score content; supplied keywords override extraction."""
        require_content(content)
        try:
            return analyze_seo(content, keywords or None, self.scoring).to_dict()
        except InvalidInputError as e:
            raise ContentValidationError(str(e)) from e

    def suggest_keywords(self, content: Any, count: int = 10) -> list[str]:
        require_content(content)
        try:
            return extract_keywords(content, count)
        except InvalidInputError as e:
            raise ContentValidationError(str(e)) from e

    # -- AI-assisted operations -------------------------------------------

    async def analyze_content(self, content: Any) -> dict:
        """Run AI analysis and SEO analysis concurrently."""
        require_content(content)
        try:
            ai_analysis, seo_analysis = await asyncio.gather(
                self._call_llm("analyze_content", content),
                self._analyze(content),
            )
        except LLMClientError as e:
            logger.error(f"Content analysis error: {e}")
            raise ContentServiceError("Content analysis failed") from e

        return {
            "ai": ai_analysis,
            "seo": seo_analysis.to_dict(),
            "timestamp": _timestamp(),
        }

    async def rewrite_content(
        self,
        content: Any,
        target_tone: Optional[str] = None,
        keywords: Optional[Sequence[str]] = None,
        draft_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> dict:
        """
        Rewrite content with the LLM and compare SEO before and after.

        When ``user_id`` is given the rewrite is stored as an optimization
        session. Storage is best effort: a failure is logged and reported
        as ``sessionId: None``.
        """
        require_content(content)
        tone = target_tone or self.config.default_tone
        keyword_list = list(keywords) if keywords else extract_keywords(
            content, self.scoring.auto_keyword_count
        )

        try:
            optimized = await self._call_llm(
                "rewrite_content",
                content, keyword_list, tone,
            )
            original_analysis, optimized_analysis = await asyncio.gather(
                self._analyze(content, keyword_list),
                self._analyze(optimized, keyword_list),
            )
        except (LLMClientError, InvalidInputError) as e:
            logger.error(f"Content rewrite error: {e}")
            raise ContentServiceError("Content rewriting failed") from e

        session_id = None
        if user_id and self.repository is not None:
            session_id = await self._store_session(
                user_id, content, optimized, original_analysis, optimized_analysis, tone, draft_id
            )

        return {
            "original": content,
            "optimized": optimized,
            "keywords": keyword_list,
            "analysis": {
                "original": original_analysis.to_dict(),
                "optimized": optimized_analysis.to_dict(),
            },
            "improvement": {
                "seoScore": optimized_analysis.score - original_analysis.score,
                "readability": round(
                    optimized_analysis.readability.flesch_kincaid
                    - original_analysis.readability.flesch_kincaid,
                    2,
                ),
            },
            "sessionId": session_id,
        }

    async def _store_session(self, user_id, content, optimized, original_analysis,
                             optimized_analysis, tone, draft_id) -> Optional[str]:
        try:
            record = await asyncio.to_thread(
                self.repository.create_optimization_session,
                user_id,
                content,
                optimized,
                original_analysis,
                optimized_analysis,
                tone,
                draft_id,
            )
            return record["id"]
        except PersistenceError as e:
            logger.warning(f"Optimization session not saved for user {user_id}: {e}")
            return None

    async def proofread_content(self, content: Any, target_audience: Optional[str] = None) -> dict:
        """Proofread with the LLM and score readability of the corrected text."""
        require_content(content)
        try:
            result = await self._call_llm(
                "proofread_content",
                content, target_audience,
            )
            corrected = result["correctedContent"]
            readability = await asyncio.to_thread(calculate_readability, corrected)
        except (LLMClientError, InvalidInputError, KeyError) as e:
            logger.error(f"Proofreading error: {e}")
            raise ContentServiceError("Proofreading failed") from e

        errors = result.get("errors", [])
        return {
            "original": content,
            "corrected": corrected,
            "errors": errors,
            "readability": readability.to_dict(),
            "errorCount": len(errors),
        }

    async def generate_meta(self, content: Any, primary_keyword: Optional[str] = None) -> dict:
        """Generate meta tags for the primary keyword or the top extracted one."""
        require_content(content)
        keyword = primary_keyword or next(
            iter(extract_keywords(content, 1)), DEFAULT_META_KEYWORD
        )
        try:
            return await self._call_llm(
                "generate_meta",
                content, keyword,
            )
        except LLMClientError as e:
            logger.error(f"Meta generation error: {e}")
            raise ContentServiceError("Meta content generation failed") from e

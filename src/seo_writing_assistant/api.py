"""
FastAPI application for the SEO Writing Assistant.

Exposes the SEO analysis engine, the AI writing assistance operations and
per-user draft storage as a REST API. Authentication happens upstream: the
gateway forwards the authenticated user id in the ``X-User-Id`` header.
"""

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .config import AppConfig
from .content_service import ContentService, ContentServiceError
from .database import create_session_factory
from .drafts import DraftNotFoundError, DraftRepository, PersistenceError
from .llm_client import LLMClientError, create_llm_client

logger = logging.getLogger(__name__)


# ============================================================================
# Request / Response Models
# ============================================================================

class CamelModel(BaseModel):
    """Accepts camelCase JSON keys and snake_case field names."""
    model_config = ConfigDict(populate_by_name=True)


class ContentRequest(CamelModel):
    """Request carrying content only."""
    content: Optional[str] = None


class RewriteRequest(CamelModel):
    """Request model for AI rewriting."""
    content: Optional[str] = None
    target_tone: Optional[str] = Field(None, alias="targetTone", description="Tone of voice, defaults to 'professional'")
    keywords: Optional[list[str]] = Field(None, description="Target keywords; extracted from content when omitted")
    draft_id: Optional[str] = Field(None, alias="draftId", description="Draft the optimization session belongs to")


class ProofreadRequest(CamelModel):
    """Request model for proofreading."""
    content: Optional[str] = None
    target_audience: Optional[str] = Field(None, alias="targetAudience")


class MetaRequest(CamelModel):
    """Request model for meta tag generation."""
    content: Optional[str] = None
    primary_keyword: Optional[str] = Field(None, alias="primaryKeyword")


class SEOAnalyzeRequest(CamelModel):
    """Request model for SEO analysis."""
    content: Optional[str] = None
    keywords: Optional[list[str]] = None


class SuggestKeywordsRequest(CamelModel):
    """Request model for keyword suggestions."""
    content: Optional[str] = None
    count: int = Field(10, ge=0, le=100, description="Maximum number of keywords to return")


class SaveDraftRequest(CamelModel):
    """Request model for creating a draft."""
    title: str = ""
    content: str = ""
    optimized_content: Optional[str] = Field(None, alias="optimizedContent")


class UpdateDraftRequest(CamelModel):
    """Request model for updating a draft; omitted fields stay unchanged."""
    title: Optional[str] = None
    content: Optional[str] = None
    optimized_content: Optional[str] = Field(None, alias="optimizedContent")
    status: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


# ============================================================================
# Application
# ============================================================================

def build_service(config: AppConfig) -> ContentService:
    """Wire the LLM client and draft repository described by ``config``."""
    llm_client = None
    if config.has_llm:
        try:
            llm_client = create_llm_client(
                api_key=config.anthropic_api_key,
                model=config.llm_model,
                timeout=config.llm_timeout_seconds,
            )
        except LLMClientError as e:
            logger.error(f"LLM client unavailable: {e}")
    else:
        logger.warning("ANTHROPIC_API_KEY not set; AI writing endpoints will fail")

    repository = DraftRepository(
        create_session_factory(config.database_url),
        list_limit=config.draft_list_limit,
    )
    return ContentService(llm_client=llm_client, repository=repository, config=config)


def create_app(service: Optional[ContentService] = None, config: Optional[AppConfig] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Pre-built service (tests inject one with fakes).
        config: Configuration used to build the service when none is given.
    """
    if service is None:
        service = build_service(config or AppConfig.from_env())

    app = FastAPI(
        title="SEO Writing Assistant API",
        description="AI rewriting, proofreading, meta tags and deterministic SEO scoring",
        version=__version__,
    )
    app.state.service = service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_routes(app)
    return app


def get_service(request: Request) -> ContentService:
    return request.app.state.service


def get_repository(service: ContentService = Depends(get_service)) -> DraftRepository:
    if service.repository is None:
        raise HTTPException(status_code=503, detail="Draft storage is not configured")
    return service.repository


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


def get_optional_user_id(x_user_id: Optional[str] = Header(None)) -> Optional[str]:
    return x_user_id or None


def _raise_http(error: ContentServiceError) -> None:
    raise HTTPException(status_code=error.status_code, detail=error.message) from error


def _register_routes(app: FastAPI) -> None:

    @app.get("/api/health", response_model=HealthResponse)
    async def health_check():
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=__version__)

    # ------------------------------------------------------------------------
    # Content (AI-assisted)
    # ------------------------------------------------------------------------

    @app.post("/api/content/analyze")
    async def analyze_content(request: ContentRequest, service: ContentService = Depends(get_service)):
        """Run AI content analysis and SEO analysis side by side."""
        try:
            data = await service.analyze_content(request.content)
        except ContentServiceError as e:
            _raise_http(e)
        return {"success": True, "data": data}

    @app.post("/api/content/rewrite")
    async def rewrite_content(
        request: RewriteRequest,
        service: ContentService = Depends(get_service),
        user_id: Optional[str] = Depends(get_optional_user_id),
    ):
        """Rewrite content and compare SEO scores of both versions."""
        try:
            data = await service.rewrite_content(
                request.content,
                target_tone=request.target_tone,
                keywords=request.keywords,
                draft_id=request.draft_id,
                user_id=user_id,
            )
        except ContentServiceError as e:
            _raise_http(e)
        return {"success": True, "data": data}

    @app.post("/api/content/proofread")
    async def proofread_content(request: ProofreadRequest, service: ContentService = Depends(get_service)):
        """Proofread content and score readability of the corrected text."""
        try:
            data = await service.proofread_content(request.content, request.target_audience)
        except ContentServiceError as e:
            _raise_http(e)
        return {"success": True, "data": data}

    @app.post("/api/content/meta")
    async def generate_meta(request: MetaRequest, service: ContentService = Depends(get_service)):
        """Generate an SEO title and meta description."""
        try:
            data = await service.generate_meta(request.content, request.primary_keyword)
        except ContentServiceError as e:
            _raise_http(e)
        return {"success": True, "data": data}

    # ------------------------------------------------------------------------
    # SEO engine
    # ------------------------------------------------------------------------

    @app.post("/api/seo/analyze")
    def analyze_seo(request: SEOAnalyzeRequest, service: ContentService = Depends(get_service)):
        """Score content for SEO."""
        try:
            data = service.analyze_seo(request.content, request.keywords)
        except ContentServiceError as e:
            _raise_http(e)
        except Exception as e:
            logger.error(f"SEO analysis error: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="SEO analysis failed") from e
        return {"success": True, "data": data}

    @app.post("/api/seo/suggest-keywords")
    def suggest_keywords(request: SuggestKeywordsRequest, service: ContentService = Depends(get_service)):
        """Suggest keywords extracted from the content."""
        try:
            data = service.suggest_keywords(request.content, request.count)
        except ContentServiceError as e:
            _raise_http(e)
        except Exception as e:
            logger.error(f"Keyword extraction error: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Keyword extraction failed") from e
        return {"success": True, "data": data}

    # ------------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------------

    @app.get("/api/users/drafts")
    def list_drafts(
        repository: DraftRepository = Depends(get_repository),
        user_id: str = Depends(get_user_id),
    ):
        """List the user's most recently updated drafts."""
        try:
            drafts = repository.list_drafts(user_id)
        except PersistenceError as e:
            raise HTTPException(status_code=500, detail="Failed to fetch drafts") from e
        return {"success": True, "data": drafts}

    @app.get("/api/users/drafts/{draft_id}")
    def get_draft(
        draft_id: str,
        repository: DraftRepository = Depends(get_repository),
        user_id: str = Depends(get_user_id),
    ):
        """Fetch one of the user's drafts."""
        try:
            draft = repository.get_draft(user_id, draft_id)
        except DraftNotFoundError as e:
            raise HTTPException(status_code=404, detail="Draft not found") from e
        except PersistenceError as e:
            raise HTTPException(status_code=500, detail="Failed to fetch draft") from e
        return {"success": True, "data": draft}

    @app.get("/api/users/sessions")
    def list_sessions(
        draft_id: Optional[str] = Query(None, alias="draftId"),
        repository: DraftRepository = Depends(get_repository),
        user_id: str = Depends(get_user_id),
    ):
        """List the user's optimization sessions, optionally for one draft."""
        try:
            sessions = repository.list_optimization_sessions(user_id, draft_id=draft_id)
        except PersistenceError as e:
            raise HTTPException(status_code=500, detail="Failed to fetch sessions") from e
        return {"success": True, "data": sessions}

    @app.post("/api/users/save-draft")
    def save_draft(
        request: SaveDraftRequest,
        repository: DraftRepository = Depends(get_repository),
        user_id: str = Depends(get_user_id),
    ):
        """Create a new draft."""
        try:
            draft = repository.create_draft(
                user_id, request.title, request.content, request.optimized_content
            )
        except PersistenceError as e:
            raise HTTPException(status_code=500, detail="Failed to save draft") from e
        return {"success": True, "data": draft}

    @app.put("/api/users/drafts/{draft_id}")
    def update_draft(
        draft_id: str,
        request: UpdateDraftRequest,
        repository: DraftRepository = Depends(get_repository),
        user_id: str = Depends(get_user_id),
    ):
        """Update fields of an existing draft."""
        try:
            draft = repository.update_draft(
                user_id,
                draft_id,
                title=request.title,
                content=request.content,
                optimized_content=request.optimized_content,
                status=request.status,
            )
        except DraftNotFoundError as e:
            raise HTTPException(status_code=404, detail="Draft not found") from e
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except PersistenceError as e:
            raise HTTPException(status_code=500, detail="Failed to update draft") from e
        return {"success": True, "data": draft}

    @app.delete("/api/users/drafts/{draft_id}")
    def delete_draft(
        draft_id: str,
        repository: DraftRepository = Depends(get_repository),
        user_id: str = Depends(get_user_id),
    ):
        """Delete a draft."""
        try:
            repository.delete_draft(user_id, draft_id)
        except DraftNotFoundError as e:
            raise HTTPException(status_code=404, detail="Draft not found") from e
        except PersistenceError as e:
            raise HTTPException(status_code=500, detail="Failed to delete draft") from e
        return {"success": True, "message": "Draft deleted"}

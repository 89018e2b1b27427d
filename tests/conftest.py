"""
Pytest fixtures and configuration for SEO Writing Assistant tests.
"""

import pytest
from fastapi.testclient import TestClient

from seo_writing_assistant.api import create_app
from seo_writing_assistant.config import AppConfig
from seo_writing_assistant.content_service import ContentService
from seo_writing_assistant.database import create_session_factory
from seo_writing_assistant.drafts import DraftRepository
from seo_writing_assistant.llm_client import LLMClientError


SCENARIO_TEXT = "SEO is great. SEO helps websites rank better. Great content wins."


class FakeLLMClient:
    """In-memory stand-in for LLMClient that records its calls."""

    def __init__(self, rewritten: str = "Content marketing works. Content marketing builds trust over time.",
                 fail: bool = False):
        self.rewritten = rewritten
        self.fail = fail
        self.calls: list[tuple] = []

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        if self.fail:
            raise LLMClientError(f"{name} failed: upstream exploded with secret-token-123")

    def rewrite_content(self, content, keywords, tone):
        self._record("rewrite_content", content, keywords, tone)
        return self.rewritten

    def proofread_content(self, content, target_audience=None):
        self._record("proofread_content", content, target_audience)
        return {
            "correctedContent": content.replace("teh", "the"),
            "errors": [
                {"original": "teh", "correction": "the", "type": "spelling", "explanation": "Typo"},
            ],
        }

    def generate_meta(self, content, keyword):
        self._record("generate_meta", content, keyword)
        return {
            "title": f"{keyword.title()} Guide",
            "description": f"Everything you need to know about {keyword}.",
            "slug": keyword.replace(" ", "-"),
            "keyword": keyword,
        }

    def analyze_content(self, content):
        self._record("analyze_content", content)
        return {
            "summary": "A short note about SEO.",
            "tone": "informal",
            "intent": "informational",
            "suggestions": ["Add examples"],
        }


@pytest.fixture
def scenario_text() -> str:
    """Three sentences, 11 words, 'SEO' twice."""
    return SCENARIO_TEXT


@pytest.fixture
def article_text() -> str:
    """Roughly 400 words with varied sentence lengths."""
    paragraphs = [
        "Content marketing helps small teams reach new readers. "
        "It works best when every article answers one clear question. "
        "Plan topics around what your audience already searches for, and write for people first. "
        "Short posts are fine. "
        "Long guides earn links when they teach something useful in plain words.",
        "Start with research. "
        "Look at the questions customers ask in support tickets, on sales calls and in online forums, "
        "then group them into themes that match your product. "
        "Each theme can become a series of posts.",
    ]
    return " ".join(paragraphs * 6)


@pytest.fixture
def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    return create_session_factory("sqlite:///:memory:")


@pytest.fixture
def repository(session_factory) -> DraftRepository:
    return DraftRepository(session_factory, list_limit=50)


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(database_url="sqlite:///:memory:", llm_timeout_seconds=5.0)


@pytest.fixture
def service(fake_llm, repository, app_config) -> ContentService:
    return ContentService(llm_client=fake_llm, repository=repository, config=app_config)


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(create_app(service=service))

"""Tests for the FastAPI application."""

import anthropic
import pytest
from fastapi.testclient import TestClient

from seo_writing_assistant import __version__
from seo_writing_assistant.api import create_app
from seo_writing_assistant.config import AppConfig
from seo_writing_assistant.content_service import ContentService

from conftest import FakeLLMClient

USER = {"X-User-Id": "user-1"}
OTHER_USER = {"X-User-Id": "user-2"}


class TestHealth:
    """Tests for the health endpoint."""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "version": __version__}


class TestSEOEndpoints:
    """Tests for /api/seo routes."""

    def test_analyze(self, client, scenario_text):
        """Test the engine result is wrapped in a success envelope."""
        response = client.post("/api/seo/analyze", json={"content": scenario_text, "keywords": ["SEO"]})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["keywordDensity"] == {"SEO": 18.18}
        assert body["data"]["wordCount"] == 11
        assert body["data"]["score"] == 35

    def test_analyze_without_keywords(self, client, article_text):
        response = client.post("/api/seo/analyze", json={"content": article_text})

        assert response.status_code == 200
        assert 0 < len(response.json()["data"]["keywordDensity"]) <= 5

    @pytest.mark.parametrize("payload", [{}, {"content": ""}, {"content": "   "}])
    def test_analyze_requires_content(self, client, payload):
        response = client.post("/api/seo/analyze", json=payload)

        assert response.status_code == 400
        assert response.json() == {"detail": "Content is required"}

    def test_suggest_keywords(self, client, scenario_text):
        response = client.post("/api/seo/suggest-keywords", json={"content": scenario_text, "count": 2})

        assert response.status_code == 200
        assert response.json()["data"] == ["great", "seo"]

    def test_suggest_keywords_default_count(self, client, article_text):
        response = client.post("/api/seo/suggest-keywords", json={"content": article_text})

        assert len(response.json()["data"]) == 10

    def test_suggest_keywords_rejects_negative_count(self, client, scenario_text):
        response = client.post("/api/seo/suggest-keywords", json={"content": scenario_text, "count": -1})

        assert response.status_code == 422


class TestContentEndpoints:
    """Tests for /api/content routes."""

    def test_analyze(self, client, scenario_text):
        response = client.post("/api/content/analyze", json={"content": scenario_text})

        data = response.json()["data"]
        assert data["ai"]["tone"] == "informal"
        assert data["seo"]["wordCount"] == 11

    def test_rewrite_accepts_camel_case(self, client, fake_llm, scenario_text):
        """Test targetTone and keywords are passed through."""
        response = client.post(
            "/api/content/rewrite",
            json={"content": scenario_text, "targetTone": "casual", "keywords": ["SEO"]},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["optimized"] == fake_llm.rewritten
        assert data["analysis"]["original"]["keywordDensity"] == {"SEO": 18.18}
        assert fake_llm.calls[0][3] == "casual"
        assert data["sessionId"] is None

    def test_rewrite_stores_session_for_user(self, client, repository, scenario_text):
        response = client.post("/api/content/rewrite", json={"content": scenario_text}, headers=USER)

        session_id = response.json()["data"]["sessionId"]
        assert session_id is not None
        assert [s["id"] for s in repository.list_optimization_sessions("user-1")] == [session_id]

    def test_proofread(self, client):
        response = client.post(
            "/api/content/proofread",
            json={"content": "I saw teh cat.", "targetAudience": "kids"},
        )

        data = response.json()["data"]
        assert data["corrected"] == "I saw the cat."
        assert data["errorCount"] == 1

    def test_meta(self, client, scenario_text):
        response = client.post("/api/content/meta", json={"content": scenario_text, "primaryKeyword": "seo tips"})

        assert response.json()["data"]["slug"] == "seo-tips"

    @pytest.mark.parametrize("path", [
        "/api/content/analyze",
        "/api/content/rewrite",
        "/api/content/proofread",
        "/api/content/meta",
    ])
    def test_requires_content(self, client, path):
        response = client.post(path, json={"content": " "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Content is required"

    @pytest.mark.parametrize("path,message", [
        ("/api/content/analyze", "Content analysis failed"),
        ("/api/content/rewrite", "Content rewriting failed"),
        ("/api/content/proofread", "Proofreading failed"),
        ("/api/content/meta", "Meta content generation failed"),
    ])
    def test_llm_failure_is_sanitized(self, repository, scenario_text, path, message):
        """Test that upstream error text never reaches the client."""
        service = ContentService(llm_client=FakeLLMClient(fail=True), repository=repository)
        client = TestClient(create_app(service=service))

        response = client.post(path, json={"content": scenario_text})

        assert response.status_code == 500
        assert response.json() == {"detail": message}
        assert "secret" not in response.text


class TestDraftEndpoints:
    """Tests for /api/users draft routes."""

    def _save(self, client, title="Post", headers=USER):
        response = client.post(
            "/api/users/save-draft",
            json={"title": title, "content": "Body.", "optimizedContent": "Better body."},
            headers=headers,
        )
        assert response.status_code == 200
        return response.json()["data"]

    def test_requires_user(self, client):
        assert client.get("/api/users/drafts").status_code == 401
        assert client.post("/api/users/save-draft", json={"title": "x"}).status_code == 401

    def test_save_and_list(self, client):
        draft = self._save(client)

        assert draft["optimizedContent"] == "Better body."
        response = client.get("/api/users/drafts", headers=USER)
        assert [d["id"] for d in response.json()["data"]] == [draft["id"]]

    def test_list_is_scoped_to_user(self, client):
        self._save(client, headers=OTHER_USER)

        assert client.get("/api/users/drafts", headers=USER).json()["data"] == []

    def test_update(self, client):
        draft = self._save(client)

        response = client.put(
            f"/api/users/drafts/{draft['id']}",
            json={"title": "Renamed", "status": "published"},
            headers=USER,
        )

        data = response.json()["data"]
        assert data["title"] == "Renamed"
        assert data["status"] == "published"
        assert data["content"] == "Body."

    def test_update_rejects_unknown_status(self, client):
        draft = self._save(client)

        response = client.put(f"/api/users/drafts/{draft['id']}", json={"status": "gone"}, headers=USER)

        assert response.status_code == 400

    def test_update_other_users_draft(self, client):
        draft = self._save(client)

        response = client.put(f"/api/users/drafts/{draft['id']}", json={"title": "x"}, headers=OTHER_USER)

        assert response.status_code == 404

    def test_delete(self, client):
        draft = self._save(client)

        response = client.delete(f"/api/users/drafts/{draft['id']}", headers=USER)

        assert response.json() == {"success": True, "message": "Draft deleted"}
        assert client.delete(f"/api/users/drafts/{draft['id']}", headers=USER).status_code == 404

    def test_get_draft(self, client):
        draft = self._save(client)

        response = client.get(f"/api/users/drafts/{draft['id']}", headers=USER)

        assert response.json()["data"]["title"] == "Post"
        assert client.get(f"/api/users/drafts/{draft['id']}", headers=OTHER_USER).status_code == 404

    def test_list_sessions(self, client, scenario_text):
        """Test that stored rewrites are listed per user and per draft."""
        draft = self._save(client)
        client.post("/api/content/rewrite", json={"content": scenario_text, "draftId": draft["id"]}, headers=USER)
        client.post("/api/content/rewrite", json={"content": scenario_text}, headers=USER)

        everything = client.get("/api/users/sessions", headers=USER).json()["data"]
        for_draft = client.get("/api/users/sessions", params={"draftId": draft["id"]}, headers=USER).json()["data"]

        assert len(everything) == 2
        assert [s["draftId"] for s in for_draft] == [draft["id"]]
        assert client.get("/api/users/sessions", headers=OTHER_USER).json()["data"] == []

    def test_list_sessions_requires_user(self, client):
        assert client.get("/api/users/sessions").status_code == 401


class TestAppFactory:
    """Tests for building the app from configuration."""

    def test_sdk_failure_degrades_to_no_llm(self, monkeypatch, scenario_text):
        """Test that an unusable Anthropic SDK does not stop the app from starting."""
        def reject(**kwargs):
            raise TypeError("Invalid http_client argument")

        monkeypatch.setattr(anthropic, "Anthropic", reject)
        app = create_app(config=AppConfig(anthropic_api_key="sk-test", database_url="sqlite://"))
        client = TestClient(app)

        assert app.state.service.llm_client is None
        assert client.post("/api/seo/analyze", json={"content": scenario_text}).status_code == 200
        assert client.post("/api/content/analyze", json={"content": scenario_text}).status_code == 500


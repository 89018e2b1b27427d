"""
User-scoped storage for drafts and optimization sessions.

Every read and write is filtered by user id, so one user can never see or
modify another user's drafts. SQLAlchemy errors are rolled back and raised
as PersistenceError.
"""

import json
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .database import Draft, OptimizationSession
from .models import SEOAnalysis

logger = logging.getLogger(__name__)

DRAFT_STATUSES = ("draft", "optimized", "published", "archived")


class PersistenceError(Exception):
    """Raised when a database operation fails."""
    pass


class DraftNotFoundError(Exception):
    """Raised when a draft does not exist for the requesting user."""
    pass


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def draft_to_dict(draft: Draft) -> dict[str, Any]:
    return {
        "id": draft.id,
        "userId": draft.user_id,
        "title": draft.title,
        "content": draft.content,
        "optimizedContent": draft.optimized_content,
        "status": draft.status,
        "createdAt": _iso(draft.created_at),
        "updatedAt": _iso(draft.updated_at),
    }


def session_to_dict(record: OptimizationSession) -> dict[str, Any]:
    return {
        "id": record.id,
        "userId": record.user_id,
        "draftId": record.draft_id,
        "originalContent": record.original_content,
        "optimizedContent": record.optimized_content,
        "changes": json.loads(record.changes_json),
        "seoScore": record.seo_score,
        "readabilityScore": record.readability_score,
        "keywordDensity": json.loads(record.keyword_density_json),
        "targetTone": record.target_tone,
        "createdAt": _iso(record.created_at),
    }


class DraftRepository:
    """Create, read, update and delete drafts and optimization sessions."""

    def __init__(self, session_factory: sessionmaker, list_limit: int = 50):
        self._session_factory = session_factory
        self.list_limit = list_limit

    @contextmanager
    def _session(self, action: str) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"{action} failed: {e}", exc_info=True)
            raise PersistenceError(f"{action} failed") from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _get_owned(self, db: Session, user_id: str, draft_id: str) -> Draft:
        draft = (
            db.query(Draft)
            .filter(Draft.id == draft_id, Draft.user_id == user_id)
            .one_or_none()
        )
        if draft is None:
            raise DraftNotFoundError(f"Draft {draft_id} not found")
        return draft

    # -- drafts -------------------------------------------------------------

    def list_drafts(self, user_id: str, limit: Optional[int] = None) -> list[dict[str, Any]]:
        """Return the user's drafts, most recently updated first."""
        limit = min(limit or self.list_limit, self.list_limit)
        with self._session("List drafts") as db:
            drafts = (
                db.query(Draft)
                .filter(Draft.user_id == user_id)
                .order_by(Draft.updated_at.desc(), Draft.created_at.desc())
                .limit(limit)
                .all()
            )
            return [draft_to_dict(d) for d in drafts]

    def get_draft(self, user_id: str, draft_id: str) -> dict[str, Any]:
        with self._session("Get draft") as db:
            return draft_to_dict(self._get_owned(db, user_id, draft_id))

    def create_draft(
        self,
        user_id: str,
        title: str,
        content: str,
        optimized_content: Optional[str] = None,
    ) -> dict[str, Any]:
        """Store a new draft with status 'draft'."""
        with self._session("Save draft") as db:
            draft = Draft(
                user_id=user_id,
                title=title or "",
                content=content or "",
                optimized_content=optimized_content,
                status="draft",
            )
            db.add(draft)
            db.flush()
            logger.info(f"Draft {draft.id} created for user {user_id}")
            return draft_to_dict(draft)

    def update_draft(
        self,
        user_id: str,
        draft_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        optimized_content: Optional[str] = None,
        status: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Update the given fields of a draft; None leaves a field unchanged.

        Raises:
            DraftNotFoundError: If the draft does not belong to the user.
            ValueError: If status is not a known draft status.
        """
        if status is not None and status not in DRAFT_STATUSES:
            raise ValueError(f"Unknown draft status: {status}")

        with self._session("Update draft") as db:
            draft = self._get_owned(db, user_id, draft_id)
            if title is not None:
                draft.title = title
            if content is not None:
                draft.content = content
            if optimized_content is not None:
                draft.optimized_content = optimized_content
            if status is not None:
                draft.status = status
            db.flush()
            return draft_to_dict(draft)

    def delete_draft(self, user_id: str, draft_id: str) -> None:
        """Delete a draft owned by the user."""
        with self._session("Delete draft") as db:
            draft = self._get_owned(db, user_id, draft_id)
            db.delete(draft)
            logger.info(f"Draft {draft_id} deleted for user {user_id}")

    # -- optimization sessions ---------------------------------------------

    def create_optimization_session(
        self,
        user_id: str,
        original_content: str,
        optimized_content: str,
        original_analysis: SEOAnalysis,
        optimized_analysis: SEOAnalysis,
        target_tone: str,
        draft_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Record a rewrite and both of its SEO analyses.

        A draft id that does not belong to the user is stored as None.
        """
        with self._session("Save optimization session") as db:
            if draft_id:
                owned = (
                    db.query(Draft.id)
                    .filter(Draft.id == draft_id, Draft.user_id == user_id)
                    .one_or_none()
                )
                if owned is None:
                    draft_id = None

            record = OptimizationSession(
                user_id=user_id,
                draft_id=draft_id,
                original_content=original_content,
                optimized_content=optimized_content,
                changes_json=json.dumps({
                    "original": original_analysis.to_dict(),
                    "optimized": optimized_analysis.to_dict(),
                }),
                seo_score=optimized_analysis.score,
                readability_score=optimized_analysis.readability.flesch_kincaid,
                keyword_density_json=json.dumps(optimized_analysis.keyword_density),
                target_tone=target_tone,
            )
            db.add(record)
            db.flush()
            logger.info(f"Optimization session {record.id} stored for user {user_id}")
            return session_to_dict(record)

    def list_optimization_sessions(self, user_id: str, draft_id: Optional[str] = None) -> list[dict[str, Any]]:
        """Return the user's optimization sessions, newest first."""
        with self._session("List optimization sessions") as db:
            query = db.query(OptimizationSession).filter(OptimizationSession.user_id == user_id)
            if draft_id:
                query = query.filter(OptimizationSession.draft_id == draft_id)
            records = (
                query.order_by(OptimizationSession.created_at.desc())
                .limit(self.list_limit)
                .all()
            )
            return [session_to_dict(r) for r in records]

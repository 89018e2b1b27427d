"""
database.py: SQLAlchemy models and session management.

Uses whatever DATABASE_URL points at (PostgreSQL in production) and
SQLite locally so you can develop without Postgres.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Base(DeclarativeBase):
    pass


class Draft(Base):
    __tablename__ = "drafts"

    id                 = Column(String(36), primary_key=True, default=new_id)
    user_id            = Column(String(255), nullable=False, index=True)
    title              = Column(String(255), nullable=False, default="")
    content            = Column(Text, nullable=False, default="")
    optimized_content  = Column(Text, nullable=True)
    status             = Column(String(50), nullable=False, default="draft")
    created_at         = Column(DateTime(timezone=True), default=_utcnow)
    updated_at         = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, index=True)


class OptimizationSession(Base):
    __tablename__ = "optimization_sessions"

    id                 = Column(String(36), primary_key=True, default=new_id)
    user_id            = Column(String(255), nullable=False, index=True)
    draft_id           = Column(String(36), ForeignKey("drafts.id", ondelete="SET NULL"), nullable=True, index=True)
    original_content   = Column(Text, nullable=False)
    optimized_content  = Column(Text, nullable=False)
    # Store JSON as text; avoids a JSON column type that behaves
    # differently across SQLite and Postgres.
    changes_json       = Column(Text, nullable=False)
    seo_score          = Column(Float, nullable=False)
    readability_score  = Column(Float, nullable=False)
    keyword_density_json = Column(Text, nullable=False)
    target_tone        = Column(String(50), nullable=False)
    created_at         = Column(DateTime(timezone=True), default=_utcnow, index=True)


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------

def create_db_engine(database_url: str) -> Engine:
    """Create an engine; in-memory SQLite shares one connection across threads."""
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)
    return create_engine(database_url, pool_pre_ping=True)  # drop stale connections before use


def init_db(engine: Engine) -> None:
    """Create all tables. Safe to call on every startup."""
    Base.metadata.create_all(bind=engine)
    logger.info(f"Database tables ready on {engine.url.render_as_string(hide_password=True)}")


def create_session_factory(database_url: str, engine: Optional[Engine] = None) -> sessionmaker:
    """Build a session factory bound to ``database_url`` and create tables."""
    engine = engine or create_db_engine(database_url)
    init_db(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

"""Database engine and session dependencies.

Saved searches, saved candidates and the credit ledger need DATABASE_URL.
Search, enrich and job routes work without it; their writes go through
get_optional_db and are skipped when no database is configured.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from merraine.config import settings


class Base(DeclarativeBase):
    pass


_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def get_engine() -> Engine:
    """Engine for DATABASE_URL, created on first use. Raises ValueError when unset."""
    global _engine
    if _engine is None:
        url = settings.database_url
        if not url:
            raise ValueError("DATABASE_URL not configured")
        if url.startswith("sqlite"):
            # Route handlers run on the threadpool
            _engine = create_engine(url, connect_args={"check_same_thread": False})
        else:
            _engine = create_engine(url, pool_pre_ping=True, pool_recycle=300)
    return _engine


def get_session_factory() -> sessionmaker:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def _session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    db = factory()
    try:
        yield db
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    """Session for routes whose main job is database work."""
    yield from _session_scope(get_session_factory())


def get_optional_db() -> Generator[Session | None, None, None]:
    """Session, or None when no database is configured."""
    try:
        factory = get_session_factory()
    except ValueError:
        yield None
        return
    yield from _session_scope(factory)


def init_db() -> None:
    """Create missing tables (startup). Alembic owns schema changes."""
    from merraine.db import tables  # noqa: F401

    Base.metadata.create_all(bind=get_engine())

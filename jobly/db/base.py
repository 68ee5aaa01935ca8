"""Database configuration, session management and the positional query runner."""

import logging
import re
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from jobly.config import settings
from jobly.errors import BadRequestError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# Create engine lazily to allow testing without database
_engine = None
_SessionLocal = None

_PLACEHOLDER = re.compile(r"\$(\d+)")


def create_db_engine(url: str, **kwargs) -> Engine:
    """Create an engine; SQLite connections get foreign key enforcement."""
    engine = create_engine(url, **kwargs)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def get_engine():
    """Get or create database engine."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise ValueError("DATABASE_URL not configured")
        _engine = create_db_engine(
            settings.database_url,
            pool_pre_ping=True,  # Test connections before use
            pool_recycle=300,  # Recycle connections after 5 minutes
        )
    return _engine


def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency for database sessions."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None):
    """Initialize database tables."""
    from jobly.db import tables  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> list[dict]:
    """Execute SQL using positional placeholders ($1, $2, ...) and return rows as dicts.

    Placeholders are bound strictly by position: ``$n`` receives ``values[n - 1]``.
    Statements without a result set return an empty list.
    """
    bound_sql = _PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql)
    params = {f"p{i}": value for i, value in enumerate(values, start=1)}
    logger.debug("SQL: %s | %d params", " ".join(sql.split()), len(params))

    result = db.execute(text(bound_sql), params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]


@contextmanager
def write_transaction(db: Session, conflict_message: str = "Conflicts with existing data"):
    """Commit the statements run inside the block, or roll them all back.

    Store-level unique and foreign key violations surface as BadRequestError.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Integrity violation: %s", e.orig)
        raise BadRequestError(conflict_message) from e
    except Exception:
        db.rollback()
        raise

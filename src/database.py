"""
Database engine and session management.

SQLite is used for development and tests, PostgreSQL in production. The
engine options differ per backend; everything else goes through the same
``SessionLocal`` factory and the ``get_db`` request dependency.
"""

import logging
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def engine_kwargs(database_url: str, echo: bool = False) -> Dict[str, Any]:
    """Backend-specific engine options."""
    kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}

    if database_url.startswith("sqlite"):
        # Request handlers run in a threadpool
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
    else:
        kwargs.update({
            "pool_size": 10,
            "max_overflow": 20,
            "pool_timeout": 30,
            "pool_recycle": 3600,
        })

    return kwargs


def build_engine(database_url: str, echo: bool = False) -> Engine:
    engine = create_engine(database_url, **engine_kwargs(database_url, echo))
    logger.info("Database engine created for %s", engine.url.get_backend_name())
    return engine


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
        expire_on_commit=False,
    )


engine = build_engine(settings.database_url, echo=settings.SQL_ECHO)
SessionLocal = build_session_factory(engine)


def init_db(bind: Engine = engine) -> None:
    """Create all tables that do not exist yet."""
    # Register the mapped classes on Base.metadata
    import src.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
    logger.info("Database tables ensured")


def get_db() -> Iterator[Session]:
    """Yield a session per request, closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

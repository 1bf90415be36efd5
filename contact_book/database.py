"""Database configuration and session management.

This module defines the declarative base, builds the SQLAlchemy engine and
session factory from explicit settings, and provides the database session
dependency for FastAPI routes.
"""

import logging

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .core import Settings
from .errors import ServiceUnavailable

logger = logging.getLogger(__name__)


Base = declarative_base()
"""Declarative base class for SQLAlchemy models."""


def database_url(settings: Settings) -> URL | None:
    """Datastore URL with ``DATABASE_KEY``, when given, as its password."""
    if not settings.database_configured:
        return None
    url = make_url(settings.DATABASE_URL)
    if settings.DATABASE_KEY:
        url = url.set(password=settings.DATABASE_KEY)
    return url


def create_db_engine(settings: Settings) -> Engine | None:
    """
    Build an engine for the configured datastore.

    In-memory SQLite URLs share one connection so every session sees the
    same data.

    Args:
        settings (Settings): Application settings.

    Returns:
        Engine | None: Engine, or ``None`` when no datastore is configured.
    """
    url = database_url(settings)
    if url is None:
        return None

    kwargs = {"future": True}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def create_session_factory(engine: Engine | None) -> sessionmaker | None:
    """Return a session factory bound to ``engine``, or ``None`` without one."""
    if engine is None:
        return None
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def create_tables(engine: Engine) -> None:
    """
    Create the ``contacts`` table if it does not exist yet.

    An unreachable datastore is logged and left for the endpoints to report.
    """
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception("Could not create tables on %s", engine.url)


def get_db(request: Request):
    """
    Provide a SQLAlchemy database session.

    This function is used as a FastAPI dependency. It yields a session from
    the factory stored on ``app.state`` and ensures it is closed after the
    request is completed.

    Raises:
        ServiceUnavailable: If no datastore is configured.
    """
    session_factory = request.app.state.session_factory
    if session_factory is None:
        raise ServiceUnavailable("Database not configured")

    db = session_factory()
    try:
        yield db
    finally:
        db.close()

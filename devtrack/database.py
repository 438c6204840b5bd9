"""Database engine construction and per-request sessions."""

import logging

from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from devtrack.config import Settings

# Import all models so SQLModel registers them
import devtrack.models  # noqa: F401

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> Engine:
    """Create an engine for the configured database URL."""
    url = settings.sqlalchemy_url
    kwargs: dict = {"echo": settings.debug}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def init_db(engine: Engine) -> None:
    """Create all tables; enable WAL mode for file-backed SQLite."""
    SQLModel.metadata.create_all(engine)

    if engine.dialect.name == "sqlite" and engine.url.database not in (None, "", ":memory:"):
        with engine.connect() as conn:
            conn.exec_driver_sql("PRAGMA journal_mode=WAL")
            conn.exec_driver_sql("PRAGMA synchronous=NORMAL")
            conn.exec_driver_sql("PRAGMA foreign_keys=ON")
            conn.commit()
    logger.info("Database ready: %s", engine.url.render_as_string(hide_password=True))


def get_session(request: Request):
    """FastAPI dependency: yields a session bound to the application's engine."""
    with Session(request.app.state.engine) as session:
        yield session

"""SQLModel engine and session management."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Build the pooled engine owned by one application instance.

    In-memory SQLite gets a single shared connection so every session sees
    the same database; every other backend uses the regular connection pool.
    """

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def init_db(engine: Engine) -> None:
    # Register table models on the shared metadata before creating tables.
    from service_request import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


@contextmanager
def get_session(engine: Engine) -> Iterator[Session]:
    """Open a session on ``engine`` for use with a ``with`` statement."""

    session = Session(engine)
    try:
        yield session
    finally:
        session.close()


__all__ = ["create_db_engine", "init_db", "get_session"]

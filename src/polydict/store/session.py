"""Engine and session lifecycle for the dictionary store.

There is no module-level client. Every load run or command opens its own
handle with :func:`open_store` and passes the resulting ``Session`` down to
the loader, grouper and builder calls::

    with open_store(settings.database_url) as session:
        report = run_migration(session, source_dir, languages)

The session is closed and the engine disposed on every exit path, including
exceptions raised by the caller.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base


def create_store_engine(database_url: str, *, create_schema: bool = True) -> Engine:
    """Build an engine for ``database_url`` and make sure the tables exist.

    SQLite connections are shared with FastAPI's worker threads, so the
    same-thread check is turned off. In-memory SQLite uses a single static
    connection; otherwise each new connection would see an empty database.
    """
    url = make_url(database_url)
    kwargs: dict[str, object] = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    if create_schema:
        Base.metadata.create_all(engine)
    return engine


def session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``.

    ``expire_on_commit`` is off so that rows committed by the builder can
    still be read after the per-group commit.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def open_store(database_url: str) -> Iterator[Session]:
    """Open a store handle scoped to one run; always released on exit."""
    engine = create_store_engine(database_url)
    session = session_factory(engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


__all__ = ["create_store_engine", "session_factory", "open_store"]

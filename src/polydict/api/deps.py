"""Request-scoped dependencies.

The engine lives on ``app.state`` (created by :func:`polydict.api.app.create_app`);
each request gets its own session, closed when the response is sent.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session


def get_session(request: Request) -> Iterator[Session]:
    factory = request.app.state.session_factory
    with factory() as session:
        yield session


SessionDep = Annotated[Session, Depends(get_session)]

__all__ = ["get_session", "SessionDep"]

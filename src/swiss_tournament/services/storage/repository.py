"""Base class running SQLModel session work off the event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from sqlmodel import Session

if TYPE_CHECKING:
    from sqlalchemy import Engine

T = TypeVar("T")


class AsyncRepository:
    """Run sync session functions on a worker thread for async callers.

    Sessions never expire loaded rows on commit, so returned objects stay
    readable after the session closes.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def _session(self) -> Session:
        return Session(self._engine, expire_on_commit=False)

    async def _read(self, fn: Callable[[Session], T]) -> T:
        """Run a query function in a fresh session."""

        def _run() -> T:
            with self._session() as session:
                return fn(session)

        return await asyncio.to_thread(_run)

    async def _write(self, fn: Callable[[Session], T]) -> T:
        """Run a function in one transaction: commit on return, roll back on error."""

        def _run() -> T:
            with self._session() as session, session.begin():
                return fn(session)

        return await asyncio.to_thread(_run)

"""SQLAlchemy adapter – SqlAlchemySessionFactory.

Connection and statement timeouts are configured through *engine_kwargs*
(``pool_timeout``, ``connect_args``...); a cycle that times out surfaces as
a failed refresh.
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine


class SqlAlchemySessionFactory:
    """Creates async SQLAlchemy sessions from an engine URL."""

    def __init__(self, database_url: str, **engine_kwargs: Any) -> None:
        self._engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(self._engine, class_=AsyncSession, expire_on_commit=False)

    @property
    def engine(self) -> Any:
        return self._engine

    def __call__(self) -> AsyncSession:
        return self._session_factory()

    async def dispose(self) -> None:
        """Release every pooled connection."""
        await self._engine.dispose()


__all__ = ["SqlAlchemySessionFactory"]

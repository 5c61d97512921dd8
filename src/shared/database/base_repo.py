import abc
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, TypeVar, Optional

from sqlalchemy import Executable
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.base_mapper import BaseEntityMapper
from src.shared.database.database import Database
from src.shared.exceptions import StoreFailure


TEntity = TypeVar("TEntity")
TModel = TypeVar("TModel")


class BaseRepository(abc.ABC, Generic[TEntity, TModel]):
    def __init__(self, db: Database, mapper: BaseEntityMapper[TModel, TEntity]):
        self.db = db
        self.mapper = mapper

    @asynccontextmanager
    async def _session(self, session: Optional[AsyncSession] = None) -> AsyncIterator[AsyncSession]:
        """
        Yield the caller's session when one is given, otherwise a short-lived read session.

        Passing the session of an open UnitOfWork makes the read part of that
        transaction; the unit of work stays responsible for closing it.
        """
        if session is not None:
            yield session
            return
        async with self.db.session_maker() as own_session:
            yield own_session

    async def find_one(self, statement: Executable, session: Optional[AsyncSession] = None) -> Optional[TModel]:
        try:
            async with self._session(session) as s:
                result = await s.execute(statement)
                entity = result.scalar_one_or_none()
                if entity is None:
                    return None
                return self.mapper.to_model(entity)
        except (SQLAlchemyError, OSError) as e:
            raise StoreFailure(f"Query failed: {e}") from e

    async def find_all(self, statement: Executable, session: Optional[AsyncSession] = None) -> list[TModel]:
        try:
            async with self._session(session) as s:
                result = await s.execute(statement)
                entities = list(result.scalars().all())
                return [self.mapper.to_model(entity) for entity in entities]
        except (SQLAlchemyError, OSError) as e:
            raise StoreFailure(f"Query failed: {e}") from e

    async def scalar(self, statement: Executable, session: Optional[AsyncSession] = None) -> Any:
        """Execute a query returning a single scalar value (counts, sums, existence checks)."""
        try:
            async with self._session(session) as s:
                result = await s.execute(statement)
                return result.scalar_one()
        except (SQLAlchemyError, OSError) as e:
            raise StoreFailure(f"Query failed: {e}") from e

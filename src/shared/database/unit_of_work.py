from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database
from src.shared.database.entity_mapper import EntityMapper
from src.shared.exceptions import StoreFailure


class UnitOfWork:
    """
    Transaction boundary for a single write operation.

    Every ``async with`` block opens a fresh session. The block commits when it
    exits normally and rolls back when any exception escapes it. Integrity
    violations propagate unchanged so services can translate them into domain
    errors; any other database error is raised as StoreFailure.
    """

    def __init__(
        self,
        db: Database,
        entity_mapper: EntityMapper,
    ) -> None:
        self.db = db
        self.session: AsyncSession
        self.entity_mapper = entity_mapper

    async def __aenter__(self):
        self.session = self.db.session_maker()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            if self.session:
                await self.session.close()

    def _map_to_entity(self, model_instance: Any):
        return self.entity_mapper.map_to_entity(model_instance)

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError:
            raise
        except (SQLAlchemyError, OSError) as e:
            raise StoreFailure(f"Flush failed: {e}") from e

    async def add(self, model_instance: Any):
        """Insert the model and return it with the identifier assigned by the store."""
        entity = self._map_to_entity(model_instance)
        self.session.add(entity)
        await self._flush()
        return self.entity_mapper.map_to_model(entity)

    async def update(self, model_instance: Any):
        entity = self._map_to_entity(model_instance)
        merged = await self.session.merge(entity)
        await self._flush()
        return self.entity_mapper.map_to_model(merged)

    async def delete(self, model_instance: Any):
        entity = self._map_to_entity(model_instance)
        identity = inspect(type(entity)).primary_key_from_instance(entity)
        persistent = await self.session.get(type(entity), tuple(identity))
        if persistent is not None:
            await self.session.delete(persistent)
            await self._flush()

    async def commit(self):
        try:
            await self.session.commit()
        except IntegrityError:
            await self.rollback()
            raise
        except (SQLAlchemyError, OSError) as e:
            await self.rollback()
            raise StoreFailure(f"Commit failed: {e}") from e

    async def rollback(self):
        await self.session.rollback()

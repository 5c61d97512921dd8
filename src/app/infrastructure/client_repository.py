from typing import Optional

from sqlalchemy import select, func, exists
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.domain.models import Client
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.mappers.client_mapper import ClientMapper


class ClientRepository(BaseRepository[ClientEntity, Client]):
    """Repository for Client operations."""

    def __init__(self, db: Database, mapper: ClientMapper):
        super().__init__(db, mapper)

    async def get_all(self, session: Optional[AsyncSession] = None) -> list[Client]:
        """Get every client."""
        return await self.find_all(select(ClientEntity).order_by(ClientEntity.id), session)

    async def get_by_id(self, client_id: int, session: Optional[AsyncSession] = None) -> Optional[Client]:
        """Get a client by ID."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.id == client_id), session
        )

    async def get_by_email(self, email: str, session: Optional[AsyncSession] = None) -> Optional[Client]:
        """Get a client by email."""
        return await self.find_one(
            select(ClientEntity).where(ClientEntity.email == email), session
        )

    async def find_by_name(self, name: str, session: Optional[AsyncSession] = None) -> list[Client]:
        """
        Find clients whose name contains the given text, ignoring case.

        LIKE wildcards in ``name`` match literally.

        Args:
            name: Substring to look for in client names

        Returns:
            Matching clients ordered by ID
        """
        stmt = (
            select(ClientEntity)
            .where(ClientEntity.name.icontains(name, autoescape=True))
            .order_by(ClientEntity.id)
        )
        return await self.find_all(stmt, session)

    async def exists_by_id(self, client_id: int, session: Optional[AsyncSession] = None) -> bool:
        return bool(await self.scalar(
            select(exists().where(ClientEntity.id == client_id)), session
        ))

    async def exists_by_email_excluding_id(
        self, email: str, client_id: int, session: Optional[AsyncSession] = None
    ) -> bool:
        """Check whether a client other than ``client_id`` already uses ``email``."""
        return bool(await self.scalar(
            select(exists().where(ClientEntity.email == email, ClientEntity.id != client_id)),
            session,
        ))

    async def count(self, session: Optional[AsyncSession] = None) -> int:
        return await self.scalar(select(func.count()).select_from(ClientEntity), session)

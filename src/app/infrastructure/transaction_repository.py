from datetime import date
from typing import Optional

from sqlalchemy import select, func, exists
from sqlalchemy.ext.asyncio import AsyncSession

from src.app.core.domain.models import Transaction
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.entities.transaction_entity import TransactionEntity
from src.app.infrastructure.mappers.transaction_mapper import TransactionMapper


class TransactionRepository(BaseRepository[TransactionEntity, Transaction]):
    """Repository for Transaction operations."""

    def __init__(self, db: Database, mapper: TransactionMapper):
        super().__init__(db, mapper)

    async def get_all(self) -> list[Transaction]:
        return await self.find_all(select(TransactionEntity).order_by(TransactionEntity.id))

    async def get_by_id(self, transaction_id: int, session: Optional[AsyncSession] = None) -> Optional[Transaction]:
        """Get a transaction by ID."""
        return await self.find_one(
            select(TransactionEntity).where(TransactionEntity.id == transaction_id), session
        )

    async def exists_by_id(self, transaction_id: int, session: Optional[AsyncSession] = None) -> bool:
        return bool(await self.scalar(
            select(exists().where(TransactionEntity.id == transaction_id)), session
        ))

    async def find_by_client(self, client_id: int) -> list[Transaction]:
        """Get all transactions owned by a client."""
        return await self.find_all(
            select(TransactionEntity)
            .where(TransactionEntity.client_id == client_id)
            .order_by(TransactionEntity.id)
        )

    async def find_by_date(self, on: date) -> list[Transaction]:
        """Get all transactions dated exactly ``on``."""
        return await self.find_all(
            select(TransactionEntity)
            .where(TransactionEntity.date == on)
            .order_by(TransactionEntity.id)
        )

    async def find_by_date_range(self, start: date, end: date) -> list[Transaction]:
        """Get all transactions dated between ``start`` and ``end``, both inclusive."""
        return await self.find_all(
            select(TransactionEntity)
            .where(TransactionEntity.date.between(start, end))
            .order_by(TransactionEntity.id)
        )

    async def find_by_client_and_date_range(
        self, client_id: int, start: date, end: date
    ) -> list[Transaction]:
        return await self.find_all(
            select(TransactionEntity)
            .where(
                TransactionEntity.client_id == client_id,
                TransactionEntity.date.between(start, end),
            )
            .order_by(TransactionEntity.id)
        )

    async def sum_amount_by_client(self, client_id: int) -> float:
        """
        Sum the amounts of all transactions owned by a client.

        COALESCE makes a client without transactions sum to zero instead of NULL.
        """
        total = await self.scalar(
            select(func.coalesce(func.sum(TransactionEntity.amount), 0.0))
            .where(TransactionEntity.client_id == client_id)
        )
        return float(total)

    async def count_by_client(self, client_id: int) -> int:
        return await self.scalar(
            select(func.count())
            .select_from(TransactionEntity)
            .where(TransactionEntity.client_id == client_id)
        )

    async def count(self) -> int:
        return await self.scalar(select(func.count()).select_from(TransactionEntity))

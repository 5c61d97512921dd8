"""Transaction service enforcing client ownership rules around persistence."""
import logging
from datetime import date
from typing import Optional

from sqlalchemy.exc import IntegrityError

from src.app.core.domain.models import Transaction
from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.transaction_repository import TransactionRepository
from src.client.schemas import CreateTransactionRequest, UpdateTransactionRequest
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import EntityNotFound, ReferencedEntityNotFound

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for handling Transaction business logic."""

    def __init__(
        self,
        client_repository: ClientRepository,
        transaction_repository: TransactionRepository,
        unit_of_work: UnitOfWork,
    ):
        """
        Initialize the transaction service.

        Args:
            client_repository: Repository used to validate client references
            transaction_repository: Repository for transaction operations
            unit_of_work: Unit of work for database transactions
        """
        self.client_repository = client_repository
        self.transaction_repository = transaction_repository
        self.unit_of_work = unit_of_work

    async def list_transactions(self) -> list[Transaction]:
        logger.info("Listing all transactions")
        return await self.transaction_repository.get_all()

    async def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get a transaction by ID. Returns None when it does not exist."""
        logger.info("Fetching transaction %s", transaction_id)
        return await self.transaction_repository.get_by_id(transaction_id)

    async def find_by_client(self, client_id: int) -> list[Transaction]:
        logger.info("Fetching transactions of client %s", client_id)
        return await self.transaction_repository.find_by_client(client_id)

    async def find_by_date(self, on: date) -> list[Transaction]:
        logger.info("Fetching transactions dated %s", on)
        return await self.transaction_repository.find_by_date(on)

    async def find_by_date_range(self, start: date, end: date) -> list[Transaction]:
        logger.info("Fetching transactions between %s and %s", start, end)
        return await self.transaction_repository.find_by_date_range(start, end)

    async def find_by_client_and_date_range(
        self, client_id: int, start: date, end: date
    ) -> list[Transaction]:
        logger.info("Fetching transactions of client %s between %s and %s", client_id, start, end)
        return await self.transaction_repository.find_by_client_and_date_range(client_id, start, end)

    async def create_transaction(self, request: CreateTransactionRequest) -> Transaction:
        """
        Create a transaction for an existing client.

        The date defaults to today when the request leaves it out.

        Args:
            request: Amount, optional date and owning client ID

        Returns:
            The persisted transaction with its assigned ID

        Raises:
            ReferencedEntityNotFound: If the client does not exist
        """
        logger.info("Creating transaction of %s for client %s", request.amount, request.client_id)
        transaction_date = request.date
        if transaction_date is None:
            transaction_date = date.today()
            logger.info("No date given, using current date %s", transaction_date)

        transaction = Transaction(
            amount=request.amount,
            date=transaction_date,
            client_id=request.client_id,
        )

        try:
            async with self.unit_of_work:
                await self._ensure_client_exists(request.client_id)
                created = await self.unit_of_work.add(transaction)
        except IntegrityError as e:
            # Client deleted between the check and the insert
            raise ReferencedEntityNotFound("Transaction", "Client", request.client_id) from e

        logger.info("Transaction created with ID %s", created.id)
        return created

    async def update_transaction(
        self, transaction_id: int, request: UpdateTransactionRequest
    ) -> Transaction:
        """
        Overwrite a transaction's amount, date and client reference.

        The client reference is validated only when it changes. A request
        without a date keeps the stored date.

        Raises:
            EntityNotFound: If the transaction does not exist
            ReferencedEntityNotFound: If the new client does not exist
        """
        logger.info("Updating transaction %s", transaction_id)
        try:
            async with self.unit_of_work:
                existing = await self.transaction_repository.get_by_id(
                    transaction_id, self.unit_of_work.session
                )
                if existing is None:
                    logger.warning("Transaction %s not found for update", transaction_id)
                    raise EntityNotFound("Transaction", transaction_id)

                if existing.client_id != request.client_id:
                    await self._ensure_client_exists(request.client_id)

                updated = await self.unit_of_work.update(
                    existing.model_copy(update={
                        "amount": request.amount,
                        "date": request.date if request.date is not None else existing.date,
                        "client_id": request.client_id,
                    })
                )
        except IntegrityError as e:
            raise ReferencedEntityNotFound("Transaction", "Client", request.client_id) from e

        logger.info("Transaction %s updated", transaction_id)
        return updated

    async def delete_transaction(self, transaction_id: int) -> None:
        """
        Delete a transaction.

        Raises:
            EntityNotFound: If the transaction does not exist
        """
        logger.info("Deleting transaction %s", transaction_id)
        async with self.unit_of_work:
            existing = await self.transaction_repository.get_by_id(
                transaction_id, self.unit_of_work.session
            )
            if existing is None:
                logger.warning("Transaction %s not found for deletion", transaction_id)
                raise EntityNotFound("Transaction", transaction_id)
            await self.unit_of_work.delete(existing)
        logger.info("Transaction %s deleted", transaction_id)

    async def total_for_client(self, client_id: int) -> float:
        """Sum of the client's transaction amounts, 0.0 when there are none."""
        logger.info("Computing transaction total of client %s", client_id)
        return await self.transaction_repository.sum_amount_by_client(client_id)

    async def count_for_client(self, client_id: int) -> int:
        logger.info("Counting transactions of client %s", client_id)
        return await self.transaction_repository.count_by_client(client_id)

    async def transaction_exists(self, transaction_id: int) -> bool:
        return await self.transaction_repository.exists_by_id(transaction_id)

    async def count_transactions(self) -> int:
        return await self.transaction_repository.count()

    async def _ensure_client_exists(self, client_id: int) -> None:
        if not await self.client_repository.exists_by_id(client_id, self.unit_of_work.session):
            logger.warning("Transaction references missing client %s", client_id)
            raise ReferencedEntityNotFound("Transaction", "Client", client_id)

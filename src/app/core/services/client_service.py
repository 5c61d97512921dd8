import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError

from src.app.core.domain.models import Client
from src.shared.database.unit_of_work import UnitOfWork
from src.client.schemas import CreateClientRequest, UpdateClientRequest
from src.app.infrastructure.client_repository import ClientRepository
from src.shared.exceptions import EntityNotFound, ConflictingEntityFound

logger = logging.getLogger(__name__)


class ClientService:
    """Service for handling Client business logic."""

    def __init__(self, repository: ClientRepository, unit_of_work: UnitOfWork):
        self.repository = repository
        self.unit_of_work = unit_of_work

    async def list_clients(self) -> list[Client]:
        """List every client."""
        logger.info("Listing all clients")
        return await self.repository.get_all()

    async def get_client(self, client_id: int) -> Optional[Client]:
        """Get a client by ID. Returns None when it does not exist."""
        logger.info("Fetching client %s", client_id)
        return await self.repository.get_by_id(client_id)

    async def get_client_by_email(self, email: str) -> Optional[Client]:
        """Get a client by email. Returns None when it does not exist."""
        logger.info("Fetching client with email %s", email)
        return await self.repository.get_by_email(email)

    async def find_by_name(self, name: str) -> list[Client]:
        """Find clients whose name contains ``name``, ignoring case."""
        logger.info("Searching clients with name containing '%s'", name)
        return await self.repository.find_by_name(name)

    async def create_client(self, request: CreateClientRequest) -> Client:
        """
        Create a new client.

        Raises:
            ConflictingEntityFound: If another client already uses the email
        """
        logger.info("Creating client '%s'", request.name)
        client = Client(name=request.name, email=request.email, phone=request.phone)

        # The unique index on email catches writers racing past the check
        try:
            async with self.unit_of_work:
                session = self.unit_of_work.session
                if await self.repository.get_by_email(str(client.email), session) is not None:
                    logger.warning("Rejected client with duplicate email %s", client.email)
                    raise ConflictingEntityFound("Client", "email", client.email)
                created = await self.unit_of_work.add(client)
        except IntegrityError as e:
            logger.warning("Rejected client with duplicate email %s", client.email)
            raise ConflictingEntityFound("Client", "email", client.email) from e

        logger.info("Client created with ID %s", created.id)
        return created

    async def update_client(self, client_id: int, request: UpdateClientRequest) -> Client:
        """
        Overwrite a client's name, email and phone.

        Raises:
            EntityNotFound: If the client does not exist
            ConflictingEntityFound: If the new email belongs to another client
        """
        logger.info("Updating client %s", client_id)
        try:
            async with self.unit_of_work:
                session = self.unit_of_work.session
                existing = await self.repository.get_by_id(client_id, session)
                if existing is None:
                    logger.warning("Client %s not found for update", client_id)
                    raise EntityNotFound("Client", client_id)

                new_email = str(request.email)
                if existing.email != new_email and await self.repository.exists_by_email_excluding_id(
                    new_email, client_id, session
                ):
                    logger.warning("Rejected update of client %s to duplicate email %s", client_id, new_email)
                    raise ConflictingEntityFound("Client", "email", new_email)

                updated = await self.unit_of_work.update(
                    existing.model_copy(update={"name": request.name, "email": new_email, "phone": request.phone})
                )
        except IntegrityError as e:
            logger.warning("Rejected update of client %s to duplicate email %s", client_id, request.email)
            raise ConflictingEntityFound("Client", "email", request.email) from e

        logger.info("Client %s updated", client_id)
        return updated

    async def delete_client(self, client_id: int) -> None:
        """
        Delete a client together with all of its transactions.

        Raises:
            EntityNotFound: If the client does not exist
        """
        logger.info("Deleting client %s", client_id)
        async with self.unit_of_work:
            existing = await self.repository.get_by_id(client_id, self.unit_of_work.session)
            if existing is None:
                logger.warning("Client %s not found for deletion", client_id)
                raise EntityNotFound("Client", client_id)
            await self.unit_of_work.delete(existing)
        logger.info("Client %s deleted", client_id)

    async def client_exists(self, client_id: int) -> bool:
        return await self.repository.exists_by_id(client_id)

    async def count_clients(self) -> int:
        return await self.repository.count()

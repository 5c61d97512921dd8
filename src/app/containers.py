"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.database.entity_mapper import EntityMapper

from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.transaction_mapper import TransactionMapper

from src.app.infrastructure.client_repository import ClientRepository
from src.app.infrastructure.transaction_repository import TransactionRepository

from src.app.core.services.client_service import ClientService
from src.app.core.services.transaction_service import TransactionService

from src.app.core.domain.models import Client, Transaction


API_MODULES = [
    "src.app.api.v1.clients",
    "src.app.api.v1.transactions",
    "src.app.api.v1.health",
]


def create_entity_mapper(
    client_mapper: ClientMapper,
    transaction_mapper: TransactionMapper,
) -> EntityMapper:
    """Factory function to create EntityMapper with proper mappings."""
    return EntityMapper(
        entity_mappings={
            Client: client_mapper,
            Transaction: transaction_mapper,
        }
    )


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    wiring_config = containers.WiringConfiguration(modules=API_MODULES)

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    client_mapper = providers.Singleton(ClientMapper)
    transaction_mapper = providers.Singleton(TransactionMapper)

    entity_mapper = providers.Singleton(
        create_entity_mapper,
        client_mapper=client_mapper,
        transaction_mapper=transaction_mapper,
    )

    # =========================================================================
    # SINGLETON - Database (shared connection pool)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
        echo=config.provided.database.echo,
        pool_pre_ping=config.provided.database.pool_pre_ping,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # FACTORIES - Repositories (per-request, share database singleton)
    # =========================================================================
    client_repository = providers.Factory(
        ClientRepository,
        db=database,
        mapper=client_mapper,
    )

    transaction_repository = providers.Factory(
        TransactionRepository,
        db=database,
        mapper=transaction_mapper,
    )

    # =========================================================================
    # FACTORY - Unit of Work (per-request)
    # =========================================================================
    unit_of_work = providers.Factory(
        UnitOfWork,
        db=database,
        entity_mapper=entity_mapper,
    )

    # =========================================================================
    # FACTORIES - Services
    # =========================================================================
    client_service = providers.Factory(
        ClientService,
        repository=client_repository,
        unit_of_work=unit_of_work,
    )

    transaction_service = providers.Factory(
        TransactionService,
        client_repository=client_repository,
        transaction_repository=transaction_repository,
        unit_of_work=unit_of_work,
    )

"""Infrastructure mappers for converting between domain models and database entities."""
from src.app.infrastructure.mappers.client_mapper import ClientMapper
from src.app.infrastructure.mappers.transaction_mapper import TransactionMapper

__all__ = [
    "ClientMapper",
    "TransactionMapper",
]

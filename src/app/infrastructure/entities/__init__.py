"""Database entities for the infrastructure layer."""
from src.app.infrastructure.entities.client_entity import ClientEntity
from src.app.infrastructure.entities.transaction_entity import TransactionEntity

__all__ = [
    "ClientEntity",
    "TransactionEntity",
]

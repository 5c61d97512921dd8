from src.shared.database.base_mapper import BaseEntityMapper
from src.app.core.domain.models import Transaction
from src.app.infrastructure.entities.transaction_entity import TransactionEntity


class TransactionMapper(BaseEntityMapper[Transaction, TransactionEntity]):
    """Mapper for converting between Transaction domain model and TransactionEntity."""

    entity_type = TransactionEntity

    @staticmethod
    def to_entity(model_instance: Transaction) -> TransactionEntity:
        return TransactionEntity(
            id=model_instance.id,
            amount=model_instance.amount,
            date=model_instance.date,
            client_id=model_instance.client_id,
        )

    @staticmethod
    def to_model(entity: TransactionEntity) -> Transaction:
        return Transaction(
            id=entity.id,
            amount=entity.amount,
            date=entity.date,
            client_id=entity.client_id,
        )

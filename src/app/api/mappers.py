"""Mappers for converting between domain models and API schemas."""
from src.app.core.domain.models import Client, Transaction
from src.client.schemas import ClientResponse, TransactionResponse


def to_client_response(client: Client) -> ClientResponse:
    """
    Convert a Client domain model to ClientResponse API schema.

    Args:
        client: Domain model

    Returns:
        API response schema
    """
    return ClientResponse(
        id=client.id,
        name=client.name,
        email=client.email,
        phone=client.phone,
    )


def to_transaction_response(transaction: Transaction) -> TransactionResponse:
    """
    Convert a Transaction domain model to TransactionResponse API schema.

    Args:
        transaction: Domain model

    Returns:
        API response schema
    """
    return TransactionResponse(
        id=transaction.id,
        amount=transaction.amount,
        date=transaction.date,
        client_id=transaction.client_id,
    )

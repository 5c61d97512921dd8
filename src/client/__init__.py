"""Python SDK for the DimDim API."""
from src.client.dimdim_client import DimDimClient
from src.client.schemas import (
    CreateClientRequest,
    UpdateClientRequest,
    ClientResponse,
    CreateTransactionRequest,
    UpdateTransactionRequest,
    TransactionResponse,
    CountResponse,
    ClientTotalResponse,
)

__all__ = [
    "DimDimClient",
    "CreateClientRequest",
    "UpdateClientRequest",
    "ClientResponse",
    "CreateTransactionRequest",
    "UpdateTransactionRequest",
    "TransactionResponse",
    "CountResponse",
    "ClientTotalResponse",
]

"""DimDim HTTP Client for consuming the DimDim API."""
from datetime import date
from typing import Optional
from httpx import AsyncClient, Response

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


class DimDimClient:
    """HTTP client for interacting with the DimDim API."""

    def __init__(self, base_url: str, client: Optional[AsyncClient] = None):
        """
        Initialize the DimDim client.

        Args:
            base_url: Base URL of the DimDim API (e.g., "http://localhost:8000")
            client: Optional httpx.AsyncClient instance. If not provided, a new one will be created.
        """
        self.base_url = base_url.rstrip("/")
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        """Async context manager entry."""
        if self._owns_client:
            self._client = AsyncClient(base_url=self.base_url)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self._owns_client and self._client:
            await self._client.aclose()

    @property
    def client(self) -> AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("Client not initialized. Use async context manager.")
        return self._client

    # =========================================================================
    # Clients
    # =========================================================================

    async def create_client(self, request: CreateClientRequest) -> ClientResponse:
        """
        Create a new client.

        Args:
            request: Client creation request

        Returns:
            Created client response

        Raises:
            httpx.HTTPStatusError: If the request fails (400 on duplicate email)
        """
        response: Response = await self.client.post(
            "/api/v1/clients/",
            json=request.model_dump(mode="json")
        )
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def get_client(self, client_id: int) -> ClientResponse:
        """
        Get a client by ID.

        Raises:
            httpx.HTTPStatusError: If the request fails (e.g., 404 if not found)
        """
        response: Response = await self.client.get(f"/api/v1/clients/{client_id}")
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def list_clients(self) -> list[ClientResponse]:
        response: Response = await self.client.get("/api/v1/clients/")
        response.raise_for_status()
        return [ClientResponse(**client) for client in response.json()]

    async def search_clients(self, name: str) -> list[ClientResponse]:
        """Find clients whose name contains ``name``, ignoring case."""
        response: Response = await self.client.get("/api/v1/clients/search", params={"name": name})
        response.raise_for_status()
        return [ClientResponse(**client) for client in response.json()]

    async def update_client(self, client_id: int, request: UpdateClientRequest) -> ClientResponse:
        """
        Replace a client's name, email and phone.

        Raises:
            httpx.HTTPStatusError: 404 if the client does not exist, 400 on duplicate email
        """
        response: Response = await self.client.put(
            f"/api/v1/clients/{client_id}",
            json=request.model_dump(mode="json"),
        )
        response.raise_for_status()
        return ClientResponse(**response.json())

    async def delete_client(self, client_id: int) -> None:
        response: Response = await self.client.delete(f"/api/v1/clients/{client_id}")
        response.raise_for_status()

    async def count_clients(self) -> int:
        response: Response = await self.client.get("/api/v1/clients/count")
        response.raise_for_status()
        return CountResponse(**response.json()).count

    # =========================================================================
    # Transactions
    # =========================================================================

    async def create_transaction(self, request: CreateTransactionRequest) -> TransactionResponse:
        """
        Create a transaction. The server fills in today's date when none is given.

        Raises:
            httpx.HTTPStatusError: 400 if the client does not exist
        """
        response: Response = await self.client.post(
            "/api/v1/transactions/",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        response.raise_for_status()
        return TransactionResponse(**response.json())

    async def get_transaction(self, transaction_id: int) -> TransactionResponse:
        response: Response = await self.client.get(f"/api/v1/transactions/{transaction_id}")
        response.raise_for_status()
        return TransactionResponse(**response.json())

    async def list_transactions(self) -> list[TransactionResponse]:
        response: Response = await self.client.get("/api/v1/transactions/")
        response.raise_for_status()
        return [TransactionResponse(**t) for t in response.json()]

    async def list_transactions_by_date(self, on: date) -> list[TransactionResponse]:
        response: Response = await self.client.get(
            "/api/v1/transactions/date", params={"date": on.isoformat()}
        )
        response.raise_for_status()
        return [TransactionResponse(**t) for t in response.json()]

    async def list_transactions_by_period(self, start: date, end: date) -> list[TransactionResponse]:
        response: Response = await self.client.get(
            "/api/v1/transactions/period",
            params={"start": start.isoformat(), "end": end.isoformat()},
        )
        response.raise_for_status()
        return [TransactionResponse(**t) for t in response.json()]

    async def update_transaction(
        self, transaction_id: int, request: UpdateTransactionRequest
    ) -> TransactionResponse:
        """
        Update a transaction.

        Raises:
            httpx.HTTPStatusError: 404 if the transaction does not exist, 400 if the client does not
        """
        response: Response = await self.client.put(
            f"/api/v1/transactions/{transaction_id}",
            json=request.model_dump(mode="json", exclude_none=True),
        )
        response.raise_for_status()
        return TransactionResponse(**response.json())

    async def delete_transaction(self, transaction_id: int) -> None:
        response: Response = await self.client.delete(f"/api/v1/transactions/{transaction_id}")
        response.raise_for_status()

    async def count_transactions(self) -> int:
        response: Response = await self.client.get("/api/v1/transactions/count")
        response.raise_for_status()
        return CountResponse(**response.json()).count

    async def list_client_transactions(
        self,
        client_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[TransactionResponse]:
        """
        List a client's transactions, optionally limited to a period.

        Args:
            client_id: ID of the client
            start: First day of the period, inclusive (requires ``end``)
            end: Last day of the period, inclusive (requires ``start``)
        """
        params = {}
        if start is not None:
            params["start"] = start.isoformat()
        if end is not None:
            params["end"] = end.isoformat()
        response: Response = await self.client.get(
            f"/api/v1/clients/{client_id}/transactions/", params=params
        )
        response.raise_for_status()
        return [TransactionResponse(**t) for t in response.json()]

    async def get_client_total(self, client_id: int) -> float:
        response: Response = await self.client.get(f"/api/v1/clients/{client_id}/transactions/total")
        response.raise_for_status()
        return ClientTotalResponse(**response.json()).total

    async def count_client_transactions(self, client_id: int) -> int:
        response: Response = await self.client.get(f"/api/v1/clients/{client_id}/transactions/count")
        response.raise_for_status()
        return CountResponse(**response.json()).count

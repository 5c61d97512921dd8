from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.services.transaction_service import TransactionService
from src.client.schemas import (
    CreateTransactionRequest,
    UpdateTransactionRequest,
    TransactionResponse,
    CountResponse,
    ClientTotalResponse,
)
from src.app.api.mappers import to_transaction_response
from src.shared.exceptions import EntityNotFound, ReferencedEntityNotFound
from src.app.logging import get_logger

router = APIRouter(prefix="/transactions", tags=["transactions"])
client_transactions_router = APIRouter(prefix="/clients/{client_id}/transactions", tags=["transactions"])
logger = get_logger(__name__)


@router.get("/", response_model=list[TransactionResponse])
@inject
async def list_transactions(
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> list[TransactionResponse]:
    """List all transactions."""
    transactions = await service.list_transactions()
    logger.info("Returning %d transactions", len(transactions))
    return [to_transaction_response(t) for t in transactions]


@router.get("/date", response_model=list[TransactionResponse])
@inject
async def list_transactions_by_date(
    on: date = Query(..., alias="date", description="ISO date, e.g. 2024-05-31"),
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> list[TransactionResponse]:
    """List transactions dated exactly on the given day."""
    transactions = await service.find_by_date(on)
    return [to_transaction_response(t) for t in transactions]


@router.get("/period", response_model=list[TransactionResponse])
@inject
async def list_transactions_by_period(
    start: date = Query(..., description="First day of the period, inclusive"),
    end: date = Query(..., description="Last day of the period, inclusive"),
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> list[TransactionResponse]:
    """List transactions dated within a period."""
    transactions = await service.find_by_date_range(start, end)
    return [to_transaction_response(t) for t in transactions]


@router.get("/count", response_model=CountResponse)
@inject
async def count_transactions(
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> CountResponse:
    """Count all transactions."""
    return CountResponse(count=await service.count_transactions())


@router.get("/{transaction_id}", response_model=TransactionResponse)
@inject
async def get_transaction(
    transaction_id: int,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> TransactionResponse:
    """Get a transaction by ID."""
    transaction = await service.get_transaction(transaction_id)
    if transaction is None:
        logger.error(f"Transaction not found: {transaction_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Transaction with ID {transaction_id} not found",
        )
    return to_transaction_response(transaction)


@router.post("/", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_transaction(
    request: CreateTransactionRequest,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> TransactionResponse:
    """
    Create a transaction for an existing client.

    Args:
        request: Amount, optional date (defaults to today) and client ID
        service: Transaction service (injected)

    Returns:
        TransactionResponse with the stored transaction

    Raises:
        HTTPException 400: If the client does not exist
    """
    try:
        transaction = await service.create_transaction(request)
        return to_transaction_response(transaction)
    except ReferencedEntityNotFound as e:
        logger.error(f"Failed to create transaction: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{transaction_id}", response_model=TransactionResponse)
@inject
async def update_transaction(
    transaction_id: int,
    request: UpdateTransactionRequest,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> TransactionResponse:
    """
    Update a transaction's amount, date and client.

    Raises:
        HTTPException 404: If the transaction does not exist
        HTTPException 400: If the new client does not exist
    """
    try:
        transaction = await service.update_transaction(transaction_id, request)
        return to_transaction_response(transaction)
    except EntityNotFound as e:
        logger.error(f"Transaction not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ReferencedEntityNotFound as e:
        logger.error(f"Failed to update transaction: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_transaction(
    transaction_id: int,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> Response:
    """Delete a transaction."""
    try:
        await service.delete_transaction(transaction_id)
    except EntityNotFound as e:
        logger.error(f"Transaction not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@client_transactions_router.get("/", response_model=list[TransactionResponse])
@inject
async def list_client_transactions(
    client_id: int,
    start: date | None = Query(default=None, description="First day of the period, inclusive"),
    end: date | None = Query(default=None, description="Last day of the period, inclusive"),
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> list[TransactionResponse]:
    """
    List a client's transactions, optionally restricted to a period.

    Both ``start`` and ``end`` must be given to filter by period.
    """
    if (start is None) != (end is None):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both start and end are required to filter by period",
        )
    if start is not None and end is not None:
        transactions = await service.find_by_client_and_date_range(client_id, start, end)
    else:
        transactions = await service.find_by_client(client_id)
    return [to_transaction_response(t) for t in transactions]


@client_transactions_router.get("/total", response_model=ClientTotalResponse)
@inject
async def get_client_total(
    client_id: int,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> ClientTotalResponse:
    """Sum of a client's transaction amounts."""
    total = await service.total_for_client(client_id)
    return ClientTotalResponse(client_id=client_id, total=total)


@client_transactions_router.get("/count", response_model=CountResponse)
@inject
async def count_client_transactions(
    client_id: int,
    service: TransactionService = Depends(Provide[Container.transaction_service]),
) -> CountResponse:
    """Count a client's transactions."""
    return CountResponse(count=await service.count_for_client(client_id))

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.services.client_service import ClientService
from src.client.schemas import CreateClientRequest, UpdateClientRequest, ClientResponse, CountResponse
from src.app.api.mappers import to_client_response
from src.shared.exceptions import EntityNotFound, ConflictingEntityFound
from src.app.logging import get_logger

router = APIRouter(prefix="/clients", tags=["clients"])
logger = get_logger(__name__)


@router.get("/", response_model=list[ClientResponse])
@inject
async def list_clients(
    service: ClientService = Depends(Provide[Container.client_service]),
) -> list[ClientResponse]:
    """List all clients."""
    clients = await service.list_clients()
    logger.info("Returning %d clients", len(clients))
    return [to_client_response(client) for client in clients]


@router.get("/search", response_model=list[ClientResponse])
@inject
async def search_clients(
    name: str = Query(..., min_length=1, description="Text the client name must contain"),
    service: ClientService = Depends(Provide[Container.client_service]),
) -> list[ClientResponse]:
    """Find clients by name, case-insensitive substring match."""
    clients = await service.find_by_name(name)
    return [to_client_response(client) for client in clients]


@router.get("/count", response_model=CountResponse)
@inject
async def count_clients(
    service: ClientService = Depends(Provide[Container.client_service]),
) -> CountResponse:
    """Count all clients."""
    return CountResponse(count=await service.count_clients())


@router.get("/{client_id}", response_model=ClientResponse)
@inject
async def get_client(
    client_id: int,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """Get a client by ID."""
    client = await service.get_client(client_id)
    if client is None:
        logger.error(f"Client not found: {client_id}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Client with ID {client_id} not found")
    return to_client_response(client)


@router.post("/", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
@inject
async def create_client(
    request: CreateClientRequest,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """Create a new client."""
    try:
        client = await service.create_client(request)
        return to_client_response(client)
    except ConflictingEntityFound as e:
        logger.error(f"Failed to create client: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{client_id}", response_model=ClientResponse)
@inject
async def update_client(
    client_id: int,
    request: UpdateClientRequest,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> ClientResponse:
    """Replace a client's name, email and phone."""
    try:
        client = await service.update_client(client_id, request)
        return to_client_response(client)
    except EntityNotFound as e:
        logger.error(f"Client not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ConflictingEntityFound as e:
        logger.error(f"Failed to update client: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_client(
    client_id: int,
    service: ClientService = Depends(Provide[Container.client_service]),
) -> Response:
    """Delete a client and all of its transactions."""
    try:
        await service.delete_client(client_id)
    except EntityNotFound as e:
        logger.error(f"Client not found: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from datetime import datetime, UTC

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from dependency_injector.wiring import Provide, inject
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.app.containers import Container
from src.app.config import Settings
from src.shared.database.database import Database
from src.app.logging import get_logger

router = APIRouter(prefix="/health", tags=["health"])
logger = get_logger(__name__)


async def _database_up(db: Database) -> bool:
    try:
        async with db.session_maker() as session:
            await session.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Health check - database unreachable: {e}")
        return False


@router.get("")
@inject
async def health(
    db: Database = Depends(Provide[Container.database]),
    config: Settings = Depends(Provide[Container.config]),
) -> JSONResponse:
    """Report application and database status. 503 when the database is down."""
    database_up = await _database_up(db)
    body = {
        "status": "UP" if database_up else "DOWN",
        "database": "UP" if database_up else "DOWN",
        "application": config.app_name,
        "version": config.app_version,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    code = status.HTTP_200_OK if database_up else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body)


@router.get("/ready")
@inject
async def readiness(
    db: Database = Depends(Provide[Container.database]),
) -> JSONResponse:
    """Whether the application can serve requests."""
    if await _database_up(db):
        return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "READY"})
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "NOT_READY"}
    )


@router.get("/live")
async def liveness() -> dict:
    """Whether the process is alive. Never touches the database."""
    return {"status": "ALIVE", "timestamp": datetime.now(UTC).isoformat()}

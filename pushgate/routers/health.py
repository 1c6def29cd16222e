"""Health check endpoint verifying the project registry database."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pushgate.config import settings
from pushgate.db.session import get_db_session
from pushgate.schemas.health import HealthResponse

router = APIRouter()

DBSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("/healthz", response_model=HealthResponse)
async def healthz(db: DBSession) -> HealthResponse:
    """Report whether the service can reach the registry database.

    Failures propagate and surface as a 500 from the global handler.
    """
    await db.execute(text("SELECT 1"))
    return HealthResponse(service=settings.app_name, status="ok", database="connected")

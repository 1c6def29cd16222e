"""Pydantic response model for the health check endpoint."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Body of ``GET /healthz``."""

    service: str
    status: str
    database: str

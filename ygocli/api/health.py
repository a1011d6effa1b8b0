"""
Health check endpoint.

Liveness only: the card database and the backing documents are not checked.
"""

from datetime import UTC, datetime

from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness check. Returns ok if the service is running."""
    return HealthResponse(status="ok", timestamp=datetime.now(UTC))

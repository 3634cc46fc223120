"""Health check endpoint."""

from fastapi import APIRouter

from taskhub.api.models.health import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. Does not touch the database."""
    return HealthResponse()

"""Health Route — liveness endpoint.

Invariants:
    - GET /api/health always returns 200 while the process is up
    - The reported port is the configured SERVER_PORT (default 5000)
"""

from fastapi import APIRouter, Depends, status

from lahlah_server.config import Settings, get_settings
from lahlah_server.schemas.responses import HealthResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings)):
    """Basic liveness probe. Returns 200 if the process is up."""
    return HealthResponse(status="ok", port=settings.server_port)

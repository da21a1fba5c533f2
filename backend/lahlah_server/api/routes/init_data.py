"""Init Route — placeholder payload for the frontend's first load.

Invariants:
    - GET /api/init returns empty collections; project, task and document data
      is read by the frontend straight from the hosted data service
    - Any failure while building the payload becomes 500 {"error": message}
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from lahlah_server.schemas.responses import ErrorResponse, InitResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["init"])

CLIENT_SIDE_MESSAGE = (
    "Data should be fetched directly from Supabase in the frontend"
)


def build_init_payload() -> InitResponse:
    return InitResponse(
        message=CLIENT_SIDE_MESSAGE, projects=[], tasks=[], documents=[],
    )


@router.get(
    "/init",
    response_model=InitResponse,
    responses={500: {"model": ErrorResponse}},
)
async def init_data():
    try:
        return build_init_payload()
    except Exception as e:
        logger.error(f"Error in /api/init: {e}", exc_info=True, extra={"path": "/api/init"})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e)},
        )

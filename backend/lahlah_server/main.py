"""lahlah-os API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map LahlahError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The front door answers liveness/info only; it opens no database connections
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lahlah_server import __version__
from lahlah_server.api.error_handlers import register_error_handlers
from lahlah_server.api.routes import health, init_data
from lahlah_server.config import get_settings
from lahlah_server.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Server running on port {settings.server_port}", extra={"port": settings.server_port})
    logger.info("Supabase integration: Client-side operations")
    yield
    logger.info("lahlah-os API shutting down")


app = FastAPI(title="lahlah-os API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(init_data.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the API on SERVER_PORT."""
    uvicorn.run(app, host="0.0.0.0", port=get_settings().server_port)


if __name__ == "__main__":
    run()

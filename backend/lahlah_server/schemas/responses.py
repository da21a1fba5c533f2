"""Response Schemas — Pydantic models for the HTTP front door.

Invariants:
    - HealthResponse.status is always "ok"
    - InitResponse collections are lists (empty until the server owns data)
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness payload."""
    status: Literal["ok"] = "ok"
    port: int


class InitResponse(BaseModel):
    """Placeholder payload pointing the frontend at the hosted data service."""
    message: str
    projects: list[dict[str, Any]] = Field(default_factory=list)
    tasks: list[dict[str, Any]] = Field(default_factory=list)
    documents: list[dict[str, Any]] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Failure payload returned with 4xx/5xx statuses."""
    error: str

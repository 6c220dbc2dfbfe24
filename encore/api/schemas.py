"""Pydantic response schemas specific to the HTTP layer.

Domain models (``CompositeResponse``, ``NearbyPage``, ``Page[...]``,
``Artist``, ``Place``) are returned directly by the routes; only the
envelopes that exist purely for the API live here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
    provider: str | None = None


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, bool]
    missing_credentials: list[str] = Field(default_factory=list)

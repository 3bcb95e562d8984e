"""Pydantic model for the health check response."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str = Field(..., description="Always 'ok' while the service is up")
    uptime: float = Field(..., description="Process uptime in seconds")

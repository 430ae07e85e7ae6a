"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    document_store: str = Field(
        default="configured",
        description="'configured' when Firestore credentials were loaded, else 'disabled'",
    )

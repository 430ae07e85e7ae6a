"""Health check endpoint. No dependencies; used for liveness probes."""

from fastapi import APIRouter, Request

from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok status; reports whether the document store is configured."""
    configured = getattr(request.app.state, "firestore", None) is not None
    return HealthResponse(document_store="configured" if configured else "disabled")

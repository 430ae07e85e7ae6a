"""Screen registry endpoint (static catalog of listing wizard screens)."""

from fastapi import APIRouter

from app.core.constants import LISTING_SCREENS
from app.schemas.screen import ScreenResponse

router = APIRouter()


@router.get("", response_model=list[ScreenResponse])
def list_screens() -> list[ScreenResponse]:
    """Return every screen a flow step may reference."""
    return [ScreenResponse.model_validate(s) for s in LISTING_SCREENS]

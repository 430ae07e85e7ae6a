"""Listing screen registry schemas."""

from pydantic import BaseModel, ConfigDict


class ScreenResponse(BaseModel):
    """One entry of the screen registry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    label: str
    route: str

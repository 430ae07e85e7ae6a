"""Core constants: listing screen registry and shared literal values.

The screen registry is the static catalog of step types a listing flow may
reference. It mirrors the screens shipped in the mobile listing wizard and
is consumed, not owned, by flow validation.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScreenDefinition:
    """One wizard screen: id (used as stepType), display label and app route."""

    id: str
    label: str
    route: str


LISTING_SCREENS: tuple[ScreenDefinition, ...] = (
    ScreenDefinition("list_brand", "Marka Seçimi", "/list_brand"),
    ScreenDefinition("list_clothing", "Kıyafet Detayları", "/list_clothing_details"),
    ScreenDefinition("list_color", "Renk Seçimi", "/list_color_option"),
    ScreenDefinition("list_footwear", "Ayakkabı Boyutu", "/list_product_footwear_size"),
    ScreenDefinition("list_pant", "Pantolon Detayları", "/list_product_pant_details"),
    ScreenDefinition("list_jewelry_type", "Takı/Mücevher Tipi", "/list_product_jewelry_type"),
    ScreenDefinition("list_jewelry_mat", "Takı/Mücevher Malzeme", "/list_product_jewelry_material"),
)

LISTING_SCREEN_IDS: frozenset[str] = frozenset(s.id for s in LISTING_SCREENS)


def get_screen(screen_id: str) -> ScreenDefinition | None:
    """Return the registry entry for screen_id, or None if unknown."""
    for screen in LISTING_SCREENS:
        if screen.id == screen_id:
            return screen
    return None


# Default author for flows created without an admin identity
DEFAULT_CREATED_BY = "admin"

# Version assigned to newly created flows
INITIAL_FLOW_VERSION = "1.0.0"

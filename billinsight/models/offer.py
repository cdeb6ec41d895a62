"""
Partner offer models.

Offers are tagged with persona labels and a category. Both are plain
vocabularies consumed by the offer matcher; neither feeds the three
core computations.
"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OfferCategory(str, Enum):
    """Offer categories with a dedicated icon and label."""
    RENEWABLE = "renewable"
    SMART_HOME = "smart-home"
    FIXED_RATE = "fixed-rate"
    TIME_OF_USE = "time-of-use"


class PersonaTag(str, Enum):
    """Customer personas an offer can target."""
    ECO_CONSCIOUS = "eco-conscious"
    PRICE_SENSITIVE = "price-sensitive"
    TECH_SAVVY = "tech-savvy"


class Offer(BaseModel):
    """A partner offer from the static catalog."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    partner: str = Field(..., min_length=1, max_length=200)
    # Kept as str: unknown categories render with the default icon
    category: str
    persona: tuple[str, ...] = Field(
        default=(),
        description="Persona tags this offer targets"
    )
    est_savings_per_month: Decimal = Field(..., ge=0)
    blurb: str = ""


class CategoryDisplay(BaseModel):
    """Icon and label for an offer category."""
    model_config = ConfigDict(frozen=True)

    icon: str
    label: str

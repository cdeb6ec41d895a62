"""
Offer Matching

Selects partner offers for a bill by persona tags. An offer qualifies
when any of its persona tags is in the bill's target set; qualifying
offers keep catalog order and are capped at `max_offers`.
"""

from decimal import Decimal
from typing import Iterable, Optional

from billinsight.config import OfferSettings, get_settings
from billinsight.models.bill import BillInput, PlanType
from billinsight.models.offer import CategoryDisplay, Offer, OfferCategory, PersonaTag


CATEGORY_DISPLAY: dict[str, CategoryDisplay] = {
    OfferCategory.RENEWABLE.value: CategoryDisplay(icon="🌱", label="Renewable"),
    OfferCategory.SMART_HOME.value: CategoryDisplay(icon="🏠", label="Smart Home"),
    OfferCategory.FIXED_RATE.value: CategoryDisplay(icon="🔒", label="Fixed Rate"),
    OfferCategory.TIME_OF_USE.value: CategoryDisplay(icon="⏰", label="Time of Use"),
}

DEFAULT_CATEGORY_DISPLAY = CategoryDisplay(icon="⚡", label="Energy")


def target_personas(
    bill: BillInput,
    settings: Optional[OfferSettings] = None,
) -> list[str]:
    """
    Persona tags a bill should be matched against.

    Every customer gets eco-conscious offers. Variable plans add
    price-sensitive ones, high digital activity adds tech-savvy ones.
    """
    settings = settings or get_settings().offers

    personas = [PersonaTag.ECO_CONSCIOUS.value]
    if bill.plan_type == PlanType.VARIABLE.value:
        personas.append(PersonaTag.PRICE_SENSITIVE.value)
    if bill.digital_activity_score > Decimal(str(settings.tech_savvy_threshold)):
        personas.append(PersonaTag.TECH_SAVVY.value)
    return personas


def match_offers(
    bill: BillInput,
    offers: Iterable[Offer],
    settings: Optional[OfferSettings] = None,
) -> list[Offer]:
    """Offers targeting any of the bill's personas, in catalog order."""
    settings = settings or get_settings().offers
    targets = set(target_personas(bill, settings))

    matched = []
    for offer in offers:
        if len(matched) >= settings.max_offers:
            break
        if targets.intersection(offer.persona):
            matched.append(offer)
    return matched


def category_display(category: str) -> CategoryDisplay:
    """Icon and label for a category, with a default for unknown ones."""
    return CATEGORY_DISPLAY.get(category, DEFAULT_CATEGORY_DISPLAY)

"""Offer matching package."""

from billinsight.offers.matcher import (
    CATEGORY_DISPLAY,
    DEFAULT_CATEGORY_DISPLAY,
    category_display,
    match_offers,
    target_personas,
)

__all__ = [
    "CATEGORY_DISPLAY",
    "DEFAULT_CATEGORY_DISPLAY",
    "category_display",
    "match_offers",
    "target_personas",
]

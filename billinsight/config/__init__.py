"""Configuration package."""

from billinsight.config.settings import (
    AnalyzerSettings,
    AppSettings,
    LoyaltySettings,
    OfferSettings,
    RecommenderSettings,
    Settings,
    ValidationSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AnalyzerSettings",
    "AppSettings",
    "LoyaltySettings",
    "OfferSettings",
    "RecommenderSettings",
    "Settings",
    "ValidationSettings",
    "get_settings",
    "validate_all_settings",
]

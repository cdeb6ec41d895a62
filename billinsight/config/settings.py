"""
Configuration Management for Bill Insight

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Every policy constant of the computation core lives here.
The seasonal sensitivity, savings rates and tier thresholds are business
rules, not physics, so they must be overridable without touching the engines.
"""

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalyzerSettings(BaseSettings):
    """Variance analyzer configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BILLINSIGHT_ANALYZER_",
        extra="ignore"
    )

    seasonal_sensitivity: float = Field(
        default=0.05,
        description="Share of the current bill attributed to one unit of weather index change"
    )


class RecommenderSettings(BaseSettings):
    """Savings recommender configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BILLINSIGHT_RECOMMENDER_",
        extra="ignore"
    )

    variable_plan_savings_rate: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Monthly saving from moving off a variable plan, as a share of the current bill"
    )
    months_per_year: int = Field(
        default=12,
        ge=1,
        description="Months used to annualize a monthly saving"
    )
    low_digital_activity_threshold: float = Field(
        default=30,
        ge=0,
        le=100,
        description="Scores strictly below this count as low digital engagement"
    )
    digital_enablement_savings: int = Field(
        default=40,
        ge=0,
        description="Flat annual saving from autopay and monitoring features"
    )


class LoyaltySettings(BaseSettings):
    """Loyalty tier thresholds."""

    model_config = SettingsConfigDict(
        env_prefix="BILLINSIGHT_LOYALTY_",
        extra="ignore"
    )

    platinum_min_tenure_months: int = Field(default=24, ge=0)
    platinum_min_activity: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Minimum digital activity (as a fraction of 100) for Platinum"
    )
    gold_min_tenure_months: int = Field(default=12, ge=0)
    gold_min_activity: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Minimum digital activity (as a fraction of 100) for Gold"
    )

    @model_validator(mode='after')
    def validate_ordering(self) -> 'LoyaltySettings':
        """Platinum must never be easier to reach than Gold."""
        if self.platinum_min_tenure_months < self.gold_min_tenure_months:
            raise ValueError("Platinum tenure threshold cannot be below Gold")
        if self.platinum_min_activity < self.gold_min_activity:
            raise ValueError("Platinum activity threshold cannot be below Gold")
        return self


class OfferSettings(BaseSettings):
    """Offer matching configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BILLINSIGHT_OFFERS_",
        extra="ignore"
    )

    tech_savvy_threshold: float = Field(
        default=70,
        ge=0,
        le=100,
        description="Scores strictly above this add the tech-savvy persona"
    )
    max_offers: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Maximum number of matched offers returned"
    )


class ValidationSettings(BaseSettings):
    """Semantic validation thresholds for incoming bill records."""

    model_config = SettingsConfigDict(
        env_prefix="BILLINSIGHT_VALIDATION_",
        extra="ignore"
    )

    max_period_length_difference_days: int = Field(
        default=5,
        ge=0,
        description="Billing periods differing by more than this are flagged"
    )
    max_rate_change_ratio: float = Field(
        default=0.5,
        gt=0.0,
        description="Relative rate change above which the rate is flagged as suspicious"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Level for the structured audit log"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def analyzer(self) -> AnalyzerSettings:
        return AnalyzerSettings()

    @property
    def recommender(self) -> RecommenderSettings:
        return RecommenderSettings()

    @property
    def loyalty(self) -> LoyaltySettings:
        return LoyaltySettings()

    @property
    def offers(self) -> OfferSettings:
        return OfferSettings()

    @property
    def validation(self) -> ValidationSettings:
        return ValidationSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    `<name>_error` entry for each section that failed.
    """
    results = {}
    settings = get_settings()

    for name in ("analyzer", "recommender", "loyalty", "offers", "validation", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results

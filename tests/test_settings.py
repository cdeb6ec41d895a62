"""Tests for configuration loading."""

from decimal import Decimal

from billinsight.analysis import analyze
from billinsight.config import (
    AnalyzerSettings,
    AppSettings,
    LoyaltySettings,
    RecommenderSettings,
    get_settings,
    validate_all_settings,
)


class TestDefaults:
    """Tests for the default policy constants."""

    def test_analyzer_defaults(self):
        """Test the 5% per index unit sensitivity."""
        assert AnalyzerSettings().seasonal_sensitivity == 0.05

    def test_recommender_defaults(self):
        """Test savings rate, months and thresholds."""
        settings = RecommenderSettings()
        assert settings.variable_plan_savings_rate == 0.05
        assert settings.months_per_year == 12
        assert settings.low_digital_activity_threshold == 30
        assert settings.digital_enablement_savings == 40

    def test_loyalty_defaults(self):
        """Test tier thresholds."""
        settings = LoyaltySettings()
        assert settings.platinum_min_tenure_months == 24
        assert settings.platinum_min_activity == 0.7
        assert settings.gold_min_tenure_months == 12
        assert settings.gold_min_activity == 0.3

    def test_app_defaults(self):
        """Test the app section only carries the audit log level."""
        settings = AppSettings()
        assert settings.log_level == "INFO"
        assert set(AppSettings.model_fields) == {"log_level"}


class TestEnvironmentOverrides:
    """Tests for environment variable configuration."""

    def test_env_override(self, monkeypatch):
        """Test the seasonal sensitivity can be set from the environment."""
        monkeypatch.setenv("BILLINSIGHT_ANALYZER_SEASONAL_SENSITIVITY", "0.1")
        assert AnalyzerSettings().seasonal_sensitivity == 0.1

    def test_engines_pick_up_loaded_settings(self, monkeypatch, make_bill):
        """Test engines read the cached settings when none are passed."""
        monkeypatch.setenv("BILLINSIGHT_ANALYZER_SEASONAL_SENSITIVITY", "0.1")
        get_settings.cache_clear()
        assert analyze(make_bill()).weather_estimate == Decimal("2.576")

    def test_validate_all_settings(self):
        """Test every section loads with defaults."""
        results = validate_all_settings()
        assert all(results[name] for name in (
            "analyzer", "recommender", "loyalty", "offers", "validation", "app",
        ))

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        """Test an invalid section is reported, not raised."""
        monkeypatch.setenv("BILLINSIGHT_LOYALTY_PLATINUM_MIN_ACTIVITY", "0.1")
        results = validate_all_settings()
        assert results["loyalty"] is False
        assert "loyalty_error" in results
        assert results["analyzer"] is True

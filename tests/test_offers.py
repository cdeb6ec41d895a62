"""Tests for offer matching."""

import pytest

from billinsight.config import OfferSettings
from billinsight.models.offer import Offer
from billinsight.offers.matcher import (
    DEFAULT_CATEGORY_DISPLAY,
    category_display,
    match_offers,
    target_personas,
)


@pytest.fixture
def catalog():
    """Offer catalog in display order."""
    return [
        Offer(partner="GridSaver", category="time-of-use", persona=["price-sensitive"],
              est_savings_per_month=15, blurb="Cheaper nights"),
        Offer(partner="SunShare", category="renewable", persona=["eco-conscious"],
              est_savings_per_month=10, blurb="Community solar"),
        Offer(partner="Thermo", category="smart-home", persona=["tech-savvy"],
              est_savings_per_month=8, blurb="Smart thermostat"),
        Offer(partner="LockIn", category="fixed-rate", persona=["price-sensitive", "senior"],
              est_savings_per_month=6, blurb="Twelve month fix"),
        Offer(partner="WindCo", category="renewable", persona=["eco-conscious", "tech-savvy"],
              est_savings_per_month=5, blurb="Wind power"),
        Offer(partner="Student Saver", category="budget", persona=["student"],
              est_savings_per_month=4, blurb="Shared housing plan"),
    ]


class TestTargetPersonas:
    """Tests for the persona set derived from a bill."""

    def test_fixed_plan_average_activity(self, make_bill):
        """Test everyone is eco-conscious."""
        bill = make_bill(plan_type="fixed", digital_activity_score=50)
        assert target_personas(bill, OfferSettings()) == ["eco-conscious"]

    def test_variable_plan_is_price_sensitive(self, make_bill):
        """Test variable plans add price-sensitive."""
        bill = make_bill(plan_type="variable", digital_activity_score=50)
        assert target_personas(bill, OfferSettings()) == ["eco-conscious", "price-sensitive"]

    def test_tech_savvy_threshold_is_strict(self, make_bill):
        """Test 70 is not tech-savvy but 71 is."""
        assert "tech-savvy" not in target_personas(
            make_bill(digital_activity_score=70), OfferSettings()
        )
        assert "tech-savvy" in target_personas(
            make_bill(digital_activity_score=71), OfferSettings()
        )

    def test_threshold_is_configurable(self, make_bill):
        """Test overriding the tech-savvy threshold."""
        bill = make_bill(digital_activity_score=50)
        assert "tech-savvy" in target_personas(bill, OfferSettings(tech_savvy_threshold=40))


class TestMatchOffers:
    """Tests for offer selection."""

    def test_keeps_catalog_order_and_caps(self, make_bill, catalog):
        """Test first three matches, in catalog order."""
        bill = make_bill(plan_type="variable", digital_activity_score=90)
        matched = match_offers(bill, catalog, OfferSettings())
        assert [o.partner for o in matched] == ["GridSaver", "SunShare", "Thermo"]

    def test_skips_non_matching(self, make_bill, catalog):
        """Test offers without a shared persona are skipped."""
        bill = make_bill(plan_type="fixed", digital_activity_score=20)
        matched = match_offers(bill, catalog, OfferSettings())
        assert [o.partner for o in matched] == ["SunShare", "WindCo"]

    def test_cap_is_configurable(self, make_bill, catalog):
        """Test overriding the number of offers."""
        bill = make_bill(plan_type="variable", digital_activity_score=90)
        matched = match_offers(bill, catalog, OfferSettings(max_offers=5))
        assert len(matched) == 5
        assert "Student Saver" not in [o.partner for o in matched]

    def test_empty_catalog(self, make_bill):
        """Test no offers in, no offers out."""
        assert match_offers(make_bill(), [], OfferSettings()) == []

    def test_accepts_a_generator(self, make_bill, catalog):
        """Test the catalog only needs to be iterable."""
        bill = make_bill(plan_type="fixed", digital_activity_score=20)
        matched = match_offers(bill, (o for o in catalog), OfferSettings())
        assert len(matched) == 2


class TestCategoryDisplay:
    """Tests for the category icon vocabulary."""

    @pytest.mark.parametrize("category,icon", [
        ("renewable", "🌱"),
        ("smart-home", "🏠"),
        ("fixed-rate", "🔒"),
        ("time-of-use", "⏰"),
    ])
    def test_known_categories(self, category, icon):
        """Test each known category has its own icon."""
        assert category_display(category).icon == icon

    def test_unknown_category_uses_default(self):
        """Test the default icon."""
        assert category_display("budget") == DEFAULT_CATEGORY_DISPLAY
        assert category_display("budget").icon == "⚡"

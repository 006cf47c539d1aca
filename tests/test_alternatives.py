# This project was developed with assistance from AI tools.
"""Tests for alternative matching and down-payment search."""

import pytest

from seller_finance.core.config import settings
from seller_finance.schemas.npv import NPVInputs
from seller_finance.services.alternatives import (
    find_alternatives,
    installment_for_price,
    search_down_payment,
    within_tolerance,
)
from seller_finance.services.catalog import (
    PropertyNotFoundError,
    find_property,
    get_property,
    parse_delivery_months,
)
from seller_finance.services.discounting import geometric_sum_discount


@pytest.fixture
def plan() -> NPVInputs:
    """No down payment, 2 % monthly, 24 installments starting next month."""
    return NPVInputs(
        monthly_rate=0.02,
        down_amount=0,
        down_year=2026,
        down_month=10,
        n_installments=24,
        start_year=2026,
        start_month=10,
    )


class TestCatalogLookup:
    def test_find_is_case_insensitive(self, catalog):
        assert find_property(catalog, "gzp-h04-002").id == "GZP-H04-002"

    def test_find_missing(self, catalog):
        assert find_property(catalog, "GZP-X99-999") is None

    def test_get_missing_raises(self, catalog):
        with pytest.raises(PropertyNotFoundError):
            get_property(catalog, "GZP-X99-999")

    @pytest.mark.parametrize(
        "label,months",
        [
            ("18 months", 18),
            ("6 ay", 6),
            ("1 month", 1),
            ("24", 24),
            (" 24 ", 24),
            ("soon", 0),
            ("", 0),
            ("Q3 2027", 0),
            ("Block 4, ready 2027", 0),
        ],
    )
    def test_parse_delivery_months(self, label, months):
        assert parse_delivery_months(label) == months


class TestInstallmentForPrice:
    def test_matches_annuity(self, plan):
        expected = 760_000 / geometric_sum_discount(24, 0.02)
        assert installment_for_price(plan, 760_000) == pytest.approx(expected)

    def test_term_override(self, plan):
        expected = 1_000_000 / geometric_sum_discount(36, 0.02)
        assert installment_for_price(plan, 1_000_000, 36) == pytest.approx(expected)

    def test_plan_unchanged(self, plan):
        installment_for_price(plan, 1_000_000, 36)
        assert plan.n_installments == 24
        assert plan.target_pv is None


class TestWithinTolerance:
    def test_bounds_are_inclusive(self):
        assert within_tolerance(45_000, 40_000, 5_000)
        assert within_tolerance(35_000, 40_000, 5_000)

    def test_outside(self):
        assert not within_tolerance(45_001, 40_000, 5_000)


class TestFindAlternatives:
    def test_ranked_with_delivery_tie_break(self, catalog, plan):
        matches = find_alternatives(catalog, 40_000, plan, exclude_id="GZP-H04-001")
        # H04-002 is closer but H05-003 is within the tie window and delivers later.
        assert [m.property.id for m in matches] == ["GZP-H05-003", "GZP-H04-002", "GZP-H06-004"]
        assert all(within_tolerance(m.monthly_installment, 40_000, 5_000) for m in matches)

    def test_match_fields(self, catalog, plan):
        matches = find_alternatives(catalog, 40_000, plan, exclude_id="GZP-H04-001")
        first = matches[0]
        assert first.delivery_months == 24
        assert first.distance == pytest.approx(abs(first.monthly_installment - 40_000))

    def test_excludes_current_property(self, catalog, plan):
        matches = find_alternatives(catalog, 52_871, plan, exclude_id="gzp-h04-001")
        assert "GZP-H04-001" not in [m.property.id for m in matches]

    def test_nothing_in_band(self, catalog, plan):
        assert find_alternatives(catalog, 20_000, plan, exclude_id="GZP-H04-001") == []

    def test_limit(self, catalog, plan):
        matches = find_alternatives(catalog, 40_000, plan, exclude_id="GZP-H04-001", limit=1)
        assert len(matches) == 1

    def test_custom_tolerance(self, catalog, plan):
        matches = find_alternatives(
            catalog, 40_000, plan, exclude_id="GZP-H04-001", tolerance=500
        )
        assert [m.property.id for m in matches] == ["GZP-H05-003", "GZP-H04-002"]

    def test_tie_window_from_settings(self, catalog, plan, monkeypatch):
        monkeypatch.setattr(settings, "DELIVERY_TIE_WINDOW", 0)
        matches = find_alternatives(catalog, 40_000, plan, exclude_id="GZP-H04-001")
        assert [m.property.id for m in matches][:2] == ["GZP-H04-002", "GZP-H05-003"]

    def test_unsolvable_units_are_skipped(self, catalog, plan):
        broken = plan.model_copy(update={"n_installments": 0})
        assert find_alternatives(catalog, 40_000, broken, exclude_id="GZP-H04-001") == []

    def test_max_results_from_settings(self, catalog, plan, monkeypatch):
        monkeypatch.setattr(settings, "MAX_ALTERNATIVES", 2)
        matches = find_alternatives(catalog, 40_000, plan, exclude_id="GZP-H04-001")
        assert len(matches) == 2

    def test_units_priced_below_down_payment_are_skipped(self, main_property, plan):
        cheap = main_property.model_copy(update={"id": "GZP-H09-009", "cash_price": 280_000})
        late_down = plan.model_copy(update={"down_amount": 300_000, "down_year": 2027})
        # Discounted a year out, the down payment is worth less than the unit price.
        assert 0 < installment_for_price(late_down, cheap.cash_price) < 10_000
        matches = find_alternatives(
            [main_property, cheap], 5_000, late_down, exclude_id="GZP-H04-001"
        )
        assert matches == []


class TestSearchDownPayment:
    def test_first_step_in_band(self, plan):
        suggestion = search_down_payment(plan, 1_000_000, 30_000)
        assert suggestion.down_amount == 350_000
        assert within_tolerance(suggestion.monthly_installment, 30_000, 5_000)

    def test_none_below_ceiling(self, plan):
        assert search_down_payment(plan, 1_000_000, 10_000) is None

    def test_starts_above_current_down_payment(self, plan):
        raised = plan.model_copy(update={"down_amount": 100_000})
        suggestion = search_down_payment(raised, 1_000_000, 30_000)
        assert suggestion.down_amount == 350_000

    def test_ceiling_ratio_from_settings(self, plan, monkeypatch):
        monkeypatch.setattr(settings, "DOWN_PAYMENT_CEILING_RATIO", 0.3)
        assert search_down_payment(plan, 1_000_000, 30_000) is None

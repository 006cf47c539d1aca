# This project was developed with assistance from AI tools.
"""Tests for free-text slot parsing and intent detection."""

import pytest

from seller_finance.enums import ConversationStep, RateUnit
from seller_finance.services.slot_parsing import (
    asks_down_payment_increase,
    detect_rate_unit,
    is_affirmative,
    is_greeting,
    is_help_request,
    is_negative,
    parse_amount,
    parse_installment_count,
    parse_list_ordinal,
    parse_month,
    parse_property_id,
    parse_rate,
    parse_rate_unit_answer,
    parse_slot,
    parse_term_request,
    parse_year,
    wants_lower_installment,
)


class TestPropertyId:
    def test_bare_id(self):
        ok, _, val = parse_property_id("GZP-H04-001")
        assert ok and val == "GZP-H04-001"

    def test_inside_sentence_uppercased(self):
        ok, _, val = parse_property_id("I like gzp-h04-002 a lot")
        assert ok and val == "GZP-H04-002"

    def test_rejects_plain_text(self):
        ok, msg, _ = parse_property_id("the blue one")
        assert not ok and "GZP-H04-001" in msg


class TestYear:
    def test_valid(self):
        ok, _, val = parse_year("2027")
        assert ok and val == 2027

    def test_inside_sentence(self):
        ok, _, val = parse_year("in 2028 please")
        assert ok and val == 2028

    @pytest.mark.parametrize("value", ["2000", "2100", "27", "next year"])
    def test_rejects(self, value):
        ok, _, _ = parse_year(value)
        assert not ok


class TestMonth:
    @pytest.mark.parametrize(
        "value,month",
        [("3", 3), ("12", 12), ("March", 3), ("mart", 3), ("in august", 8), ("Eylül", 9)],
    )
    def test_valid(self, value, month):
        ok, _, val = parse_month(value)
        assert ok and val == month

    def test_rejects_thirteen(self):
        ok, msg, _ = parse_month("13")
        assert not ok and "1 and 12" in msg

    def test_ignores_year_digits(self):
        ok, _, val = parse_month("june 2027")
        assert ok and val == 6

    def test_rejects_text(self):
        ok, _, _ = parse_month("soon")
        assert not ok


class TestAmount:
    @pytest.mark.parametrize(
        "value,amount",
        [("300000", 300_000), ("300.000", 300_000), ("300,000", 300_000), ("300 000 TL", 300_000),
         ("0", 0)],
    )
    def test_thousands_separators(self, value, amount):
        ok, _, val = parse_amount(value)
        assert ok and val == amount

    def test_rejects_property_id(self):
        ok, msg, _ = parse_amount("GZP-H04-001")
        assert not ok and "property id" in msg

    def test_rejects_text(self):
        ok, _, _ = parse_amount("a lot")
        assert not ok


class TestInstallmentCount:
    def test_with_unit(self):
        ok, _, val = parse_installment_count("36 months")
        assert ok and val == 36

    def test_rejects_zero(self):
        ok, _, _ = parse_installment_count("0")
        assert not ok

    def test_rejects_text(self):
        ok, _, _ = parse_installment_count("many")
        assert not ok


class TestRate:
    @pytest.mark.parametrize("value", ["2", "%2", "2%", "2 %"])
    def test_percent_forms(self, value):
        ok, _, parsed = parse_rate(value)
        assert ok and parsed.rate == pytest.approx(0.02)

    def test_decimal_fraction(self):
        ok, _, parsed = parse_rate("0.02")
        assert ok and parsed.rate == pytest.approx(0.02)

    def test_decimal_comma(self):
        ok, _, parsed = parse_rate("%26,8 annual")
        assert ok and parsed.rate == pytest.approx(0.268)
        assert parsed.unit is RateUnit.ANNUAL

    def test_unit_keyword(self):
        ok, _, parsed = parse_rate("2 aylık")
        assert ok and parsed.unit is RateUnit.MONTHLY

    def test_no_unit(self):
        ok, _, parsed = parse_rate("2")
        assert ok and parsed.unit is None

    @pytest.mark.parametrize("value", ["0", "%1000", "abc"])
    def test_rejects(self, value):
        ok, _, _ = parse_rate(value)
        assert not ok


class TestRateUnit:
    def test_detect_both_is_ambiguous(self):
        assert detect_rate_unit("annual or monthly") is None

    def test_detect_turkish(self):
        assert detect_rate_unit("yıllık") is RateUnit.ANNUAL

    @pytest.mark.parametrize("value", ["yes", "e", "Y", "annual", "per year"])
    def test_annual_answers(self, value):
        ok, _, unit = parse_rate_unit_answer(value)
        assert ok and unit is RateUnit.ANNUAL

    @pytest.mark.parametrize("value", ["", "no", "h", "n", "monthly"])
    def test_monthly_answers(self, value):
        ok, _, unit = parse_rate_unit_answer(value)
        assert ok and unit is RateUnit.MONTHLY

    def test_unrecognised(self):
        ok, _, _ = parse_rate_unit_answer("maybe")
        assert not ok


class TestOrdinalsAndTerms:
    def test_ordinal_with_dot(self):
        ok, _, index = parse_list_ordinal("2.", 3)
        assert ok and index == 1

    def test_ordinal_out_of_range(self):
        ok, msg, _ = parse_list_ordinal("4", 3)
        assert not ok and "between 1 and 3" in msg

    def test_ordinal_must_stand_alone(self):
        ok, _, _ = parse_list_ordinal("number 2", 3)
        assert not ok

    @pytest.mark.parametrize("value", ["36 months?", "what about 36 months", "36 ay olsa"])
    def test_term_request(self, value):
        ok, _, term = parse_term_request(value)
        assert ok and term == 36

    def test_plain_number_is_not_a_term(self):
        ok, _, _ = parse_term_request("36")
        assert not ok


class TestIntents:
    @pytest.mark.parametrize("value", ["Hello", "hi there", "restart", "merhaba", "start over"])
    def test_greeting(self, value):
        assert is_greeting(value)

    def test_greeting_is_whole_word(self):
        assert not is_greeting("this one")

    def test_help(self):
        assert is_help_request("help me")
        assert is_help_request("nasıl")

    @pytest.mark.parametrize(
        "value", ["I want a lower installment", "too high", "daha düşük olsun", "taksit fazla"]
    )
    def test_lower_installment(self, value):
        assert wants_lower_installment(value)

    def test_affirmative_and_negative(self):
        assert is_affirmative("ok")
        assert is_affirmative("evet")
        assert is_negative("no thanks")
        assert not is_affirmative("nope")

    def test_down_payment_increase(self):
        assert asks_down_payment_increase("can I raise the down payment?")
        assert asks_down_payment_increase("peşinat ne kadar olmalı")
        assert not asks_down_payment_increase("down payment")


class TestParseSlot:
    def test_dispatches_by_step(self):
        ok, _, val = parse_slot(ConversationStep.COLLECTING_DOWN_YEAR, "2027")
        assert ok and val == 2027

    def test_step_without_slot(self):
        ok, _, _ = parse_slot(ConversationStep.COMPLETED, "2027")
        assert not ok

"""Unit tests for the pricing engine."""

from decimal import Decimal

import pytest

from pharmoms.domain.exceptions import InvalidAmount
from pharmoms.domain.model.value_objects import Money
from pharmoms.domain.service.pricing import PricingEngine, PricingPolicy


def _price(*pairs: tuple[str, int], policy: PricingPolicy | None = None):
    engine = PricingEngine(policy)
    return engine.breakdown([(Money.of(p), q) for p, q in pairs])


class TestBreakdown:

    def test_below_threshold_pays_delivery(self):
        result = _price(("100", 2))
        assert result.subtotal == Money.of("200")
        assert result.delivery_fee == Money.of("50")
        assert result.tax == Money.of("36")
        assert result.total == Money.of("286")

    def test_exactly_at_threshold_ships_free(self):
        result = _price(("499", 1))
        assert result.delivery_fee.is_zero
        assert result.total == result.subtotal + result.tax

    def test_one_unit_below_threshold_pays_delivery(self):
        result = _price(("498", 1))
        assert result.delivery_fee == Money.of("50")

    def test_tax_is_rounded_half_up_to_paise(self):
        result = _price(("0.25", 1))
        assert result.tax.amount == Decimal("0.05")

    def test_total_identity(self):
        result = _price(("12.35", 3), ("99.99", 4))
        assert result.total == result.subtotal + result.delivery_fee + result.tax

    def test_empty_input_is_all_zero(self):
        result = _price()
        assert result.subtotal.is_zero
        assert result.delivery_fee.is_zero
        assert result.tax.is_zero
        assert result.total.is_zero

    def test_policy_overrides(self):
        policy = PricingPolicy(
            delivery_fee=Decimal("40"),
            free_delivery_threshold=Decimal("1000"),
            tax_rate=Decimal("0.05"),
        )
        result = _price(("500", 1), policy=policy)
        assert result.delivery_fee == Money.of("40")
        assert result.tax == Money.of("25")


class TestQuote:

    def test_worthless_selection_rejected(self):
        engine = PricingEngine()
        with pytest.raises(InvalidAmount) as info:
            engine.quote([(Money.of("0"), 3)])
        assert info.value.code == "INVALID_AMOUNT"

    def test_quote_matches_breakdown(self):
        engine = PricingEngine()
        pairs = [(Money.of("100"), 2)]
        assert engine.quote(pairs) == engine.breakdown(pairs)

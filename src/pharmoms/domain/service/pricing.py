"""Domain service: Pricing.

Pure computation of subtotal, delivery fee, tax and total. The numbers
that drive it live in ``PricingPolicy`` so deployments can override them
through settings instead of editing code.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from pharmoms.domain.exceptions import InvalidAmount
from pharmoms.domain.model.value_objects import DEFAULT_CURRENCY, Money

# ---------------------------------------------------------------------------
# Defaults for the pricing policy
# ---------------------------------------------------------------------------
DELIVERY_FEE = Decimal("50")
FREE_DELIVERY_THRESHOLD = Decimal("499")
TAX_RATE = Decimal("0.18")
TAX_QUANTUM = Decimal("0.01")


@dataclass(frozen=True)
class PricingPolicy:
    delivery_fee: Decimal = DELIVERY_FEE
    free_delivery_threshold: Decimal = FREE_DELIVERY_THRESHOLD
    tax_rate: Decimal = TAX_RATE
    tax_quantum: Decimal = TAX_QUANTUM
    currency: str = DEFAULT_CURRENCY


@dataclass(frozen=True)
class PriceBreakdown:
    subtotal: Money
    delivery_fee: Money
    tax: Money
    total: Money


class PricingEngine:

    def __init__(self, policy: PricingPolicy | None = None) -> None:
        self._policy = policy or PricingPolicy()

    @property
    def policy(self) -> PricingPolicy:
        return self._policy

    @property
    def currency(self) -> str:
        return self._policy.currency

    def breakdown(self, priced: Iterable[tuple[Money, int]]) -> PriceBreakdown:
        """Price ``(unit_price, quantity)`` pairs.

        An empty input prices to all zeros (an empty cart owes nothing).
        """
        policy = self._policy
        zero = Money.zero(policy.currency)

        subtotal = zero
        for unit_price, quantity in priced:
            subtotal = subtotal + unit_price * quantity

        if subtotal.is_zero:
            return PriceBreakdown(subtotal=zero, delivery_fee=zero, tax=zero, total=zero)

        if subtotal.amount >= policy.free_delivery_threshold:
            delivery_fee = zero
        else:
            delivery_fee = Money(policy.delivery_fee, policy.currency)

        tax = subtotal.apply_rate(policy.tax_rate, policy.tax_quantum)

        return PriceBreakdown(
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            tax=tax,
            total=subtotal + delivery_fee + tax,
        )

    def quote(self, priced: Iterable[tuple[Money, int]]) -> PriceBreakdown:
        """Price a checkout selection; a selection worth nothing is rejected."""
        result = self.breakdown(priced)
        if result.subtotal.is_zero:
            raise InvalidAmount()
        return result

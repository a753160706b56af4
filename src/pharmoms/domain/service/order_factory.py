"""Domain service: Order Factory.

Turns resolved checkout lines into a persisted Order. Persisting happens
here, before any stock is touched, so that a placed order always exists
even if a later step of the checkout fails.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from pharmoms.domain.exceptions import DuplicateOrderNumberError
from pharmoms.domain.model.order import Order, OrderLine
from pharmoms.domain.model.value_objects import (
    PaymentMethod,
    Quantity,
    ShippingAddress,
)
from pharmoms.domain.repository.order_repository import OrderRepository
from pharmoms.domain.service.pricing import PriceBreakdown
from pharmoms.domain.service.selection_resolver import ResolvedLine

logger = structlog.get_logger(__name__)

ORDER_NUMBER_PREFIX = "ORD"
ORDER_NUMBER_ATTEMPTS = 5


def format_order_number(prefix: str, sequence: int) -> str:
    return f"{prefix}{sequence:06d}"


class OrderFactory:

    def __init__(
        self,
        order_repo: OrderRepository,
        prefix: str = ORDER_NUMBER_PREFIX,
        max_attempts: int = ORDER_NUMBER_ATTEMPTS,
    ) -> None:
        self._order_repo = order_repo
        self._prefix = prefix
        self._max_attempts = max(1, max_attempts)

    def create(
        self,
        owner_id: str,
        resolved: Sequence[ResolvedLine],
        pricing: PriceBreakdown,
        shipping_address: Mapping[str, Any] | ShippingAddress | None,
        payment_method: str | PaymentMethod | None,
        prescription_id: str | None = None,
    ) -> Order:
        """Build the order and persist it under a fresh order number."""
        if not isinstance(shipping_address, ShippingAddress):
            shipping_address = ShippingAddress.from_raw(shipping_address)

        items = [
            OrderLine(
                kind=line.kind,
                reference_id=line.reference_id,
                quantity=Quantity(line.quantity),
                unit_price=line.unit_price,
                name=line.name,
                image=line.image,
            )
            for line in resolved
        ]

        order = Order.place(
            order_number=self._allocate_number(),
            owner_id=owner_id,
            items=items,
            subtotal=pricing.subtotal,
            delivery_fee=pricing.delivery_fee,
            tax=pricing.tax,
            total=pricing.total,
            shipping_address=shipping_address,
            payment_method=PaymentMethod.parse(payment_method),
            prescription_id=prescription_id,
        )
        self._persist(order)
        return order

    # --- Internal helpers -----------------------------------------------------

    def _allocate_number(self) -> str:
        return format_order_number(self._prefix, self._order_repo.next_sequence())

    def _persist(self, order: Order) -> None:
        """Save the order, re-numbering it while the counter lags behind."""
        for attempt in range(1, self._max_attempts + 1):
            try:
                self._order_repo.save(order)
                return
            except DuplicateOrderNumberError:
                logger.warning(
                    "Order number already taken, allocating another",
                    order_number=order.order_number,
                    attempt=attempt,
                )
                if attempt == self._max_attempts:
                    break
                order.order_number = self._allocate_number()

        raise DuplicateOrderNumberError(
            f"Could not allocate a unique order number after {self._max_attempts} attempts"
        )

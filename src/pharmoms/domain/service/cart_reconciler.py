"""Domain service: Cart Reconciler.

Takes purchased units out of the owner's cart once the order exists.
Lines bought in full disappear; partially bought lines keep the
remainder. Totals are recomputed and the cart is written once, after all
lines are processed.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.reconciliation import ReconciliationIssue, ReconciliationStep
from pharmoms.domain.repository.cart_repository import CartRepository
from pharmoms.domain.service.pricing import PricingEngine
from pharmoms.domain.service.selection_resolver import ResolvedLine

logger = structlog.get_logger(__name__)


class CartReconciler:

    def __init__(self, cart_repo: CartRepository, pricing: PricingEngine) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def reconcile(
        self, order_number: str, cart: Cart, resolved: Sequence[ResolvedLine]
    ) -> list[ReconciliationIssue]:
        for line in resolved:
            if not cart.consume(line.cart_line.id, line.quantity):
                logger.warning(
                    "Purchased line already gone from cart",
                    order_number=order_number,
                    owner_id=cart.owner_id,
                    cart_item_id=line.cart_line.id,
                )

        try:
            cart.refresh_totals(self._pricing)
            self._cart_repo.save(cart)
        except Exception as exc:
            logger.exception(
                "Cart update failed after order was placed",
                order_number=order_number,
                owner_id=cart.owner_id,
            )
            return [
                ReconciliationIssue(
                    id=None,
                    order_number=order_number,
                    step=ReconciliationStep.CART,
                    reason=f"Cart could not be updated: {exc}",
                    reference_id=cart.owner_id,
                )
            ]
        return []

"""Application service: Checkout use case.

Converts a chosen subset of the owner's cart into an order:

1. Reject blocked callers and empty carts; check the linked prescription.
2. Resolve the selection against the cart (all-or-nothing, no writes).
3. Price the resolved lines.
4. Persist the order.
5. Decrement stock, shrink the cart, link the prescription.

Steps 1-3 fail fast with nothing to undo. Step 5 runs after the order is
durable and is best-effort: whatever fails there is logged, recorded as a
reconciliation issue and returned alongside the order, which stands.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from pharmoms.application.dto import (
    CheckoutResultDTO,
    Requester,
    to_issue_dto,
    to_order_dto,
)
from pharmoms.domain.exceptions import (
    CartEmpty,
    PrescriptionNotFound,
    PrescriptionUnauthorized,
    UserBlocked,
)
from pharmoms.domain.model.reconciliation import ReconciliationIssue
from pharmoms.domain.repository.cart_repository import CartRepository
from pharmoms.domain.repository.order_repository import OrderRepository
from pharmoms.domain.repository.prescription_repository import PrescriptionRepository
from pharmoms.domain.repository.product_repository import ProductRepository
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository
from pharmoms.domain.service.cart_reconciler import CartReconciler
from pharmoms.domain.service.inventory_committer import InventoryCommitter
from pharmoms.domain.service.order_factory import OrderFactory
from pharmoms.domain.service.order_status_machine import OrderStatusMachine
from pharmoms.domain.service.pricing import PricingEngine
from pharmoms.domain.service.selection_resolver import SelectionItem, SelectionResolver

logger = structlog.get_logger(__name__)


class CheckoutHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        prescription_repo: PrescriptionRepository,
        issue_repo: ReconciliationRepository,
        pricing: PricingEngine | None = None,
        order_factory: OrderFactory | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._prescription_repo = prescription_repo
        self._issue_repo = issue_repo
        self._pricing = pricing or PricingEngine()
        self._order_factory = order_factory or OrderFactory(order_repo)

    def handle(
        self,
        requester: Requester,
        shipping_address: Mapping[str, Any] | None,
        payment_method: str | None,
        selection: Sequence[SelectionItem],
        prescription_id: str | None = None,
    ) -> CheckoutResultDTO:
        if requester.is_blocked:
            raise UserBlocked()

        owner_id = requester.owner_id
        cart = self._cart_repo.get_by_owner(owner_id)
        if cart is None or cart.is_empty:
            raise CartEmpty()

        if prescription_id:
            self._check_prescription(prescription_id, owner_id)

        # --- Pre-commit: validate and price --------------------------------
        resolved = SelectionResolver(self._product_repo).resolve(cart, selection)
        pricing = self._pricing.quote((line.unit_price, line.quantity) for line in resolved)

        # --- Commit: the order becomes durable here ------------------------
        order = self._order_factory.create(
            owner_id=owner_id,
            resolved=resolved,
            pricing=pricing,
            shipping_address=shipping_address,
            payment_method=payment_method,
            prescription_id=prescription_id or None,
        )
        log = logger.bind(order_number=order.order_number, owner_id=owner_id)
        log.info(
            "Order placed",
            order_id=order.id,
            lines=len(order.items),
            total=str(order.total),
        )

        # --- Post-commit: best-effort --------------------------------------
        issues: list[ReconciliationIssue] = []
        issues += InventoryCommitter(self._product_repo).commit(order.order_number, resolved)
        issues += CartReconciler(self._cart_repo, self._pricing).reconcile(
            order.order_number, cart, resolved
        )
        if order.prescription_id:
            machine = OrderStatusMachine(self._order_repo, self._prescription_repo)
            issues += machine.propagate(order, owner_id, link_order=True)

        if issues:
            log.error("Checkout left reconciliation work", issues=len(issues))
            self._record(issues)

        return CheckoutResultDTO(
            order=to_order_dto(order),
            issues=[to_issue_dto(issue) for issue in issues],
        )

    # --- Internal helpers -----------------------------------------------------

    def _check_prescription(self, prescription_id: str, owner_id: str) -> None:
        prescription = self._prescription_repo.get_by_id(prescription_id)
        if prescription is None or not prescription.is_active:
            raise PrescriptionNotFound(prescription_id=prescription_id)
        if not prescription.belongs_to(owner_id):
            raise PrescriptionUnauthorized(prescription_id=prescription_id)

    def _record(self, issues: list[ReconciliationIssue]) -> None:
        for issue in issues:
            try:
                self._issue_repo.save(issue)
            except Exception:
                logger.exception(
                    "Could not record reconciliation issue",
                    order_number=issue.order_number,
                    step=issue.step.value,
                    reason=issue.reason,
                )

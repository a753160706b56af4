"""Domain service: Order Status Machine.

Drives an order through its lifecycle on behalf of fulfillment operators:

    processing -> out-for-delivery -> delivered
    processing | out-for-delivery -> cancelled

``delivered`` and ``cancelled`` are final. Between the non-final states
any move is accepted, because administrative tooling sometimes has to
correct a status.

When the order came from a prescription, each transition is mirrored
onto the prescription workflow through ``PRESCRIPTION_STATUS_BY_ORDER_STATUS``.
That mirroring is best-effort: if it fails the order keeps its new status
and the failure is recorded as a reconciliation issue.
"""

from __future__ import annotations

import structlog

from pharmoms.domain.exceptions import OrderNotFound
from pharmoms.domain.model.order import Order, OrderStatus
from pharmoms.domain.model.prescription import PrescriptionStatus
from pharmoms.domain.model.reconciliation import ReconciliationIssue, ReconciliationStep
from pharmoms.domain.repository.order_repository import OrderRepository
from pharmoms.domain.repository.prescription_repository import PrescriptionRepository
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository

logger = structlog.get_logger(__name__)

PRESCRIPTION_STATUS_BY_ORDER_STATUS: dict[OrderStatus, PrescriptionStatus] = {
    OrderStatus.PROCESSING: PrescriptionStatus.ORDERED,
    OrderStatus.OUT_FOR_DELIVERY: PrescriptionStatus.FULFILLED,
    OrderStatus.DELIVERED: PrescriptionStatus.DELIVERED,
    OrderStatus.CANCELLED: PrescriptionStatus.CANCELLED,
}


class OrderStatusMachine:

    def __init__(
        self,
        order_repo: OrderRepository,
        prescription_repo: PrescriptionRepository | None = None,
        issue_repo: ReconciliationRepository | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._prescription_repo = prescription_repo
        self._issue_repo = issue_repo

    def transition(
        self,
        order_id: int,
        new_status: str | OrderStatus,
        actor_id: str,
        note: str | None = None,
    ) -> Order:
        status = OrderStatus.parse(new_status)
        order = self._load(order_id)
        previous = order.status

        order.transition_to(status, actor_id, note)
        self._order_repo.save(order)
        logger.info(
            "Order status changed",
            order_number=order.order_number,
            previous_status=previous.value,
            status=status.value,
            actor=actor_id,
        )

        self._record(self.propagate(order, actor_id))
        return order

    def assign(self, order_id: int, assignee_id: str, actor_id: str) -> Order:
        order = self._load(order_id)
        previous = order.status

        order.assign(assignee_id, actor_id)
        self._order_repo.save(order)
        logger.info(
            "Order assigned",
            order_number=order.order_number,
            assignee_id=assignee_id,
            status=order.status.value,
            actor=actor_id,
        )

        if order.status != previous:
            self._record(self.propagate(order, actor_id))
        return order

    def propagate(
        self, order: Order, actor_id: str | None, link_order: bool = False
    ) -> list[ReconciliationIssue]:
        """Mirror the order's current status onto its prescription.

        Returns the issues raised on the way; never raises.
        """
        if not order.prescription_id or self._prescription_repo is None:
            return []

        target = PRESCRIPTION_STATUS_BY_ORDER_STATUS.get(order.status)
        if target is None:
            return []

        try:
            prescription = self._prescription_repo.get_by_id(order.prescription_id)
            if prescription is None:
                logger.warning(
                    "Linked prescription not found, status not propagated",
                    order_number=order.order_number,
                    prescription_id=order.prescription_id,
                )
                return []

            prescription.record_status_change(
                target, actor_id, note=f"Order moved to {order.status.value}"
            )
            if link_order and order.id is not None:
                prescription.link_order(order.id)
            self._prescription_repo.save(prescription)
        except Exception as exc:
            logger.exception(
                "Prescription status propagation failed",
                order_number=order.order_number,
                prescription_id=order.prescription_id,
                status=target.value,
            )
            return [
                ReconciliationIssue(
                    id=None,
                    order_number=order.order_number,
                    step=ReconciliationStep.PRESCRIPTION,
                    reason=f"Prescription could not be moved to {target.value}: {exc}",
                    reference_id=order.prescription_id,
                )
            ]

        return []

    # --- Internal helpers -----------------------------------------------------

    def _load(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")
        return order

    def _record(self, issues: list[ReconciliationIssue]) -> None:
        if self._issue_repo is None:
            return
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

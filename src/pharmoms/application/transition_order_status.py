"""Application service: Transition Order Status use case (operators)."""

from __future__ import annotations

from pharmoms.application.dto import OrderDTO, to_order_dto
from pharmoms.domain.repository.order_repository import OrderRepository
from pharmoms.domain.repository.prescription_repository import PrescriptionRepository
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository
from pharmoms.domain.service.order_status_machine import OrderStatusMachine


class TransitionOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        prescription_repo: PrescriptionRepository,
        issue_repo: ReconciliationRepository,
    ) -> None:
        self._machine = OrderStatusMachine(order_repo, prescription_repo, issue_repo)

    def handle(
        self,
        order_id: int,
        new_status: str,
        actor_id: str,
        note: str | None = None,
    ) -> OrderDTO:
        """Move an order to ``new_status``.

        Raises InvalidOrderStatus for an unknown status and
        InvalidStatusTransition when the order is already delivered or
        cancelled.
        """
        order = self._machine.transition(order_id, new_status, actor_id, note)
        return to_order_dto(order)

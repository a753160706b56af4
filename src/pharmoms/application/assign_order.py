"""Application service: Assign Order use case (operators)."""

from __future__ import annotations

from pharmoms.application.dto import OrderDTO, to_order_dto
from pharmoms.domain.repository.order_repository import OrderRepository
from pharmoms.domain.repository.prescription_repository import PrescriptionRepository
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository
from pharmoms.domain.service.order_status_machine import OrderStatusMachine


class AssignOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        prescription_repo: PrescriptionRepository,
        issue_repo: ReconciliationRepository,
    ) -> None:
        self._machine = OrderStatusMachine(order_repo, prescription_repo, issue_repo)

    def handle(self, order_id: int, assignee_id: str, actor_id: str) -> OrderDTO:
        """Hand an order to a delivery agent.

        A processing order goes out for delivery as part of the hand-off.
        """
        order = self._machine.assign(order_id, assignee_id, actor_id)
        return to_order_dto(order)

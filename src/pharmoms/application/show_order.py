"""Application service: Show Order use case (query)."""

from __future__ import annotations

from pharmoms.application.dto import OrderDTO, to_order_dto
from pharmoms.domain.exceptions import OrderNotFound
from pharmoms.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, owner_id: str, order_id: int) -> OrderDTO:
        # Another owner's order is reported as missing, not as forbidden.
        order = self._order_repo.get_by_id(order_id)
        if order is None or order.owner_id != owner_id:
            raise OrderNotFound(f"Order #{order_id} not found")
        return to_order_dto(order)

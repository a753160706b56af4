"""Application service: Record Tracking use case (operators)."""

from __future__ import annotations

from datetime import date

import structlog

from pharmoms.application.dto import OrderDTO, to_order_dto
from pharmoms.domain.exceptions import OrderNotFound
from pharmoms.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class RecordTrackingHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        order_id: int,
        tracking_number: str | None = None,
        delivery_date: date | None = None,
    ) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(f"Order #{order_id} not found")

        order.record_tracking(tracking_number, delivery_date)
        self._order_repo.save(order)
        logger.info(
            "Order tracking updated",
            order_number=order.order_number,
            tracking_number=order.tracking_number,
            delivery_date=order.delivery_date.isoformat() if order.delivery_date else None,
        )
        return to_order_dto(order)

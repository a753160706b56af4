"""JSON-file-backed implementation of OrderRepository.

The file holds the order-number counter next to the orders:
``{"last_sequence": 12, "orders": [...]}``.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

from pharmoms.domain.exceptions import DuplicateOrderNumberError
from pharmoms.domain.model.order import Order, OrderLine, OrderStatus, StatusChange
from pharmoms.domain.model.value_objects import (
    DEFAULT_CURRENCY,
    ItemKind,
    Money,
    PaymentMethod,
    PaymentStatus,
    Quantity,
    ShippingAddress,
)
from pharmoms.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def next_sequence(self) -> int:
        data = self._load_raw()
        data["last_sequence"] += 1
        self._persist_raw(data)
        return data["last_sequence"]

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw()["orders"]:
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def list_by_owner(self, owner_id: str) -> list[Order]:
        orders = [
            self._to_domain(raw)
            for raw in self._load_raw()["orders"]
            if raw["owner_id"] == owner_id
        ]
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

    def save(self, order: Order) -> None:
        data = self._load_raw()
        orders = data["orders"]

        if order.id is None:
            if any(raw["order_number"] == order.order_number for raw in orders):
                raise DuplicateOrderNumberError(
                    f"Order number {order.order_number} is already taken"
                )
            order.id = max((raw["id"] for raw in orders), default=0) + 1

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw["id"] == order.id:
                orders[i] = self._to_raw(order)
                replaced = True
                break
        if not replaced:
            orders.append(self._to_raw(order))

        self._persist_raw(data)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "owner_id": order.owner_id,
            "status": order.status.value,
            "created_at": order.created_at.isoformat(),
            "items": [
                {
                    "kind": item.kind.value,
                    "reference_id": item.reference_id,
                    "name": item.name,
                    "image": item.image,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                }
                for item in order.items
            ],
            "currency": order.total.currency,
            "subtotal": str(order.subtotal.amount),
            "delivery_fee": str(order.delivery_fee.amount),
            "tax": str(order.tax.amount),
            "total": str(order.total.amount),
            "shipping_address": order.shipping_address.to_raw(),
            "payment_method": order.payment_method.value,
            "payment_status": order.payment_status.value,
            "status_history": [
                {
                    "status": change.status.value,
                    "actor": change.actor,
                    "note": change.note,
                    "changed_at": change.changed_at.isoformat(),
                }
                for change in order.status_history
            ],
            "prescription_id": order.prescription_id,
            "tracking_number": order.tracking_number,
            "delivery_date": order.delivery_date.isoformat() if order.delivery_date else None,
            "assignee_id": order.assignee_id,
            "assigned_at": order.assigned_at.isoformat() if order.assigned_at else None,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", DEFAULT_CURRENCY)

        def money(key: str) -> Money:
            return Money(Decimal(raw[key]), currency)

        items = [
            OrderLine(
                kind=ItemKind(i["kind"]),
                reference_id=i["reference_id"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), currency),
                name=i["name"],
                image=i.get("image", ""),
            )
            for i in raw["items"]
        ]
        history = [
            StatusChange(
                status=OrderStatus(h["status"]),
                actor=h.get("actor"),
                note=h.get("note"),
                changed_at=datetime.fromisoformat(h["changed_at"]),
            )
            for h in raw.get("status_history", [])
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            owner_id=raw["owner_id"],
            items=items,
            subtotal=money("subtotal"),
            delivery_fee=money("delivery_fee"),
            tax=money("tax"),
            total=money("total"),
            shipping_address=ShippingAddress.from_raw(raw.get("shipping_address")),
            payment_method=PaymentMethod(raw["payment_method"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            status=OrderStatus(raw["status"]),
            status_history=history,
            prescription_id=raw.get("prescription_id"),
            tracking_number=raw.get("tracking_number"),
            delivery_date=date.fromisoformat(raw["delivery_date"]) if raw.get("delivery_date") else None,
            assignee_id=raw.get("assignee_id"),
            assigned_at=datetime.fromisoformat(raw["assigned_at"]) if raw.get("assigned_at") else None,
            created_at=datetime.fromisoformat(raw["created_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> dict:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, data: dict) -> None:
        self._file_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._persist_raw({"last_sequence": 0, "orders": []})

"""JSON-file-backed implementation of CartRepository."""

from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from pharmoms.domain.model.cart import Cart, CartLine
from pharmoms.domain.model.value_objects import DEFAULT_CURRENCY, ItemKind, Money
from pharmoms.domain.repository.cart_repository import CartRepository


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartRepository interface ---------------------------------------------

    def get_by_owner(self, owner_id: str) -> Cart | None:
        for raw in self._load_raw():
            if raw["owner_id"] == owner_id:
                return self._to_domain(raw)
        return None

    def save(self, cart: Cart) -> None:
        carts = [raw for raw in self._load_raw() if raw["owner_id"] != cart.owner_id]
        carts.append(self._to_raw(cart))
        self._persist_raw(carts)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: Cart) -> dict:
        return {
            "owner_id": cart.owner_id,
            "currency": cart.currency,
            "updated_at": cart.updated_at.isoformat(),
            "subtotal": str(cart.subtotal.amount),
            "delivery_fee": str(cart.delivery_fee.amount),
            "tax": str(cart.tax.amount),
            "total": str(cart.total.amount),
            "items": [
                {
                    "id": line.id,
                    "kind": line.kind.value,
                    "reference_id": line.reference_id,
                    "quantity": line.quantity,
                    "unit_price": str(line.unit_price.amount),
                    "currency": line.unit_price.currency,
                    "name": line.name,
                    "image": line.image,
                }
                for line in cart.lines
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Cart:
        currency = raw.get("currency", DEFAULT_CURRENCY)
        lines = [
            CartLine(
                id=i["id"],
                kind=ItemKind(i["kind"]),
                reference_id=i["reference_id"],
                quantity=i["quantity"],
                unit_price=Money(Decimal(i["unit_price"]), i.get("currency", currency)),
                name=i.get("name", ""),
                image=i.get("image", ""),
            )
            for i in raw["items"]
        ]
        return Cart(
            owner_id=raw["owner_id"],
            lines=lines,
            currency=currency,
            subtotal=Money(Decimal(raw.get("subtotal", "0")), currency),
            delivery_fee=Money(Decimal(raw.get("delivery_fee", "0")), currency),
            tax=Money(Decimal(raw.get("tax", "0")), currency),
            total=Money(Decimal(raw.get("total", "0")), currency),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, carts: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(carts, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

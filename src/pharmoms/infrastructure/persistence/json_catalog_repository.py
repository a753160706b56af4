"""JSON-file-backed implementations of the catalog repositories."""

from __future__ import annotations

import json
import threading
from decimal import Decimal
from pathlib import Path

from pharmoms.domain.model.catalog import Medicine, Product
from pharmoms.domain.model.value_objects import DEFAULT_CURRENCY, Money
from pharmoms.domain.repository.product_repository import MedicineRepository, ProductRepository

# One lock per products file, shared by every repository instance that
# points at it, so stock decrements in this process are serialized.
_FILE_LOCKS: dict[Path, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _FILE_LOCKS_GUARD:
        return _FILE_LOCKS.setdefault(path.resolve(), threading.Lock())


class JsonProductRepository(ProductRepository):
    """Products file; records without a ``currency`` are priced in ``currency``."""

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        self._ensure_file()
        self._lock = _lock_for(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        with self._lock:
            products = self._load()
            products[product.id] = product
            self._persist(products)

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        with self._lock:
            products = self._load()
            product = products.get(product_id)
            if product is None or product.stock < quantity:
                return False
            product.stock -= quantity
            self._persist(products)
            return True

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        return {
            item["id"]: Product(
                id=item["id"],
                name=item["name"],
                price=Money(Decimal(str(item["price"])), item.get("currency", self._currency)),
                stock=item.get("stock", 0),
                is_active=item.get("is_active", True),
                image=item.get("image", ""),
            )
            for item in raw
        }

    def _persist(self, products: dict[str, Product]) -> None:
        raw = [
            {
                "id": p.id,
                "name": p.name,
                "price": str(p.price.amount),
                "currency": p.price.currency,
                "stock": p.stock,
                "is_active": p.is_active,
                "image": p.image,
            }
            for p in products.values()
        ]
        self._file_path.write_text(
            json.dumps(raw, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")


class JsonMedicineRepository(MedicineRepository):
    """Read-only view of the medicine formulary file."""

    def __init__(self, file_path: Path, currency: str = DEFAULT_CURRENCY) -> None:
        self._file_path = file_path
        self._currency = currency
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

    def get_by_id(self, medicine_id: str) -> Medicine | None:
        for item in json.loads(self._file_path.read_text(encoding="utf-8")):
            if item["id"] == medicine_id:
                return Medicine(
                    id=item["id"],
                    name=item["name"],
                    price=Money(
                        Decimal(str(item.get("price", "0"))),
                        item.get("currency", self._currency),
                    ),
                    is_active=item.get("is_active", True),
                    image=item.get("image", ""),
                )
        return None

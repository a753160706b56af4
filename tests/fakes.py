"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.

Aggregates are copied on the way in and out, like a real store would, so
a test only sees what was actually saved. Each fake can be told to fail
to exercise the best-effort steps of checkout.
"""

from __future__ import annotations

import copy

from pharmoms.domain.exceptions import DuplicateOrderNumberError
from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.catalog import Medicine, Product
from pharmoms.domain.model.order import Order
from pharmoms.domain.model.prescription import Prescription
from pharmoms.domain.model.reconciliation import ReconciliationIssue
from pharmoms.domain.repository.cart_repository import CartRepository
from pharmoms.domain.repository.order_repository import OrderRepository
from pharmoms.domain.repository.prescription_repository import PrescriptionRepository
from pharmoms.domain.repository.product_repository import MedicineRepository, ProductRepository
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository


class StoreUnavailable(Exception):
    """Raised by a fake told to fail."""


class FakeCartRepository(CartRepository):

    def __init__(self, carts: list[Cart] | None = None) -> None:
        self._store: dict[str, Cart] = {}
        for cart in carts or []:
            self._store[cart.owner_id] = copy.deepcopy(cart)
        self.fail_on_save = False
        self.saves = 0

    def get_by_owner(self, owner_id: str) -> Cart | None:
        cart = self._store.get(owner_id)
        return copy.deepcopy(cart) if cart is not None else None

    def save(self, cart: Cart) -> None:
        if self.fail_on_save:
            raise StoreUnavailable("cart store is down")
        self.saves += 1
        self._store[cart.owner_id] = copy.deepcopy(cart)


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = copy.deepcopy(p)
        self.refuse_decrement = False
        self.decrement_error: Exception | None = None
        self.decrements: list[tuple[str, int]] = []

    def get_by_id(self, product_id: str) -> Product | None:
        product = self._store.get(product_id)
        return copy.deepcopy(product) if product is not None else None

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.values()]

    def save(self, product: Product) -> None:
        self._store[product.id] = copy.deepcopy(product)

    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        if self.decrement_error is not None:
            raise self.decrement_error
        product = self._store.get(product_id)
        if self.refuse_decrement or product is None or product.stock < quantity:
            return False
        product.stock -= quantity
        self.decrements.append((product_id, quantity))
        return True


class FakeMedicineRepository(MedicineRepository):

    def __init__(self, medicines: list[Medicine] | None = None) -> None:
        self._store = {m.id: m for m in medicines or []}

    def get_by_id(self, medicine_id: str) -> Medicine | None:
        return self._store.get(medicine_id)


class FakeOrderRepository(OrderRepository):
    """``last_sequence`` lets a test start the counter behind used numbers."""

    def __init__(self, last_sequence: int = 0) -> None:
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._sequence = last_sequence

    def next_sequence(self) -> int:
        self._sequence += 1
        return self._sequence

    def get_by_id(self, order_id: int) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def list_by_owner(self, owner_id: str) -> list[Order]:
        orders = [copy.deepcopy(o) for o in self._store.values() if o.owner_id == owner_id]
        return sorted(orders, key=lambda o: (o.created_at, o.id or 0), reverse=True)

    def save(self, order: Order) -> None:
        if order.id is None:
            if any(o.order_number == order.order_number for o in self._store.values()):
                raise DuplicateOrderNumberError(
                    f"Order number {order.order_number} is already taken"
                )
            order.id = self._next_id
            self._next_id += 1
        self._store[order.id] = copy.deepcopy(order)

    def count(self) -> int:
        return len(self._store)


class FakePrescriptionRepository(PrescriptionRepository):

    def __init__(self, prescriptions: list[Prescription] | None = None) -> None:
        self._store: dict[str, Prescription] = {}
        for p in prescriptions or []:
            self._store[p.id] = copy.deepcopy(p)
        self.fail_on_save = False

    def get_by_id(self, prescription_id: str) -> Prescription | None:
        prescription = self._store.get(prescription_id)
        return copy.deepcopy(prescription) if prescription is not None else None

    def save(self, prescription: Prescription) -> None:
        if self.fail_on_save:
            raise StoreUnavailable("prescription store is down")
        self._store[prescription.id] = copy.deepcopy(prescription)


class FakeReconciliationRepository(ReconciliationRepository):

    def __init__(self) -> None:
        self._store: dict[int, ReconciliationIssue] = {}
        self._next_id = 1
        self.fail_on_save = False

    def get_by_id(self, issue_id: int) -> ReconciliationIssue | None:
        issue = self._store.get(issue_id)
        return copy.deepcopy(issue) if issue is not None else None

    def list_all(self, include_resolved: bool = False) -> list[ReconciliationIssue]:
        return [
            copy.deepcopy(issue)
            for issue in self._store.values()
            if include_resolved or not issue.resolved
        ]

    def save(self, issue: ReconciliationIssue) -> None:
        if self.fail_on_save:
            raise StoreUnavailable("issue store is down")
        if issue.id is None:
            issue.id = self._next_id
            self._next_id += 1
        self._store[issue.id] = copy.deepcopy(issue)

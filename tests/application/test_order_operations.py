"""Integration tests for order queries and operator use cases."""

from datetime import date

import pytest

from pharmoms.application.assign_order import AssignOrderHandler
from pharmoms.application.checkout import CheckoutHandler
from pharmoms.application.dto import Requester
from pharmoms.application.list_orders import ListOrdersHandler
from pharmoms.application.record_tracking import RecordTrackingHandler
from pharmoms.application.show_order import ShowOrderHandler
from pharmoms.application.transition_order_status import TransitionOrderStatusHandler
from pharmoms.domain.exceptions import InvalidStatusTransition, OrderNotFound
from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.catalog import Product
from pharmoms.domain.model.prescription import Prescription, PrescriptionStatus
from pharmoms.domain.model.value_objects import ItemKind, Money
from pharmoms.domain.service.selection_resolver import SelectionItem
from tests.fakes import (
    FakeCartRepository,
    FakeOrderRepository,
    FakePrescriptionRepository,
    FakeProductRepository,
    FakeReconciliationRepository,
)


def _setup(orders: int = 1, prescription_id: str | None = None):
    """Place ``orders`` orders for u1 and return the repos."""
    cart = Cart.empty("u1")
    cart.add_item(ItemKind.PRODUCT, "A", 10, Money.of("100"), name="Paracetamol")
    cart_repo = FakeCartRepository([cart])
    product_repo = FakeProductRepository(
        [Product(id="A", name="Paracetamol", price=Money.of("100"), stock=50)]
    )
    order_repo = FakeOrderRepository()
    prescription_repo = FakePrescriptionRepository([Prescription(id="RX1", owner_id="u1")])
    issue_repo = FakeReconciliationRepository()

    checkout = CheckoutHandler(cart_repo, product_repo, order_repo, prescription_repo, issue_repo)
    for _ in range(orders):
        checkout.handle(
            requester=Requester("u1"),
            shipping_address={"name": "Asha", "city": "Pune"},
            payment_method="cod",
            selection=[SelectionItem(reference_id="A", quantity=1)],
            prescription_id=prescription_id,
        )
    return order_repo, prescription_repo, issue_repo


class TestQueries:

    def test_list_newest_first(self):
        order_repo, _, _ = _setup(orders=3)
        dtos = ListOrdersHandler(order_repo).handle("u1")
        assert [d.order_number for d in dtos] == ["ORD000003", "ORD000002", "ORD000001"]

    def test_list_only_own_orders(self):
        order_repo, _, _ = _setup(orders=2)
        assert ListOrdersHandler(order_repo).handle("u2") == []

    def test_show_own_order(self):
        order_repo, _, _ = _setup()
        dto = ShowOrderHandler(order_repo).handle("u1", 1)
        assert dto.order_number == "ORD000001"
        assert dto.status_history[0].status == "processing"

    def test_show_someone_elses_order_is_not_found(self):
        order_repo, _, _ = _setup()
        with pytest.raises(OrderNotFound):
            ShowOrderHandler(order_repo).handle("u2", 1)

    def test_show_missing_order(self):
        order_repo, _, _ = _setup()
        with pytest.raises(OrderNotFound, match="#42"):
            ShowOrderHandler(order_repo).handle("u1", 42)


class TestTransitionOrderStatus:

    def test_lifecycle_then_final(self):
        order_repo, prescription_repo, issue_repo = _setup()
        handler = TransitionOrderStatusHandler(order_repo, prescription_repo, issue_repo)

        assert handler.handle(1, "out for delivery", "admin").status == "out-for-delivery"
        assert handler.handle(1, "delivered", "admin").status == "delivered"
        with pytest.raises(InvalidStatusTransition):
            handler.handle(1, "cancelled", "admin")

        history = [c.status for c in ShowOrderHandler(order_repo).handle("u1", 1).status_history]
        assert history == ["processing", "out-for-delivery", "delivered"]

    def test_prescription_follows_order(self):
        order_repo, prescription_repo, issue_repo = _setup(prescription_id="RX1")
        handler = TransitionOrderStatusHandler(order_repo, prescription_repo, issue_repo)

        handler.handle(1, "cancelled", "admin", note="Customer request")

        prescription = prescription_repo.get_by_id("RX1")
        assert prescription.status == PrescriptionStatus.CANCELLED
        assert [h.status for h in prescription.history] == [
            PrescriptionStatus.ORDERED,
            PrescriptionStatus.CANCELLED,
        ]


class TestAssignAndTrack:

    def test_assign(self):
        order_repo, prescription_repo, issue_repo = _setup()
        dto = AssignOrderHandler(order_repo, prescription_repo, issue_repo).handle(
            1, "rider-7", "admin"
        )
        assert dto.assignee_id == "rider-7"
        assert dto.status == "out-for-delivery"
        assert dto.status_history[-1].note == "Assigned to rider-7"

    def test_record_tracking(self):
        order_repo, _, _ = _setup()
        dto = RecordTrackingHandler(order_repo).handle(1, "TRK-9", date(2026, 3, 1))
        assert dto.tracking_number == "TRK-9"
        assert dto.delivery_date == "2026-03-01"

    def test_record_tracking_missing_order(self):
        order_repo, _, _ = _setup()
        with pytest.raises(OrderNotFound):
            RecordTrackingHandler(order_repo).handle(7, "TRK-9")

"""Unit tests for order creation and order-number allocation."""

import pytest

from pharmoms.domain.exceptions import DuplicateOrderNumberError
from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.order import OrderStatus
from pharmoms.domain.model.value_objects import ItemKind, Money, PaymentMethod
from pharmoms.domain.service.order_factory import OrderFactory, format_order_number
from pharmoms.domain.service.pricing import PricingEngine
from pharmoms.domain.service.selection_resolver import ResolvedLine
from tests.fakes import FakeOrderRepository

ADDRESS = {"name": "Asha", "phone": "9876543210", "street": "12 MG Road",
           "city": "Pune", "state": "MH", "pincode": "411001"}


def _resolved() -> list[ResolvedLine]:
    cart = Cart.empty("u1")
    line = cart.add_item(ItemKind.PRODUCT, "A", 3, Money.of("100"), name="Paracetamol")
    return [ResolvedLine(cart_line=line, quantity=2)]


def _create(factory: OrderFactory, owner: str = "u1"):
    resolved = _resolved()
    pricing = PricingEngine().quote((r.unit_price, r.quantity) for r in resolved)
    return factory.create(owner, resolved, pricing, ADDRESS, None)


class TestOrderNumbers:

    def test_format_pads_to_six_digits(self):
        assert format_order_number("ORD", 42) == "ORD000042"

    def test_sequential_numbers(self):
        factory = OrderFactory(FakeOrderRepository())
        first = _create(factory)
        second = _create(factory)
        assert first.order_number == "ORD000001"
        assert second.order_number == "ORD000002"

    def test_custom_prefix(self):
        factory = OrderFactory(FakeOrderRepository(), prefix="RX")
        assert _create(factory).order_number == "RX000001"

    def test_stale_counter_is_skipped_past(self):
        repo = FakeOrderRepository()
        _create(OrderFactory(repo))
        _create(OrderFactory(repo))
        # simulate a counter that lags behind the numbers already in use
        repo._sequence = 0

        order = _create(OrderFactory(repo))
        assert order.order_number == "ORD000003"
        assert repo.count() == 3

    def test_gives_up_after_max_attempts(self):
        repo = FakeOrderRepository()
        for _ in range(3):
            _create(OrderFactory(repo))
        repo._sequence = 0

        with pytest.raises(DuplicateOrderNumberError):
            _create(OrderFactory(repo, max_attempts=2))
        assert repo.count() == 3


class TestOrderContents:

    def test_order_is_persisted_with_snapshot(self):
        repo = FakeOrderRepository()
        order = _create(OrderFactory(repo))

        saved = repo.get_by_id(order.id)
        assert saved.status == OrderStatus.PROCESSING
        assert saved.items[0].quantity.value == 2
        assert saved.items[0].unit_price == Money.of("100")
        assert saved.total == Money.of("286")

    def test_address_aliases_are_normalized(self):
        order = _create(OrderFactory(FakeOrderRepository()))
        assert order.shipping_address.phone_number == "9876543210"
        assert order.shipping_address.address == "12 MG Road"

    def test_payment_defaults_to_cash_on_delivery(self):
        order = _create(OrderFactory(FakeOrderRepository()))
        assert order.payment_method == PaymentMethod.COD

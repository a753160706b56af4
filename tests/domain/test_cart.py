"""Unit tests for the Cart aggregate."""

from decimal import Decimal

import pytest

from pharmoms.domain.exceptions import ValidationError
from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.value_objects import ItemKind, Money
from pharmoms.domain.service.pricing import PricingEngine


def _cart_with(qty: int = 3, price: str = "100") -> Cart:
    cart = Cart.empty("u1")
    cart.add_item(ItemKind.PRODUCT, "A", qty, Money.of(price), name="Paracetamol")
    return cart


class TestAddItem:

    def test_new_line_gets_an_id(self):
        cart = _cart_with()
        assert len(cart.lines) == 1
        assert cart.lines[0].id

    def test_same_reference_merges_quantities(self):
        cart = _cart_with(qty=2)
        line = cart.add_item(ItemKind.PRODUCT, "A", 3, Money.of("120"))
        assert len(cart.lines) == 1
        assert line.quantity == 5
        # the first snapshot is kept
        assert line.unit_price == Money.of("100")

    def test_same_reference_different_kind_is_a_new_line(self):
        cart = _cart_with()
        cart.add_item(ItemKind.MEDICINE, "A", 1, Money.of("40"))
        assert len(cart.lines) == 2

    def test_non_positive_quantity_rejected(self):
        cart = Cart.empty("u1")
        with pytest.raises(ValidationError):
            cart.add_item(ItemKind.PRODUCT, "A", 0, Money.of("10"))


class TestQuantityChanges:

    def test_set_quantity(self):
        cart = _cart_with()
        line_id = cart.lines[0].id
        cart.set_quantity(line_id, 7)
        assert cart.get_line(line_id).quantity == 7

    def test_set_quantity_to_zero_removes_line(self):
        cart = _cart_with()
        cart.set_quantity(cart.lines[0].id, 0)
        assert cart.is_empty

    def test_set_quantity_on_unknown_line_rejected(self):
        cart = _cart_with()
        with pytest.raises(ValidationError, match="not found"):
            cart.set_quantity("nope", 1)

    def test_consume_part_of_a_line(self):
        cart = _cart_with(qty=3)
        line_id = cart.lines[0].id
        assert cart.consume(line_id, 2) is True
        assert cart.get_line(line_id).quantity == 1

    def test_consume_whole_line_removes_it(self):
        cart = _cart_with(qty=3)
        assert cart.consume(cart.lines[0].id, 3) is True
        assert cart.is_empty

    def test_consume_missing_line_reports_false(self):
        cart = _cart_with()
        assert cart.consume("gone", 1) is False
        assert len(cart.lines) == 1

    def test_clear(self):
        cart = _cart_with()
        cart.clear()
        assert cart.is_empty


class TestRefreshTotals:

    def test_totals_follow_pricing(self):
        cart = _cart_with(qty=2, price="100")
        cart.refresh_totals(PricingEngine())
        assert cart.subtotal == Money.of("200")
        assert cart.delivery_fee == Money.of("50")
        assert cart.tax.amount == Decimal("36.00")
        assert cart.total == Money.of("286")

    def test_empty_cart_owes_nothing(self):
        cart = _cart_with()
        cart.clear()
        cart.refresh_totals(PricingEngine())
        assert cart.total.is_zero
        assert cart.delivery_fee.is_zero

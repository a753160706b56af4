"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from pharmoms.domain.exceptions import ValidationError
from pharmoms.domain.model.value_objects import (
    ItemKind,
    Money,
    PaymentMethod,
    Quantity,
    ShippingAddress,
)


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_rupees(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "INR"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_bool_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * True

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "INR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "₹15.00"
        assert str(Money.of("9.5", "USD")) == "$9.50"
        assert str(Money.of("3", "EUR")) == "EUR 3.00"

    def test_apply_rate_rounds_half_up(self):
        # 0.25 * 0.18 = 0.045; banker's rounding would give 0.04
        tax = Money.of("0.25").apply_rate(Decimal("0.18"), Decimal("0.01"))
        assert tax.amount == Decimal("0.05")

    def test_apply_rate_to_whole_units(self):
        tax = Money.of("202.50").apply_rate(Decimal("0.18"), Decimal("1"))
        assert tax.amount == Decimal("36")

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)

    def test_float_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.0)


# ── Enumerations ─────────────────────────────────────────────────────────────


class TestItemKind:

    def test_parse_is_case_insensitive(self):
        assert ItemKind.parse(" Medicine ") == ItemKind.MEDICINE

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError, match="Invalid item kind"):
            ItemKind.parse("gift-card")


class TestPaymentMethod:

    def test_missing_method_means_cash_on_delivery(self):
        assert PaymentMethod.parse(None) == PaymentMethod.COD
        assert PaymentMethod.parse("  ") == PaymentMethod.COD

    def test_parse_is_case_insensitive(self):
        assert PaymentMethod.parse("ONLINE") == PaymentMethod.ONLINE

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError, match="Invalid payment method"):
            PaymentMethod.parse("cheque")


# ── ShippingAddress ──────────────────────────────────────────────────────────


class TestShippingAddress:

    def test_canonical_keys(self):
        address = ShippingAddress.from_raw({
            "name": "Asha",
            "phone_number": "9876543210",
            "address": "12 MG Road",
            "city": "Pune",
            "state": "MH",
            "pincode": "411001",
        })
        assert address.phone_number == "9876543210"
        assert address.address == "12 MG Road"
        assert address.landmark == ""

    def test_legacy_spellings_are_folded(self):
        address = ShippingAddress.from_raw({
            "name": " Asha ",
            "phone": "9876543210",
            "street": "12 MG Road",
            "city": "Pune",
            "state": "MH",
            "pincode": "411001",
        })
        assert address.name == "Asha"
        assert address.phone_number == "9876543210"
        assert address.address == "12 MG Road"

    def test_phone_number_camel_case(self):
        address = ShippingAddress.from_raw({"phoneNumber": "111", "phone": "222"})
        assert address.phone_number == "111"

    def test_missing_address_yields_blank_fields(self):
        address = ShippingAddress.from_raw(None)
        assert address.to_raw()["city"] == ""

"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

from pharmoms.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "INR"

_CURRENCY_SYMBOLS = {"INR": "₹", "USD": "$"}


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def apply_rate(self, rate: Decimal, quantum: Decimal) -> Money:
        """Multiply by a fractional rate, rounding half-up to ``quantum``."""
        scaled = (self.amount * rate).quantize(quantum, rounding=ROUND_HALF_UP)
        return Money(scaled, self.currency)

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        symbol = _CURRENCY_SYMBOLS.get(self.currency, f"{self.currency} ")
        return f"{symbol}{self.amount:.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)), currency)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or isinstance(self.value, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


class ItemKind(Enum):
    """Which catalog a cart or order line points into."""

    PRODUCT = "product"
    MEDICINE = "medicine"

    @staticmethod
    def parse(value: str | ItemKind) -> ItemKind:
        if isinstance(value, ItemKind):
            return value
        try:
            return ItemKind(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Invalid item kind: {value!r}") from exc


class PaymentMethod(Enum):
    COD = "cod"
    ONLINE = "online"
    WALLET = "wallet"

    @staticmethod
    def parse(value: str | PaymentMethod | None) -> PaymentMethod:
        """Case-insensitive parse; a missing method means cash on delivery."""
        if isinstance(value, PaymentMethod):
            return value
        if value is None or not str(value).strip():
            return PaymentMethod.COD
        try:
            return PaymentMethod(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Invalid payment method: {value!r}") from exc


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


@dataclass(frozen=True)
class ShippingAddress:
    """Canonical shipping address snapshot stored on an order.

    Two spellings have historically been accepted for the street line
    (``address`` / ``street``) and the phone (``phoneNumber`` / ``phone``);
    ``from_raw`` folds them into this one shape.
    """

    name: str
    phone_number: str
    address: str
    city: str
    state: str
    pincode: str
    landmark: str = ""

    @staticmethod
    def from_raw(raw: Mapping[str, Any] | None) -> ShippingAddress:
        raw = raw or {}

        def pick(*keys: str) -> str:
            for key in keys:
                value = raw.get(key)
                if value:
                    return str(value).strip()
            return ""

        return ShippingAddress(
            name=pick("name"),
            phone_number=pick("phone_number", "phoneNumber", "phone"),
            address=pick("address", "street"),
            city=pick("city"),
            state=pick("state"),
            pincode=pick("pincode"),
            landmark=pick("landmark"),
        )

    def to_raw(self) -> dict[str, str]:
        return {
            "name": self.name,
            "phone_number": self.phone_number,
            "address": self.address,
            "city": self.city,
            "state": self.state,
            "pincode": self.pincode,
            "landmark": self.landmark,
        }

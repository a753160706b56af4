"""Cart aggregate: the owner's pending selection of catalog items.

One cart per account. Lines keep the unit price that was current when the
item was added; checkout charges that snapshot. The derived totals are
refreshed by the caller through ``refresh_totals`` once a batch of
mutations is done.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from pharmoms.domain.exceptions import ValidationError
from pharmoms.domain.model.value_objects import DEFAULT_CURRENCY, ItemKind, Money, Quantity

if TYPE_CHECKING:
    from pharmoms.domain.service.pricing import PricingEngine


def _new_line_id() -> str:
    return uuid.uuid4().hex


@dataclass
class CartLine:
    id: str
    kind: ItemKind
    reference_id: str
    quantity: int
    unit_price: Money
    name: str = ""
    image: str = ""

    def __post_init__(self) -> None:
        Quantity(self.quantity)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    def refers_to(self, kind: ItemKind, reference_id: str) -> bool:
        return self.kind == kind and self.reference_id == reference_id


@dataclass
class Cart:
    owner_id: str
    lines: list[CartLine] = field(default_factory=list)
    currency: str = DEFAULT_CURRENCY
    subtotal: Money = field(default_factory=Money.zero)
    delivery_fee: Money = field(default_factory=Money.zero)
    tax: Money = field(default_factory=Money.zero)
    total: Money = field(default_factory=Money.zero)
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def empty(owner_id: str, currency: str = DEFAULT_CURRENCY) -> Cart:
        zero = Money.zero(currency)
        return Cart(
            owner_id=owner_id,
            currency=currency,
            subtotal=zero,
            delivery_fee=zero,
            tax=zero,
            total=zero,
        )

    @property
    def is_empty(self) -> bool:
        return not self.lines

    # --- Lookup ---------------------------------------------------------------

    def get_line(self, line_id: str) -> CartLine | None:
        for line in self.lines:
            if line.id == line_id:
                return line
        return None

    def find_line(self, kind: ItemKind, reference_id: str) -> CartLine | None:
        for line in self.lines:
            if line.refers_to(kind, reference_id):
                return line
        return None

    # --- Mutations ------------------------------------------------------------

    def add_item(
        self,
        kind: ItemKind,
        reference_id: str,
        quantity: int,
        unit_price: Money,
        name: str = "",
        image: str = "",
    ) -> CartLine:
        """Add an item, merging into an existing line for the same reference."""
        Quantity(quantity)
        existing = self.find_line(kind, reference_id)
        if existing is not None:
            existing.quantity += quantity
            self._touch()
            return existing

        line = CartLine(
            id=_new_line_id(),
            kind=kind,
            reference_id=reference_id,
            quantity=quantity,
            unit_price=unit_price,
            name=name,
            image=image,
        )
        self.lines.append(line)
        self._touch()
        return line

    def set_quantity(self, line_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        line = self._require_line(line_id)
        if quantity <= 0:
            self.remove_line(line.id)
            return
        Quantity(quantity)
        line.quantity = quantity
        self._touch()

    def consume(self, line_id: str, quantity: int) -> bool:
        """Take ``quantity`` units off a line after they were purchased.

        Removes the line when nothing is left. Returns False when the line
        is no longer in the cart.
        """
        line = self.get_line(line_id)
        if line is None:
            return False
        if quantity >= line.quantity:
            self.lines.remove(line)
        else:
            line.quantity -= quantity
        self._touch()
        return True

    def remove_line(self, line_id: str) -> None:
        line = self._require_line(line_id)
        self.lines.remove(line)
        self._touch()

    def clear(self) -> None:
        self.lines = []
        self._touch()

    def refresh_totals(self, pricing: PricingEngine) -> None:
        breakdown = pricing.breakdown(
            [(line.unit_price, line.quantity) for line in self.lines]
        )
        self.subtotal = breakdown.subtotal
        self.delivery_fee = breakdown.delivery_fee
        self.tax = breakdown.tax
        self.total = breakdown.total

    # --- Internal helpers -----------------------------------------------------

    def _require_line(self, line_id: str) -> CartLine:
        line = self.get_line(line_id)
        if line is None:
            raise ValidationError(f"Cart item '{line_id}' not found in cart")
        return line

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)

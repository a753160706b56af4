"""Catalog records read by checkout.

Products and medicines live independently of carts and orders. The
catalog itself is managed elsewhere; this core reads prices, the active
flag and (for products) stock, and decrements stock through the
repository's atomic ``decrement_stock``.
"""

from __future__ import annotations

from dataclasses import dataclass

from pharmoms.domain.exceptions import ValidationError
from pharmoms.domain.model.value_objects import Money


@dataclass
class Product:
    """A sellable product with tracked stock.

    Kept as a mutable dataclass because price and stock updates are
    legitimate mutations on the aggregate.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    is_active: bool = True
    image: str = ""

    @property
    def is_in_stock(self) -> bool:
        return self.is_active and self.stock > 0

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        if new_price.amount <= 0:
            raise ValidationError("Product price must be greater than zero")
        self.price = new_price

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity


@dataclass
class Medicine:
    """A medicine from the pharmacy formulary.

    The formulary has no stock figures, so medicine lines are never
    checked or decremented at checkout.
    """

    id: str
    name: str
    price: Money
    is_active: bool = True
    image: str = ""

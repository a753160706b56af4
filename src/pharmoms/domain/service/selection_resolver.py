"""Domain service: Selection Resolver.

Matches a checkout request against the owner's cart and validates every
entry before anything is written. Resolution is all-or-nothing: the first
bad entry aborts the whole checkout with a structured CheckoutError.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pharmoms.domain.exceptions import (
    DuplicateSelection,
    IdentifierRequired,
    InvalidQuantity,
    ItemNotFound,
    ItemsRequired,
    QuantityExceedsCart,
)
from pharmoms.domain.model.cart import Cart, CartLine
from pharmoms.domain.model.catalog import Product
from pharmoms.domain.model.value_objects import ItemKind, Money
from pharmoms.domain.repository.product_repository import ProductRepository
from pharmoms.domain.service.line_matcher import line_refs, match_line
from pharmoms.domain.service.stock_guard import StockGuard


@dataclass(frozen=True)
class SelectionItem:
    """One entry of a checkout request.

    ``quantity`` of None means "the whole line".
    """

    cart_item_id: str | None = None
    item_kind: ItemKind | str | None = None
    reference_id: str | None = None
    quantity: Any = None


@dataclass(frozen=True)
class ResolvedLine:
    """A cart line bound to the quantity being bought from it."""

    cart_line: CartLine
    quantity: int
    product: Product | None = None

    @property
    def kind(self) -> ItemKind:
        return self.cart_line.kind

    @property
    def reference_id(self) -> str:
        return self.cart_line.reference_id

    @property
    def unit_price(self) -> Money:
        return self.cart_line.unit_price

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    @property
    def name(self) -> str:
        if self.product is not None:
            return self.product.name
        return self.cart_line.name

    @property
    def image(self) -> str:
        if self.product is not None and self.product.image:
            return self.product.image
        return self.cart_line.image


class SelectionResolver:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def resolve(self, cart: Cart, selection: Sequence[SelectionItem]) -> list[ResolvedLine]:
        """Resolve every entry in order.

        Product lines are checked against the catalog; medicine lines are
        taken as they are in the cart.
        """
        if not selection:
            raise ItemsRequired()

        guard = StockGuard(self._product_repo)
        seen: set[str] = set()
        resolved: list[ResolvedLine] = []

        for item in selection:
            refs = line_refs(item.cart_item_id, item.item_kind, item.reference_id)
            if not refs:
                raise IdentifierRequired(item=item)

            line = match_line(cart.lines, refs)
            if line is None:
                raise ItemNotFound(
                    cart_item_id=item.cart_item_id,
                    reference_id=item.reference_id,
                )

            if line.id in seen:
                raise DuplicateSelection(cart_item_id=line.id)
            seen.add(line.id)

            quantity = _purchase_quantity(item.quantity, line)

            product = None
            if line.kind == ItemKind.PRODUCT:
                product = guard.ensure_sellable(line.reference_id, quantity)

            resolved.append(ResolvedLine(cart_line=line, quantity=quantity, product=product))

        return resolved


def _purchase_quantity(requested: Any, line: CartLine) -> int:
    if requested is None:
        return line.quantity

    quantity = _as_int(requested)
    if quantity is None or quantity <= 0:
        raise InvalidQuantity(cart_item_id=line.id, quantity=requested)

    if quantity > line.quantity:
        raise QuantityExceedsCart(
            cart_item_id=line.id,
            requested=quantity,
            available=line.quantity,
        )
    return quantity


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None

"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from pharmoms.application.dto import CartDTO, to_cart_dto
from pharmoms.domain.exceptions import EntityNotFoundError
from pharmoms.domain.model.cart import Cart
from pharmoms.domain.repository.cart_repository import CartRepository
from pharmoms.domain.service.pricing import PricingEngine


def require_cart(cart_repo: CartRepository, owner_id: str) -> Cart:
    cart = cart_repo.get_by_owner(owner_id)
    if cart is None:
        raise EntityNotFoundError("Cart not found")
    return cart


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, pricing: PricingEngine) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self, owner_id: str) -> CartDTO:
        """Return the owner's cart, creating an empty one on first access.

        Totals are recomputed on every read so they follow the current
        pricing configuration.
        """
        cart = self._cart_repo.get_by_owner(owner_id)
        if cart is None:
            cart = Cart.empty(owner_id, self._pricing.currency)
        cart.refresh_totals(self._pricing)
        self._cart_repo.save(cart)
        return to_cart_dto(cart)

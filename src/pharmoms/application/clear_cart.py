"""Application service: Clear Cart use case."""

from __future__ import annotations

from pharmoms.application.dto import CartDTO, to_cart_dto
from pharmoms.application.show_cart import require_cart
from pharmoms.domain.repository.cart_repository import CartRepository
from pharmoms.domain.service.pricing import PricingEngine


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository, pricing: PricingEngine) -> None:
        self._cart_repo = cart_repo
        self._pricing = pricing

    def handle(self, owner_id: str) -> CartDTO:
        cart = require_cart(self._cart_repo, owner_id)
        cart.clear()
        cart.refresh_totals(self._pricing)
        self._cart_repo.save(cart)
        return to_cart_dto(cart)

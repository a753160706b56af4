"""Application service: Add To Cart use case."""

from __future__ import annotations

import structlog

from pharmoms.application.dto import CartDTO, to_cart_dto
from pharmoms.domain.exceptions import EntityNotFoundError, ValidationError
from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.value_objects import ItemKind, Money, Quantity
from pharmoms.domain.repository.cart_repository import CartRepository
from pharmoms.domain.repository.product_repository import MedicineRepository, ProductRepository
from pharmoms.domain.service.pricing import PricingEngine

logger = structlog.get_logger(__name__)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        medicine_repo: MedicineRepository,
        pricing: PricingEngine,
    ) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo
        self._medicine_repo = medicine_repo
        self._pricing = pricing

    def handle(
        self, owner_id: str, kind: str, reference_id: str, quantity: int
    ) -> CartDTO:
        """Add an item at its current catalog price.

        Adding something already in the cart raises the quantity of the
        existing line; the line keeps its original price snapshot.
        """
        item_kind = ItemKind.parse(kind)
        Quantity(quantity)

        if item_kind == ItemKind.MEDICINE:
            price, name, image = self._medicine_snapshot(reference_id)
        else:
            price, name, image = self._product_snapshot(reference_id)

        cart = self._cart_repo.get_by_owner(owner_id)
        if cart is None:
            cart = Cart.empty(owner_id, self._pricing.currency)

        line = cart.add_item(item_kind, reference_id, quantity, price, name, image)
        cart.refresh_totals(self._pricing)
        self._cart_repo.save(cart)

        logger.info(
            "Item added to cart",
            owner_id=owner_id,
            kind=item_kind.value,
            reference_id=reference_id,
            cart_item_id=line.id,
            quantity=line.quantity,
        )
        return to_cart_dto(cart)

    def _product_snapshot(self, product_id: str) -> tuple[Money, str, str]:
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError("Product not found")
        if not product.is_in_stock:
            raise ValidationError("Product is out of stock")
        if product.price.amount <= 0:
            raise ValidationError("This product has no valid price set")
        return product.price, product.name, product.image

    def _medicine_snapshot(self, medicine_id: str) -> tuple[Money, str, str]:
        medicine = self._medicine_repo.get_by_id(medicine_id)
        if medicine is None or not medicine.is_active:
            raise EntityNotFoundError("Medicine not found")
        if medicine.price.amount <= 0:
            raise ValidationError("This medicine has no valid price set")
        return medicine.price, medicine.name, medicine.image

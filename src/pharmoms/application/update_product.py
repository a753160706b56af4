"""Application service: Update Product Price use case."""

from __future__ import annotations

import structlog

from pharmoms.domain.exceptions import EntityNotFoundError
from pharmoms.domain.model.value_objects import Money
from pharmoms.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class UpdateProductPriceHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, new_price: str) -> None:
        """Update a product's price.

        This does NOT affect existing orders or cart lines. They captured
        a price snapshot when they were created.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.update_price(Money.of(new_price, product.price.currency))
        self._product_repo.save(product)
        logger.info("Product price updated", product_id=product_id, price=str(product.price))

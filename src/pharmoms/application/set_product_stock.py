"""Application service: Set Product Stock use case."""

from __future__ import annotations

import structlog

from pharmoms.domain.exceptions import EntityNotFoundError
from pharmoms.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class SetProductStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> None:
        """Overwrite the stock figure, e.g. after a physical count."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        product.set_stock(quantity)
        self._product_repo.save(product)
        logger.info("Product stock set", product_id=product_id, stock=quantity)

"""Domain service: Stock Guard.

Checks that product lines of a checkout can be supplied. One guard is
used per checkout call: it caches catalog reads so a product is fetched
once, and it counts what earlier lines of the same call already asked
for. The check is advisory; the atomic decrement done after the order is
persisted is what actually protects stock.
"""

from __future__ import annotations

from pharmoms.domain.exceptions import InsufficientStock, ProductUnavailable
from pharmoms.domain.model.catalog import Product
from pharmoms.domain.repository.product_repository import ProductRepository


class StockGuard:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo
        self._products: dict[str, Product | None] = {}
        self._claimed: dict[str, int] = {}

    def product(self, product_id: str) -> Product | None:
        if product_id not in self._products:
            self._products[product_id] = self._product_repo.get_by_id(product_id)
        return self._products[product_id]

    def ensure_sellable(self, product_id: str, quantity: int) -> Product:
        """Return the catalog product if ``quantity`` more units can be sold."""
        product = self.product(product_id)
        if product is None or not product.is_active:
            raise ProductUnavailable(product_id=product_id)

        requested = self._claimed.get(product_id, 0) + quantity
        if product.stock < requested:
            raise InsufficientStock(
                f"Insufficient stock for {product.name}",
                product_id=product_id,
                requested=requested,
                stock=product.stock,
            )

        self._claimed[product_id] = requested
        return product

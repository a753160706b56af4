"""Abstract repositories for catalog records.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, SQL, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmoms.domain.model.catalog import Medicine, Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""

    @abstractmethod
    def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Atomically take ``quantity`` units off the product's stock.

        Succeeds only when the stock is at least ``quantity`` at the moment
        of the write. Returns False (and changes nothing) otherwise, or
        when the product does not exist.
        """


class MedicineRepository(ABC):

    @abstractmethod
    def get_by_id(self, medicine_id: str) -> Medicine | None:
        """Return a medicine by its ID, or None if not found."""

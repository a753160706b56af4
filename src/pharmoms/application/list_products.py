"""Application service: List Products use case (query)."""

from __future__ import annotations

from pharmoms.application.dto import ProductDTO, to_product_dto
from pharmoms.domain.repository.product_repository import ProductRepository


class ListProductsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[ProductDTO]:
        return [to_product_dto(product) for product in self._product_repo.list_all()]

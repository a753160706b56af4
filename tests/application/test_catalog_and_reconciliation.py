"""Integration tests for catalog maintenance and the reconciliation queue."""

import pytest

from pharmoms.application.list_products import ListProductsHandler
from pharmoms.application.reconciliation import (
    ListReconciliationIssuesHandler,
    ResolveReconciliationIssueHandler,
)
from pharmoms.application.set_product_stock import SetProductStockHandler
from pharmoms.application.update_product import UpdateProductPriceHandler
from pharmoms.domain.exceptions import EntityNotFoundError, ValidationError
from pharmoms.domain.model.catalog import Product
from pharmoms.domain.model.reconciliation import ReconciliationIssue, ReconciliationStep
from pharmoms.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository, FakeReconciliationRepository


def _products() -> FakeProductRepository:
    return FakeProductRepository(
        [Product(id="A", name="Paracetamol", price=Money.of("100"), stock=5)]
    )


class TestCatalog:

    def test_list(self):
        dtos = ListProductsHandler(_products()).handle()
        assert [(p.id, p.price, p.stock) for p in dtos] == [("A", "₹100.00", 5)]

    def test_update_price(self):
        repo = _products()
        UpdateProductPriceHandler(repo).handle("A", "120.50")
        assert repo.get_by_id("A").price == Money.of("120.50")

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            UpdateProductPriceHandler(_products()).handle("A", "0")

    def test_set_stock(self):
        repo = _products()
        SetProductStockHandler(repo).handle("A", 40)
        assert repo.get_by_id("A").stock == 40

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            SetProductStockHandler(_products()).handle("A", -1)

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            SetProductStockHandler(_products()).handle("Z", 1)


class TestReconciliationQueue:

    def _setup(self) -> FakeReconciliationRepository:
        repo = FakeReconciliationRepository()
        repo.save(ReconciliationIssue(
            id=None, order_number="ORD000001", step=ReconciliationStep.INVENTORY,
            reason="Insufficient stock at commit time", reference_id="A", quantity=2,
        ))
        repo.save(ReconciliationIssue(
            id=None, order_number="ORD000002", step=ReconciliationStep.CART,
            reason="Cart could not be saved", reference_id="u1",
        ))
        return repo

    def test_lists_open_issues(self):
        dtos = ListReconciliationIssuesHandler(self._setup()).handle()
        assert [(d.id, d.step) for d in dtos] == [(1, "inventory"), (2, "cart")]

    def test_resolved_issue_leaves_the_open_list(self):
        repo = self._setup()
        dto = ResolveReconciliationIssueHandler(repo).handle(1)
        assert dto.resolved

        open_ids = [d.id for d in ListReconciliationIssuesHandler(repo).handle()]
        all_ids = [d.id for d in ListReconciliationIssuesHandler(repo).handle(include_resolved=True)]
        assert open_ids == [2]
        assert all_ids == [1, 2]

    def test_unknown_issue(self):
        with pytest.raises(EntityNotFoundError):
            ResolveReconciliationIssueHandler(self._setup()).handle(9)

"""Domain service: Inventory Committer.

Deducts purchased product units from catalog stock after the order has
been persisted. Each deduction is the repository's atomic conditional
decrement, never a read followed by a write, so a concurrent checkout
cannot push stock below zero.

A deduction that is refused (stock was taken by someone else since the
checkout validated it) or that errors does not undo the order. It comes
back as a ReconciliationIssue for operators to settle.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from pharmoms.domain.model.reconciliation import ReconciliationIssue, ReconciliationStep
from pharmoms.domain.model.value_objects import ItemKind
from pharmoms.domain.repository.product_repository import ProductRepository
from pharmoms.domain.service.selection_resolver import ResolvedLine

logger = structlog.get_logger(__name__)


class InventoryCommitter:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def commit(
        self, order_number: str, resolved: Sequence[ResolvedLine]
    ) -> list[ReconciliationIssue]:
        issues: list[ReconciliationIssue] = []

        for line in resolved:
            if line.kind != ItemKind.PRODUCT:
                continue

            try:
                decremented = self._product_repo.decrement_stock(
                    line.reference_id, line.quantity
                )
            except Exception as exc:
                logger.exception(
                    "Stock decrement failed after order was placed",
                    order_number=order_number,
                    product_id=line.reference_id,
                    quantity=line.quantity,
                )
                issues.append(
                    self._issue(order_number, line, f"Stock decrement failed: {exc}")
                )
                continue

            if not decremented:
                logger.error(
                    "Stock decrement refused after order was placed",
                    order_number=order_number,
                    product_id=line.reference_id,
                    quantity=line.quantity,
                )
                issues.append(
                    self._issue(
                        order_number,
                        line,
                        "Insufficient stock at commit time; stock was not decremented",
                    )
                )

        return issues

    @staticmethod
    def _issue(order_number: str, line: ResolvedLine, reason: str) -> ReconciliationIssue:
        return ReconciliationIssue(
            id=None,
            order_number=order_number,
            step=ReconciliationStep.INVENTORY,
            reason=reason,
            reference_id=line.reference_id,
            quantity=line.quantity,
        )

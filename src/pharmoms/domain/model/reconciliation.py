"""Reconciliation issues: post-commit work that did not happen.

Once an order is persisted, stock decrements, cart reconciliation and
prescription propagation are best-effort. Whatever fails is recorded here
so operators can fix stock or carts by hand; the order itself stands.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ReconciliationStep(Enum):
    INVENTORY = "inventory"
    CART = "cart"
    PRESCRIPTION = "prescription"


@dataclass
class ReconciliationIssue:
    id: int | None
    order_number: str
    step: ReconciliationStep
    reason: str
    reference_id: str | None = None
    quantity: int | None = None
    resolved: bool = False
    recorded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def resolve(self) -> None:
        self.resolved = True

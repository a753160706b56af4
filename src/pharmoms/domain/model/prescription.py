"""Prescription record from the prescription-fulfillment workflow.

Only the parts checkout and the order lifecycle touch are modelled here:
ownership, the active flag, the workflow status with its history, and the
link back to the order that fulfils it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pharmoms.domain.exceptions import ValidationError


class PrescriptionStatus(Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    ORDERED = "ordered"
    FULFILLED = "fulfilled"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REJECTED = "rejected"

    @staticmethod
    def parse(value: str | PrescriptionStatus) -> PrescriptionStatus:
        if isinstance(value, PrescriptionStatus):
            return value
        try:
            return PrescriptionStatus(str(value).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Invalid prescription status: {value!r}") from exc


@dataclass(frozen=True)
class PrescriptionStatusChange:
    status: PrescriptionStatus
    actor: str | None
    note: str | None
    changed_at: datetime


@dataclass
class Prescription:
    id: str
    owner_id: str
    status: PrescriptionStatus = PrescriptionStatus.PENDING
    is_active: bool = True
    order_id: int | None = None
    history: list[PrescriptionStatusChange] = field(default_factory=list)

    def belongs_to(self, owner_id: str) -> bool:
        return self.owner_id == owner_id

    def record_status_change(
        self,
        status: PrescriptionStatus,
        actor: str | None = None,
        note: str | None = None,
        at: datetime | None = None,
    ) -> None:
        self.status = status
        self.history.append(
            PrescriptionStatusChange(
                status=status,
                actor=actor,
                note=note,
                changed_at=at or datetime.now(timezone.utc),
            )
        )

    def link_order(self, order_id: int) -> None:
        self.order_id = order_id

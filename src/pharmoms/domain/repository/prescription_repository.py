"""Abstract repository for prescriptions of the fulfillment workflow."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmoms.domain.model.prescription import Prescription


class PrescriptionRepository(ABC):

    @abstractmethod
    def get_by_id(self, prescription_id: str) -> Prescription | None:
        """Return a prescription by its ID, or None if not found."""

    @abstractmethod
    def save(self, prescription: Prescription) -> None:
        """Persist a new or updated prescription."""

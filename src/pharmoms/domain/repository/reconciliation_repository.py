"""Abstract repository for reconciliation issues."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmoms.domain.model.reconciliation import ReconciliationIssue


class ReconciliationRepository(ABC):

    @abstractmethod
    def get_by_id(self, issue_id: int) -> ReconciliationIssue | None:
        """Return an issue by its ID, or None if not found."""

    @abstractmethod
    def list_all(self, include_resolved: bool = False) -> list[ReconciliationIssue]:
        """Return issues in the order they were recorded."""

    @abstractmethod
    def save(self, issue: ReconciliationIssue) -> None:
        """Persist a new or updated issue, assigning an ID to new ones."""

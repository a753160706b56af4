"""Application services: reconciliation issue queue (operators).

Issues are recorded by checkout and status propagation when a
post-commit step fails. Operators fix stock or carts by hand and then
mark the issue resolved.
"""

from __future__ import annotations

import structlog

from pharmoms.application.dto import ReconciliationIssueDTO, to_issue_dto
from pharmoms.domain.exceptions import EntityNotFoundError
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository

logger = structlog.get_logger(__name__)


class ListReconciliationIssuesHandler:

    def __init__(self, issue_repo: ReconciliationRepository) -> None:
        self._issue_repo = issue_repo

    def handle(self, include_resolved: bool = False) -> list[ReconciliationIssueDTO]:
        return [to_issue_dto(issue) for issue in self._issue_repo.list_all(include_resolved)]


class ResolveReconciliationIssueHandler:

    def __init__(self, issue_repo: ReconciliationRepository) -> None:
        self._issue_repo = issue_repo

    def handle(self, issue_id: int) -> ReconciliationIssueDTO:
        issue = self._issue_repo.get_by_id(issue_id)
        if issue is None:
            raise EntityNotFoundError(f"Reconciliation issue #{issue_id} not found")

        issue.resolve()
        self._issue_repo.save(issue)
        logger.info(
            "Reconciliation issue resolved",
            issue_id=issue_id,
            order_number=issue.order_number,
            step=issue.step.value,
        )
        return to_issue_dto(issue)

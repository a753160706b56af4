"""JSON-file-backed implementation of ReconciliationRepository."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pharmoms.domain.model.reconciliation import ReconciliationIssue, ReconciliationStep
from pharmoms.domain.repository.reconciliation_repository import ReconciliationRepository


class JsonReconciliationRepository(ReconciliationRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, issue_id: int) -> ReconciliationIssue | None:
        for raw in self._load_raw():
            if raw["id"] == issue_id:
                return self._to_domain(raw)
        return None

    def list_all(self, include_resolved: bool = False) -> list[ReconciliationIssue]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if include_resolved or not raw["resolved"]
        ]

    def save(self, issue: ReconciliationIssue) -> None:
        issues = self._load_raw()

        if issue.id is None:
            issue.id = max((raw["id"] for raw in issues), default=0) + 1

        for i, raw in enumerate(issues):
            if raw["id"] == issue.id:
                issues[i] = self._to_raw(issue)
                break
        else:
            issues.append(self._to_raw(issue))

        self._persist_raw(issues)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(issue: ReconciliationIssue) -> dict:
        return {
            "id": issue.id,
            "order_number": issue.order_number,
            "step": issue.step.value,
            "reason": issue.reason,
            "reference_id": issue.reference_id,
            "quantity": issue.quantity,
            "resolved": issue.resolved,
            "recorded_at": issue.recorded_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> ReconciliationIssue:
        return ReconciliationIssue(
            id=raw["id"],
            order_number=raw["order_number"],
            step=ReconciliationStep(raw["step"]),
            reason=raw["reason"],
            reference_id=raw.get("reference_id"),
            quantity=raw.get("quantity"),
            resolved=raw.get("resolved", False),
            recorded_at=datetime.fromisoformat(raw["recorded_at"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, issues: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(issues, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

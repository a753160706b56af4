"""JSON-file-backed implementation of PrescriptionRepository."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pharmoms.domain.model.prescription import (
    Prescription,
    PrescriptionStatus,
    PrescriptionStatusChange,
)
from pharmoms.domain.repository.prescription_repository import PrescriptionRepository


class JsonPrescriptionRepository(PrescriptionRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def get_by_id(self, prescription_id: str) -> Prescription | None:
        for raw in self._load_raw():
            if raw["id"] == prescription_id:
                return self._to_domain(raw)
        return None

    def save(self, prescription: Prescription) -> None:
        prescriptions = [raw for raw in self._load_raw() if raw["id"] != prescription.id]
        prescriptions.append(self._to_raw(prescription))
        self._persist_raw(prescriptions)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(prescription: Prescription) -> dict:
        return {
            "id": prescription.id,
            "owner_id": prescription.owner_id,
            "status": prescription.status.value,
            "is_active": prescription.is_active,
            "order_id": prescription.order_id,
            "history": [
                {
                    "status": change.status.value,
                    "actor": change.actor,
                    "note": change.note,
                    "changed_at": change.changed_at.isoformat(),
                }
                for change in prescription.history
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Prescription:
        return Prescription(
            id=raw["id"],
            owner_id=raw["owner_id"],
            status=PrescriptionStatus.parse(raw.get("status", "pending")),
            is_active=raw.get("is_active", True),
            order_id=raw.get("order_id"),
            history=[
                PrescriptionStatusChange(
                    status=PrescriptionStatus.parse(h["status"]),
                    actor=h.get("actor"),
                    note=h.get("note"),
                    changed_at=datetime.fromisoformat(h["changed_at"]),
                )
                for h in raw.get("history", [])
            ],
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, prescriptions: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(prescriptions, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")

from __future__ import annotations

import json
import logging
import threading
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from app.application.exceptions import StoreError
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.queue_store import QueueStorePort
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.queue_entry import QueueEntry, QueueStatus

logger = logging.getLogger(__name__)


class _JsonCollection:
    """A dict of records kept in one JSON file, rewritten atomically on every change."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    @property
    def lock(self) -> threading.Lock:
        return self._lock

    def load(self) -> dict[str, dict[str, Any]]:
        """Load all records. Caller must hold the lock."""
        if not self._file_path.exists():
            return {}
        try:
            with open(self._file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.error("Failed to read store file", extra={"reason": str(e)})
            raise StoreError(f"Unable to read {self._file_path.name}") from e
        if not isinstance(data, dict) or not isinstance(data.get("records"), dict):
            raise StoreError(f"Malformed store file {self._file_path.name}")
        return data["records"]

    def save(self, records: dict[str, dict[str, Any]]) -> None:
        """Write all records atomically. Caller must hold the lock."""
        temp_path = self._file_path.with_suffix(".json.tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump({"version": 1, "records": records}, f, indent=2, ensure_ascii=False)
            temp_path.replace(self._file_path)
        except OSError as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.warning("Could not remove temp store file", extra={"reason": str(temp_path)})
            raise StoreError(f"Unable to write {self._file_path.name}") from e


class JsonQueueStore(QueueStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(Path(data_dir) / "queue_entries.json")

    def create(self, entry: QueueEntry) -> QueueEntry:
        with self._collection.lock:
            records = self._collection.load()
            records[entry.id] = self._serialize_entry(entry)
            self._collection.save(records)
        return entry

    def get(self, entry_id: str) -> QueueEntry | None:
        with self._collection.lock:
            record = self._collection.load().get(entry_id)
        return self._deserialize_entry(record) if record is not None else None

    def list(
        self,
        status: QueueStatus | None = None,
        service_type: str | None = None,
    ) -> list[QueueEntry]:
        with self._collection.lock:
            records = self._collection.load()
        entries = [self._deserialize_entry(r) for r in records.values()]
        return sorted(
            (
                e
                for e in entries
                if (status is None or e.status is status)
                and (service_type is None or e.service_type == service_type)
            ),
            key=lambda e: (e.joined_at, e.id),
        )

    def update_status(self, entry_id: str, status: QueueStatus) -> QueueEntry | None:
        with self._collection.lock:
            records = self._collection.load()
            record = records.get(entry_id)
            if record is None:
                return None
            updated = replace(self._deserialize_entry(record), status=status)
            records[entry_id] = self._serialize_entry(updated)
            self._collection.save(records)
        return updated

    def delete(self, entry_id: str) -> bool:
        with self._collection.lock:
            records = self._collection.load()
            if records.pop(entry_id, None) is None:
                return False
            self._collection.save(records)
        return True

    def _serialize_entry(self, entry: QueueEntry) -> dict[str, Any]:
        return {
            "id": entry.id,
            "student_name": entry.student_name,
            "service_type": entry.service_type,
            "contact_number": entry.contact_number,
            "status": entry.status.value,
            "joined_at": entry.joined_at.isoformat(),
            "appointment_id": entry.appointment_id,
        }

    def _deserialize_entry(self, data: dict[str, Any]) -> QueueEntry:
        try:
            return QueueEntry(
                id=data["id"],
                student_name=data["student_name"],
                service_type=data["service_type"],
                contact_number=data["contact_number"],
                status=QueueStatus(data["status"]),
                joined_at=datetime.fromisoformat(data["joined_at"]),
                appointment_id=data.get("appointment_id"),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError("Malformed queue entry record") from e


class JsonAppointmentStore(AppointmentStorePort):
    def __init__(self, data_dir: str = "./data") -> None:
        self._collection = _JsonCollection(Path(data_dir) / "appointments.json")

    def create(self, appointment: Appointment) -> Appointment:
        with self._collection.lock:
            records = self._collection.load()
            records[appointment.id] = self._serialize_appointment(appointment)
            self._collection.save(records)
        return appointment

    def get(self, appointment_id: str) -> Appointment | None:
        with self._collection.lock:
            record = self._collection.load().get(appointment_id)
        return self._deserialize_appointment(record) if record is not None else None

    def list(self, status: AppointmentStatus | None = None) -> list[Appointment]:
        with self._collection.lock:
            records = self._collection.load()
        appointments = [self._deserialize_appointment(r) for r in records.values()]
        return [a for a in appointments if status is None or a.status is status]

    def update(self, appointment_id: str, changes: dict[str, Any]) -> Appointment | None:
        with self._collection.lock:
            records = self._collection.load()
            record = records.get(appointment_id)
            if record is None:
                return None
            updated = replace(self._deserialize_appointment(record), **changes)
            records[appointment_id] = self._serialize_appointment(updated)
            self._collection.save(records)
        return updated

    def delete(self, appointment_id: str) -> bool:
        with self._collection.lock:
            records = self._collection.load()
            if records.pop(appointment_id, None) is None:
                return False
            self._collection.save(records)
        return True

    def _serialize_appointment(self, appointment: Appointment) -> dict[str, Any]:
        return {
            "id": appointment.id,
            "student_name": appointment.student_name,
            "service_type": appointment.service_type,
            "appointment_date": appointment.appointment_date,
            "appointment_time": appointment.appointment_time,
            "notes": appointment.notes,
            "status": appointment.status.value,
            "created_at": appointment.created_at.isoformat(),
        }

    def _deserialize_appointment(self, data: dict[str, Any]) -> Appointment:
        try:
            return Appointment(
                id=data["id"],
                student_name=data["student_name"],
                service_type=data["service_type"],
                appointment_date=data["appointment_date"],
                appointment_time=data["appointment_time"],
                notes=data.get("notes", ""),
                status=AppointmentStatus(data["status"]),
                created_at=datetime.fromisoformat(data["created_at"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError("Malformed appointment record") from e

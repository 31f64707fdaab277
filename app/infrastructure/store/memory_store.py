from __future__ import annotations

import threading
from dataclasses import replace
from typing import Any

from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.queue_store import QueueStorePort
from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.queue_entry import QueueEntry, QueueStatus


class MemoryQueueStore(QueueStorePort):
    def __init__(self) -> None:
        self._entries: dict[str, QueueEntry] = {}
        self._lock = threading.Lock()

    def create(self, entry: QueueEntry) -> QueueEntry:
        with self._lock:
            self._entries[entry.id] = entry
        return entry

    def get(self, entry_id: str) -> QueueEntry | None:
        with self._lock:
            return self._entries.get(entry_id)

    def list(
        self,
        status: QueueStatus | None = None,
        service_type: str | None = None,
    ) -> list[QueueEntry]:
        with self._lock:
            entries = list(self._entries.values())
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
        with self._lock:
            current = self._entries.get(entry_id)
            if current is None:
                return None
            updated = replace(current, status=status)
            self._entries[entry_id] = updated
            return updated

    def delete(self, entry_id: str) -> bool:
        with self._lock:
            return self._entries.pop(entry_id, None) is not None


class MemoryAppointmentStore(AppointmentStorePort):
    def __init__(self) -> None:
        self._appointments: dict[str, Appointment] = {}
        self._lock = threading.Lock()

    def create(self, appointment: Appointment) -> Appointment:
        with self._lock:
            self._appointments[appointment.id] = appointment
        return appointment

    def get(self, appointment_id: str) -> Appointment | None:
        with self._lock:
            return self._appointments.get(appointment_id)

    def list(self, status: AppointmentStatus | None = None) -> list[Appointment]:
        with self._lock:
            appointments = list(self._appointments.values())
        return [a for a in appointments if status is None or a.status is status]

    def update(self, appointment_id: str, changes: dict[str, Any]) -> Appointment | None:
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                return None
            updated = replace(current, **changes)
            self._appointments[appointment_id] = updated
            return updated

    def delete(self, appointment_id: str) -> bool:
        with self._lock:
            return self._appointments.pop(appointment_id, None) is not None

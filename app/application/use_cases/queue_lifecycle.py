from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from app.application.exceptions import NotFoundError, StoreError
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.queue_store import QueueStorePort
from app.application.utils.positions import (
    DEFAULT_PER_PERSON_MINUTES,
    GROUPING_SERVICE_TYPE,
    compute_placements,
)
from app.application.utils.sanitize import parse_enum, require_text, sanitize_text
from app.domain.entities.queue_entry import QueueEntry, QueueEntryView, QueueStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QueueLifecycleUseCase:
    """
    Sole writer of queue entries: join, status transitions and leave.

    Positions are never written. Each operation is one store mutation and the
    returned view carries a placement computed from the store right after it.
    """

    def __init__(
        self,
        store: QueueStorePort,
        appointments: AppointmentStorePort | None = None,
        per_person_minutes: int = DEFAULT_PER_PERSON_MINUTES,
        grouping: str = GROUPING_SERVICE_TYPE,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._appointments = appointments
        self._per_person_minutes = per_person_minutes
        self._grouping = grouping
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def join(
        self,
        student_name: str | None,
        service_type: str | None,
        contact_number: str | None,
        appointment_id: str | None = None,
    ) -> QueueEntryView:
        name = require_text(student_name, "studentName")
        service = require_text(service_type, "serviceType")
        contact = require_text(contact_number, "contactNumber")

        linked_appointment = sanitize_text(appointment_id) or None
        if linked_appointment is not None:
            if self._appointments is None or self._appointments.get(linked_appointment) is None:
                raise NotFoundError("Appointment not found")

        entry = self._store.create(
            QueueEntry(
                id=uuid.uuid4().hex,
                student_name=name,
                service_type=service,
                contact_number=contact,
                joined_at=self._clock(),
                status=QueueStatus.WAITING,
                appointment_id=linked_appointment,
            )
        )
        try:
            view = self._view(entry)
        except StoreError:
            # A join either returns its placement or leaves no record behind.
            self._store.delete(entry.id)
            self._logger.warning("Join rolled back", extra={"entry_id": entry.id, "reason": "placement read failed"})
            raise
        self._logger.info(
            "Queue entry joined",
            extra={"entry_id": entry.id, "service_type": entry.service_type, "position": view.position},
        )
        return view

    def transition_status(self, entry_id: str, status: str | QueueStatus | None) -> QueueEntryView:
        target = parse_enum(QueueStatus, status, "status")

        current = self._store.get(entry_id)
        if current is None:
            raise NotFoundError("Queue entry not found")
        if current.status.is_terminal and not target.is_terminal:
            # Transitions are unrestricted; reopening is only logged.
            self._logger.info(
                "Queue entry reopened from terminal status",
                extra={"entry_id": entry_id, "status": target.value, "reason": current.status.value},
            )

        updated = self._store.update_status(entry_id, target)
        if updated is None:
            raise NotFoundError("Queue entry not found")

        self._logger.info("Queue entry status changed", extra={"entry_id": entry_id, "status": target.value})
        return self._view(updated)

    def leave(self, entry_id: str) -> None:
        if not self._store.delete(entry_id):
            raise NotFoundError("Queue entry not found")
        self._logger.info("Queue entry removed", extra={"entry_id": entry_id})

    def _view(self, entry: QueueEntry) -> QueueEntryView:
        if entry.status is not QueueStatus.WAITING:
            return QueueEntryView(entry=entry)
        placements = compute_placements(
            self._store.list(status=QueueStatus.WAITING),
            per_person_minutes=self._per_person_minutes,
            grouping=self._grouping,
        )
        return QueueEntryView(entry=entry, placement=placements.get(entry.id))

from __future__ import annotations

import logging
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Callable

from app.application.exceptions import NotFoundError, ValidationError
from app.application.ports.appointment_store import AppointmentStorePort
from app.application.utils.sanitize import parse_enum, require_text, sanitize_text
from app.domain.entities.appointment import Appointment, AppointmentStatus

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^\d{2}:\d{2}$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_date(value: str | None) -> str:
    text = require_text(value, "appointmentDate")
    if not _DATE_RE.match(text):
        raise ValidationError("appointmentDate must be YYYY-MM-DD")
    try:
        datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        raise ValidationError("appointmentDate is not a valid date") from None
    return text


def _require_time(value: str | None) -> str:
    text = require_text(value, "appointmentTime")
    if not _TIME_RE.match(text):
        raise ValidationError("appointmentTime must be HH:MM")
    try:
        datetime.strptime(text, "%H:%M")
    except ValueError:
        raise ValidationError("appointmentTime is not a valid time") from None
    return text


class AppointmentUseCase:
    def __init__(self, store: AppointmentStorePort, clock: Callable[[], datetime] = _utcnow) -> None:
        self._store = store
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    def book(
        self,
        student_name: str | None,
        service_type: str | None,
        appointment_date: str | None,
        appointment_time: str | None,
        notes: str | None = None,
    ) -> Appointment:
        appointment = self._store.create(
            Appointment(
                id=uuid.uuid4().hex,
                student_name=require_text(student_name, "studentName"),
                service_type=require_text(service_type, "serviceType"),
                appointment_date=_require_date(appointment_date),
                appointment_time=_require_time(appointment_time),
                notes=sanitize_text(notes),
                created_at=self._clock(),
            )
        )
        self._logger.info("Appointment booked", extra={"appointment_id": appointment.id})
        return appointment

    def get(self, appointment_id: str) -> Appointment:
        appointment = self._store.get(appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    def list_appointments(self, status: str | None = None) -> list[Appointment]:
        status_filter = parse_enum(AppointmentStatus, status, "status") if status else None
        return sorted(
            self._store.list(status=status_filter),
            key=lambda a: (a.appointment_date, a.appointment_time, a.created_at),
        )

    def update(
        self,
        appointment_id: str,
        status: str | None = None,
        notes: str | None = None,
        appointment_date: str | None = None,
        appointment_time: str | None = None,
    ) -> Appointment:
        changes: dict[str, Any] = {}
        if status is not None:
            changes["status"] = parse_enum(AppointmentStatus, status, "status")
        if notes is not None:
            changes["notes"] = sanitize_text(notes)
        if appointment_date is not None:
            changes["appointment_date"] = _require_date(appointment_date)
        if appointment_time is not None:
            changes["appointment_time"] = _require_time(appointment_time)

        updated = self._store.update(appointment_id, changes)
        if updated is None:
            raise NotFoundError("Appointment not found")
        self._logger.info(
            "Appointment updated",
            extra={"appointment_id": appointment_id, "status": updated.status.value},
        )
        return updated

    def cancel(self, appointment_id: str) -> None:
        if not self._store.delete(appointment_id):
            raise NotFoundError("Appointment not found")
        self._logger.info("Appointment deleted", extra={"appointment_id": appointment_id})

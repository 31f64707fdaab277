from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.appointment import Appointment, AppointmentStatus


class AppointmentStorePort(ABC):
    @abstractmethod
    def create(self, appointment: Appointment) -> Appointment:
        raise NotImplementedError

    @abstractmethod
    def get(self, appointment_id: str) -> Appointment | None:
        raise NotImplementedError

    @abstractmethod
    def list(self, status: AppointmentStatus | None = None) -> list[Appointment]:
        raise NotImplementedError

    @abstractmethod
    def update(self, appointment_id: str, changes: dict[str, Any]) -> Appointment | None:
        """Apply field changes. Returns the updated appointment or None if the id is unknown."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, appointment_id: str) -> bool:
        raise NotImplementedError

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AppointmentStatus(str, Enum):
    BOOKED = "Booked"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    NO_SHOW = "No-Show"


@dataclass(frozen=True)
class Appointment:
    id: str
    student_name: str
    service_type: str
    appointment_date: str  # YYYY-MM-DD
    appointment_time: str  # HH:MM
    created_at: datetime
    notes: str = ""
    status: AppointmentStatus = AppointmentStatus.BOOKED

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.domain.entities.appointment import Appointment, AppointmentStatus
from app.domain.entities.queue_entry import QueueEntryView, QueueStatus, WaitTimeProbe


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Request fields are optional; the use cases decide what is required.
class JoinQueueRequestSchema(CamelModel):
    student_name: str | None = None
    service_type: str | None = None
    contact_number: str | None = None
    appointment_id: str | None = None


class UpdateQueueStatusRequestSchema(CamelModel):
    status: str | None = None


class QueueEntrySchema(CamelModel):
    id: str
    student_name: str
    service_type: str
    contact_number: str
    status: QueueStatus
    position: int | None = None
    estimated_wait_time: int | None = None
    joined_at: datetime
    appointment_id: str | None = None

    @classmethod
    def from_view(cls, view: QueueEntryView) -> "QueueEntrySchema":
        entry = view.entry
        return cls(
            id=entry.id,
            student_name=entry.student_name,
            service_type=entry.service_type,
            contact_number=entry.contact_number,
            status=entry.status,
            position=view.position,
            estimated_wait_time=view.estimated_wait_time,
            joined_at=entry.joined_at,
            appointment_id=entry.appointment_id,
        )


class JoinQueueResponseSchema(CamelModel):
    queue_entry: QueueEntrySchema


class WaitTimeSchema(CamelModel):
    position: int | None = None
    estimated_wait_time: int | None = None
    status: QueueStatus

    @classmethod
    def from_probe(cls, probe: WaitTimeProbe) -> "WaitTimeSchema":
        return cls(position=probe.position, estimated_wait_time=probe.estimated_wait_time, status=probe.status)


class MessageSchema(BaseModel):
    message: str


class BookAppointmentRequestSchema(CamelModel):
    student_name: str | None = None
    service_type: str | None = None
    appointment_date: str | None = None
    appointment_time: str | None = None
    notes: str | None = None


class UpdateAppointmentRequestSchema(CamelModel):
    status: str | None = None
    notes: str | None = None
    appointment_date: str | None = None
    appointment_time: str | None = None


class AppointmentSchema(CamelModel):
    id: str
    student_name: str
    service_type: str
    appointment_date: str
    appointment_time: str
    notes: str
    status: AppointmentStatus
    created_at: datetime

    @classmethod
    def from_entity(cls, appointment: Appointment) -> "AppointmentSchema":
        return cls(
            id=appointment.id,
            student_name=appointment.student_name,
            service_type=appointment.service_type,
            appointment_date=appointment.appointment_date,
            appointment_time=appointment.appointment_time,
            notes=appointment.notes,
            status=appointment.status,
            created_at=appointment.created_at,
        )

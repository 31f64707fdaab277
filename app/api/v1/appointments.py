from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api.security import require_roles
from app.api.v1.errors import error_response
from app.api.v1.schemas import (
    AppointmentSchema,
    BookAppointmentRequestSchema,
    MessageSchema,
    UpdateAppointmentRequestSchema,
)
from app.application.exceptions import QueueServiceError
from app.application.use_cases.appointments import AppointmentUseCase
from app.infrastructure.auth.tokens import ROLE_STAFF, ROLE_STUDENT
from app.wiring.dependencies import get_appointment_use_case

router = APIRouter(prefix="/appointments")

any_user = require_roles(ROLE_STUDENT, ROLE_STAFF)
staff_only = require_roles(ROLE_STAFF)


@router.post(
    "",
    response_model=AppointmentSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(any_user)],
)
def book_appointment(
    req: BookAppointmentRequestSchema,
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    try:
        appointment = uc.book(
            student_name=req.student_name,
            service_type=req.service_type,
            appointment_date=req.appointment_date,
            appointment_time=req.appointment_time,
            notes=req.notes,
        )
    except QueueServiceError as e:
        return error_response(e)
    return AppointmentSchema.from_entity(appointment)


@router.get("", response_model=list[AppointmentSchema], dependencies=[Depends(staff_only)])
def list_appointments(
    status_filter: str | None = Query(None, alias="status"),
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    try:
        appointments = uc.list_appointments(status=status_filter)
    except QueueServiceError as e:
        return error_response(e)
    return [AppointmentSchema.from_entity(a) for a in appointments]


@router.get("/{appointment_id}", response_model=AppointmentSchema, dependencies=[Depends(any_user)])
def get_appointment(
    appointment_id: str,
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    try:
        appointment = uc.get(appointment_id)
    except QueueServiceError as e:
        return error_response(e)
    return AppointmentSchema.from_entity(appointment)


@router.put("/{appointment_id}", response_model=AppointmentSchema, dependencies=[Depends(staff_only)])
def update_appointment(
    appointment_id: str,
    req: UpdateAppointmentRequestSchema,
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    try:
        appointment = uc.update(
            appointment_id,
            status=req.status,
            notes=req.notes,
            appointment_date=req.appointment_date,
            appointment_time=req.appointment_time,
        )
    except QueueServiceError as e:
        return error_response(e)
    return AppointmentSchema.from_entity(appointment)


@router.delete("/{appointment_id}", response_model=MessageSchema, dependencies=[Depends(staff_only)])
def delete_appointment(
    appointment_id: str,
    uc: AppointmentUseCase = Depends(get_appointment_use_case),
):
    try:
        uc.cancel(appointment_id)
    except QueueServiceError as e:
        return error_response(e)
    return MessageSchema(message="Appointment deleted")

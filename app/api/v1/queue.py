from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from app.api.security import require_roles
from app.api.v1.errors import error_response
from app.api.v1.schemas import (
    JoinQueueRequestSchema,
    JoinQueueResponseSchema,
    MessageSchema,
    QueueEntrySchema,
    UpdateQueueStatusRequestSchema,
    WaitTimeSchema,
)
from app.application.exceptions import QueueServiceError
from app.application.use_cases.queue_lifecycle import QueueLifecycleUseCase
from app.application.use_cases.queue_status import QueueStatusProjector
from app.infrastructure.auth.tokens import ROLE_STAFF, ROLE_STUDENT
from app.wiring.dependencies import get_queue_lifecycle_use_case, get_queue_status_projector

router = APIRouter(prefix="/queue")

any_user = require_roles(ROLE_STUDENT, ROLE_STAFF)
staff_only = require_roles(ROLE_STAFF)


@router.post(
    "",
    response_model=JoinQueueResponseSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(any_user)],
)
def join_queue(
    req: JoinQueueRequestSchema,
    uc: QueueLifecycleUseCase = Depends(get_queue_lifecycle_use_case),
):
    try:
        view = uc.join(
            student_name=req.student_name,
            service_type=req.service_type,
            contact_number=req.contact_number,
            appointment_id=req.appointment_id,
        )
    except QueueServiceError as e:
        return error_response(e)
    return JoinQueueResponseSchema(queue_entry=QueueEntrySchema.from_view(view))


@router.get("", response_model=list[QueueEntrySchema], dependencies=[Depends(staff_only)])
def list_queue(
    status_filter: str | None = Query(None, alias="status"),
    service_type: str | None = Query(None, alias="serviceType"),
    projector: QueueStatusProjector = Depends(get_queue_status_projector),
):
    try:
        views = projector.list_entries(status=status_filter, service_type=service_type)
    except QueueServiceError as e:
        return error_response(e)
    return [QueueEntrySchema.from_view(v) for v in views]


@router.get("/{entry_id}", response_model=QueueEntrySchema, dependencies=[Depends(any_user)])
def get_queue_entry(
    entry_id: str,
    projector: QueueStatusProjector = Depends(get_queue_status_projector),
):
    try:
        view = projector.get_entry(entry_id)
    except QueueServiceError as e:
        return error_response(e)
    return QueueEntrySchema.from_view(view)


@router.get("/{entry_id}/waittime", response_model=WaitTimeSchema, dependencies=[Depends(any_user)])
def get_wait_time(
    entry_id: str,
    projector: QueueStatusProjector = Depends(get_queue_status_projector),
):
    try:
        probe = projector.wait_time(entry_id)
    except QueueServiceError as e:
        return error_response(e)
    return WaitTimeSchema.from_probe(probe)


@router.put("/{entry_id}", response_model=QueueEntrySchema, dependencies=[Depends(staff_only)])
def update_queue_status(
    entry_id: str,
    req: UpdateQueueStatusRequestSchema,
    uc: QueueLifecycleUseCase = Depends(get_queue_lifecycle_use_case),
):
    try:
        view = uc.transition_status(entry_id, req.status)
    except QueueServiceError as e:
        return error_response(e)
    return QueueEntrySchema.from_view(view)


@router.delete("/{entry_id}", response_model=MessageSchema, dependencies=[Depends(any_user)])
def leave_queue(
    entry_id: str,
    uc: QueueLifecycleUseCase = Depends(get_queue_lifecycle_use_case),
):
    try:
        uc.leave(entry_id)
    except QueueServiceError as e:
        return error_response(e)
    return MessageSchema(message="Successfully left the queue")

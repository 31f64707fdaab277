import logging

from fastapi import Depends

from app.application.ports.appointment_store import AppointmentStorePort
from app.application.ports.queue_store import QueueStorePort
from app.application.use_cases.appointments import AppointmentUseCase
from app.application.use_cases.queue_lifecycle import QueueLifecycleUseCase
from app.application.use_cases.queue_status import QueueStatusProjector
from app.core.config import settings
from app.infrastructure.auth.attempts import FailedAttemptTracker
from app.infrastructure.store.json_store import JsonAppointmentStore, JsonQueueStore
from app.infrastructure.store.memory_store import MemoryAppointmentStore, MemoryQueueStore


logger = logging.getLogger(__name__)

_queue_store: QueueStorePort | None = None
_appointment_store: AppointmentStorePort | None = None
_attempt_tracker: FailedAttemptTracker | None = None


def get_queue_store() -> QueueStorePort:
    global _queue_store
    if _queue_store is None:
        if settings.STORE_PROVIDER == "json":
            _queue_store = JsonQueueStore(data_dir=settings.DATA_DIR)
        else:
            _queue_store = MemoryQueueStore()
        logger.info("Queue store ready", extra={"reason": settings.STORE_PROVIDER})
    return _queue_store


def get_appointment_store() -> AppointmentStorePort:
    global _appointment_store
    if _appointment_store is None:
        if settings.STORE_PROVIDER == "json":
            _appointment_store = JsonAppointmentStore(data_dir=settings.DATA_DIR)
        else:
            _appointment_store = MemoryAppointmentStore()
    return _appointment_store


def get_attempt_tracker() -> FailedAttemptTracker:
    global _attempt_tracker
    if _attempt_tracker is None:
        _attempt_tracker = FailedAttemptTracker(
            max_attempts=settings.AUTH_MAX_FAILED_ATTEMPTS,
            lockout_seconds=settings.AUTH_LOCKOUT_MINUTES * 60,
            window_seconds=settings.AUTH_ATTEMPT_WINDOW_MINUTES * 60,
        )
    return _attempt_tracker


def get_queue_lifecycle_use_case(
    store: QueueStorePort = Depends(get_queue_store),
    appointments: AppointmentStorePort = Depends(get_appointment_store),
) -> QueueLifecycleUseCase:
    return QueueLifecycleUseCase(
        store=store,
        appointments=appointments,
        per_person_minutes=settings.PER_PERSON_MINUTES,
        grouping=settings.QUEUE_GROUPING,
    )


def get_queue_status_projector(store: QueueStorePort = Depends(get_queue_store)) -> QueueStatusProjector:
    return QueueStatusProjector(
        store=store,
        per_person_minutes=settings.PER_PERSON_MINUTES,
        grouping=settings.QUEUE_GROUPING,
    )


def get_appointment_use_case(
    store: AppointmentStorePort = Depends(get_appointment_store),
) -> AppointmentUseCase:
    return AppointmentUseCase(store=store)

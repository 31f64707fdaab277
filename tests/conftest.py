from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.auth.attempts import FailedAttemptTracker
from app.infrastructure.auth.tokens import create_access_token
from app.infrastructure.store.memory_store import MemoryAppointmentStore, MemoryQueueStore
from app.main import app
from app.wiring.dependencies import get_appointment_store, get_attempt_tracker, get_queue_store


class TickingClock:
    """Returns a strictly increasing UTC time on every call."""

    def __init__(self, start: datetime | None = None, step_seconds: float = 1.0) -> None:
        self._now = start or datetime(2025, 2, 15, 9, 0, tzinfo=timezone.utc)
        self._step = timedelta(seconds=step_seconds)

    def __call__(self) -> datetime:
        current = self._now
        self._now += self._step
        return current


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def queue_store() -> MemoryQueueStore:
    return MemoryQueueStore()


@pytest.fixture
def appointment_store() -> MemoryAppointmentStore:
    return MemoryAppointmentStore()


@pytest.fixture
def attempt_tracker() -> FailedAttemptTracker:
    return FailedAttemptTracker(max_attempts=3)


@pytest.fixture
def client(queue_store, appointment_store, attempt_tracker):
    app.dependency_overrides[get_queue_store] = lambda: queue_store
    app.dependency_overrides[get_appointment_store] = lambda: appointment_store
    app.dependency_overrides[get_attempt_tracker] = lambda: attempt_tracker
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def student_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('student-1', 'student')}"}


@pytest.fixture
def staff_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token('staff-1', 'staff')}"}

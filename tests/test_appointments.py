from __future__ import annotations

import pytest

from app.application.exceptions import NotFoundError, ValidationError
from app.application.use_cases.appointments import AppointmentUseCase
from app.domain.entities.appointment import AppointmentStatus


@pytest.fixture
def appointments(appointment_store, clock) -> AppointmentUseCase:
    return AppointmentUseCase(store=appointment_store, clock=clock)


def test_book_defaults_to_booked(appointments):
    appointment = appointments.book("Alice", "IT Support", "2025-02-20", "14:00")

    assert appointment.status is AppointmentStatus.BOOKED
    assert appointment.notes == ""


@pytest.mark.parametrize(
    "date,time",
    [("20-02-2025", "14:00"), ("2025-02-30", "14:00"), ("2025-02-20", "2pm"), ("2025-02-20", "25:00")],
)
def test_book_rejects_bad_date_or_time(appointments, date, time):
    with pytest.raises(ValidationError):
        appointments.book("Alice", "IT Support", date, time)


def test_list_sorted_by_date_then_time(appointments):
    appointments.book("Alice", "IT Support", "2025-02-20", "14:00")
    appointments.book("Bob", "IT Support", "2025-02-15", "10:00")
    appointments.book("Carol", "IT Support", "2025-02-15", "09:30")

    assert [a.student_name for a in appointments.list_appointments()] == ["Carol", "Bob", "Alice"]


def test_update_status_and_not_found(appointments):
    appointment = appointments.book("Alice", "IT Support", "2025-02-20", "14:00")

    updated = appointments.update(appointment.id, status="No-Show")

    assert updated.status is AppointmentStatus.NO_SHOW
    assert updated.appointment_time == "14:00"
    with pytest.raises(ValidationError):
        appointments.update(appointment.id, status="Lost")
    with pytest.raises(NotFoundError):
        appointments.update("missing", status="Confirmed")
    with pytest.raises(NotFoundError):
        appointments.get("missing")


def test_appointment_api_flow(client, student_headers, staff_headers):
    response = client.post(
        "/api/appointments",
        json={
            "studentName": "Alice",
            "serviceType": "IT Support",
            "appointmentDate": "2025-02-20",
            "appointmentTime": "14:00",
            "notes": "<script>laptop</script>",
        },
        headers=student_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["status"] == "Booked"
    assert "<" not in created["notes"]

    response = client.put(
        f"/api/appointments/{created['id']}", json={"status": "Confirmed"}, headers=staff_headers
    )
    assert response.json()["status"] == "Confirmed"

    listed = client.get("/api/appointments", headers=staff_headers).json()
    assert [a["id"] for a in listed] == [created["id"]]

    queued = client.post(
        "/api/queue",
        json={
            "studentName": "Alice",
            "serviceType": "IT Support",
            "contactNumber": "555-0101",
            "appointmentId": created["id"],
        },
        headers=student_headers,
    )
    assert queued.json()["queueEntry"]["appointmentId"] == created["id"]

    assert client.delete(f"/api/appointments/{created['id']}", headers=staff_headers).status_code == 200
    missing = client.get(f"/api/appointments/{created['id']}", headers=student_headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "Appointment not found"

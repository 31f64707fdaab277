from __future__ import annotations

import pytest

from app.application.exceptions import NotFoundError, ValidationError
from app.application.use_cases.queue_lifecycle import QueueLifecycleUseCase
from app.application.use_cases.queue_status import QueueStatusProjector
from app.application.utils.positions import GROUPING_GLOBAL
from app.domain.entities.queue_entry import QueueStatus


@pytest.fixture
def lifecycle(queue_store, clock) -> QueueLifecycleUseCase:
    return QueueLifecycleUseCase(store=queue_store, clock=clock)


@pytest.fixture
def projector(queue_store) -> QueueStatusProjector:
    return QueueStatusProjector(store=queue_store)


def _summary(views):
    return [(v.entry.student_name, v.entry.service_type, v.position, v.estimated_wait_time) for v in views]


def test_roster_is_sorted_by_service_then_position(lifecycle, projector):
    lifecycle.join("Alice", "IT Support", "1")
    lifecycle.join("Dan", "Advising", "4")
    lifecycle.join("Bob", "IT Support", "2")
    lifecycle.join("Erin", "Advising", "5")

    assert _summary(projector.list_entries()) == [
        ("Dan", "Advising", 1, 15),
        ("Erin", "Advising", 2, 30),
        ("Alice", "IT Support", 1, 15),
        ("Bob", "IT Support", 2, 30),
    ]


def test_roster_puts_non_waiting_entries_after_waiting(lifecycle, projector):
    alice = lifecycle.join("Alice", "IT Support", "1")
    lifecycle.join("Bob", "IT Support", "2")
    lifecycle.transition_status(alice.entry.id, "InProgress")

    assert _summary(projector.list_entries()) == [
        ("Bob", "IT Support", 1, 15),
        ("Alice", "IT Support", None, None),
    ]


def test_roster_filters_keep_positions_from_full_waiting_set(lifecycle, projector):
    alice = lifecycle.join("Alice", "IT Support", "1")
    lifecycle.join("Bob", "IT Support", "2")
    lifecycle.join("Dan", "Advising", "4")
    lifecycle.transition_status(alice.entry.id, "Cancelled")

    waiting_it = projector.list_entries(status="Waiting", service_type="IT Support")
    cancelled = projector.list_entries(status="Cancelled")

    assert _summary(waiting_it) == [("Bob", "IT Support", 1, 15)]
    assert _summary(cancelled) == [("Alice", "IT Support", None, None)]


def test_roster_rejects_unknown_status_filter(projector):
    with pytest.raises(ValidationError):
        projector.list_entries(status="Called")


def test_roster_reads_are_idempotent(lifecycle, projector):
    for name in ("Alice", "Bob", "Carol"):
        lifecycle.join(name, "IT Support", "1")

    first = projector.list_entries()
    second = projector.list_entries()

    assert _summary(first) == _summary(second)


def test_global_grouping_projection(queue_store, clock):
    lifecycle = QueueLifecycleUseCase(store=queue_store, grouping=GROUPING_GLOBAL, clock=clock)
    projector = QueueStatusProjector(store=queue_store, grouping=GROUPING_GLOBAL)
    lifecycle.join("Alice", "IT Support", "1")
    dan = lifecycle.join("Dan", "Advising", "4")

    assert dan.position == 2
    assert projector.get_entry(dan.entry.id).position == 2


def test_wait_time_probe(lifecycle, projector):
    lifecycle.join("Alice", "IT Support", "1")
    bob = lifecycle.join("Bob", "IT Support", "2")

    probe = projector.wait_time(bob.entry.id)

    assert (probe.position, probe.estimated_wait_time, probe.status) == (2, 30, QueueStatus.WAITING)


def test_wait_time_probe_for_completed_entry(lifecycle, projector):
    alice = lifecycle.join("Alice", "IT Support", "1")
    lifecycle.transition_status(alice.entry.id, "Completed")

    probe = projector.wait_time(alice.entry.id)

    assert probe.position is None
    assert probe.estimated_wait_time is None
    assert probe.status is QueueStatus.COMPLETED


def test_unknown_id_is_not_found_for_reads(projector):
    with pytest.raises(NotFoundError):
        projector.get_entry("missing")
    with pytest.raises(NotFoundError):
        projector.wait_time("missing")

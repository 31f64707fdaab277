from __future__ import annotations

from datetime import datetime, timedelta, timezone

from app.application.utils.positions import GROUPING_GLOBAL, GROUPING_SERVICE_TYPE, compute_placements
from app.domain.entities.queue_entry import QueueEntry, QueuePlacement, QueueStatus

T0 = datetime(2025, 2, 15, 9, 0, tzinfo=timezone.utc)


def _entry(entry_id: str, minute: int, service: str = "IT Support", status: QueueStatus = QueueStatus.WAITING) -> QueueEntry:
    return QueueEntry(
        id=entry_id,
        student_name=f"Student {entry_id}",
        service_type=service,
        contact_number="555-0100",
        joined_at=T0 + timedelta(minutes=minute),
        status=status,
    )


def test_empty_snapshot_has_no_placements():
    assert compute_placements([]) == {}


def test_positions_follow_join_order_and_wait_time_formula():
    # given out of order on purpose
    entries = [_entry("c", 3), _entry("a", 1), _entry("b", 2)]

    placements = compute_placements(entries)

    assert placements["a"] == QueuePlacement(position=1, estimated_wait_time=15)
    assert placements["b"] == QueuePlacement(position=2, estimated_wait_time=30)
    assert placements["c"] == QueuePlacement(position=3, estimated_wait_time=45)
    for placement in placements.values():
        assert placement.estimated_wait_time == placement.position * 15


def test_same_timestamp_is_broken_by_id():
    entries = [_entry("b", 0), _entry("a", 0)]

    placements = compute_placements(entries)

    assert placements["a"].position == 1
    assert placements["b"].position == 2


def test_terminal_and_in_progress_entries_are_not_numbered():
    entries = [
        _entry("done", 0, status=QueueStatus.COMPLETED),
        _entry("gone", 1, status=QueueStatus.CANCELLED),
        _entry("busy", 2, status=QueueStatus.IN_PROGRESS),
        _entry("next", 3),
    ]

    placements = compute_placements(entries)

    assert set(placements) == {"next"}
    assert placements["next"].position == 1


def test_positions_are_scoped_per_service_type():
    entries = [
        _entry("it-1", 0, "IT Support"),
        _entry("fin-1", 1, "Financial Aid"),
        _entry("it-2", 2, "IT Support"),
    ]

    placements = compute_placements(entries, grouping=GROUPING_SERVICE_TYPE)

    assert placements["it-1"].position == 1
    assert placements["it-2"].position == 2
    assert placements["fin-1"].position == 1


def test_global_grouping_numbers_across_services():
    entries = [
        _entry("it-1", 0, "IT Support"),
        _entry("fin-1", 1, "Financial Aid"),
        _entry("it-2", 2, "IT Support"),
    ]

    placements = compute_placements(entries, grouping=GROUPING_GLOBAL)

    assert [placements[i].position for i in ("it-1", "fin-1", "it-2")] == [1, 2, 3]


def test_custom_per_person_minutes():
    placements = compute_placements([_entry("a", 0), _entry("b", 1)], per_person_minutes=10)

    assert placements["b"].estimated_wait_time == 20


def test_monotonic_within_group_for_larger_snapshot():
    entries = [_entry(f"e{i:02d}", i, "Advising" if i % 2 else "IT Support") for i in range(20)]

    placements = compute_placements(entries)

    for service in ("Advising", "IT Support"):
        ordered = sorted((e for e in entries if e.service_type == service), key=lambda e: e.joined_at)
        positions = [placements[e.id].position for e in ordered]
        assert positions == list(range(1, len(ordered) + 1))

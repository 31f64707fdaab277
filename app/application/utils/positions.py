from __future__ import annotations

from collections import defaultdict
from typing import Iterable

from app.domain.entities.queue_entry import QueueEntry, QueuePlacement, QueueStatus

GROUPING_SERVICE_TYPE = "service_type"
GROUPING_GLOBAL = "global"

DEFAULT_PER_PERSON_MINUTES = 15


def grouping_key(entry: QueueEntry, grouping: str) -> str:
    if grouping == GROUPING_GLOBAL:
        return ""
    return entry.service_type


def compute_placements(
    entries: Iterable[QueueEntry],
    per_person_minutes: int = DEFAULT_PER_PERSON_MINUTES,
    grouping: str = GROUPING_SERVICE_TYPE,
) -> dict[str, QueuePlacement]:
    """
    Number the Waiting entries of a snapshot 1..N within each group.

    Order is joined_at ascending, ties broken by id. Non-waiting entries are
    ignored, so they never occupy a position. The result maps entry id to its
    placement.
    """
    groups: dict[str, list[QueueEntry]] = defaultdict(list)
    for entry in entries:
        if entry.status is QueueStatus.WAITING:
            groups[grouping_key(entry, grouping)].append(entry)

    placements: dict[str, QueuePlacement] = {}
    for members in groups.values():
        members.sort(key=lambda e: (e.joined_at, e.id))
        for position, entry in enumerate(members, start=1):
            placements[entry.id] = QueuePlacement(
                position=position,
                estimated_wait_time=position * per_person_minutes,
            )
    return placements

from __future__ import annotations

from app.application.exceptions import NotFoundError
from app.application.ports.queue_store import QueueStorePort
from app.application.utils.positions import (
    DEFAULT_PER_PERSON_MINUTES,
    GROUPING_SERVICE_TYPE,
    compute_placements,
)
from app.application.utils.sanitize import parse_enum, sanitize_text
from app.domain.entities.queue_entry import QueueEntry, QueueEntryView, QueueStatus, WaitTimeProbe


class QueueStatusProjector:
    """
    Read side of the queue. Every call reads the store and recomputes
    placements from the current Waiting set; nothing is cached.
    """

    def __init__(
        self,
        store: QueueStorePort,
        per_person_minutes: int = DEFAULT_PER_PERSON_MINUTES,
        grouping: str = GROUPING_SERVICE_TYPE,
    ) -> None:
        self._store = store
        self._per_person_minutes = per_person_minutes
        self._grouping = grouping

    def get_entry(self, entry_id: str) -> QueueEntryView:
        entry = self._require(entry_id)
        return self._project([entry])[0]

    def list_entries(
        self,
        status: str | QueueStatus | None = None,
        service_type: str | None = None,
    ) -> list[QueueEntryView]:
        status_filter = parse_enum(QueueStatus, status, "status") if status else None
        service_filter = sanitize_text(service_type) or None

        entries = self._store.list(status=status_filter, service_type=service_filter)
        views = self._project(entries)
        # Waiting entries first by position, the rest by join time.
        views.sort(
            key=lambda v: (
                v.entry.service_type,
                v.placement is None,
                v.position or 0,
                v.entry.joined_at,
                v.entry.id,
            )
        )
        return views

    def wait_time(self, entry_id: str) -> WaitTimeProbe:
        view = self.get_entry(entry_id)
        return WaitTimeProbe(
            position=view.position,
            estimated_wait_time=view.estimated_wait_time,
            status=view.entry.status,
        )

    def _require(self, entry_id: str) -> QueueEntry:
        entry = self._store.get(entry_id)
        if entry is None:
            raise NotFoundError("Queue entry not found")
        return entry

    def _project(self, entries: list[QueueEntry]) -> list[QueueEntryView]:
        if not any(e.status is QueueStatus.WAITING for e in entries):
            return [QueueEntryView(entry=e) for e in entries]
        # Placements always come from the full Waiting set, never a filtered subset.
        placements = compute_placements(
            self._store.list(status=QueueStatus.WAITING),
            per_person_minutes=self._per_person_minutes,
            grouping=self._grouping,
        )
        return [QueueEntryView(entry=e, placement=placements.get(e.id)) for e in entries]

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.entities.queue_entry import QueueEntry, QueueStatus


class QueueStorePort(ABC):
    @abstractmethod
    def create(self, entry: QueueEntry) -> QueueEntry:
        raise NotImplementedError

    @abstractmethod
    def get(self, entry_id: str) -> QueueEntry | None:
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        status: QueueStatus | None = None,
        service_type: str | None = None,
    ) -> list[QueueEntry]:
        """
        Return entries matching every given filter, in joined_at order.
        None filters match everything.
        """
        raise NotImplementedError

    @abstractmethod
    def update_status(self, entry_id: str, status: QueueStatus) -> QueueEntry | None:
        """
        Change only the status field. Returns the updated entry or None if the id is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, entry_id: str) -> bool:
        """Delete an entry. Returns False if the id is unknown."""
        raise NotImplementedError

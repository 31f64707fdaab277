from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class QueueStatus(str, Enum):
    WAITING = "Waiting"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (QueueStatus.COMPLETED, QueueStatus.CANCELLED)


@dataclass(frozen=True)
class QueueEntry:
    id: str
    student_name: str
    service_type: str
    contact_number: str
    joined_at: datetime
    status: QueueStatus = QueueStatus.WAITING
    appointment_id: str | None = None


@dataclass(frozen=True)
class QueuePlacement:
    position: int
    estimated_wait_time: int  # minutes


@dataclass(frozen=True)
class QueueEntryView:
    entry: QueueEntry
    placement: QueuePlacement | None = None  # None unless status is Waiting

    @property
    def position(self) -> int | None:
        return self.placement.position if self.placement else None

    @property
    def estimated_wait_time(self) -> int | None:
        return self.placement.estimated_wait_time if self.placement else None


@dataclass(frozen=True)
class WaitTimeProbe:
    position: int | None
    estimated_wait_time: int | None
    status: QueueStatus

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass
class _AttemptRecord:
    attempts: int
    last_attempt: float
    locked_until: float | None = None


@dataclass(frozen=True)
class AttemptStatus:
    attempts: int
    remaining: int
    locked: bool
    retry_after_seconds: int


class FailedAttemptTracker:
    """
    Counts failed authentications per client within a sliding window and
    locks a client out once the limit is reached.

    State lives in this process only; running several instances needs a
    shared store instead.
    """

    def __init__(
        self,
        max_attempts: int = 5,
        lockout_seconds: float = 15 * 60,
        window_seconds: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_attempts = max_attempts
        self._lockout_seconds = lockout_seconds
        self._window_seconds = window_seconds
        self._clock = clock
        self._records: dict[str, _AttemptRecord] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def check(self, client: str) -> AttemptStatus:
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            return self._status(self._records.get(client), now)

    def record_failure(self, client: str) -> AttemptStatus:
        now = self._clock()
        with self._lock:
            self._evict_expired(now)
            record = self._records.get(client)
            if record is None or (record.locked_until is not None and now >= record.locked_until):
                record = _AttemptRecord(attempts=0, last_attempt=now)
                self._records[client] = record
            record.attempts += 1
            record.last_attempt = now
            if record.attempts >= self._max_attempts and record.locked_until is None:
                record.locked_until = now + self._lockout_seconds
                self._logger.warning("Client locked out after failed attempts", extra={"client": client})
            return self._status(record, now)

    def record_success(self, client: str) -> None:
        with self._lock:
            self._records.pop(client, None)

    def _status(self, record: _AttemptRecord | None, now: float) -> AttemptStatus:
        if record is None:
            return AttemptStatus(attempts=0, remaining=self._max_attempts, locked=False, retry_after_seconds=0)
        locked = record.locked_until is not None and now < record.locked_until
        retry_after = int(record.locked_until - now + 0.999) if locked else 0
        return AttemptStatus(
            attempts=record.attempts,
            remaining=max(0, self._max_attempts - record.attempts),
            locked=locked,
            retry_after_seconds=retry_after,
        )

    def _evict_expired(self, now: float) -> None:
        expired = [
            client
            for client, record in self._records.items()
            if (record.locked_until is None or now >= record.locked_until)
            and now - record.last_attempt > self._window_seconds
        ]
        for client in expired:
            del self._records[client]

"""Subject mutex implementation.

In-process lock ensuring the single-writer rule per subject: two turns for
the same subject never interleave their read-process-save sequence.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from facetgraph.observability.logging import get_logger
from facetgraph.observability.metrics import SUBJECT_LOCK_TIMEOUTS

logger = get_logger(__name__)


class SubjectMutex:
    """asyncio-based lock for subject-level mutual exclusion.

    Locks are created on first use and dropped once no task holds or waits
    for them, so the table stays bounded by the number of active subjects.
    """

    def __init__(self, blocking_timeout: float = 5.0) -> None:
        """Initialize subject mutex.

        Args:
            blocking_timeout: How long to wait when trying to acquire (seconds)
        """
        self._blocking_timeout = blocking_timeout
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @property
    def blocking_timeout(self) -> float:
        return self._blocking_timeout

    @asynccontextmanager
    async def acquire(
        self,
        subject_id: str,
        blocking_timeout: float | None = None,
    ) -> AsyncGenerator[bool, None]:
        """Acquire exclusive lock for a subject.

        Args:
            subject_id: Subject identifier
            blocking_timeout: Override default blocking timeout

        Yields:
            True if lock was acquired, False if timed out

        Usage:
            async with mutex.acquire("subject-1") as acquired:
                if acquired:
                    # Safe to process
        """
        timeout = blocking_timeout if blocking_timeout is not None else self._blocking_timeout
        lock = self._locks.setdefault(subject_id, asyncio.Lock())
        self._users[subject_id] = self._users.get(subject_id, 0) + 1

        acquired = False
        try:
            try:
                await asyncio.wait_for(lock.acquire(), timeout=timeout)
                acquired = True
            except TimeoutError:
                logger.warning("subject_lock_timeout", subject_id=subject_id, timeout=timeout)
                SUBJECT_LOCK_TIMEOUTS.inc()
            yield acquired
        finally:
            if acquired:
                lock.release()
            self._users[subject_id] -= 1
            if self._users[subject_id] == 0:
                del self._users[subject_id]
                del self._locks[subject_id]

    def is_locked(self, subject_id: str) -> bool:
        """Check if a subject is currently locked."""
        lock = self._locks.get(subject_id)
        return lock is not None and lock.locked()

"""
In-memory repositories.

Used by tests and by callers that embed the scheduler without a database.
"""

from datetime import datetime

from lexirecall.domain.models import ReviewRecord, SessionSummary
from lexirecall.domain.ports import ReviewRepository, SessionRepository


def _due_sort_key(record: ReviewRecord) -> tuple[float, datetime]:
    return (record.memory_strength, record.next_review_at or datetime.min)


class InMemoryReviewRepository(ReviewRepository):
    def __init__(self, records: list[ReviewRecord] | None = None):
        self._records: dict[str, ReviewRecord] = {r.item_id: r for r in records or []}

    async def get(self, item_id: str) -> ReviewRecord | None:
        return self._records.get(item_id)

    async def save(self, record: ReviewRecord) -> None:
        self._records[record.item_id] = record

    async def list_due(self, now: datetime, limit: int) -> list[ReviewRecord]:
        due = [r for r in self._records.values() if r.is_due(now)]
        due.sort(key=_due_sort_key)
        return due[: max(0, limit)]

    async def list_all(self) -> list[ReviewRecord]:
        return list(self._records.values())


class InMemorySessionRepository(SessionRepository):
    def __init__(self, sessions: list[SessionSummary] | None = None):
        self._sessions: list[SessionSummary] = list(sessions or [])

    async def add(self, session: SessionSummary) -> None:
        self._sessions.append(session)

    async def list_sessions(self) -> list[SessionSummary]:
        return sorted(self._sessions, key=lambda s: s.start_time)

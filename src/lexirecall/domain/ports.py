"""
Ports (interfaces) for review persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import datetime

from .models import ReviewRecord, SessionSummary


class ReviewRepository(ABC):
    """
    Port for loading and storing review records.

    Implementations:
        - InMemoryReviewRepository: Dict-backed, for tests and embedding.
        - SqliteReviewRepository: Local SQLite database.
    """

    @abstractmethod
    async def get(self, item_id: str) -> ReviewRecord | None:
        """
        Fetch the review record for an item.

        Returns:
            The stored record, or None if the item has never been studied.
        """
        pass

    @abstractmethod
    async def save(self, record: ReviewRecord) -> None:
        """
        Insert or replace the record for record.item_id.
        """
        pass

    @abstractmethod
    async def list_due(self, now: datetime, limit: int) -> list[ReviewRecord]:
        """
        Fetch records whose next_review_at is at or before now.

        Returns:
            At most `limit` records, weakest memory first, then earliest due.
        """
        pass

    @abstractmethod
    async def list_all(self) -> list[ReviewRecord]:
        pass


class SessionRepository(ABC):
    """
    Port for study session summaries consumed by the insight helpers.
    """

    @abstractmethod
    async def add(self, session: SessionSummary) -> None:
        pass

    @abstractmethod
    async def list_sessions(self) -> list[SessionSummary]:
        """
        Fetch all recorded sessions, oldest first.
        """
        pass

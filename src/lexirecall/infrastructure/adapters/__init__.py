# Infrastructure Adapters Package
from .memory_store import InMemoryReviewRepository, InMemorySessionRepository
from .sqlite_store import SqliteReviewRepository, SqliteSessionRepository, SqliteStore

__all__ = [
    "InMemoryReviewRepository",
    "InMemorySessionRepository",
    "SqliteStore",
    "SqliteReviewRepository",
    "SqliteSessionRepository",
]

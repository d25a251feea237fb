"""
Review Service Factory
Centralizes wiring of the configured repositories into a ReviewService.
"""

from lexirecall.application.config import AppConfig
from lexirecall.application.review_service import ReviewService
from lexirecall.infrastructure.adapters.sqlite_store import (
    SqliteReviewRepository,
    SqliteSessionRepository,
)


def get_review_service(config: AppConfig) -> ReviewService:
    """
    Returns a ReviewService backed by the SQLite file at config.db_path.
    """
    return ReviewService(
        review_repo=SqliteReviewRepository(config.db_path),
        session_repo=SqliteSessionRepository(config.db_path),
    )

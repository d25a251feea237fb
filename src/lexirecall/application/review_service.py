"""
Review Service: Application layer orchestrator.

Owns the read-modify-write cycle around the pure scheduler: fetch the
record, schedule the answer, stamp timestamps, persist.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from lexirecall.domain.constants import (
    DEFAULT_DIFFICULTY,
    DEFAULT_DUE_LIMIT,
    DEFAULT_EFFICIENCY_WINDOW_DAYS,
    DEFAULT_PREDICTION_DAYS,
    MASTERED_MIN_STRENGTH,
    TARGET_VOCABULARY_SIZE,
)
from lexirecall.domain.models import (
    AnswerEvent,
    EfficiencyReport,
    LearningOverview,
    MasteryLevel,
    ProgressPrediction,
    ReviewRecord,
    SessionSummary,
    StudyAdvice,
)
from lexirecall.domain.ports import ReviewRepository, SessionRepository

from .insights import (
    calculate_learning_efficiency,
    generate_study_advice,
    predict_learning_progress,
)
from .scheduler import compute_next_review, evaluate_mastery

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Application service for recording answers and querying review state.

    Depends on the ReviewRepository / SessionRepository abstractions, not on
    concrete adapters. Updates to the same item are serialised within this
    service instance; callers sharing a store across processes must rely on
    the store's own transactions.
    """

    def __init__(
        self,
        review_repo: ReviewRepository,
        session_repo: SessionRepository | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            review_repo: The repository (port) for review records.
            session_repo: Optional session repository; insight queries need it.
            clock: Source of "now"; defaults to datetime.now.
        """
        self._reviews = review_repo
        self._sessions = session_repo
        self._clock = clock or datetime.now
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, item_id: str) -> asyncio.Lock:
        lock = self._locks.get(item_id)
        if lock is None:
            lock = self._locks[item_id] = asyncio.Lock()
        return lock

    async def record_answer(
        self,
        item_id: str,
        event: AnswerEvent,
        difficulty: int = DEFAULT_DIFFICULTY,
    ) -> ReviewRecord:
        """
        Apply one answer to an item and persist the result.

        Args:
            item_id: Vocabulary item identifier.
            event: Outcome of the attempt.
            difficulty: Used only when the item has no record yet.

        Returns:
            The persisted, updated ReviewRecord.
        """
        async with self._lock_for(item_id):
            record = await self._reviews.get(item_id)
            if record is None:
                logger.info(f"First exposure of {item_id!r} (difficulty={difficulty})")
                record = ReviewRecord.initial(item_id, difficulty)

            update = compute_next_review(record, event)
            updated = update.apply_to(record, self._clock())
            await self._reviews.save(updated)

        logger.info(
            f"Recorded answer for {item_id!r}: correct={event.is_correct}, "
            f"strength={update.new_memory_strength}, "
            f"next review in {update.next_review_interval_days}d"
        )
        return updated

    async def get_record(self, item_id: str) -> ReviewRecord | None:
        return await self._reviews.get(item_id)

    async def get_due_items(self, limit: int = DEFAULT_DUE_LIMIT) -> list[ReviewRecord]:
        """
        Records due now, weakest first.
        """
        return await self._reviews.list_due(self._clock(), limit)

    async def get_mastery(self, item_id: str) -> MasteryLevel:
        """
        Mastery level of an item; unknown items are NEW.
        """
        record = await self._reviews.get(item_id)
        if record is None:
            return MasteryLevel.NEW
        return evaluate_mastery(record)

    async def get_overview(self) -> LearningOverview:
        records = await self._reviews.list_all()
        now = self._clock()
        return LearningOverview(
            learned_words=len(records),
            mastered_words=sum(1 for r in records if r.memory_strength >= MASTERED_MIN_STRENGTH),
            due_for_review=sum(1 for r in records if r.is_due(now)),
        )

    async def log_session(self, session: SessionSummary) -> None:
        if self._sessions is None:
            raise RuntimeError("ReviewService was created without a session repository")
        await self._sessions.add(session)
        logger.info(
            f"Logged {session.session_type} session: {session.words_studied} words, "
            f"{session.correct_answers}/{session.total_answers} correct"
        )

    async def get_efficiency(
        self, window_days: int = DEFAULT_EFFICIENCY_WINDOW_DAYS
    ) -> EfficiencyReport:
        """
        Efficiency over the last `window_days`. Zero report without sessions.
        """
        if self._sessions is None:
            return EfficiencyReport()
        sessions = await self._sessions.list_sessions()
        return calculate_learning_efficiency(sessions, window_days, now=self._clock())

    async def get_prediction(
        self,
        days: int = DEFAULT_PREDICTION_DAYS,
        window_days: int = DEFAULT_EFFICIENCY_WINDOW_DAYS,
    ) -> ProgressPrediction:
        overview = await self.get_overview()
        efficiency = await self.get_efficiency(window_days)
        return predict_learning_progress(
            overview.learned_words,
            overview.mastered_words,
            efficiency.words_per_hour,
            days,
        )

    async def get_advice(
        self,
        total_words: int = TARGET_VOCABULARY_SIZE,
        window_days: int = DEFAULT_EFFICIENCY_WINDOW_DAYS,
    ) -> list[StudyAdvice]:
        overview = await self.get_overview()
        efficiency = await self.get_efficiency(window_days)
        return generate_study_advice(
            overview.learned_words, overview.mastered_words, total_words, efficiency
        )

import asyncio
from datetime import date, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from lexirecall.application.review_service import ReviewService
from lexirecall.domain.models import AnswerEvent, MasteryLevel, ReviewRecord, SessionSummary
from lexirecall.infrastructure.adapters.memory_store import InMemoryReviewRepository


@pytest.fixture
def service(review_repo, session_repo, clock):
    return ReviewService(review_repo=review_repo, session_repo=session_repo, clock=clock)


class YieldingReviewRepository(InMemoryReviewRepository):
    """Suspends between read and write so concurrent updates could interleave."""

    async def get(self, item_id):
        await asyncio.sleep(0)
        return await super().get(item_id)

    async def save(self, record):
        await asyncio.sleep(0)
        await super().save(record)


@pytest.mark.asyncio
async def test_first_answer_creates_record(service, review_repo, clock):
    record = await service.record_answer(
        "apple", AnswerEvent(is_correct=True, response_time_ms=5000), difficulty=3
    )

    assert record.review_count == 1
    assert record.correct_count == 1
    assert record.memory_strength == 32
    assert record.last_review_at == clock.now
    assert record.next_review_at == clock.now + timedelta(days=1)
    assert await service.get_record("apple") == record


@pytest.mark.asyncio
async def test_difficulty_only_applies_to_new_items(service, review_repo):
    await review_repo.save(ReviewRecord(item_id="kiwi", difficulty=1))

    record = await service.record_answer("kiwi", AnswerEvent(is_correct=True), difficulty=5)

    assert record.difficulty == 1


@pytest.mark.asyncio
async def test_sequential_answers_accumulate(service, clock):
    await service.record_answer("apple", AnswerEvent(is_correct=True, response_time_ms=5000))
    clock.advance(days=1)
    record = await service.record_answer("apple", AnswerEvent(is_correct=False))

    assert record.review_count == 2
    assert record.correct_count == 1
    assert record.next_review_at == clock.now + timedelta(days=1)


@pytest.mark.asyncio
async def test_concurrent_answers_are_serialised(session_repo, clock):
    repo = YieldingReviewRepository()
    service = ReviewService(review_repo=repo, session_repo=session_repo, clock=clock)

    await asyncio.gather(
        *(service.record_answer("apple", AnswerEvent(is_correct=True)) for _ in range(10))
    )

    record = await repo.get("apple")
    assert record.review_count == 10
    assert record.correct_count == 10


@pytest.mark.asyncio
async def test_due_items(service, review_repo, clock):
    now = clock.now
    await review_repo.save(
        ReviewRecord(item_id="strong", memory_strength=70, next_review_at=now - timedelta(hours=1))
    )
    await review_repo.save(
        ReviewRecord(item_id="weak", memory_strength=10, next_review_at=now - timedelta(days=2))
    )
    await review_repo.save(
        ReviewRecord(item_id="later", memory_strength=0, next_review_at=now + timedelta(days=1))
    )
    await review_repo.save(ReviewRecord(item_id="unscheduled"))

    due = await service.get_due_items()
    assert [r.item_id for r in due] == ["weak", "strong"]

    assert [r.item_id for r in await service.get_due_items(limit=1)] == ["weak"]


@pytest.mark.asyncio
async def test_answered_item_becomes_due_after_interval(service, clock):
    await service.record_answer("apple", AnswerEvent(is_correct=True, response_time_ms=5000))
    assert await service.get_due_items() == []

    clock.advance(days=1)
    assert [r.item_id for r in await service.get_due_items()] == ["apple"]


@pytest.mark.asyncio
async def test_mastery(service, review_repo):
    assert await service.get_mastery("unknown") == MasteryLevel.NEW

    await review_repo.save(
        ReviewRecord(item_id="apple", review_count=6, correct_count=6, memory_strength=90)
    )
    assert await service.get_mastery("apple") == MasteryLevel.MASTERED


@pytest.mark.asyncio
async def test_overview(service, review_repo, clock):
    now = clock.now
    await review_repo.save(
        ReviewRecord(item_id="a", memory_strength=85, next_review_at=now + timedelta(days=3))
    )
    await review_repo.save(
        ReviewRecord(item_id="b", memory_strength=20, next_review_at=now - timedelta(days=1))
    )

    overview = await service.get_overview()
    assert overview.learned_words == 2
    assert overview.mastered_words == 1
    assert overview.due_for_review == 1


@pytest.mark.asyncio
async def test_efficiency_and_prediction_from_logged_sessions(service, clock):
    start = clock.now - timedelta(hours=1)
    await service.log_session(
        SessionSummary(
            session_date=start.date(),
            start_time=start,
            end_time=clock.now,
            words_studied=40,
            correct_answers=9,
            total_answers=10,
        )
    )

    efficiency = await service.get_efficiency(7)
    assert efficiency.words_per_hour == 40
    assert efficiency.accuracy == 90

    prediction = await service.get_prediction(days=10)
    assert prediction.daily_average == 20
    assert prediction.predicted_learned_words == 200


@pytest.mark.asyncio
async def test_advice_without_history(service):
    advice = await service.get_advice(total_words=3000)
    assert [a.kind for a in advice] == ["memory", "speed", "accuracy", "consistency"]


@pytest.mark.asyncio
async def test_without_session_repository(review_repo, clock):
    service = ReviewService(review_repo=review_repo, clock=clock)

    assert (await service.get_efficiency()).efficiency == 0
    with pytest.raises(RuntimeError):
        await service.log_session(
            SessionSummary(session_date=date(2026, 3, 10), start_time=datetime(2026, 3, 10))
        )


@pytest.mark.asyncio
async def test_repository_errors_propagate(clock):
    repo = AsyncMock()
    repo.get.side_effect = OSError("disk gone")
    service = ReviewService(review_repo=repo, clock=clock)

    with pytest.raises(OSError):
        await service.record_answer("apple", AnswerEvent(is_correct=True))
    repo.save.assert_not_called()

"""
Domain models for the lexirecall memory model.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from enum import Enum

from .constants import DEFAULT_DIFFICULTY, MIN_INTERVAL_DAYS


class MasteryLevel(str, Enum):
    """Coarse classification of how well an item is known. Derived, never stored."""

    NEW = "new"
    LEARNING = "learning"
    FAMILIAR = "familiar"
    MASTERED = "mastered"


@dataclass(frozen=True)
class ReviewRecord:
    """
    Review state of a single vocabulary item.

    Attributes:
        item_id: Identifier of the vocabulary item.
        review_count: Total number of answered presentations.
        correct_count: Subset of review_count answered correctly.
            Callers must keep correct_count <= review_count; it is not checked.
        memory_strength: Estimated retention in [0, 100].
        difficulty: Static item difficulty, 1 (easiest) to 5 (hardest).
        next_review_interval_days: Interval computed by the most recent update.
        last_review_at: Wall-clock time of the last answer (caller owned).
        next_review_at: last_review_at + interval (caller owned).
    """

    item_id: str
    review_count: int = 0
    correct_count: int = 0
    memory_strength: float = 0.0
    difficulty: int = DEFAULT_DIFFICULTY
    next_review_interval_days: int = MIN_INTERVAL_DAYS
    last_review_at: datetime | None = None
    next_review_at: datetime | None = None

    @classmethod
    def initial(cls, item_id: str, difficulty: int = DEFAULT_DIFFICULTY) -> "ReviewRecord":
        """Zero-valued record for an item studied for the first time."""
        return cls(item_id=item_id, difficulty=difficulty)

    @property
    def accuracy(self) -> float:
        if self.review_count <= 0:
            return 0.0
        return self.correct_count / self.review_count

    def is_due(self, now: datetime) -> bool:
        return self.next_review_at is not None and self.next_review_at <= now


@dataclass(frozen=True)
class AnswerEvent:
    """
    Outcome of one attempt at an item.

    Attributes:
        is_correct: Whether the learner answered correctly.
        response_time_ms: Latency in milliseconds, None when not measured.
    """

    is_correct: bool
    response_time_ms: int | None = None


@dataclass(frozen=True)
class UpdatedReview:
    """Result of scheduling one answer."""

    next_review_interval_days: int
    new_memory_strength: int
    new_review_count: int
    new_correct_count: int
    accuracy_percent: int

    def apply_to(self, record: ReviewRecord, reviewed_at: datetime) -> ReviewRecord:
        """
        Fold this update into a record and stamp the review timestamps.

        The item id and difficulty are carried over unchanged.
        """
        return replace(
            record,
            review_count=self.new_review_count,
            correct_count=self.new_correct_count,
            memory_strength=float(self.new_memory_strength),
            next_review_interval_days=self.next_review_interval_days,
            last_review_at=reviewed_at,
            next_review_at=reviewed_at + timedelta(days=self.next_review_interval_days),
        )


@dataclass(frozen=True)
class SessionSummary:
    """
    Summary of one study session, as recorded by the session layer.

    Attributes:
        session_date: Calendar day the session belongs to.
        start_time: When the session started.
        end_time: When it ended; None for a session still running.
        words_studied: Distinct words presented.
        correct_answers: Correct answers given.
        total_answers: All answers given.
        session_type: Free-form label (e.g. "learn", "review", "test").
    """

    session_date: date
    start_time: datetime
    end_time: datetime | None = None
    words_studied: int = 0
    correct_answers: int = 0
    total_answers: int = 0
    session_type: str = "learn"


@dataclass(frozen=True)
class PlanCategory:
    name: str
    count: int
    priority: str
    reason: str


@dataclass(frozen=True)
class StudyPlan:
    total_words: int
    new_words: int
    review_words: int
    categories: list[PlanCategory] = field(default_factory=list)


@dataclass(frozen=True)
class EfficiencyReport:
    """
    Aggregated learning efficiency over a time window.

    All metrics are integers except total_hours (one decimal).
    An all-zero report means "no qualifying sessions".
    """

    efficiency: int = 0
    words_per_hour: int = 0
    accuracy: int = 0
    retention: int = 0
    total_hours: float = 0.0


@dataclass(frozen=True)
class StudyAdvice:
    kind: str  # memory, speed, accuracy, consistency
    priority: str  # high, medium
    message: str
    action: str


@dataclass(frozen=True)
class CompletionEstimate:
    days: int
    months: int
    message: str


@dataclass(frozen=True)
class ProgressPrediction:
    days: int
    predicted_learned_words: int
    predicted_mastered_words: int
    daily_average: int
    completion: CompletionEstimate


@dataclass(frozen=True)
class LearningOverview:
    """Counts over all review records, as shown on a statistics screen."""

    learned_words: int
    mastered_words: int
    due_for_review: int

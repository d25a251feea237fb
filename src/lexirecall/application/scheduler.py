"""
Memory model and review-interval policy.

Converts an item's review record plus the latest answer into an updated
memory strength and the number of days until the item should be shown again.

This is a pure computation module with no I/O. Every function is total:
out-of-range inputs are clamped or defaulted instead of rejected.
"""

import logging
import math

from lexirecall.domain.constants import (
    ACCURACY_WEIGHT,
    BASE_INTERVALS_DAYS,
    CORRECT_REINFORCEMENT,
    DECAY_FACTOR,
    DEFAULT_DIFFICULTY_MULTIPLIER,
    DIFFICULTY_MULTIPLIERS,
    FAMILIAR_MIN_STRENGTH,
    INCORRECT_INTERVAL_FACTOR,
    INCORRECT_PENALTY,
    INCORRECT_REINFORCEMENT,
    LEARNING_MIN_REVIEWS,
    MASTERED_MIN_ACCURACY,
    MASTERED_MIN_STRENGTH,
    MAX_STRENGTH,
    MIN_INTERVAL_DAYS,
    MIN_STRENGTH,
    RESPONSE_TIME_BUCKETS,
    SLOW_RESPONSE_FACTOR,
    STRENGTH_INTERVAL_BONUS,
    TIME_WEIGHT,
    UNMEASURED_RESPONSE_FACTOR,
)
from lexirecall.domain.models import AnswerEvent, MasteryLevel, ReviewRecord, UpdatedReview

from .utils.numbers import clamp, round_half_up, safe_ratio

logger = logging.getLogger(__name__)


def get_base_interval(review_count: int) -> int:
    """
    Base interval in days for the given (post-update) review count.

    Growth flattens at the last table entry instead of running off the end.
    """
    if review_count <= 0:
        return BASE_INTERVALS_DAYS[0]
    index = min(review_count - 1, len(BASE_INTERVALS_DAYS) - 1)
    return BASE_INTERVALS_DAYS[index]


def get_difficulty_multiplier(difficulty: int | None) -> float:
    """Easier items (1) stretch the interval, harder items (5) shrink it."""
    return DIFFICULTY_MULTIPLIERS.get(difficulty, DEFAULT_DIFFICULTY_MULTIPLIER)


def calculate_time_factor(response_time_ms: int | None) -> float:
    """
    Map answer latency to a confidence factor in [0.6, 1.0].

    A missing, zero or negative latency counts as "not measured".
    """
    if not response_time_ms or response_time_ms < 0:
        return UNMEASURED_RESPONSE_FACTOR

    for upper_bound, factor in RESPONSE_TIME_BUCKETS:
        if response_time_ms < upper_bound:
            return factor
    return SLOW_RESPONSE_FACTOR


def update_memory_strength(
    current_strength: float,
    is_correct: bool,
    accuracy: float,
    time_factor: float,
) -> float:
    """
    First-stage strength update: outcome delta, then decay, then clamp.

    Args:
        current_strength: Strength before this answer.
        is_correct: Outcome of the answer.
        accuracy: Post-update correct/total ratio in [0, 1].
        time_factor: Result of calculate_time_factor().

    Returns:
        Strength in [0, 100], unrounded.
    """
    strength = clamp(current_strength, MIN_STRENGTH, MAX_STRENGTH)

    if is_correct:
        strength += accuracy * ACCURACY_WEIGHT + time_factor * TIME_WEIGHT
    else:
        strength -= INCORRECT_PENALTY

    # Decay applies to every answer, correct ones included.
    strength *= DECAY_FACTOR

    return clamp(strength, MIN_STRENGTH, MAX_STRENGTH)


def interval_from_strength(
    strength: float,
    is_correct: bool,
    base_interval: int,
    difficulty_multiplier: float,
) -> tuple[int, float]:
    """
    Second stage: derive the interval from the decayed strength, then apply
    the flat reinforcement (+5 correct, -20 incorrect).

    Returns:
        (interval_days, final_strength). interval_days is always >= 1.
    """
    if is_correct:
        strength_multiplier = 1 + (strength / MAX_STRENGTH) * STRENGTH_INTERVAL_BONUS
        interval = math.floor(base_interval * difficulty_multiplier * strength_multiplier)
        final_strength = min(MAX_STRENGTH, strength + CORRECT_REINFORCEMENT)
    else:
        interval = math.floor(base_interval * INCORRECT_INTERVAL_FACTOR)
        final_strength = max(MIN_STRENGTH, strength - INCORRECT_REINFORCEMENT)

    return max(MIN_INTERVAL_DAYS, interval), final_strength


def compute_next_review(record: ReviewRecord, event: AnswerEvent) -> UpdatedReview:
    """
    Schedule the next review of an item after one answer.

    The record may be the zero-valued initial record (first exposure).
    Same inputs always produce the same output.
    """
    review_count = max(0, record.review_count)
    correct_count = max(0, record.correct_count)

    new_review_count = review_count + 1
    new_correct_count = correct_count + (1 if event.is_correct else 0)
    accuracy = safe_ratio(new_correct_count, new_review_count)

    time_factor = calculate_time_factor(event.response_time_ms)
    base_interval = get_base_interval(new_review_count)
    difficulty_multiplier = get_difficulty_multiplier(record.difficulty)

    strength = update_memory_strength(
        record.memory_strength, event.is_correct, accuracy, time_factor
    )
    interval, final_strength = interval_from_strength(
        strength, event.is_correct, base_interval, difficulty_multiplier
    )

    new_strength = round_half_up(clamp(final_strength, MIN_STRENGTH, MAX_STRENGTH))

    logger.debug(
        f"Scheduled {record.item_id}: correct={event.is_correct} "
        f"strength {record.memory_strength} -> {new_strength}, interval={interval}d"
    )

    return UpdatedReview(
        next_review_interval_days=interval,
        new_memory_strength=new_strength,
        new_review_count=new_review_count,
        new_correct_count=new_correct_count,
        accuracy_percent=round_half_up(accuracy * 100),
    )


def evaluate_mastery(record: ReviewRecord) -> MasteryLevel:
    """
    Classify a record. Checks run in a fixed order: new, low review count,
    mastered, familiar, and learning as the fallback.

    Accuracy is always derived from the record's own counts.
    """
    if record.review_count <= 0:
        return MasteryLevel.NEW
    if record.review_count < LEARNING_MIN_REVIEWS:
        return MasteryLevel.LEARNING
    if (
        record.memory_strength >= MASTERED_MIN_STRENGTH
        and record.accuracy >= MASTERED_MIN_ACCURACY
    ):
        return MasteryLevel.MASTERED
    if record.memory_strength >= FAMILIAR_MIN_STRENGTH:
        return MasteryLevel.FAMILIAR
    return MasteryLevel.LEARNING

"""
Learning insights derived from study sessions and vocabulary counts.

Efficiency, retention, advice and progress projection. Pure computation,
no I/O; every ratio falls back to 0 instead of dividing by zero.
"""

import math
from collections.abc import Iterable
from datetime import datetime, time, timedelta

from lexirecall.domain.constants import (
    ADVICE_MIN_ACCURACY,
    ADVICE_MIN_HOURS,
    ADVICE_MIN_MASTERY_RATE,
    ADVICE_MIN_WORDS_PER_HOUR,
    ASSUMED_DAILY_PACE,
    DAYS_PER_MONTH,
    DEFAULT_EFFICIENCY_WINDOW_DAYS,
    DEFAULT_PREDICTION_DAYS,
    EFFICIENCY_WEIGHTS,
    MIN_DAILY_NEW_WORDS,
    TARGET_VOCABULARY_SIZE,
    WORDS_PER_HOUR_TO_DAILY,
)
from lexirecall.domain.models import (
    CompletionEstimate,
    EfficiencyReport,
    ProgressPrediction,
    SessionSummary,
    StudyAdvice,
)

from .utils.numbers import round_half_up, safe_ratio


def _session_hours(session: SessionSummary, now: datetime) -> float:
    end = session.end_time or now
    seconds = (end - session.start_time).total_seconds()
    return max(0.0, seconds) / 3600.0


def _recent_sessions(
    sessions: Iterable[SessionSummary], window_days: int, now: datetime
) -> list[SessionSummary]:
    cutoff = now - timedelta(days=max(0, window_days))
    return [
        s
        for s in sessions
        if datetime.combine(s.session_date, time.min, tzinfo=now.tzinfo) >= cutoff
    ]


def calculate_retention(sessions: Iterable[SessionSummary]) -> int:
    """
    Mean per-session accuracy (percent) over sessions with at least one answer.
    """
    scores = [
        s.correct_answers / s.total_answers * 100 for s in sessions if s.total_answers > 0
    ]
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def calculate_learning_efficiency(
    sessions: Iterable[SessionSummary] | None,
    window_days: int = DEFAULT_EFFICIENCY_WINDOW_DAYS,
    now: datetime | None = None,
) -> EfficiencyReport:
    """
    Aggregate sessions of the last `window_days` days into efficiency metrics.

    Sessions without an end time are counted as running until `now`.

    Returns:
        EfficiencyReport; all zeros when no session falls in the window.
    """
    now = now or datetime.now()
    recent = _recent_sessions(sessions or [], window_days, now)
    if not recent:
        return EfficiencyReport()

    total_hours = sum(_session_hours(s, now) for s in recent)
    total_words = sum(max(0, s.words_studied) for s in recent)
    total_correct = sum(max(0, s.correct_answers) for s in recent)
    total_answers = sum(max(0, s.total_answers) for s in recent)

    words_per_hour = round_half_up(safe_ratio(total_words, total_hours))
    accuracy = round_half_up(safe_ratio(total_correct, total_answers) * 100)
    retention = calculate_retention(recent)

    w_speed, w_accuracy, w_retention = EFFICIENCY_WEIGHTS
    efficiency = round_half_up(
        words_per_hour * w_speed + accuracy * w_accuracy + retention * w_retention
    )

    return EfficiencyReport(
        efficiency=efficiency,
        words_per_hour=words_per_hour,
        accuracy=accuracy,
        retention=retention,
        total_hours=round_half_up(total_hours * 10) / 10,
    )


def generate_study_advice(
    learned_words: int,
    mastered_words: int,
    total_words: int,
    efficiency: EfficiencyReport,
) -> list[StudyAdvice]:
    """
    Personalised suggestions based on mastery rate and recent efficiency.
    """
    advice: list[StudyAdvice] = []

    mastery_rate = 0.0
    if total_words > 0:
        mastery_rate = safe_ratio(mastered_words, learned_words) * 100

    if mastery_rate < ADVICE_MIN_MASTERY_RATE:
        advice.append(
            StudyAdvice(
                kind="memory",
                priority="high",
                message="Review more often to consolidate the words you have learned",
                action="Spend 30% of each day on review",
            )
        )

    if efficiency.words_per_hour < ADVICE_MIN_WORDS_PER_HOUR:
        advice.append(
            StudyAdvice(
                kind="speed",
                priority="medium",
                message="Progress is slow; try studying with fewer distractions",
                action="Pick a quiet place and put the phone away",
            )
        )

    if efficiency.accuracy < ADVICE_MIN_ACCURACY:
        advice.append(
            StudyAdvice(
                kind="accuracy",
                priority="high",
                message="Accuracy is low; slow down a little",
                action="Read definitions and example sentences carefully",
            )
        )

    if efficiency.total_hours < ADVICE_MIN_HOURS:
        advice.append(
            StudyAdvice(
                kind="consistency",
                priority="medium",
                message="Study time is short; increase your daily practice",
                action="Study at least 15 minutes every day",
            )
        )

    return advice


def estimate_completion_time(learned_words: float) -> CompletionEstimate:
    """
    Days and months left to reach the target vocabulary size.

    Uses a fixed target and a fixed daily pace; both are independent of the
    learner's measured speed.
    """
    remaining = max(0, TARGET_VOCABULARY_SIZE - learned_words)
    if remaining == 0:
        return CompletionEstimate(
            days=0, months=0, message="Congratulations! Target vocabulary reached"
        )

    days_needed = math.ceil(remaining / ASSUMED_DAILY_PACE)
    months_needed = math.ceil(days_needed / DAYS_PER_MONTH)
    return CompletionEstimate(
        days=days_needed,
        months=months_needed,
        message=f"About {months_needed} month(s) to reach the target vocabulary",
    )


def predict_learning_progress(
    learned_words: int,
    mastered_words: int,
    words_per_hour: float,
    days: int = DEFAULT_PREDICTION_DAYS,
) -> ProgressPrediction:
    """
    Linear projection of learned and mastered words `days` from now.
    """
    learned = max(0, learned_words)
    mastered = max(0, mastered_words)
    days = max(0, days)

    daily_new_words = max(MIN_DAILY_NEW_WORDS, max(0.0, words_per_hour) * WORDS_PER_HOUR_TO_DAILY)
    mastered_ratio = mastered / max(1, learned)
    daily_mastered_words = mastered_ratio * daily_new_words

    predicted_learned = learned + daily_new_words * days
    predicted_mastered = mastered + daily_mastered_words * days

    return ProgressPrediction(
        days=days,
        predicted_learned_words=round_half_up(predicted_learned),
        predicted_mastered_words=round_half_up(predicted_mastered),
        daily_average=round_half_up(daily_new_words),
        completion=estimate_completion_time(predicted_learned),
    )

"""Tests for efficiency, retention, advice and progress prediction."""

from datetime import date, datetime, timedelta

import pytest

from lexirecall.application.insights import (
    calculate_learning_efficiency,
    calculate_retention,
    estimate_completion_time,
    generate_study_advice,
    predict_learning_progress,
)
from lexirecall.domain.models import EfficiencyReport, SessionSummary

NOW = datetime(2026, 3, 10, 12, 0, 0)


def make_session(day: date, start_hour: int, minutes: int, words: int, correct: int, total: int):
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=start_hour)
    return SessionSummary(
        session_date=day,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        words_studied=words,
        correct_answers=correct,
        total_answers=total,
    )


@pytest.fixture
def sessions():
    return [
        make_session(date(2026, 3, 9), 10, 60, words=30, correct=18, total=20),
        make_session(date(2026, 3, 8), 9, 30, words=15, correct=5, total=10),
        # Outside the 7-day window
        make_session(date(2026, 2, 1), 9, 600, words=500, correct=0, total=100),
    ]


class TestEfficiency:
    def test_no_sessions_is_all_zero(self):
        report = calculate_learning_efficiency([], 7)
        assert (report.efficiency, report.words_per_hour, report.accuracy, report.retention) == (
            0,
            0,
            0,
            0,
        )
        assert report == EfficiencyReport()

    def test_none_sessions_is_all_zero(self):
        assert calculate_learning_efficiency(None, 7, now=NOW) == EfficiencyReport()

    def test_only_old_sessions_is_all_zero(self, sessions):
        assert calculate_learning_efficiency(sessions[2:], 7, now=NOW) == EfficiencyReport()

    def test_weighted_blend(self, sessions):
        report = calculate_learning_efficiency(sessions, 7, now=NOW)

        assert report.words_per_hour == 30  # 45 words / 1.5 h
        assert report.accuracy == 77  # 23 / 30
        assert report.retention == 70  # mean(90, 50)
        assert report.efficiency == 61  # 9 + 30.8 + 21
        assert report.total_hours == 1.5

    def test_window_boundary_uses_start_of_day(self):
        # cutoff is 2026-03-03 12:00; a session dated 03-03 starts that day at midnight
        on_edge = make_session(date(2026, 3, 3), 13, 60, words=10, correct=1, total=1)
        inside = make_session(date(2026, 3, 4), 13, 60, words=10, correct=1, total=1)

        assert calculate_learning_efficiency([on_edge], 7, now=NOW) == EfficiencyReport()
        assert calculate_learning_efficiency([inside], 7, now=NOW).words_per_hour == 10

    def test_open_session_runs_until_now(self):
        running = SessionSummary(
            session_date=NOW.date(),
            start_time=NOW - timedelta(hours=2),
            end_time=None,
            words_studied=40,
            correct_answers=8,
            total_answers=10,
        )
        report = calculate_learning_efficiency([running], 7, now=NOW)
        assert report.words_per_hour == 20
        assert report.total_hours == 2.0

    def test_zero_elapsed_time_and_answers(self):
        empty = SessionSummary(
            session_date=NOW.date(),
            start_time=NOW,
            end_time=NOW,
            words_studied=12,
        )
        report = calculate_learning_efficiency([empty], 7, now=NOW)
        assert report == EfficiencyReport()


class TestRetention:
    def test_ignores_sessions_without_answers(self):
        sessions = [
            make_session(date(2026, 3, 9), 8, 10, words=5, correct=3, total=4),
            make_session(date(2026, 3, 9), 9, 10, words=5, correct=0, total=0),
        ]
        assert calculate_retention(sessions) == 75

    def test_empty(self):
        assert calculate_retention([]) == 0


class TestAdvice:
    def test_all_advice_for_weak_learner(self):
        efficiency = EfficiencyReport(words_per_hour=5, accuracy=60, total_hours=0.2)
        advice = generate_study_advice(10, 1, 100, efficiency)
        assert [a.kind for a in advice] == ["memory", "speed", "accuracy", "consistency"]
        assert [a.priority for a in advice] == ["high", "medium", "high", "medium"]

    def test_no_advice_for_strong_learner(self):
        efficiency = EfficiencyReport(words_per_hour=40, accuracy=90, total_hours=2.0)
        assert generate_study_advice(10, 5, 100, efficiency) == []

    def test_empty_catalog_counts_as_zero_mastery(self):
        efficiency = EfficiencyReport(words_per_hour=40, accuracy=90, total_hours=2.0)
        advice = generate_study_advice(10, 10, 0, efficiency)
        assert [a.kind for a in advice] == ["memory"]

    def test_nothing_learned_does_not_divide_by_zero(self):
        efficiency = EfficiencyReport(words_per_hour=40, accuracy=90, total_hours=2.0)
        advice = generate_study_advice(0, 0, 3000, efficiency)
        assert [a.kind for a in advice] == ["memory"]


class TestPrediction:
    def test_linear_projection(self):
        prediction = predict_learning_progress(100, 20, 30, days=30)

        assert prediction.days == 30
        assert prediction.daily_average == 15
        assert prediction.predicted_learned_words == 550
        assert prediction.predicted_mastered_words == 110
        assert prediction.completion.days == 123  # ceil(2450 / 20)
        assert prediction.completion.months == 5

    def test_minimum_daily_pace(self):
        prediction = predict_learning_progress(0, 0, 0, days=10)
        assert prediction.daily_average == 5
        assert prediction.predicted_learned_words == 50
        assert prediction.predicted_mastered_words == 0

    def test_completion_ignores_measured_pace(self):
        # Measured pace is 100 words/day, but the estimate assumes 20/day.
        prediction = predict_learning_progress(0, 0, 200, days=1)
        assert prediction.daily_average == 100
        assert prediction.predicted_learned_words == 100
        assert prediction.completion.days == 145  # (3000 - 100) / 20, not / 100

    def test_target_reached(self):
        prediction = predict_learning_progress(2900, 100, 200, days=30)
        assert prediction.completion.days == 0
        assert prediction.completion.months == 0

    def test_negative_inputs_are_clamped(self):
        prediction = predict_learning_progress(-10, -3, -50, days=-4)
        assert prediction.days == 0
        assert prediction.predicted_learned_words == 0
        assert prediction.predicted_mastered_words == 0


class TestCompletionEstimate:
    @pytest.mark.parametrize(
        "learned, days, months",
        [(3000, 0, 0), (3500, 0, 0), (2999, 1, 1), (0, 150, 5), (2400, 30, 1), (2380, 31, 2)],
    )
    def test_fixed_target_and_pace(self, learned, days, months):
        estimate = estimate_completion_time(learned)
        assert (estimate.days, estimate.months) == (days, months)

# Application Package
from .insights import (
    calculate_learning_efficiency,
    calculate_retention,
    estimate_completion_time,
    generate_study_advice,
    predict_learning_progress,
)
from .planner import generate_daily_study_plan
from .review_service import ReviewService
from .scheduler import compute_next_review, evaluate_mastery

__all__ = [
    "compute_next_review",
    "evaluate_mastery",
    "generate_daily_study_plan",
    "calculate_learning_efficiency",
    "calculate_retention",
    "estimate_completion_time",
    "generate_study_advice",
    "predict_learning_progress",
    "ReviewService",
]

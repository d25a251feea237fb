# Domain Package
from .models import (
    AnswerEvent,
    CompletionEstimate,
    EfficiencyReport,
    LearningOverview,
    MasteryLevel,
    PlanCategory,
    ProgressPrediction,
    ReviewRecord,
    SessionSummary,
    StudyAdvice,
    StudyPlan,
    UpdatedReview,
)
from .ports import ReviewRepository, SessionRepository

__all__ = [
    "AnswerEvent",
    "CompletionEstimate",
    "EfficiencyReport",
    "LearningOverview",
    "MasteryLevel",
    "PlanCategory",
    "ProgressPrediction",
    "ReviewRecord",
    "SessionSummary",
    "StudyAdvice",
    "StudyPlan",
    "UpdatedReview",
    "ReviewRepository",
    "SessionRepository",
]

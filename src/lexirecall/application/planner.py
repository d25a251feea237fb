"""Daily study plan: split a goal into new and review words."""

import math

from lexirecall.domain.constants import DEFAULT_DAILY_GOAL, DEFAULT_NEW_WORDS_RATIO
from lexirecall.domain.models import PlanCategory, StudyPlan

from .utils.numbers import clamp


def generate_daily_study_plan(
    daily_goal: int = DEFAULT_DAILY_GOAL,
    new_words_ratio: float = DEFAULT_NEW_WORDS_RATIO,
) -> StudyPlan:
    """
    Split the daily goal into new and review words.

    New words are floored; review words absorb the remainder so the two
    always sum to the goal.
    """
    goal = max(0, int(daily_goal))
    ratio = clamp(new_words_ratio, 0.0, 1.0)

    new_words = math.floor(goal * ratio)
    review_words = goal - new_words

    return StudyPlan(
        total_words=goal,
        new_words=new_words,
        review_words=review_words,
        categories=[
            PlanCategory(
                name="New words",
                count=new_words,
                priority="high",
                reason="Build the foundation step by step",
            ),
            PlanCategory(
                name="Review words",
                count=review_words,
                priority="high",
                reason="Consolidate memory and prevent forgetting",
            ),
        ],
    )

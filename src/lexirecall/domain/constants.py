"""Centralized policy constants for the lexirecall memory model.

Every tuning number of the scheduler and the insight helpers lives here so
that each layer imports from a single source of truth.
"""

# ---------- Review intervals ----------
BASE_INTERVALS_DAYS = (1, 2, 4, 7, 15, 30, 60, 120, 240)
MIN_INTERVAL_DAYS = 1
INCORRECT_INTERVAL_FACTOR = 0.3
STRENGTH_INTERVAL_BONUS = 0.5  # strength 100 stretches the interval by 50%

# ---------- Difficulty ----------
DEFAULT_DIFFICULTY = 3
DIFFICULTY_MULTIPLIERS = {
    1: 1.2,  # easy
    2: 1.1,
    3: 1.0,
    4: 0.9,
    5: 0.8,  # hard
}
DEFAULT_DIFFICULTY_MULTIPLIER = 1.0

# ---------- Response time (ms upper bound, factor) ----------
RESPONSE_TIME_BUCKETS = (
    (1000, 0.6),  # suspiciously fast, likely a guess
    (3000, 0.8),
    (8000, 1.0),  # ideal range
    (15000, 0.9),
)
SLOW_RESPONSE_FACTOR = 0.7
UNMEASURED_RESPONSE_FACTOR = 0.8

# ---------- Memory strength ----------
MIN_STRENGTH = 0.0
MAX_STRENGTH = 100.0
ACCURACY_WEIGHT = 20
TIME_WEIGHT = 10
INCORRECT_PENALTY = 25
DECAY_FACTOR = 0.9
CORRECT_REINFORCEMENT = 5
INCORRECT_REINFORCEMENT = 20

# ---------- Mastery ----------
LEARNING_MIN_REVIEWS = 3
MASTERED_MIN_STRENGTH = 80
MASTERED_MIN_ACCURACY = 0.8
FAMILIAR_MIN_STRENGTH = 50

# ---------- Daily plan ----------
DEFAULT_DAILY_GOAL = 20
DEFAULT_NEW_WORDS_RATIO = 0.3

# ---------- Efficiency ----------
DEFAULT_EFFICIENCY_WINDOW_DAYS = 7
EFFICIENCY_WEIGHTS = (0.3, 0.4, 0.3)  # words/hour, accuracy, retention

# ---------- Advice thresholds ----------
ADVICE_MIN_MASTERY_RATE = 30
ADVICE_MIN_WORDS_PER_HOUR = 10
ADVICE_MIN_ACCURACY = 70
ADVICE_MIN_HOURS = 0.5

# ---------- Progress prediction ----------
DEFAULT_PREDICTION_DAYS = 30
MIN_DAILY_NEW_WORDS = 5
WORDS_PER_HOUR_TO_DAILY = 0.5
TARGET_VOCABULARY_SIZE = 3000
ASSUMED_DAILY_PACE = 20
DAYS_PER_MONTH = 30

# ---------- Due queue ----------
DEFAULT_DUE_LIMIT = 50

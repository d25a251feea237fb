import math


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves towards +infinity.

    Python's round() uses banker's rounding (round(2.5) == 2), which would
    shift the stored strengths and percentages by one at every .5 boundary.
    """
    return math.floor(value + 0.5)


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]. NaN collapses to low."""
    if math.isnan(value):
        return low
    return max(low, min(high, value))


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0.0 when the denominator is not positive."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator

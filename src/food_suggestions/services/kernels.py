"""Weighting kernels for contextual food scoring."""

import math
from datetime import date, time

MINUTES_PER_DAY = 24 * 60
HALF_DAY_MINUTES = MINUTES_PER_DAY // 2

DEFAULT_TIME_SIGMA_MINUTES = 90.0
DEFAULT_RECENCY_HALF_LIFE_DAYS = 14.0
DEFAULT_WEEKDAY_BOOST = 1.3


def minutes_since_midnight(value: time | None) -> float:
    """Return minutes since midnight, treating an unknown time as 00:00."""
    if value is None:
        return 0.0
    return value.hour * 60 + value.minute + value.second / 60


def circular_time_distance(first: time | None, second: time | None) -> float:
    """Return the shorter distance in minutes between two times of day.

    The result lies in ``[0, 720]``: 23:00 and 01:00 are 120 minutes apart.
    """
    delta = abs(minutes_since_midnight(first) - minutes_since_midnight(second))
    delta = delta % MINUTES_PER_DAY
    return min(delta, MINUTES_PER_DAY - delta)


def time_kernel(
    distance_minutes: float, sigma_minutes: float = DEFAULT_TIME_SIGMA_MINUTES
) -> float:
    """Gaussian weight over time-of-day distance, 1.0 at zero distance."""
    return math.exp(-(distance_minutes**2) / (2 * sigma_minutes**2))


def recency_decay(
    days_ago: float, half_life_days: float = DEFAULT_RECENCY_HALF_LIFE_DAYS
) -> float:
    """Exponential decay over elapsed days, halving every ``half_life_days``."""
    return 0.5 ** (max(days_ago, 0) / half_life_days)


def weekday_boost(
    observed_on: date, reference_date: date, boost: float = DEFAULT_WEEKDAY_BOOST
) -> float:
    """Return ``boost`` when both dates share a day of week, else 1.0."""
    if observed_on.weekday() == reference_date.weekday():
        return boost
    return 1.0


def days_between(observed_on: date, reference_date: date) -> int:
    """Whole days from ``observed_on`` to ``reference_date``, never negative."""
    return max((reference_date - observed_on).days, 0)

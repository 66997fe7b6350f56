# compliance_scheduler/services/recurrence.py
"""
Next-occurrence arithmetic for recurring series.
Plain calendar-day math: no timezones, no business-day or holiday shifting.
"""

import math
from datetime import date, timedelta

from compliance_scheduler.errors import ValidationError
from compliance_scheduler.models.inspection_schedule import MAX_FREQUENCY_WEEKS, MIN_FREQUENCY_WEEKS


def validate_frequency(frequency_weeks) -> int:
    if isinstance(frequency_weeks, bool) or not isinstance(frequency_weeks, int):
        raise ValidationError(f"frequency_weeks must be an integer, got {frequency_weeks!r}")
    if not MIN_FREQUENCY_WEEKS <= frequency_weeks <= MAX_FREQUENCY_WEEKS:
        raise ValidationError(
            f"frequency_weeks must be between {MIN_FREQUENCY_WEEKS} and {MAX_FREQUENCY_WEEKS}, "
            f"got {frequency_weeks}"
        )
    return frequency_weeks


def next_occurrence_date(last_date: date, frequency_weeks: int) -> date:
    """Due date that follows last_date: last_date + frequency_weeks * 7 days."""
    return last_date + timedelta(weeks=frequency_weeks)


def future_dates(start_date: date, frequency_weeks: int, count: int) -> list:
    """The chain start, start+F, start+2F, ... of length count."""
    dates = []
    current = start_date
    for _ in range(count):
        dates.append(current)
        current = next_occurrence_date(current, frequency_weeks)
    return dates


def occurrences_for_horizon(horizon_weeks: int, frequency_weeks: int) -> int:
    """How many occurrences cover horizon_weeks at this frequency (52 weeks every 8 → 7)."""
    if horizon_weeks <= 0:
        raise ValidationError(f"horizon_weeks must be positive, got {horizon_weeks}")
    return math.ceil(horizon_weeks / frequency_weeks)

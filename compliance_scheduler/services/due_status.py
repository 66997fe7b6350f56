# compliance_scheduler/services/due_status.py
"""
Due-Date Classifier: buckets a scheduled date relative to "now".

  OVERDUE        scheduled_date <  now
  DUE_THIS_WEEK  now <= scheduled_date <= now + 7 days
  UPCOMING       scheduled_date >  now + 7 days

Both "this week" boundaries are inclusive. Inactive schedules are never counted.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

DUE_SOON_WINDOW = timedelta(days=7)


class DueStatus(str, Enum):
    """Lower sort_order = more urgent."""

    OVERDUE = "overdue"
    DUE_THIS_WEEK = "due_this_week"
    UPCOMING = "upcoming"

    @property
    def sort_order(self) -> int:
        return _SORT_ORDER[self]


_SORT_ORDER = {DueStatus.OVERDUE: 1, DueStatus.DUE_THIS_WEEK: 2, DueStatus.UPCOMING: 3}


@dataclass
class ScheduleStats:
    total_scheduled: int = 0
    overdue_count: int = 0
    due_this_week_count: int = 0
    upcoming_count: int = 0
    recurring_types: dict = field(default_factory=dict)


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def classify(scheduled_date: date, now: date) -> DueStatus:
    scheduled_date, now = _as_date(scheduled_date), _as_date(now)
    if scheduled_date < now:
        return DueStatus.OVERDUE
    if scheduled_date <= now + DUE_SOON_WINDOW:
        return DueStatus.DUE_THIS_WEEK
    return DueStatus.UPCOMING


def days_until_due(scheduled_date: date, now: date) -> int:
    """Negative when overdue."""
    return (_as_date(scheduled_date) - _as_date(now)).days


def classify_schedules(schedules, now: date) -> list:
    """Pair every active schedule with its DueStatus, keeping input order."""
    return [(s, classify(s.scheduled_date, now)) for s in schedules if s.is_active]


def summarize(schedules, now: date) -> ScheduleStats:
    """Bucket counts over the active schedules; the three counts always sum to total_scheduled."""
    classified = classify_schedules(schedules, now)
    buckets = Counter(status for _, status in classified)
    recurring = Counter(f"{s.inspection_type}-{s.frequency_weeks}w" for s, _ in classified)
    return ScheduleStats(
        total_scheduled=len(classified),
        overdue_count=buckets[DueStatus.OVERDUE],
        due_this_week_count=buckets[DueStatus.DUE_THIS_WEEK],
        upcoming_count=buckets[DueStatus.UPCOMING],
        recurring_types=dict(recurring),
    )

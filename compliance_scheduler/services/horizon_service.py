# compliance_scheduler/services/horizon_service.py
"""
Horizon Maintainer: keeps every active series of a tenant topped up.

For each series (vehicle_id + inspection_type) the latest active occurrence is the tip.
The tip's frequency, provider and notes carry forward; ceil(horizon / frequency)
occurrences are materialized starting one interval after the tip.
One series failing never stops the others.
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from compliance_scheduler.config import settings
from compliance_scheduler.errors import SchedulingError, ValidationError
from compliance_scheduler.services.materializer import materialize
from compliance_scheduler.services.recurrence import next_occurrence_date, occurrences_for_horizon
from compliance_scheduler.services.schedule_store import ScheduleStore, require_tenant
from compliance_scheduler.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class HorizonResult:
    series_processed: int = 0
    schedules_created: int = 0
    errors: list = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def group_into_series(schedules) -> dict:
    """Group schedules by (vehicle_id, inspection_type), each group sorted by date."""
    series = defaultdict(list)
    for s in schedules:
        series[(s.vehicle_id, s.inspection_type)].append(s)
    for group in series.values():
        group.sort(key=lambda s: s.scheduled_date)
    return dict(series)


def series_tip(schedules, today: date):
    """Return (tip_date, tip_schedule). An empty series is seeded with today."""
    if not schedules:
        return today, None
    tip = max(schedules, key=lambda s: s.scheduled_date)
    return tip.scheduled_date, tip


async def maintain_horizon(
    store: ScheduleStore,
    tenant_id: str,
    today: date,
    horizon_weeks: Optional[int] = None,
    min_future_occurrences: Optional[int] = None,
) -> HorizonResult:
    """
    Top up every active series of one tenant so it covers horizon_weeks past its tip.

    If min_future_occurrences is given, a series already holding that many
    occurrences after today is left as it is.
    """
    tenant_id = require_tenant(tenant_id)
    if horizon_weeks is None:
        horizon_weeks = settings.DEFAULT_HORIZON_WEEKS
    if isinstance(horizon_weeks, bool) or not isinstance(horizon_weeks, int) or horizon_weeks <= 0:
        raise ValidationError(f"horizon_weeks must be a positive integer, got {horizon_weeks!r}")

    result = HorizonResult()
    try:
        schedules = store.list_active_schedules(tenant_id)
    except SchedulingError as e:
        logger.error(f"Horizon maintenance for tenant {tenant_id} could not load schedules: {e}")
        result.errors.append(e)
        return result

    series = group_into_series(schedules)
    logger.info(f"Maintaining {len(series)} series for tenant {tenant_id} ({horizon_weeks}w horizon)")

    for (vehicle_id, inspection_type), group in series.items():
        result.series_processed += 1
        tip_date, tip = series_tip(group, today)

        if min_future_occurrences is not None:
            upcoming = sum(1 for s in group if s.scheduled_date > today)
            if upcoming >= min_future_occurrences:
                logger.debug(f"{vehicle_id}/{inspection_type}: {upcoming} future occurrences — left alone")
                continue

        try:
            frequency = tip.frequency_weeks
            outcome = await materialize(
                store,
                tenant_id=tenant_id,
                vehicle_id=vehicle_id,
                inspection_type=inspection_type,
                start_date=next_occurrence_date(tip_date, frequency),
                frequency_weeks=frequency,
                maintenance_provider_id=tip.maintenance_provider_id,
                notes=tip.notes,
                desired_count=occurrences_for_horizon(horizon_weeks, frequency),
            )
        except SchedulingError as e:
            logger.warning(f"Series {vehicle_id}/{inspection_type} skipped: {e}")
            result.errors.append(e)
            continue

        result.schedules_created += len(outcome.created)
        result.errors.extend(outcome.errors)

    logger.info(
        f"Tenant {tenant_id}: {result.series_processed} series processed, "
        f"{result.schedules_created} schedules created, {len(result.errors)} errors"
    )
    return result

# compliance_scheduler/services/materializer.py
"""
Series Materializer: writes the future occurrences of one series.

Walks a cursor from start_date, one frequency step at a time, desired_count times.
Dates already present in the series are skipped (the cursor still advances), so
running it twice with the same arguments never produces a duplicate date.
A store failure on one insert is recorded and the walk carries on; the next
maintenance pass fills whatever was left behind.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from compliance_scheduler.errors import DuplicateOccurrence, StoreUnavailable, ValidationError
from compliance_scheduler.models.inspection_schedule import InspectionSchedule
from compliance_scheduler.models.inspection_type import InspectionType
from compliance_scheduler.services.recurrence import next_occurrence_date, validate_frequency
from compliance_scheduler.services.schedule_store import ScheduleStore, require_tenant
from compliance_scheduler.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class MaterializeResult:
    created: list = field(default_factory=list)
    errors: list = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


def validate_series(tenant_id, vehicle_id, inspection_type) -> tuple:
    """Check the series identity and normalise it to (tenant_id, vehicle_id, type value)."""
    tenant_id = require_tenant(tenant_id)
    if vehicle_id is None or not str(vehicle_id).strip():
        raise ValidationError("vehicle_id is required")
    if not inspection_type:
        raise ValidationError("inspection_type is required")
    parsed = InspectionType.parse(inspection_type)
    if parsed is None:
        raise ValidationError(f"Unknown inspection_type: {inspection_type!r}")
    return tenant_id, str(vehicle_id), parsed.value


async def materialize(
    store: ScheduleStore,
    tenant_id: str,
    vehicle_id: str,
    inspection_type: str,
    start_date: date,
    frequency_weeks: int,
    maintenance_provider_id: Optional[str] = None,
    notes: Optional[str] = None,
    desired_count: int = 1,
) -> MaterializeResult:
    """
    Create up to desired_count occurrences starting at start_date.
    Raises ValidationError before touching the store, and StoreUnavailable
    if the existing dates of the series can't be read.
    """
    tenant_id, vehicle_id, inspection_type = validate_series(tenant_id, vehicle_id, inspection_type)
    validate_frequency(frequency_weeks)
    if isinstance(start_date, datetime):
        start_date = start_date.date()
    elif not isinstance(start_date, date):
        raise ValidationError(f"start_date must be a date, got {start_date!r}")
    if isinstance(desired_count, bool) or not isinstance(desired_count, int) or desired_count <= 0:
        raise ValidationError(f"desired_count must be a positive integer, got {desired_count!r}")

    existing = store.list_active_schedules(tenant_id, vehicle_id, inspection_type)
    existing_dates = {s.scheduled_date for s in existing}

    result = MaterializeResult()
    cursor = start_date
    for _ in range(desired_count):
        if cursor in existing_dates:
            logger.debug(f"{inspection_type} for {vehicle_id} on {cursor} already scheduled — skipped")
        else:
            try:
                schedule = store.insert_schedule(InspectionSchedule(
                    tenant_id=tenant_id,
                    vehicle_id=vehicle_id,
                    maintenance_provider_id=maintenance_provider_id,
                    inspection_type=inspection_type,
                    scheduled_date=cursor,
                    frequency_weeks=frequency_weeks,
                    notes=notes,
                    is_active=True,
                ))
                result.created.append(schedule)
                existing_dates.add(cursor)
            except DuplicateOccurrence:
                # Lost a race with a concurrent writer; the date exists now
                logger.debug(f"{inspection_type} for {vehicle_id} on {cursor} inserted concurrently — skipped")
                existing_dates.add(cursor)
            except StoreUnavailable as e:
                logger.warning(f"Could not schedule {inspection_type} for {vehicle_id} on {cursor}: {e}")
                result.errors.append(e)
        cursor = next_occurrence_date(cursor, frequency_weeks)

    logger.info(
        f"Materialized {inspection_type} for vehicle {vehicle_id}: "
        f"{len(result.created)} created, {len(result.errors)} failed (from {start_date}, every {frequency_weeks}w)"
    )
    return result

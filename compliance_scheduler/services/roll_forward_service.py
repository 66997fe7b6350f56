# compliance_scheduler/services/roll_forward_service.py
"""
Rolls a series forward once one of its occurrences has been carried out.
If nothing is scheduled after the completed occurrence, a fresh horizon of
occurrences is materialized starting one interval after it.
"""

from typing import Optional

from compliance_scheduler.config import settings
from compliance_scheduler.errors import ScheduleNotFound, ValidationError
from compliance_scheduler.services.materializer import MaterializeResult, materialize
from compliance_scheduler.services.recurrence import next_occurrence_date, occurrences_for_horizon
from compliance_scheduler.services.schedule_store import ScheduleStore, require_tenant
from compliance_scheduler.utils.logger import get_logger

logger = get_logger(__name__)


async def roll_forward_series(store: ScheduleStore, tenant_id: str, schedule_id: str,
                              horizon_weeks: Optional[int] = None) -> MaterializeResult:
    tenant_id = require_tenant(tenant_id)
    if horizon_weeks is None:
        horizon_weeks = settings.DEFAULT_HORIZON_WEEKS
    if isinstance(horizon_weeks, bool) or not isinstance(horizon_weeks, int) or horizon_weeks <= 0:
        raise ValidationError(f"horizon_weeks must be a positive integer, got {horizon_weeks!r}")

    completed = store.get_schedule(tenant_id, schedule_id)
    if not completed:
        raise ScheduleNotFound(f"Schedule {schedule_id} not found for tenant {tenant_id}")

    series = store.list_active_schedules(tenant_id, completed.vehicle_id, completed.inspection_type)
    later = [s for s in series if s.scheduled_date > completed.scheduled_date]
    if later:
        logger.info(
            f"Series {completed.vehicle_id}/{completed.inspection_type} already has "
            f"{len(later)} occurrences after {completed.scheduled_date} — nothing to add"
        )
        return MaterializeResult()

    frequency = completed.frequency_weeks
    return await materialize(
        store,
        tenant_id=tenant_id,
        vehicle_id=completed.vehicle_id,
        inspection_type=completed.inspection_type,
        start_date=next_occurrence_date(completed.scheduled_date, frequency),
        frequency_weeks=frequency,
        maintenance_provider_id=completed.maintenance_provider_id,
        notes=completed.notes,
        desired_count=occurrences_for_horizon(horizon_weeks, frequency),
    )

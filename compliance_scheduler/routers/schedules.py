# compliance_scheduler/routers/schedules.py
"""
Inspection schedule endpoints. Every route is scoped to one tenant.
GET  /tenants/{tenant_id}/schedules                    — active schedules with due status
GET  /tenants/{tenant_id}/schedules/stats              — overdue / this week / upcoming counts
POST /tenants/{tenant_id}/schedules/recurring          — create a recurring series
POST /tenants/{tenant_id}/schedules/maintain           — top up every series to the horizon
POST /tenants/{tenant_id}/schedules/{id}/complete      — roll a series forward after completion
"""

from dataclasses import asdict
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from compliance_scheduler.config import settings
from compliance_scheduler.database import get_db
from compliance_scheduler.models.inspection_type import InspectionType
from compliance_scheduler.schemas.inspection_schedule import (
    ClassifiedScheduleOut, HorizonRequest, HorizonResultOut, MaterializeResultOut,
    RecurringSeriesCreate, ScheduleOut, ScheduleStatsOut,
)
from compliance_scheduler.services.due_status import DueStatus, classify_schedules, days_until_due, summarize
from compliance_scheduler.services.horizon_service import maintain_horizon
from compliance_scheduler.services.materializer import MaterializeResult, materialize
from compliance_scheduler.services.recurrence import occurrences_for_horizon
from compliance_scheduler.services.roll_forward_service import roll_forward_series
from compliance_scheduler.services.schedule_store import ScheduleStore
from compliance_scheduler.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def get_store(db: Session = Depends(get_db)) -> ScheduleStore:
    return ScheduleStore(db)


def _materialize_out(result: MaterializeResult) -> MaterializeResultOut:
    return MaterializeResultOut(
        created=len(result.created),
        errors=[str(e) for e in result.errors],
        schedules=[ScheduleOut.model_validate(s) for s in result.created],
    )


@router.get("/tenants/{tenant_id}/schedules", response_model=list[ClassifiedScheduleOut],
            summary="Active schedules with due status")
def list_schedules(tenant_id: str, vehicle_id: Optional[str] = None,
                   inspection_type: Optional[InspectionType] = None,
                   status: Optional[DueStatus] = None,
                   store: ScheduleStore = Depends(get_store)):
    """Sorted by scheduled date. Filter by vehicle, inspection type, or due status."""
    today = date.today()
    schedules = store.list_active_schedules(
        tenant_id, vehicle_id, inspection_type.value if inspection_type else None
    )
    out = []
    for s, due in classify_schedules(schedules, today):
        if status and due != status:
            continue
        out.append(ClassifiedScheduleOut(
            **ScheduleOut.model_validate(s).model_dump(),
            due_status=due,
            days_until_due=days_until_due(s.scheduled_date, today),
        ))
    return out


@router.get("/tenants/{tenant_id}/schedules/stats", response_model=ScheduleStatsOut,
            summary="Schedule counts by due status")
def schedule_stats(tenant_id: str, store: ScheduleStore = Depends(get_store)):
    stats = summarize(store.list_active_schedules(tenant_id), date.today())
    return ScheduleStatsOut(**asdict(stats))


@router.post("/tenants/{tenant_id}/schedules/recurring", response_model=MaterializeResultOut,
             summary="Create a recurring inspection series")
async def create_recurring_series(tenant_id: str, body: RecurringSeriesCreate,
                                  store: ScheduleStore = Depends(get_store)):
    """
    Writes the first occurrence on start_date and the following ones every
    frequency_weeks. Dates that already exist in the series are left alone.
    """
    count = body.desired_count or occurrences_for_horizon(settings.DEFAULT_HORIZON_WEEKS, body.frequency_weeks)
    result = await materialize(
        store,
        tenant_id=tenant_id,
        vehicle_id=body.vehicle_id,
        inspection_type=body.inspection_type.value,
        start_date=body.start_date,
        frequency_weeks=body.frequency_weeks,
        maintenance_provider_id=body.maintenance_provider_id,
        notes=body.notes,
        desired_count=count,
    )
    return _materialize_out(result)


@router.post("/tenants/{tenant_id}/schedules/maintain", response_model=HorizonResultOut,
             summary="Top up every recurring series to the horizon")
async def maintain_schedules(tenant_id: str, body: Optional[HorizonRequest] = None,
                             store: ScheduleStore = Depends(get_store)):
    """Call after data loads; safe to repeat. Failing series are reported, not fatal."""
    body = body or HorizonRequest()
    logger.info(f"Horizon maintenance requested for tenant {tenant_id}")
    result = await maintain_horizon(
        store,
        tenant_id,
        today=date.today(),
        horizon_weeks=body.horizon_weeks,
        min_future_occurrences=body.min_future_occurrences or settings.MIN_FUTURE_OCCURRENCES,
    )
    return HorizonResultOut(
        series_processed=result.series_processed,
        schedules_created=result.schedules_created,
        errors=[str(e) for e in result.errors],
    )


@router.post("/tenants/{tenant_id}/schedules/{schedule_id}/complete", response_model=MaterializeResultOut,
             summary="Roll a series forward after an occurrence is carried out")
async def complete_schedule(tenant_id: str, schedule_id: str, store: ScheduleStore = Depends(get_store)):
    result = await roll_forward_series(store, tenant_id, schedule_id)
    return _materialize_out(result)

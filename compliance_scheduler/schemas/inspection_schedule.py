# compliance_scheduler/schemas/inspection_schedule.py
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional

from compliance_scheduler.models.inspection_type import InspectionType
from compliance_scheduler.services.due_status import DueStatus


class ScheduleOut(BaseModel):
    id: str
    tenant_id: str
    vehicle_id: str
    maintenance_provider_id: Optional[str]
    inspection_type: str
    scheduled_date: date
    frequency_weeks: int
    notes: Optional[str]
    is_active: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ClassifiedScheduleOut(ScheduleOut):
    due_status: DueStatus
    days_until_due: int


class RecurringSeriesCreate(BaseModel):
    """Manual creation of a recurring series; the first occurrence is start_date."""
    vehicle_id: str
    inspection_type: InspectionType
    start_date: date
    frequency_weeks: int = Field(ge=1, le=104)
    maintenance_provider_id: Optional[str] = None
    notes: Optional[str] = None
    desired_count: Optional[int] = Field(default=None, ge=1)   # None = enough to cover the horizon


class MaterializeResultOut(BaseModel):
    created: int
    errors: list[str]
    schedules: list[ScheduleOut]


class HorizonRequest(BaseModel):
    horizon_weeks: Optional[int] = Field(default=None, ge=1)
    min_future_occurrences: Optional[int] = Field(default=None, ge=1)


class HorizonResultOut(BaseModel):
    series_processed: int
    schedules_created: int
    errors: list[str]


class ScheduleStatsOut(BaseModel):
    total_scheduled: int
    overdue_count: int
    due_this_week_count: int
    upcoming_count: int
    recurring_types: dict[str, int]

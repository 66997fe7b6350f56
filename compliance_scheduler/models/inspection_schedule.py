# compliance_scheduler/models/inspection_schedule.py
"""
Inspection schedules table. One row per occurrence of a recurring series.
A series is every row sharing (tenant_id, vehicle_id, inspection_type).
The partial unique index stops two active rows in a series landing on the same date;
deactivated rows are kept for history and don't take part in it.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, DateTime, Index, Integer, String, Text, true,
)
from compliance_scheduler.database import Base

MIN_FREQUENCY_WEEKS = 1
MAX_FREQUENCY_WEEKS = 104


def _new_id() -> str:
    return str(uuid.uuid4())


class InspectionSchedule(Base):
    __tablename__ = "inspection_schedules"

    id = Column(String(36), primary_key=True, default=_new_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    vehicle_id = Column(String(36), nullable=False, index=True)
    maintenance_provider_id = Column(String(36), index=True)   # opaque, never dereferenced
    inspection_type = Column(String(50), nullable=False, index=True)
    scheduled_date = Column(Date, nullable=False, index=True)
    frequency_weeks = Column(Integer, nullable=False, default=26)
    notes = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        CheckConstraint(
            f"frequency_weeks >= {MIN_FREQUENCY_WEEKS} AND frequency_weeks <= {MAX_FREQUENCY_WEEKS}",
            name="ck_inspection_schedules_frequency_weeks",
        ),
        CheckConstraint(
            "inspection_type IN ('safety_inspection', 'tax', 'mot', 'tacho_calibration')",
            name="ck_inspection_schedules_inspection_type",
        ),
        Index(
            "uq_inspection_schedules_active_occurrence",
            "tenant_id", "vehicle_id", "inspection_type", "scheduled_date",
            unique=True,
            postgresql_where=is_active.is_(true()),
            sqlite_where=is_active.is_(true()),
        ),
    )

    @property
    def series_key(self) -> tuple:
        return (self.vehicle_id, self.inspection_type)

    def __repr__(self):
        return (f"<InspectionSchedule {self.id} vehicle={self.vehicle_id} "
                f"type={self.inspection_type} date={self.scheduled_date}>")

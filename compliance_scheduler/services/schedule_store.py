# compliance_scheduler/services/schedule_store.py
"""
Schedule Store, the only code that talks to the inspection_schedules table.
Every read and write is scoped to one tenant; there is no unscoped query.

Insert failures are translated:
  - unique index conflict on an active occurrence → DuplicateOccurrence
  - anything else SQLAlchemy raises              → StoreUnavailable
The session is rolled back in both cases so the caller can keep using it.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from compliance_scheduler.errors import DuplicateOccurrence, StoreUnavailable, ValidationError
from compliance_scheduler.models.inspection_schedule import InspectionSchedule
from compliance_scheduler.utils.logger import get_logger

logger = get_logger(__name__)

_UNIQUE_INDEX = "uq_inspection_schedules_active_occurrence"


def require_tenant(tenant_id) -> str:
    """Reject any operation that isn't scoped to a tenant."""
    if tenant_id is None or not str(tenant_id).strip():
        raise ValidationError("tenant_id is required")
    return str(tenant_id)


def _is_unique_violation(exc: IntegrityError) -> bool:
    # Postgres names the index; SQLite only lists the columns
    msg = str(exc.orig).lower()
    return _UNIQUE_INDEX in msg or "unique" in msg or "duplicate key" in msg


class ScheduleStore:
    def __init__(self, db: Session):
        self.db = db

    def list_active_schedules(self, tenant_id, vehicle_id: Optional[str] = None,
                              inspection_type: Optional[str] = None) -> list:
        """Active schedules for a tenant, optionally narrowed to a vehicle and/or type, oldest date first."""
        tenant_id = require_tenant(tenant_id)
        try:
            q = self.db.query(InspectionSchedule).filter(
                InspectionSchedule.tenant_id == tenant_id,
                InspectionSchedule.is_active.is_(True),
            )
            if vehicle_id:
                q = q.filter(InspectionSchedule.vehicle_id == vehicle_id)
            if inspection_type:
                q = q.filter(InspectionSchedule.inspection_type == inspection_type)
            return q.order_by(InspectionSchedule.scheduled_date.asc()).all()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Reading schedules for tenant {tenant_id} failed: {e}")
            raise StoreUnavailable(f"Could not read schedules: {e}") from e

    def get_schedule(self, tenant_id, schedule_id: str) -> Optional[InspectionSchedule]:
        """Look up one schedule by id within the tenant. Returns None if not found."""
        tenant_id = require_tenant(tenant_id)
        try:
            return (
                self.db.query(InspectionSchedule)
                .filter(InspectionSchedule.tenant_id == tenant_id, InspectionSchedule.id == schedule_id)
                .first()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable(f"Could not read schedule {schedule_id}: {e}") from e

    def insert_schedule(self, schedule: InspectionSchedule) -> InspectionSchedule:
        """Persist a new schedule and commit. Raises DuplicateOccurrence or StoreUnavailable."""
        require_tenant(schedule.tenant_id)
        try:
            self.db.add(schedule)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if _is_unique_violation(e):
                raise DuplicateOccurrence(schedule.tenant_id, schedule.vehicle_id,
                                          schedule.inspection_type, schedule.scheduled_date) from e
            raise StoreUnavailable(f"Insert rejected: {e.orig}") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreUnavailable(f"Insert failed: {e}") from e
        return schedule

# compliance_scheduler/errors.py
"""
Scheduling engine error taxonomy.

ValidationError     — bad input, raised before any store access.
DuplicateOccurrence — an insert hit the active-series unique index; absorbed by the materializer.
StoreUnavailable    — database failure on read or insert; isolated per series.
ScheduleNotFound    — a tenant-scoped lookup found nothing.
"""


class SchedulingError(Exception):
    """Base class for every error raised by the scheduling engine."""


class ValidationError(SchedulingError):
    pass


class DuplicateOccurrence(SchedulingError):
    def __init__(self, tenant_id, vehicle_id, inspection_type, scheduled_date):
        self.tenant_id = tenant_id
        self.vehicle_id = vehicle_id
        self.inspection_type = inspection_type
        self.scheduled_date = scheduled_date
        super().__init__(
            f"{inspection_type} for vehicle {vehicle_id} already scheduled on {scheduled_date}"
        )


class StoreUnavailable(SchedulingError):
    pass


class ScheduleNotFound(SchedulingError):
    pass

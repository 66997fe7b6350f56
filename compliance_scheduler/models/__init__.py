# Fleet compliance scheduler — Database Models
# Import all models here for SQLAlchemy discovery

from compliance_scheduler.models.inspection_type import InspectionType              # noqa
from compliance_scheduler.models.inspection_schedule import InspectionSchedule      # noqa

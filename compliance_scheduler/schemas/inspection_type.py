# compliance_scheduler/schemas/inspection_type.py
from pydantic import BaseModel


class InspectionTypeOut(BaseModel):
    value: str
    label: str
    default_frequency_weeks: int
    description: str

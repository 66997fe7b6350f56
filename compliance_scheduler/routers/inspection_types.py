# compliance_scheduler/routers/inspection_types.py
"""Inspection type catalogue — form defaults for new series."""

from fastapi import APIRouter
from compliance_scheduler.models.inspection_type import InspectionType
from compliance_scheduler.schemas.inspection_type import InspectionTypeOut

router = APIRouter()


@router.get("/inspection-types", response_model=list[InspectionTypeOut], summary="Inspection type catalogue")
def list_inspection_types():
    return [
        InspectionTypeOut(value=t.value, label=t.label,
                          default_frequency_weeks=t.default_frequency_weeks, description=t.description)
        for t in InspectionType
    ]

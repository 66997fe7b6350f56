# compliance_scheduler/models/inspection_type.py
"""
Closed catalogue of periodic regulatory events a vehicle can be scheduled for.
Default frequencies are form defaults only; the engine never enforces them.
"""

from enum import Enum


class InspectionType(str, Enum):
    SAFETY_INSPECTION = "safety_inspection"
    TAX = "tax"
    MOT = "mot"
    TACHO_CALIBRATION = "tacho_calibration"

    @property
    def label(self) -> str:
        return _CATALOGUE[self][0]

    @property
    def default_frequency_weeks(self) -> int:
        return _CATALOGUE[self][1]

    @property
    def description(self) -> str:
        return _CATALOGUE[self][2]

    @classmethod
    def parse(cls, value):
        """Return the member for a raw value, or None if it isn't one."""
        try:
            return cls(value)
        except ValueError:
            return None


_CATALOGUE = {
    InspectionType.SAFETY_INSPECTION: ("Safety Inspection", 26, "Regular safety inspection as per DVSA requirements"),
    InspectionType.TAX: ("Vehicle Tax", 52, "Annual vehicle tax renewal"),
    InspectionType.MOT: ("MOT Test", 52, "Annual MOT test for vehicles over 3 years old"),
    InspectionType.TACHO_CALIBRATION: ("Tachograph Calibration", 8, "Tachograph calibration and inspection"),
}

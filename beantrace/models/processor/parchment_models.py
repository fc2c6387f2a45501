# beantrace/models/processor/parchment_models.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from beantrace.models.common import optional_text, required_text


class ParchmentLotStatus(str, Enum):
    AWAITING_HULLING = "Awaiting Hulling"
    HULLED = "Hulled"


class PhysicalTestResults(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    sampleWeightGrams: float
    greenBeanWeightGrams: float
    greenBeanMoisture: float
    waterActivity: float
    density: float
    defectCount: int
    notes: Optional[str] = None

    @field_validator("sampleWeightGrams")
    @classmethod
    def _sample(cls, v):
        if v <= 0:
            raise ValueError("Sample weight must be greater than 0.")
        return v

    @field_validator("greenBeanWeightGrams", "greenBeanMoisture", "waterActivity", "density")
    @classmethod
    def _non_negative(cls, v):
        if v < 0:
            raise ValueError("Test values cannot be negative.")
        return v

    @field_validator("defectCount")
    @classmethod
    def _defects(cls, v):
        if v < 0:
            raise ValueError("Defect count cannot be negative.")
        return v

    @field_validator("notes")
    @classmethod
    def _notes(cls, v):
        return optional_text(v)


class ParchmentLot(BaseModel):
    id: str
    processingBatchId: str
    harvestLotId: str
    initialWeightKg: float
    currentWeightKg: float
    moistureContent: float
    processType: str
    status: ParchmentLotStatus = ParchmentLotStatus.AWAITING_HULLING
    physicalTestResults: Optional[PhysicalTestResults] = None


# ---------- hull & grade ----------

class GradeSplitModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    grade: str
    weightKg: float

    @field_validator("grade")
    @classmethod
    def _grade(cls, v):
        return required_text(v, "Each grade needs a name.")

    @field_validator("weightKg")
    @classmethod
    def _weight(cls, v):
        if v <= 0:
            raise ValueError("Grade weights must be greater than 0.")
        return v


class HullGradeModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    totalGreenWeightKg: float
    grades: List[GradeSplitModel]

    @field_validator("totalGreenWeightKg")
    @classmethod
    def _total(cls, v):
        if v <= 0:
            raise ValueError("Total green bean weight must be greater than 0.")
        return v

    @field_validator("grades")
    @classmethod
    def _grades(cls, v):
        if not v:
            raise ValueError("Add at least one grade.")
        return v

# beantrace/models/processor/processing_models.py
import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from beantrace.models.common import required_text


class ProcessingBatchStatus(str, Enum):
    TO_PROCESS = "To Process"
    DRYING = "Drying"
    COMPLETED = "Completed"


class DryingLogEntry(BaseModel):
    date: dt.date
    moistureContent: float
    ambientTemp: float
    relativeHumidity: float


class ProcessingBatch(BaseModel):
    id: str
    harvestLotId: str
    status: ProcessingBatchStatus = ProcessingBatchStatus.TO_PROCESS
    processType: str

    # filled in when the batch completes
    parchmentWeightKg: Optional[float] = None
    moistureContent: Optional[float] = None
    baggingDate: Optional[dt.date] = None
    dryingStartDate: Optional[dt.date] = None
    dryingEndDate: Optional[dt.date] = None

    dryingLog: Optional[List[DryingLogEntry]] = None


# ---------- request payloads ----------

class StartProcessingModel(BaseModel):
    harvestLotId: str
    processType: str

    @field_validator("harvestLotId")
    @classmethod
    def _lot(cls, v):
        return required_text(v, "Harvest lot is required.")

    @field_validator("processType")
    @classmethod
    def _process(cls, v):
        return required_text(v, "Process type is required.")


class BatchMoveModel(BaseModel):
    status: ProcessingBatchStatus


class DryingReadingModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    date: dt.date = Field(default_factory=dt.date.today)
    moistureContent: float
    ambientTemp: float
    relativeHumidity: float

    @field_validator("moistureContent", "relativeHumidity")
    @classmethod
    def _percent(cls, v):
        if v < 0 or v > 100:
            raise ValueError("Moisture and humidity must be between 0 and 100.")
        return v


class BatchCompleteModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    parchmentWeightKg: Optional[float] = None
    moistureContent: Optional[float] = None
    dryingStartDate: Optional[dt.date] = None
    dryingEndDate: Optional[dt.date] = None

    @model_validator(mode="after")
    def _check(self):
        if (
            self.parchmentWeightKg is None
            or self.moistureContent is None
            or self.dryingStartDate is None
            or self.dryingEndDate is None
        ):
            raise ValueError("Please fill in all fields to complete the batch.")
        if self.parchmentWeightKg <= 0:
            raise ValueError("Parchment weight must be greater than 0.")
        if self.moistureContent < 0 or self.moistureContent > 100:
            raise ValueError("Moisture content must be between 0 and 100.")
        if self.dryingEndDate < self.dryingStartDate:
            raise ValueError("Drying End Date cannot be before Drying Start Date.")
        return self

# beantrace/models/farmer/harvest_models.py
from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from beantrace.models.common import required_text


class HarvestLotStatus(str, Enum):
    READY = "Ready for Processing"
    PROCESSING = "Processing"


class HarvestLot(BaseModel):
    id: str
    farmerName: str
    cherryVariety: str
    weightKg: float
    farmPlotLocation: str
    harvestDate: date
    status: HarvestLotStatus = HarvestLotStatus.READY


class HarvestLotCreateModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    farmId: str
    cherryVariety: str
    weightKg: float
    harvestDate: Optional[date] = None

    @field_validator("farmId")
    @classmethod
    def _farm(cls, v):
        return required_text(v, "Please select a valid farm.")

    @field_validator("cherryVariety")
    @classmethod
    def _variety(cls, v):
        return required_text(v, "Cherry variety is required.")

    @field_validator("weightKg")
    @classmethod
    def _weight(cls, v):
        if v <= 0:
            raise ValueError("Weight must be greater than 0.")
        return v

# beantrace/models/farmer/gap_models.py
import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator

from beantrace.models.common import optional_text, required_text


class GAPActivityType(str, Enum):
    FERTILIZER = "Fertilizer"
    PEST_MANAGEMENT = "Pest Management"
    WATER_MANAGEMENT = "Water Management"


class GAPLogEntry(BaseModel):
    id: str
    farmPlotLocation: str
    activityType: GAPActivityType
    date: dt.date
    productUsed: str
    quantity: str
    notes: Optional[str] = None


class GAPLogCreateModel(BaseModel):
    farmPlotLocation: str
    activityType: GAPActivityType
    date: dt.date
    productUsed: str
    quantity: str
    notes: Optional[str] = None

    @field_validator("farmPlotLocation")
    @classmethod
    def _plot(cls, v):
        return required_text(v, "Farm plot is required.")

    @field_validator("productUsed")
    @classmethod
    def _product(cls, v):
        return required_text(v, "Product used is required.")

    @field_validator("quantity")
    @classmethod
    def _quantity(cls, v):
        return required_text(v, "Quantity is required.")

    @field_validator("notes")
    @classmethod
    def _notes(cls, v):
        return optional_text(v)

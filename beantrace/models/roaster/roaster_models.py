# beantrace/models/roaster/roaster_models.py
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from beantrace.models.common import required_text


FLAVOR_GROUPS = {
    "Sweet": ["Brown Sugar", "Honey", "Caramel", "Vanilla"],
    "Fruity": ["Citrus", "Orange Peel", "Berry", "Apple", "Tropical"],
    "Floral": ["Jasmine", "Rose", "Lavender"],
    "Nutty/Chocolatey": ["Almond", "Hazelnut", "Chocolate", "Cocoa"],
    "Spicy": ["Cinnamon", "Clove", "Black Pepper"],
    "Roasted": ["Toasted", "Smoky"],
    "Other": ["Earthy", "Woody", "Herbal"],
}
FLAVOR_NOTES = {note for notes in FLAVOR_GROUPS.values() for note in notes}


class RoasterInventoryItem(BaseModel):
    id: str
    roasterId: str
    greenBeanLotId: str
    claimedWeightKg: float
    remainingWeightKg: float


class RoastBatch(BaseModel):
    id: str
    roasterId: str
    roasterInventoryId: str
    greenBeanLotId: str
    roastDate: dt.date
    batchSizeKg: float
    roastedWeightKg: Optional[float] = None
    yieldPercentage: float
    weightLossPct: Optional[float] = None
    roastProfileNotes: str = ""
    flavorNotes: Optional[str] = None  # "Chocolate, Orange Peel"


# ---------- request payloads ----------

class ClaimModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    greenBeanLotId: str
    amountKg: float

    @field_validator("greenBeanLotId")
    @classmethod
    def _lot(cls, v):
        return required_text(v, "Select a green bean lot.")

    @field_validator("amountKg")
    @classmethod
    def _amount(cls, v):
        if v <= 0:
            raise ValueError("Claim amount must be greater than 0.")
        return v


class RoastLogModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    roasterInventoryId: str
    batchSizeKg: float
    roastedWeightKg: float
    roastProfileNotes: str = ""
    flavorNotes: List[str] = Field(default_factory=list)

    @field_validator("batchSizeKg")
    @classmethod
    def _batch(cls, v):
        if v <= 0:
            raise ValueError("Batch size must be greater than 0.")
        return v

    @field_validator("roastedWeightKg")
    @classmethod
    def _roasted(cls, v):
        if v <= 0:
            raise ValueError("Roasted weight must be greater than 0.")
        return v

    @field_validator("flavorNotes")
    @classmethod
    def _flavors(cls, v):
        tags = []
        for tag in v:
            tag = (tag or "").strip()
            if not tag:
                continue
            if tag not in FLAVOR_NOTES:
                raise ValueError(f"Unknown flavor note: {tag}")
            if tag not in tags:
                tags.append(tag)
        return tags

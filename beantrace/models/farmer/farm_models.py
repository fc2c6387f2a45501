# beantrace/models/farmer/farm_models.py
from pydantic import BaseModel, field_validator

from beantrace.models.common import required_text


class Farm(BaseModel):
    id: str
    farmerName: str
    location: str


class FarmCreateModel(BaseModel):
    farmerName: str
    location: str

    @field_validator("farmerName")
    @classmethod
    def _farmer(cls, v):
        return required_text(v, "Farmer name is required.")

    @field_validator("location")
    @classmethod
    def _location(cls, v):
        return required_text(v, "Location is required.")

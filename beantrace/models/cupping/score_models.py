# beantrace/models/cupping/score_models.py
import math
from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# SCA cupping form
SCA_SENSORY_ATTRIBUTES = [
    "Fragrance/Aroma", "Flavor", "Aftertaste", "Acidity", "Body", "Balance", "Overall",
]
SCA_CUP_ATTRIBUTES = ["Uniformity", "Clean Cup", "Sweetness"]
SCA_ATTRIBUTES = [
    "Fragrance/Aroma", "Flavor", "Aftertaste", "Acidity",
    "Body", "Uniformity", "Balance", "Clean Cup",
    "Sweetness", "Overall",
]

SENSORY_MIN = 6.0
SENSORY_MAX = 10.0
CUPS_PER_ATTRIBUTE = 5
POINTS_PER_CUP = 2
TAINT = 2
FAULT = 4


def validate_sensory_score(attribute: str, value) -> float:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"{attribute}: Required.")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{attribute}: Invalid number.")
    if not math.isfinite(value):
        raise ValueError(f"{attribute}: Invalid number.")
    if value < SENSORY_MIN or value > SENSORY_MAX:
        raise ValueError(f"{attribute}: Must be 6-10.")
    return value


class DefectModel(BaseModel):
    numCups: int = 0
    intensity: Literal[2, 4] = TAINT

    @field_validator("numCups")
    @classmethod
    def _cups(cls, v):
        if v < 0:
            raise ValueError("Number of defective cups cannot be negative.")
        return v


class ScoreSheetModel(BaseModel):
    """One judge's SCA form for one sample."""
    model_config = ConfigDict(allow_inf_nan=False)

    sensory: Dict[str, float]
    cups: Dict[str, int] = Field(default_factory=dict, validate_default=True)
    defects: DefectModel = Field(default_factory=DefectModel)
    notes: str = ""

    @field_validator("sensory", mode="before")
    @classmethod
    def _sensory(cls, v):
        if not isinstance(v, dict):
            raise ValueError("Sensory scores are required.")
        unknown = [k for k in v if k not in SCA_SENSORY_ATTRIBUTES]
        if unknown:
            raise ValueError(f"Unknown sensory attribute: {unknown[0]}")
        return {
            attr: validate_sensory_score(attr, v.get(attr))
            for attr in SCA_SENSORY_ATTRIBUTES
        }

    @field_validator("cups")
    @classmethod
    def _cups(cls, v):
        out = {}
        for attr in SCA_CUP_ATTRIBUTES:
            good = v.get(attr, CUPS_PER_ATTRIBUTE)
            if good < 0 or good > CUPS_PER_ATTRIBUTE:
                raise ValueError(f"{attr}: good cups must be between 0 and 5.")
            out[attr] = good
        unknown = [k for k in v if k not in SCA_CUP_ATTRIBUTES]
        if unknown:
            raise ValueError(f"Unknown cup attribute: {unknown[0]}")
        return out

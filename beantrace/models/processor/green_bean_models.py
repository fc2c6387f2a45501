# beantrace/models/processor/green_bean_models.py
import datetime as dt
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from beantrace.models.common import required_text
from beantrace.models.cupping.score_models import ScoreSheetModel


class AvailabilityStatus(str, Enum):
    AVAILABLE = "Available"
    WITHDRAWN = "Withdrawn"


class LotScoreRef(BaseModel):
    sessionId: str
    score: float


class Withdrawal(BaseModel):
    amountKg: float
    purpose: str
    date: dt.date


class GreenBeanLot(BaseModel):
    id: str
    parchmentLotId: str
    grade: str
    initialWeightKg: float
    currentWeightKg: float
    availabilityStatus: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    cuppingScores: List[LotScoreRef] = Field(default_factory=list)
    withdrawalHistory: Optional[List[Withdrawal]] = None


# ---------- request payloads ----------

class WithdrawalCreateModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    amountKg: float
    purpose: str

    @field_validator("amountKg")
    @classmethod
    def _amount(cls, v):
        if v <= 0:
            raise ValueError("Withdrawal amount must be greater than 0.")
        return v

    @field_validator("purpose")
    @classmethod
    def _purpose(cls, v):
        return required_text(v, "Purpose is required.")


class QCScoreModel(BaseModel):
    """Internal QC score: a single 0-100 number or a full SCA sheet."""
    model_config = ConfigDict(allow_inf_nan=False)

    mode: Literal["simple", "detailed"] = "simple"
    score: Optional[float] = None
    sheet: Optional[ScoreSheetModel] = None
    notes: str = ""

    @model_validator(mode="after")
    def _check(self):
        if self.mode == "simple":
            if self.score is None:
                raise ValueError("Score is required.")
            if self.score < 0 or self.score > 100:
                raise ValueError("Please enter a valid score between 0 and 100.")
        elif self.sheet is None:
            raise ValueError("A detailed score needs the full SCA sheet.")
        return self

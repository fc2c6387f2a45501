# beantrace/models/cupping/session_models.py
import datetime as dt
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from beantrace.models.auth.user_models import UserRole
from beantrace.models.common import optional_text, required_text


class SessionType(str, Enum):
    QC = "Standard QC"
    COMPETITION = "Competition"


class SessionStatus(str, Enum):
    SETUP = "Setup"
    SCORING = "Scoring"
    ADJUDICATION = "Adjudication"
    FINALIZED = "Finalized"


# forward-only lifecycle
STATUS_ORDER = [
    SessionStatus.SETUP,
    SessionStatus.SCORING,
    SessionStatus.ADJUDICATION,
    SessionStatus.FINALIZED,
]


class SubmitterInfo(BaseModel):
    name: str


class OriginInfo(BaseModel):
    farm: str


class LotInfo(BaseModel):
    process: str


class CuppingSample(BaseModel):
    id: str
    blindCode: str
    greenBeanLotId: Optional[str] = None  # external samples have none
    submitterInfo: SubmitterInfo
    originInfo: OriginInfo
    lotInfo: LotInfo


class JudgeRef(BaseModel):
    id: str
    name: str
    role: UserRole


class JudgeScore(BaseModel):
    judgeId: str
    judgeName: str
    scores: Dict[str, float]
    notes: str = ""
    totalScore: float


class FinalResult(BaseModel):
    avgScores: Dict[str, float] = Field(default_factory=dict)
    totalScore: float = 0
    finalNotes: str = ""
    rank: Optional[int] = None


class CuppingSession(BaseModel):
    id: str
    name: str
    date: dt.date
    type: SessionType
    samples: List[CuppingSample] = Field(default_factory=list)
    judges: List[JudgeRef] = Field(default_factory=list)
    scores: Dict[str, List[JudgeScore]] = Field(default_factory=dict)
    status: SessionStatus = SessionStatus.SETUP
    finalResults: Optional[Dict[str, FinalResult]] = None

    def sample(self, sample_id: str) -> Optional[CuppingSample]:
        return next((s for s in self.samples if s.id == sample_id), None)

    def sample_for_lot(self, lot_id: str) -> Optional[CuppingSample]:
        return next((s for s in self.samples if s.greenBeanLotId == lot_id), None)

    def has_judge(self, user_id: str) -> bool:
        return any(j.id == user_id for j in self.judges)


# ---------- request payloads ----------

class SampleInputModel(BaseModel):
    id: Optional[str] = None
    blindCode: str
    submitterName: str
    originFarm: str
    process: str
    greenBeanLotId: Optional[str] = None

    @field_validator("blindCode", "submitterName", "originFarm", "process", mode="before")
    @classmethod
    def _required(cls, v):
        return required_text(v, "Each sample needs a blind code, submitter, origin and process.")

    @field_validator("greenBeanLotId")
    @classmethod
    def _lot(cls, v):
        return optional_text(v)


class SessionUpsertModel(BaseModel):
    name: str
    date: dt.date
    type: SessionType = SessionType.COMPETITION
    judgeIds: List[str] = Field(default_factory=list)
    samples: List[SampleInputModel] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name(cls, v):
        return required_text(v, "Session name is required.")

    @field_validator("judgeIds")
    @classmethod
    def _judges(cls, v):
        v = [j.strip() for j in v if j and j.strip()]
        if not v:
            raise ValueError("Select at least one judge.")
        return list(dict.fromkeys(v))

    @field_validator("samples")
    @classmethod
    def _samples(cls, v):
        if not v:
            raise ValueError("Add at least one sample.")
        return v


class FinalNotesModel(BaseModel):
    finalNotes: str = ""


class FinalizeModel(BaseModel):
    # sampleId -> notes typed during adjudication but not yet saved
    finalNotes: Dict[str, str] = Field(default_factory=dict)

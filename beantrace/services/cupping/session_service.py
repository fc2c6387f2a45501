# beantrace/services/cupping/session_service.py
import re
from typing import Dict, List, Optional

from flask import current_app

from beantrace.errors import Conflict, Forbidden, ValidationFailed
from beantrace.models.auth.user_models import UserRole
from beantrace.models.cupping.score_models import ScoreSheetModel
from beantrace.models.cupping.session_models import (
    CuppingSample,
    CuppingSession,
    JudgeRef,
    JudgeScore,
    LotInfo,
    OriginInfo,
    SessionStatus,
    SessionType,
    SessionUpsertModel,
    SubmitterInfo,
)
from beantrace.services.cupping.scoring import score_sheet
from beantrace.store import store

JUDGE_ROLES = {UserRole.CUPPER, UserRole.HEAD_JUDGE}
_SAMPLE_NO = re.compile(r"^S(\d+)$")


def _sample_number(sample_id: str) -> Optional[int]:
    m = _SAMPLE_NO.match(sample_id or "")
    return int(m.group(1)) if m else None


class CuppingSessionService:

    # ---------- hub ----------

    @staticmethod
    def list_sessions() -> List[dict]:
        sessions = sorted(store["cuppingSessions"], key=lambda s: s.date, reverse=True)
        return [
            {
                "id": s.id,
                "name": s.name,
                "date": s.date.isoformat(),
                "type": s.type.value,
                "status": s.status.value,
                "judgeCount": len(s.judges),
                "sampleCount": len(s.samples),
                "editable": s.status == SessionStatus.SETUP,
            }
            for s in sessions
        ]

    @staticmethod
    def session_detail(session_id: str, user_id: str) -> dict:
        session = store.require("cuppingSessions", session_id)
        samples = []
        for sample in session.samples:
            scores = session.scores.get(sample.id, [])
            samples.append({
                **sample.model_dump(mode="json"),
                "scores": [js.model_dump(mode="json") for js in scores],
                "hasScored": any(js.judgeId == user_id for js in scores),
            })
        data = session.model_dump(mode="json", exclude={"samples", "scores"})
        data["samples"] = samples
        return data

    @staticmethod
    def _judges(judge_ids: List[str]) -> List[JudgeRef]:
        judges = []
        for judge_id in judge_ids:
            user = store.find("users", judge_id)
            if user is None:
                raise ValidationFailed(f"Unknown judge: {judge_id}")
            if user.role not in JUDGE_ROLES:
                raise ValidationFailed(f"{user.name} is not a cupper or head judge.")
            judges.append(JudgeRef(id=user.id, name=user.name, role=user.role))
        return judges

    @staticmethod
    def _samples(payload: SessionUpsertModel, existing: List[CuppingSample]) -> List[CuppingSample]:
        """Keep ids of samples already in the session, number the rest S01, S02..."""
        known = {s.id for s in existing}
        numbers = [_sample_number(s.id) for s in payload.samples if s.id in known]
        next_no = max([n for n in numbers if n is not None], default=0)

        samples = []
        for item in payload.samples:
            if item.id and item.id in known:
                sample_id = item.id
            else:
                next_no += 1
                sample_id = f"S{next_no:02d}"
            samples.append(CuppingSample(
                id=sample_id,
                blindCode=item.blindCode,
                greenBeanLotId=item.greenBeanLotId,
                submitterInfo=SubmitterInfo(name=item.submitterName),
                originInfo=OriginInfo(farm=item.originFarm),
                lotInfo=LotInfo(process=item.process),
            ))
        return samples

    @staticmethod
    def create_session(payload: SessionUpsertModel) -> CuppingSession:
        with store.lock:
            judges = CuppingSessionService._judges(payload.judgeIds)
            session = CuppingSession(
                id=store.next_id("cuppingSessions", "CS"),
                name=payload.name,
                date=payload.date,
                type=payload.type,
                judges=judges,
                samples=CuppingSessionService._samples(payload, []),
                scores={},
                status=SessionStatus.SETUP,
            )
            store["cuppingSessions"].insert(0, session)

        current_app.logger.info("Cupping session %s created (%s)", session.id, session.type.value)
        return session

    @staticmethod
    def update_session(session_id: str, payload: SessionUpsertModel) -> CuppingSession:
        with store.lock:
            session = store.require("cuppingSessions", session_id)
            if session.status != SessionStatus.SETUP:
                raise Conflict("Sessions can only be edited while in Setup.")
            session.judges = CuppingSessionService._judges(payload.judgeIds)
            session.samples = CuppingSessionService._samples(payload, session.samples)
            session.name = payload.name
            session.date = payload.date
            session.type = payload.type
        return session

    # ---------- scoring sheet ----------

    @staticmethod
    def scoring_sessions(user_id: str) -> List[dict]:
        """Sessions a judge can pick on the scoring sheet, samples by blind code only."""
        out = []
        for session in store["cuppingSessions"]:
            if session.status == SessionStatus.FINALIZED:
                continue
            out.append({
                "id": session.id,
                "name": session.name,
                "type": session.type.value,
                "status": session.status.value,
                "samples": [
                    {
                        "id": sample.id,
                        "blindCode": sample.blindCode,
                        "hasScored": any(js.judgeId == user_id for js in session.scores.get(sample.id, [])),
                    }
                    for sample in session.samples
                ],
            })
        return out

    @staticmethod
    def submit_score(session_id: str, sample_id: str, sheet: ScoreSheetModel, judge: Dict[str, str]) -> JudgeScore:
        with store.lock:
            session = store.require("cuppingSessions", session_id)
            if session.sample(sample_id) is None:
                raise ValidationFailed(f"Sample {sample_id} is not part of session {session_id}")
            if session.status == SessionStatus.FINALIZED:
                raise Conflict("This session has been finalized.")
            if session.type == SessionType.COMPETITION:
                if session.status != SessionStatus.SCORING:
                    raise Conflict("Scores can only be submitted while the competition is in Scoring.")
                if judge["role"] != UserRole.ADMIN.value and not session.has_judge(judge["userId"]):
                    raise Forbidden("You are not a judge in this session.")

            existing = session.scores.setdefault(sample_id, [])
            if any(js.judgeId == judge["userId"] for js in existing):
                raise Conflict("You have already submitted a score for this sample.")

            result = score_sheet(sheet)
            entry = JudgeScore(
                judgeId=judge["userId"],
                judgeName=judge["name"],
                scores=result.scores,
                notes=sheet.notes,
                totalScore=result.finalScore,
            )
            existing.append(entry)

        current_app.logger.info(
            "Score %.2f recorded for %s/%s by %s", entry.totalScore, session_id, sample_id, judge["userId"]
        )
        return entry

# beantrace/services/processor/qc_service.py

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from flask import current_app

from beantrace.models.cupping.score_models import SCA_CUP_ATTRIBUTES, SCA_SENSORY_ATTRIBUTES, POINTS_PER_CUP
from beantrace.models.cupping.session_models import (
    CuppingSample,
    CuppingSession,
    JudgeRef,
    JudgeScore,
    LotInfo,
    OriginInfo,
    SessionStatus,
    SessionType,
    SubmitterInfo,
)
from beantrace.models.processor.green_bean_models import LotScoreRef, QCScoreModel
from beantrace.services.cupping.scoring import score_sheet
from beantrace.services.traceability import lineage
from beantrace.store import store


def qc_session_id(user_id: str) -> str:
    return f"CS-QC-{user_id}"


class QCService:
    """
    Internal QC scores. Each processor owns one born-Finalized Standard QC
    session; every lot they score becomes a sample in it.
    """

    @staticmethod
    def _session_for(user: Dict[str, str]) -> CuppingSession:
        session = store.find("cuppingSessions", qc_session_id(user["userId"]))
        if session is None:
            session = CuppingSession(
                id=qc_session_id(user["userId"]),
                name=f"{user['name']}'s Internal QC",
                date=dt.date.today(),
                type=SessionType.QC,
                samples=[],
                judges=[JudgeRef(id=user["userId"], name=user["name"], role=user["role"])],
                scores={},
                status=SessionStatus.FINALIZED,
            )
            store["cuppingSessions"].append(session)
        return session

    @staticmethod
    def _sample_for(session: CuppingSession, lot_id: str) -> CuppingSample:
        sample = session.sample_for_lot(lot_id)
        if sample is None:
            gbl = store.find("greenBeanLots", lot_id)
            parchment, _, harvest = lineage.origin_of(gbl)
            sample = CuppingSample(
                id=f"S{len(session.samples) + 1:02d}",
                blindCode=lot_id,
                greenBeanLotId=lot_id,
                submitterInfo=SubmitterInfo(name=harvest.farmerName if harvest else "N/A"),
                originInfo=OriginInfo(farm=harvest.farmPlotLocation if harvest else "N/A"),
                lotInfo=LotInfo(process=parchment.processType if parchment else "N/A"),
            )
            session.samples.append(sample)
        return sample

    @staticmethod
    def record_score(lot_id: str, payload: QCScoreModel, user: Dict[str, str]) -> JudgeScore:
        with store.lock:
            gbl = store.require("greenBeanLots", lot_id)

            if payload.mode == "simple":
                total = payload.score
                scores = {"Overall": total}
                notes = payload.notes
            else:
                result = score_sheet(payload.sheet)
                total = result.finalScore
                scores = result.scores
                notes = payload.notes or payload.sheet.notes

            session = QCService._session_for(user)
            sample = QCService._sample_for(session, gbl.id)

            entry = JudgeScore(
                judgeId=user["userId"], judgeName=user["name"], scores=scores, notes=notes, totalScore=total,
            )
            existing = session.scores.setdefault(sample.id, [])
            idx = next((i for i, js in enumerate(existing) if js.judgeId == user["userId"]), None)
            if idx is None:
                existing.append(entry)
            else:
                existing[idx] = entry

            ref = next((cs for cs in gbl.cuppingScores if cs.sessionId == session.id), None)
            if ref is None:
                gbl.cuppingScores.append(LotScoreRef(sessionId=session.id, score=total))
            else:
                ref.score = total

        current_app.logger.info("QC score %.2f saved for %s by %s", total, lot_id, user["userId"])
        return entry

    @staticmethod
    def saved_score(lot_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """The user's saved QC score for a lot, shaped for refilling the form."""
        store.require("greenBeanLots", lot_id)
        session = store.find("cuppingSessions", qc_session_id(user_id))
        sample = session.sample_for_lot(lot_id) if session else None
        if not sample:
            return None
        entry = next((js for js in session.scores.get(sample.id, []) if js.judgeId == user_id), None)
        if entry is None:
            return None

        if len(entry.scores) > 1:
            return {
                "mode": "detailed",
                "notes": entry.notes,
                "totalScore": entry.totalScore,
                "sensory": {a: entry.scores[a] for a in SCA_SENSORY_ATTRIBUTES if a in entry.scores},
                "cups": {a: int(entry.scores[a] / POINTS_PER_CUP) for a in SCA_CUP_ATTRIBUTES if a in entry.scores},
            }
        return {"mode": "simple", "notes": entry.notes, "score": entry.totalScore, "totalScore": entry.totalScore}

# beantrace/services/cupping/competition_service.py
from typing import Dict, Optional

from flask import current_app

from beantrace.errors import Conflict, ValidationFailed
from beantrace.models.cupping.session_models import (
    STATUS_ORDER,
    CuppingSession,
    FinalResult,
    SessionStatus,
    SessionType,
)
from beantrace.services.cupping.scoring import aggregate_sample, competition_ranks
from beantrace.store import store

NO_FINAL_NOTES = "No final notes provided."


class CompetitionService:

    @staticmethod
    def _competition(session_id: str) -> CuppingSession:
        session = store.require("cuppingSessions", session_id)
        if session.type != SessionType.COMPETITION:
            raise ValidationFailed(f"{session_id} is not a competition session")
        return session

    # ---------- views ----------

    @staticmethod
    def judge_view(session_id: str) -> dict:
        """What a cupper sees: the phase only."""
        session = CompetitionService._competition(session_id)
        return {"id": session.id, "name": session.name, "status": session.status.value}

    @staticmethod
    def dashboard(session_id: str) -> dict:
        session = CompetitionService._competition(session_id)
        view = {
            "id": session.id,
            "name": session.name,
            "date": session.date.isoformat(),
            "status": session.status.value,
            "judges": [j.model_dump(mode="json") for j in session.judges],
        }

        if session.status == SessionStatus.SETUP:
            view["samples"] = [{"id": s.id, "blindCode": s.blindCode} for s in session.samples]

        elif session.status == SessionStatus.SCORING:
            view["progress"] = [
                {
                    "sampleId": s.id,
                    "blindCode": s.blindCode,
                    "scoredBy": {
                        j.id: any(js.judgeId == j.id for js in session.scores.get(s.id, []))
                        for j in session.judges
                    },
                }
                for s in session.samples
            ]

        elif session.status == SessionStatus.ADJUDICATION:
            rows = []
            for s in session.samples:
                avg, total = aggregate_sample(session.scores.get(s.id, []))
                saved = (session.finalResults or {}).get(s.id)
                rows.append({
                    "sampleId": s.id,
                    "blindCode": s.blindCode,
                    "avgScores": avg,
                    "totalScore": total,
                    "judgeNotes": [
                        {"judgeName": js.judgeName, "notes": js.notes}
                        for js in session.scores.get(s.id, [])
                    ],
                    "finalNotes": saved.finalNotes if saved else None,
                })
            view["samples"] = rows

        else:
            results = []
            for sample_id, result in (session.finalResults or {}).items():
                sample = session.sample(sample_id)
                results.append({
                    "sampleId": sample_id,
                    "blindCode": sample.blindCode if sample else sample_id,
                    "submitter": sample.submitterInfo.name if sample else None,
                    "farm": sample.originInfo.farm if sample else None,
                    "process": sample.lotInfo.process if sample else None,
                    **result.model_dump(mode="json"),
                })
            results.sort(key=lambda r: r["rank"] or 999)
            view["results"] = results

        return view

    # ---------- lifecycle ----------

    @staticmethod
    def advance(session_id: str, target: SessionStatus) -> CuppingSession:
        """Setup -> Scoring -> Adjudication, one step at a time."""
        if target == SessionStatus.FINALIZED:
            raise ValidationFailed("Use finalize to close a competition.")
        with store.lock:
            session = CompetitionService._competition(session_id)
            current = STATUS_ORDER.index(session.status)
            if STATUS_ORDER.index(target) != current + 1:
                raise Conflict(f"Cannot move from {session.status.value} to {target.value}.")
            session.status = target

        current_app.logger.info("Competition %s moved to %s", session_id, target.value)
        return session

    @staticmethod
    def save_notes(session_id: str, sample_id: str, notes: str) -> FinalResult:
        with store.lock:
            session = CompetitionService._competition(session_id)
            if session.status != SessionStatus.ADJUDICATION:
                raise Conflict("Final notes can only be edited during Adjudication.")
            if session.sample(sample_id) is None:
                raise ValidationFailed(f"Sample {sample_id} is not part of session {session_id}")

            if session.finalResults is None:
                session.finalResults = {}
            result = session.finalResults.get(sample_id)
            if result is None:
                avg, total = aggregate_sample(session.scores.get(sample_id, []))
                result = FinalResult(avgScores=avg, totalScore=total, finalNotes="")
                session.finalResults[sample_id] = result
            result.finalNotes = notes
        return result

    @staticmethod
    def sample_scores(session_id: str, sample_id: str):
        session = CompetitionService._competition(session_id)
        if session.sample(sample_id) is None:
            raise ValidationFailed(f"Sample {sample_id} is not part of session {session_id}")
        return session.scores.get(sample_id, [])

    @staticmethod
    def finalize(session_id: str, draft_notes: Optional[Dict[str, str]] = None) -> CuppingSession:
        """
        Aggregate, rank and lock the competition. Notes per sample: the
        draft passed in, else what was saved, else NO_FINAL_NOTES.
        """
        draft_notes = draft_notes or {}
        with store.lock:
            session = CompetitionService._competition(session_id)
            if session.status == SessionStatus.FINALIZED:
                raise Conflict("This competition has already been finalized.")
            if session.status != SessionStatus.ADJUDICATION:
                raise Conflict("Only a competition in Adjudication can be finalized.")

            saved = session.finalResults or {}
            aggregates = {}
            for sample in session.samples:
                avg, total = aggregate_sample(session.scores.get(sample.id, []))
                notes = (
                    draft_notes.get(sample.id)
                    or (saved[sample.id].finalNotes if sample.id in saved else "")
                    or NO_FINAL_NOTES
                )
                aggregates[sample.id] = (avg, total, notes)

            ranks = competition_ranks((sid, agg[1]) for sid, agg in aggregates.items())
            session.finalResults = {
                sid: FinalResult(avgScores=avg, totalScore=total, finalNotes=notes, rank=ranks[sid])
                for sid, (avg, total, notes) in aggregates.items()
            }
            session.status = SessionStatus.FINALIZED

        current_app.logger.info("Competition %s finalized with %d samples", session_id, len(session.samples))
        return session

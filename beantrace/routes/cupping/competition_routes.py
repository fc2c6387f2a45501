# beantrace/routes/cupping/competition_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import identity, roles_required
from beantrace.errors import ValidationFailed
from beantrace.models.auth.user_models import UserRole
from beantrace.models.cupping.session_models import FinalizeModel, FinalNotesModel, SessionStatus
from beantrace.services.cupping.competition_service import CompetitionService
from beantrace.services.insights.insights_service import InsightsService

competition_bp = Blueprint("competition", __name__, url_prefix="/competition")


def _body() -> dict:
    return request.get_json(silent=True) or {}


# ------------------  VIEW ------------------
@competition_bp.get("/<session_id>")
@roles_required(UserRole.HEAD_JUDGE, UserRole.CUPPER, UserRole.ADMIN)
def competition_view(session_id):
    """
    Head Judge and Admin get the full dashboard for the current phase;
    a Cupper only learns which phase the competition is in.
    """
    if identity()["role"] == UserRole.CUPPER.value:
        return jsonify(ok=True, readOnly=True, competition=CompetitionService.judge_view(session_id)), 200
    read_only = identity()["role"] != UserRole.HEAD_JUDGE.value
    return jsonify(ok=True, readOnly=read_only, competition=CompetitionService.dashboard(session_id)), 200


# ------------------  HEAD JUDGE ACTIONS ------------------
@competition_bp.post("/<session_id>/advance")
@roles_required(UserRole.HEAD_JUDGE)
def advance(session_id):
    raw = _body().get("status")
    try:
        target = SessionStatus(raw)
    except ValueError:
        raise ValidationFailed(f"Unknown status: {raw}")
    session = CompetitionService.advance(session_id, target)
    return jsonify(ok=True, status=session.status.value), 200


@competition_bp.put("/<session_id>/samples/<sample_id>/notes")
@roles_required(UserRole.HEAD_JUDGE)
def save_notes(session_id, sample_id):
    payload = FinalNotesModel.model_validate(_body())
    result = CompetitionService.save_notes(session_id, sample_id, payload.finalNotes)
    return jsonify(ok=True, result=result.model_dump(mode="json")), 200


@competition_bp.post("/<session_id>/samples/<sample_id>/synthesize")
@roles_required(UserRole.HEAD_JUDGE)
def synthesize_notes(session_id, sample_id):
    scores = CompetitionService.sample_scores(session_id, sample_id)
    return jsonify(ok=True, summary=InsightsService.synthesize_cupping_notes(scores)), 200


@competition_bp.post("/<session_id>/finalize")
@roles_required(UserRole.HEAD_JUDGE)
def finalize(session_id):
    payload = FinalizeModel.model_validate(_body())
    CompetitionService.finalize(session_id, payload.finalNotes)
    return jsonify(ok=True, competition=CompetitionService.dashboard(session_id)), 200

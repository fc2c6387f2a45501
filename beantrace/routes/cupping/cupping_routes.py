# beantrace/routes/cupping/cupping_routes.py

from flask import Blueprint, jsonify, request

from beantrace.auth_guard import identity, roles_required
from beantrace.models.auth.user_models import UserRole
from beantrace.models.cupping.score_models import ScoreSheetModel
from beantrace.models.cupping.session_models import SessionUpsertModel
from beantrace.services.cupping.session_service import JUDGE_ROLES, CuppingSessionService
from beantrace.store import store

HUB_ROLES = (UserRole.PROCESSOR, UserRole.ROASTER, UserRole.HEAD_JUDGE, UserRole.ADMIN)

# ======================================================
# CUPPING HUB  →  /cupping/*
# ======================================================
cupping_bp = Blueprint("cupping", __name__, url_prefix="/cupping")


@cupping_bp.get("/sessions")
@roles_required(*HUB_ROLES)
def list_sessions():
    return jsonify(ok=True, sessions=CuppingSessionService.list_sessions()), 200


@cupping_bp.get("/judges")
@roles_required(*HUB_ROLES)
def list_judges():
    """Users that can be put on a panel."""
    judges = [u.model_dump(mode="json") for u in store["users"] if u.role in JUDGE_ROLES]
    return jsonify(ok=True, judges=judges), 200


@cupping_bp.post("/sessions")
@roles_required(*HUB_ROLES)
def create_session():
    payload = SessionUpsertModel.model_validate(request.get_json(silent=True) or {})
    session = CuppingSessionService.create_session(payload)
    return jsonify(ok=True, session=session.model_dump(mode="json")), 201


@cupping_bp.get("/sessions/<session_id>")
@roles_required(*HUB_ROLES)
def session_detail(session_id):
    data = CuppingSessionService.session_detail(session_id, identity()["userId"])
    return jsonify(ok=True, session=data), 200


@cupping_bp.put("/sessions/<session_id>")
@roles_required(*HUB_ROLES)
def update_session(session_id):
    payload = SessionUpsertModel.model_validate(request.get_json(silent=True) or {})
    session = CuppingSessionService.update_session(session_id, payload)
    return jsonify(ok=True, session=session.model_dump(mode="json")), 200


# ======================================================
# SCORING SHEET  →  /scoring/*
# ======================================================
scoring_bp = Blueprint("scoring", __name__, url_prefix="/scoring")


@scoring_bp.get("/sessions")
@roles_required(UserRole.CUPPER, UserRole.ADMIN)
def scoring_sessions():
    return jsonify(ok=True, sessions=CuppingSessionService.scoring_sessions(identity()["userId"])), 200


@scoring_bp.post("/sessions/<session_id>/samples/<sample_id>")
@roles_required(UserRole.CUPPER, UserRole.ADMIN)
def submit_score(session_id, sample_id):
    sheet = ScoreSheetModel.model_validate(request.get_json(silent=True) or {})
    entry = CuppingSessionService.submit_score(session_id, sample_id, sheet, identity())
    return jsonify(ok=True, score=entry.model_dump(mode="json")), 201

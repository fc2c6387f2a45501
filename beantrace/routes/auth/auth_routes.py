# beantrace/routes/auth/auth_routes.py

from flask import Blueprint, current_app, jsonify, request, session
from flask_jwt_extended import get_jwt_identity, jwt_required

from beantrace.auth_guard import identity, roles_required
from beantrace.models.auth.user_models import LoginModel
from beantrace.services.auth.auth_service import AuthService, public_payload
from beantrace.store import store

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


# -------------------------------------------------------------------
# JSON: /auth/login
# -------------------------------------------------------------------
@auth_bp.post("/login")
def auth_login():
    """
    JSON login:
      { email, password }
    Returns JWT tokens + user payload.
    Also sets the Flask session for browser clients.
    """
    payload = LoginModel.model_validate(request.get_json(silent=True) or {})
    acct = AuthService.authenticate(payload.email, payload.password)

    session["user_id"] = acct.id
    session["role"] = acct.role.value
    session["username"] = acct.name

    access, refresh = AuthService.issue_tokens(acct)
    current_app.logger.info("Login: %s (%s)", acct.id, acct.role.value)
    return (
        jsonify(
            ok=True,
            user=public_payload(acct),
            access_token=access,
            refresh_token=refresh,
        ),
        200,
    )


@auth_bp.post("/logout")
def auth_logout():
    session.clear()
    return jsonify(ok=True), 200


@auth_bp.get("/me")
@roles_required()
def auth_me():
    acct = store.account_by_id(identity()["userId"])
    return jsonify(ok=True, user=public_payload(acct)), 200


# -------------------------------------------------------------------
# JSON: /auth/refresh
# -------------------------------------------------------------------
@auth_bp.post("/refresh")
@jwt_required(refresh=True)
def auth_refresh():
    """
    Requires a valid refresh token; returns a new access token.
    """
    new_access = AuthService.refresh_access(get_jwt_identity())
    return jsonify(ok=True, access_token=new_access), 200

# beantrace/auth_guard.py
"""
Request identity for both clients we serve:
  - Web (Flask session set by /auth/login)
  - API / mobile (JWT Bearer, identity = user id, role/name in claims)
"""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, g, jsonify, session
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from beantrace.models.auth.user_models import UserRole
from beantrace.store import store


def current_identity() -> Optional[dict]:
    """
    Resolve the caller's user id (session first, then JWT) against the live
    login account. Role and name always come from the store, so a deleted
    user has no identity and a role change applies to existing tokens.
    """
    # 1) web session
    user_id = session.get("user_id")

    # 2) JWT
    if not user_id:
        try:
            verify_jwt_in_request(optional=True)
        except (JWTExtendedException, PyJWTError) as e:
            current_app.logger.info("Rejected bearer token: %s", e)
            return None
        user_id = get_jwt_identity()
        if not user_id:
            return None

    acct = store.account_by_id(user_id)
    if acct is None:
        current_app.logger.info("No live account for %s", user_id)
        return None
    return {
        "userId": acct.id,
        "name": acct.name,
        "role": acct.role.value,
    }


def roles_required(*roles: UserRole):
    """
    401 without an identity, 403 when the identity's role is not listed.
    No roles means any signed-in user. The identity lands on g.identity.
    """
    allowed = {r.value if isinstance(r, UserRole) else r for r in roles}

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            ident = current_identity()
            if not ident:
                return jsonify(ok=False, err="unauthorized"), 401
            if allowed and ident["role"] not in allowed:
                return jsonify(ok=False, err="forbidden"), 403
            g.identity = ident
            return fn(*args, **kwargs)
        return wrapper
    return decorator


def identity() -> dict:
    return g.identity

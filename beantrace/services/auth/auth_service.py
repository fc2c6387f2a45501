# beantrace/services/auth/auth_service.py
from typing import Tuple

from flask_jwt_extended import create_access_token, create_refresh_token

from beantrace.errors import Forbidden, ValidationFailed
from beantrace.models.auth.user_models import LoginAccount
from beantrace.security import bcrypt
from beantrace.store import store

INVALID_LOGIN = "Invalid email or password"


def public_payload(acct: LoginAccount) -> dict:
    """Safe subset of an account returned to clients."""
    return {
        "userId": acct.id,
        "name": acct.name,
        "email": acct.email,
        "role": acct.role.value,
    }


def _claims(acct: LoginAccount) -> dict:
    return {"role": acct.role.value, "name": acct.name}


class AuthService:

    @staticmethod
    def authenticate(email: str, password: str) -> LoginAccount:
        acct = store.account_by_email(email)
        if acct is None or not bcrypt.check_password_hash(acct.passwordHash, password):
            raise ValidationFailed(INVALID_LOGIN)
        return acct

    @staticmethod
    def issue_tokens(acct: LoginAccount) -> Tuple[str, str]:
        access = create_access_token(identity=acct.id, additional_claims=_claims(acct))
        refresh = create_refresh_token(identity=acct.id, additional_claims=_claims(acct))
        return access, refresh

    @staticmethod
    def refresh_access(user_id: str) -> str:
        """New access token with role/name taken from the live account."""
        acct = store.account_by_id(user_id)
        if acct is None:
            raise Forbidden("Account no longer exists.")
        return create_access_token(identity=acct.id, additional_claims=_claims(acct))

# beantrace/models/auth/user_models.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class UserRole(str, Enum):
    FARMER = "Farmer"
    PROCESSOR = "Processor"
    ROASTER = "Roaster"
    HEAD_JUDGE = "Head Judge"
    CUPPER = "Cupper"
    ADMIN = "Admin"
    CONSUMER = "Consumer"


class User(BaseModel):
    id: str
    name: str
    role: UserRole


class LoginAccount(BaseModel):
    """A user that can sign in. Only the bcrypt hash is kept."""
    id: str
    name: str
    email: str
    role: UserRole
    passwordHash: str


class LoginModel(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _norm_email(cls, v: str) -> str:
        v = (v or "").strip().lower()
        if not v:
            raise ValueError("Email is required.")
        return v

    @field_validator("password")
    @classmethod
    def _require_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required.")
        return v


class UserCreateModel(BaseModel):
    name: str
    role: UserRole
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _require_name(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("Name is required.")
        return v

    @field_validator("email")
    @classmethod
    def _norm_email(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().lower()
        return v or None


class UserUpdateModel(BaseModel):
    name: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty.")
        return v

"""Pydantic schemas for user registration and profile responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from vaccination_api.models.user import UserRole


class UserCreate(BaseModel):
    name: str
    email: str
    password: str
    cpf: str
    phone: str | None = None
    # Checked against UserRole by UserService so the 400 can list valid roles
    role: str
    coren: str | None = None

    @field_validator("name", "cpf")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Must not be empty")
        return v

    @field_validator("email")
    @classmethod
    def _normalise_email(cls, v: str) -> str:
        v = v.strip().lower()
        if "@" not in v:
            raise ValueError("Invalid email address")
        return v

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password must not be empty")
        return v

    @field_validator("phone", "coren")
    @classmethod
    def _blank_as_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class UserResponse(BaseModel):
    """Public projection of a user. Never includes the password hash."""

    id: str
    name: str
    email: str
    cpf: str
    phone: str | None
    role: UserRole
    coren: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

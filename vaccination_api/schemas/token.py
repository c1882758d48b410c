"""Pydantic schemas for JWT tokens."""

from __future__ import annotations

from pydantic import BaseModel, Field


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenPayload(BaseModel):
    """Claims carried by a verified access token."""

    sub: str = Field(min_length=1, strict=True)
    iat: int
    exp: int
    iss: str | None = None

    model_config = {"extra": "allow"}

    @property
    def user_id(self) -> str:
        return self.sub

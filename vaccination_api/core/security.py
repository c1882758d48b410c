"""
Password hashing (bcrypt) and JWT issuance / verification.

``TokenService.verify`` never raises for a bad token: it returns one of the
``VerificationResult`` variants so callers handle every outcome explicitly.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, ClassVar, Union

from jose import ExpiredSignatureError, JWSError, JWTError, jws, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from vaccination_api.core.config import Settings
from vaccination_api.core.timeutils import parse_duration, utcnow
from vaccination_api.schemas.token import TokenPayload

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ── Passwords ───────────────────────────────────────────────────────
def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_password_hash(plain: str) -> str:
    return pwd_context.hash(plain)


# ── Verification results ────────────────────────────────────────────
@dataclass(frozen=True)
class ValidToken:
    payload: TokenPayload


@dataclass(frozen=True)
class ExpiredToken:
    code: ClassVar[str] = "TOKEN_EXPIRED"
    message: str = "Token has expired. Please login again."


@dataclass(frozen=True)
class InvalidToken:
    """Malformed token, bad signature or failed registered claim."""

    code: ClassVar[str] = "INVALID_TOKEN"
    message: str = "Invalid token signature or format"


@dataclass(frozen=True)
class InvalidPayload:
    """Signature checks out but the claims are unusable."""

    code: ClassVar[str] = "INVALID_PAYLOAD"
    message: str = "Token payload must be an object with a subject"


VerificationResult = Union[ValidToken, ExpiredToken, InvalidToken, InvalidPayload]
TokenRejection = Union[ExpiredToken, InvalidToken, InvalidPayload]


# ── JWT tokens ──────────────────────────────────────────────────────
class TokenService:
    """Signs and checks HS256 access tokens for a single issuer."""

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        issuer: str = "univas-enfermagem-api",
        default_expires_in: str | int | timedelta = "1h",
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.issuer = issuer
        self.default_expires_in = parse_duration(default_expires_in)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            issuer=settings.JWT_ISSUER,
            default_expires_in=settings.JWT_EXPIRES_IN,
        )

    def issue(
        self,
        payload: Mapping[str, Any],
        expires_in: str | int | timedelta | None = None,
    ) -> str:
        """Return a signed token for ``payload``, which must carry ``sub``."""
        if not payload.get("sub"):
            raise ValueError("Token payload requires a 'sub' claim")

        lifetime = (
            self.default_expires_in if expires_in is None else parse_duration(expires_in)
        )
        issued_at = self._clock()
        claims = {
            **payload,
            "sub": str(payload["sub"]),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + lifetime).timestamp()),
            "iss": self.issuer,
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> VerificationResult:
        # Signature first: nothing in the payload is trusted before this.
        try:
            raw = jws.verify(token, self._secret, algorithms=[self._algorithm])
        except JWSError:
            return InvalidToken()

        try:
            claims = json.loads(raw)
        except ValueError:
            claims = None
        if not isinstance(claims, dict):
            return InvalidPayload("Token payload must be an object, not a string")

        try:
            jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=self.issuer,
                # Subject shape is judged by TokenPayload below
                options={"verify_sub": False, "require_exp": True, "require_iat": True},
            )
        except ExpiredSignatureError:
            return ExpiredToken()
        except JWTError:
            return InvalidToken()

        try:
            return ValidToken(TokenPayload.model_validate(claims))
        except ValidationError:
            return InvalidPayload("Token payload requires a string 'sub' claim")

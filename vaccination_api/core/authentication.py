"""
Bearer-token authentication for incoming requests.

``BearerAuthenticator`` is used as a FastAPI dependency: on success the
verified ``TokenPayload`` is stored on ``request.state.user`` and returned;
on failure an ``AuthenticationError`` carrying the 401 body is raised.

In production the body of a token rejection is only
``{"error": "Unauthorized"}``; elsewhere it also carries ``message`` and
``code`` so clients can tell an expired session from a forged token.
"""

from __future__ import annotations

import logging

from fastapi import Request

from vaccination_api.core.exceptions import AuthenticationError
from vaccination_api.core.security import (
    ExpiredToken,
    InvalidPayload,
    InvalidToken,
    TokenRejection,
    TokenService,
    ValidToken,
)
from vaccination_api.schemas.token import TokenPayload

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
UNAUTHORIZED = "Unauthorized"


class BearerAuthenticator:
    def __init__(self, token_service: TokenService, *, production: bool) -> None:
        self.token_service = token_service
        self.production = production

    async def __call__(self, request: Request) -> TokenPayload:
        payload = self.authenticate(request.headers.get("Authorization"))
        request.state.user = payload
        return payload

    def authenticate(self, authorization: str | None) -> TokenPayload:
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            raise AuthenticationError(
                {
                    "error": UNAUTHORIZED,
                    "message": "Missing or invalid Authorization header. "
                    "Expected format: 'Bearer <token>'",
                }
            )

        token = authorization[len(BEARER_PREFIX):].strip()
        if not token:
            raise AuthenticationError(
                {"error": UNAUTHORIZED, "message": "Token is empty in Authorization header"}
            )

        try:
            result = self.token_service.verify(token)
        except Exception:
            logger.exception("Unexpected authentication error")
            raise AuthenticationError({"error": UNAUTHORIZED}) from None

        if isinstance(result, ValidToken):
            logger.debug("Authenticated request for user %s", result.payload.user_id)
            return result.payload
        if isinstance(result, (ExpiredToken, InvalidToken, InvalidPayload)):
            raise AuthenticationError(self._rejection_body(result))

        logger.error("Unknown token verification result: %r", result)
        raise AuthenticationError({"error": UNAUTHORIZED})

    def _rejection_body(self, rejection: TokenRejection) -> dict[str, str]:
        if self.production:
            return {"error": UNAUTHORIZED}
        return {"error": UNAUTHORIZED, "message": rejection.message, "code": rejection.code}

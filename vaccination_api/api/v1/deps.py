"""
FastAPI dependencies — database session, repositories, token service and
the authentication guard.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from vaccination_api.core.authentication import BearerAuthenticator
from vaccination_api.core.config import settings
from vaccination_api.core.security import TokenService
from vaccination_api.db.session import async_session_factory
from vaccination_api.repositories.user_repo import UserRepository
from vaccination_api.schemas.token import TokenPayload
from vaccination_api.services.user_service import UserService


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


def get_user_repository(db: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_user_service(
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserService:
    return UserService(user_repo)


# ── Tokens & auth ───────────────────────────────────────────────────
@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    return TokenService.from_settings(settings)


def get_authenticator(
    token_service: TokenService = Depends(get_token_service),
) -> BearerAuthenticator:
    return BearerAuthenticator(token_service, production=settings.is_production)


async def get_current_user(
    request: Request,
    authenticator: BearerAuthenticator = Depends(get_authenticator),
) -> TokenPayload:
    """Verified token payload of the caller; rejects with 401 otherwise."""
    return await authenticator(request)

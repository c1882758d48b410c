"""
Auth endpoint — login (OAuth2 password flow) issuing a bearer access token.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordRequestForm
from slowapi import Limiter
from slowapi.util import get_remote_address

from vaccination_api.api.v1.deps import get_token_service, get_user_repository
from vaccination_api.core.config import settings
from vaccination_api.core.security import TokenService, verify_password
from vaccination_api.repositories.user_repo import UserRepository
from vaccination_api.schemas.token import Token

# Rate limiter — keyed by client IP
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post("/login", response_model=Token)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    user_repo: UserRepository = Depends(get_user_repository),
    token_service: TokenService = Depends(get_token_service),
) -> Token:
    """Authenticate with email/password. The email goes in ``username``."""
    user = await user_repo.find_by_email(form_data.username.lower().strip())

    if user is None or not verify_password(form_data.password, user.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not user.is_active or user.deleted_at is not None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    access_token = token_service.issue({"sub": user.id})
    logger.info("Issued access token for user %s", user.id)
    return Token(
        access_token=access_token,
        expires_in=int(token_service.default_expires_in.total_seconds()),
    )

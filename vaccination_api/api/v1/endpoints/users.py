"""
User endpoints: registration (public) and the caller's own profile.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from vaccination_api.api.v1.deps import get_current_user, get_user_repository, get_user_service
from vaccination_api.repositories.user_repo import UserRepository
from vaccination_api.schemas.token import TokenPayload
from vaccination_api.schemas.user import UserCreate, UserResponse
from vaccination_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    body: UserCreate,
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Register an employee, nurse or manager. Nurses must provide a COREN."""
    return await user_service.create_user(body)


@router.get("/me", response_model=UserResponse)
async def read_current_user(
    current_user: TokenPayload = Depends(get_current_user),
    user_repo: UserRepository = Depends(get_user_repository),
) -> UserResponse:
    """Return profile of the currently authenticated user."""
    user = await user_repo.find_by_id(current_user.user_id)
    if user is None or user.deleted_at is not None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")
    return UserResponse.model_validate(user)

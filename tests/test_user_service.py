"""Tests for the registration pipeline, independent of HTTP."""

from unittest.mock import AsyncMock

import pytest

from vaccination_api.core.exceptions import (
    DuplicateCORENError,
    DuplicateCPFError,
    DuplicateEmailError,
    InvalidRoleError,
    MissingCORENError,
)
from vaccination_api.repositories.user_repo import UserRepository
from vaccination_api.schemas.user import UserCreate
from vaccination_api.services.user_service import UserService


def _payload(**overrides) -> UserCreate:
    data = {
        "name": "Ana",
        "email": "ana@x.com",
        "password": "p1",
        "cpf": "111",
        "role": "EMPLOYEE",
    }
    data.update(overrides)
    return UserCreate(**data)


@pytest.mark.asyncio
async def test_create_user_projection(user_repo: UserRepository):
    result = await UserService(user_repo).create_user(_payload())
    assert result.id
    assert result.is_active is True
    assert result.created_at == result.updated_at
    assert "password" not in result.model_dump()


@pytest.mark.asyncio
async def test_invalid_role_checked_before_any_lookup(user_repo: UserRepository):
    user_repo.email_exists = AsyncMock(return_value=False)
    with pytest.raises(InvalidRoleError) as exc_info:
        await UserService(user_repo).create_user(_payload(role="nurse"))
    assert exc_info.value.extra["valid_roles"] == ["EMPLOYEE", "NURSE", "MANAGER"]
    user_repo.email_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_coren_reported_before_coren_lookup(user_repo: UserRepository):
    user_repo.coren_exists = AsyncMock(return_value=False)
    user_repo.create = AsyncMock()
    with pytest.raises(MissingCORENError):
        await UserService(user_repo).create_user(_payload(role="NURSE"))
    user_repo.coren_exists.assert_not_awaited()
    user_repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_duplicate_email_performs_no_write(user_repo: UserRepository):
    user_repo.email_exists = AsyncMock(return_value=True)
    user_repo.create = AsyncMock()
    with pytest.raises(DuplicateEmailError):
        await UserService(user_repo).create_user(_payload())
    user_repo.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_email_checked_before_cpf(user_repo: UserRepository):
    user_repo.email_exists = AsyncMock(return_value=True)
    user_repo.cpf_exists = AsyncMock(return_value=True)
    with pytest.raises(DuplicateEmailError):
        await UserService(user_repo).create_user(_payload())
    user_repo.cpf_exists.assert_not_awaited()


@pytest.mark.asyncio
async def test_racing_duplicate_email_reported_as_duplicate(user_repo: UserRepository, make_user):
    """A unique violation from the insert maps onto the same error as the pre-check."""
    await make_user(email="ana@x.com", cpf="999")
    user_repo.email_exists = AsyncMock(return_value=False)

    with pytest.raises(DuplicateEmailError):
        await UserService(user_repo).create_user(_payload())
    assert await user_repo.count() == 1


@pytest.mark.asyncio
async def test_racing_duplicate_cpf_reported_as_duplicate(user_repo: UserRepository, make_user):
    await make_user(email="other@x.com", cpf="111")
    user_repo.cpf_exists = AsyncMock(return_value=False)

    with pytest.raises(DuplicateCPFError):
        await UserService(user_repo).create_user(_payload())


@pytest.mark.asyncio
async def test_racing_duplicate_coren_reported_as_duplicate(user_repo: UserRepository, make_user):
    await make_user(email="other@x.com", cpf="222", coren="C-1")
    user_repo.coren_exists = AsyncMock(return_value=False)

    with pytest.raises(DuplicateCORENError):
        await UserService(user_repo).create_user(_payload(role="NURSE", coren="C-1"))

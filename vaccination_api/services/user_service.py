"""
User registration: uniqueness and role rules, hashing, persistence.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vaccination_api.core.exceptions import (
    DomainError,
    DuplicateCORENError,
    DuplicateCPFError,
    DuplicateEmailError,
    DuplicateResourceError,
    InvalidRoleError,
    MissingCORENError,
)
from vaccination_api.core.security import get_password_hash
from vaccination_api.core.timeutils import utcnow
from vaccination_api.models.user import UserRole
from vaccination_api.repositories.user_repo import UserRepository
from vaccination_api.schemas.user import UserCreate, UserResponse

logger = logging.getLogger(__name__)

VALID_ROLES = [role.value for role in UserRole]

# Column name found in the driver's unique-violation message -> error to raise
_UNIQUE_COLUMNS: dict[str, type[DuplicateResourceError]] = {
    "email": DuplicateEmailError,
    "cpf": DuplicateCPFError,
    "coren": DuplicateCORENError,
}


def parse_role(value: str) -> UserRole:
    try:
        return UserRole(value)
    except ValueError:
        raise InvalidRoleError(valid_roles=VALID_ROLES) from None


def duplicate_error_from(exc: IntegrityError) -> DuplicateResourceError:
    """Map a unique-constraint violation onto the matching duplicate error."""
    text = str(exc.orig).lower()
    for column, error in _UNIQUE_COLUMNS.items():
        # sqlite: "users.email"; postgres: "ix_users_email" or "Key (email)="
        if f"users.{column}" in text or f"users_{column}" in text or f"({column})" in text:
            return error()
    return DuplicateResourceError()


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def create_user(self, data: UserCreate) -> UserResponse:
        """Register a user and return its public projection.

        Checks run in order and stop at the first failure: role, email, CPF,
        then COREN for nurses. Nothing is written unless every check passes.
        A unique violation raised by the insert itself (two registrations
        racing past the checks) is reported as the same duplicate error.
        """
        try:
            role = parse_role(data.role)

            if await self.user_repo.email_exists(data.email):
                raise DuplicateEmailError()

            if await self.user_repo.cpf_exists(data.cpf):
                raise DuplicateCPFError()

            if role is UserRole.NURSE:
                if not data.coren:
                    raise MissingCORENError()
                if await self.user_repo.coren_exists(data.coren):
                    raise DuplicateCORENError()

            now = utcnow()
            try:
                user = await self.user_repo.create(
                    {
                        "name": data.name,
                        "email": data.email,
                        "password": get_password_hash(data.password),
                        "cpf": data.cpf,
                        "phone": data.phone,
                        "role": role,
                        "coren": data.coren,
                        "is_active": True,
                        "deleted_at": None,
                        "created_at": now,
                        "updated_at": now,
                    }
                )
            except IntegrityError as exc:
                raise duplicate_error_from(exc) from exc
        except DomainError as exc:
            logger.warning("User registration rejected for %s: %s", data.email, exc.message)
            raise

        logger.info("User %s registered with role %s", user.id, role.value)
        return UserResponse.model_validate(user)

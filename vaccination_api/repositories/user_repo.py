"""User record store: lookups by unique field, listings, existence checks and targeted updates."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from vaccination_api.core.timeutils import utcnow
from vaccination_api.models.scheduling import Notification
from vaccination_api.models.user import User, UserRole
from vaccination_api.repositories.base import BaseRepository

_ACTIVE = {"is_active": True, "deleted_at": None}


class UserRepository(BaseRepository[User]):
    model = User

    # ── Unique lookups ──────────────────────────────────────────────
    async def find_by_email(self, email: str) -> User | None:
        return await self.find_unique({"email": email})

    async def find_by_cpf(self, cpf: str) -> User | None:
        return await self.find_unique({"cpf": cpf})

    async def find_by_coren(self, coren: str) -> User | None:
        return await self.find_unique({"coren": coren})

    # ── Listings ────────────────────────────────────────────────────
    async def find_by_role(self, role: UserRole) -> list[User]:
        """All users with ``role``, including inactive and soft-deleted ones."""
        return await self.find_many({"role": role})

    async def find_all_active(self) -> list[User]:
        return await self.find_many(_ACTIVE)

    async def find_active_nurses(self) -> list[User]:
        """Nurses available to apply vaccines."""
        return await self.find_many({"role": UserRole.NURSE, **_ACTIVE})

    async def find_active_managers(self) -> list[User]:
        return await self.find_many({"role": UserRole.MANAGER, **_ACTIVE})

    async def find_by_id_with_relations(self, user_id: str) -> User | None:
        """Load a user with schedulings, applications and unread notifications.

        Notifications come back newest first.
        """
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(
                selectinload(User.schedulings_received),
                selectinload(User.applications_received),
                selectinload(User.applications_performed),
                selectinload(User.notifications.and_(Notification.is_read.is_(False))),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # ── Existence checks ────────────────────────────────────────────
    async def email_exists(self, email: str) -> bool:
        return await self.exists({"email": email})

    async def cpf_exists(self, cpf: str) -> bool:
        return await self.exists({"cpf": cpf})

    async def coren_exists(self, coren: str) -> bool:
        return await self.exists({"coren": coren})

    # ── Targeted updates ────────────────────────────────────────────
    async def update_password(self, user_id: str, hashed_password: str) -> User:
        return await self.update(user_id, {"password": hashed_password, "updated_at": utcnow()})

    async def toggle_active(self, user_id: str, is_active: bool) -> User:
        return await self.update(user_id, {"is_active": is_active, "updated_at": utcnow()})

    # ── Aggregates ──────────────────────────────────────────────────
    async def count_by_role(self, role: UserRole) -> int:
        return await self.count({"role": role})

    async def count_active(self) -> int:
        return await self.count(_ACTIVE)

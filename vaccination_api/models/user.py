"""
User model — identity records for employees, nurses and managers.
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Enum, String
from sqlalchemy.orm import relationship

from vaccination_api.db.base import Base


class UserRole(str, enum.Enum):
    EMPLOYEE = "EMPLOYEE"
    NURSE = "NURSE"
    MANAGER = "MANAGER"


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id: str = Column(String(36), primary_key=True, default=_new_id)  # type: ignore[assignment]
    name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    email: str = Column(String(320), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    password: str = Column(String(128), nullable=False)  # type: ignore[assignment]  # bcrypt hash
    cpf: str = Column(String(14), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    phone: str | None = Column(String(30), nullable=True)  # type: ignore[assignment]
    role: UserRole = Column(  # type: ignore[assignment]
        Enum(UserRole, name="user_role"),
        nullable=False,
        default=UserRole.EMPLOYEE,
    )
    coren: str | None = Column(String(30), unique=True, nullable=True)  # type: ignore[assignment]
    is_active: bool = Column(Boolean, nullable=False, default=True, server_default="true")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    deleted_at: datetime | None = Column(DateTime(timezone=True), nullable=True)  # type: ignore[assignment]

    schedulings_received = relationship(
        "Scheduling",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    applications_received = relationship(
        "VaccineApplication",
        back_populates="receiver",
        foreign_keys="VaccineApplication.receiver_id",
        cascade="all, delete-orphan",
    )
    applications_performed = relationship(
        "VaccineApplication",
        back_populates="applied_by",
        foreign_keys="VaccineApplication.applied_by_id",
    )
    notifications = relationship(
        "Notification",
        back_populates="user",
        order_by="desc(Notification.created_at)",
        cascade="all, delete-orphan",
    )

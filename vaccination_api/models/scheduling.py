"""
Scheduling, vaccine application & notification models — the records
hanging off a user that the profile projection loads alongside it.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from vaccination_api.db.base import Base


class Scheduling(Base):
    __tablename__ = "schedulings"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    user_id: str = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)  # type: ignore[assignment]
    vaccine_name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    scheduled_for: datetime = Column(DateTime(timezone=True), nullable=False)  # type: ignore[assignment]
    status: str = Column(String(20), nullable=False, default="SCHEDULED")  # type: ignore[assignment]
    # SCHEDULED | COMPLETED | CANCELLED
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    user = relationship("User", back_populates="schedulings_received")


class VaccineApplication(Base):
    __tablename__ = "vaccine_applications"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    receiver_id: str = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)  # type: ignore[assignment]
    applied_by_id: str | None = Column(String(36), ForeignKey("users.id"), nullable=True)  # type: ignore[assignment]
    vaccine_name: str = Column(String(200), nullable=False)  # type: ignore[assignment]
    dose: int = Column(Integer, nullable=False, default=1)  # type: ignore[assignment]
    applied_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )

    receiver = relationship(
        "User", back_populates="applications_received", foreign_keys=[receiver_id]
    )
    applied_by = relationship(
        "User", back_populates="applications_performed", foreign_keys=[applied_by_id]
    )


class Notification(Base):
    __tablename__ = "notifications"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    user_id: str = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)  # type: ignore[assignment]
    message: str = Column(String(500), nullable=False)  # type: ignore[assignment]
    is_read: bool = Column(Boolean, nullable=False, default=False, server_default="false")  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    user = relationship("User", back_populates="notifications")

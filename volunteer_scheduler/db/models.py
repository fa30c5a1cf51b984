# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from volunteer_scheduler.db.database import Base


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime, the form every timestamp column stores.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_staff(self) -> bool:
        return self.role in ("admin", "editor")


class Volunteer(Base):
    __tablename__ = "volunteers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    department = Column(String(255), nullable=False)
    skills = Column(Text, nullable=True)
    experience_years = Column(Integer, nullable=False, default=0)
    emergency_contact = Column(String(255), nullable=True)
    emergency_phone = Column(String(50), nullable=True)
    address = Column(Text, nullable=True)
    birth_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="active")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    schedules = relationship("Schedule", back_populates="volunteer", cascade="all, delete-orphan")


class Schedule(Base):
    __tablename__ = "schedules"
    __table_args__ = (
        Index("idx_schedules_volunteer_id", "volunteer_id"),
        Index("idx_schedules_start_time", "start_time"),
        Index("idx_schedules_status", "status"),
        Index("idx_schedules_shift_type", "shift_type"),
    )

    id = Column(Integer, primary_key=True, index=True)
    volunteer_id = Column(Integer, ForeignKey("volunteers.id", ondelete="CASCADE"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    shift_type = Column(String(50), nullable=False, default="morning")
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="scheduled")
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    volunteer = relationship("Volunteer", back_populates="schedules")

    # Display projections, joined at read time
    @property
    def volunteer_name(self):
        return self.volunteer.name if self.volunteer else None

    @property
    def volunteer_department(self):
        return self.volunteer.department if self.volunteer else None


class Notification(Base):
    __tablename__ = "notifications"
    __table_args__ = (
        Index("idx_notifications_is_read", "is_read"),
        Index("idx_notifications_type", "type"),
        Index("idx_notifications_created_at", "created_at"),
        Index("idx_notifications_sender_id", "sender_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")
    priority = Column(String(20), nullable=False, default="normal")
    is_broadcast = Column(Boolean, nullable=False, default=False)
    recipient_ids = Column(JSON, nullable=False, default=list)
    scheduled_time = Column(DateTime, nullable=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
    sender = relationship("User")

    @property
    def sender_name(self):
        return self.sender.name if self.sender else None

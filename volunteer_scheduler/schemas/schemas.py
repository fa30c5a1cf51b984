# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from datetime import date, datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

Role = Literal["admin", "editor", "user"]
VolunteerStatus = Literal["active", "inactive", "pending"]
ScheduleStatus = Literal["scheduled", "confirmed", "cancelled"]
NotificationType = Literal["info", "system", "schedule", "warning", "alert"]
NotificationPriority = Literal["low", "normal", "high", "urgent"]


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Timestamps are compared and stored as naive UTC.
    """
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class CamelModel(BaseModel):
    """
    Response envelopes whose keys are rendered in camelCase (byShiftType, totalVolunteers, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    email: Optional[str] = None


class UserBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr


class UserCreate(UserBase):
    password: str = Field(min_length=8)


class User(UserBase):
    id: int
    role: Role
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None


class UserRoleUpdate(BaseModel):
    role: Role


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=8)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class VolunteerBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(min_length=1, max_length=50)
    email: EmailStr
    department: str = Field(min_length=1, max_length=255)
    skills: Optional[str] = None
    experience_years: int = Field(default=0, ge=0)
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    status: VolunteerStatus = "active"
    notes: Optional[str] = None


class VolunteerCreate(VolunteerBase):
    pass


class VolunteerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    phone: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    department: Optional[str] = Field(default=None, min_length=1, max_length=255)
    skills: Optional[str] = None
    experience_years: Optional[int] = Field(default=None, ge=0)
    emergency_contact: Optional[str] = None
    emergency_phone: Optional[str] = None
    address: Optional[str] = None
    birth_date: Optional[date] = None
    status: Optional[VolunteerStatus] = None
    notes: Optional[str] = None


class Volunteer(VolunteerBase):
    id: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VolunteerPage(BaseModel):
    items: List[Volunteer]
    pagination: Pagination


class ScheduleBase(BaseModel):
    volunteer_id: int
    start_time: datetime
    end_time: datetime
    shift_type: str = Field(default="morning", min_length=1, max_length=50)
    location: Optional[str] = None
    notes: Optional[str] = None
    status: ScheduleStatus = "scheduled"

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timestamps(cls, value):
        return to_naive_utc(value)


class ScheduleCreate(ScheduleBase):
    pass


class ScheduleUpdate(BaseModel):
    volunteer_id: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    shift_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    location: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[ScheduleStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timestamps(cls, value):
        return to_naive_utc(value)


class Schedule(ScheduleBase):
    id: int
    created_at: datetime
    updated_at: datetime
    volunteer_name: Optional[str] = None
    volunteer_department: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ScheduleFilters(BaseModel):
    status: Optional[ScheduleStatus] = None
    shift_type: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    volunteer_id: Optional[int] = None
    search: Optional[str] = None

    @field_validator("date_from", "date_to")
    @classmethod
    def normalize_bounds(cls, value):
        return to_naive_utc(value)


class SchedulePage(BaseModel):
    items: List[Schedule]
    pagination: Pagination


class ShiftTypeCount(BaseModel):
    shift_type: str
    count: int


class VolunteerScheduleCount(BaseModel):
    volunteer_id: int
    volunteer_name: str
    department: Optional[str] = None
    count: int


class ScheduleStatusCounts(BaseModel):
    total: int
    scheduled: int
    confirmed: int
    cancelled: int


class ScheduleStats(CamelModel, ScheduleStatusCounts):
    by_shift_type: List[ShiftTypeCount]
    by_volunteer: List[VolunteerScheduleCount]


class NotificationBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    type: NotificationType = "info"
    priority: NotificationPriority = "normal"
    is_broadcast: bool = False
    recipient_ids: List[int] = Field(default_factory=list)
    scheduled_time: Optional[datetime] = None

    @field_validator("scheduled_time")
    @classmethod
    def normalize_scheduled_time(cls, value):
        return to_naive_utc(value)


class NotificationCreate(NotificationBase):
    sender_id: Optional[int] = None


class NotificationUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    type: Optional[NotificationType] = None
    priority: Optional[NotificationPriority] = None
    is_broadcast: Optional[bool] = None
    recipient_ids: Optional[List[int]] = None
    scheduled_time: Optional[datetime] = None

    @field_validator("scheduled_time")
    @classmethod
    def normalize_scheduled_time(cls, value):
        return to_naive_utc(value)


class Notification(NotificationBase):
    id: int
    sender_id: Optional[int] = None
    sender_name: Optional[str] = None
    is_read: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NotificationPage(BaseModel):
    items: List[Notification]
    pagination: Pagination


class TypeCount(BaseModel):
    type: str
    count: int


class NotificationStats(CamelModel):
    total: int
    unread: int
    read: int
    by_type: List[TypeCount]


class MarkAllReadResult(BaseModel):
    message: str
    updated: int


class ReminderResult(BaseModel):
    message: str
    notification_ids: List[int]


class DepartmentCount(BaseModel):
    department: Optional[str] = None
    count: int


class SkillCount(BaseModel):
    skill: str
    count: int


class ExperienceCount(BaseModel):
    experience_years: int
    count: int


class MonthCount(BaseModel):
    month: str
    count: int


class VolunteerStatusCounts(BaseModel):
    total: int
    active: int
    inactive: int
    pending: int


class VolunteerStats(CamelModel, VolunteerStatusCounts):
    by_department: List[DepartmentCount]
    by_skill: List[SkillCount]
    by_experience: List[ExperienceCount]


class DashboardReport(CamelModel):
    total_volunteers: int
    active_volunteers: int
    total_schedules: int
    confirmed_schedules: int
    volunteer_by_department: List[DepartmentCount]
    schedule_by_month: List[MonthCount]


class VolunteerReport(CamelModel):
    volunteers: List[Volunteer]
    stats: VolunteerStatusCounts
    department_stats: List[DepartmentCount]
    skill_stats: List[SkillCount]


class ScheduleReport(CamelModel):
    schedules: List[Schedule]
    stats: ScheduleStatusCounts
    shift_stats: List[ShiftTypeCount]
    volunteer_stats: List[VolunteerScheduleCount]


class Message(BaseModel):
    message: str

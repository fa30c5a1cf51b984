"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Mon Oct 06 2025
# SPDX-License-Identifier: MIT
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, contains_eager

from volunteer_scheduler.crud.common import like_pattern, paginate, storage_errors, validate_pagination
from volunteer_scheduler.db import models
from volunteer_scheduler.exceptions import NotFoundError, ScheduleConflictError, ValidationError
from volunteer_scheduler.schemas import schemas

logger = logging.getLogger(__name__)

CANCELLED = "cancelled"
TOP_VOLUNTEERS = 10

_NON_NULLABLE_FIELDS = ("volunteer_id", "start_time", "end_time", "shift_type", "status")


def get_schedule(db: Session, schedule_id: int):
    with storage_errors(db, "load schedule"):
        return (
            db.query(models.Schedule)
            .outerjoin(models.Schedule.volunteer)
            .options(contains_eager(models.Schedule.volunteer))
            .filter(models.Schedule.id == schedule_id)
            .first()
        )


def find_conflicting_schedule(
    db: Session,
    volunteer_id: int,
    start_time: datetime,
    end_time: datetime,
    exclude_schedule_id: Optional[int] = None,
):
    """
    Returns the earliest non-cancelled schedule of the volunteer whose [start, end)
    interval overlaps the candidate one, or None. Touching endpoints do not overlap.
    """
    with storage_errors(db, "check schedule conflicts"):
        query = db.query(models.Schedule).filter(
            models.Schedule.volunteer_id == volunteer_id,
            models.Schedule.status != CANCELLED,
            models.Schedule.start_time < end_time,
            models.Schedule.end_time > start_time,
        )
        if exclude_schedule_id is not None:
            query = query.filter(models.Schedule.id != exclude_schedule_id)
        return query.order_by(models.Schedule.start_time).first()


def has_schedule_conflict(
    db: Session,
    volunteer_id: int,
    start_time: datetime,
    end_time: datetime,
    exclude_schedule_id: Optional[int] = None,
) -> bool:
    return (
        find_conflicting_schedule(db, volunteer_id, start_time, end_time, exclude_schedule_id=exclude_schedule_id)
        is not None
    )


def _validate_shift_fields(volunteer_id, start_time, end_time):
    missing = [
        name
        for name, value in (("volunteer_id", volunteer_id), ("start_time", start_time), ("end_time", end_time))
        if value is None
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)
    if end_time <= start_time:
        raise ValidationError("end_time must be after start_time", fields=["end_time"])


def _lock_volunteer(db: Session, volunteer_id: int):
    # Row lock on server databases; SQLite already holds the write lock (BEGIN IMMEDIATE)
    volunteer = (
        db.query(models.Volunteer).filter(models.Volunteer.id == volunteer_id).with_for_update().first()
    )
    if volunteer is None:
        raise ValidationError(f"Volunteer {volunteer_id} does not exist", fields=["volunteer_id"])
    return volunteer


def _ensure_no_conflict(db: Session, volunteer_id, start_time, end_time, exclude_schedule_id=None):
    conflict = find_conflicting_schedule(db, volunteer_id, start_time, end_time, exclude_schedule_id)
    if conflict is not None:
        logger.info(
            "Rejected shift %s-%s for volunteer %s: overlaps schedule %s",
            start_time,
            end_time,
            volunteer_id,
            conflict.id,
        )
        raise ScheduleConflictError(conflicting_schedule_id=conflict.id)


def create_schedule(db: Session, schedule: schemas.ScheduleCreate):
    """
    Validates, conflict-checks and stores a new shift in a single transaction.
    """
    data = schedule.model_dump()
    _validate_shift_fields(data["volunteer_id"], data["start_time"], data["end_time"])

    with storage_errors(db, "create schedule"):
        _lock_volunteer(db, data["volunteer_id"])
        if data["status"] != CANCELLED:
            _ensure_no_conflict(db, data["volunteer_id"], data["start_time"], data["end_time"])
        db_schedule = models.Schedule(**data)
        db.add(db_schedule)
        db.commit()
        db.refresh(db_schedule)
    return db_schedule


def update_schedule(db: Session, schedule_id: int, schedule: schemas.ScheduleUpdate):
    """
    Applies a partial update. The effective interval is re-checked against every
    other shift of the (possibly new) volunteer unless the result is cancelled.
    """
    update_data = schedule.model_dump(exclude_unset=True)
    nulls = [key for key in _NON_NULLABLE_FIELDS if key in update_data and update_data[key] is None]
    if nulls:
        raise ValidationError("Required schedule fields cannot be cleared", fields=nulls)

    with storage_errors(db, "update schedule"):
        db_schedule = db.query(models.Schedule).filter(models.Schedule.id == schedule_id).first()
        if db_schedule is None:
            raise NotFoundError("Schedule not found")

        volunteer_id = update_data.get("volunteer_id", db_schedule.volunteer_id)
        start_time = update_data.get("start_time", db_schedule.start_time)
        end_time = update_data.get("end_time", db_schedule.end_time)
        status = update_data.get("status", db_schedule.status)
        _validate_shift_fields(volunteer_id, start_time, end_time)

        if status != CANCELLED:
            _lock_volunteer(db, volunteer_id)
            _ensure_no_conflict(db, volunteer_id, start_time, end_time, exclude_schedule_id=schedule_id)
        elif "volunteer_id" in update_data:
            _lock_volunteer(db, volunteer_id)

        for key, value in update_data.items():
            setattr(db_schedule, key, value)
        db.commit()
        db.refresh(db_schedule)
    return db_schedule


def delete_schedule(db: Session, schedule_id: int):
    with storage_errors(db, "delete schedule"):
        deleted = db.query(models.Schedule).filter(models.Schedule.id == schedule_id).delete()
        if not deleted:
            raise NotFoundError("Schedule not found")
        db.commit()


def filter_schedules(db: Session, filters: Optional[schemas.ScheduleFilters] = None):
    """
    Base query joined with the owning volunteer and narrowed by the given filters.
    """
    filters = filters or schemas.ScheduleFilters()
    if filters.date_from and filters.date_to and filters.date_from > filters.date_to:
        raise ValidationError("date_from must not be after date_to", fields=["date_from", "date_to"])

    query = db.query(models.Schedule).outerjoin(models.Schedule.volunteer)
    if filters.status:
        query = query.filter(models.Schedule.status == filters.status)
    if filters.shift_type:
        query = query.filter(models.Schedule.shift_type == filters.shift_type)
    if filters.date_from:
        query = query.filter(models.Schedule.start_time >= filters.date_from)
    if filters.date_to:
        query = query.filter(models.Schedule.start_time <= filters.date_to)
    if filters.volunteer_id is not None:
        query = query.filter(models.Schedule.volunteer_id == filters.volunteer_id)
    if filters.search:
        pattern = like_pattern(filters.search)
        query = query.filter(or_(models.Volunteer.name.ilike(pattern), models.Schedule.location.ilike(pattern)))
    return query


def _newest_first(query):
    return query.options(contains_eager(models.Schedule.volunteer)).order_by(
        models.Schedule.start_time.desc(), models.Schedule.id.desc()
    )


def list_schedules(
    db: Session,
    filters: Optional[schemas.ScheduleFilters] = None,
    page: int = 1,
    limit: Optional[int] = None,
) -> dict:
    limit = validate_pagination(page, limit)
    with storage_errors(db, "list schedules"):
        return paginate(_newest_first(filter_schedules(db, filters)), page, limit)


def search_schedules(db: Session, filters: Optional[schemas.ScheduleFilters] = None):
    """
    Unpaginated variant used by reports.
    """
    with storage_errors(db, "search schedules"):
        return _newest_first(filter_schedules(db, filters)).all()


def get_monthly_schedules(db: Session, year: int, month: int):
    invalid = []
    if year < 1 or year > 9999:
        invalid.append("year")
    if month < 1 or month > 12:
        invalid.append("month")
    if invalid:
        raise ValidationError("Invalid year or month", fields=invalid)

    first_day = datetime(year, month, 1)
    next_month = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    with storage_errors(db, "load monthly schedules"):
        return (
            db.query(models.Schedule)
            .outerjoin(models.Schedule.volunteer)
            .options(contains_eager(models.Schedule.volunteer))
            .filter(models.Schedule.start_time >= first_day, models.Schedule.start_time < next_month)
            .order_by(models.Schedule.start_time.asc(), models.Schedule.id.asc())
            .all()
        )


def count_by_status(query) -> dict:
    rows = (
        query.order_by(None)
        .with_entities(models.Schedule.status, func.count(models.Schedule.id))
        .group_by(models.Schedule.status)
        .all()
    )
    counts = {status: count for status, count in rows}
    return {
        "total": sum(counts.values()),
        "scheduled": counts.get("scheduled", 0),
        "confirmed": counts.get("confirmed", 0),
        "cancelled": counts.get(CANCELLED, 0),
    }


def count_by_shift_type(query) -> list:
    count = func.count(models.Schedule.id)
    rows = (
        query.order_by(None)
        .with_entities(models.Schedule.shift_type, count)
        .group_by(models.Schedule.shift_type)
        .order_by(count.desc(), models.Schedule.shift_type)
        .all()
    )
    return [{"shift_type": shift_type, "count": total} for shift_type, total in rows]


def count_by_volunteer(query, top: int = TOP_VOLUNTEERS) -> list:
    count = func.count(models.Schedule.id)
    rows = (
        query.order_by(None)
        .filter(models.Volunteer.id.isnot(None))
        .with_entities(models.Volunteer.id, models.Volunteer.name, models.Volunteer.department, count)
        .group_by(models.Volunteer.id, models.Volunteer.name, models.Volunteer.department)
        .order_by(count.desc(), models.Volunteer.name)
        .limit(top)
        .all()
    )
    return [
        {"volunteer_id": volunteer_id, "volunteer_name": name, "department": department, "count": total}
        for volunteer_id, name, department, total in rows
    ]


def get_schedule_stats(db: Session, filters: Optional[schemas.ScheduleFilters] = None) -> dict:
    with storage_errors(db, "compute schedule stats"):
        base = filter_schedules(db, filters)
        stats = count_by_status(base)
        stats["by_shift_type"] = count_by_shift_type(base)
        stats["by_volunteer"] = count_by_volunteer(base)
    return stats

# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import logging
from collections import Counter
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from volunteer_scheduler.crud.common import like_pattern, paginate, storage_errors, validate_pagination
from volunteer_scheduler.db import models
from volunteer_scheduler.exceptions import NotFoundError, ValidationError
from volunteer_scheduler.schemas import schemas

logger = logging.getLogger(__name__)

_NON_NULLABLE_FIELDS = ("name", "phone", "email", "department", "experience_years", "status")


def get_volunteer(db: Session, volunteer_id: int):
    with storage_errors(db, "load volunteer"):
        return db.query(models.Volunteer).filter(models.Volunteer.id == volunteer_id).first()


def get_volunteer_by_email(db: Session, email: str):
    with storage_errors(db, "load volunteer by email"):
        return db.query(models.Volunteer).filter(models.Volunteer.email == email).first()


def filter_volunteers(
    db: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
    department: Optional[str] = None,
    skill: Optional[str] = None,
):
    """
    Builds the filtered volunteer query shared by the list endpoint and the volunteer report.
    """
    query = db.query(models.Volunteer)
    if search:
        pattern = like_pattern(search)
        query = query.filter(
            or_(
                models.Volunteer.name.ilike(pattern),
                models.Volunteer.phone.ilike(pattern),
                models.Volunteer.email.ilike(pattern),
                models.Volunteer.department.ilike(pattern),
            )
        )
    if status:
        query = query.filter(models.Volunteer.status == status)
    if department:
        query = query.filter(models.Volunteer.department == department)
    if skill:
        query = query.filter(models.Volunteer.skills.ilike(like_pattern(skill)))
    return query.order_by(models.Volunteer.created_at.desc(), models.Volunteer.id.desc())


def list_volunteers(
    db: Session,
    search: Optional[str] = None,
    status: Optional[str] = None,
    department: Optional[str] = None,
    page: int = 1,
    limit: Optional[int] = None,
) -> dict:
    limit = validate_pagination(page, limit)
    with storage_errors(db, "list volunteers"):
        query = filter_volunteers(db, search=search, status=status, department=department)
        return paginate(query, page, limit)


def create_volunteer(db: Session, volunteer: schemas.VolunteerCreate):
    db_volunteer = models.Volunteer(**volunteer.model_dump())
    with storage_errors(db, "create volunteer"):
        try:
            db.add(db_volunteer)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Email already registered for another volunteer", fields=["email"])
        db.refresh(db_volunteer)
    return db_volunteer


def update_volunteer(db: Session, volunteer_id: int, volunteer: schemas.VolunteerUpdate):
    update_data = volunteer.model_dump(exclude_unset=True)
    nulls = [key for key in _NON_NULLABLE_FIELDS if key in update_data and update_data[key] is None]
    if nulls:
        raise ValidationError("Required volunteer fields cannot be cleared", fields=nulls)

    with storage_errors(db, "update volunteer"):
        db_volunteer = db.query(models.Volunteer).filter(models.Volunteer.id == volunteer_id).first()
        if db_volunteer is None:
            raise NotFoundError("Volunteer not found")
        for key, value in update_data.items():
            setattr(db_volunteer, key, value)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Email already registered for another volunteer", fields=["email"])
        db.refresh(db_volunteer)
    return db_volunteer


def delete_volunteer(db: Session, volunteer_id: int):
    """
    Deletes a volunteer together with all of their schedules.
    """
    with storage_errors(db, "delete volunteer"):
        db_volunteer = db.query(models.Volunteer).filter(models.Volunteer.id == volunteer_id).first()
        if db_volunteer is None:
            raise NotFoundError("Volunteer not found")
        removed_schedules = len(db_volunteer.schedules)
        db.delete(db_volunteer)
        db.commit()
    logger.info("Deleted volunteer %s and %s schedule(s)", volunteer_id, removed_schedules)


def count_by_status(db: Session, query=None) -> dict:
    """
    Returns {"total", "active", "inactive", "pending"} for the given volunteer query.
    """
    query = query if query is not None else db.query(models.Volunteer)
    rows = (
        query.order_by(None)
        .with_entities(models.Volunteer.status, func.count(models.Volunteer.id))
        .group_by(models.Volunteer.status)
        .all()
    )
    counts = {status: count for status, count in rows}
    return {
        "total": sum(counts.values()),
        "active": counts.get("active", 0),
        "inactive": counts.get("inactive", 0),
        "pending": counts.get("pending", 0),
    }


def count_by_department(db: Session, query=None) -> list:
    query = query if query is not None else db.query(models.Volunteer)
    count = func.count(models.Volunteer.id)
    rows = (
        query.order_by(None)
        .with_entities(models.Volunteer.department, count)
        .group_by(models.Volunteer.department)
        .order_by(count.desc(), models.Volunteer.department)
        .all()
    )
    return [{"department": department, "count": total} for department, total in rows]


def count_by_skill(db: Session, query=None) -> list:
    """
    Skills are stored comma-joined; each trimmed entry is counted once per volunteer.
    """
    query = query if query is not None else db.query(models.Volunteer)
    counter = Counter()
    for (skills,) in query.order_by(None).with_entities(models.Volunteer.skills).all():
        if not skills:
            continue
        counter.update({skill.strip() for skill in skills.split(",") if skill.strip()})
    ranked = sorted(counter.items(), key=lambda item: (-item[1], item[0]))
    return [{"skill": skill, "count": total} for skill, total in ranked]


def count_by_experience(db: Session) -> list:
    rows = (
        db.query(models.Volunteer.experience_years, func.count(models.Volunteer.id))
        .group_by(models.Volunteer.experience_years)
        .order_by(models.Volunteer.experience_years.asc())
        .all()
    )
    return [{"experience_years": years, "count": total} for years, total in rows]


def get_volunteer_stats(db: Session) -> dict:
    with storage_errors(db, "compute volunteer stats"):
        stats = count_by_status(db)
        stats.update(
            {
                "by_department": count_by_department(db),
                "by_skill": count_by_skill(db),
                "by_experience": count_by_experience(db),
            }
        )
    return stats

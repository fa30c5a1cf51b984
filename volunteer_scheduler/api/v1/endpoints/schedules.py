"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Thu Oct 09 2025
# SPDX-License-Identifier: MIT
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from volunteer_scheduler.crud import crud_schedule
from volunteer_scheduler.db.database import get_db
from volunteer_scheduler.db.models import User
from volunteer_scheduler.dependencies import get_current_active_user, get_current_admin, get_current_staff
from volunteer_scheduler.schemas import schemas
from volunteer_scheduler.services.reminder_service import ReminderService

router = APIRouter(
    prefix="/schedules",
    tags=["Schedules"],
    responses={404: {"description": "Not found"}},
)


def schedule_filters(
    status_filter: Optional[schemas.ScheduleStatus] = Query(None, alias="status"),
    shift_type: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    volunteer_id: Optional[int] = None,
    search: Optional[str] = None,
) -> schemas.ScheduleFilters:
    return schemas.ScheduleFilters(
        status=status_filter,
        shift_type=shift_type,
        date_from=date_from,
        date_to=date_to,
        volunteer_id=volunteer_id,
        search=search,
    )


@router.post(
    "/",
    response_model=schemas.Schedule,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Volunteer time conflict"}},
)
def create_schedule(
    schedule: schemas.ScheduleCreate,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    """
    Schedules a volunteer for a shift. Rejected when it overlaps another non-cancelled shift of the same volunteer.
    """
    return crud_schedule.create_schedule(db, schedule)


@router.get("/", response_model=schemas.SchedulePage)
def read_schedules(
    filters: schemas.ScheduleFilters = Depends(schedule_filters),
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    return crud_schedule.list_schedules(db, filters, page=page, limit=limit)


@router.get("/stats", response_model=schemas.ScheduleStats)
def read_schedule_stats(
    filters: schemas.ScheduleFilters = Depends(schedule_filters),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    return crud_schedule.get_schedule_stats(db, filters)


@router.get("/monthly", response_model=List[schemas.Schedule])
def read_monthly_schedules(
    year: int,
    month: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    return crud_schedule.get_monthly_schedules(db, year, month)


@router.get("/{schedule_id}", response_model=schemas.Schedule)
def read_schedule(
    schedule_id: int, current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)
):
    db_schedule = crud_schedule.get_schedule(db, schedule_id)
    if db_schedule is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Schedule not found")
    return db_schedule


@router.put(
    "/{schedule_id}",
    response_model=schemas.Schedule,
    responses={409: {"description": "Volunteer time conflict"}},
)
def update_schedule(
    schedule_id: int,
    schedule: schemas.ScheduleUpdate,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    return crud_schedule.update_schedule(db, schedule_id, schedule)


@router.delete("/{schedule_id}", response_model=schemas.Message)
def delete_schedule(
    schedule_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    crud_schedule.delete_schedule(db, schedule_id)
    return {"message": "Schedule deleted successfully"}


@router.post("/{schedule_id}/reminder", response_model=schemas.Notification, status_code=status.HTTP_201_CREATED)
def create_schedule_reminder(
    schedule_id: int,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    """
    Creates a reminder notification addressed to the volunteer of this shift.
    """
    return ReminderService(db).send_schedule_reminder(schedule_id, sender_id=current_staff.id)

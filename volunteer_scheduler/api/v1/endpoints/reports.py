"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Fri Oct 10 2025
# SPDX-License-Identifier: MIT
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from volunteer_scheduler.api.v1.endpoints.schedules import schedule_filters
from volunteer_scheduler.db.database import get_db
from volunteer_scheduler.db.models import User
from volunteer_scheduler.dependencies import get_current_active_user
from volunteer_scheduler.schemas import schemas
from volunteer_scheduler.services.report_service import ReportService

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
)


@router.get("/dashboard", response_model=schemas.DashboardReport)
def read_dashboard(current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)):
    return ReportService(db).dashboard()


@router.get("/volunteers", response_model=schemas.VolunteerReport)
def read_volunteer_report(
    department: Optional[str] = None,
    status_filter: Optional[schemas.VolunteerStatus] = Query(None, alias="status"),
    skill: Optional[str] = None,
    search: Optional[str] = None,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    return ReportService(db).volunteer_report(department=department, status=status_filter, skill=skill, search=search)


@router.get("/schedules", response_model=schemas.ScheduleReport)
def read_schedule_report(
    filters: schemas.ScheduleFilters = Depends(schedule_filters),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    return ReportService(db).schedule_report(filters)

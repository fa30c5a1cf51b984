"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Wed Oct 08 2025
# SPDX-License-Identifier: MIT
"""

from typing import Optional

from sqlalchemy import extract, func
from sqlalchemy.orm import Session

from volunteer_scheduler.crud import crud_schedule, crud_volunteer
from volunteer_scheduler.crud.common import storage_errors
from volunteer_scheduler.db import models
from volunteer_scheduler.schemas import schemas

DASHBOARD_MONTHS = 6


class ReportService:
    """
    Read-only aggregations behind the reporting screens.
    """

    def __init__(self, db: Session):
        self.db = db

    def dashboard(self) -> dict:
        with storage_errors(self.db, "build dashboard report"):
            volunteer_counts = crud_volunteer.count_by_status(self.db)
            schedule_counts = crud_schedule.count_by_status(self.db.query(models.Schedule))
            return {
                "total_volunteers": volunteer_counts["total"],
                "active_volunteers": volunteer_counts["active"],
                "total_schedules": schedule_counts["total"],
                "confirmed_schedules": schedule_counts["confirmed"],
                "volunteer_by_department": crud_volunteer.count_by_department(self.db),
                "schedule_by_month": self._schedules_by_month(),
            }

    def _schedules_by_month(self, months: int = DASHBOARD_MONTHS) -> list:
        year = extract("year", models.Schedule.start_time)
        month = extract("month", models.Schedule.start_time)
        rows = (
            self.db.query(year, month, func.count(models.Schedule.id))
            .group_by(year, month)
            .order_by(year.desc(), month.desc())
            .limit(months)
            .all()
        )
        return [{"month": f"{int(y):04d}-{int(m):02d}", "count": total} for y, m, total in rows]

    def volunteer_report(
        self,
        department: Optional[str] = None,
        status: Optional[str] = None,
        skill: Optional[str] = None,
        search: Optional[str] = None,
    ) -> dict:
        with storage_errors(self.db, "build volunteer report"):
            query = crud_volunteer.filter_volunteers(
                self.db, search=search, status=status, department=department, skill=skill
            )
            return {
                "volunteers": query.all(),
                "stats": crud_volunteer.count_by_status(self.db, query),
                "department_stats": crud_volunteer.count_by_department(self.db, query),
                "skill_stats": crud_volunteer.count_by_skill(self.db, query),
            }

    def schedule_report(self, filters: Optional[schemas.ScheduleFilters] = None) -> dict:
        with storage_errors(self.db, "build schedule report"):
            base = crud_schedule.filter_schedules(self.db, filters)
            return {
                "schedules": crud_schedule.search_schedules(self.db, filters),
                "stats": crud_schedule.count_by_status(base),
                "shift_stats": crud_schedule.count_by_shift_type(base),
                "volunteer_stats": crud_schedule.count_by_volunteer(base),
            }

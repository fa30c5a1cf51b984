"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Wed Oct 08 2025
# SPDX-License-Identifier: MIT
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from volunteer_scheduler.config import settings
from volunteer_scheduler.crud import crud_notification, crud_schedule
from volunteer_scheduler.crud.common import storage_errors
from volunteer_scheduler.db import models
from volunteer_scheduler.exceptions import NotFoundError
from volunteer_scheduler.schemas import schemas

logger = logging.getLogger(__name__)


class ReminderService:
    """
    Turns upcoming shifts into "schedule" notifications. Nothing is delivered;
    the notification rows are what the front end polls.
    """

    def __init__(self, db: Session, window_minutes: Optional[int] = None):
        self.db = db
        if window_minutes is None:
            window_minutes = settings.reminder_window_minutes
        self.window = timedelta(minutes=window_minutes)

    def send_schedule_reminder(self, schedule_id: int, sender_id: Optional[int] = None) -> models.Notification:
        schedule = crud_schedule.get_schedule(self.db, schedule_id)
        if schedule is None:
            raise NotFoundError("Schedule not found")

        notification = schemas.NotificationCreate(
            title=f"Shift reminder: {schedule.volunteer_name}",
            content=(
                f"You have a {schedule.shift_type} shift on {schedule.start_time:%Y-%m-%d %H:%M}, "
                f"location: {schedule.location or 'not specified'}"
            ),
            type="schedule",
            priority="high",
            is_broadcast=False,
            recipient_ids=[schedule.volunteer_id],
        )
        db_notification = crud_notification.create_notification(self.db, notification, sender_id=sender_id)
        logger.info("Reminder %s created for schedule %s", db_notification.id, schedule_id)
        return db_notification

    def upcoming_confirmed_schedules(self, now: datetime) -> List[models.Schedule]:
        with storage_errors(self.db, "load upcoming schedules"):
            return (
                self.db.query(models.Schedule)
                .filter(
                    models.Schedule.status == "confirmed",
                    models.Schedule.start_time >= now,
                    models.Schedule.start_time <= now + self.window,
                )
                .order_by(models.Schedule.start_time)
                .all()
            )

    def check_and_send_reminders(self, now: Optional[datetime] = None, sender_id: Optional[int] = None):
        """
        Creates one reminder per confirmed shift starting within the reminder window.
        """
        now = schemas.to_naive_utc(now) if now else models.utcnow()
        schedules = self.upcoming_confirmed_schedules(now)
        if not schedules:
            logger.info("No confirmed shifts start before %s", now + self.window)
            return []
        return [self.send_schedule_reminder(schedule.id, sender_id=sender_id) for schedule in schedules]

"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Thu Oct 09 2025
# SPDX-License-Identifier: MIT
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from volunteer_scheduler.crud import crud_notification
from volunteer_scheduler.db.database import get_db
from volunteer_scheduler.db.models import User
from volunteer_scheduler.dependencies import get_current_active_user, get_current_admin, get_current_staff
from volunteer_scheduler.schemas import schemas
from volunteer_scheduler.services.reminder_service import ReminderService

router = APIRouter(
    prefix="/notifications",
    tags=["Notifications"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=schemas.NotificationPage)
def read_notifications(
    type: Optional[schemas.NotificationType] = None,
    is_read: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    return crud_notification.list_notifications(db, type=type, is_read=is_read, page=page, limit=limit)


@router.get("/unread", response_model=List[schemas.Notification])
def read_unread_notifications(current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)):
    """
    The ten most recent unread notifications.
    """
    return crud_notification.get_unread_notifications(db)


@router.get("/stats", response_model=schemas.NotificationStats)
def read_notification_stats(current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)):
    return crud_notification.get_notification_stats(db)


@router.put("/mark-all-read", response_model=schemas.MarkAllReadResult)
def mark_all_notifications_read(current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)):
    updated = crud_notification.mark_all_as_read(db)
    return {"message": f"Marked {updated} notification(s) as read", "updated": updated}


@router.post("/reminders", response_model=schemas.ReminderResult, status_code=status.HTTP_201_CREATED)
def send_upcoming_reminders(current_staff: User = Depends(get_current_staff), db: Session = Depends(get_db)):
    """
    Creates reminders for every confirmed shift that starts within the reminder window.
    """
    notifications = ReminderService(db).check_and_send_reminders(sender_id=current_staff.id)
    return {
        "message": f"Created {len(notifications)} reminder(s)",
        "notification_ids": [notification.id for notification in notifications],
    }


@router.post("/", response_model=schemas.Notification, status_code=status.HTTP_201_CREATED)
def create_notification(
    notification: schemas.NotificationCreate,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    return crud_notification.create_notification(db, notification, sender_id=current_staff.id)


@router.get("/{notification_id}", response_model=schemas.Notification)
def read_notification(
    notification_id: int, current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)
):
    db_notification = crud_notification.get_notification(db, notification_id)
    if db_notification is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
    return db_notification


@router.put("/{notification_id}", response_model=schemas.Notification)
def update_notification(
    notification_id: int,
    notification: schemas.NotificationUpdate,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    return crud_notification.update_notification(db, notification_id, notification)


@router.put("/{notification_id}/read", response_model=schemas.Notification)
def mark_notification_read(
    notification_id: int, current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)
):
    return crud_notification.mark_as_read(db, notification_id)


@router.delete("/{notification_id}", response_model=schemas.Message)
def delete_notification(
    notification_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    crud_notification.delete_notification(db, notification_id)
    return {"message": "Notification deleted successfully"}

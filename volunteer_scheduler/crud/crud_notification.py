"""
# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# Created Date: Tue Oct 07 2025
# SPDX-License-Identifier: MIT
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from volunteer_scheduler.crud.common import paginate, storage_errors, validate_pagination
from volunteer_scheduler.db import models
from volunteer_scheduler.exceptions import NotFoundError, ValidationError
from volunteer_scheduler.schemas import schemas

UNREAD_LIMIT = 10

_NON_NULLABLE_FIELDS = ("title", "content", "type", "priority", "is_broadcast", "recipient_ids")


def _with_sender(query):
    return query.options(joinedload(models.Notification.sender))


def get_notification(db: Session, notification_id: int):
    with storage_errors(db, "load notification"):
        return (
            _with_sender(db.query(models.Notification))
            .filter(models.Notification.id == notification_id)
            .first()
        )


def list_notifications(
    db: Session,
    type: Optional[str] = None,
    is_read: Optional[bool] = None,
    page: int = 1,
    limit: Optional[int] = None,
) -> dict:
    limit = validate_pagination(page, limit)
    with storage_errors(db, "list notifications"):
        query = _with_sender(db.query(models.Notification))
        if type:
            query = query.filter(models.Notification.type == type)
        if is_read is not None:
            query = query.filter(models.Notification.is_read == is_read)
        query = query.order_by(models.Notification.created_at.desc(), models.Notification.id.desc())
        return paginate(query, page, limit)


def get_unread_notifications(db: Session, limit: int = UNREAD_LIMIT):
    with storage_errors(db, "load unread notifications"):
        return (
            _with_sender(db.query(models.Notification))
            .filter(models.Notification.is_read.is_(False))
            .order_by(models.Notification.created_at.desc(), models.Notification.id.desc())
            .limit(limit)
            .all()
        )


def create_notification(db: Session, notification: schemas.NotificationCreate, sender_id: Optional[int] = None):
    """
    Stores a notification. An explicit sender_id in the payload wins over the caller's id.
    """
    data = notification.model_dump()
    if data.get("sender_id") is None:
        data["sender_id"] = sender_id
    db_notification = models.Notification(**data, is_read=False)
    with storage_errors(db, "create notification"):
        if data["sender_id"] is not None and db.get(models.User, data["sender_id"]) is None:
            raise ValidationError(f"Sender {data['sender_id']} does not exist", fields=["sender_id"])
        db.add(db_notification)
        db.commit()
        db.refresh(db_notification)
    return db_notification


def update_notification(db: Session, notification_id: int, notification: schemas.NotificationUpdate):
    update_data = notification.model_dump(exclude_unset=True)
    nulls = [key for key in _NON_NULLABLE_FIELDS if key in update_data and update_data[key] is None]
    if nulls:
        raise ValidationError("Required notification fields cannot be cleared", fields=nulls)

    with storage_errors(db, "update notification"):
        db_notification = db.query(models.Notification).filter(models.Notification.id == notification_id).first()
        if db_notification is None:
            raise NotFoundError("Notification not found")
        for key, value in update_data.items():
            setattr(db_notification, key, value)
        db.commit()
        db.refresh(db_notification)
    return db_notification


def delete_notification(db: Session, notification_id: int):
    with storage_errors(db, "delete notification"):
        deleted = db.query(models.Notification).filter(models.Notification.id == notification_id).delete()
        if not deleted:
            raise NotFoundError("Notification not found")
        db.commit()


def mark_as_read(db: Session, notification_id: int):
    with storage_errors(db, "mark notification as read"):
        db_notification = db.query(models.Notification).filter(models.Notification.id == notification_id).first()
        if db_notification is None:
            raise NotFoundError("Notification not found")
        db_notification.is_read = True
        db.commit()
        db.refresh(db_notification)
    return db_notification


def mark_all_as_read(db: Session) -> int:
    """
    Returns the number of notifications that changed state.
    """
    with storage_errors(db, "mark all notifications as read"):
        updated = (
            db.query(models.Notification)
            .filter(models.Notification.is_read.is_(False))
            .update({models.Notification.is_read: True}, synchronize_session="fetch")
        )
        db.commit()
    return updated


def get_notification_stats(db: Session) -> dict:
    with storage_errors(db, "compute notification stats"):
        read_rows = (
            db.query(models.Notification.is_read, func.count(models.Notification.id))
            .group_by(models.Notification.is_read)
            .all()
        )
        by_read = {bool(is_read): count for is_read, count in read_rows}

        count = func.count(models.Notification.id)
        type_rows = (
            db.query(models.Notification.type, count)
            .group_by(models.Notification.type)
            .order_by(count.desc(), models.Notification.type)
            .all()
        )
    return {
        "total": sum(by_read.values()),
        "unread": by_read.get(False, 0),
        "read": by_read.get(True, 0),
        "by_type": [{"type": type_, "count": total} for type_, total in type_rows],
    }

# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from volunteer_scheduler.crud.common import storage_errors
from volunteer_scheduler.db import models
from volunteer_scheduler.exceptions import NotFoundError, ValidationError
from volunteer_scheduler.schemas import schemas
from volunteer_scheduler.utils.security import get_password_hash

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int):
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, user: schemas.UserCreate):
    """
    Creates a staff account. The first account ever created becomes the admin,
    every later one starts with the plain "user" role.
    """
    with storage_errors(db, "create user"):
        role = "admin" if db.query(models.User.id).first() is None else "user"
        db_user = models.User(
            name=user.name,
            email=user.email,
            password=get_password_hash(user.password),
            role=role,
            is_active=True,
        )
        try:
            db.add(db_user)
            db.commit()
        except IntegrityError:
            db.rollback()
            return None  # Duplicate email
        db.refresh(db_user)
    if role == "admin":
        logger.info("Bootstrap admin account created for %s", db_user.email)
    return db_user


def update_password(db: Session, db_user: models.User, new_password: str):
    with storage_errors(db, "update password"):
        db_user.password = get_password_hash(new_password)
        db.commit()
        db.refresh(db_user)
    return db_user


def update_profile(db: Session, db_user: models.User, profile: schemas.UserProfileUpdate):
    """
    Updates the caller's own name and email. Role, password and timestamps are not touched here.
    """
    update_data = profile.model_dump(exclude_unset=True)
    nulls = [key for key in ("name", "email") if key in update_data and update_data[key] is None]
    if nulls:
        raise ValidationError("Profile fields cannot be cleared", fields=nulls)

    with storage_errors(db, "update profile"):
        for key, value in update_data.items():
            setattr(db_user, key, value)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Email already registered", fields=["email"])
        db.refresh(db_user)
    return db_user


def set_role(db: Session, user_id: int, role: str):
    with storage_errors(db, "update user role"):
        db_user = get_user(db, user_id)
        if db_user is None:
            raise NotFoundError("User not found")
        db_user.role = role
        db.commit()
        db.refresh(db_user)
    return db_user

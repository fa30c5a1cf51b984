# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from datetime import datetime

from volunteer_scheduler.crud import crud_schedule, crud_volunteer
from volunteer_scheduler.db import models
from volunteer_scheduler.dependencies import create_access_token
from volunteer_scheduler.schemas import schemas
from volunteer_scheduler.utils.security import get_password_hash

TEST_PASSWORD = "testpassword"


def make_user(db, email="staff@example.com", role="user", is_active=True, name="Test Staff"):
    user = models.User(
        name=name,
        email=email,
        password=get_password_hash(TEST_PASSWORD),
        role=role,
        is_active=is_active,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers(user):
    token = create_access_token(data={"sub": user.email})
    return {"Authorization": f"Bearer {token}"}


def make_volunteer(db, name="Alice", email=None, department="Kitchen", **overrides):
    data = {
        "name": name,
        "phone": "555-0100",
        "email": email or f"{name.lower().replace(' ', '.')}@example.com",
        "department": department,
    }
    data.update(overrides)
    return crud_volunteer.create_volunteer(db, schemas.VolunteerCreate(**data))


def make_schedule(db, volunteer_id, start, end, **overrides):
    return crud_schedule.create_schedule(
        db,
        schemas.ScheduleCreate(volunteer_id=volunteer_id, start_time=start, end_time=end, **overrides),
    )


def at(hour, minute=0, day=1, month=1, year=2025):
    return datetime(year, month, day, hour, minute)

# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

import pytest
from sqlalchemy.orm import Session

from volunteer_scheduler.crud import crud_volunteer
from volunteer_scheduler.db import models
from volunteer_scheduler.exceptions import NotFoundError, ValidationError
from volunteer_scheduler.schemas import schemas
from tests.test_helpers import at, make_schedule, make_volunteer


def test_create_volunteer(db_session: Session):
    volunteer = make_volunteer(
        db_session,
        name="Test Volunteer",
        email="test@example.com",
        skills="First aid, Cooking",
        experience_years=3,
    )

    assert volunteer.id is not None
    assert volunteer.status == "active"
    assert crud_volunteer.get_volunteer_by_email(db_session, "test@example.com").id == volunteer.id


def test_create_volunteer_duplicate_email(db_session: Session):
    make_volunteer(db_session, email="dup@example.com")

    with pytest.raises(ValidationError) as exc_info:
        make_volunteer(db_session, name="Other", email="dup@example.com")
    assert exc_info.value.fields == ["email"]
    assert db_session.query(models.Volunteer).count() == 1


def test_update_volunteer(db_session: Session):
    volunteer = make_volunteer(db_session)

    updated = crud_volunteer.update_volunteer(
        db_session, volunteer.id, schemas.VolunteerUpdate(department="Garden", status="inactive")
    )

    assert updated.department == "Garden"
    assert updated.status == "inactive"
    assert updated.name == "Alice"


def test_update_volunteer_rejects_clearing_required_fields(db_session: Session):
    volunteer = make_volunteer(db_session)

    with pytest.raises(ValidationError) as exc_info:
        crud_volunteer.update_volunteer(db_session, volunteer.id, schemas.VolunteerUpdate(name=None))
    assert exc_info.value.fields == ["name"]


def test_update_volunteer_duplicate_email(db_session: Session):
    make_volunteer(db_session, name="Alice")
    bob = make_volunteer(db_session, name="Bob")

    with pytest.raises(ValidationError):
        crud_volunteer.update_volunteer(db_session, bob.id, schemas.VolunteerUpdate(email="alice@example.com"))
    assert crud_volunteer.get_volunteer(db_session, bob.id).email == "bob@example.com"


def test_update_and_delete_missing_volunteer(db_session: Session):
    with pytest.raises(NotFoundError):
        crud_volunteer.update_volunteer(db_session, 404, schemas.VolunteerUpdate(notes="x"))
    with pytest.raises(NotFoundError):
        crud_volunteer.delete_volunteer(db_session, 404)


def test_delete_volunteer_removes_their_schedules(db_session: Session):
    alice = make_volunteer(db_session, name="Alice")
    bob = make_volunteer(db_session, name="Bob")
    make_schedule(db_session, alice.id, at(9), at(12))
    make_schedule(db_session, alice.id, at(13), at(15))
    bob_shift = make_schedule(db_session, bob.id, at(9), at(12))

    crud_volunteer.delete_volunteer(db_session, alice.id)

    assert crud_volunteer.get_volunteer(db_session, alice.id) is None
    remaining = db_session.query(models.Schedule).all()
    assert [s.id for s in remaining] == [bob_shift.id]


def test_list_volunteers_search_and_filters(db_session: Session):
    make_volunteer(db_session, name="Alice", department="Kitchen")
    make_volunteer(db_session, name="Bob", department="Garden", status="inactive")
    make_volunteer(db_session, name="Carol", department="Garden", phone="555-9999")

    by_phone = crud_volunteer.list_volunteers(db_session, search="9999")
    assert [v.name for v in by_phone["items"]] == ["Carol"]

    garden = crud_volunteer.list_volunteers(db_session, department="Garden")
    assert {v.name for v in garden["items"]} == {"Bob", "Carol"}

    inactive = crud_volunteer.list_volunteers(db_session, status="inactive")
    assert [v.name for v in inactive["items"]] == ["Bob"]

    page = crud_volunteer.list_volunteers(db_session, page=1, limit=2)
    assert page["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    # Newest first
    assert [v.name for v in page["items"]] == ["Carol", "Bob"]


def test_volunteer_stats(db_session: Session):
    make_volunteer(db_session, name="Alice", skills="First aid, Cooking", experience_years=2)
    make_volunteer(db_session, name="Bob", department="Garden", skills="Cooking", status="pending")
    make_volunteer(db_session, name="Carol", skills=None, experience_years=2)

    stats = crud_volunteer.get_volunteer_stats(db_session)

    assert stats["total"] == 3
    assert stats["active"] == 2
    assert stats["pending"] == 1
    assert stats["inactive"] == 0
    assert stats["by_department"] == [
        {"department": "Kitchen", "count": 2},
        {"department": "Garden", "count": 1},
    ]
    assert stats["by_skill"] == [{"skill": "Cooking", "count": 2}, {"skill": "First aid", "count": 1}]
    assert stats["by_experience"] == [
        {"experience_years": 0, "count": 1},
        {"experience_years": 2, "count": 2},
    ]

# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from volunteer_scheduler.config import settings
from volunteer_scheduler.db import models
from tests.test_helpers import at, make_schedule, make_volunteer


def _shift(volunteer_id, start, end, **extra):
    payload = {"volunteer_id": volunteer_id, "start_time": start, "end_time": end}
    payload.update(extra)
    return payload


def test_create_schedule(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)

    response = client.post(
        "/api/v1/schedules/",
        json=_shift(volunteer.id, "2025-01-01T09:00:00", "2025-01-01T12:00:00", location="Hall A"),
        headers=editor_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["volunteer_id"] == volunteer.id
    assert data["status"] == "scheduled"
    assert data["shift_type"] == "morning"
    assert data["volunteer_name"] == "Alice"
    assert data["volunteer_department"] == "Kitchen"


def test_create_schedule_with_utc_offset(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)

    response = client.post(
        "/api/v1/schedules/",
        json=_shift(volunteer.id, "2025-01-01T09:00:00Z", "2025-01-01T12:00:00+00:00"),
        headers=editor_headers,
    )

    assert response.status_code == 201
    assert response.json()["start_time"] == "2025-01-01T09:00:00"


def test_conflicting_schedule_returns_409(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)
    existing = make_schedule(db_session, volunteer.id, at(9), at(12))

    response = client.post(
        "/api/v1/schedules/",
        json=_shift(volunteer.id, "2025-01-01T11:00:00", "2025-01-01T13:00:00"),
        headers=editor_headers,
    )

    assert response.status_code == 409
    assert response.json() == {
        "detail": "Volunteer time conflict, cannot schedule",
        "conflicting_schedule_id": existing.id,
    }
    assert db_session.query(models.Schedule).count() == 1


def test_missing_fields_return_400(client: TestClient, db_session: Session, editor_headers):
    response = client.post("/api/v1/schedules/", json={"start_time": "2025-01-01T09:00:00"}, headers=editor_headers)

    assert response.status_code == 400
    assert set(response.json()["fields"]) == {"volunteer_id", "end_time"}


def test_inverted_interval_returns_400(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)

    response = client.post(
        "/api/v1/schedules/",
        json=_shift(volunteer.id, "2025-01-01T12:00:00", "2025-01-01T09:00:00"),
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert response.json()["fields"] == ["end_time"]


def test_unknown_volunteer_returns_400(client: TestClient, db_session: Session, editor_headers):
    response = client.post(
        "/api/v1/schedules/",
        json=_shift(999, "2025-01-01T09:00:00", "2025-01-01T12:00:00"),
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert response.json()["fields"] == ["volunteer_id"]


def test_list_schedules_paginated(client: TestClient, db_session: Session, user_headers):
    volunteer = make_volunteer(db_session)
    for day in range(1, 26):
        make_schedule(db_session, volunteer.id, at(9, day=day), at(10, day=day))

    response = client.get("/api/v1/schedules/?page=3&limit=10", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["pagination"] == {"page": 3, "limit": 10, "total": 25, "pages": 3}
    assert len(data["items"]) == 5
    # Newest first, so the last page holds the first five days
    assert data["items"][-1]["start_time"] == "2025-01-01T09:00:00"


def test_list_schedules_rejects_oversized_limit(client: TestClient, user_headers):
    response = client.get("/api/v1/schedules/?limit=500", headers=user_headers)

    assert response.status_code == 400
    assert response.json()["fields"] == ["limit"]


def test_list_schedules_rejects_zero_page(client: TestClient, user_headers):
    response = client.get("/api/v1/schedules/?page=0", headers=user_headers)

    assert response.status_code == 400
    assert response.json()["fields"] == ["page"]


def test_list_schedules_filters_by_status(client: TestClient, db_session: Session, user_headers):
    volunteer = make_volunteer(db_session)
    make_schedule(db_session, volunteer.id, at(9), at(10), status="confirmed")
    make_schedule(db_session, volunteer.id, at(11), at(12))

    response = client.get("/api/v1/schedules/?status=confirmed", headers=user_headers)

    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["status"] for item in items] == ["confirmed"]


def test_get_schedule_not_found(client: TestClient, user_headers):
    response = client.get("/api/v1/schedules/123", headers=user_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Schedule not found"


def test_update_schedule(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)
    shift = make_schedule(db_session, volunteer.id, at(9), at(12))

    response = client.put(
        f"/api/v1/schedules/{shift.id}", json={"status": "confirmed", "notes": "Bring gloves"}, headers=editor_headers
    )

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert response.json()["notes"] == "Bring gloves"


def test_update_into_conflict_returns_409(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)
    first = make_schedule(db_session, volunteer.id, at(9), at(12))
    second = make_schedule(db_session, volunteer.id, at(13), at(15))

    response = client.put(
        f"/api/v1/schedules/{second.id}", json={"start_time": "2025-01-01T11:00:00"}, headers=editor_headers
    )

    assert response.status_code == 409
    assert response.json()["conflicting_schedule_id"] == first.id


def test_update_missing_schedule_returns_404(client: TestClient, editor_headers):
    response = client.put("/api/v1/schedules/77", json={"location": "Hall C"}, headers=editor_headers)

    assert response.status_code == 404
    assert response.json()["detail"] == "Schedule not found"


def test_delete_schedule_requires_admin(client: TestClient, db_session: Session, editor_headers, admin_headers):
    volunteer = make_volunteer(db_session)
    shift = make_schedule(db_session, volunteer.id, at(9), at(12))

    forbidden = client.delete(f"/api/v1/schedules/{shift.id}", headers=editor_headers)
    assert forbidden.status_code == 403

    response = client.delete(f"/api/v1/schedules/{shift.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Schedule deleted successfully"}

    missing = client.delete(f"/api/v1/schedules/{shift.id}", headers=admin_headers)
    assert missing.status_code == 404


def test_plain_users_cannot_create_schedules(client: TestClient, db_session: Session, user_headers):
    volunteer = make_volunteer(db_session)

    response = client.post(
        "/api/v1/schedules/",
        json=_shift(volunteer.id, "2025-01-01T09:00:00", "2025-01-01T12:00:00"),
        headers=user_headers,
    )

    assert response.status_code == 403


def test_schedules_require_authentication(client: TestClient):
    response = client.get("/api/v1/schedules/")

    assert response.status_code == 401


def test_schedule_stats_use_camel_case(client: TestClient, db_session: Session, user_headers):
    volunteer = make_volunteer(db_session)
    make_schedule(db_session, volunteer.id, at(9), at(12), status="confirmed")

    response = client.get("/api/v1/schedules/stats", headers=user_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["confirmed"] == 1
    assert data["byShiftType"] == [{"shift_type": "morning", "count": 1}]
    assert data["byVolunteer"][0]["volunteer_name"] == "Alice"


def test_monthly_schedules(client: TestClient, db_session: Session, user_headers):
    volunteer = make_volunteer(db_session)
    make_schedule(db_session, volunteer.id, at(9, day=3, month=3), at(10, day=3, month=3))
    make_schedule(db_session, volunteer.id, at(9, day=3, month=4), at(10, day=3, month=4))

    response = client.get("/api/v1/schedules/monthly?year=2025&month=3", headers=user_headers)

    assert response.status_code == 200
    assert [item["start_time"] for item in response.json()] == ["2025-03-03T09:00:00"]


def test_schedule_reminder(client: TestClient, db_session: Session, editor_headers):
    volunteer = make_volunteer(db_session)
    shift = make_schedule(db_session, volunteer.id, at(9), at(12), location="Hall A")

    response = client.post(f"/api/v1/schedules/{shift.id}/reminder", headers=editor_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "schedule"
    assert data["priority"] == "high"
    assert data["recipient_ids"] == [volunteer.id]
    assert data["sender_name"] == "Test Staff"
    assert "Hall A" in data["content"]


def test_list_schedules_uses_configured_page_size(client: TestClient, db_session: Session, user_headers, mocker):
    volunteer = make_volunteer(db_session)
    for day in range(1, 4):
        make_schedule(db_session, volunteer.id, at(9, day=day), at(10, day=day))
    mocker.patch.object(settings, "default_page_size", 2)

    response = client.get("/api/v1/schedules/", headers=user_headers)

    assert response.status_code == 200
    assert response.json()["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert len(response.json()["items"]) == 2

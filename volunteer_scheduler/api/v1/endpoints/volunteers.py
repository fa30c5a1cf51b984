# Copyright (c) 2025 Fernando Guerriero Cardoso da Silva.
# SPDX-License-Identifier: MIT
#

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from volunteer_scheduler.crud import crud_volunteer
from volunteer_scheduler.db.database import get_db
from volunteer_scheduler.db.models import User
from volunteer_scheduler.dependencies import get_current_active_user, get_current_admin, get_current_staff
from volunteer_scheduler.schemas import schemas

router = APIRouter(
    prefix="/volunteers",
    tags=["Volunteers"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.Volunteer, status_code=status.HTTP_201_CREATED)
def create_volunteer(
    volunteer: schemas.VolunteerCreate,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    """
    Creates a new volunteer record. (Editor access required)
    """
    return crud_volunteer.create_volunteer(db, volunteer)


@router.get("/", response_model=schemas.VolunteerPage)
def read_volunteers(
    search: Optional[str] = None,
    status_filter: Optional[schemas.VolunteerStatus] = Query(None, alias="status"),
    department: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: Optional[int] = Query(None, ge=1),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """
    Lists volunteers, newest first, with optional search over name, phone, email and department.
    """
    return crud_volunteer.list_volunteers(
        db, search=search, status=status_filter, department=department, page=page, limit=limit
    )


@router.get("/stats", response_model=schemas.VolunteerStats)
def read_volunteer_stats(current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)):
    return crud_volunteer.get_volunteer_stats(db)


@router.get("/{volunteer_id}", response_model=schemas.Volunteer)
def read_volunteer(
    volunteer_id: int, current_user: User = Depends(get_current_active_user), db: Session = Depends(get_db)
):
    db_volunteer = crud_volunteer.get_volunteer(db, volunteer_id=volunteer_id)
    if db_volunteer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Volunteer not found")
    return db_volunteer


@router.put("/{volunteer_id}", response_model=schemas.Volunteer)
def update_volunteer(
    volunteer_id: int,
    volunteer: schemas.VolunteerUpdate,
    current_staff: User = Depends(get_current_staff),
    db: Session = Depends(get_db),
):
    """
    Updates the given fields of a volunteer. (Editor access required)
    """
    return crud_volunteer.update_volunteer(db, volunteer_id, volunteer)


@router.delete("/{volunteer_id}", response_model=schemas.Message)
def delete_volunteer(
    volunteer_id: int,
    current_admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """
    Deletes a volunteer and all of their schedules. (Admin access required)
    """
    crud_volunteer.delete_volunteer(db, volunteer_id)
    return {"message": "Volunteer deleted successfully"}

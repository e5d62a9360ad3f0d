from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from .models import StaffCategory
from .schema import StaffSchema, StaffCreate, StaffUpdate
from . import service

staff_router = APIRouter(prefix="/staff", tags=["Staff"])

# List staff, optionally only active ones or one category
@staff_router.get("", response_model=list[StaffSchema])
def list_staff(
    active_only: bool = Query(False),
    category: Optional[StaffCategory] = Query(None),
    db: Session = Depends(get_db),
):
    return service.get_staff(db, active_only=active_only, category=category)

# Get staff member by id
@staff_router.get("/{staff_id}", response_model=StaffSchema)
def staff_detail(staff_id: int, db: Session = Depends(get_db)):
    obj = service.get_staff_member(db, staff_id)
    if not obj:
        raise HTTPException(status_code=404, detail="staff member not found")
    return obj

# Create staff member
@staff_router.post("", response_model=StaffSchema, status_code=status.HTTP_201_CREATED)
def staff_post(payload: StaffCreate, db: Session = Depends(get_db)):
    return service.create_staff_member(db, payload)

# Update staff member
@staff_router.patch("/{staff_id}", response_model=StaffSchema)
def staff_patch(staff_id: int, payload: StaffUpdate, db: Session = Depends(get_db)):
    obj = service.get_staff_member(db, staff_id)
    if not obj:
        raise HTTPException(status_code=404, detail="staff member not found")
    return service.update_staff_member(db, staff_id, payload)

# Delete staff member
@staff_router.delete("/{staff_id}")
def staff_delete(staff_id: int, db: Session = Depends(get_db)):
    obj = service.get_staff_member(db, staff_id)
    if not obj:
        raise HTTPException(status_code=404, detail="staff member not found")
    service.delete_staff_member(db, staff_id)
    return {"message": "staff member deleted"}

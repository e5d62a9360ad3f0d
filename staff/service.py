from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from .models import StaffMember, StaffCategory
from .schema import StaffCreate, StaffUpdate

def get_staff(db: Session, *, active_only: bool = False, category: Optional[StaffCategory] = None) -> List[StaffMember]:
    statement = select(StaffMember)
    if active_only:
        statement = statement.where(StaffMember.is_active.is_(True))
    if category is not None:
        statement = statement.where(StaffMember.category == category)
    statement = statement.order_by(StaffMember.full_name.asc(), StaffMember.id.asc())
    return list(db.scalars(statement))

def fetch_active_staff(db: Session) -> List[StaffMember]:
    return get_staff(db, active_only=True)

def get_staff_member(db: Session, staff_id: int) -> Optional[StaffMember]:
    return db.get(StaffMember, staff_id)

def create_staff_member(db: Session, staff: StaffCreate) -> StaffMember:
    db_staff = StaffMember(full_name=staff.full_name, category=staff.category, is_active=staff.is_active)
    db.add(db_staff)
    db.commit()
    db.refresh(db_staff)
    return db_staff

def update_staff_member(db: Session, staff_id: int, patch: StaffUpdate) -> Optional[StaffMember]:
    db_staff = db.get(StaffMember, staff_id)
    if not db_staff:
        return None
    data = patch.model_dump(exclude_unset=True, exclude_none=True)
    for k, v in data.items():
        setattr(db_staff, k, v)
    db.commit()
    db.refresh(db_staff)
    return db_staff

def delete_staff_member(db: Session, staff_id: int) -> None:
    db_staff = db.get(StaffMember, staff_id)
    if db_staff:
        db.delete(db_staff)
        db.commit()
    return

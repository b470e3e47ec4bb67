# barberflow/routers/staff_routes.py

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from barberflow.availability import AvailabilityCalculator
from barberflow.db import get_session
from barberflow.deps import get_availability, get_calendar, require_admin
from barberflow.directory import get_staff_profile, list_active_staff
from barberflow.models import Appointment, BarberLeave, StaffMember
from barberflow.operating_calendar import OperatingCalendar, validate_working_hours
from barberflow.schemas import (
    AvailabilityResponse,
    LeaveCreate,
    LeavePublic,
    StaffCreate,
    StaffPublic,
    StaffUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/staff",
    tags=["staff"],
)


@router.get("", response_model=List[StaffPublic])
def list_staff(
    active_only: bool = False,
    session: Session = Depends(get_session),
):
    if active_only:
        return list_active_staff(session)
    return session.exec(select(StaffMember).order_by(StaffMember.id)).all()


@router.get("/{staff_id}", response_model=StaffPublic)
def get_staff(staff_id: int, session: Session = Depends(get_session)):
    return get_staff_profile(session, staff_id)


@router.post("", response_model=StaffPublic, status_code=201)
def create_staff(
    staff: StaffCreate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    validate_working_hours(
        staff.work_start_time, staff.work_end_time,
        staff.lunch_start_time, staff.lunch_end_time,
    )

    db_staff = StaffMember(**staff.model_dump(mode="json"))
    session.add(db_staff)
    session.commit()
    session.refresh(db_staff)

    logger.info("Staff member %s (%s) added by %s", db_staff.id, db_staff.name, admin["email"])
    return db_staff


@router.patch("/{staff_id}", response_model=StaffPublic)
def update_staff(
    staff_id: int,
    patch: StaffUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    db_staff = get_staff_profile(session, staff_id)
    changes = patch.model_dump(mode="json", exclude_unset=True)

    # validate the profile as it will look after the change
    hour_fields = ("work_start_time", "work_end_time", "lunch_start_time", "lunch_end_time")
    validate_working_hours(*(changes.get(f, getattr(db_staff, f)) for f in hour_fields))

    for field, value in changes.items():
        setattr(db_staff, field, value)
    session.add(db_staff)
    session.commit()
    session.refresh(db_staff)

    # existing bookings are left where they are
    logger.info("Staff member %s updated by %s", staff_id, admin["email"])
    return db_staff


@router.delete("/{staff_id}", status_code=204)
def delete_staff(
    staff_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    db_staff = get_staff_profile(session, staff_id)

    in_use = session.exec(
        select(Appointment).where(Appointment.staff_id == staff_id)
    ).first()
    if in_use is not None:
        raise HTTPException(status_code=409, detail="Staff member has appointments; set them inactive instead")

    # leaves go with the profile
    for leave in session.exec(select(BarberLeave).where(BarberLeave.staff_id == staff_id)).all():
        session.delete(leave)
    session.delete(db_staff)
    session.commit()

    logger.info("Staff member %s deleted by %s", staff_id, admin["email"])
    return Response(status_code=204)


@router.get("/{staff_id}/availability", response_model=AvailabilityResponse)
def staff_availability(
    staff_id: int,
    date: date,
    service_id: int,
    exclude_appointment_id: Optional[int] = None,
    calculator: AvailabilityCalculator = Depends(get_availability),
):
    slots = calculator.get_available_slots(
        staff_id, date, service_id, exclude_appointment_id=exclude_appointment_id
    )
    return {
        "staff_id": staff_id,
        "date": date,
        "service_id": service_id,
        "available_starts": slots,
    }


@router.get("/{staff_id}/leaves", response_model=List[LeavePublic])
def list_leaves(
    staff_id: int,
    calendar: OperatingCalendar = Depends(get_calendar),
):
    get_staff_profile(calendar.session, staff_id)
    return calendar.list_leaves(staff_id)


@router.post("/{staff_id}/leaves", response_model=LeavePublic, status_code=201)
def add_leave(
    staff_id: int,
    leave: LeaveCreate,
    calendar: OperatingCalendar = Depends(get_calendar),
    admin: dict = Depends(require_admin),
):
    return calendar.add_leave(staff_id, leave.date)


@router.delete("/{staff_id}/leaves/{leave_date}", status_code=204)
def remove_leave(
    staff_id: int,
    leave_date: date,
    calendar: OperatingCalendar = Depends(get_calendar),
    admin: dict = Depends(require_admin),
):
    calendar.remove_leave(staff_id, leave_date)
    return Response(status_code=204)

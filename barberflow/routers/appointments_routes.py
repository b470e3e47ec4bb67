# barberflow/routers/appointments_routes.py

from datetime import date
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session

from barberflow.db import get_session
from barberflow.directory import find_client_by_email
from barberflow.repository import AppointmentRepository
from barberflow.schemas import (
    AppointmentCreate,
    AppointmentPublic,
    AppointmentUpdate,
)
from barberflow.auth import get_current_user
from barberflow.deps import get_repository, require_role

router = APIRouter(
    tags=["appointments"],
)


def _own_client_id(current_user: dict, session: Session) -> int:
    client = find_client_by_email(session, current_user["email"])
    if client is None:
        raise HTTPException(status_code=403, detail="No client record for this account")
    return client.id


def _check_access(current_user: dict, session: Session, client_id: int):
    """Clients only touch their own bookings; staff touch any."""
    if current_user["role"] != "client":
        return
    if client_id != _own_client_id(current_user, session):
        raise HTTPException(status_code=403, detail="Forbidden")


@router.post("/appointments", response_model=AppointmentPublic, status_code=201)
def create_appointment(
    appt: AppointmentCreate,
    session: Session = Depends(get_session),
    repo: AppointmentRepository = Depends(get_repository),
    current_user: dict = Depends(get_current_user),
):
    # 1) Resolve who the booking is for
    client_id = appt.client_id
    if current_user["role"] == "client":
        if client_id is None:
            client_id = _own_client_id(current_user, session)
        _check_access(current_user, session, client_id)
    elif client_id is None:
        raise HTTPException(status_code=422, detail="client_id is required")

    # 2) Repository re-checks the slot before inserting
    return repo.create(
        client_id=client_id,
        staff_id=appt.staff_id,
        service_id=appt.service_id,
        day=appt.date,
        start_time=appt.start_time,
    )


@router.patch("/appointments/{appt_id}", response_model=AppointmentPublic)
def update_appointment(
    appt_id: int,
    patch: AppointmentUpdate,
    session: Session = Depends(get_session),
    repo: AppointmentRepository = Depends(get_repository),
    current_user: dict = Depends(get_current_user),
):
    # 1) Find the appointment and check ownership
    target = repo.get(appt_id)
    _check_access(current_user, session, target.client_id)

    # 2) Clients cannot hand their booking to somebody else
    changes = patch.model_dump(exclude_unset=True)
    if current_user["role"] == "client" and changes.get("client_id", target.client_id) != target.client_id:
        raise HTTPException(status_code=403, detail="Forbidden")

    return repo.update(appt_id, changes)


@router.delete("/appointments/{appt_id}", status_code=204)
def cancel_appointment(
    appt_id: int,
    session: Session = Depends(get_session),
    repo: AppointmentRepository = Depends(get_repository),
    current_user: dict = Depends(get_current_user),
):
    target = repo.get(appt_id)
    _check_access(current_user, session, target.client_id)

    repo.cancel(appt_id)
    return Response(status_code=204)


@router.get("/appointments", response_model=List[AppointmentPublic])
def list_appointments(
    staff_id: Optional[int] = None,
    on_date: Optional[date] = None,
    client_id: Optional[int] = None,
    repo: AppointmentRepository = Depends(get_repository),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin", "barber")
    return repo.list_appointments(staff_id=staff_id, day=on_date, client_id=client_id)


@router.get("/clients/me/appointments", response_model=List[AppointmentPublic])
def list_my_appointments(
    session: Session = Depends(get_session),
    repo: AppointmentRepository = Depends(get_repository),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "client")
    return repo.list_appointments(client_id=_own_client_id(current_user, session))

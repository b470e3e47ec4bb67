# barberflow/deps.py

from fastapi import Depends, HTTPException
from sqlmodel import Session

from barberflow.auth import get_current_user
from barberflow.availability import AvailabilityCalculator
from barberflow.db import get_session
from barberflow.ledger import Ledger
from barberflow.operating_calendar import OperatingCalendar
from barberflow.repository import AppointmentRepository


def require_role(user: dict, *roles: str):
    if user["role"] not in roles:
        raise HTTPException(status_code=403, detail="Forbidden")


def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    require_role(current_user, "admin")
    return current_user


def get_calendar(session: Session = Depends(get_session)) -> OperatingCalendar:
    return OperatingCalendar(session)


def get_availability(session: Session = Depends(get_session)) -> AvailabilityCalculator:
    return AvailabilityCalculator(session)


def get_repository(session: Session = Depends(get_session)) -> AppointmentRepository:
    return AppointmentRepository(session)


def get_ledger(session: Session = Depends(get_session)) -> Ledger:
    return Ledger(session)

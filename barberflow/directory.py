# barberflow/directory.py
#
# Lookups for the records appointments point at. Each raises the matching
# NotFound error instead of returning None.

from typing import List

from sqlmodel import Session, select

from barberflow.errors import ClientNotFound, ServiceNotFound, StaffNotFound
from barberflow.models import Client, Service, StaffMember


def get_service(session: Session, service_id: int) -> Service:
    service = session.get(Service, service_id)
    if service is None:
        raise ServiceNotFound(service_id)
    return service


def get_staff_profile(session: Session, staff_id: int) -> StaffMember:
    staff = session.get(StaffMember, staff_id)
    if staff is None:
        raise StaffNotFound(staff_id)
    return staff


def list_active_staff(session: Session) -> List[StaffMember]:
    return session.exec(
        select(StaffMember)
        .where(StaffMember.status == "active")
        .order_by(StaffMember.id)
    ).all()


def get_client(session: Session, client_id: int) -> Client:
    client = session.get(Client, client_id)
    if client is None:
        raise ClientNotFound(client_id)
    return client


def find_client_by_email(session: Session, email: str):
    return session.exec(select(Client).where(Client.email == email)).first()

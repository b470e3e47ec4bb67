# barberflow/routers/services_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from barberflow.db import get_session
from barberflow.deps import require_admin
from barberflow.directory import get_service
from barberflow.models import Appointment, Service
from barberflow.schemas import ServiceCreate, ServicePublic, ServiceUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def list_services(
    active_only: bool = False,
    session: Session = Depends(get_session),
):
    stmt = select(Service)
    if active_only:
        stmt = stmt.where(Service.status == "active")
    return session.exec(stmt.order_by(Service.id)).all()


@router.post("", response_model=ServicePublic, status_code=201)
def create_service(
    service: ServiceCreate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    db_service = Service(**service.model_dump(mode="json"))
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    return db_service


@router.patch("/{service_id}", response_model=ServicePublic)
def update_service(
    service_id: int,
    patch: ServiceUpdate,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    db_service = get_service(session, service_id)
    for field, value in patch.model_dump(mode="json", exclude_unset=True).items():
        setattr(db_service, field, value)

    # booked appointments keep the end_time they were written with
    session.add(db_service)
    session.commit()
    session.refresh(db_service)
    logger.info("Service %s updated by %s", service_id, admin["email"])
    return db_service


@router.delete("/{service_id}", status_code=204)
def delete_service(
    service_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    db_service = get_service(session, service_id)

    in_use = session.exec(
        select(Appointment).where(Appointment.service_id == service_id)
    ).first()
    if in_use is not None:
        raise HTTPException(status_code=409, detail="Service has appointments; set it inactive instead")

    session.delete(db_service)
    session.commit()
    return Response(status_code=204)

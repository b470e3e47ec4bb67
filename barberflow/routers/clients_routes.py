# barberflow/routers/clients_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlmodel import Session, select

from barberflow.auth import get_current_user
from barberflow.db import get_session
from barberflow.deps import require_admin, require_role
from barberflow.directory import find_client_by_email, get_client
from barberflow.models import Appointment, Client
from barberflow.schemas import ClientCreate, ClientPublic, ClientUpdate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/clients",
    tags=["clients"],
)


@router.get("", response_model=List[ClientPublic])
def list_clients(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin", "barber")
    return session.exec(select(Client).order_by(Client.name)).all()


@router.get("/{client_id}", response_model=ClientPublic)
def read_client(
    client_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin", "barber")
    return get_client(session, client_id)


@router.post("", response_model=ClientPublic, status_code=201)
def create_client(
    client: ClientCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin", "barber")
    if find_client_by_email(session, client.email) is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    db_client = Client(**client.model_dump())
    session.add(db_client)
    session.commit()
    session.refresh(db_client)
    return db_client


@router.patch("/{client_id}", response_model=ClientPublic)
def update_client(
    client_id: int,
    patch: ClientUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin", "barber")
    db_client = get_client(session, client_id)
    changes = patch.model_dump(mode="json", exclude_unset=True, exclude_none=True)

    if "email" in changes:
        other = find_client_by_email(session, changes["email"])
        if other is not None and other.id != client_id:
            raise HTTPException(status_code=409, detail="Email already registered")

    for field, value in changes.items():
        setattr(db_client, field, value)
    session.add(db_client)
    session.commit()
    session.refresh(db_client)

    logger.info("Client %s updated by %s", client_id, current_user["email"])
    return db_client


@router.delete("/{client_id}", status_code=204)
def delete_client(
    client_id: int,
    session: Session = Depends(get_session),
    admin: dict = Depends(require_admin),
):
    db_client = get_client(session, client_id)

    in_use = session.exec(
        select(Appointment).where(Appointment.client_id == client_id)
    ).first()
    if in_use is not None:
        raise HTTPException(status_code=409, detail="Client has appointments; set them inactive instead")

    session.delete(db_client)
    session.commit()
    logger.info("Client %s deleted by %s", client_id, admin["email"])
    return Response(status_code=204)

# barberflow/routers/users_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from sqlmodel import Session, select

from barberflow.db import get_session
from barberflow.models import Client, User
from barberflow.schemas import UserCreate, UserPublic, UserRole
from barberflow.auth import find_user, get_current_user, hash_password

router = APIRouter(
    tags=["users"],
)

optional_token = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


@router.get("/me", response_model=UserPublic)
def me(current_user: dict = Depends(get_current_user)):
    return {
        "id": current_user["id"],
        "email": current_user["email"],
        "role": current_user["role"],
    }


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    token: Optional[str] = Depends(optional_token),
    session: Session = Depends(get_session),
):
    # 1) Check if email already exists
    if find_user(session, user.email) is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 2) Staff accounts are created by an admin, except the very first one
    if user.role != UserRole.client and session.exec(select(User)).first() is not None:
        if token is None:
            raise HTTPException(status_code=403, detail="Only an admin can create staff accounts")
        creator = get_current_user(token=token, session=session)
        if creator["role"] != UserRole.admin.value:
            raise HTTPException(status_code=403, detail="Only an admin can create staff accounts")

    # 3) Create user in DB
    db_user = User(
        email=user.email,
        password_hash=hash_password(user.password),
        role=user.role.value,
    )
    session.add(db_user)

    # 4) Self-registered clients get a client record for booking
    if user.role == UserRole.client:
        client = session.exec(select(Client).where(Client.email == user.email)).first()
        if client is None:
            session.add(Client(name=user.email.split("@")[0], email=user.email))

    session.commit()
    session.refresh(db_user)  # fills db_user.id

    # 5) Return public user
    return {
        "id": db_user.id,
        "email": db_user.email,
        "role": db_user.role,
    }

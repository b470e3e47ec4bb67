# barberflow/routers/auth_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from barberflow.auth import authenticate, create_access_token
from barberflow.db import get_session
from barberflow.schemas import Token

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    # the OAuth2 password form calls the email "username"
    user = authenticate(session, form_data.username, form_data.password)
    if user is None:
        logger.warning("Failed login for %s", form_data.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info("%s logged in as %s", user.email, user.role)
    return Token(access_token=create_access_token({"sub": user.email, "role": user.role}))

# File: app/api/v1/routes_auth.py

"""
Auth API routes: register, login, logout, current user.

A successful register/login sets an HttpOnly session cookie; every other
endpoint resolves the caller from it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_owner_id, get_db
from app.core.config import settings
from app.core.security import create_access_token
from app.repositories.user import UserRepository
from app.schemas.user import LoginRequest, UserCreate, UserRead
from app.services.auth_service import authenticate_user, register_user

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, user_id: int) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_access_token(user_id),
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(payload: UserCreate, response: Response, db: Session = Depends(get_db)):
    user = register_user(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    _set_session_cookie(response, user.id)
    return user


@router.post("/login", response_model=UserRead, summary="User login")
def login(payload: LoginRequest, request: Request, response: Response, db: Session = Depends(get_db)):
    user = authenticate_user(db, email=payload.email, password=payload.password)
    if user is None:
        logger.info("%s - invalid credentials", request.url.path)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    _set_session_cookie(response, user.id)
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT, summary="User logout")
def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name, path="/")


@router.get("/me", response_model=UserRead, summary="Current user")
def me(
    owner_id: int = Depends(get_current_owner_id),
    db: Session = Depends(get_db),
):
    return UserRepository(db).get_by_id(owner_id)

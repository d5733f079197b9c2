# app/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import auth_service, get_bearer_token, get_current_user
from app.database import get_session
from app.models.user import User
from app.schemas.user import (
    IsAdminResponse,
    SessionUser,
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/sign-up",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(
    payload: SignUpRequest,
    session: Session = Depends(get_session),
):
    """
    Register a customer account and open its first session.

    Errors:
      - 409 DuplicateEmail
    """
    return auth_service.sign_up(session, payload)


@router.post("/sign-in", response_model=SignInResponse)
def sign_in(
    payload: SignInRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange email + password for a bearer token.

    Errors:
      - 401 InvalidCredentials (unknown email or wrong password)
      - 403 AccountDisabled
    """
    return auth_service.sign_in(session, payload)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(
    token: str | None = Depends(get_bearer_token),
    session: Session = Depends(get_session),
):
    """
    Delete the caller's session. Unknown or missing tokens are ignored.
    """
    auth_service.sign_out(session, token)


@router.get("/me", response_model=SessionUser | None)
def read_current_user(current_user: User | None = Depends(get_current_user)):
    """
    The caller's profile, or `null` when the session is missing,
    expired, or the account is inactive.
    """
    return current_user


@router.get("/is-admin", response_model=IsAdminResponse)
def is_admin(
    token: str | None = Depends(get_bearer_token),
    session: Session = Depends(get_session),
):
    """
    Whether the caller holds a valid admin session. Never errors.
    """
    return IsAdminResponse(is_admin=auth_service.is_admin(session, token))

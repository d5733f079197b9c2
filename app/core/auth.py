# app/core/auth.py
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from app.core.errors import Unauthorized
from app.database import get_session
from app.models.user import User
from app.repositories.user_repo import SessionRepository, UserRepository
from app.services.auth_service import AuthService

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so sign-out, /auth/me and /auth/is-admin can answer for anonymous callers.
bearer_scheme = HTTPBearer(auto_error=False)

auth_service = AuthService(UserRepository(), SessionRepository())


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """
    Raw session token from `Authorization: Bearer <token>`, or None.
    """
    if credentials is None:
        return None
    return credentials.credentials


def get_current_user(
    token: str | None = Depends(get_bearer_token),
    session: Session = Depends(get_session),
) -> User | None:
    """
    Resolve the current user from a session token.

    Returns:
        User if the session exists, is unexpired and the user is active;
        otherwise None (guest).
    """
    return auth_service.get_current_user(session, token)


def require_auth(
    token: str | None = Depends(get_bearer_token),
    session: Session = Depends(get_session),
) -> User:
    """
    Enforce a valid session.

    Raises:
        InvalidSession(401): if the token is missing, unknown, expired,
        or belongs to an inactive user.
    """
    return auth_service.authenticate(session, token)


def require_admin(user: User = Depends(require_auth)) -> User:
    """
    Enforce admin role. Re-checked on every privileged request.

    Raises:
        Unauthorized(403): if role is not admin.
    """
    if user.role != "admin":
        raise Unauthorized()
    return user

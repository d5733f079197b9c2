# app/services/auth_service.py
import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.config import get_settings
from app.core.errors import (
    AccountDisabled,
    DuplicateEmail,
    InvalidCredentials,
    InvalidSession,
)
from app.core.security import (
    as_utc,
    generate_session_token,
    hash_password,
    utcnow,
    verify_password,
)
from app.models.user import User
from app.repositories.user_repo import SessionRepository, UserRepository
from app.schemas.user import (
    SignInRequest,
    SignInResponse,
    SignUpRequest,
    SignUpResponse,
    UserPublic,
)

logger = logging.getLogger(__name__)


class AuthService:
    """
    Sign-up, sign-in, sign-out and bearer-token resolution.

    Sessions are opaque tokens stored in the `sessions` table. A token
    authenticates only while it is unexpired and its user is active;
    expiry is checked lazily on every lookup.
    """

    def __init__(self, user_repo: UserRepository, session_repo: SessionRepository):
        self.user_repo = user_repo
        self.session_repo = session_repo

    def _session_ttl(self) -> timedelta:
        return timedelta(days=get_settings().SESSION_TTL_DAYS)

    def _issue_token(self, session: Session, user: User) -> str:
        """Stage a new session row for `user`; the caller commits."""
        now = utcnow()
        token = generate_session_token()
        self.session_repo.create(
            session,
            user_id=user.id,
            token=token,
            expires_at=now + self._session_ttl(),
            created_at=now,
        )
        return token

    # ----- Registration / login -----

    def sign_up(self, session: Session, payload: SignUpRequest) -> SignUpResponse:
        """
        Create a role='user' account and its first session.

        Raises:
            DuplicateEmail: if the case-folded email is taken.
        """
        if self.user_repo.get_by_email(session, payload.email):
            raise DuplicateEmail()

        user = User(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
            role="user",
            phone=payload.phone,
            is_active=True,
        )
        session.add(user)
        try:
            session.flush()
            token = self._issue_token(session, user)
            session.commit()
        except IntegrityError:
            # Lost a race with a concurrent sign-up on the unique email index
            session.rollback()
            raise DuplicateEmail()
        session.refresh(user)

        logger.info("New account registered: user_id=%s", user.id)
        return SignUpResponse(user_id=user.id, token=token)

    def sign_in(self, session: Session, payload: SignInRequest) -> SignInResponse:
        """
        Verify credentials and open a new session.

        Multiple concurrent sessions per user are allowed.

        Raises:
            AccountDisabled: if the account is inactive (checked before
                the password, so the answer does not depend on it).
            InvalidCredentials: unknown email or wrong password.
        """
        user = self.user_repo.get_by_email(session, payload.email)
        if user is None:
            logger.info("Sign-in failed: unknown email")
            raise InvalidCredentials()

        if not user.is_active:
            logger.info("Sign-in refused for disabled account: user_id=%s", user.id)
            raise AccountDisabled()

        if not verify_password(payload.password, user.password_hash):
            logger.info("Sign-in failed: bad password for user_id=%s", user.id)
            raise InvalidCredentials()

        user.last_login = utcnow()
        session.add(user)
        token = self._issue_token(session, user)
        session.commit()
        session.refresh(user)

        return SignInResponse(token=token, user=UserPublic.model_validate(user))

    def sign_out(self, session: Session, token: str | None) -> None:
        """
        Delete the session for `token`. Unknown tokens are a no-op.
        """
        if not token:
            return
        user_session = self.session_repo.get_by_token(session, token)
        if user_session is not None:
            self.session_repo.delete(session, user_session)

    # ----- Token resolution -----

    def get_current_user(self, session: Session, token: str | None) -> User | None:
        """
        Resolve a bearer token to its active user.

        Returns None if the token is unknown, expired
        (expires_at <= now) or its user is missing / inactive.
        """
        if not token:
            return None

        user_session = self.session_repo.get_by_token(session, token)
        if user_session is None:
            return None

        if as_utc(user_session.expires_at) <= utcnow():
            return None

        user = self.user_repo.get_by_id(session, user_session.user_id)
        if user is None or not user.is_active:
            return None
        return user

    def authenticate(self, session: Session, token: str | None) -> User:
        """
        Like `get_current_user`, but a missing/invalid session is an error.

        Raises:
            InvalidSession
        """
        user = self.get_current_user(session, token)
        if user is None:
            raise InvalidSession()
        return user

    def is_admin(self, session: Session, token: str | None) -> bool:
        user = self.get_current_user(session, token)
        return user is not None and user.role == "admin"

# app/repositories/user_repo.py
import uuid
from datetime import datetime

from sqlalchemy import String, func, or_
from sqlmodel import Session, select

from app.models.order import Order
from app.models.user import User, UserSession


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Basic CRUD -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by (already case-folded) email, or None."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        return session.exec(stmt).first()

    def list_users(
        self,
        session: Session,
        search: str | None = None,
        role: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[User]:
        """
        Filtered user listing, newest first.

        Args:
            search: case-insensitive substring of name or email
            role: exact role
            is_active: exact activation flag
            skip / limit: paging
        """
        stmt = select(User)
        if search:
            needle = search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(User.name, type_=String).contains(needle, autoescape=True),
                    func.lower(User.email, type_=String).contains(needle, autoescape=True),
                )
            )
        if role is not None:
            stmt = stmt.where(User.role == role)
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)
        stmt = stmt.order_by(User.created_at.desc()).offset(skip).limit(limit)
        return list(session.exec(stmt).all())

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        """
        Delete a User together with their sessions and orders.
        """
        for user_session in session.exec(
            select(UserSession).where(UserSession.user_id == user.id)
        ).all():
            session.delete(user_session)
        for order in session.exec(select(Order).where(Order.user_id == user.id)).all():
            session.delete(order)
        # children must be gone before the FK target
        session.flush()
        session.delete(user)
        session.commit()


class SessionRepository:
    """
    Data access layer for bearer-token sessions.
    """

    def get_by_token(self, session: Session, token: str) -> UserSession | None:
        stmt = select(UserSession).where(UserSession.token == token)
        return session.exec(stmt).first()

    def create(
        self,
        session: Session,
        user_id: uuid.UUID,
        token: str,
        expires_at: datetime,
        created_at: datetime,
    ) -> UserSession:
        """
        Stage a session row. The caller commits, so sign-up can insert the
        user and the session in one transaction.
        """
        user_session = UserSession(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            created_at=created_at,
        )
        session.add(user_session)
        return user_session

    def delete(self, session: Session, user_session: UserSession) -> None:
        session.delete(user_session)
        session.commit()

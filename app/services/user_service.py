# app/services/user_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.core.errors import DuplicateEmail, UserNotFound, ValidationError, WrongPassword
from app.core.security import hash_password, verify_password
from app.models.user import User
from app.repositories.user_repo import UserRepository
from app.schemas.user import (
    ProfileUpdate,
    UserActiveToggle,
    UserCreate,
    UserRoleUpdate,
    UserUpdate,
)

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for User.

    Responsibilities:
      - self-service profile edits (name, phone, password)
      - admin account management (create, edit, role, activation, delete)
      - email uniqueness on every write
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def _ensure_email_free(
        self,
        session: Session,
        email: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        existing = self.repo.get_by_email(session, email)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateEmail()

    def _save(self, session: Session, user: User) -> User:
        try:
            return self.repo.update(session, user)
        except IntegrityError:
            session.rollback()
            raise DuplicateEmail()

    # ----- Self profile -----

    def update_profile(
        self,
        session: Session,
        current_user: User,
        payload: ProfileUpdate,
    ) -> User:
        """
        Patch only the provided fields of the caller's own profile.

        The whole patch is validated before anything is applied.

        Raises:
            ValidationError: only one of current_password / new_password given.
            WrongPassword: current_password does not match.
        """
        changing_password = (
            payload.current_password is not None or payload.new_password is not None
        )
        if changing_password:
            if not payload.current_password or not payload.new_password:
                raise ValidationError(
                    "Both current_password and new_password are required to change the password"
                )
            if not verify_password(payload.current_password, current_user.password_hash):
                raise WrongPassword()

        if payload.name is not None:
            current_user.name = payload.name

        if "phone" in payload.model_fields_set:
            phone = (payload.phone or "").strip()
            current_user.phone = phone or None

        if changing_password:
            current_user.password_hash = hash_password(payload.new_password)
            logger.info("Password changed: user_id=%s", current_user.id)

        return self.repo.update(session, current_user)

    # ----- Admin operations -----

    def list_users(
        self,
        session: Session,
        search: str | None = None,
        role: str | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[User]:
        """List users, newest first (admin only)."""
        return self.repo.list_users(
            session,
            search=search,
            role=role,
            is_active=is_active,
            skip=skip,
            limit=limit,
        )

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Get a user by id (admin only).

        Raises:
            UserNotFound
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise UserNotFound()
        return user

    def create_user(self, session: Session, payload: UserCreate) -> User:
        """
        Create an active account with an explicit role (admin only).
        No session is issued.
        """
        self._ensure_email_free(session, payload.email)

        user = User(
            email=payload.email,
            name=payload.name,
            password_hash=hash_password(payload.password),
            role=payload.role,
            phone=payload.phone,
            is_active=True,
        )
        user = self._save(session, user)
        logger.info("Admin created user_id=%s role=%s", user.id, user.role)
        return user

    def update_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserUpdate,
    ) -> User:
        """
        Partial update of name / email / phone / role (admin only).
        """
        user = self.get_user(session, user_id)

        if payload.email is not None and payload.email != user.email:
            self._ensure_email_free(session, payload.email, exclude_id=user.id)

        if payload.name is not None:
            user.name = payload.name

        if payload.email is not None:
            user.email = payload.email

        if "phone" in payload.model_fields_set:
            phone = (payload.phone or "").strip()
            user.phone = phone or None

        if payload.role is not None:
            user.role = payload.role

        return self._save(session, user)

    def update_role(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserRoleUpdate,
    ) -> User:
        """
        Change user's role (admin only).

        Role validation is enforced by the schema (Literal).
        """
        user = self.get_user(session, user_id)
        user.role = payload.role
        logger.info("Role changed: user_id=%s role=%s", user.id, user.role)
        return self.repo.update(session, user)

    def toggle_active(
        self,
        session: Session,
        acting_admin: User,
        user_id: uuid.UUID,
    ) -> UserActiveToggle:
        """
        Flip the activation flag. Deactivated users cannot sign in and
        their existing sessions stop authenticating.

        Raises:
            ValidationError: an admin tries to deactivate themselves.
        """
        user = self.get_user(session, user_id)
        if user.id == acting_admin.id and user.is_active:
            raise ValidationError("You cannot deactivate your own account")

        user.is_active = not user.is_active
        user = self.repo.update(session, user)
        logger.info("Account %s: user_id=%s", "enabled" if user.is_active else "disabled", user.id)
        return UserActiveToggle(id=user.id, is_active=user.is_active)

    def delete_user(
        self,
        session: Session,
        acting_admin: User,
        user_id: uuid.UUID,
    ) -> None:
        """
        Delete a user with their sessions and orders (admin only).
        """
        user = self.get_user(session, user_id)
        if user.id == acting_admin.id:
            raise ValidationError("You cannot delete your own account")

        self.repo.delete(session, user)
        logger.info("Deleted user_id=%s", user_id)

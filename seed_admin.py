# seed_admin.py
"""
Bootstrap script: creates the first admin account.

Run once after the database is reachable:
    python seed_admin.py

Reads FIRST_ADMIN_EMAIL, FIRST_ADMIN_PASSWORD and FIRST_ADMIN_NAME from
the environment / .env. Existing accounts are left untouched.
"""

from sqlmodel import Session

from app.core.config import get_settings
from app.database import create_db_and_tables, engine
from app.models import movie as _movie_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401
from app.repositories.user_repo import UserRepository
from app.schemas.user import UserCreate
from app.services.user_service import UserService


def seed() -> None:
    settings = get_settings()
    if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
        print("[seed_admin] FIRST_ADMIN_EMAIL or FIRST_ADMIN_PASSWORD not set - nothing to do.")
        return

    create_db_and_tables()

    repo = UserRepository()
    service = UserService(repo)
    payload = UserCreate(
        email=settings.FIRST_ADMIN_EMAIL,
        name=settings.FIRST_ADMIN_NAME,
        password=settings.FIRST_ADMIN_PASSWORD,
        role="admin",
    )

    with Session(engine) as session:
        if repo.get_by_email(session, payload.email):
            print(f"[seed_admin] Account '{payload.email}' already exists - skipping.")
            return
        service.create_user(session, payload)
        print(f"[seed_admin] Admin '{payload.email}' created successfully.")


if __name__ == "__main__":
    seed()

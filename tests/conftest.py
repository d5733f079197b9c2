# tests/conftest.py
import os

# Must be set before the app (and its cached settings / engine) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TIMEZONE"] = "UTC"

import uuid
from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.core.security import hash_password, utcnow
from app.database import engine
from app.main import app
from app.models.movie import Movie
from app.models.order import Order
from app.models.user import User

API = "/api/v1"
DEFAULT_PASSWORD = "secret1"


@pytest.fixture(autouse=True)
def reset_db():
    """Fresh schema for every test."""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def make_user(
    email: str = "user@example.com",
    password: str = DEFAULT_PASSWORD,
    name: str = "Test User",
    role: str = "user",
    is_active: bool = True,
    created_at: datetime | None = None,
) -> uuid.UUID:
    """Insert a user row directly and return its id."""
    with Session(engine) as session:
        user = User(
            email=email.lower(),
            name=name,
            password_hash=hash_password(password),
            role=role,
            is_active=is_active,
            created_at=created_at or utcnow(),
        )
        session.add(user)
        session.commit()
        return user.id


def make_movie(
    title: str = "Alien",
    year: int = 1979,
    genre: str = "Horror",
    qualities: list[str] | None = None,
    is_available: bool = True,
    added_at: datetime | None = None,
) -> uuid.UUID:
    with Session(engine) as session:
        movie = Movie(
            title=title,
            year=year,
            genre=genre,
            qualities=qualities if qualities is not None else ["1080p"],
            is_available=is_available,
            added_at=added_at or utcnow(),
        )
        session.add(movie)
        session.commit()
        return movie.id


def make_order(
    user_id: uuid.UUID,
    movie_name: str = "Alien",
    status: str = "pending",
    created_at: datetime | None = None,
) -> uuid.UUID:
    created_at = created_at or utcnow()
    with Session(engine) as session:
        order = Order(
            user_id=user_id,
            movie_name=movie_name,
            quality="1080p",
            audio_preference="latino",
            status=status,
            created_at=created_at,
            updated_at=created_at,
        )
        session.add(order)
        session.commit()
        return order.id


def sign_in(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> str:
    resp = client.post(f"{API}/auth/sign-in", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def error_code(resp) -> str:
    return resp.json()["detail"]["code"]


@pytest.fixture
def admin_headers(client) -> dict[str, str]:
    make_user(email="admin@example.com", name="Admin", role="admin")
    return bearer(sign_in(client, "admin@example.com"))


@pytest.fixture
def user_headers(client) -> dict[str, str]:
    make_user(email="a@x.com", name="Ana")
    return bearer(sign_in(client, "a@x.com"))

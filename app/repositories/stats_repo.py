# app/repositories/stats_repo.py
from datetime import datetime

from sqlalchemy import func
from sqlmodel import Session, select

from app.models.movie import Movie
from app.models.order import Order
from app.models.user import User


class StatsRepository:
    """
    Read-only aggregated queries for admin dashboard.

    Every call scans the live tables; nothing is cached or materialized.
    """

    # ----- Users -----

    def count_users(
        self,
        session: Session,
        role: str | None = None,
        is_active: bool | None = None,
        created_after: datetime | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(User)
        if role is not None:
            stmt = stmt.where(User.role == role)
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)
        if created_after is not None:
            stmt = stmt.where(User.created_at > created_after)
        # SQLModel's Session.exec() -> ScalarResult -> use .one()
        value = session.exec(stmt).one()
        return int(value or 0)

    # ----- Orders -----

    def count_orders(
        self,
        session: Session,
        created_after: datetime | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(Order)
        if created_after is not None:
            stmt = stmt.where(Order.created_at > created_after)
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_orders_by_status(self, session: Session) -> dict[str, int]:
        stmt = select(Order.status, func.count()).group_by(Order.status)
        return {status: int(count) for status, count in session.exec(stmt).all()}

    def order_timestamps_since(
        self,
        session: Session,
        since: datetime,
    ) -> list[datetime]:
        """
        created_at of every order created at or after `since`.
        """
        stmt = select(Order.created_at).where(Order.created_at >= since)
        return list(session.exec(stmt).all())

    # ----- Movies -----

    def count_movies(
        self,
        session: Session,
        is_available: bool | None = None,
        added_after: datetime | None = None,
    ) -> int:
        stmt = select(func.count()).select_from(Movie)
        if is_available is not None:
            stmt = stmt.where(Movie.is_available == is_available)
        if added_after is not None:
            stmt = stmt.where(Movie.added_at > added_after)
        value = session.exec(stmt).one()
        return int(value or 0)

    def count_movies_by_genre(self, session: Session) -> dict[str, int]:
        stmt = select(Movie.genre, func.count()).group_by(Movie.genre).order_by(Movie.genre)
        return {genre: int(count) for genre, count in session.exec(stmt).all()}

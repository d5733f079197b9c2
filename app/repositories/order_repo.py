# app/repositories/order_repo.py
import uuid

from sqlalchemy import String, func
from sqlmodel import Session, select

from app.models.order import Order
from app.models.user import User


class OrderRepository:
    """
    Data access layer for orders.

    Each write commits immediately; no order operation spans
    more than one row.
    """

    def list_for_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Order]:
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(Order.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(session.exec(stmt).all())

    def list_with_users(
        self,
        session: Session,
        status: str | None = None,
        user_id: uuid.UUID | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[tuple[Order, User | None]]:
        """
        All orders (optionally filtered) joined with their owner, newest first.

        Args:
            status: exact status
            user_id: owning user
            search: case-insensitive substring of movie_name
        """
        stmt = select(Order, User).join(User, User.id == Order.user_id, isouter=True)
        if status is not None:
            stmt = stmt.where(Order.status == status)
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        if search:
            stmt = stmt.where(
                func.lower(Order.movie_name, type_=String).contains(
                    search.lower(), autoescape=True
                )
            )
        stmt = stmt.order_by(Order.created_at.desc()).offset(skip).limit(limit)
        return [(order, user) for order, user in session.exec(stmt).all()]

    def get_by_id(self, session: Session, order_id: uuid.UUID) -> Order | None:
        return session.get(Order, order_id)

    def create(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def update(self, session: Session, order: Order) -> Order:
        session.add(order)
        session.commit()
        session.refresh(order)
        return order

    def delete(self, session: Session, order: Order) -> None:
        session.delete(order)
        session.commit()

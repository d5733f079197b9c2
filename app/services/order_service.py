# app/services/order_service.py
import logging
import uuid

from sqlmodel import Session

from app.core.errors import OrderNotFound, UserNotFound
from app.core.security import utcnow
from app.models.order import Order
from app.models.user import User
from app.repositories.order_repo import OrderRepository
from app.repositories.user_repo import UserRepository
from app.schemas.order import (
    OrderCreate,
    OrderStatusUpdate,
    OrderUser,
    OrderWithUserRead,
)

logger = logging.getLogger(__name__)

# Path followed by the one-step "advance" action.
# `cancelled` is never entered or left by it.
ADVANCE_FLOW: tuple[str, ...] = ("pending", "processing", "completed")


class OrderService:
    """
    Business logic for movie requests.

    Responsibilities:
      - create orders for a session user or, for admins, any user
      - list orders for their owner and for admins (with filters)
      - admin status override (any status -> any status)
      - guarded one-step advance along pending -> processing -> completed
    """

    def __init__(self, order_repo: OrderRepository, user_repo: UserRepository):
        self.order_repo = order_repo
        self.user_repo = user_repo

    # -------- User-facing operations --------

    def create_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: OrderCreate,
    ) -> Order:
        """
        Insert a new order in status 'pending' with created_at == updated_at.

        Raises:
            UserNotFound: if `user_id` does not exist.
        """
        if self.user_repo.get_by_id(session, user_id) is None:
            raise UserNotFound()

        now = utcnow()
        order = Order(
            user_id=user_id,
            movie_name=payload.movie_name,
            movie_year=payload.movie_year,
            quality=payload.quality,
            audio_preference=payload.audio_preference,
            status="pending",
            notes=payload.notes,
            created_at=now,
            updated_at=now,
        )
        order = self.order_repo.create(session, order)
        logger.info("Order created: order_id=%s user_id=%s", order.id, user_id)
        return order

    def list_user_orders(
        self,
        session: Session,
        user_id: uuid.UUID,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Order]:
        """
        List orders for the given user, newest first.
        """
        return self.order_repo.list_for_user(session, user_id, skip, limit)

    def get_user_order(
        self,
        session: Session,
        user_id: uuid.UUID,
        order_id: uuid.UUID,
    ) -> Order:
        """
        Get a single order for the user.

        - OrderNotFound if order not found or does not belong to this user.
        """
        order = self.order_repo.get_by_id(session, order_id)
        if not order or order.user_id != user_id:
            raise OrderNotFound()
        return order

    # -------- Admin operations --------

    def list_all_orders(
        self,
        session: Session,
        status: str | None = None,
        user_id: uuid.UUID | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[OrderWithUserRead]:
        """
        List all orders joined with a minimal owner projection (admin only).
        """
        rows = self.order_repo.list_with_users(
            session,
            status=status,
            user_id=user_id,
            search=search,
            skip=skip,
            limit=limit,
        )
        return [self._with_user(order, user) for order, user in rows]

    def get_order_admin(
        self,
        session: Session,
        order_id: uuid.UUID,
    ) -> OrderWithUserRead:
        order = self._get_order(session, order_id)
        user = self.user_repo.get_by_id(session, order.user_id)
        return self._with_user(order, user)

    def update_status(
        self,
        session: Session,
        order_id: uuid.UUID,
        payload: OrderStatusUpdate,
    ) -> Order:
        """
        Admin override: set any status from any status.

        No transition table is applied here; use `advance` for the guarded
        linear step. `notes` is replaced only when provided.
        """
        order = self._get_order(session, order_id)

        previous = order.status
        order.status = payload.status
        if "notes" in payload.model_fields_set:
            order.notes = payload.notes
        order.updated_at = utcnow()

        order = self.order_repo.update(session, order)
        logger.info("Order status set: order_id=%s %s -> %s", order.id, previous, order.status)
        return order

    def advance(self, session: Session, order_id: uuid.UUID) -> Order:
        """
        Move one step along pending -> processing -> completed.

        No-op for `completed` (no wrap-around) and for `cancelled`.
        """
        order = self._get_order(session, order_id)

        if order.status not in ADVANCE_FLOW:
            return order
        idx = ADVANCE_FLOW.index(order.status)
        if idx == len(ADVANCE_FLOW) - 1:
            return order

        previous = order.status
        order.status = ADVANCE_FLOW[idx + 1]
        order.updated_at = utcnow()
        order = self.order_repo.update(session, order)
        logger.info("Order advanced: order_id=%s %s -> %s", order.id, previous, order.status)
        return order

    def delete_order(self, session: Session, order_id: uuid.UUID) -> None:
        order = self._get_order(session, order_id)
        self.order_repo.delete(session, order)
        logger.info("Order deleted: order_id=%s", order_id)

    # -------- Helpers --------

    def _get_order(self, session: Session, order_id: uuid.UUID) -> Order:
        order = self.order_repo.get_by_id(session, order_id)
        if not order:
            raise OrderNotFound()
        return order

    @staticmethod
    def _with_user(order: Order, user: User | None) -> OrderWithUserRead:
        return OrderWithUserRead(
            id=order.id,
            user_id=order.user_id,
            movie_name=order.movie_name,
            movie_year=order.movie_year,
            quality=order.quality,
            audio_preference=order.audio_preference,
            status=order.status,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
            user=OrderUser(id=user.id, name=user.name, email=user.email) if user else None,
        )

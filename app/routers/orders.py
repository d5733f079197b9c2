# app/routers/orders.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.core.auth import require_auth, require_admin
from app.database import get_session
from app.models.user import User
from app.repositories.order_repo import OrderRepository
from app.repositories.user_repo import UserRepository
from app.schemas.order import (
    OrderCreate,
    OrderRead,
    OrderStatus,
    OrderStatusUpdate,
    OrderWithUserRead,
)
from app.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["Orders"])

order_repo = OrderRepository()
user_repo = UserRepository()
service = OrderService(order_repo, user_repo)


# -------- User-facing endpoints --------


@router.post(
    "",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Request a movie. The order starts in status 'pending'.

    Auth:
      - Any valid session.
    """
    return service.create_order(session, current_user.id, payload)


@router.get(
    "/me",
    response_model=list[OrderRead],
)
def list_my_orders(
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
    skip: int = 0,
    limit: int = 100,
):
    """
    List the authenticated user's orders, newest first.
    """
    return service.list_user_orders(session, current_user.id, skip, limit)


@router.get(
    "/me/{order_id}",
    response_model=OrderRead,
)
def get_my_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(require_auth),
):
    """
    Get a single order belonging to the current user.
    """
    return service.get_user_order(session, current_user.id, order_id)


# -------- Admin endpoints --------


@router.post(
    "/users/{user_id}",
    response_model=OrderRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_order_for_user(
    user_id: uuid.UUID,
    payload: OrderCreate,
    session: Session = Depends(get_session),
):
    """
    Create an order on behalf of a user (admin only).

    Errors:
      - 404 UserNotFound
    """
    return service.create_order(session, user_id, payload)


@router.get(
    "",
    response_model=list[OrderWithUserRead],
    dependencies=[Depends(require_admin)],
)
def list_all_orders(
    session: Session = Depends(get_session),
    status: OrderStatus | None = None,
    user_id: uuid.UUID | None = None,
    search: str | None = None,
    skip: int = 0,
    limit: int = 100,
):
    """
    List all orders with their owner (admin only).

    Filters: `status`, `user_id`, `search` (movie name substring).
    """
    return service.list_all_orders(
        session,
        status=status,
        user_id=user_id,
        search=search,
        skip=skip,
        limit=limit,
    )


@router.get(
    "/{order_id}",
    response_model=OrderWithUserRead,
    dependencies=[Depends(require_admin)],
)
def get_order_admin(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Get any order with its owner (admin only).
    """
    return service.get_order_admin(session, order_id)


@router.patch(
    "/{order_id}/status",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Set an order's status (admin override, admin only).

    Any status may be set from any other status. Use
    `POST /orders/{order_id}/advance` for the guarded one-step flow.
    """
    return service.update_status(session, order_id, payload)


@router.post(
    "/{order_id}/advance",
    response_model=OrderRead,
    dependencies=[Depends(require_admin)],
)
def advance_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Advance one step (admin only):

      pending    -> processing

      processing -> completed

      completed / cancelled -> (no change)
    """
    return service.advance(session, order_id)


@router.delete(
    "/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
def delete_order(
    order_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Hard-delete an order (admin only).
    """
    service.delete_order(session, order_id)

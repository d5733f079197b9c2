# app/routers/admin_stats.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import AdminDashboardStats, MovieStats, OrderStats, UserStats
from app.services.stats_service import StatsService

router = APIRouter(
    prefix="/admin/stats",
    tags=["Admin Stats"],
    dependencies=[Depends(require_admin)],
)

repo = StatsRepository()
service = StatsService(repo)


@router.get("", response_model=AdminDashboardStats)
def get_admin_dashboard_stats(session: Session = Depends(get_session)):
    """
    Users, orders and movies statistics in one payload.

    Only accessible to users with role='admin'.
    """
    return service.get_admin_dashboard_stats(session)


@router.get("/users", response_model=UserStats)
def get_user_stats(session: Session = Depends(get_session)):
    return service.get_user_stats(session)


@router.get("/orders", response_model=OrderStats)
def get_order_stats(session: Session = Depends(get_session)):
    """
    Per-status counts, 7/30-day counts and the 7-day daily histogram.
    """
    return service.get_order_stats(session)


@router.get("/movies", response_model=MovieStats)
def get_movie_stats(session: Session = Depends(get_session)):
    return service.get_movie_stats(session)

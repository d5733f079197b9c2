# app/services/stats_service.py
from datetime import datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlmodel import Session

from app.core.config import get_settings
from app.core.security import as_utc, utcnow
from app.repositories.stats_repo import StatsRepository
from app.schemas.stats import (
    AdminDashboardStats,
    DailyOrderCount,
    MovieStats,
    OrderStats,
    UserStats,
)

WEEK = timedelta(days=7)
MONTH = timedelta(days=30)
HISTOGRAM_DAYS = 7


class StatsService:
    """
    Orchestrates aggregated admin dashboard statistics.

    Everything is recomputed from the tables on each call. `now` can be
    pinned by callers; it defaults to the current UTC time.
    """

    def __init__(self, repo: StatsRepository):
        self.repo = repo

    @staticmethod
    def _tz() -> ZoneInfo:
        return ZoneInfo(get_settings().TIMEZONE)

    def get_user_stats(self, session: Session, now: datetime | None = None) -> UserStats:
        now = as_utc(now) if now else utcnow()

        total = self.repo.count_users(session)
        active = self.repo.count_users(session, is_active=True)
        admins = self.repo.count_users(session, role="admin")

        return UserStats(
            total=total,
            active=active,
            inactive=total - active,
            admins=admins,
            regular_users=total - admins,
            new_this_week=self.repo.count_users(session, created_after=now - WEEK),
            new_this_month=self.repo.count_users(session, created_after=now - MONTH),
        )

    def get_order_stats(self, session: Session, now: datetime | None = None) -> OrderStats:
        now = as_utc(now) if now else utcnow()

        by_status = self.repo.count_orders_by_status(session)

        return OrderStats(
            total=self.repo.count_orders(session),
            pending=by_status.get("pending", 0),
            processing=by_status.get("processing", 0),
            completed=by_status.get("completed", 0),
            cancelled=by_status.get("cancelled", 0),
            this_week=self.repo.count_orders(session, created_after=now - WEEK),
            this_month=self.repo.count_orders(session, created_after=now - MONTH),
            daily_orders=self._daily_orders(session, now),
        )

    def _daily_orders(self, session: Session, now: datetime) -> list[DailyOrderCount]:
        """
        Orders per local calendar day for the trailing 7 days, oldest first.
        The last bucket is today.
        """
        tz = self._tz()
        today = now.astimezone(tz).date()
        days = [today - timedelta(days=i) for i in range(HISTOGRAM_DAYS - 1, -1, -1)]

        first_day_start = datetime.combine(days[0], time.min, tzinfo=tz)
        since = first_day_start.astimezone(timezone.utc)

        counts = {day: 0 for day in days}
        for created_at in self.repo.order_timestamps_since(session, since):
            day = as_utc(created_at).astimezone(tz).date()
            if day in counts:
                counts[day] += 1

        return [DailyOrderCount(date=day, count=counts[day]) for day in days]

    def get_movie_stats(self, session: Session, now: datetime | None = None) -> MovieStats:
        now = as_utc(now) if now else utcnow()

        total = self.repo.count_movies(session)
        available = self.repo.count_movies(session, is_available=True)

        return MovieStats(
            total=total,
            available=available,
            unavailable=total - available,
            genre_counts=self.repo.count_movies_by_genre(session),
            added_this_week=self.repo.count_movies(session, added_after=now - WEEK),
        )

    def get_admin_dashboard_stats(
        self,
        session: Session,
        now: datetime | None = None,
    ) -> AdminDashboardStats:
        now = as_utc(now) if now else utcnow()
        return AdminDashboardStats(
            users=self.get_user_stats(session, now),
            orders=self.get_order_stats(session, now),
            movies=self.get_movie_stats(session, now),
        )

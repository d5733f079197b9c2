# app/schemas/stats.py
from datetime import date

from pydantic import ConfigDict
from sqlmodel import SQLModel


class UserStats(SQLModel):
    """
    Account counts for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    total: int
    active: int
    inactive: int
    admins: int
    regular_users: int
    new_this_week: int
    new_this_month: int


class DailyOrderCount(SQLModel):
    """
    Orders created during one calendar day.
    """
    model_config = ConfigDict(extra="forbid")

    date: date
    count: int


class OrderStats(SQLModel):
    """
    Order counts per status plus a 7-day histogram (oldest day first).
    """
    model_config = ConfigDict(extra="forbid")

    total: int
    pending: int
    processing: int
    completed: int
    cancelled: int
    this_week: int
    this_month: int
    daily_orders: list[DailyOrderCount]


class MovieStats(SQLModel):
    """
    Catalog counts for the admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    total: int
    available: int
    unavailable: int
    genre_counts: dict[str, int]
    added_this_week: int


class AdminDashboardStats(SQLModel):
    """
    Full payload for admin dashboard.
    """
    model_config = ConfigDict(extra="forbid")

    users: UserStats
    orders: OrderStats
    movies: MovieStats

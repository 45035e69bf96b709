# agrorain/services/stats.py
from __future__ import annotations
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from .. import config
from ..schemas import ChartPoint, DashboardStats, RainfallRecord

SERIES_DAYS = 30


def local_today() -> date:
    return datetime.now(config.TZ).date()


# ---------- range boundaries ----------
def start_of_week(day: date, week_start: int = config.WEEK_START) -> date:
    """First day of the week containing ``day``.

    ``week_start`` counts from Sunday (0) to Saturday (6), like the
    dashboards users know; Python's own weekday() starts on Monday.
    """
    first_weekday = (week_start - 1) % 7
    return day - timedelta(days=(day.weekday() - first_weekday) % 7)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def start_of_season(day: date) -> date:
    # season == calendar year
    return day.replace(month=1, day=1)


def _sum_since(records: Iterable[RainfallRecord], boundary: date) -> float:
    # inclusive lower bound, no upper bound: future-dated records count too
    return sum(r.amount for r in records if r.date >= boundary)


# ---------- a) dashboard figures ----------
def compute_dashboard_stats(
    records: Sequence[RainfallRecord],
    *,
    today: Optional[date] = None,
    week_start: int = config.WEEK_START,
) -> DashboardStats:
    if not records:
        return DashboardStats()

    today = today or local_today()
    weekly = _sum_since(records, start_of_week(today, week_start))
    monthly = _sum_since(records, start_of_month(today))
    season = _sum_since(records, start_of_season(today))

    return DashboardStats(
        # season total over the count of *all* records, not only this season's
        daily_average=season / len(records),
        max_rainfall=max(r.amount for r in records),
        weekly_total=weekly,
        monthly_total=monthly,
        season_total=season,
    )


# ---------- b) last 30 days ----------
def last_30_days_series(
    records: Sequence[RainfallRecord],
    *,
    today: Optional[date] = None,
    days: int = SERIES_DAYS,
) -> List[ChartPoint]:
    today = today or local_today()

    per_day: dict[date, float] = {}
    for r in records:
        per_day[r.date] = per_day.get(r.date, 0.0) + r.amount

    points = []
    for offset in range(days - 1, -1, -1):
        d = today - timedelta(days=offset)
        points.append(ChartPoint(day=d, label=d.strftime("%d/%m"), amount=per_day.get(d, 0.0)))
    return points

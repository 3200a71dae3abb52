"""Month calendar of daily results.

Each day of the current month is marked as a success when its balance met
the goal deficit. Days after a free trial ended are locked for unpaid users.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from deficit.dates import DateLike, as_day, resolve_today
from deficit.tracking.balance import calculate_daily_balance
from deficit.tracking.models import DailyLog


@dataclass(frozen=True)
class CalendarDay:
    """One calendar cell. Padding cells before the 1st have ``date=None``."""

    date: Optional[date]
    weight_kg: Optional[float]
    balance: float
    is_success: bool
    is_locked: bool
    is_future: bool
    is_today: bool
    has_data: bool


_BLANK = CalendarDay(
    date=None,
    weight_kg=None,
    balance=0,
    is_success=False,
    is_locked=False,
    is_future=True,
    is_today=False,
    has_data=False,
)


def build_month_calendar(
    logs: Iterable[DailyLog],
    tdee: float,
    goal_deficit: float,
    today: Optional[DateLike] = None,
    trial_ends_at: Optional[DateLike] = None,
    is_paid: bool = True,
) -> list[CalendarDay]:
    """Build the calendar for the month containing ``today``.

    Weeks start on Sunday; the list begins with blank cells up to the
    weekday of the 1st.

    Args:
        logs: Daily logs (any order, at most one per date is used)
        tdee: Maintenance calories used to compute each day's balance
        goal_deficit: Daily goal as a negative balance (e.g. -1000)
        today: Reference day (default: today)
        trial_ends_at: Last day of the free trial, if any
        is_paid: Whether the user has an active subscription

    Returns:
        Calendar cells in display order
    """
    ref = resolve_today(today)
    trial_end = as_day(trial_ends_at) if trial_ends_at is not None else None
    by_date = {}
    for log in logs:
        by_date.setdefault(as_day(log.date), log)

    # calendar.weekday: Monday=0 ... Sunday=6; shift so Sunday=0
    first_weekday = (calendar.weekday(ref.year, ref.month, 1) + 1) % 7
    days_in_month = calendar.monthrange(ref.year, ref.month)[1]

    cells = [_BLANK] * first_weekday
    for day_number in range(1, days_in_month + 1):
        day = date(ref.year, ref.month, day_number)
        log = by_date.get(day)
        is_future = day > ref
        is_locked = (
            not is_paid
            and trial_end is not None
            and day > trial_end
            and not is_future
        )
        balance = (
            calculate_daily_balance(tdee, log.caloric_intake, log.caloric_outtake)
            if log is not None
            else 0
        )
        cells.append(
            CalendarDay(
                date=day,
                weight_kg=(log.weight_kg or None) if log is not None else None,
                balance=balance,
                is_success=log is not None and balance <= goal_deficit,
                is_locked=is_locked,
                is_future=is_future,
                is_today=day == ref,
                has_data=log is not None,
            )
        )

    return cells

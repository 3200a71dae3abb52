"""Progress toward the goal weight.

Builds the day-by-day series behind the progress chart: logged weights next
to the planned trajectory (start weight minus the goal deficit's worth of fat
per day, never below the goal), extended a little into the future.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from deficit.dates import DateLike, as_day, resolve_today
from deficit.rounding import round_half_up, round_int
from deficit.tracking.balance import calculate_daily_balance
from deficit.tracking.models import DailyLog
from deficit.units import KCAL_PER_KG

FORECAST_DAYS = 30


@dataclass(frozen=True)
class ProgressPoint:
    """One day on the progress chart."""

    date: date
    actual_weight: Optional[float]
    planned_weight: float
    goal_weight: float


@dataclass(frozen=True)
class ProgressSummary:
    """Headline numbers for the progress page."""

    total_lost: float
    avg_deficit: int
    days_tracked: int
    projected_goal_date: Optional[date]


def _planned(start_weight: float, goal_weight: float, kg_per_day: float, index: int) -> float:
    return round_half_up(max(goal_weight, start_weight - kg_per_day * index), 1)


def build_progress_series(
    start_weight: float,
    goal_weight: float,
    start_date: DateLike,
    goal_date: DateLike,
    daily_deficit_goal: float,
    logs: Iterable[DailyLog],
    today: Optional[DateLike] = None,
    forecast_days: int = FORECAST_DAYS,
) -> list[ProgressPoint]:
    """Build the progress chart series.

    The first point is the start weight. Actual weights are filled in from
    the logs up to today (or the goal date, if earlier); planned-only points
    continue for ``forecast_days`` after today, capped at the goal date.

    Args:
        start_weight: Weight at signup (kg)
        goal_weight: Goal weight (kg)
        start_date: Signup day
        goal_date: Goal day
        daily_deficit_goal: Planned daily deficit (positive kcal)
        logs: Daily logs; entries without a weight are ignored
        today: Reference day (default: today)
        forecast_days: Days of planned-only points after today

    Returns:
        Points in chronological order
    """
    ref = resolve_today(today)
    start = as_day(start_date)
    goal_day = as_day(goal_date)
    kg_per_day = daily_deficit_goal / KCAL_PER_KG

    weights = {as_day(log.date): log.weight_kg for log in logs if log.weight_kg}

    points = [ProgressPoint(start, start_weight, start_weight, goal_weight)]

    actual_end = min(ref, goal_day)
    forecast_end = min(ref + timedelta(days=forecast_days), goal_day)

    index = 1
    current = start + timedelta(days=1)
    while current <= actual_end:
        points.append(ProgressPoint(
            date=current,
            actual_weight=weights.get(current),
            planned_weight=_planned(start_weight, goal_weight, kg_per_day, index),
            goal_weight=goal_weight,
        ))
        current += timedelta(days=1)
        index += 1

    while current <= forecast_end:
        points.append(ProgressPoint(
            date=current,
            actual_weight=None,
            planned_weight=_planned(start_weight, goal_weight, kg_per_day, index),
            goal_weight=goal_weight,
        ))
        current += timedelta(days=1)
        index += 1

    return points


def summarize_progress(
    series: list[ProgressPoint],
    logs: Iterable[DailyLog],
    tdee: float,
    goal_weight: float,
    daily_deficit_goal: float,
    today: Optional[DateLike] = None,
) -> ProgressSummary:
    """Summarize a progress series.

    Total lost is the first minus the last actual weight. The goal date is
    projected at the observed loss rate when weight is going down, and at the
    planned rate otherwise.
    """
    ref = resolve_today(today)
    actual = [p for p in series if p.actual_weight is not None]

    total_lost = 0.0
    if len(actual) >= 2:
        total_lost = actual[0].actual_weight - actual[-1].actual_weight

    deficits = [
        abs(balance)
        for balance in (
            calculate_daily_balance(tdee, log.caloric_intake, log.caloric_outtake)
            for log in logs
        )
        if balance < 0
    ]
    avg_deficit = round_int(sum(deficits) / len(deficits)) if deficits else 0

    last_known = actual[-1].actual_weight if actual else goal_weight
    remaining = last_known - goal_weight
    if total_lost > 0 and len(actual) > 1:
        kg_per_day = total_lost / (len(actual) - 1)
    else:
        kg_per_day = daily_deficit_goal / KCAL_PER_KG

    projected: Optional[date]
    if remaining <= 0:
        projected = ref
    elif kg_per_day <= 0:
        projected = None
    else:
        projected = ref + timedelta(days=math.ceil(remaining / kg_per_day))

    return ProgressSummary(
        total_lost=round_half_up(total_lost, 1),
        avg_deficit=avg_deficit,
        days_tracked=len(actual),
        projected_goal_date=projected,
    )

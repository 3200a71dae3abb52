"""Daily caloric balance and rolling aggregates.

Balance = intake - (TDEE + exercise)

    NEGATIVE = deficit = good for weight loss (ate less than was burned)
    POSITIVE = surplus = bad for weight loss (ate more than was burned)

Examples (TDEE = 1964):
    Nothing eaten:             0 - 1964          = -1964
    Ate 964:                 964 - 1964          = -1000
    Ate 1500, burned 536:   1500 - (1964 + 536)  = -1000
    Ate 2500:               2500 - 1964          = +536
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from deficit.dates import as_day
from deficit.rounding import round_half_up, round_int
from deficit.tracking.models import DailyBalanceRecord, DailyLog, WeightEntry

ROLLING_WINDOW_DAYS = 7

BalanceInput = Union[DailyBalanceRecord, tuple[date, float]]
WeightInput = Union[WeightEntry, tuple[date, float]]


@dataclass(frozen=True)
class RollingBalance:
    """Sum and average of the most recent daily balances."""

    total: int
    average: int
    days_with_data: int


@dataclass(frozen=True)
class WeightChange:
    """Change between two real-weight readings."""

    change: float        # always >= 0
    is_loss: bool
    percentage: float


def as_balance_record(item: BalanceInput) -> DailyBalanceRecord:
    """Accept a record or a ``(date, balance)`` tuple."""
    if isinstance(item, DailyBalanceRecord):
        return DailyBalanceRecord(date=as_day(item.date), balance=item.balance)
    day, balance = item
    return DailyBalanceRecord(date=as_day(day), balance=balance)


def _as_weight_entry(item: WeightInput) -> WeightEntry:
    if isinstance(item, WeightEntry):
        return item
    day, weight = item
    return WeightEntry(date=as_day(day), weight_kg=weight)


def calculate_daily_balance(
    tdee: float,
    caloric_intake: float,
    caloric_outtake: float = 0,
) -> float:
    """Calculate a day's caloric balance.

    Args:
        tdee: Maintenance calories
        caloric_intake: Calories eaten
        caloric_outtake: Calories burned by logged exercise

    Returns:
        Balance in kcal (negative = deficit)
    """
    total_burned = tdee + caloric_outtake
    return caloric_intake - total_burned


def balance_records(logs: Iterable[DailyLog], tdee: float) -> list[DailyBalanceRecord]:
    """Turn daily logs into balance records at a given TDEE."""
    return [
        DailyBalanceRecord(
            date=as_day(log.date),
            balance=calculate_daily_balance(tdee, log.caloric_intake, log.caloric_outtake),
        )
        for log in logs
    ]


def most_recent(
    records: Iterable[BalanceInput],
    limit: int = ROLLING_WINDOW_DAYS,
) -> list[DailyBalanceRecord]:
    """Return up to ``limit`` records, newest first."""
    ordered = sorted(
        (as_balance_record(r) for r in records),
        key=lambda r: r.date,
        reverse=True,
    )
    return ordered[:limit]


def calculate_rolling_balance(
    records: Iterable[BalanceInput],
    window: int = ROLLING_WINDOW_DAYS,
) -> RollingBalance:
    """Calculate the rolling balance over the most recent days.

    The input is not mutated; records are copied before sorting.

    Args:
        records: Daily balance records (any order)
        window: Number of most recent records to include

    Returns:
        RollingBalance with integer-rounded total and average, all zero when
        there is no data
    """
    recent = most_recent(records, window)
    if not recent:
        return RollingBalance(total=0, average=0, days_with_data=0)

    total = float(np.sum([r.balance for r in recent]))
    return RollingBalance(
        total=round_int(total),
        average=round_int(total / len(recent)),
        days_with_data=len(recent),
    )


def calculate_real_weight(entries: Iterable[WeightInput]) -> Optional[float]:
    """Calculate "real weight": the average of the 7 most recent weigh-ins.

    Smooths out water weight fluctuations. Zero or negative weights are
    ignored as missing readings.

    Returns:
        Average weight rounded to 1 decimal, or None without valid entries
    """
    valid = [e for e in map(_as_weight_entry, entries) if e.weight_kg and e.weight_kg > 0]
    if not valid:
        return None

    recent = sorted(valid, key=lambda e: as_day(e.date), reverse=True)[:ROLLING_WINDOW_DAYS]
    mean = float(np.mean([e.weight_kg for e in recent]))
    return round_half_up(mean, 1)


def calculate_weight_change(
    current_real_weight: float,
    previous_real_weight: float,
) -> WeightChange:
    """Calculate the change between two real weights.

    ``previous_real_weight`` must be non-zero; callers check for a missing
    previous reading before calling.
    """
    change = round_half_up(abs(current_real_weight - previous_real_weight), 1)
    return WeightChange(
        change=change,
        # a change that rounds to zero is not a loss
        is_loss=change > 0 and current_real_weight < previous_real_weight,
        percentage=round_half_up(change / previous_real_weight * 100, 1),
    )

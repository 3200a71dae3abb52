"""Deficit streak: consecutive completed days that ended in a deficit.

Rules:
- A day is complete once it is over, so today never counts (nor does
  anything dated after today).
- The streak is counted backwards from yesterday, one calendar day at a time.
- A missing day breaks the streak, even if older days were all deficits.
- A day with zero or positive balance (maintenance or surplus) breaks it.
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Iterable, Optional

from deficit.dates import DateLike, resolve_today
from deficit.tracking.balance import BalanceInput, as_balance_record

logger = logging.getLogger(__name__)


def calculate_streak(
    records: Iterable[BalanceInput],
    today: Optional[DateLike] = None,
) -> int:
    """Count the current streak of completed deficit days.

    Args:
        records: Daily balance records or ``(date, balance)`` tuples, any order
        today: Reference day (default: today)

    Returns:
        Number of consecutive deficit days ending yesterday

    Example:
        >>> from datetime import date
        >>> calculate_streak(
        ...     [(date(2025, 3, 9), -500), (date(2025, 3, 8), -200)],
        ...     today=date(2025, 3, 10),
        ... )
        2
    """
    ref = resolve_today(today)
    completed = sorted(
        (r for r in map(as_balance_record, records) if r.date < ref),
        key=lambda r: r.date,
        reverse=True,
    )

    yesterday = ref - timedelta(days=1)
    streak = 0
    for i, record in enumerate(completed):
        expected = yesterday - timedelta(days=i)
        if record.date != expected:
            logger.debug("streak broken by missing day %s", expected)
            break
        if record.balance >= 0:
            logger.debug("streak broken by surplus on %s", record.date)
            break
        streak += 1

    return streak

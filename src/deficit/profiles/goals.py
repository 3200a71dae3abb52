"""Goal planning: the daily deficit needed to hit a goal weight by a date.

The required deficit is classified into a risk tier so the UI can warn about
timelines that are unhealthy or unrealistic:

    daily deficit (kcal)   tier         safe    achievable
    <= 750                 safe         yes     yes
    <= 1000                aggressive   yes     yes
    <= 1500                aggressive   no      yes
    > 1500                 dangerous    no      no
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional

from deficit.dates import DateLike, as_day, resolve_today
from deficit.rounding import round_half_up, round_int
from deficit.units import KCAL_PER_KG

logger = logging.getLogger(__name__)

SAFE_DEFICIT_MAX = 750
AGGRESSIVE_DEFICIT_MAX = 1000
ACHIEVABLE_DEFICIT_MAX = 1500


class RiskLevel(Enum):
    """How risky a required daily deficit is."""
    SAFE = "safe"
    AGGRESSIVE = "aggressive"
    DANGEROUS = "dangerous"


@dataclass(frozen=True)
class DeficitAnalysis:
    """Required daily deficit to reach a goal weight, with its risk tier."""

    daily_deficit: int          # kcal/day, positive number
    weekly_loss: float          # kg/week at that deficit
    days_remaining: int
    weeks_remaining: float
    is_achievable: bool
    is_safe: bool
    risk_level: RiskLevel
    message: str

    @property
    def goal_deficit(self) -> int:
        """Daily target as a balance (negative, e.g. -1000)."""
        return -self.daily_deficit

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        data = asdict(self)
        data["risk_level"] = self.risk_level.value
        data["goal_deficit"] = self.goal_deficit
        return data


def _weeks(days: int) -> float:
    return round_half_up(days / 7, 1)


def calculate_required_daily_deficit(
    current_weight_kg: float,
    goal_weight_kg: float,
    goal_date: DateLike,
    today: Optional[DateLike] = None,
) -> DeficitAnalysis:
    """Calculate the daily deficit needed to hit a goal weight by a date.

    Days remaining are counted between calendar days, so the time of day
    never shifts the result by one.

    Args:
        current_weight_kg: Current weight in kg
        goal_weight_kg: Goal weight in kg
        goal_date: Date the goal should be reached by
        today: Reference day (default: today)

    Returns:
        DeficitAnalysis. A goal date that is today or in the past yields a
        zeroed, dangerous, unachievable analysis rather than an error.
    """
    ref = resolve_today(today)
    days_remaining = (as_day(goal_date) - ref).days

    if days_remaining <= 0:
        logger.debug("goal date %s is not after %s", goal_date, ref)
        return DeficitAnalysis(
            daily_deficit=0,
            weekly_loss=0.0,
            days_remaining=0,
            weeks_remaining=0.0,
            is_achievable=False,
            is_safe=False,
            risk_level=RiskLevel.DANGEROUS,
            message="Goal date has passed. Please set a future date.",
        )

    weight_to_lose = current_weight_kg - goal_weight_kg

    # Trying to gain weight or already at goal
    if weight_to_lose <= 0:
        return DeficitAnalysis(
            daily_deficit=0,
            weekly_loss=0.0,
            days_remaining=days_remaining,
            weeks_remaining=_weeks(days_remaining),
            is_achievable=True,
            is_safe=True,
            risk_level=RiskLevel.SAFE,
            message="You're already at or below your goal weight!",
        )

    total_deficit = weight_to_lose * KCAL_PER_KG
    daily_deficit = round_int(total_deficit / days_remaining)
    weekly_loss = round_half_up(daily_deficit * 7 / KCAL_PER_KG, 2)
    loss_text = f"{weekly_loss:g}"

    if daily_deficit <= SAFE_DEFICIT_MAX:
        risk_level = RiskLevel.SAFE
        is_safe = True
        message = f"Healthy pace! You'll lose about {loss_text}kg per week."
    elif daily_deficit <= AGGRESSIVE_DEFICIT_MAX:
        risk_level = RiskLevel.AGGRESSIVE
        is_safe = True
        message = f"Aggressive but achievable. You'll lose about {loss_text}kg per week."
    elif daily_deficit <= ACHIEVABLE_DEFICIT_MAX:
        risk_level = RiskLevel.AGGRESSIVE
        is_safe = False
        message = (
            f"This is very aggressive ({loss_text}kg/week). "
            "Consider extending your goal date."
        )
    else:
        risk_level = RiskLevel.DANGEROUS
        is_safe = False
        message = "This deficit is too extreme and unhealthy. Please extend your goal date."

    logger.debug(
        "deficit %d kcal/day over %d days -> %s", daily_deficit, days_remaining, risk_level.value
    )

    return DeficitAnalysis(
        daily_deficit=daily_deficit,
        weekly_loss=weekly_loss,
        days_remaining=days_remaining,
        weeks_remaining=_weeks(days_remaining),
        is_achievable=daily_deficit <= ACHIEVABLE_DEFICIT_MAX,
        is_safe=is_safe,
        risk_level=risk_level,
        message=message,
    )

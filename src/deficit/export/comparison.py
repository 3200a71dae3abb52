"""Balance classification against the daily goal deficit.

Balance: NEGATIVE = deficit (good), POSITIVE = surplus (bad)
Goal:    NEGATIVE number (e.g. -1000 for a 1000 kcal/day deficit goal)

Colors:
- success: balance <= goal (met or exceeded the deficit goal)
- warning: balance is negative but above the goal (deficit, not enough)
- danger:  balance >= 0 (maintenance or surplus)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from deficit.rounding import round_half_up


class BalanceColor(Enum):
    """Color hint for a balance."""
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"
    NEUTRAL = "neutral"


class BalanceStatus(Enum):
    """Where a balance stands relative to the goal deficit."""
    EXCEEDED = "exceeded"
    ON_TRACK = "on-track"
    BEHIND = "behind"
    SURPLUS = "surplus"


@dataclass(frozen=True)
class BalanceDisplay:
    """A signed balance ready for display."""

    text: str
    is_deficit: bool
    color: BalanceColor


@dataclass(frozen=True)
class BalanceComparison:
    """A day's balance compared against the goal deficit."""

    text: str
    is_deficit: bool
    color: BalanceColor
    status: BalanceStatus
    vs_goal: float           # negative = beat the goal, positive = short of it
    vs_goal_text: str
    to_goal: float           # positive = kcal still to cut to reach the goal
    to_maintenance: float    # positive = kcal left before maintenance

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        return {
            "text": self.text,
            "is_deficit": self.is_deficit,
            "color": self.color.value,
            "status": self.status.value,
            "vs_goal": self.vs_goal,
            "vs_goal_text": self.vs_goal_text,
            "to_goal": self.to_goal,
            "to_maintenance": self.to_maintenance,
        }


def format_number(value: float) -> str:
    """Format a number with thousands separators (``1234`` -> ``"1,234"``)."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{round_half_up(value, 3):,}"


def _signed_text(balance: float) -> str:
    if balance == 0:
        return "0"
    sign = "-" if balance < 0 else "+"
    return f"{sign}{format_number(abs(balance))}"


def format_balance(balance: float) -> BalanceDisplay:
    """Format a balance with its sign and a color hint."""
    if balance == 0:
        return BalanceDisplay(text="0", is_deficit=False, color=BalanceColor.NEUTRAL)

    is_deficit = balance < 0
    return BalanceDisplay(
        text=_signed_text(balance),
        is_deficit=is_deficit,
        color=BalanceColor.SUCCESS if is_deficit else BalanceColor.DANGER,
    )


def format_balance_with_goal(balance: float, goal_deficit: float) -> BalanceComparison:
    """Compare a balance to the goal deficit.

    Rules are checked in order: surplus first, then goal met, then behind.

    Args:
        balance: Day's balance in kcal
        goal_deficit: Daily goal as a negative number (e.g. -1000)

    Returns:
        BalanceComparison with status, color and "to go"/"extra" text

    Example:
        >>> format_balance_with_goal(-800, -1000).vs_goal_text
        '200 to go'
        >>> format_balance_with_goal(-1100, -1000).vs_goal_text
        '100 extra'
    """
    # e.g. -556 - (-868) = 312 still to go
    to_goal = balance - goal_deficit
    # e.g. -(-556) = 556 left before maintenance
    to_maintenance = -balance

    if balance >= 0:
        color = BalanceColor.DANGER
        status = BalanceStatus.SURPLUS
        if balance == 0:
            vs_goal_text = f"{format_number(abs(goal_deficit))} to go"
        else:
            vs_goal_text = f"{format_number(balance)} surplus!"
    elif balance <= goal_deficit:
        color = BalanceColor.SUCCESS
        status = BalanceStatus.ON_TRACK if to_goal == 0 else BalanceStatus.EXCEEDED
        extra = abs(balance) - abs(goal_deficit)
        vs_goal_text = "On target!" if extra == 0 else f"{format_number(extra)} extra"
    else:
        color = BalanceColor.WARNING
        status = BalanceStatus.BEHIND
        remaining = abs(goal_deficit) - abs(balance)
        vs_goal_text = f"{format_number(remaining)} to go"

    return BalanceComparison(
        text=_signed_text(balance),
        is_deficit=balance < 0,
        color=color,
        status=status,
        vs_goal=to_goal,
        vs_goal_text=vs_goal_text,
        to_goal=to_goal,
        to_maintenance=to_maintenance,
    )

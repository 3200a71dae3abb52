"""Dashboard statistics: every engine component applied to one profile."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from deficit.dates import DateLike, as_day, resolve_today
from deficit.export.comparison import BalanceComparison, format_balance_with_goal
from deficit.profiles.body_calc import (
    calculate_maintenance,
    calculate_protein_goal,
)
from deficit.profiles.goals import DeficitAnalysis, calculate_required_daily_deficit
from deficit.tracking.balance import (
    RollingBalance,
    balance_records,
    calculate_daily_balance,
    calculate_real_weight,
    calculate_rolling_balance,
    most_recent,
)
from deficit.tracking.milestones import MilestoneResult, get_weight_loss_milestone
from deficit.tracking.models import DailyLog, Profile
from deficit.tracking.prediction import WeightPrediction, predict_weight_30_days
from deficit.tracking.streak import calculate_streak

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardStats:
    """Everything the dashboard shows for one day."""

    bmr: int
    maintenance_calories: int
    goal: DeficitAnalysis
    goal_deficit: int
    today_intake: float
    today_outtake: float
    today_protein: float
    today_balance: float
    today_comparison: BalanceComparison
    protein_goal: int
    seven_day: RollingBalance
    real_weight: Optional[float]
    prediction: WeightPrediction
    streak: int
    milestone: Optional[MilestoneResult]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        return {
            "bmr": self.bmr,
            "maintenance_calories": self.maintenance_calories,
            "goal": self.goal.to_dict(),
            "goal_deficit": self.goal_deficit,
            "today": {
                "intake": self.today_intake,
                "outtake": self.today_outtake,
                "protein": self.today_protein,
                "balance": self.today_balance,
                "comparison": self.today_comparison.to_dict(),
            },
            "protein_goal": self.protein_goal,
            "seven_day_balance": self.seven_day.total,
            "seven_day_average": self.seven_day.average,
            "days_with_data": self.seven_day.days_with_data,
            "real_weight": self.real_weight,
            "prediction": self.prediction.to_dict(),
            "streak": self.streak,
            "milestone": {
                "milestone": self.milestone.milestone,
                "name": self.milestone.name,
                "reached": self.milestone.reached,
            } if self.milestone else None,
        }


def compute_dashboard_stats(
    profile: Profile,
    logs: Sequence[DailyLog],
    today: Optional[DateLike] = None,
) -> DashboardStats:
    """Compute dashboard statistics from a profile and its daily logs.

    Maintenance and goal deficit are recomputed from the profile on every
    call. The last 7 logged days (today included, when logged) drive the
    rolling balance, the prediction and the streak; the streak itself skips
    today.

    Args:
        profile: User profile
        logs: Daily logs in any order
        today: Reference day (default: today)

    Returns:
        DashboardStats
    """
    ref = resolve_today(today)
    current_weight = profile.weight_kg

    bmr, tdee = calculate_maintenance(
        current_weight,
        profile.height_cm,
        profile.birth_date,
        profile.gender,
        profile.activity_level,
        today=ref,
    )

    goal = calculate_required_daily_deficit(
        current_weight, profile.goal_weight_kg, profile.goal_date, today=ref
    )
    goal_deficit = goal.goal_deficit

    # No log for today = nothing eaten yet = full TDEE deficit
    today_log = next((log for log in logs if as_day(log.date) == ref), None)
    today_intake = today_log.caloric_intake if today_log else 0
    today_outtake = today_log.caloric_outtake if today_log else 0
    today_protein = today_log.protein_grams if today_log else 0
    today_balance = calculate_daily_balance(tdee, today_intake, today_outtake)

    last_7 = most_recent(balance_records(logs, tdee))
    seven_day = calculate_rolling_balance(last_7)

    weights = [entry for entry in (log.weight_entry() for log in logs) if entry]
    real_weight = calculate_real_weight(weights)

    prediction = predict_weight_30_days(
        real_weight or profile.starting_weight_kg,
        [record.balance for record in last_7],
    )

    streak = calculate_streak(last_7, today=ref)

    milestone = None
    if real_weight is not None and profile.starting_weight_kg:
        milestone = get_weight_loss_milestone(profile.starting_weight_kg - real_weight)

    logger.debug(
        "dashboard for %s: tdee=%d goal=%d streak=%d", ref, tdee, goal_deficit, streak
    )

    return DashboardStats(
        bmr=bmr,
        maintenance_calories=tdee,
        goal=goal,
        goal_deficit=goal_deficit,
        today_intake=today_intake,
        today_outtake=today_outtake,
        today_protein=today_protein,
        today_balance=today_balance,
        today_comparison=format_balance_with_goal(today_balance, goal_deficit),
        protein_goal=calculate_protein_goal(current_weight, profile.is_active),
        seven_day=seven_day,
        real_weight=real_weight,
        prediction=prediction,
        streak=streak,
        milestone=milestone,
    )

"""Daily balance tracking: balances, streaks, predictions and milestones.

Key components:
- Daily and rolling 7-day caloric balance
- "Real weight" (7-day average of weigh-ins)
- Gap-strict deficit streak (today never counts)
- 30-day weight projection
- Calendar, progress and dashboard views built on the above
"""

from __future__ import annotations

from deficit.tracking.balance import (
    RollingBalance,
    WeightChange,
    calculate_daily_balance,
    calculate_real_weight,
    calculate_rolling_balance,
    calculate_weight_change,
)
from deficit.tracking.milestones import (
    MILESTONES,
    Milestone,
    MilestoneResult,
    get_weight_loss_milestone,
)
from deficit.tracking.models import (
    DailyBalanceRecord,
    DailyLog,
    Profile,
    WeightEntry,
)
from deficit.tracking.prediction import (
    Confidence,
    WeightPrediction,
    predict_weight_30_days,
)
from deficit.tracking.streak import calculate_streak

__all__ = [
    "Confidence",
    "DailyBalanceRecord",
    "DailyLog",
    "MILESTONES",
    "Milestone",
    "MilestoneResult",
    "Profile",
    "RollingBalance",
    "WeightChange",
    "WeightEntry",
    "WeightPrediction",
    "calculate_daily_balance",
    "calculate_real_weight",
    "calculate_rolling_balance",
    "calculate_streak",
    "calculate_weight_change",
    "get_weight_loss_milestone",
    "predict_weight_30_days",
]

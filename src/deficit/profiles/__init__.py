"""Body metrics and goal planning."""

from __future__ import annotations

from deficit.profiles.body_calc import (
    ActivityLevel,
    Gender,
    calculate_age,
    calculate_bmr,
    calculate_protein_goal,
    calculate_tdee,
)
from deficit.profiles.goals import (
    DeficitAnalysis,
    RiskLevel,
    calculate_required_daily_deficit,
)

__all__ = [
    "ActivityLevel",
    "DeficitAnalysis",
    "Gender",
    "RiskLevel",
    "calculate_age",
    "calculate_bmr",
    "calculate_protein_goal",
    "calculate_required_daily_deficit",
    "calculate_tdee",
]

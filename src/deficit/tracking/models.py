"""Data models for profiles, daily logs and balance records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from deficit.profiles.body_calc import (
    ActivityLevel,
    Gender,
    parse_activity_level,
    parse_gender,
)


@dataclass
class Profile:
    """User profile: body metrics and weight goal (metric units)."""

    weight_kg: float
    height_cm: float
    birth_date: date
    gender: Gender
    activity_level: ActivityLevel
    goal_weight_kg: float
    goal_date: date
    starting_weight_kg: Optional[float] = None
    created_at: Optional[date] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        self.gender = parse_gender(self.gender)
        self.activity_level = parse_activity_level(self.activity_level)
        if self.starting_weight_kg is None:
            self.starting_weight_kg = self.weight_kg

    @property
    def is_active(self) -> bool:
        """Anything above sedentary counts as active for protein targets."""
        return self.activity_level != ActivityLevel.SEDENTARY


@dataclass(frozen=True)
class WeightEntry:
    """A single recorded weight."""

    date: date
    weight_kg: float


@dataclass(frozen=True)
class DailyBalanceRecord:
    """Caloric balance for one day (negative = deficit)."""

    date: date
    balance: float


@dataclass
class DailyLog:
    """One day of logged intake, exercise, protein and weight."""

    date: date
    caloric_intake: float = 0
    caloric_outtake: float = 0
    protein_grams: float = 0
    weight_kg: Optional[float] = None
    notes: Optional[str] = None

    def weight_entry(self) -> Optional[WeightEntry]:
        """Weight recorded on this day, if any."""
        if not self.weight_kg:
            return None
        return WeightEntry(date=self.date, weight_kg=self.weight_kg)

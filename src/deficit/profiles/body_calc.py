"""Body metric calculations for maintenance calories.

Calculates BMR (Basal Metabolic Rate) and TDEE (Total Daily Energy
Expenditure) from body metrics and an activity tier, plus the daily protein
goal shown alongside them.

Uses Mifflin-St Jeor equation for BMR as it's widely validated for
calculating resting metabolic rate. All inputs are metric.
"""

from __future__ import annotations

import logging
from datetime import date
from enum import Enum
from typing import Optional, Union

from deficit.dates import DateLike, as_day, resolve_today
from deficit.rounding import round_int

logger = logging.getLogger(__name__)


class Gender(Enum):
    """Gender for BMR calculation."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(Enum):
    """Activity level multipliers for TDEE calculation."""
    SEDENTARY = "sedentary"          # Little or no exercise
    LIGHT = "light"                  # Light exercise 1-3 days/week
    MODERATE = "moderate"            # Moderate exercise 3-5 days/week
    ACTIVE = "active"                # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very_active"      # Very hard exercise, physical job


# Activity level multipliers (Harris-Benedict activity factors)
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

ACTIVITY_DESCRIPTIONS = {
    ActivityLevel.SEDENTARY: "Little or no exercise, desk job",
    ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
    ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
    ActivityLevel.ACTIVE: "Hard exercise 6-7 days/week",
    ActivityLevel.VERY_ACTIVE: "Very hard exercise or physical job",
}

# Mifflin-St Jeor sex offsets; "other" sits at the midpoint
GENDER_OFFSETS = {
    Gender.MALE: 5,
    Gender.FEMALE: -161,
    Gender.OTHER: -78,
}

# Protein recommendations (grams per kg body weight)
PROTEIN_PER_KG = 1.6
PROTEIN_PER_KG_ACTIVE = 2.0


def parse_gender(value: Union[Gender, str]) -> Gender:
    """Coerce a string such as ``"Female"`` to a :class:`Gender`."""
    if isinstance(value, Gender):
        return value
    try:
        return Gender(value.lower().strip())
    except ValueError:
        valid = [g.value for g in Gender]
        raise ValueError(f"gender must be one of {valid}, got '{value}'") from None


def parse_activity_level(value: Union[ActivityLevel, str]) -> ActivityLevel:
    """Coerce a string such as ``"very_active"`` to an :class:`ActivityLevel`."""
    if isinstance(value, ActivityLevel):
        return value
    try:
        return ActivityLevel(value.lower().strip())
    except ValueError:
        valid = [a.value for a in ActivityLevel]
        raise ValueError(
            f"activity_level must be one of {valid}, got '{value}'"
        ) from None


def calculate_bmr(
    weight_kg: float,
    height_cm: float,
    age_years: int,
    gender: Union[Gender, str],
) -> int:
    """Calculate Basal Metabolic Rate using Mifflin-St Jeor equation.

    Men: 10 × weight + 6.25 × height - 5 × age + 5
    Women: 10 × weight + 6.25 × height - 5 × age - 161
    Other: midpoint offset of -78

    Args:
        weight_kg: Weight in kilograms
        height_cm: Height in centimeters
        age_years: Age in years
        gender: Gender (enum or its string value)

    Returns:
        BMR in calories per day, rounded to the nearest kcal
    """
    base = (10 * weight_kg) + (6.25 * height_cm) - (5 * age_years)
    return round_int(base + GENDER_OFFSETS[parse_gender(gender)])


def calculate_tdee(
    bmr: float,
    activity_level: Union[ActivityLevel, str],
) -> int:
    """Calculate Total Daily Energy Expenditure.

    Args:
        bmr: Basal Metabolic Rate
        activity_level: Activity level

    Returns:
        TDEE in calories per day, rounded to the nearest kcal
    """
    multiplier = ACTIVITY_MULTIPLIERS[parse_activity_level(activity_level)]
    return round_int(bmr * multiplier)


def calculate_age(birth_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Calculate age in whole years.

    The age only increments once the birthday has been reached in the
    current year.
    """
    born = as_day(birth_date)
    ref = resolve_today(today)
    age = ref.year - born.year
    if (ref.month, ref.day) < (born.month, born.day):
        age -= 1
    return age


def calculate_protein_goal(weight_kg: float, is_active: bool = False) -> int:
    """Daily protein goal in grams.

    Active people get the higher ratio to preserve muscle during a deficit.
    """
    multiplier = PROTEIN_PER_KG_ACTIVE if is_active else PROTEIN_PER_KG
    return round_int(weight_kg * multiplier)


def calculate_maintenance(
    weight_kg: float,
    height_cm: float,
    birth_date: date,
    gender: Union[Gender, str],
    activity_level: Union[ActivityLevel, str],
    today: Optional[DateLike] = None,
) -> tuple[int, int]:
    """Calculate (BMR, TDEE) for a set of body metrics.

    Returns:
        Tuple of (bmr, tdee) in kcal/day
    """
    age = calculate_age(birth_date, today)
    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    tdee = calculate_tdee(bmr, activity_level)
    logger.debug("age=%d bmr=%d tdee=%d", age, bmr, tdee)
    return bmr, tdee

"""Weight and height unit conversion.

The engine works in kilograms and centimeters throughout. Pounds and feet
only appear at this boundary, when reading user input or formatting output.
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from deficit.rounding import round_half_up, round_int

LBS_PER_KG = 2.20462
CM_PER_FT = 30.48

# 7,700 kcal of deficit = 1 kg of body fat
KCAL_PER_KG = 7700


class WeightUnit(Enum):
    """Supported weight units."""
    KG = "kg"
    LBS = "lbs"


class HeightUnit(Enum):
    """Supported height units."""
    CM = "cm"
    FT = "ft"


def _weight_unit(unit: Union[WeightUnit, str]) -> WeightUnit:
    if isinstance(unit, WeightUnit):
        return unit
    normalized = unit.lower().strip()
    if normalized == "lb":
        normalized = "lbs"
    try:
        return WeightUnit(normalized)
    except ValueError:
        raise ValueError(f"weight unit must be 'kg' or 'lbs', got '{unit}'") from None


def _height_unit(unit: Union[HeightUnit, str]) -> HeightUnit:
    if isinstance(unit, HeightUnit):
        return unit
    try:
        return HeightUnit(unit.lower().strip())
    except ValueError:
        raise ValueError(f"height unit must be 'cm' or 'ft', got '{unit}'") from None


def convert_weight(
    value: float,
    from_unit: Union[WeightUnit, str],
    to_unit: Union[WeightUnit, str],
) -> float:
    """Convert a weight between kilograms and pounds.

    Same-unit conversions return the value untouched; everything else is
    rounded to 1 decimal.

    Args:
        value: Weight to convert
        from_unit: Unit of ``value``
        to_unit: Desired unit

    Returns:
        Converted weight
    """
    source = _weight_unit(from_unit)
    target = _weight_unit(to_unit)
    if source == target:
        return value
    if source == WeightUnit.KG:
        return round_half_up(value * LBS_PER_KG, 1)
    return round_half_up(value / LBS_PER_KG, 1)


def convert_height(
    value: float,
    from_unit: Union[HeightUnit, str],
    to_unit: Union[HeightUnit, str],
) -> float:
    """Convert a height between centimeters and feet.

    cm -> ft is rounded to 1 decimal, ft -> cm to a whole centimeter.
    """
    source = _height_unit(from_unit)
    target = _height_unit(to_unit)
    if source == target:
        return value
    if source == HeightUnit.CM:
        return round_half_up(value / CM_PER_FT, 1)
    return round_int(value * CM_PER_FT)


def format_weight(kg: float, unit: Union[WeightUnit, str] = WeightUnit.KG) -> str:
    """Format a kilogram weight for display in the requested unit."""
    if _weight_unit(unit) == WeightUnit.LBS:
        return f"{round_half_up(kg * LBS_PER_KG, 1):g} lbs"
    return f"{round_half_up(kg, 1):g} kg"

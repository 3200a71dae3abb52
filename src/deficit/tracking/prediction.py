"""30-day weight projection from recent daily balances."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

import numpy as np

from deficit.rounding import round_half_up
from deficit.units import KCAL_PER_KG

PREDICTION_DAYS = 30
HIGH_CONFIDENCE_POINTS = 6
MEDIUM_CONFIDENCE_POINTS = 3


class Confidence(Enum):
    """Confidence in a projection, driven by how many days of data it uses."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class WeightPrediction:
    """Projected weight after the prediction horizon."""

    predicted_weight: float
    predicted_change: float   # magnitude in kg, always >= 0
    is_loss: bool
    confidence: Confidence

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        return {
            "predicted_weight": self.predicted_weight,
            "predicted_change": self.predicted_change,
            "is_loss": self.is_loss,
            "confidence": self.confidence.value,
        }


def confidence_for(data_points: int) -> Confidence:
    """Map a number of data points to a confidence tier."""
    if data_points >= HIGH_CONFIDENCE_POINTS:
        return Confidence.HIGH
    if data_points >= MEDIUM_CONFIDENCE_POINTS:
        return Confidence.MEDIUM
    return Confidence.LOW


def predict_weight_30_days(
    current_real_weight: Optional[float],
    recent_balances: Sequence[float],
) -> WeightPrediction:
    """Predict weight in 30 days if the recent average balance continues.

    Args:
        current_real_weight: Current real weight in kg
        recent_balances: Recent daily balances in kcal (typically last 7 days)

    Returns:
        WeightPrediction. Without balances or a weight, the prediction is
        "no change" at low confidence.
    """
    if len(recent_balances) == 0 or not current_real_weight:
        return WeightPrediction(
            predicted_weight=current_real_weight or 0.0,
            predicted_change=0.0,
            is_loss=False,
            confidence=Confidence.LOW,
        )

    avg_daily_balance = float(np.mean(recent_balances))
    projected_total = avg_daily_balance * PREDICTION_DAYS

    # Negative balance = weight loss
    projected_change_kg = projected_total / KCAL_PER_KG

    return WeightPrediction(
        predicted_weight=round_half_up(current_real_weight + projected_change_kg, 1),
        predicted_change=round_half_up(abs(projected_change_kg), 1),
        is_loss=projected_change_kg < 0,
        confidence=confidence_for(len(recent_balances)),
    )

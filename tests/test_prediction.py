"""Tests for the 30-day weight prediction."""

from __future__ import annotations

import pytest

from deficit.tracking.prediction import Confidence, confidence_for, predict_weight_30_days


class TestPredictWeight:
    """Tests for predict_weight_30_days."""

    def test_steady_deficit(self):
        """1000 kcal/day for 30 days is about 3.9 kg."""
        result = predict_weight_30_days(80, [-1000] * 7)
        assert result.predicted_weight == pytest.approx(76.1)
        assert result.predicted_change == pytest.approx(3.9)
        assert result.is_loss is True
        assert result.confidence == Confidence.HIGH

    def test_surplus(self):
        """A surplus projects a gain."""
        result = predict_weight_30_days(80, [500, 500, 500])
        assert result.predicted_weight == pytest.approx(81.9)
        assert result.predicted_change == pytest.approx(1.9)
        assert result.is_loss is False
        assert result.confidence == Confidence.MEDIUM

    def test_no_balances(self):
        """Without data the prediction is no change at low confidence."""
        result = predict_weight_30_days(80, [])
        assert result.predicted_weight == 80
        assert result.predicted_change == 0
        assert result.is_loss is False
        assert result.confidence == Confidence.LOW

    def test_no_weight(self):
        """Without a weight the prediction is zero."""
        result = predict_weight_30_days(None, [-500])
        assert result.predicted_weight == 0.0
        assert result.confidence == Confidence.LOW

    def test_to_dict(self):
        """Confidence is serialized as its value."""
        assert predict_weight_30_days(80, [-1000]).to_dict()["confidence"] == "low"


class TestConfidence:
    """Tests for confidence tiers."""

    @pytest.mark.parametrize(
        "points,expected",
        [
            (0, Confidence.LOW),
            (2, Confidence.LOW),
            (3, Confidence.MEDIUM),
            (5, Confidence.MEDIUM),
            (6, Confidence.HIGH),
            (7, Confidence.HIGH),
        ],
    )
    def test_tiers(self, points, expected):
        """6+ points is high, 3+ is medium."""
        assert confidence_for(points) == expected

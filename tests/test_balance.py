"""Tests for daily balance, rolling balance, real weight and weight change."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from deficit.tracking.balance import (
    balance_records,
    calculate_daily_balance,
    calculate_real_weight,
    calculate_rolling_balance,
    calculate_weight_change,
    most_recent,
)
from deficit.tracking.models import DailyBalanceRecord, DailyLog, WeightEntry

TODAY = date(2025, 3, 15)


def days_ago(n):
    return TODAY - timedelta(days=n)


class TestDailyBalance:
    """Tests for balance = intake - (TDEE + outtake)."""

    @pytest.mark.parametrize(
        "intake,outtake,expected",
        [(0, 0, -1964), (964, 0, -1000), (1500, 536, -1000), (2500, 0, 536)],
    )
    def test_examples(self, intake, outtake, expected):
        """Documented examples at TDEE 1964."""
        assert calculate_daily_balance(1964, intake, outtake) == expected

    def test_outtake_defaults_to_zero(self):
        """Exercise is optional."""
        assert calculate_daily_balance(2000, 2000) == 0

    def test_balance_records_from_logs(self):
        """Logs become dated balance records."""
        logs = [DailyLog(date=TODAY, caloric_intake=1500, caloric_outtake=200)]
        assert balance_records(logs, 2000) == [DailyBalanceRecord(TODAY, -700)]


class TestRollingBalance:
    """Tests for the 7-day rolling balance."""

    def test_empty(self):
        """No data gives zeros."""
        result = calculate_rolling_balance([])
        assert (result.total, result.average, result.days_with_data) == (0, 0, 0)

    def test_uses_seven_most_recent(self):
        """Older records beyond the window are ignored."""
        records = [(days_ago(n), -1000) for n in range(7)]
        records += [(days_ago(n), 5000) for n in range(7, 10)]
        result = calculate_rolling_balance(records)
        assert result.total == -7000
        assert result.average == -1000
        assert result.days_with_data == 7

    def test_average_rounds_half_up(self):
        """-1.5 rounds toward positive infinity."""
        result = calculate_rolling_balance([(days_ago(0), -1), (days_ago(1), -2)])
        assert result.total == -3
        assert result.average == -1

    def test_partial_week(self):
        """Fewer than 7 days average over the days present."""
        result = calculate_rolling_balance([(days_ago(1), -600), (days_ago(2), -900)])
        assert result.average == -750
        assert result.days_with_data == 2

    def test_input_not_mutated(self):
        """Sorting works on a copy."""
        records = [
            DailyBalanceRecord(days_ago(3), -100),
            DailyBalanceRecord(days_ago(1), -200),
            DailyBalanceRecord(days_ago(2), -300),
        ]
        snapshot = list(records)
        calculate_rolling_balance(records)
        assert records == snapshot

    def test_most_recent_is_newest_first(self):
        """most_recent sorts descending by date."""
        records = [(days_ago(3), 1), (days_ago(1), 2), (days_ago(2), 3)]
        assert [r.balance for r in most_recent(records, limit=2)] == [2, 3]


class TestRealWeight:
    """Tests for the 7-entry average weight."""

    def test_empty(self):
        """No weigh-ins gives None."""
        assert calculate_real_weight([]) is None

    def test_ignores_zero_weights(self):
        """Zero weights count as missing."""
        assert calculate_real_weight([WeightEntry(TODAY, 0)]) is None

    def test_average_of_seven_most_recent(self):
        """Only the 7 newest entries are averaged."""
        entries = [(days_ago(n), 80.0) for n in range(7)]
        entries.append((days_ago(10), 200.0))
        assert calculate_real_weight(entries) == pytest.approx(80.0)

    def test_rounds_to_one_decimal(self):
        """89.25 rounds half-up to 89.3."""
        entries = [(days_ago(1), 89.0), (days_ago(2), 89.5)]
        assert calculate_real_weight(entries) == pytest.approx(89.3)


class TestWeightChange:
    """Tests for the change between two real weights."""

    def test_loss(self):
        """Lower current weight is a loss."""
        result = calculate_weight_change(80, 82)
        assert result.change == pytest.approx(2.0)
        assert result.is_loss is True
        assert result.percentage == pytest.approx(2.4)

    def test_gain(self):
        """Change is always reported as a magnitude."""
        result = calculate_weight_change(85, 80)
        assert result.change == pytest.approx(5.0)
        assert result.is_loss is False
        assert result.percentage == pytest.approx(6.3)

    def test_change_rounding_to_zero_is_not_a_loss(self):
        """A 0.04 kg drop shows as 0.0 and is not reported as a loss."""
        result = calculate_weight_change(80.0, 80.04)
        assert result.change == 0
        assert result.is_loss is False
        assert result.percentage == 0

    def test_no_change(self):
        """Same weight is not a loss."""
        result = calculate_weight_change(80, 80)
        assert result.change == 0
        assert result.is_loss is False

"""Tests for balance formatting and goal comparison."""

from __future__ import annotations

import pytest

from deficit.export.comparison import (
    BalanceColor,
    BalanceStatus,
    format_balance,
    format_balance_with_goal,
    format_number,
)


class TestFormatBalance:
    """Tests for signed balance display."""

    def test_zero_is_neutral(self):
        result = format_balance(0)
        assert result.text == "0"
        assert result.is_deficit is False
        assert result.color == BalanceColor.NEUTRAL

    def test_deficit(self):
        result = format_balance(-1234)
        assert result.text == "-1,234"
        assert result.is_deficit is True
        assert result.color == BalanceColor.SUCCESS

    def test_surplus(self):
        result = format_balance(500)
        assert result.text == "+500"
        assert result.color == BalanceColor.DANGER

    def test_format_number(self):
        """Thousands separators, no trailing .0."""
        assert format_number(1234567.0) == "1,234,567"
        assert format_number(12.5) == "12.5"

    def test_format_number_rounds_half_up(self):
        """Three decimals, halves rounded up rather than to even."""
        assert format_number(1000.0625) == "1,000.063"


class TestFormatBalanceWithGoal:
    """Tests for comparing a balance to a -1000 kcal goal."""

    def test_exceeded(self):
        """Beating the goal reports the extra."""
        result = format_balance_with_goal(-1100, -1000)
        assert result.status == BalanceStatus.EXCEEDED
        assert result.color == BalanceColor.SUCCESS
        assert result.vs_goal_text == "100 extra"
        assert result.to_goal == -100
        assert result.to_maintenance == 1100

    def test_on_target(self):
        """Exactly meeting the goal."""
        result = format_balance_with_goal(-1000, -1000)
        assert result.status == BalanceStatus.ON_TRACK
        assert result.color == BalanceColor.SUCCESS
        assert result.vs_goal_text == "On target!"

    def test_behind(self):
        """A smaller deficit reports what is left to go."""
        result = format_balance_with_goal(-800, -1000)
        assert result.status == BalanceStatus.BEHIND
        assert result.color == BalanceColor.WARNING
        assert result.vs_goal_text == "200 to go"
        assert result.to_goal == 200
        assert result.is_deficit is True

    def test_maintenance(self):
        """Zero balance is a surplus day with the full goal to go."""
        result = format_balance_with_goal(0, -1000)
        assert result.status == BalanceStatus.SURPLUS
        assert result.color == BalanceColor.DANGER
        assert result.text == "0"
        assert result.vs_goal_text == "1,000 to go"

    def test_surplus(self):
        """A positive balance reports the surplus."""
        result = format_balance_with_goal(250, -1000)
        assert result.status == BalanceStatus.SURPLUS
        assert result.text == "+250"
        assert result.vs_goal_text == "250 surplus!"
        assert result.to_maintenance == -250
        assert result.is_deficit is False

    @pytest.mark.parametrize("balance", [-1500, -1000, -999, -1, 0, 1, 800])
    def test_to_goal_is_difference(self, balance):
        """to_goal is always balance minus goal."""
        result = format_balance_with_goal(balance, -1000)
        assert result.to_goal == balance + 1000
        assert result.vs_goal == result.to_goal

    def test_to_dict(self):
        """Enums are serialized as values."""
        data = format_balance_with_goal(-800, -1000).to_dict()
        assert data["status"] == "behind"
        assert data["color"] == "warning"

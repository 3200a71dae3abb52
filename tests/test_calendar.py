"""Tests for the month calendar."""

from __future__ import annotations

from datetime import date

from deficit.tracking.calendar import build_month_calendar
from deficit.tracking.models import DailyLog

TODAY = date(2025, 3, 15)


def cells_by_date(cells):
    return {cell.date: cell for cell in cells if cell.date is not None}


class TestBuildMonthCalendar:
    """Tests for build_month_calendar (March 2025 starts on a Saturday)."""

    def test_layout(self):
        """Six blank cells before Saturday the 1st, then 31 days."""
        cells = build_month_calendar([], 2000, -500, today=TODAY)
        assert len(cells) == 6 + 31
        assert all(cell.date is None for cell in cells[:6])
        assert cells[6].date == date(2025, 3, 1)
        assert cells[-1].date == date(2025, 3, 31)

    def test_success_and_flags(self):
        """Days meeting the goal deficit are successes."""
        logs = [
            DailyLog(date=date(2025, 3, 14), caloric_intake=1400, weight_kg=88.0),
            DailyLog(date=date(2025, 3, 13), caloric_intake=2600),
            DailyLog(date=date(2025, 3, 12), caloric_intake=1500),
        ]
        days = cells_by_date(build_month_calendar(logs, 2000, -500, today=TODAY))

        assert days[date(2025, 3, 14)].is_success is True
        assert days[date(2025, 3, 14)].balance == -600
        assert days[date(2025, 3, 14)].weight_kg == 88.0
        assert days[date(2025, 3, 13)].is_success is False
        assert days[date(2025, 3, 13)].has_data is True
        # exactly on goal counts
        assert days[date(2025, 3, 12)].is_success is True

        assert days[date(2025, 3, 11)].has_data is False
        assert days[date(2025, 3, 11)].is_success is False
        assert days[TODAY].is_today is True
        assert days[date(2025, 3, 16)].is_future is True
        assert days[TODAY].is_future is False

    def test_locked_after_trial(self):
        """Unpaid users lose days after the trial up to today."""
        days = cells_by_date(
            build_month_calendar(
                [], 2000, -500, today=TODAY, trial_ends_at=date(2025, 3, 10), is_paid=False
            )
        )
        assert days[date(2025, 3, 10)].is_locked is False
        assert days[date(2025, 3, 11)].is_locked is True
        assert days[TODAY].is_locked is True
        assert days[date(2025, 3, 16)].is_locked is False

    def test_paid_never_locked(self):
        """Paid users see every day."""
        cells = build_month_calendar(
            [], 2000, -500, today=TODAY, trial_ends_at=date(2025, 3, 1), is_paid=True
        )
        assert not any(cell.is_locked for cell in cells)

    def test_month_starting_sunday(self):
        """No padding when the 1st is a Sunday (June 2025)."""
        cells = build_month_calendar([], 2000, -500, today=date(2025, 6, 10))
        assert cells[0].date == date(2025, 6, 1)
        assert len(cells) == 30

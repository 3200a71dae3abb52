"""Tests for the progress chart series and summary."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from deficit.tracking.models import DailyLog
from deficit.tracking.progress import build_progress_series, summarize_progress

TODAY = date(2025, 3, 15)

START = date(2025, 3, 1)
GOAL_DATE = date(2025, 5, 10)


def series(logs=(), goal_weight=80, goal_date=GOAL_DATE, deficit=770):
    # 770 kcal/day = 0.1 kg/day
    return build_progress_series(
        90, goal_weight, START, goal_date, deficit, logs, today=TODAY
    )


class TestBuildProgressSeries:
    """Tests for build_progress_series."""

    def test_span(self):
        """Start point, every day to today, then 30 forecast days."""
        points = series()
        assert points[0].date == START
        assert points[0].actual_weight == 90
        assert len(points) == 1 + 14 + 30
        assert points[-1].date == TODAY + timedelta(days=30)

    def test_planned_trajectory(self):
        """Planned weight drops by the goal deficit's worth each day."""
        points = series()
        assert points[10].planned_weight == pytest.approx(89.0)
        assert points[14].date == TODAY
        assert points[14].planned_weight == pytest.approx(88.6)

    def test_planned_never_below_goal(self):
        """The plan flattens out at the goal weight."""
        points = series(goal_weight=89.5)
        assert min(p.planned_weight for p in points) == pytest.approx(89.5)

    def test_actual_weights_from_logs(self):
        """Logged weights fill in actual values; forecast days have none."""
        logs = [DailyLog(date=date(2025, 3, 5), weight_kg=89.2)]
        points = {p.date: p for p in series(logs)}
        assert points[date(2025, 3, 5)].actual_weight == 89.2
        assert points[date(2025, 3, 6)].actual_weight is None
        assert points[TODAY + timedelta(days=1)].actual_weight is None

    def test_capped_at_goal_date(self):
        """Nothing is plotted past the goal date."""
        points = series(goal_date=TODAY + timedelta(days=5))
        assert points[-1].date == TODAY + timedelta(days=5)


class TestSummarizeProgress:
    """Tests for summarize_progress."""

    def test_summary(self):
        """Loss rate over logged weights projects the goal date."""
        logs = [
            DailyLog(date=date(2025, 3, 5), caloric_intake=2000, weight_kg=89.0),
            DailyLog(date=TODAY, caloric_intake=1500, weight_kg=88.0),
        ]
        summary = summarize_progress(series(logs), logs, 2500, 80, 770, today=TODAY)
        assert summary.total_lost == pytest.approx(2.0)
        assert summary.days_tracked == 3
        assert summary.avg_deficit == 750
        # 8 kg left at 1 kg per weigh-in
        assert summary.projected_goal_date == TODAY + timedelta(days=8)

    def test_no_loss_uses_planned_rate(self):
        """Without observed loss the planned rate is used."""
        summary = summarize_progress(series(), [], 2500, 80, 770, today=TODAY)
        assert summary.total_lost == 0
        assert summary.avg_deficit == 0
        assert summary.projected_goal_date == TODAY + timedelta(days=100)

    def test_goal_reached(self):
        """At or below goal, the projected date is today."""
        logs = [DailyLog(date=TODAY, weight_kg=79.5)]
        summary = summarize_progress(series(logs), logs, 2500, 80, 770, today=TODAY)
        assert summary.projected_goal_date == TODAY

    def test_no_planned_deficit(self):
        """No loss and no planned deficit means no projection."""
        summary = summarize_progress(series(deficit=0), [], 2500, 80, 0, today=TODAY)
        assert summary.projected_goal_date is None

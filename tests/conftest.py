"""Pytest fixtures for deficit tests."""

from __future__ import annotations

from datetime import date, timedelta

import pytest

from deficit.config import reload_settings
from deficit.tracking.models import DailyLog, Profile

# Saturday. Profile below: age 34, BMR 1860, TDEE 2883, goal deficit 1100.
TODAY = date(2025, 3, 15)
TDEE = 2883


def days_ago(n: int) -> date:
    """Calendar day ``n`` days before TODAY."""
    return TODAY - timedelta(days=n)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point ~ at a temp dir so no real ~/.deficit/config.yaml is read or written."""
    monkeypatch.setenv("HOME", str(tmp_path))
    yield reload_settings()
    reload_settings()


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def profile() -> Profile:
    """90 kg male, moderately active, aiming for 80 kg in 70 days."""
    return Profile(
        weight_kg=90,
        height_cm=180,
        birth_date=date(1990, 6, 1),
        gender="male",
        activity_level="moderate",
        goal_weight_kg=80,
        goal_date=TODAY + timedelta(days=70),
    )


@pytest.fixture
def sample_logs() -> list[DailyLog]:
    """Six completed 1000 kcal deficit days with weigh-ins, plus a partial today."""
    weights = [88.0, 88.5, 89.0, 89.5, 90.0, 90.5]  # yesterday first
    logs = [
        DailyLog(
            date=days_ago(n),
            caloric_intake=TDEE - 1000,
            protein_grams=120,
            weight_kg=weights[n - 1],
        )
        for n in range(1, 7)
    ]
    # Today: 1500 - (2883 + 300) = -1683
    logs.append(DailyLog(date=TODAY, caloric_intake=1500, caloric_outtake=300, protein_grams=110))
    return logs

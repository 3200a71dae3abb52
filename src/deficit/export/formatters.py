"""Output formatters for engine results."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from deficit.export.comparison import BalanceColor, BalanceComparison, format_number
from deficit.profiles.goals import DeficitAnalysis, RiskLevel
from deficit.tracking.calendar import CalendarDay
from deficit.tracking.dashboard import DashboardStats
from deficit.units import WeightUnit, format_weight

# Rich styles for each color hint
RICH_STYLES = {
    BalanceColor.SUCCESS: "green",
    BalanceColor.WARNING: "yellow",
    BalanceColor.DANGER: "red",
    BalanceColor.NEUTRAL: "white",
}

RISK_STYLES = {
    RiskLevel.SAFE: "green",
    RiskLevel.AGGRESSIVE: "yellow",
    RiskLevel.DANGEROUS: "red",
}


class TableFormatter:
    """Format engine results as Rich tables for terminal display."""

    def __init__(
        self,
        console: Optional[Console] = None,
        weight_unit: WeightUnit = WeightUnit.KG,
    ):
        """Initialize the formatter.

        Args:
            console: Rich console for output. If None, creates a new one.
            weight_unit: Unit used when displaying weights
        """
        self.console = console or Console()
        self.weight_unit = weight_unit

    def _weight(self, kg: Optional[float]) -> str:
        if kg is None:
            return "-"
        return format_weight(kg, self.weight_unit)

    def format_analysis(self, analysis: DeficitAnalysis) -> None:
        """Print a goal deficit analysis."""
        style = RISK_STYLES[analysis.risk_level]
        lines = [
            f"Daily deficit: [bold]{format_number(analysis.daily_deficit)}[/bold] kcal/day",
            f"Weekly loss: {analysis.weekly_loss:g} kg/week",
            f"Time left: {analysis.days_remaining} days ({analysis.weeks_remaining:g} weeks)",
            f"Risk: [{style}]{analysis.risk_level.value.upper()}[/{style}]"
            f" (safe: {'yes' if analysis.is_safe else 'no'},"
            f" achievable: {'yes' if analysis.is_achievable else 'no'})",
            "",
            analysis.message,
        ]
        self.console.print(Panel("\n".join(lines), title="Goal Plan"))

    def format_comparison(self, comparison: BalanceComparison) -> None:
        """Print a balance vs goal comparison."""
        style = RICH_STYLES[comparison.color]
        table = Table(title="Balance vs Goal")
        table.add_column("Balance", justify="right")
        table.add_column("Status")
        table.add_column("Vs goal")
        table.add_column("To maintenance", justify="right")
        table.add_row(
            f"[{style}]{comparison.text}[/{style}]",
            comparison.status.value,
            comparison.vs_goal_text,
            format_number(comparison.to_maintenance),
        )
        self.console.print(table)

    def format_dashboard(self, stats: DashboardStats) -> None:
        """Print the dashboard summary."""
        today = stats.today_comparison
        style = RICH_STYLES[today.color]

        table = Table(title="Dashboard", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Maintenance (TDEE)", f"{format_number(stats.maintenance_calories)} kcal")
        table.add_row("Goal deficit", f"{format_number(stats.goal_deficit)} kcal/day")
        table.add_row(
            "Today",
            f"[{style}]{today.text}[/{style}] ({today.vs_goal_text})",
        )
        table.add_row("Intake / exercise", (
            f"{format_number(stats.today_intake)} / {format_number(stats.today_outtake)} kcal"
        ))
        table.add_row("Protein", f"{format_number(stats.today_protein)} / {stats.protein_goal} g")
        table.add_row("7-day balance", f"{format_number(stats.seven_day.total)} kcal")
        table.add_row("7-day average", f"{format_number(stats.seven_day.average)} kcal/day")
        table.add_row("Real weight", self._weight(stats.real_weight))
        table.add_row(
            "In 30 days",
            f"{self._weight(stats.prediction.predicted_weight)}"
            f" ({stats.prediction.confidence.value} confidence)",
        )
        table.add_row("Streak", f"{stats.streak} days")
        if stats.milestone is not None:
            marker = "reached" if stats.milestone.reached else "next"
            table.add_row("Milestone", f"{stats.milestone.name} ({marker})")

        self.console.print(table)
        self.console.print(stats.goal.message)

    def format_calendar(self, days: list[CalendarDay]) -> None:
        """Print a month calendar, one row per week (Sunday first)."""
        table = Table(title="Calendar")
        for name in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"):
            table.add_column(name, justify="center")

        cells: list[str] = []
        for day in days:
            if day.date is None:
                cells.append("")
                continue
            label = str(day.date.day)
            if day.is_locked:
                cells.append(f"[dim]{label}*[/dim]")
            elif day.is_future:
                cells.append(f"[dim]{label}[/dim]")
            elif day.has_data:
                style = "green" if day.is_success else "red"
                cells.append(f"[{style}]{label}[/{style}]")
            else:
                cells.append(label)
            if day.is_today:
                cells[-1] = f"[bold underline]{cells[-1]}[/bold underline]"

        for start in range(0, len(cells), 7):
            week = cells[start : start + 7]
            week += [""] * (7 - len(week))
            table.add_row(*week)

        self.console.print(table)

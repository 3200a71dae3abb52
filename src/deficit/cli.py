"""CLI interface using Typer."""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from deficit.agent.response import AgentResponse, create_response, error_response
from deficit.config import get_settings
from deficit.exceptions import DeficitError
from deficit.export.comparison import format_balance_with_goal, format_number
from deficit.export.formatters import TableFormatter
from deficit.log import configure_logging
from deficit.profiles.body_calc import (
    ACTIVITY_DESCRIPTIONS,
    calculate_bmr,
    calculate_maintenance,
    calculate_tdee,
    parse_activity_level,
)
from deficit.profiles.goals import calculate_required_daily_deficit
from deficit.tracking.balance import balance_records, calculate_real_weight, most_recent
from deficit.tracking.calendar import build_month_calendar
from deficit.tracking.dashboard import compute_dashboard_stats
from deficit.tracking.loader import load_logs, load_profile
from deficit.tracking.milestones import get_weight_loss_milestone
from deficit.tracking.models import DailyLog, Profile
from deficit.tracking.prediction import predict_weight_30_days
from deficit.tracking.progress import build_progress_series, summarize_progress
from deficit.tracking.streak import calculate_streak
from deficit.units import (
    HeightUnit,
    WeightUnit,
    convert_height,
    convert_weight,
    format_weight,
)

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Caloric balance engine: TDEE, goal deficits, streaks and projections",
    no_args_is_help=True,
)
console = Console()

config_app = typer.Typer(help="Show and change settings")
app.add_typer(config_app, name="config")


# ============================================================================
# Helpers
# ============================================================================


def emit(response: AgentResponse, json_output: bool) -> None:
    """Print a JSON envelope, or the error text for table output."""
    if json_output:
        print(response.to_json())
    elif not response.success:
        for error in response.errors:
            console.print(f"[red]{error}[/red]")
        for suggestion in response.suggestions:
            console.print(f"  {suggestion}")


def fail(
    command: str,
    error: str,
    json_output: bool,
    suggestions: Optional[list[str]] = None,
) -> NoReturn:
    """Report an error and exit with status 1."""
    emit(error_response(command, error, suggestions), json_output)
    raise typer.Exit(1)


def use_json(json_output: bool) -> bool:
    """``--json`` flag, or the configured default output format."""
    return json_output or get_settings().display.output_format == "json"


def parse_day(value: Optional[str], command: str, json_output: bool) -> Optional[date]:
    """Parse an optional YYYY-MM-DD option."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        fail(command, f"Invalid date '{value}' (expected YYYY-MM-DD)", json_output)


def load_inputs(
    command: str,
    logs_path: Optional[Path],
    profile_path: Optional[Path],
    json_output: bool,
) -> tuple[Profile, list[DailyLog]]:
    """Load the profile and logs, falling back to configured paths."""
    settings = get_settings()
    logs_path = logs_path or settings.data.logs_path
    profile_path = profile_path or settings.data.profile_path

    if logs_path is None or profile_path is None:
        fail(
            command,
            "A logs file and a profile file are required",
            json_output,
            suggestions=[
                "Pass LOGS_FILE and --profile, or set defaults with: "
                "deficit config set data.logs_path <file>",
            ],
        )

    try:
        return load_profile(profile_path), load_logs(logs_path)
    except DeficitError as e:
        fail(command, str(e), json_output)


def weight_unit_option(value: Optional[str]) -> WeightUnit:
    if value is None:
        return get_settings().display.weight_unit
    return WeightUnit(value.lower())


def height_unit_option(value: Optional[str]) -> HeightUnit:
    if value is None:
        return get_settings().display.height_unit
    return HeightUnit(value.lower())


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else get_settings().logging.level
    configure_logging(level)


# ============================================================================
# Calculators
# ============================================================================


@app.command()
def bmr(
    weight: float = typer.Option(..., "--weight", "-w", help="Body weight"),
    height: float = typer.Option(..., "--height", help="Height"),
    age: int = typer.Option(..., "--age", help="Age in years"),
    gender: str = typer.Option(..., "--gender", "-g", help="male / female / other"),
    activity: str = typer.Option(
        "moderate",
        "--activity",
        "-a",
        help="sedentary / light / moderate / active / very_active",
    ),
    weight_unit: Optional[str] = typer.Option(None, "--weight-unit", help="kg or lbs"),
    height_unit: Optional[str] = typer.Option(None, "--height-unit", help="cm or ft"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Calculate BMR and maintenance calories (TDEE)."""
    json_output = use_json(json_output)
    try:
        weight_kg = convert_weight(weight, weight_unit_option(weight_unit), WeightUnit.KG)
        height_cm = convert_height(height, height_unit_option(height_unit), HeightUnit.CM)
        activity_level = parse_activity_level(activity)
        bmr_kcal = calculate_bmr(weight_kg, height_cm, age, gender)
    except ValueError as e:
        fail("bmr", str(e), json_output)
    tdee = calculate_tdee(bmr_kcal, activity_level)

    if json_output:
        emit(create_response(
            "bmr",
            data={
                "weight_kg": weight_kg,
                "height_cm": height_cm,
                "age": age,
                "bmr": bmr_kcal,
                "tdee": tdee,
                "activity_level": activity_level.value,
            },
            human_summary=f"Maintenance: {tdee} kcal/day",
        ), json_output)
        return

    table = Table(title="Maintenance Calories", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("BMR", f"{format_number(bmr_kcal)} kcal/day")
    table.add_row("Activity", ACTIVITY_DESCRIPTIONS[activity_level])
    table.add_row("TDEE", f"[bold]{format_number(tdee)}[/bold] kcal/day")
    console.print(table)


@app.command()
def plan(
    weight: float = typer.Option(..., "--weight", "-w", help="Current weight"),
    goal: float = typer.Option(..., "--goal", help="Goal weight"),
    goal_date: str = typer.Option(..., "--date", "-d", help="Goal date (YYYY-MM-DD)"),
    weight_unit: Optional[str] = typer.Option(None, "--weight-unit", help="kg or lbs"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Calculate the daily deficit needed to reach a goal weight by a date."""
    json_output = use_json(json_output)
    target = parse_day(goal_date, "plan", json_output)
    ref = parse_day(today, "plan", json_output)
    try:
        unit = weight_unit_option(weight_unit)
    except ValueError as e:
        fail("plan", str(e), json_output)

    analysis = calculate_required_daily_deficit(
        convert_weight(weight, unit, WeightUnit.KG),
        convert_weight(goal, unit, WeightUnit.KG),
        target,
        today=ref,
    )

    if json_output:
        emit(create_response(
            "plan",
            data=analysis.to_dict(),
            warnings=[] if analysis.is_safe else [analysis.message],
            human_summary=analysis.message,
        ), json_output)
        return

    TableFormatter(console, unit).format_analysis(analysis)


@app.command()
def convert(
    value: float = typer.Argument(..., help="Value to convert"),
    from_unit: str = typer.Argument(..., help="kg, lbs, cm or ft"),
    to_unit: str = typer.Argument(..., help="kg, lbs, cm or ft"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Convert a weight (kg/lbs) or height (cm/ft)."""
    json_output = use_json(json_output)
    units = {from_unit.lower(), to_unit.lower()}
    try:
        if units <= {"kg", "lbs", "lb"}:
            result = convert_weight(value, from_unit, to_unit)
        elif units <= {"cm", "ft"}:
            result = convert_height(value, from_unit, to_unit)
        else:
            raise ValueError(f"Cannot convert {from_unit} to {to_unit}")
    except ValueError as e:
        fail("convert", str(e), json_output)

    if json_output:
        emit(create_response(
            "convert",
            data={"value": value, "from": from_unit, "to": to_unit, "result": result},
            human_summary=f"{value:g} {from_unit} = {result:g} {to_unit}",
        ), json_output)
    else:
        console.print(f"{value:g} {from_unit} = [bold]{result:g}[/bold] {to_unit}")


@app.command()
def milestone(
    lost: float = typer.Argument(..., help="Total weight lost in kg"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the weight-loss milestone for a total loss."""
    json_output = use_json(json_output)
    result = get_weight_loss_milestone(lost)

    if json_output:
        data = {"lost": lost, "milestone": None}
        if result is not None:
            data["milestone"] = {
                "kg": result.milestone,
                "name": result.name,
                "reached": result.reached,
            }
        emit(create_response("milestone", data=data), json_output)
        return

    if result is None:
        console.print("[yellow]No milestone for that value[/yellow]")
    elif result.reached:
        console.print(f"[green]Reached:[/green] {result.name} ({result.milestone:g} kg)")
    else:
        console.print(f"Next milestone: {result.name} ({result.milestone:g} kg)")


@app.command()
def compare(
    balance: float = typer.Option(..., "--balance", "-b", help="Day's balance in kcal (negative = deficit)"),
    goal: float = typer.Option(..., "--goal", help="Daily deficit goal in kcal (e.g. 1000 or -1000)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compare a day's balance to the daily deficit goal."""
    json_output = use_json(json_output)
    comparison = format_balance_with_goal(balance, -abs(goal))

    if json_output:
        emit(create_response(
            "compare",
            data=comparison.to_dict(),
            human_summary=comparison.vs_goal_text,
        ), json_output)
        return

    TableFormatter(console).format_comparison(comparison)


# ============================================================================
# Commands reading a profile and daily logs
# ============================================================================


@app.command()
def streak(
    logs_file: Optional[Path] = typer.Argument(None, help="Daily logs file (.yaml or .csv)"),
    profile_file: Optional[Path] = typer.Option(None, "--profile", "-p", help="Profile file (.yaml)"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Count consecutive completed deficit days (today never counts)."""
    json_output = use_json(json_output)
    ref = parse_day(today, "streak", json_output) or date.today()
    profile, logs = load_inputs("streak", logs_file, profile_file, json_output)

    _, tdee = calculate_maintenance(
        profile.weight_kg,
        profile.height_cm,
        profile.birth_date,
        profile.gender,
        profile.activity_level,
        today=ref,
    )
    days = calculate_streak(balance_records(logs, tdee), today=ref)

    if json_output:
        emit(create_response(
            "streak",
            data={"streak": days, "tdee": tdee, "today": ref},
            human_summary=f"{days} day streak",
        ), json_output)
    else:
        console.print(f"[bold yellow]{days}[/bold yellow] day streak")


@app.command()
def predict(
    logs_file: Optional[Path] = typer.Argument(None, help="Daily logs file (.yaml or .csv)"),
    profile_file: Optional[Path] = typer.Option(None, "--profile", "-p", help="Profile file (.yaml)"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Project weight 30 days ahead from the last 7 logged days."""
    json_output = use_json(json_output)
    ref = parse_day(today, "predict", json_output) or date.today()
    profile, logs = load_inputs("predict", logs_file, profile_file, json_output)

    _, tdee = calculate_maintenance(
        profile.weight_kg,
        profile.height_cm,
        profile.birth_date,
        profile.gender,
        profile.activity_level,
        today=ref,
    )
    recent = most_recent(balance_records(logs, tdee))
    real_weight = calculate_real_weight(
        [entry for entry in (log.weight_entry() for log in logs) if entry]
    )
    prediction = predict_weight_30_days(
        real_weight or profile.starting_weight_kg,
        [record.balance for record in recent],
    )

    unit = get_settings().display.weight_unit
    direction = "down" if prediction.is_loss else "up"
    summary = (
        f"{format_weight(prediction.predicted_weight, unit)} in 30 days "
        f"({direction} {format_weight(prediction.predicted_change, unit)}, "
        f"{prediction.confidence.value} confidence)"
    )

    if json_output:
        emit(create_response(
            "predict",
            data={**prediction.to_dict(), "real_weight": real_weight, "days_used": len(recent)},
            human_summary=summary,
        ), json_output)
    else:
        console.print(summary)


@app.command()
def dashboard(
    logs_file: Optional[Path] = typer.Argument(None, help="Daily logs file (.yaml or .csv)"),
    profile_file: Optional[Path] = typer.Option(None, "--profile", "-p", help="Profile file (.yaml)"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show today's balance, 7-day totals, streak and projection."""
    json_output = use_json(json_output)
    ref = parse_day(today, "dashboard", json_output)
    profile, logs = load_inputs("dashboard", logs_file, profile_file, json_output)

    stats = compute_dashboard_stats(profile, logs, today=ref)

    if json_output:
        emit(create_response(
            "dashboard",
            data=stats.to_dict(),
            warnings=[] if stats.goal.is_safe else [stats.goal.message],
            human_summary=f"Today {stats.today_comparison.text} kcal, {stats.streak} day streak",
        ), json_output)
        return

    TableFormatter(console, get_settings().display.weight_unit).format_dashboard(stats)


@app.command()
def calendar(
    logs_file: Optional[Path] = typer.Argument(None, help="Daily logs file (.yaml or .csv)"),
    profile_file: Optional[Path] = typer.Option(None, "--profile", "-p", help="Profile file (.yaml)"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    trial_ends: Optional[str] = typer.Option(
        None, "--trial-ends", help="Last trial day (YYYY-MM-DD); later days are locked"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show this month's days that met the deficit goal."""
    json_output = use_json(json_output)
    ref = parse_day(today, "calendar", json_output) or date.today()
    trial_end = parse_day(trial_ends, "calendar", json_output)
    profile, logs = load_inputs("calendar", logs_file, profile_file, json_output)

    _, tdee = calculate_maintenance(
        profile.weight_kg,
        profile.height_cm,
        profile.birth_date,
        profile.gender,
        profile.activity_level,
        today=ref,
    )
    goal = calculate_required_daily_deficit(
        profile.weight_kg, profile.goal_weight_kg, profile.goal_date, today=ref
    )
    days = build_month_calendar(
        logs,
        tdee,
        goal.goal_deficit,
        today=ref,
        trial_ends_at=trial_end,
        is_paid=trial_end is None,
    )

    if json_output:
        cells = [
            {
                "date": day.date,
                "weight_kg": day.weight_kg,
                "balance": day.balance,
                "is_success": day.is_success,
                "is_locked": day.is_locked,
                "is_future": day.is_future,
                "is_today": day.is_today,
                "has_data": day.has_data,
            }
            for day in days
            if day.date is not None
        ]
        successes = sum(1 for day in days if day.is_success)
        emit(create_response(
            "calendar",
            data={"month": ref.strftime("%Y-%m"), "goal_deficit": goal.goal_deficit, "days": cells},
            human_summary=f"{successes} days on goal this month",
        ), json_output)
        return

    TableFormatter(console).format_calendar(days)


@app.command()
def progress(
    logs_file: Optional[Path] = typer.Argument(None, help="Daily logs file (.yaml or .csv)"),
    profile_file: Optional[Path] = typer.Option(None, "--profile", "-p", help="Profile file (.yaml)"),
    today: Optional[str] = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compare logged weights with the planned trajectory to the goal."""
    json_output = use_json(json_output)
    ref = parse_day(today, "progress", json_output) or date.today()
    profile, logs = load_inputs("progress", logs_file, profile_file, json_output)

    _, tdee = calculate_maintenance(
        profile.weight_kg,
        profile.height_cm,
        profile.birth_date,
        profile.gender,
        profile.activity_level,
        today=ref,
    )
    # Plan starts at signup, or at the first log for profiles without one
    start_date = profile.created_at or min((log.date for log in logs), default=ref)
    goal = calculate_required_daily_deficit(
        profile.starting_weight_kg, profile.goal_weight_kg, profile.goal_date, today=start_date
    )
    series = build_progress_series(
        profile.starting_weight_kg,
        profile.goal_weight_kg,
        start_date,
        profile.goal_date,
        goal.daily_deficit,
        logs,
        today=ref,
    )
    summary = summarize_progress(
        series, logs, tdee, profile.goal_weight_kg, goal.daily_deficit, today=ref
    )

    unit = get_settings().display.weight_unit
    projected = summary.projected_goal_date.isoformat() if summary.projected_goal_date else "-"

    if json_output:
        emit(create_response(
            "progress",
            data={
                "total_lost": summary.total_lost,
                "avg_deficit": summary.avg_deficit,
                "days_tracked": summary.days_tracked,
                "projected_goal_date": summary.projected_goal_date,
                "daily_deficit_goal": goal.daily_deficit,
                "series": [
                    {
                        "date": point.date,
                        "actual_weight": point.actual_weight,
                        "planned_weight": point.planned_weight,
                        "goal_weight": point.goal_weight,
                    }
                    for point in series
                ],
            },
            human_summary=f"Lost {format_weight(summary.total_lost, unit)}, goal by {projected}",
        ), json_output)
        return

    table = Table(title="Progress")
    table.add_column("Date")
    table.add_column("Actual", justify="right")
    table.add_column("Planned", justify="right")
    for point in series:
        if point.actual_weight is not None:
            table.add_row(
                point.date.isoformat(),
                format_weight(point.actual_weight, unit),
                format_weight(point.planned_weight, unit),
            )
    console.print(table)
    console.print(f"Total lost: [bold]{format_weight(summary.total_lost, unit)}[/bold]")
    console.print(f"Average deficit: {format_number(summary.avg_deficit)} kcal/day")
    console.print(f"Projected goal date: {projected}")


# ============================================================================
# Settings
# ============================================================================


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show current settings."""
    settings = get_settings()
    if use_json(json_output):
        emit(create_response("config show", data=settings.to_dict()), True)
        return

    table = Table(title="Settings")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for section, values in settings.to_dict().items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", "-" if value is None else str(value))
    console.print(table)


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Dotted key, e.g. display.weight_unit"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change a setting and save it to ~/.deficit/config.yaml."""
    settings = get_settings()
    try:
        settings.set(key, value)
    except KeyError:
        console.print(f"[red]Unknown setting: {key}[/red]")
        console.print("Run: [cyan]deficit config show[/cyan] to list settings")
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    settings.save()
    console.print(f"[green]Set {key} = {value}[/green]")


if __name__ == "__main__":
    app()

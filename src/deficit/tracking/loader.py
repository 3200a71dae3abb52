"""Load profiles and daily logs from local files.

Profiles are YAML mappings. Daily logs are either a YAML file with a ``logs``
list or a CSV file with one row per day::

    date,caloric_intake,caloric_outtake,protein_grams,weight_kg
    2025-03-01,1800,300,120,89.4

Weights and heights may be given in pounds or feet by adding
``weight_unit: lbs`` / ``height_unit: ft`` to the profile; they are converted
to metric here and nowhere else.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml

from deficit.exceptions import DataFileError
from deficit.tracking.models import DailyLog, Profile
from deficit.units import HeightUnit, WeightUnit, convert_height, convert_weight

logger = logging.getLogger(__name__)

PROFILE_REQUIRED = (
    "weight",
    "height",
    "birth_date",
    "gender",
    "activity_level",
    "goal_weight",
    "goal_date",
)

LOG_COLUMNS = ("caloric_intake", "caloric_outtake", "protein_grams")


def _parse_date(
    value: Any, path: Path, field_name: str, line: Optional[int] = None
) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise DataFileError(
            path, f"{field_name} is not a YYYY-MM-DD date: {value!r}", line
        ) from None


def _read_yaml(path: Path) -> Any:
    if not path.exists():
        raise DataFileError(path, "file not found")
    try:
        with open(path) as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise DataFileError(path, f"invalid YAML: {e}") from e


def _metric_field(data: dict, name: str) -> Any:
    """Read ``name_kg``/``name_cm`` or plain ``name`` from a profile mapping."""
    for key in (f"{name}_kg", f"{name}_cm", name):
        if key in data:
            return data[key]
    return None


def profile_from_dict(data: dict, path: Path = Path("<profile>")) -> Profile:
    """Build a Profile from a parsed mapping, converting units if needed."""
    missing = [key for key in PROFILE_REQUIRED if _metric_field(data, key) is None]
    if missing:
        raise DataFileError(path, f"missing profile fields: {', '.join(missing)}")

    starting = _metric_field(data, "starting_weight")
    created = data.get("created_at")

    try:
        weight_unit = data.get("weight_unit", WeightUnit.KG.value)
        height_unit = data.get("height_unit", HeightUnit.CM.value)

        def kg(value: Any) -> float:
            return convert_weight(float(value), weight_unit, WeightUnit.KG)

        return Profile(
            weight_kg=kg(_metric_field(data, "weight")),
            height_cm=convert_height(
                float(_metric_field(data, "height")), height_unit, HeightUnit.CM
            ),
            birth_date=_parse_date(data["birth_date"], path, "birth_date"),
            gender=data["gender"],
            activity_level=data["activity_level"],
            goal_weight_kg=kg(_metric_field(data, "goal_weight")),
            goal_date=_parse_date(data["goal_date"], path, "goal_date"),
            starting_weight_kg=kg(starting) if starting is not None else None,
            created_at=_parse_date(created, path, "created_at") if created else None,
            name=data.get("name"),
        )
    except (TypeError, ValueError) as e:
        raise DataFileError(path, str(e)) from e


def load_profile(path: Path) -> Profile:
    """Load a profile from a YAML file.

    Raises:
        DataFileError: If the file is missing or malformed
    """
    data = _read_yaml(path)
    if not isinstance(data, dict):
        raise DataFileError(path, "profile must be a YAML mapping")
    if "profile" in data and isinstance(data["profile"], dict):
        data = data["profile"]
    return profile_from_dict(data, path)


def _optional_float(value: Any) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    return float(value)


def _log_from_row(row: Any, path: Path, line: Optional[int] = None) -> DailyLog:
    if not isinstance(row, dict):
        raise DataFileError(path, f"log entry must be a mapping, got {row!r}", line)
    if row.get("date") is None or pd.isna(row["date"]):
        raise DataFileError(path, "log entry without a date", line)
    try:
        values = {col: _optional_float(row.get(col)) or 0 for col in LOG_COLUMNS}
        weight = _optional_float(row.get("weight_kg", row.get("weight")))
    except (TypeError, ValueError) as e:
        raise DataFileError(path, str(e), line) from e

    notes = row.get("notes")
    return DailyLog(
        date=_parse_date(row["date"], path, "date", line),
        weight_kg=weight,
        notes=None if notes is None or (isinstance(notes, float) and pd.isna(notes)) else notes,
        **values,
    )


def load_logs(path: Path) -> list[DailyLog]:
    """Load daily logs from a YAML or CSV file.

    Returns:
        Daily logs in file order

    Raises:
        DataFileError: If the file is missing, has an unsupported suffix or
            contains malformed rows
    """
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path)
        if isinstance(data, dict):
            data = data.get("logs", [])
        if not isinstance(data, list):
            raise DataFileError(path, "logs must be a YAML list")
        logs = [_log_from_row(row, path) for row in data]

    elif suffix == ".csv":
        if not path.exists():
            raise DataFileError(path, "file not found")
        try:
            df = pd.read_csv(path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
            raise DataFileError(path, f"invalid CSV: {e}") from e
        df.columns = [str(c).strip().lower() for c in df.columns]
        if "date" not in df.columns:
            raise DataFileError(path, "CSV needs a 'date' column")
        # header is line 1
        logs = [
            _log_from_row(row, path, line=i + 2)
            for i, row in enumerate(df.to_dict(orient="records"))
        ]

    else:
        raise DataFileError(path, f"unsupported file type '{suffix}' (use .yaml or .csv)")

    logger.debug("loaded %d daily logs from %s", len(logs), path)
    return logs

"""
CSV parsing and row classification for the upload view.

Pandas does the actual CSV reading; everything is read as text so the
coercion rules below decide what a "missing" or "bad" number means.
"""
from __future__ import annotations

import math
from pathlib import Path
from typing import Any

import pandas as pd

# If the first row has any of these columns, the whole file is risk data.
RISK_INDICATOR_COLUMNS = ("Respondent Type", "Risk Score", "Metric Name")

RISK = "risk"
POINT = "point"

# Range of an IntegerField on every supported database.
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

# CSV header -> RiskRecord field for the text columns.
RISK_TEXT_COLUMNS = {
    "Respondent Type": "respondent_type",
    "Hotspot": "hotspot",
    "Location": "location",
    "Risk Level": "risk_level",
    "Metric Name": "metric_name",
    "Timeline": "timeline",
}

# CSV header -> RiskRecord field for the float columns (default 0).
RISK_FLOAT_COLUMNS = {
    "Risk Score": "risk_score",
    "Likelihood": "likelihood",
    "Severity": "severity",
}


class EmptyUploadError(ValueError):
    """The uploaded file has no content at all (not even a header)."""


class CSVParseError(ValueError):
    """The uploaded file could not be read as delimited text."""


def read_rows(path: str | Path) -> list[dict[str, str]]:
    """
    Read a CSV file with a header row into one ``{header: text}`` dict per row.

    Empty cells stay empty strings; pandas is told not to turn them into NaN.
    """
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError as exc:
        raise EmptyUploadError("Uploaded file is empty.") from exc
    except (pd.errors.ParserError, UnicodeDecodeError) as exc:
        raise CSVParseError(str(exc)) from exc

    # Excel exports like to put a BOM in front of the first header.
    df.columns = [str(col).strip().lstrip("\ufeff") for col in df.columns]
    return df.to_dict(orient="records")


def classify(rows: list[dict[str, Any]]) -> str:
    """
    Decide what kind of file this is by looking at the first row only.

    Later rows are never inspected, so a file whose first row lacks the
    indicator columns is stored as points even if later rows have them.
    """
    if rows and any(col in rows[0] for col in RISK_INDICATOR_COLUMNS):
        return RISK
    return POINT


def to_float(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def to_int(value: Any, default: int = 1) -> int:
    """
    Integer coercion that accepts "3" as well as "3.0".

    Values outside the IntegerField range count as unparsable.
    """
    number = to_float(value, default=math.nan)
    if math.isnan(number):
        return default
    result = int(number)
    if not INT_MIN <= result <= INT_MAX:
        return default
    return result


def to_text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def risk_fields(row: dict[str, Any]) -> dict[str, Any]:
    """Map one CSV row onto RiskRecord keyword arguments."""
    fields: dict[str, Any] = {
        field: to_text(row.get(column)) for column, field in RISK_TEXT_COLUMNS.items()
    }
    fields.update(
        {field: to_float(row.get(column)) for column, field in RISK_FLOAT_COLUMNS.items()}
    )
    fields["phase"] = to_int(row.get("Phase"))
    return fields


def point_fields(row: dict[str, Any]) -> dict[str, float]:
    """Only the ``x`` and ``y`` columns are used for point rows."""
    return {"x": to_float(row.get("x")), "y": to_float(row.get("y"))}

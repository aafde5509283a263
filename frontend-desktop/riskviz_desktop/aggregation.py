"""
Turn raw risk rows into one averaged score per metric.

Rows can come straight from a CSV (``"Metric Name"``, ``"Hotspot"``...) or
from the backend API (``metric_name``, ``hotspot``...), so each field is
looked up through an ordered list of accepted column names.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

# canonical field -> accepted column names, first present one wins
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "metric": ("Metric", "Metric Name", "Risk Type", "Risk Factor", "Category", "metric_name"),
    "hotspot": ("Hotspot", "HS", "Area", "Location", "hotspot"),
    "score": ("Risk Score", "RP Score", "Score", "Total Score", "Rating", "risk_score"),
}

HIGH_RISK_THRESHOLD = 6
MODERATE_RISK_THRESHOLD = 3

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass
class ChartPoint:
    metric_index: int
    metric: str
    score: float

    @property
    def risk_level(self) -> str:
        return risk_level(self.score)


def risk_level(score: float) -> str:
    if score >= HIGH_RISK_THRESHOLD:
        return "High Risk"
    if score >= MODERATE_RISK_THRESHOLD:
        return "Moderate Risk"
    return "Low Risk"


def round_score(value: float) -> float:
    """Two decimals, ties rounded away from zero (4.625 -> 4.63)."""
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def lookup(row: Mapping[str, Any], field: str) -> Any:
    """Value of the first alias of ``field`` that is present and non-empty."""
    for column in COLUMN_ALIASES[field]:
        value = row.get(column)
        if value is not None and value != "":
            return value
    return None


def parse_score(value: Any) -> float:
    """
    Lenient float parsing: "4.5" -> 4.5, "7 pts" -> 7.0, "n/a" -> 0.0.

    Numbers from the API are used as-is; non-finite values become 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(0))
    return number if math.isfinite(number) else 0.0


def extract_metric_scores(rows: Iterable[Mapping[str, Any]], hotspot: str) -> list[tuple[str, float]]:
    """(metric, score) pairs for rows of ``hotspot`` with a positive score."""
    pairs = []
    for row in rows:
        metric = lookup(row, "metric")
        row_hotspot = lookup(row, "hotspot")
        score = parse_score(lookup(row, "score"))
        if metric and row_hotspot is not None and str(row_hotspot) == hotspot and score > 0:
            pairs.append((str(metric), score))
    return pairs


def aggregate(rows: Iterable[Mapping[str, Any]], hotspot: str) -> list[ChartPoint]:
    """
    Average score per metric for one hotspot.

    Metrics keep the order in which they first appear; ``metric_index`` is
    1-based and the mean is rounded to two decimals.
    """
    groups: dict[str, list[float]] = {}
    for metric, score in extract_metric_scores(rows, hotspot):
        groups.setdefault(metric, []).append(score)

    points = [
        ChartPoint(metric_index=index, metric=metric, score=round_score(sum(scores) / len(scores)))
        for index, (metric, scores) in enumerate(groups.items(), start=1)
    ]
    logger.debug("Aggregated %d metrics for %s", len(points), hotspot)
    return points

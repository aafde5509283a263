"""The two kinds of rows an upload can produce."""
from __future__ import annotations

from django.db import models


class RiskRecord(models.Model):
    """
    One row of a risk assessment CSV.

    Every upload appends new rows, so uploading the same file twice stores
    everything twice. Hotspot and metric are plain strings; the clients
    group on them.
    """

    respondent_type = models.TextField(null=True, blank=True)
    hotspot = models.TextField(null=True, blank=True)
    location = models.TextField(null=True, blank=True)
    phase = models.IntegerField(default=1)
    risk_score = models.FloatField(default=0)
    likelihood = models.FloatField(default=0)
    severity = models.FloatField(default=0)
    risk_level = models.TextField(null=True, blank=True)
    metric_name = models.TextField(null=True, blank=True)
    timeline = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "risk_records"

    def __str__(self) -> str:  # type: ignore[override]
        return f"{self.hotspot} / {self.metric_name}: {self.risk_score}"


class PointRecord(models.Model):
    """A generic (x, y) sample from any CSV that is not risk-shaped."""

    x = models.FloatField(default=0)
    y = models.FloatField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "point_records"

    def __str__(self) -> str:  # type: ignore[override]
        return f"({self.x}, {self.y})"

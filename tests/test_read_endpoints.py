from datetime import timedelta

import pytest
from django.utils import timezone

from riskdata.models import PointRecord, RiskRecord

pytestmark = pytest.mark.django_db


def test_health_is_constant(api_client):
    resp = api_client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["message"]


def test_risk_data_is_newest_first(api_client):
    now = timezone.now()
    for metric, age in [("old", 3), ("newest", 0), ("middle", 1)]:
        record = RiskRecord.objects.create(hotspot="HS1", metric_name=metric, risk_score=5)
        RiskRecord.objects.filter(pk=record.pk).update(created_at=now - timedelta(hours=age))

    resp = api_client.get("/risk-data")

    assert resp.status_code == 200
    assert [row["metric_name"] for row in resp.json()] == ["newest", "middle", "old"]


def test_risk_data_fields(api_client):
    RiskRecord.objects.create(
        respondent_type="Officer",
        hotspot="HS1",
        location="Port",
        phase=2,
        risk_score=4.5,
        risk_level="Moderate",
        metric_name="Trafficking",
        timeline="2024",
    )

    row = api_client.get("/risk-data").json()[0]

    assert row["hotspot"] == "HS1"
    assert row["phase"] == 2
    assert row["risk_score"] == 4.5
    assert row["likelihood"] == 0
    assert row["severity"] == 0
    assert "created_at" in row and "id" in row


def test_points_are_newest_first(api_client):
    now = timezone.now()
    for x, age in [(1.0, 2), (2.0, 0), (3.0, 1)]:
        point = PointRecord.objects.create(x=x, y=x * 2)
        PointRecord.objects.filter(pk=point.pk).update(created_at=now - timedelta(minutes=age))

    resp = api_client.get("/points")

    assert resp.status_code == 200
    assert [row["x"] for row in resp.json()] == [2.0, 3.0, 1.0]
    assert set(resp.json()[0]) == {"id", "x", "y", "created_at"}


def test_same_timestamp_falls_back_to_insert_order(api_client):
    stamp = timezone.now()
    first = PointRecord.objects.create(x=1)
    second = PointRecord.objects.create(x=2)
    PointRecord.objects.filter(pk__in=[first.pk, second.pk]).update(created_at=stamp)

    xs = [row["x"] for row in api_client.get("/points").json()]

    assert xs == [2.0, 1.0]


def test_empty_tables_give_empty_lists(api_client):
    assert api_client.get("/risk-data").json() == []
    assert api_client.get("/points").json() == []

"""Serializers used by the API views."""
from rest_framework import serializers

from .models import PointRecord, RiskRecord


class CSVUploadSerializer(serializers.Serializer):
    """Only checks that a file actually arrived under the ``file`` field."""

    file = serializers.FileField(allow_empty_file=True)


class RiskRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = RiskRecord
        fields = [
            "id",
            "respondent_type",
            "hotspot",
            "location",
            "phase",
            "risk_score",
            "likelihood",
            "severity",
            "risk_level",
            "metric_name",
            "timeline",
            "created_at",
        ]


class PointRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = PointRecord
        fields = ["id", "x", "y", "created_at"]
